"""Character persistence (single JSON array file, whole-file rewrite)."""
import asyncio
import logging
import random
import secrets
import time
from pathlib import Path
from typing import Dict, List, Tuple

from wrestlecraft.domain.character import Character
from wrestlecraft.domain.errors import NotFound, PersistenceFailure
from wrestlecraft.domain.selection import Selection
from wrestlecraft.infrastructure.json_io import read_json_safe, write_json_atomic

log = logging.getLogger("wrestlecraft.store")

ID_LENGTH = 10
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
        if n == 0:
            return out


def new_character_id(length: int = ID_LENGTH) -> str:
    """Random lowercase id; timestamp + random composite if no secure source."""
    try:
        return secrets.token_hex((length + 1) // 2)[:length]
    except NotImplementedError:
        suffix = "".join(random.choice(_BASE36) for _ in range(6))
        return (_base36(int(time.time() * 1000)) + suffix)[:length]


class CharacterRepository:
    """
    JSON-backed character storage.

    Every mutation is read file -> change in memory -> write file, and holds
    `self._lock` for the whole cycle so concurrent mutations cannot lose
    each other's writes. Writes go through a temp file and an atomic
    replace, so readers never see a partial file and do not lock.
    """

    def __init__(self, data_path: str | Path):
        self._data_path = str(data_path)
        self._lock = asyncio.Lock()
        self._initialized = False

    @property
    def data_path(self) -> str:
        return self._data_path

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list(self) -> List[Character]:
        records = await self._read()
        characters = []
        for record in records:
            character = self._to_character(record)
            if character is not None:
                characters.append(character)
        return characters

    async def get(self, character_id: str) -> Character:
        for record in await self._read():
            if self._record_id(record) == character_id:
                character = self._to_character(record)
                if character is not None:
                    return character
        raise NotFound(character_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, character: Character) -> Character:
        async with self._lock:
            records = await self._read_for_write()
            taken = {self._record_id(r) for r in records}
            while character.id in taken:
                character = character.with_id(new_character_id())
            records.append(character.to_dict())
            await self._write(records)
        log.info("Character %s created", character.id)
        return character

    async def update(
        self,
        character_id: str,
        name: str | None = None,
        selection: Selection | None = None,
        derived_stats: Dict[str, float] | None = None,
        notes: str | None = None,
    ) -> Character:
        async with self._lock:
            records = await self._read_for_write()
            index, character = self._locate(records, character_id)
            character.apply_update(
                name=name, selection=selection, derived_stats=derived_stats, notes=notes,
            )
            records[index] = character.to_dict()
            await self._write(records)
        log.info("Character %s updated", character_id)
        return character

    async def delete(self, character_id: str) -> Character:
        async with self._lock:
            records = await self._read_for_write()
            index, removed = self._locate(records, character_id)
            del records[index]
            await self._write(records)
        log.info("Character %s deleted", character_id)
        return removed

    async def initialize(self) -> None:
        """Create (or reset) the file to `[]` if it is absent or not an array."""
        async with self._lock:
            await self._initialize_locked()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _initialize_locked(self) -> List[dict]:
        data = await self._load_raw()
        if not isinstance(data, list):
            await self._write([])
            log.info("Initialized characters file at %s", self._data_path)
            data = []
        self._initialized = True
        return data

    async def _read(self) -> List[dict]:
        if not self._initialized:
            async with self._lock:
                if not self._initialized:
                    return await self._initialize_locked()
        data = await self._load_raw()
        return data if isinstance(data, list) else []

    async def _read_for_write(self) -> List[dict]:
        # Caller holds the lock.
        if not self._initialized:
            return await self._initialize_locked()
        data = await self._load_raw()
        if not isinstance(data, list):
            log.warning("Characters file %s is not an array; treating as empty", self._data_path)
            return []
        return data

    async def _load_raw(self):
        try:
            return await asyncio.to_thread(read_json_safe, self._data_path, None)
        except OSError as exc:
            log.error("Failed to read characters file %s: %s", self._data_path, exc)
            raise PersistenceFailure("Failed to read characters") from exc

    async def _write(self, records: List[dict]) -> None:
        try:
            await asyncio.to_thread(write_json_atomic, self._data_path, records)
        except OSError as exc:
            log.exception("Failed to write characters file %s", self._data_path)
            raise PersistenceFailure("Failed to save character") from exc

    @staticmethod
    def _record_id(record) -> str | None:
        if isinstance(record, dict) and record.get("id") is not None:
            return str(record["id"])
        return None

    def _locate(self, records: List[dict], character_id: str) -> Tuple[int, Character]:
        """Index and entity of the record, with the same visibility as `get`."""
        for i, record in enumerate(records):
            if self._record_id(record) == character_id:
                character = self._to_character(record)
                if character is not None:
                    return i, character
        raise NotFound(character_id)

    @staticmethod
    def _to_character(record) -> Character | None:
        try:
            return Character.from_dict(record)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Skipping malformed character record %r: %s", record, exc)
            return None
