"""Use cases: validate a part selection, derive its stats, persist the wrestler."""
import asyncio
import logging
from typing import List

from wrestlecraft.domain.catalog import Catalog
from wrestlecraft.domain.character import Character
from wrestlecraft.domain.errors import InvalidSelection
from wrestlecraft.domain.invariant import validate_selection
from wrestlecraft.domain.selection import Selection
from wrestlecraft.domain.stats import derive_stats
from wrestlecraft.infrastructure import audit
from wrestlecraft.infrastructure.repositories.catalog_repository import CatalogRepository
from wrestlecraft.infrastructure.repositories.character_repository import (
    CharacterRepository,
    new_character_id,
)

log = logging.getLogger("wrestlecraft.service")


class BuildService:
    """
    Orchestrates catalog -> validation -> derivation -> storage.

    Either the full record, with derived stats, is persisted or nothing is:
    all checks run before the store is touched.
    """

    def __init__(self, catalog_repo: CatalogRepository, character_repo: CharacterRepository):
        self._catalogs = catalog_repo
        self._characters = character_repo

    # -- catalog -------------------------------------------------------

    async def get_catalog(self) -> Catalog:
        return await self._catalogs.load()

    async def reload_catalog(self) -> Catalog:
        return await self._catalogs.reload()

    # -- reads ---------------------------------------------------------

    async def list_characters(self) -> List[Character]:
        return await self._characters.list()

    async def get_character(self, character_id: str) -> Character:
        return await self._characters.get(character_id)

    # -- mutations -----------------------------------------------------

    async def create_character(self, name: str, selection, notes: str | None = "") -> Character:
        checked, stats = await self._build(selection)
        character = Character(
            character_id=new_character_id(),
            name=name,
            selection=checked,
            derived_stats=stats,
            notes=notes,
        )
        created = await self._characters.create(character)
        await self._audit("character_created", created.id, {"name": created.name})
        return created

    async def update_character(
        self,
        character_id: str,
        name: str | None = None,
        selection=None,
        notes: str | None = None,
    ) -> Character:
        checked, stats = None, None
        if selection is not None:
            checked, stats = await self._build(selection)
        updated = await self._characters.update(
            character_id,
            name=name,
            selection=checked,
            derived_stats=stats,
            notes=notes,
        )
        changed = [k for k, v in (("name", name), ("selection", selection), ("notes", notes))
                   if v is not None]
        await self._audit("character_updated", character_id, {"fields": changed})
        return updated

    async def delete_character(self, character_id: str) -> Character:
        removed = await self._characters.delete(character_id)
        await self._audit("character_deleted", character_id, {"name": removed.name})
        return removed

    # -- internals -----------------------------------------------------

    async def _build(self, selection):
        """Validate against the current catalog and derive stats.

        Raises CatalogUnavailable or InvalidSelection; never touches storage.
        """
        catalog = await self._catalogs.load()
        violations = validate_selection(catalog, selection)
        if violations:
            log.info("Rejected selection: %s", [v.message for v in violations])
            raise InvalidSelection(violations)
        checked = Selection.from_payload(selection)
        return checked, derive_stats(catalog, checked)

    @staticmethod
    async def _audit(action: str, character_id: str, payload: dict) -> None:
        try:
            await asyncio.to_thread(audit.log_event, action, character_id, payload)
        except OSError as exc:
            # The mutation is already committed.
            log.warning("Audit write failed for %s %s: %s", action, character_id, exc)
