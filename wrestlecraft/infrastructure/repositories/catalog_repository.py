"""Loads the preset catalog from JSON into domain entities."""
import asyncio
import logging
from pathlib import Path

from wrestlecraft.domain.catalog import Catalog
from wrestlecraft.domain.catalog_aliases import resolve_aliases
from wrestlecraft.domain.errors import CatalogUnavailable
from wrestlecraft.infrastructure.json_io import read_json_safe

log = logging.getLogger("wrestlecraft.catalog")


class CatalogRepository:
    """
    JSON-backed, read-only catalog with an in-process cache.

    The cache holds the last successful load and is replaced wholesale on
    a forced reload. A failed load leaves the cache empty, so the next
    `load()` retries against the file as it is now.
    """

    def __init__(self, data_path: str | Path):
        self._data_path = str(data_path)
        self._catalog: Catalog | None = None
        self._last_error: CatalogUnavailable | None = None

    @property
    def data_path(self) -> str:
        return self._data_path

    @property
    def cached(self) -> Catalog | None:
        return self._catalog

    @property
    def last_error(self) -> CatalogUnavailable | None:
        return self._last_error

    async def load(self, force: bool = False) -> Catalog:
        if self._catalog is not None and not force:
            return self._catalog
        try:
            catalog = await asyncio.to_thread(self._read)
        except CatalogUnavailable as exc:
            self._catalog = None
            self._last_error = exc
            log.error("Presets load error: %s", exc.reason)
            raise
        self._catalog = catalog
        self._last_error = None
        log.info("Presets loaded OK from %s: %s", self._data_path, catalog.counts())
        return catalog

    async def reload(self) -> Catalog:
        return await self.load(force=True)

    async def read_raw(self):
        """Raw file content, before alias resolution. None if unreadable."""
        try:
            return await asyncio.to_thread(read_json_safe, self._data_path, None)
        except OSError:
            return None

    def _read(self) -> Catalog:
        try:
            raw = read_json_safe(self._data_path, None)
        except OSError as exc:
            raise CatalogUnavailable(f"Cannot read presets file at {self._data_path}: {exc}") from exc
        if raw is None:
            raise CatalogUnavailable(f"Presets file not found or invalid JSON at {self._data_path}")
        if not isinstance(raw, dict):
            raise CatalogUnavailable(f"Presets file at {self._data_path} must contain a JSON object")
        resolved, _ = resolve_aliases(raw)
        return Catalog.from_dict(resolved)
