"""Catalog API routes -- presets, forced reload, raw debug view."""
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from wrestlecraft.domain.errors import CatalogUnavailable

router = APIRouter(prefix="/api", tags=["presets"])

_service = None
_catalog_repo = None


def init_catalog_routes(build_service, catalog_repo):
    global _service, _catalog_repo
    _service = build_service
    _catalog_repo = catalog_repo


def _unavailable(exc: CatalogUnavailable) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Presets unavailable: " + exc.reason, "missing": exc.missing},
    )


@router.get("/presets")
async def api_get_presets():
    """Return the catalog. Retries the load if the last one failed."""
    try:
        catalog = await _service.get_catalog()
    except CatalogUnavailable as e:
        return _unavailable(e)
    return catalog.to_dict()


@router.post("/presets/reload")
async def api_reload_presets():
    """Re-read the presets file so out-of-band edits take effect."""
    try:
        catalog = await _service.reload_catalog()
    except CatalogUnavailable as e:
        return _unavailable(e)
    return {"ok": True, "counts": catalog.counts()}


@router.get("/_debug/presets")
async def api_debug_presets():
    """Raw presets file content, before alias resolution."""
    return {"ok": True, "presets": await _catalog_repo.read_raw()}
