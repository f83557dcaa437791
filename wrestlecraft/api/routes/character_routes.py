"""Character API routes -- list, get, create, update, delete."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from wrestlecraft.domain.errors import (
    CatalogUnavailable,
    InvalidSelection,
    NotFound,
    PersistenceFailure,
)

router = APIRouter(prefix="/api", tags=["characters"])
log = logging.getLogger("wrestlecraft.api")


class CreateCharacterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    selection: dict
    notes: str = ""


class UpdateCharacterRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=80)
    selection: Optional[dict] = None
    notes: Optional[str] = None


_service = None


def init_character_routes(build_service):
    global _service
    _service = build_service


def _error_response(exc: Exception, failure: str = "Failed to save character") -> JSONResponse:
    """Map engine errors to HTTP. Persistence details never leave the server."""
    if isinstance(exc, InvalidSelection):
        return JSONResponse(status_code=400, content=exc.to_dict())
    if isinstance(exc, NotFound):
        return JSONResponse(status_code=404, content={"error": str(exc)})
    if isinstance(exc, CatalogUnavailable):
        return JSONResponse(status_code=500, content={"error": "Presets unavailable: " + exc.reason})
    if isinstance(exc, ValueError):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    log.error("Character request failed: %s", exc)
    return JSONResponse(status_code=500, content={"error": failure})


_HANDLED = (InvalidSelection, NotFound, CatalogUnavailable, PersistenceFailure, ValueError)
_READ_FAILURE = "Internal storage error"


@router.get("/characters")
async def api_list_characters():
    try:
        characters = await _service.list_characters()
    except PersistenceFailure as e:
        return _error_response(e, _READ_FAILURE)
    return [c.to_dict() for c in characters]


@router.get("/characters/{character_id}")
async def api_get_character(character_id: str):
    try:
        character = await _service.get_character(character_id)
    except _HANDLED as e:
        return _error_response(e, _READ_FAILURE)
    return character.to_dict()


@router.post("/characters", status_code=201)
async def api_create_character(req: CreateCharacterRequest):
    """Validate the selection, derive stats, save. 400 lists every bad field."""
    try:
        character = await _service.create_character(req.name, req.selection, req.notes)
    except _HANDLED as e:
        return _error_response(e)
    return character.to_dict()


@router.patch("/characters/{character_id}")
async def api_update_character(character_id: str, req: UpdateCharacterRequest):
    if req.name is None and req.selection is None and req.notes is None:
        raise HTTPException(status_code=400, detail="Nothing to update. Expect name, selection or notes.")
    try:
        character = await _service.update_character(
            character_id, name=req.name, selection=req.selection, notes=req.notes,
        )
    except _HANDLED as e:
        return _error_response(e)
    return character.to_dict()


@router.delete("/characters/{character_id}")
async def api_delete_character(character_id: str):
    try:
        character = await _service.delete_character(character_id)
    except _HANDLED as e:
        return _error_response(e)
    return character.to_dict()
