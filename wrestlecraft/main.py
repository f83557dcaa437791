"""Entry point. Wires the catalog and character stores into the routes.

A broken or missing presets file does not stop the server: the error is
logged at startup and the load is retried on the next catalog request.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from wrestlecraft import config
from wrestlecraft.api.routes.catalog_routes import router as catalog_router, init_catalog_routes
from wrestlecraft.api.routes.character_routes import router as character_router, init_character_routes
from wrestlecraft.application.build_service import BuildService
from wrestlecraft.domain.errors import CatalogUnavailable, PersistenceFailure
from wrestlecraft.infrastructure.repositories.catalog_repository import CatalogRepository
from wrestlecraft.infrastructure.repositories.character_repository import CharacterRepository

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger("wrestlecraft.startup")

# ---------------------------------------------------------------------------
# Persistence wiring
# ---------------------------------------------------------------------------

catalog_repo = CatalogRepository(config.CATALOG_PATH)
character_repo = CharacterRepository(config.CHARACTERS_PATH)
build_service = BuildService(catalog_repo, character_repo)

init_catalog_routes(build_service, catalog_repo)
init_character_routes(build_service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await catalog_repo.load()
    except CatalogUnavailable as exc:
        log.error("Presets unavailable at startup (will retry on demand): %s", exc.reason)
    try:
        await character_repo.initialize()
    except PersistenceFailure:
        log.error("Failed to initialize characters file at %s", character_repo.data_path)
    yield


app = FastAPI(
    title="Wrestlecraft - Wrestling Character Creator",
    description="Build wrestlers from a preset catalog and store them as JSON.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(character_router)


@app.get("/health")
def health():
    catalog = catalog_repo.cached
    error = catalog_repo.last_error
    return {
        "status": "online",
        "system": "Wrestlecraft v1.0.0",
        "presets_loaded": catalog is not None,
        "presets_error": error.reason if error else None,
    }


# Frontend, mounted last so /api and /health win.
if config.STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(config.STATIC_DIR), html=True), name="static")


if __name__ == "__main__":
    import uvicorn
    log.info("Wrestling Character Creator API listening on http://localhost:%s", config.PORT)
    uvicorn.run("wrestlecraft.main:app", host=config.HOST, port=config.PORT)
