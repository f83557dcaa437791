"""
Shared pytest fixtures for the Wrestlecraft test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Repository / service tests: real JSON files under pytest's tmp_path,
  async code driven with asyncio.run.
- API tests: FastAPI TestClient over routes wired to tmp_path files.
"""
import copy
import json
import os

import pytest

# Keep the audit trail out of the working tree during tests
os.environ["AUDIT_LOG"] = "0"

from wrestlecraft.domain.catalog import Catalog
from wrestlecraft.infrastructure.repositories.catalog_repository import CatalogRepository
from wrestlecraft.infrastructure.repositories.character_repository import CharacterRepository
from wrestlecraft.application.build_service import BuildService


# ---------------------------------------------------------------------------
# Domain helpers (reusable across many test modules)
# ---------------------------------------------------------------------------

CATALOG_DATA = {
    "version": 1,
    "archetypes": [
        {"id": "luchador", "name": "Luchador",
         "baseStats": {"strength": 5, "charisma": 3, "technique": 4, "stamina": 6, "vitality": 2}},
        {"id": "brute", "name": "Brute", "baseStats": {"strength": 8}},
    ],
    "attire": [
        {"id": "cape", "name": "Cape", "damage": 3, "statBonuses": {"strength": 2}},
        {"id": "robe", "name": "Robe"},
    ],
    "masks": [
        {"id": "m1", "name": "Classic Mask", "armor": 2, "statBonuses": {"charisma": 1}},
        {"id": "m2", "name": "Plain Mask"},
    ],
    "accessories": [
        {"id": "belt", "name": "Belt", "statBonuses": {"charisma": 2}},
        {"id": "tape", "name": "Tape", "statBonuses": {"technique": 1}},
        {"id": 7, "name": "Lucky Seven", "statBonuses": {"stamina": 1}},
    ],
    "heights": [
        {"id": "h1", "name": "Average"},
        {"id": "h2", "name": "Tall", "statBonuses": {"strength": 1}},
    ],
    "bodyTypes": [
        {"id": "b1", "name": "Lean"},
        {"id": "b2", "name": "Heavy", "statBonuses": {"stamina": 2}},
    ],
}

SKIN_COLORS = [
    {"id": "light", "name": "Light"},
    {"id": "dark", "name": "Dark"},
]


def make_catalog_data(**overrides) -> dict:
    data = copy.deepcopy(CATALOG_DATA)
    data.update(overrides)
    return data


def make_catalog(**overrides) -> Catalog:
    return Catalog.from_dict(make_catalog_data(**overrides))


def make_selection_payload(**overrides) -> dict:
    payload = {
        "archetypeId": "luchador",
        "attireId": "cape",
        "maskId": "m1",
        "accessoryIds": [],
        "heightId": "h1",
        "bodyTypeId": "b1",
    }
    payload.update(overrides)
    return payload


def write_json(path, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def selection_payload():
    return make_selection_payload()


@pytest.fixture
def presets_path(tmp_path):
    path = tmp_path / "presets.json"
    write_json(path, make_catalog_data())
    return path


@pytest.fixture
def characters_path(tmp_path):
    return tmp_path / "data" / "characters.json"


@pytest.fixture
def catalog_repo(presets_path):
    return CatalogRepository(presets_path)


@pytest.fixture
def character_repo(characters_path):
    return CharacterRepository(characters_path)


@pytest.fixture
def service(catalog_repo, character_repo):
    return BuildService(catalog_repo, character_repo)


# ---------------------------------------------------------------------------
# FastAPI TestClient over tmp_path files
# ---------------------------------------------------------------------------

@pytest.fixture
def test_app(service, catalog_repo):
    """FastAPI app wired with repositories in the tmp directory."""
    from fastapi import FastAPI
    from wrestlecraft.api.routes.catalog_routes import router as catalog_router, init_catalog_routes
    from wrestlecraft.api.routes.character_routes import router as character_router, init_character_routes

    init_catalog_routes(service, catalog_repo)
    init_character_routes(service)

    app = FastAPI()
    app.include_router(catalog_router)
    app.include_router(character_router)
    return app


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)
