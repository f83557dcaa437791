"""
Integration tests for character routes (/api/characters*).

Uses the TestClient from conftest.py, wired to JSON files in tmp_path.
"""
from tests.conftest import make_selection_payload, write_json


def create(client, name="Rey", **selection_overrides):
    return client.post("/api/characters", json={
        "name": name,
        "selection": make_selection_payload(**selection_overrides),
    })


class TestCreate:
    def test_create_returns_201_with_stats(self, client):
        resp = create(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["derivedStats"]["strength"] == 7
        assert data["notes"] == ""
        assert data["id"]

    def test_create_missing_name_422(self, client):
        resp = client.post("/api/characters", json={"selection": make_selection_payload()})
        assert resp.status_code == 422

    def test_create_empty_name_422(self, client):
        resp = client.post("/api/characters", json={"name": "", "selection": make_selection_payload()})
        assert resp.status_code == 422

    def test_create_missing_selection_422(self, client):
        resp = client.post("/api/characters", json={"name": "Rey"})
        assert resp.status_code == 422

    def test_create_invalid_selection_400_lists_violations(self, client):
        resp = create(client, attireId="ghost", accessoryIds=["belt", "nope"])
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Invalid selection"
        assert [v["field"] for v in body["violations"]] == ["attireId", "accessoryIds"]
        assert body["violations"][1]["index"] == 1

    def test_create_whitespace_name_400(self, client):
        resp = client.post("/api/characters", json={"name": "   ", "selection": make_selection_payload()})
        assert resp.status_code == 400


class TestReadRoutes:
    def test_list_empty(self, client):
        resp = client.get("/api/characters")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_list_after_create(self, client):
        created = create(client).json()
        assert client.get("/api/characters").json() == [created]

    def test_get_by_id(self, client):
        created = create(client).json()
        resp = client.get(f"/api/characters/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_get_unknown_404(self, client):
        assert client.get("/api/characters/nope").status_code == 404


class TestUpdate:
    def test_patch_notes(self, client):
        created = create(client).json()
        resp = client.patch(f"/api/characters/{created['id']}", json={"notes": "champion"})
        assert resp.status_code == 200
        assert resp.json()["notes"] == "champion"
        assert resp.json()["derivedStats"] == created["derivedStats"]

    def test_patch_selection_rederives(self, client):
        created = create(client).json()
        resp = client.patch(f"/api/characters/{created['id']}", json={
            "selection": make_selection_payload(attireId="robe"),
        })
        assert resp.status_code == 200
        assert resp.json()["derivedStats"]["strength"] == 5

    def test_patch_invalid_selection_400(self, client):
        created = create(client).json()
        resp = client.patch(f"/api/characters/{created['id']}", json={
            "selection": make_selection_payload(bodyTypeId="blob"),
        })
        assert resp.status_code == 400
        assert resp.json()["violations"][0]["field"] == "bodyTypeId"

    def test_patch_unknown_404(self, client):
        assert client.patch("/api/characters/nope", json={"name": "X"}).status_code == 404

    def test_patch_empty_body_400(self, client):
        created = create(client).json()
        assert client.patch(f"/api/characters/{created['id']}", json={}).status_code == 400


class TestDelete:
    def test_delete_returns_removed(self, client):
        created = create(client).json()
        resp = client.delete(f"/api/characters/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == created["id"]
        assert client.get("/api/characters").json() == []

    def test_malformed_record_404_on_patch_and_delete(self, client, characters_path):
        characters_path.parent.mkdir(parents=True)
        write_json(characters_path, [{"id": "x", "selection": {}}])
        assert client.patch("/api/characters/x", json={"name": "Fixed"}).status_code == 404
        assert client.delete("/api/characters/x").status_code == 404

    def test_delete_unknown_404_list_unchanged(self, client):
        create(client)
        before = client.get("/api/characters").json()
        assert client.delete("/api/characters/nope").status_code == 404
        assert client.get("/api/characters").json() == before


class TestPersistenceErrors:
    def test_write_failure_is_opaque_500(self, client, monkeypatch):
        import wrestlecraft.infrastructure.repositories.character_repository as repo_mod
        client.get("/api/characters")

        def broken_write(path, data):
            raise OSError("/secret/path is full")
        monkeypatch.setattr(repo_mod, "write_json_atomic", broken_write)
        resp = create(client)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to save character"}

    def test_read_failure_is_opaque_500(self, client, monkeypatch):
        import wrestlecraft.infrastructure.repositories.character_repository as repo_mod

        def broken_read(path, default=None):
            raise PermissionError("/secret/path denied")
        monkeypatch.setattr(repo_mod, "read_json_safe", broken_read)
        for resp in (client.get("/api/characters"), client.get("/api/characters/abc")):
            assert resp.status_code == 500
            assert resp.json() == {"error": "Internal storage error"}
