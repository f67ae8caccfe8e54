"""
HTTP tests for the item endpoints.
"""
from fastapi.testclient import TestClient

from main import create_app
from tests.stubs import FailingStorage


def _create(client, body):
    response = client.post("/create", json=body)
    assert response.status_code == 201
    return response.json()


def _read_by_id(client):
    response = client.get("/read")
    assert response.status_code == 200
    return {item["id"]: item for item in response.json()}


class TestCreate:

    def test_returns_item_with_generated_id(self, client, ana):
        item = _create(client, ana)
        assert item["id"]
        assert item["nome"] == "Ana"
        assert item["telefone"] == 5551234
        assert item["endereco"] == "Rua A"

    def test_ids_are_unique(self, client, ana):
        ids = {_create(client, ana)["id"] for _ in range(20)}
        assert len(ids) == 20

    def test_client_id_is_ignored(self, client, storage, ana):
        item = _create(client, {**ana, "id": "chosen-by-client"})
        assert item["id"] != "chosen-by-client"
        stored = storage.get_all("items")
        assert "chosen-by-client" not in stored
        assert "id" not in stored[item["id"]]

    def test_python_field_names_are_accepted(self, client):
        item = _create(client, {"name": "Bia", "phone": 1, "address": "Rua B"})
        assert item["nome"] == "Bia"

    def test_invalid_json_is_bad_request(self, client, storage):
        response = client.post(
            "/create",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON body"
        assert storage.calls == []

    def test_missing_field_is_bad_request(self, client, storage):
        response = client.post("/create", json={"nome": "Ana", "telefone": 1})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
        assert storage.calls == []

    def test_phone_must_be_a_number(self, client, ana):
        response = client.post("/create", json={**ana, "telefone": "5551234"})
        assert response.status_code == 400

    def test_store_failure_is_server_error(self, failing_client, ana):
        response = failing_client.post("/create", json=ana)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "DynamoDB error: connection refused"
        assert "id" not in body


class TestRead:

    def test_empty_collection(self, client):
        response = client.get("/read")
        assert response.status_code == 200
        assert response.json() == []

    def test_read_after_create(self, client, ana):
        first = _create(client, ana)
        second = _create(client, {"nome": "Bia", "telefone": 42, "endereco": "Rua B"})

        items = _read_by_id(client)
        assert set(items) == {first["id"], second["id"]}
        assert items[first["id"]] == first
        assert items[second["id"]] == second

    def test_store_key_is_reflected_as_id(self, client, storage):
        key = storage.push("items", {"nome": "Caio", "telefone": 7, "endereco": "Rua C"})
        assert _read_by_id(client)[key]["id"] == key

    def test_store_failure_is_server_error(self, failing_client):
        response = failing_client.get("/read")
        assert response.status_code == 500
        assert response.json()["error"] == "DynamoDB error: connection refused"


class TestUpdate:

    def test_put_rewrites_fields(self, client, ana):
        item = _create(client, ana)
        changes = {"nome": "Ana B", "telefone": 5559999, "endereco": "Rua A"}

        response = client.put("/update", params={"itemID": item["id"]}, json=changes)
        assert response.status_code == 200
        assert response.text == f"Item with ID {item['id']} updated successfully"

        assert _read_by_id(client)[item["id"]] == {"id": item["id"], **changes}

    def test_put_preserves_other_stored_fields(self, client, storage, ana):
        key = storage.push("items", {**ana, "email": "ana@example.com"})
        response = client.put(
            "/update",
            params={"itemID": key},
            json={"nome": "Ana B", "telefone": 1, "endereco": "Rua Z"},
        )
        assert response.status_code == 200
        assert storage.get_all("items")[key]["email"] == "ana@example.com"

    def test_put_requires_all_fields(self, client, ana):
        item = _create(client, ana)
        response = client.put("/update", params={"itemID": item["id"]}, json={"nome": "X"})
        assert response.status_code == 400

    def test_missing_id_never_reaches_store(self, client, storage, ana):
        response = client.put("/update", json=ana)
        assert response.status_code == 400
        assert response.json()["error"] == "Item ID is missing"

        response = client.put("/update", params={"itemID": ""}, json=ana)
        assert response.status_code == 400
        assert storage.calls == []

    def test_unknown_id_is_not_found(self, client, storage, ana):
        response = client.put("/update", params={"itemID": "missing"}, json=ana)
        assert response.status_code == 404
        assert response.json()["error"] == "Item missing not found"
        assert storage.get_all("items") == {}

    def test_store_failure_is_server_error(self, failing_client, ana):
        response = failing_client.put("/update", params={"itemID": "abc"}, json=ana)
        assert response.status_code == 500
        assert response.json()["error"] == "DynamoDB error: connection refused"


class TestPatch:

    def test_absent_fields_are_unchanged(self, client, ana):
        item = _create(client, ana)
        response = client.patch("/update", params={"itemID": item["id"]}, json={"telefone": 999})
        assert response.status_code == 200
        assert _read_by_id(client)[item["id"]] == {**item, "telefone": 999}

    def test_empty_patch_is_bad_request(self, client, ana):
        item = _create(client, ana)
        response = client.patch("/update", params={"itemID": item["id"]}, json={})
        assert response.status_code == 400
        assert response.json()["error"] == "No fields to update"

    def test_null_field_is_bad_request(self, client, ana):
        item = _create(client, ana)
        response = client.patch("/update", params={"itemID": item["id"]}, json={"nome": None})
        assert response.status_code == 400
        assert _read_by_id(client)[item["id"]]["nome"] == "Ana"

    def test_unknown_id_is_not_found(self, client):
        response = client.patch("/update", params={"itemID": "missing"}, json={"nome": "X"})
        assert response.status_code == 404


class TestDelete:

    def test_delete_removes_item(self, client, ana):
        kept = _create(client, ana)
        removed = _create(client, ana)

        response = client.delete("/delete", params={"itemID": removed["id"]})
        assert response.status_code == 200
        assert response.text == f"Item with ID {removed['id']} deleted successfully"
        assert set(_read_by_id(client)) == {kept["id"]}

    def test_delete_is_idempotent(self, client):
        response = client.delete("/delete", params={"itemID": "never-existed"})
        assert response.status_code == 200

    def test_missing_id_never_reaches_store(self, client, storage):
        response = client.delete("/delete")
        assert response.status_code == 400
        assert response.json()["error"] == "Item ID is missing"
        assert storage.calls == []

    def test_store_failure_is_server_error(self, failing_client):
        response = failing_client.delete("/delete", params={"itemID": "abc"})
        assert response.status_code == 500


def test_lifecycle(client, ana):
    created = _create(client, ana)
    item_id = created["id"]

    changes = {"nome": "Ana B", "telefone": 5559999, "endereco": "Rua A"}
    assert client.put("/update", params={"itemID": item_id}, json=changes).status_code == 200
    assert _read_by_id(client)[item_id] == {"id": item_id, **changes}

    assert client.delete("/delete", params={"itemID": item_id}).status_code == 200
    assert item_id not in _read_by_id(client)
    assert client.put("/update", params={"itemID": item_id}, json=changes).status_code == 404


def test_unexpected_failure_keeps_serving():
    app = create_app(storage=FailingStorage(RuntimeError("boom")))
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/read")
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_route(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json()["status_code"] == 404


def test_wrong_method(client):
    response = client.get("/create")
    assert response.status_code == 405


class TestCors:

    def test_allowed_origin(self, client):
        response = client.options(
            "/read",
            headers={
                "Origin": "https://crud-front-delta.vercel.app",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://crud-front-delta.vercel.app"

    def test_other_origin_is_rejected(self, client):
        response = client.options(
            "/read",
            headers={
                "Origin": "https://elsewhere.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_origins_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, https://app.example.com")
        client = TestClient(create_app(storage=FailingStorage()))
        response = client.options(
            "/create",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
