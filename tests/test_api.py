from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from json_tree_editor import __version__
from json_tree_editor.api.app import create_app
from json_tree_editor.config.models import EditorConfig
from json_tree_editor.models.document import DEFAULT_DOCUMENT
from json_tree_editor.services.document_store import InMemoryDocumentStore


@pytest.fixture
def api_store():
    store = InMemoryDocumentStore()
    store.save("treeData", {"a": {"b": 1}})
    return store


@pytest.fixture
def client(api_store):
    return TestClient(create_app(EditorConfig(), store=api_store))


def test_read_document(client):
    response = client.get("/document")
    assert response.status_code == 200
    body = response.json()
    assert body["document"] == {"a": {"b": 1}}
    assert body["history_size"] == 0
    assert body["can_undo"] is False
    assert len(body["document_hash"]) == 64


def test_default_document_for_empty_store():
    client = TestClient(create_app(EditorConfig(), store=InMemoryDocumentStore()))
    assert client.get("/document").json()["document"] == DEFAULT_DOCUMENT


def test_read_value(client):
    found = client.post("/document/value", json={"path": ["a", "b"]}).json()
    assert found == {"path": ["a", "b"], "found": True, "value": 1}

    missing = client.post("/document/value", json={"path": ["a", "x"]}).json()
    assert missing["found"] is False
    assert missing["value"] is None


def test_edit_and_undo_flow(client, api_store):
    response = client.post("/document/properties", json={"parent_path": [], "key": "c", "value": "2"})
    assert response.status_code == 200
    assert response.json()["document"] == {"a": {"b": 1}, "c": 2}

    response = client.post("/document/rename", json={"path": ["a", "b"], "new_key": "e"})
    assert response.json()["document"] == {"a": {"e": 1}, "c": 2}
    assert response.json()["undo_info"] == "rename_property"

    response = client.post("/document/delete", json={"path": ["a"]})
    assert response.json()["document"] == {"c": 2}
    assert api_store.load("treeData") == {"c": 2}

    response = client.post("/document/undo")
    body = response.json()
    assert body["document"] == {"a": {"e": 1}, "c": 2}
    assert body["history_size"] == 2


def test_import(client):
    response = client.post("/document/import", json={"text": '{"x": [1, 2]}'})
    assert response.status_code == 200
    assert response.json()["document"] == {"x": [1, 2]}


@pytest.mark.parametrize("text, error_code", [
    ("not json", "JSON_PARSE_FAILED"),
    ("[1,2,3]", "INVALID_DOCUMENT_TYPE"),
    ('{"a": NaN}', "JSON_PARSE_FAILED"),
])
def test_import_rejected(client, text, error_code):
    response = client.post("/document/import", json={"text": text})
    assert response.status_code == 400
    body = response.json()
    assert body["error_type"] == "parse"
    assert body["error_code"] == error_code
    assert client.get("/document").json()["document"] == {"a": {"b": 1}}


def test_non_finite_value_stored_as_text(client, api_store):
    response = client.post("/document/properties", json={"parent_path": [], "key": "x", "value": "Infinity"})
    assert response.json()["document"]["x"] == "Infinity"
    assert api_store.load("treeData")["x"] == "Infinity"


def test_blank_key_rejected(client):
    response = client.post("/document/properties", json={"parent_path": ["a"], "key": "  ", "value": "1"})
    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "validation"
    assert body["error_code"] == "EMPTY_KEY"
    assert body["message"] == "Name cannot be empty"


def test_rename_root_rejected(client):
    response = client.post("/document/rename", json={"path": [], "new_key": "x"})
    assert response.status_code == 422
    assert response.json()["error_code"] == "EMPTY_PATH"


def test_delete_root_is_noop(client):
    response = client.post("/document/delete", json={"path": []})
    assert response.status_code == 200
    assert response.json()["history_size"] == 0


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["version"] == __version__
    assert body["storage"]["storage_type"] == "in_memory"


def test_malformed_body_rejected(client):
    response = client.post("/document/rename", json={"new_key": "x"})
    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "VALIDATION_FAILED"
    assert "body.path" in body["details"]["field_errors"]


@pytest.mark.parametrize("error, error_code", [
    (RuntimeError("boom"), "INTERNAL_ERROR"),
    (RecursionError("too deep"), "RESOURCE_EXHAUSTED"),
])
def test_unexpected_error(api_store, monkeypatch, error, error_code):
    monkeypatch.setattr(api_store, "health_check", Mock(side_effect=error))
    client = TestClient(create_app(EditorConfig(), store=api_store), raise_server_exceptions=False)
    response = client.get("/health")
    assert response.status_code == 500
    body = response.json()
    assert body["error_type"] == "processing"
    assert body["error_code"] == error_code
