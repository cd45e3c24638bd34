import json
from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError, RedisError

from json_tree_editor.config.models import EditorConfig, RedisConfig
from json_tree_editor.models.errors import StorageException
from json_tree_editor.services import document_store
from json_tree_editor.services.document_store import (
    InMemoryDocumentStore,
    RedisDocumentStore,
    create_document_store,
)


class TestInMemoryDocumentStore:

    def test_save_and_load(self, store):
        store.save("treeData", {"a": {"b": 1}})
        assert store.load("treeData") == {"a": {"b": 1}}

    def test_load_missing(self, store):
        assert store.load("treeData") is None

    def test_saved_document_is_detached(self, store):
        document = {"a": {"b": 1}}
        store.save("treeData", document)
        document["a"]["b"] = 2
        assert store.load("treeData") == {"a": {"b": 1}}

    def test_save_overwrites(self, store):
        store.save("treeData", {"v": 1})
        store.save("treeData", {"v": 2})
        assert store.load("treeData") == {"v": 2}

    def test_non_serializable_rejected(self, store):
        with pytest.raises(StorageException) as exc_info:
            store.save("treeData", {"bad": object()})
        assert exc_info.value.error_code == "DOCUMENT_SERIALIZATION_FAILED"

    def test_delete(self, store):
        store.save("treeData", {})
        assert store.delete("treeData") is True
        assert store.delete("treeData") is False

    def test_health_check_and_close(self, store):
        store.save("treeData", {})
        assert store.health_check()["stored_documents"] == 1
        store.close()
        assert store.health_check()["stored_documents"] == 0


@pytest.fixture
def redis_client():
    return MagicMock()


@pytest.fixture
def redis_store(redis_client):
    return RedisDocumentStore(RedisConfig(), client=redis_client)


class TestRedisDocumentStore:

    def test_load(self, redis_store, redis_client):
        redis_client.get.return_value = '{"a": 1}'
        assert redis_store.load("treeData") == {"a": 1}
        redis_client.get.assert_called_once_with("json_tree_editor:treeData")

    def test_load_missing(self, redis_store, redis_client):
        redis_client.get.return_value = None
        assert redis_store.load("treeData") is None

    @pytest.mark.parametrize("data", ["not json", "[1, 2]"])
    def test_load_corrupted(self, redis_store, redis_client, data):
        redis_client.get.return_value = data
        with pytest.raises(StorageException) as exc_info:
            redis_store.load("treeData")
        assert exc_info.value.error_code == "DOCUMENT_DATA_CORRUPTED"

    def test_load_redis_error(self, redis_store, redis_client):
        redis_client.get.side_effect = RedisError("gone")
        with pytest.raises(StorageException) as exc_info:
            redis_store.load("treeData")
        assert exc_info.value.error_code == "DOCUMENT_RETRIEVAL_FAILED"

    def test_save(self, redis_store, redis_client):
        redis_store.save("treeData", {"a": [1, 2]})
        key, data = redis_client.set.call_args.args
        assert key == "json_tree_editor:treeData"
        assert json.loads(data) == {"a": [1, 2]}

    def test_save_redis_error(self, redis_store, redis_client):
        redis_client.set.side_effect = RedisError("read only")
        with pytest.raises(StorageException) as exc_info:
            redis_store.save("treeData", {})
        assert exc_info.value.error_code == "DOCUMENT_STORAGE_FAILED"

    def test_delete(self, redis_store, redis_client):
        redis_client.delete.return_value = 1
        assert redis_store.delete("treeData") is True
        redis_client.delete.return_value = 0
        assert redis_store.delete("treeData") is False

    def test_health_check(self, redis_store, redis_client):
        redis_client.ping.return_value = True
        assert redis_store.health_check()["status"] == "healthy"
        redis_client.ping.side_effect = RedisError("down")
        assert redis_store.health_check()["status"] == "unhealthy"

    def test_close(self, redis_store, redis_client):
        redis_store.close()
        redis_client.close.assert_called_once()
        assert redis_store._redis_client is None

    def test_connection_failure(self):
        with patch.object(document_store.redis, "Redis") as redis_cls:
            redis_cls.return_value.ping.side_effect = ConnectionError("refused")
            store = RedisDocumentStore(RedisConfig(host="nowhere"))
            with pytest.raises(StorageException) as exc_info:
                store.redis_client
        assert exc_info.value.error_code == "REDIS_CONNECTION_FAILED"


class TestCreateDocumentStore:

    def test_memory_without_redis_config(self):
        assert isinstance(create_document_store(EditorConfig()), InMemoryDocumentStore)

    def test_redis_when_reachable(self):
        with patch.object(document_store.redis, "Redis") as redis_cls:
            redis_cls.return_value.ping.return_value = True
            store = create_document_store(EditorConfig(redis_config=RedisConfig()))
        assert isinstance(store, RedisDocumentStore)

    def test_falls_back_to_memory(self):
        with patch.object(document_store.redis, "Redis") as redis_cls:
            redis_cls.return_value.ping.side_effect = ConnectionError("refused")
            store = create_document_store(EditorConfig(redis_config=RedisConfig()))
        assert isinstance(store, InMemoryDocumentStore)
