"""Document store interfaces and implementations.

A document store persists the single document blob under a key. The editor
reads it once at startup and overwrites it after every committing mutation.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import redis
from redis.exceptions import ConnectionError, TimeoutError, RedisError

from ..config.models import EditorConfig, RedisConfig
from ..models.document import JsonObject, is_json_object
from ..models.errors import StorageException


class DocumentStoreInterface(ABC):
    """Abstract interface for document store implementations."""

    @abstractmethod
    def load(self, key: str) -> Optional[JsonObject]:
        """Load the document stored under key. Returns None if absent."""
        pass

    @abstractmethod
    def save(self, key: str, document: JsonObject) -> None:
        """Overwrite the document stored under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a stored document. Returns True if it existed."""
        pass

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """Perform health check on the store."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the store connection."""
        pass


class InMemoryDocumentStore(DocumentStoreInterface):
    """In-memory document store implementation."""

    def __init__(self):
        self._documents: Dict[str, str] = {}
        self._lock = threading.RLock()

    def load(self, key: str) -> Optional[JsonObject]:
        with self._lock:
            data = self._documents.get(key)
        if data is None:
            return None
        return json.loads(data)

    def save(self, key: str, document: JsonObject) -> None:
        # Serialize on save so later edits to the caller's objects never leak in
        try:
            data = json.dumps(document)
        except (TypeError, ValueError) as e:
            raise StorageException(
                error_code="DOCUMENT_SERIALIZATION_FAILED",
                message=f"Document contains non-serializable data: {str(e)}",
                details={"storage_key": key}
            )
        with self._lock:
            self._documents[key] = data

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._documents.pop(key, None) is not None

    def health_check(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "status": "healthy",
                "storage_type": "in_memory",
                "stored_documents": len(self._documents),
            }

    def close(self) -> None:
        with self._lock:
            self._documents.clear()


class RedisDocumentStore(DocumentStoreInterface):
    """Redis-based document store implementation."""

    def __init__(self, redis_config: RedisConfig, client: Optional[redis.Redis] = None):
        """Initialize Redis storage.

        Args:
            redis_config: Redis connection settings
            client: Optional pre-built client, used instead of connecting
        """
        self.redis_config = redis_config
        self._redis_client: Optional[redis.Redis] = client
        self._key_prefix = redis_config.key_prefix

    @property
    def redis_client(self) -> redis.Redis:
        """Get or create Redis client with connection pooling."""
        if self._redis_client is None:
            try:
                self._redis_client = redis.Redis(
                    host=self.redis_config.host,
                    port=self.redis_config.port,
                    password=self.redis_config.password,
                    db=self.redis_config.db,
                    socket_timeout=self.redis_config.socket_timeout,
                    socket_connect_timeout=self.redis_config.connection_timeout,
                    max_connections=self.redis_config.max_connections,
                    decode_responses=True,
                    retry_on_timeout=True,
                    health_check_interval=30
                )
                self._redis_client.ping()
            except (ConnectionError, TimeoutError) as e:
                self._redis_client = None
                raise StorageException(
                    error_code="REDIS_CONNECTION_FAILED",
                    message=f"Failed to connect to Redis: {str(e)}",
                    details={
                        "host": self.redis_config.host,
                        "port": self.redis_config.port,
                        "error": str(e)
                    }
                )
            except RedisError as e:
                self._redis_client = None
                raise StorageException(
                    error_code="REDIS_INITIALIZATION_FAILED",
                    message=f"Failed to initialize Redis client: {str(e)}",
                    details={"error_type": type(e).__name__}
                )

        return self._redis_client

    def _redis_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def load(self, key: str) -> Optional[JsonObject]:
        try:
            data: Any = self.redis_client.get(self._redis_key(key))
        except RedisError as e:
            raise StorageException(
                error_code="DOCUMENT_RETRIEVAL_FAILED",
                message=f"Failed to load document from Redis: {str(e)}",
                details={"storage_key": key, "error_type": type(e).__name__}
            )

        if data is None:
            return None

        try:
            document = json.loads(data)
        except (ValueError, TypeError) as e:
            raise StorageException(
                error_code="DOCUMENT_DATA_CORRUPTED",
                message=f"Stored document is corrupted or invalid: {str(e)}",
                details={"storage_key": key, "error_type": type(e).__name__}
            )
        if not is_json_object(document):
            raise StorageException(
                error_code="DOCUMENT_DATA_CORRUPTED",
                message="Stored document is not a JSON object",
                details={"storage_key": key, "received_type": type(document).__name__}
            )
        return document

    def save(self, key: str, document: JsonObject) -> None:
        try:
            data = json.dumps(document)
            self.redis_client.set(self._redis_key(key), data)
        except (TypeError, ValueError) as e:
            raise StorageException(
                error_code="DOCUMENT_SERIALIZATION_FAILED",
                message=f"Document contains non-serializable data: {str(e)}",
                details={"storage_key": key}
            )
        except RedisError as e:
            raise StorageException(
                error_code="DOCUMENT_STORAGE_FAILED",
                message=f"Failed to store document in Redis: {str(e)}",
                details={"storage_key": key, "error_type": type(e).__name__}
            )

    def delete(self, key: str) -> bool:
        try:
            deleted_count: Any = self.redis_client.delete(self._redis_key(key))
            return int(deleted_count) > 0
        except RedisError as e:
            raise StorageException(
                error_code="DOCUMENT_DELETION_FAILED",
                message=f"Failed to delete document from Redis: {str(e)}",
                details={"storage_key": key, "error_type": type(e).__name__}
            )

    def health_check(self) -> Dict[str, Any]:
        try:
            ping_result: Any = self.redis_client.ping()
            return {
                "status": "healthy",
                "storage_type": "redis",
                "redis_connected": bool(ping_result),
                "redis_config": {
                    "host": self.redis_config.host,
                    "port": self.redis_config.port,
                    "db": self.redis_config.db
                }
            }
        except (StorageException, RedisError) as e:
            return {
                "status": "unhealthy",
                "storage_type": "redis",
                "error": str(e)
            }

    def close(self) -> None:
        if self._redis_client is not None:
            try:
                self._redis_client.close()
            except RedisError as e:
                logging.getLogger(__name__).debug(f"Ignoring error while closing Redis client: {e}")
            finally:
                self._redis_client = None


def create_document_store(config: EditorConfig) -> DocumentStoreInterface:
    """Create the document store selected by the configuration.

    Falls back to in-memory storage when Redis is configured but unreachable.

    Args:
        config: Editor configuration

    Returns:
        Document store instance
    """
    logger = logging.getLogger(__name__)

    if config.redis_config is None:
        logger.info("No Redis configuration, using in-memory document store")
        return InMemoryDocumentStore()

    store = RedisDocumentStore(config.redis_config)
    try:
        store.redis_client
    except StorageException as e:
        logger.warning(f"Failed to initialize Redis storage: {e.message}. Falling back to in-memory store.")
        return InMemoryDocumentStore()

    logger.info("Redis document store initialized successfully")
    return store
