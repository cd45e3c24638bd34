"""Editing services for the JSON Tree Editor."""

from .path_navigator import (
    get_at_path,
    set_at_path,
    delete_at_path,
    path_starts_with,
    format_path,
)
from .history import HistoryManager, HistoryEntry
from .import_validator import ImportValidator
from .document_store import (
    DocumentStoreInterface,
    InMemoryDocumentStore,
    RedisDocumentStore,
    create_document_store,
)
from .mutation_engine import MutationEngine

__all__ = [
    "get_at_path",
    "set_at_path",
    "delete_at_path",
    "path_starts_with",
    "format_path",
    "HistoryManager",
    "HistoryEntry",
    "ImportValidator",
    "DocumentStoreInterface",
    "InMemoryDocumentStore",
    "RedisDocumentStore",
    "create_document_store",
    "MutationEngine",
]
