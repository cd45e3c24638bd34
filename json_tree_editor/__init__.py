"""JSON Tree Editor: path-addressed editing of a JSON document with undo."""

__version__ = "1.0.0"

from .config import EditorConfig, load_config
from .models import (
    MISSING,
    ParseException,
    ValidationException,
    StorageException,
    TreeEditorException,
)
from .services import (
    MutationEngine,
    HistoryManager,
    ImportValidator,
    InMemoryDocumentStore,
    RedisDocumentStore,
    create_document_store,
    get_at_path,
    set_at_path,
    delete_at_path,
)

__all__ = [
    "__version__",
    "EditorConfig",
    "load_config",
    "MISSING",
    "ParseException",
    "ValidationException",
    "StorageException",
    "TreeEditorException",
    "MutationEngine",
    "HistoryManager",
    "ImportValidator",
    "InMemoryDocumentStore",
    "RedisDocumentStore",
    "create_document_store",
    "get_at_path",
    "set_at_path",
    "delete_at_path",
]
