"""Data models for the JSON Tree Editor."""

from .document import (
    MISSING,
    DEFAULT_DOCUMENT,
    JsonValue,
    JsonObject,
    Path,
    default_document,
    ensure_document,
    is_json_object,
    json_depth,
)

from .errors import (
    ErrorResponse,
    ParseError,
    ValidationError,
    StorageError,
    TreeEditorException,
    ParseException,
    ValidationException,
    StorageException,
)

__all__ = [
    # Document model
    "MISSING",
    "DEFAULT_DOCUMENT",
    "JsonValue",
    "JsonObject",
    "Path",
    "default_document",
    "ensure_document",
    "is_json_object",
    "json_depth",

    # Error models
    "ErrorResponse",
    "ParseError",
    "ValidationError",
    "StorageError",

    # Exception classes
    "TreeEditorException",
    "ParseException",
    "ValidationException",
    "StorageException",
]
