"""Stateful editing facade over a single JSON document."""

import copy
import logging
from typing import Any, Optional

from ..config.models import EditorConfig
from ..models.document import (
    MISSING, JsonObject, Path, default_document, ensure_document, is_json_object
)
from ..models.errors import StorageException, ValidationException
from .document_store import DocumentStoreInterface
from .history import HistoryManager
from .import_validator import ImportValidator
from .path_navigator import (
    delete_at_path, format_path, get_at_path, set_at_path, split_path
)


class MutationEngine:
    """
    Owns the current document and its undo history.

    Every committing operation pushes the previous document onto the history,
    installs the new one, hands it to the document store and returns a copy
    of it. Failed operations leave both document and history untouched.
    """

    def __init__(
        self,
        document: Optional[JsonObject] = None,
        store: Optional[DocumentStoreInterface] = None,
        config: Optional[EditorConfig] = None
    ):
        """Initialize the engine.

        Args:
            document: Initial document, defaults to the built-in document
            store: Optional document store notified after every change
            config: Editor configuration, defaults to ``EditorConfig()``
        """
        self.config = config or EditorConfig()
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.storage_key = self.config.storage_key

        limits = self.config.limits_config
        self.max_path_depth = limits.max_path_depth
        self.import_validator = ImportValidator(
            max_document_size=limits.max_document_size,
            max_nesting_depth=limits.max_nesting_depth
        )
        self.history = HistoryManager(self.config.history_config.limit)

        if document is None:
            self._document = default_document()
        else:
            self._document = copy.deepcopy(ensure_document(document, source="initial document"))

    @classmethod
    def from_store(
        cls,
        store: DocumentStoreInterface,
        config: Optional[EditorConfig] = None
    ) -> "MutationEngine":
        """Create an engine whose initial document is loaded from ``store``.

        The built-in document is used when the store is empty or unreadable.
        """
        config = config or EditorConfig()
        logger = logging.getLogger(__name__)

        document = None
        try:
            document = store.load(config.storage_key)
        except StorageException as e:
            logger.warning(f"Failed to load saved document: {e.message}. Using the default document.")

        if document is not None and not is_json_object(document):
            logger.warning("Saved document is not a JSON object. Using the default document.")
            document = None

        if document is None:
            logger.info("Starting with the default document")
        return cls(document=document, store=store, config=config)

    @property
    def document(self) -> JsonObject:
        """Copy of the current document."""
        return self.snapshot()

    def snapshot(self) -> JsonObject:
        return copy.deepcopy(self._document)

    @property
    def can_undo(self) -> bool:
        return not self.history.is_empty

    @property
    def history_size(self) -> int:
        return len(self.history)

    def undo_info(self) -> Optional[str]:
        """Name of the operation the next undo would revert."""
        return self.history.undo_info()

    def get(self, path: Path) -> Any:
        """Return a copy of the value at ``path``, or ``MISSING``."""
        return copy.deepcopy(get_at_path(self._document, path, self.max_path_depth))

    def replace_document(self, new_document: JsonObject) -> JsonObject:
        """Replace the whole document with an already-parsed JSON object."""
        document = copy.deepcopy(ensure_document(new_document))
        return self._commit(document, "replace_document")

    def import_document(self, text: str) -> JsonObject:
        """
        Replace the whole document with one parsed from JSON text.

        Raises:
            ParseException: If the text is not valid JSON or not an object
        """
        document = self.import_validator.validate_import(text)
        self.logger.info(f"Importing document with {len(document)} top-level keys")
        return self._commit(document, "import")

    def add_property(self, parent_path: Path, key: str, raw_value: str) -> JsonObject:
        """
        Add or overwrite ``key`` in the object at ``parent_path``.

        ``raw_value`` is parsed as JSON when possible and stored as a plain
        string otherwise. A missing or non-object parent is replaced by a new
        object holding only the added key.

        Raises:
            ValidationException: If ``key`` is blank or ``parent_path`` is
                longer than the path depth limit
        """
        self._require_key(key, parent_path)

        current = get_at_path(self._document, parent_path, self.max_path_depth)
        parent = dict(current) if is_json_object(current) else {}
        parent[key] = self.import_validator.parse_lenient_value(raw_value)

        document = set_at_path(self._document, parent_path, parent, self.max_path_depth)
        return self._commit(document, "add_property")

    def rename_property(self, path: Path, new_key: str) -> JsonObject:
        """
        Rename the key at the end of ``path``.

        The renamed entry moves to the end of its parent's key order.

        Raises:
            ValidationException: If ``new_key`` is blank, ``path`` is empty,
                or ``path`` does not address an existing key
        """
        self._require_key(new_key, path)
        if not path:
            raise ValidationException(
                error_code="EMPTY_PATH",
                message="Cannot rename the document root",
                details={"path": []}
            )

        parent_path, old_key = split_path(path)
        parent = get_at_path(self._document, parent_path, self.max_path_depth)
        if not is_json_object(parent) or old_key not in parent:
            raise ValidationException(
                error_code="KEY_NOT_FOUND",
                message=f"No property at {format_path(path)}",
                details={"path": list(path)}
            )

        renamed = {k: v for k, v in parent.items() if k != old_key}
        renamed[new_key] = parent[old_key]

        document = set_at_path(self._document, parent_path, renamed, self.max_path_depth)
        return self._commit(document, "rename_property")

    def delete_node(self, path: Path) -> JsonObject:
        """
        Remove the key at the end of ``path``.

        Deleting the root, or a path that does not resolve, changes nothing
        and records no history. Resetting any selection that pointed at or
        below ``path`` is up to the caller.
        """
        if not path:
            self.logger.debug("Ignoring delete of the document root")
            return self.snapshot()

        if get_at_path(self._document, path, self.max_path_depth) is MISSING:
            self.logger.debug(f"Ignoring delete of missing path {format_path(path)}")
            return self.snapshot()

        document = delete_at_path(self._document, path, self.max_path_depth)
        return self._commit(document, "delete_node")

    def undo(self) -> JsonObject:
        """Restore the most recent snapshot. No-op when there is no history."""
        entry = self.history.pop()
        if entry is None:
            self.logger.debug("Nothing to undo")
            return self.snapshot()

        self._document = entry.document
        self.logger.debug(f"Undid {entry.operation}, {len(self.history)} snapshots left")
        self._notify_store()
        return self.snapshot()

    def clear_history(self) -> None:
        self.history.clear()

    def _require_key(self, key: str, path: Path) -> None:
        if not isinstance(key, str) or not key.strip():
            raise ValidationException(
                error_code="EMPTY_KEY",
                message="Name cannot be empty",
                details={"path": list(path)}
            )

    def _commit(self, document: JsonObject, operation: str) -> JsonObject:
        self.history.push(self._document, operation)
        self._document = document
        self.logger.debug(f"Committed {operation}, history size {len(self.history)}")
        self._notify_store()
        return self.snapshot()

    def _notify_store(self) -> None:
        """Persist the current document. Failures are logged, never raised."""
        if self.store is None:
            return
        try:
            self.store.save(self.storage_key, self._document)
        except StorageException as e:
            self.logger.warning(f"Failed to persist document: {e.message}")
        except Exception as e:
            self.logger.error(f"Unexpected error persisting document: {e}", exc_info=True)
