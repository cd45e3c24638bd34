"""Bounded undo history of document snapshots."""

from collections import deque
from typing import Deque, NamedTuple, Optional

from ..models.document import JsonObject

DEFAULT_HISTORY_LIMIT = 10


class HistoryEntry(NamedTuple):
    """A prior document together with the operation that replaced it."""

    document: JsonObject
    operation: str


class HistoryManager:
    """
    Stack of prior documents, most recent last.

    Pushing beyond ``limit`` silently evicts the oldest snapshot. Snapshots
    are stored as given; callers must not mutate them afterwards.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._entries: Deque[HistoryEntry] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, document: JsonObject, operation: str = "edit") -> None:
        """Record the document as it was before ``operation`` ran."""
        self._entries.append(HistoryEntry(document, operation))

    def pop(self) -> Optional[HistoryEntry]:
        """Remove and return the most recent entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def undo_info(self) -> Optional[str]:
        """Name of the operation the next undo would revert, if any."""
        if self._entries:
            return self._entries[-1].operation
        return None

    def clear(self) -> None:
        self._entries.clear()
