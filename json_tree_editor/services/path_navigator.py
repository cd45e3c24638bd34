"""Path-addressed reads and copy-on-write updates of a JSON document.

All functions are pure: the input document is never mutated. Updates rebuild
the chain of objects from the root to the edited node and share every other
subtree with the input. Paths are walked iteratively so that deep paths
cannot exhaust the interpreter stack.
"""

from typing import List, Optional, Sequence

from ..models.document import MISSING, JsonObject, JsonValue, Path, is_json_object
from ..models.errors import ValidationException

DEFAULT_MAX_PATH_DEPTH = 100


def _check_path(path: Path, max_depth: Optional[int]) -> List[str]:
    """Normalize a path to a list of string keys and enforce the depth limit."""
    keys = list(path)
    for key in keys:
        if not isinstance(key, str):
            raise ValidationException(
                error_code="INVALID_PATH",
                message="All path elements must be strings",
                details={"path": [str(k) for k in keys]}
            )
    if max_depth is not None and len(keys) > max_depth:
        raise ValidationException(
            error_code="PATH_TOO_DEEP",
            message=f"Path has {len(keys)} segments, the limit is {max_depth}",
            details={"depth": len(keys), "max_depth": max_depth}
        )
    return keys


def format_path(path: Path) -> str:
    """Render a path for log lines and error messages."""
    if not path:
        return "<root>"
    return " -> ".join(path)


def path_starts_with(path: Path, prefix: Path) -> bool:
    """
    Check whether ``path`` is ``prefix`` itself or nested under it.

    Comparison is segment by segment, so ``["ab"]`` is not under ``["a"]``.
    """
    if len(prefix) > len(path):
        return False
    return all(a == b for a, b in zip(path, prefix))


def get_at_path(doc: JsonObject, path: Path,
                max_depth: Optional[int] = DEFAULT_MAX_PATH_DEPTH) -> JsonValue:
    """
    Read the value at a path.

    Args:
        doc: Document to read from
        path: Sequence of object keys, empty for the root
        max_depth: Maximum number of path segments that can resolve

    Returns:
        The addressed value, ``doc`` itself for an empty path, or ``MISSING``
        when a key is absent, a non-object is reached before the path ends,
        or the path is longer than ``max_depth``
    """
    if max_depth is not None and len(path) > max_depth:
        return MISSING
    node: JsonValue = doc
    for key in _check_path(path, None):
        if not is_json_object(node) or key not in node:
            return MISSING
        node = node[key]
    return node


def set_at_path(doc: JsonObject, path: Path, value: JsonValue,
                max_depth: Optional[int] = DEFAULT_MAX_PATH_DEPTH) -> JsonObject:
    """
    Return a copy of ``doc`` with ``value`` stored at ``path``.

    Every object on the path is shallow-copied; missing or non-object
    intermediates are replaced by fresh empty objects. With an empty path
    ``value`` becomes the new document and must itself be an object.

    Raises:
        ValidationException: If the path is invalid or an empty path is
            given a non-object value
    """
    keys = _check_path(path, max_depth)
    if not keys:
        if not is_json_object(value):
            raise ValidationException(
                error_code="INVALID_DOCUMENT_TYPE",
                message="The document root must be a JSON object",
                details={"received_type": type(value).__name__}
            )
        return value

    root = dict(doc)
    parent = root
    for key in keys[:-1]:
        child = parent.get(key)
        child = dict(child) if is_json_object(child) else {}
        parent[key] = child
        parent = child
    parent[keys[-1]] = value
    return root


def delete_at_path(doc: JsonObject, path: Path,
                   max_depth: Optional[int] = DEFAULT_MAX_PATH_DEPTH) -> JsonObject:
    """
    Return a copy of ``doc`` without the key at the end of ``path``.

    Siblings of the removed key are kept. Deleting a key that is already
    absent from an existing parent yields an equal copy.

    Raises:
        ValidationException: If the path is empty or its parent does not
            resolve to an object
    """
    keys = _check_path(path, max_depth)
    if not keys:
        raise ValidationException(
            error_code="EMPTY_PATH",
            message="Cannot delete the document root",
        )

    *parents, last = keys
    root = dict(doc)
    parent = root
    for key in parents:
        child = parent.get(key)
        if not is_json_object(child):
            raise ValidationException(
                error_code="PARENT_NOT_FOUND",
                message=f"No object at {format_path(parents)}",
                details={"path": keys}
            )
        child = dict(child)
        parent[key] = child
        parent = child
    parent.pop(last, None)
    return root


def split_path(path: Sequence[str]):
    """Split a non-empty path into its parent path and final key."""
    keys = list(path)
    return keys[:-1], keys[-1]
