"""Document model for the JSON Tree Editor.

The document under edit is always a JSON object at the root. Values inside
it may be any JSON value; the editor itself only ever descends into objects.
"""

import copy
from typing import Any, Dict, List, Sequence, Union

from .errors import ParseException

JsonScalar = Union[str, int, float, bool, None]
JsonValue = Union[JsonScalar, Dict[str, Any], List[Any]]
JsonObject = Dict[str, JsonValue]
Path = Sequence[str]


class _Missing:
    """Marker for a path that does not resolve to a value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING = _Missing()


DEFAULT_DOCUMENT: JsonObject = {
    "auto": {
        "driver_types": {
            "auto": True,
            "img_url": "",
            "is_active": True,
            "is_open_for_signup": True,
            "name": {
                "bn": "",
                "en": ""
            },
            "verify_otp_for_signup": False
        }
    }
}


def default_document() -> JsonObject:
    """Return a fresh copy of the built-in startup document."""
    return copy.deepcopy(DEFAULT_DOCUMENT)


def is_json_object(value: Any) -> bool:
    """Check whether a value can act as a JSON object node."""
    return isinstance(value, dict)


def json_depth(value: Any) -> int:
    """
    Measure the nesting depth of a JSON value without recursion.

    Scalars have depth 0, an empty container has depth 1.
    """
    max_depth = 0
    stack = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            depth += 1
            stack.extend((child, depth) for child in node.values())
        elif isinstance(node, list):
            depth += 1
            stack.extend((child, depth) for child in node)
        max_depth = max(max_depth, depth)
    return max_depth


def ensure_document(value: Any, source: str = "document") -> JsonObject:
    """
    Enforce the root-is-object invariant.

    Args:
        value: Candidate document
        source: Where the value came from, for the error message

    Returns:
        The value itself, once known to be a JSON object

    Raises:
        ParseException: If the value is an array or scalar
    """
    if not is_json_object(value):
        raise ParseException(
            error_code="INVALID_DOCUMENT_TYPE",
            message=f"The {source} must be a JSON object",
            details={"received_type": type(value).__name__}
        )
    return value
