"""Parsing and validation of JSON text entering the editor."""

import hashlib
import json
import math
from typing import Any, Dict, Optional

from ..models.document import JsonObject, JsonValue, ensure_document, json_depth
from ..models.errors import ParseException

DEFAULT_MAX_DOCUMENT_SIZE = 10485760  # 10MB
DEFAULT_MAX_NESTING_DEPTH = 100


def _reject_constant(name: str):
    """Refuse the NaN and Infinity literals that json.loads accepts by default."""
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range for a JSON number")
    return value


class ImportValidator:
    """Validates imported documents and coerces user-entered values."""

    def __init__(
        self,
        max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    ):
        """
        Args:
            max_document_size: Largest accepted import, in UTF-8 bytes
            max_nesting_depth: Deepest accepted container nesting
        """
        self.max_document_size = max_document_size
        self.max_nesting_depth = max_nesting_depth

    def validate_import(self, text: str) -> JsonObject:
        """
        Parse a JSON string into a document that may replace the current one.

        Args:
            text: JSON text to parse

        Returns:
            Parsed JSON object

        Raises:
            ParseException: If the text is too large, is not valid JSON,
                nests too deeply, or does not hold an object at the top level
        """
        size = len(text.encode('utf-8'))
        if size > self.max_document_size:
            raise ParseException(
                error_code="DOCUMENT_TOO_LARGE",
                message=f"Document is {size} bytes, the limit is {self.max_document_size}",
                details={"document_size": size, "max_document_size": self.max_document_size}
            )

        try:
            data = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
        except json.JSONDecodeError as e:
            raise ParseException(
                error_code="JSON_PARSE_FAILED",
                message=f"Invalid JSON format: {e.msg}",
                details={
                    "error": str(e),
                    "line": e.lineno,
                    "column": e.colno
                }
            )
        except ValueError as e:
            raise ParseException(
                error_code="JSON_PARSE_FAILED",
                message=f"Invalid JSON format: {e}",
                details={"error": str(e)}
            )
        except RecursionError:
            raise ParseException(
                error_code="DOCUMENT_TOO_DEEP",
                message="Document nesting exceeds the parser's limit",
                details={"max_nesting_depth": self.max_nesting_depth}
            )

        document = ensure_document(data, source="imported document")

        depth = json_depth(document)
        if depth > self.max_nesting_depth:
            raise ParseException(
                error_code="DOCUMENT_TOO_DEEP",
                message=f"Document nests {depth} levels deep, the limit is {self.max_nesting_depth}",
                details={"depth": depth, "max_nesting_depth": self.max_nesting_depth}
            )

        return document

    def parse_lenient_value(self, raw: str) -> JsonValue:
        """
        Turn a user-entered value into a JSON value.

        The text is parsed as JSON first; if that fails it is kept verbatim
        as a string. Empty input yields an empty object.
        """
        if not raw:
            return {}
        parsed = self._try_parse(raw)
        if parsed is None:
            return raw
        return parsed[0]

    def _try_parse(self, raw: str) -> Optional[tuple]:
        """Return ``(value,)`` when ``raw`` is acceptable JSON, else None."""
        try:
            value = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
        except (ValueError, RecursionError):
            return None
        if json_depth(value) > self.max_nesting_depth:
            return None
        return (value,)

    def generate_document_hash(self, document: Dict[str, Any]) -> str:
        """
        Generate a hash for the document to track changes.

        Args:
            document: JSON document to hash

        Returns:
            SHA-256 hash of the document as hex string
        """
        json_str = json.dumps(document, sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(json_str.encode('utf-8')).hexdigest()
