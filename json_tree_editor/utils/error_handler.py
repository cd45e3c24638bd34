"""Error categorisation for the JSON Tree Editor."""

import logging
import time
from typing import Dict

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from ..models.errors import (
    ErrorResponse, ParseError, ValidationError, StorageError,
    TreeEditorException, ParseException, ValidationException, StorageException
)

logger = logging.getLogger(__name__)


HTTP_STATUS_BY_ERROR_TYPE: Dict[str, int] = {
    "parse": 400,
    "validation": 422,
    "storage": 503,
    "processing": 500,
}


class ErrorHandler:
    """Maps exceptions raised by the editor onto error response models."""

    def __init__(self):
        self.error_counts: Dict[str, int] = {}

    def categorize_error(self, error: Exception) -> ErrorResponse:
        """Categorize an exception into appropriate error response."""

        self.error_counts[type(error).__name__] = self.error_counts.get(type(error).__name__, 0) + 1

        if isinstance(error, TreeEditorException):
            return self._handle_tree_editor_exception(error)

        if isinstance(error, (PydanticValidationError, RequestValidationError)):
            return self._handle_pydantic_validation_error(error)

        if isinstance(error, RecursionError):
            return self._handle_resource_error(error)

        return self._handle_generic_error(error)

    def status_code_for(self, response: ErrorResponse) -> int:
        """HTTP status code matching an error response."""
        return HTTP_STATUS_BY_ERROR_TYPE.get(response.error_type, 500)

    def _handle_tree_editor_exception(self, error: TreeEditorException) -> ErrorResponse:
        """Handle known editor exceptions."""

        if isinstance(error, ParseException):
            return ParseError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                line=error.details.get('line'),
                column=error.details.get('column'),
                suggestions=[
                    "Ensure the document is valid JSON format",
                    "Make sure the top-level value is an object, not an array or scalar"
                ]
            )

        elif isinstance(error, ValidationException):
            return ValidationError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                path=error.details.get('path')
            )

        elif isinstance(error, StorageException):
            return StorageError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                storage_key=error.details.get('storage_key')
            )

        return ErrorResponse(
            error_type="processing",
            error_code=error.error_code,
            message=error.message,
            details=error.details
        )

    def _handle_pydantic_validation_error(self, error) -> ValidationError:
        """Handle Pydantic validation errors, including rejected request bodies."""

        field_errors: Dict[str, list] = {}
        for err in error.errors():
            field_path = ".".join(str(loc) for loc in err['loc'])
            field_errors.setdefault(field_path, []).append(err['msg'])

        return ValidationError(
            error_code="VALIDATION_FAILED",
            message="Request validation failed",
            details={"field_errors": field_errors},
            suggestions=[
                "Check the request format and ensure all required fields are provided",
                "Verify that field types match the expected schema"
            ]
        )

    def _handle_resource_error(self, error: Exception) -> ErrorResponse:
        """Handle runaway recursion on pathological input."""

        return ErrorResponse(
            error_type="processing",
            error_code="RESOURCE_EXHAUSTED",
            message=f"Resource limit exceeded: {type(error).__name__}",
            details={"original_error": str(error)},
            suggestions=["Reduce document nesting depth"]
        )

    def _handle_generic_error(self, error: Exception) -> ErrorResponse:
        """Handle unhandled exceptions."""

        error_id = f"generic_{int(time.time())}"
        logger.error(f"Unhandled error [{error_id}]: {type(error).__name__}: {str(error)}",
                     exc_info=error)

        return ErrorResponse(
            error_type="processing",
            error_code="INTERNAL_ERROR",
            message="An unexpected error occurred",
            details={
                "error_id": error_id,
                "error_type": type(error).__name__,
            },
            suggestions=[
                "Retry the operation",
                f"Reference error ID: {error_id}"
            ]
        )
