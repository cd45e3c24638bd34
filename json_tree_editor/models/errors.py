"""Error models for the JSON Tree Editor."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error_type: str = Field(..., description="Category of error (parse, validation, storage, processing)")
    error_code: str = Field(..., description="Specific error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    suggestions: Optional[List[str]] = Field(default=None, description="Suggested actions to resolve the error")

    @field_validator('error_type')
    @classmethod
    def validate_error_type(cls, v):
        """Ensure error type is one of the allowed categories."""
        allowed_types = ["parse", "validation", "storage", "processing", "configuration"]
        if v not in allowed_types:
            raise ValueError(f"Error type must be one of: {', '.join(allowed_types)}")
        return v

    @field_validator('error_code')
    @classmethod
    def validate_error_code(cls, v):
        """Ensure error code is not empty."""
        if not v or not v.strip():
            raise ValueError("Error code cannot be empty")
        return v.strip().upper()

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        """Ensure message is not empty."""
        if not v or not v.strip():
            raise ValueError("Error message cannot be empty")
        return v.strip()


class ParseError(ErrorResponse):
    """Error model for malformed or non-object JSON supplied to import."""

    error_type: str = Field(default="parse", description="Error type is always parse")
    line: Optional[int] = Field(default=None, description="Line of the syntax error, if known")
    column: Optional[int] = Field(default=None, description="Column of the syntax error, if known")


class ValidationError(ErrorResponse):
    """Error model for rejected edit arguments (empty keys, bad paths)."""

    error_type: str = Field(default="validation", description="Error type is always validation")
    path: Optional[List[str]] = Field(default=None, description="Path the failed operation addressed")


class StorageError(ErrorResponse):
    """Error model for document store failures."""

    error_type: str = Field(default="storage", description="Error type is always storage")
    storage_key: Optional[str] = Field(default=None, description="Key of the persisted document")


# Exception classes for raising errors
class TreeEditorException(Exception):
    """Base exception for the JSON Tree Editor."""

    error_type = "processing"

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ParseException(TreeEditorException):
    """Raised when imported text is not valid JSON or not a JSON object."""

    error_type = "parse"


class ValidationException(TreeEditorException):
    """Raised when an edit is rejected before touching the document."""

    error_type = "validation"


class StorageException(TreeEditorException):
    """Raised by document stores when loading or saving fails."""

    error_type = "storage"
