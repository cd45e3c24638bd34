"""
Pydantic models for the JSON Tree Editor REST API.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


def _validate_path(v: List[str]) -> List[str]:
    for key in v:
        if not isinstance(key, str):
            raise ValueError("All path elements must be strings")
    return v


class PathRequest(BaseModel):
    """Request model addressing a single location."""
    path: List[str] = Field(default_factory=list, description="Object keys from the root, empty for the root")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        return _validate_path(v)


class ImportRequest(BaseModel):
    """Request model for replacing the whole document."""
    text: str = Field(..., description="JSON text whose top-level value is an object")


class AddPropertyRequest(BaseModel):
    """Request model for adding a property."""
    parent_path: List[str] = Field(default_factory=list, description="Path of the object receiving the property")
    key: str = Field(..., description="Name of the new property")
    value: str = Field("", description="Value as JSON text, or any text to store verbatim")


class RenamePropertyRequest(BaseModel):
    """Request model for renaming a property."""
    path: List[str] = Field(..., description="Path of the property to rename")
    new_key: str = Field(..., description="New property name")


class DocumentResponse(BaseModel):
    """Response model carrying the current document."""
    document: Dict[str, Any] = Field(..., description="Current document")
    document_hash: str = Field(..., description="SHA-256 of the canonical document")
    history_size: int = Field(..., description="Number of undo steps available")
    can_undo: bool = Field(..., description="Whether an undo step is available")
    undo_info: Optional[str] = Field(None, description="Operation the next undo reverts")


class ValueResponse(BaseModel):
    """Response model for reading one location."""
    path: List[str] = Field(..., description="Requested path")
    found: bool = Field(..., description="Whether the path resolved")
    value: Any = Field(None, description="Value at the path, null when not found")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Server health status")
    version: str = Field(..., description="Server version")
    history_size: int = Field(..., description="Number of undo steps available")
    storage: Dict[str, Any] = Field(..., description="Document store health status")
