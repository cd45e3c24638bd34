"""
FastAPI route handlers for the JSON Tree Editor REST API.
"""

from fastapi import Request

from .. import __version__
from ..models.document import MISSING, JsonObject
from ..services.mutation_engine import MutationEngine
from .models import (
    PathRequest, ImportRequest, AddPropertyRequest, RenamePropertyRequest,
    DocumentResponse, ValueResponse, HealthResponse
)


def get_engine(request: Request) -> MutationEngine:
    return request.app.state.engine


def _document_response(engine: MutationEngine, document: JsonObject) -> DocumentResponse:
    return DocumentResponse(
        document=document,
        document_hash=engine.import_validator.generate_document_hash(document),
        history_size=engine.history_size,
        can_undo=engine.can_undo,
        undo_info=engine.undo_info()
    )


async def read_document(request: Request):
    """Return the whole document."""
    engine = get_engine(request)
    return _document_response(engine, engine.snapshot())


async def read_value(body: PathRequest, request: Request):
    """Return the value at a path."""
    value = get_engine(request).get(body.path)
    if value is MISSING:
        return ValueResponse(path=body.path, found=False)
    return ValueResponse(path=body.path, found=True, value=value)


async def import_document(body: ImportRequest, request: Request):
    """Replace the document with imported JSON text."""
    engine = get_engine(request)
    return _document_response(engine, engine.import_document(body.text))


async def add_property(body: AddPropertyRequest, request: Request):
    """Add a property under an object."""
    engine = get_engine(request)
    return _document_response(engine, engine.add_property(body.parent_path, body.key, body.value))


async def rename_property(body: RenamePropertyRequest, request: Request):
    """Rename a property."""
    engine = get_engine(request)
    return _document_response(engine, engine.rename_property(body.path, body.new_key))


async def delete_node(body: PathRequest, request: Request):
    """Delete a property."""
    engine = get_engine(request)
    return _document_response(engine, engine.delete_node(body.path))


async def undo(request: Request):
    """Undo the most recent change."""
    engine = get_engine(request)
    return _document_response(engine, engine.undo())


async def health_check(request: Request):
    """Health check endpoint."""
    engine = get_engine(request)
    storage = engine.store.health_check() if engine.store is not None else {"status": "disabled"}
    status = "healthy" if storage.get("status") in ("healthy", "disabled") else "degraded"
    return HealthResponse(
        status=status,
        version=__version__,
        history_size=engine.history_size,
        storage=storage
    )
