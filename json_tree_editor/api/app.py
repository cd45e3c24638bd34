"""
FastAPI application factory and configuration.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config.models import EditorConfig
from ..models.errors import TreeEditorException
from ..services.document_store import DocumentStoreInterface, create_document_store
from ..services.mutation_engine import MutationEngine
from ..utils.error_handler import ErrorHandler
from . import routes
from .models import DocumentResponse, ValueResponse, HealthResponse

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[EditorConfig] = None,
    store: Optional[DocumentStoreInterface] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Editor configuration, defaults to ``EditorConfig()``
        store: Document store, built from the configuration when omitted
    """
    config = config or EditorConfig()
    store = store if store is not None else create_document_store(config)
    engine = MutationEngine.from_store(store, config)
    error_handler = ErrorHandler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("JSON Tree Editor REST API started")
        yield
        store.close()
        logger.info("JSON Tree Editor REST API stopped")

    app = FastAPI(
        title="JSON Tree Editor REST API",
        description="Path-addressed editing of a JSON document with undo",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.engine = engine
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def error_response(exc: Exception) -> JSONResponse:
        response = error_handler.categorize_error(exc)
        return JSONResponse(
            status_code=error_handler.status_code_for(response),
            content=response.model_dump(exclude_none=True)
        )

    async def handle_editor_exception(request: Request, exc: TreeEditorException):
        logger.info(f"Rejected {request.url.path}: {exc.error_code}: {exc.message}")
        return error_response(exc)

    async def handle_invalid_request(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected {request.url.path}: malformed request body")
        return error_response(exc)

    async def handle_unexpected_error(request: Request, exc: Exception):
        return error_response(exc)

    app.add_exception_handler(TreeEditorException, handle_editor_exception)
    app.add_exception_handler(RequestValidationError, handle_invalid_request)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.add_api_route("/health", routes.health_check, methods=["GET"], response_model=HealthResponse)
    app.add_api_route("/document", routes.read_document, methods=["GET"], response_model=DocumentResponse)
    app.add_api_route("/document/value", routes.read_value, methods=["POST"], response_model=ValueResponse)
    app.add_api_route("/document/import", routes.import_document, methods=["POST"], response_model=DocumentResponse)
    app.add_api_route("/document/properties", routes.add_property, methods=["POST"], response_model=DocumentResponse)
    app.add_api_route("/document/rename", routes.rename_property, methods=["POST"], response_model=DocumentResponse)
    app.add_api_route("/document/delete", routes.delete_node, methods=["POST"], response_model=DocumentResponse)
    app.add_api_route("/document/undo", routes.undo, methods=["POST"], response_model=DocumentResponse)

    return app
