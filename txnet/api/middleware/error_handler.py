"""
Global exception handling middleware.

Every error leaves the API as ``{"success": false, "error": "..."}``.
Store and network failures pass their message through unchanged.
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...utils.exceptions import UnknownBusinessError
from ...utils.logging_config import request_id_var
from ..models.error import ErrorResponse

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI):
    """
    Register global exception handlers.

    Handles:
    - HTTP Exceptions (FastAPI/Starlette)
    - Validation Errors (Pydantic), reported as 400
    - Transactions against unknown businesses, reported as 404
    - Unhandled Server Errors, reported as 500
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions."""
        return _create_error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle Pydantic validation errors."""
        return _create_error_response(400, _describe_validation_errors(exc))

    @app.exception_handler(UnknownBusinessError)
    async def unknown_business_handler(request: Request, exc: UnknownBusinessError):
        """Handle transactions whose endpoints have no graph node."""
        return _create_error_response(404, str(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle catch-all unhandled exceptions."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _create_error_response(500, str(exc) or "An unexpected error occurred")

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            return await call_next(request)
        finally:
            request_id_var.reset(token)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(parts)


def _create_error_response(status_code: int, error: str) -> JSONResponse:
    """Create standardized JSON error response."""
    content = ErrorResponse(error=error).model_dump()
    return JSONResponse(status_code=status_code, content=content)
