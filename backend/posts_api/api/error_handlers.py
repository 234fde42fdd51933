"""Error Handlers: global exception handlers for the Posts API.

Invariants:
    - PostsApiError → its own status code and single-key JSON body
    - RequestValidationError (malformed JSON, etc.) → 400 with field-level details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PostsApiError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from posts_api.core import messages
from posts_api.core.errors import PostsApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_posts_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_posts_api_error_handler(app: FastAPI) -> None:
    """Register domain/storage error handler."""

    @app.exception_handler(PostsApiError)
    async def posts_api_error_handler(request: Request, exc: PostsApiError):
        """Handle all Posts API errors."""
        level = (
            logging.WARNING
            if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
            else logging.ERROR
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "post_id": exc.context.post_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors raised before a handler runs."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": messages.UNEXPECTED_ERROR},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "errorMessage": messages.INVALID_REQUEST,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
