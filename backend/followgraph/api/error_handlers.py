"""Error Handlers — global exception handlers for the follow-graph API.

Invariants:
    - FollowGraphError → failure envelope with error code, category, severity
    - RequestValidationError → 400 with field-level error details
    - HTTPException (unknown route, wrong method) → failure envelope, same status
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, HTTP, catch-all
    - Extracted from main.py to keep the app module a plain wiring file
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from followgraph.api.responses import UserMessages
from followgraph.core.errors import FollowGraphError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register follow-graph domain/infrastructure error handler."""

    @app.exception_handler(FollowGraphError)
    async def follow_graph_error_handler(request: Request, exc: FollowGraphError):
        """Handle all follow-graph domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"FollowGraphError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
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
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing/HTTP error handler."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Wrap framework HTTP errors in the failure envelope."""
        message = (
            UserMessages.NOT_FOUND
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else str(exc.detail)
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": exc.status_code,
                "message": message,
                "success": False,
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": "An unexpected error occurred",
                "success": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "status": status.HTTP_400_BAD_REQUEST,
        "message": "Invalid request data",
        "success": False,
        "error": {
            "code": "VALIDATION_ERROR",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
