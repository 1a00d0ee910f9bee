"""Error Handlers: global exception handlers for the UserPosts API.

Invariants:
    - UserPostsError -> its own http_status and to_response() envelope, message verbatim
    - RequestValidationError -> 400 with field-level details (unparsable bodies, bad JSON)
    - Exception (catch-all) -> 500 INTERNAL_ERROR; exception text only in development

Design Decisions:
    - Three-layer handler: domain (UserPostsError), validation (FastAPI), catch-all (Exception)
    - 4xx domain errors log at WARNING: they are caller mistakes, not service faults
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from userposts.config import get_settings
from userposts.core.errors import ErrorMessages, ErrorSeverity, UserPostsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserPostsError)
    async def domain_error_handler(request: Request, exc: UserPostsError):
        """Handle all UserPosts domain/infrastructure errors."""
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        logger.log(
            level,
            f"[{exc.http_status}] {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "resource_id": exc.context.resource_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors raised by FastAPI itself."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details outside development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_internal_error_response(
                exc, include_details=get_settings().is_development,
            ),
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    return {
        "status": "error",
        "error": {
            "code": "VALIDATION_ERROR",
            "message": ", ".join(d["message"] for d in details) or ErrorMessages.INVALID_INPUT,
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
            "details": details,
        },
    }


def build_internal_error_response(exc: Exception, include_details: bool) -> dict:
    """Generic 500 envelope; exception text only when include_details."""
    error = {
        "code": "INTERNAL_ERROR",
        "message": ErrorMessages.INTERNAL_ERROR,
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    }
    if include_details:
        error["details"] = f"{type(exc).__name__}: {exc}"
    return {"status": "error", "error": error}
