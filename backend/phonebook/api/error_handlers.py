"""Error Handlers — global exception handlers for the phonebook API.

Invariants:
    - PhonebookError → {status: "error", data: ...} with the error's HTTP status
    - RequestValidationError → 400 with a field → message map
    - Starlette HTTPException (unknown path, method not allowed) → its status, enveloped
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Layered handlers: domain (PhonebookError), validation (Pydantic),
      routing (HTTPException), catch-all (Exception)
    - Kept out of main.py so tests and main share one registration function
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from phonebook.core.errors import PhonebookError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_phonebook_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_phonebook_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PhonebookError)
    async def phonebook_error_handler(request: Request, exc: PhonebookError):
        """Handle all phonebook domain/infrastructure errors."""
        log = logger.error if exc.severity in (
            ErrorSeverity.ERROR, ErrorSeverity.CRITICAL,
        ) else logger.warning
        log(
            f"PhonebookError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "entry_id": exc.context.entry_id,
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
        """Handle request parsing errors (query params, JSON body)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        logger.warning(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "data": exc.detail},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "data": "An unexpected error occurred"},
        )


def _field_name(loc: tuple) -> str:
    """Last meaningful segment of a pydantic error location."""
    parts = [
        str(p) for p in loc
        if not isinstance(p, int) and p not in ("body", "query", "path")
    ]
    if parts:
        return parts[-1]
    return str(loc[0]) if loc else "request"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build {status, data: {field: message}} (first message per field)."""
    errors: dict[str, str] = {}
    for e in exc.errors():
        errors.setdefault(_field_name(tuple(e["loc"])), e["msg"])
    return {"status": "error", "data": errors}
