"""Error Handlers — global exception handlers producing the response envelope.

Invariants:
    - ApodExplorerError → envelope with its type, status and field
    - Unmatched route or method (404/405) → NOT_FOUND_ERROR with status 404
    - RequestValidationError → VALIDATION_ERROR with the first offending field
    - Exception (catch-all) → INTERNAL_SERVER_ERROR; detail and stack only in development
    - Every envelope echoes the request id from the request context

Design Decisions:
    - Four-layer handler: domain, routing, validation, catch-all
    - Extracted from main.py to keep the app factory short
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apod_explorer.api.request_state import get_request_context, get_runtime
from apod_explorer.core.errors import (
    ApodExplorerError,
    ErrorType,
    InternalServerError,
    RouteNotFoundError,
)
from apod_explorer.schemas.envelope import ApodEnvelope, ErrorInfo

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _envelope_response(
    request: Request, error: ErrorInfo, headers: dict | None = None,
) -> JSONResponse:
    context = get_request_context(request)
    envelope = ApodEnvelope.failed(error, context.request_id)
    return JSONResponse(
        status_code=error.status, content=envelope.to_response(),
        headers=headers,
    )


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register APOD Explorer domain error handler."""

    @app.exception_handler(ApodExplorerError)
    async def domain_error_handler(request: Request, exc: ApodExplorerError):
        logger.warning(
            f"ApodExplorerError: {exc.message}",
            extra={"error_type": exc.error_type.value, "path": request.url.path},
        )
        return _envelope_response(request, exc.to_error_info())


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return _envelope_response(
                request, RouteNotFoundError(request.url.path).to_error_info(),
            )
        error_type = (
            ErrorType.VALIDATION if exc.status_code < 500
            else ErrorType.INTERNAL_SERVER
        )
        error = ApodExplorerError(
            str(exc.detail), error_type, exc.status_code,
        ).to_error_info()
        return _envelope_response(request, error, getattr(exc, "headers", None))


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _envelope_response(
            request, _build_validation_error(exc).to_error_info(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all envelope; detail only leaves the process in development.

    Also used by the request context middleware, which sits inside CORS.
    """
    context = get_request_context(request)
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
        extra={
            "request_id": context.request_id,
            "method": request.method,
            "path": request.url.path,
        },
    )
    if get_runtime(request).settings.is_development:
        error = InternalServerError(str(exc) or type(exc).__name__)
        info = error.to_error_info()
        info.stack = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__),
        )
    else:
        info = InternalServerError().to_error_info()
    return _envelope_response(request, info)


def _build_validation_error(exc: RequestValidationError) -> ApodExplorerError:
    """Collapse Pydantic errors into one field-level validation error."""
    errors = exc.errors()
    if not errors:
        return ApodExplorerError(
            "Invalid request data", ErrorType.VALIDATION, 400,
        )
    first = errors[0]
    field = ".".join(
        str(part) for part in first.get("loc", ())
        if part not in ("path", "query", "body")
    )
    return ApodExplorerError(
        first.get("msg", "Invalid request data"), ErrorType.VALIDATION, 400,
        field or None,
    )
