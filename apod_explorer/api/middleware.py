"""HTTP Middleware — request context assignment, access logging, rate limiting.

Invariants:
    - Request context (id, received_at, client_ip) exists before any route runs
    - Every response carries X-Request-ID, unhandled-exception 500s included
    - Rate limiting applies to every path and runs before routing
    - A rate-limited request never reaches a route handler
    - RateLimit-* headers on every limited response; Retry-After on 429

Design Decisions:
    - Registered in order rate limit → context so context is the outer layer
      (Starlette wraps later-added middleware around earlier ones)
    - Unhandled exceptions become the 500 envelope inside the context layer,
      not in ServerErrorMiddleware, which sits outside CORS
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apod_explorer.api.error_handlers import internal_error_response
from apod_explorer.api.request_state import (
    get_request_context,
    get_runtime,
    resolve_client_ip,
)
from apod_explorer.core.errors import RateLimitExceededError
from apod_explorer.core.rate_limit import RateLimitDecision
from apod_explorer.core.request_context import new_request_context
from apod_explorer.schemas.envelope import ApodEnvelope

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def register_middleware(app: FastAPI) -> None:
    """Register HTTP middleware on the FastAPI app (innermost first)."""
    _register_rate_limit_middleware(app)
    _register_request_context_middleware(app)


def _register_rate_limit_middleware(app: FastAPI) -> None:

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        runtime = get_runtime(request)
        context = get_request_context(request)
        decision = runtime.rate_limiter.hit(context.client_ip)
        if not decision.allowed:
            exc = RateLimitExceededError(decision.reset_after)
            logger.warning(
                f"Rate limit exceeded for {context.client_ip}",
                extra={
                    "request_id": context.request_id,
                    "client_ip": context.client_ip,
                    "path": request.url.path,
                    "error_type": exc.error_type.value,
                },
            )
            envelope = ApodEnvelope.failed(
                exc.to_error_info(), context.request_id,
            )
            response = JSONResponse(
                status_code=exc.http_status, content=envelope.to_response(),
            )
            response.headers["Retry-After"] = str(exc.retry_after_seconds)
        else:
            response = await call_next(request)
        _apply_rate_limit_headers(response, decision)
        return response


def _register_request_context_middleware(app: FastAPI) -> None:

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        start = time.perf_counter()
        trust_forwarded = get_runtime(request).settings.trust_forwarded_for
        context = new_request_context(
            resolve_client_ip(request, trust_forwarded),
        )
        request.state.context = context

        try:
            response = await call_next(request)
        except Exception as exc:
            response = internal_error_response(request, exc)

        response.headers[REQUEST_ID_HEADER] = context.request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": context.request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "client_ip": context.client_ip,
                "user_agent": request.headers.get("user-agent"),
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response


def _apply_rate_limit_headers(response, decision: RateLimitDecision) -> None:
    response.headers["RateLimit-Limit"] = str(decision.limit)
    response.headers["RateLimit-Remaining"] = str(decision.remaining)
    response.headers["RateLimit-Reset"] = str(decision.reset_after)
