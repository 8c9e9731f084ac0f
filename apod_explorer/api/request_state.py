"""Request State Accessors — read per-request context and runtime from Starlette state.

Invariants:
    - get_request_context always returns a context, creating one if middleware
      did not run (e.g. errors raised before it)
    - get_runtime reads app.state.runtime set by create_app()
"""

from fastapi import Request

from apod_explorer.core.request_context import RequestContext, new_request_context
from apod_explorer.services.runtime import ServiceRuntime


def resolve_client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    if context is None:
        context = new_request_context(resolve_client_ip(request))
        request.state.context = context
    return context


def get_runtime(request: Request) -> ServiceRuntime:
    return request.app.state.runtime
