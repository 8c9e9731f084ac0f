"""APOD Routes — today's picture and picture-by-date.

Invariants:
    - Thin: all logic delegated to ApodRequestHandler
    - /api/apod and /api/apod/ both serve today's picture without a redirect
    - The date path segment is passed through raw; validation happens in the handler
    - Response status always matches the envelope's error.status (200 on success)
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from apod_explorer.api.request_state import get_request_context, get_runtime
from apod_explorer.services.runtime import ServiceRuntime

router = APIRouter(prefix="/api/apod", tags=["apod"])


async def _handle(
    request: Request, runtime: ServiceRuntime, date: str | None,
) -> JSONResponse:
    status_code, envelope = await runtime.apod_handler.handle(
        get_request_context(request),
        method=request.method,
        path=request.url.path,
        date=date,
    )
    return JSONResponse(status_code=status_code, content=envelope.to_response())


@router.get("")
@router.get("/", include_in_schema=False)
async def get_today_apod(
    request: Request, runtime: ServiceRuntime = Depends(get_runtime),
):
    """Astronomy Picture of the Day for today."""
    return await _handle(request, runtime, None)


@router.get("/{date}")
async def get_apod_by_date(
    date: str, request: Request, runtime: ServiceRuntime = Depends(get_runtime),
):
    """Astronomy Picture of the Day for a YYYY-MM-DD date."""
    return await _handle(request, runtime, date)
