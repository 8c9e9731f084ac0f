"""Health Check — process status snapshot for uptime monitors.

Invariants:
    - GET /health always returns 200 while the process is up
    - Never calls the upstream API
    - Reports key mode (DEMO_KEY/CUSTOM_KEY), never the key itself
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status

from apod_explorer.api.request_state import get_request_context, get_runtime
from apod_explorer.config import APP_VERSION
from apod_explorer.core.service_stats import build_health_snapshot
from apod_explorer.infrastructure.process_metrics import memory_usage
from apod_explorer.services.runtime import ServiceRuntime

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(
    request: Request, runtime: ServiceRuntime = Depends(get_runtime),
):
    """Liveness check with request counter, uptime and memory."""
    return build_health_snapshot(
        now=datetime.now(timezone.utc),
        started_at=runtime.started_at,
        request_count=runtime.request_counter.value,
        uses_demo_key=runtime.settings.uses_demo_key,
        environment=runtime.settings.environment,
        version=APP_VERSION,
        request_id=get_request_context(request).request_id,
        memory=memory_usage(),
    )
