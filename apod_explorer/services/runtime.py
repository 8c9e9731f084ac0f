"""Service Runtime — lifecycle-scoped container for the app's shared state.

Invariants:
    - One ServiceRuntime per FastAPI app, stored on app.state.runtime
    - Request counter and rate-limit table live here, never in module globals
    - The APOD handler is built once and shared by all requests
    - close() releases the upstream HTTP client; safe to call once at shutdown
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx

from apod_explorer.config import Settings
from apod_explorer.core.rate_limit import ClientRateLimiter
from apod_explorer.core.service_stats import RequestCounter
from apod_explorer.infrastructure.apod_client import ApodClient
from apod_explorer.services.apod_request_handler import ApodRequestHandler


@dataclass
class ServiceRuntime:
    settings: Settings
    apod_client: ApodClient
    rate_limiter: ClientRateLimiter
    request_counter: RequestCounter = field(default_factory=RequestCounter)
    started_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    apod_handler: ApodRequestHandler = field(init=False)

    def __post_init__(self) -> None:
        self.apod_handler = ApodRequestHandler(
            self.apod_client, self.request_counter,
        )

    async def close(self) -> None:
        await self.apod_client.close()


def build_runtime(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceRuntime:
    """Wire the runtime from settings; transport overrides the network in tests."""
    return ServiceRuntime(
        settings=settings,
        apod_client=ApodClient(
            api_key=settings.nasa_api_key,
            base_url=settings.nasa_api_url,
            timeout_seconds=settings.nasa_timeout_seconds,
            transport=transport,
        ),
        rate_limiter=ClientRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
    )
