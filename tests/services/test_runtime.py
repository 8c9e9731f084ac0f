"""Service Runtime — wiring from settings and the shared APOD handler."""

from apod_explorer.config import Settings
from apod_explorer.core.rate_limit import ClientRateLimiter
from apod_explorer.services.runtime import build_runtime


async def test_runtime_builds_handler_once():
    runtime = build_runtime(Settings(nasa_api_key="k"))

    assert runtime.apod_handler is runtime.apod_handler
    assert runtime.apod_handler.client is runtime.apod_client
    assert runtime.apod_handler.counter is runtime.request_counter
    await runtime.close()


async def test_runtime_rate_limiter_follows_settings():
    runtime = build_runtime(Settings(
        nasa_api_key="k", rate_limit_max_requests=5, rate_limit_window_seconds=60,
    ))

    assert isinstance(runtime.rate_limiter, ClientRateLimiter)
    assert runtime.rate_limiter.max_requests == 5
    assert runtime.rate_limiter.item.get_expiry() == 60
    await runtime.close()
