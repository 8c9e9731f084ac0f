"""API test fixtures — app factory with a mocked NASA upstream.

Invariants:
    - Every test gets a fresh app: own counters, own rate-limit table
    - The upstream is an httpx.MockTransport; no test touches the network
    - upstream.reply / upstream.raise_error configure the next responses

Design Decisions:
    - ASGITransport does not run lifespan; runtime is built eagerly by create_app
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from apod_explorer.config import Settings
from apod_explorer.main import create_app


class FakeUpstream:
    """Configurable stand-in for api.nasa.gov."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._status = 200
        self._json = {"title": "Default", "url": "https://apod.nasa.gov/default.jpg"}
        self._error: type[httpx.HTTPError] | None = None

    def reply(self, status: int, json=None) -> None:
        self._status, self._json, self._error = status, json, None

    def raise_error(self, error_type: type[httpx.HTTPError]) -> None:
        self._error = error_type

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error("simulated failure", request=request)
        return httpx.Response(self._status, json=self._json)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return Settings(
        nasa_api_key="test-fake-key",
        nasa_api_url="https://apod.test/planetary/apod",
        environment="production",
        cors_origin="https://client.test",
    )


@pytest.fixture
def app(settings, upstream):
    return create_app(settings, transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
async def client(app):
    """HTTP client speaking ASGI to the app under test."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    await app.state.runtime.close()
