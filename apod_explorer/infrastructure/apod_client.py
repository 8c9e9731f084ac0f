"""NASA APOD Client — wraps httpx.AsyncClient with timeout and result mapping.

Invariants:
    - Exactly one GET per fetch_apod() call, never retried
    - Timeouts → TransportFailure(TIMEOUT); DNS/refused → TransportFailure(CONNECT)
    - Non-2xx → UpstreamStatusFailure carrying status and body
    - Never raises for httpx failures: every outcome is an UpstreamResult
    - api_key never written to logs

Design Decisions:
    - Wrapper over raw client: isolates transport concerns from the request handler
    - transport injectable so tests substitute httpx.MockTransport
"""

import logging

import httpx

from apod_explorer.core.upstream_result import (
    ApodFetched,
    TransportErrorCode,
    TransportFailure,
    UpstreamResult,
    UpstreamStatusFailure,
)

logger = logging.getLogger(__name__)

USER_AGENT = "NASA-Explorer/1.0"


class ApodClient:
    """Single-attempt client for the APOD endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.nasa.gov/planetary/apod",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._api_key = api_key
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    async def fetch_apod(self, date: str | None = None) -> UpstreamResult:
        """Fetch the APOD record for date (today when None)."""
        params = {"api_key": self._api_key}
        if date:
            params["date"] = date

        try:
            response = await self.client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            return TransportFailure(TransportErrorCode.TIMEOUT, _describe(e))
        except httpx.ConnectError as e:
            return TransportFailure(TransportErrorCode.CONNECT, _describe(e))
        except httpx.HTTPError as e:
            logger.warning(f"Unexpected transport error from APOD API: {_describe(e)}")
            return TransportFailure(TransportErrorCode.OTHER, _describe(e))

        if not response.is_success:
            return UpstreamStatusFailure(
                status_code=response.status_code, body=_decode_body(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            return TransportFailure(
                TransportErrorCode.INVALID_RESPONSE,
                f"undecodable APOD body: {e}",
            )
        if not isinstance(data, dict):
            return TransportFailure(
                TransportErrorCode.INVALID_RESPONSE,
                f"expected JSON object, got {type(data).__name__}",
            )
        return ApodFetched(data)

    async def close(self) -> None:
        await self.client.aclose()


def _decode_body(response: httpx.Response):
    """JSON body when decodable, else raw text (None when empty)."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _describe(e: httpx.HTTPError) -> str:
    # exception text may embed the request URL, which carries api_key
    return type(e).__name__
