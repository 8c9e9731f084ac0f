"""Error Classification — maps an upstream failure to the client-facing taxonomy.

Invariants:
    - Pure and deterministic: same failure always yields the same ClassifiedError
    - Transport timeout → TIMEOUT_ERROR/408, connect failure → NETWORK_ERROR/503
    - Upstream 429/400/403 map to fixed categories; >=500 → NASA_SERVER_ERROR/503
    - Remaining upstream statuses → NASA_API_ERROR with the upstream status echoed
    - Anything unrecognized → UNKNOWN_ERROR/500
    - Upstream-provided message used only for VALIDATION_ERROR and NASA_API_ERROR
"""

from typing import Any, NamedTuple

from apod_explorer.core.errors import ErrorType
from apod_explorer.core.upstream_result import (
    TransportErrorCode,
    TransportFailure,
    UpstreamStatusFailure,
)

TIMEOUT_MESSAGE = "Request timeout - NASA API took too long to respond."
NETWORK_MESSAGE = "Unable to connect to NASA API. Please try again later."
RATE_LIMIT_MESSAGE = "NASA API rate limit exceeded. Please try again later."
BAD_REQUEST_MESSAGE = "Invalid request to NASA API."
AUTH_MESSAGE = "Invalid API key or access denied."
SERVER_UNAVAILABLE_MESSAGE = (
    "NASA API is currently unavailable. Please try again later."
)
UNKNOWN_MESSAGE = "An unexpected error occurred while fetching APOD data."


class ClassifiedError(NamedTuple):
    error_type: ErrorType
    status_code: int
    user_message: str


def classify_failure(failure: Any) -> ClassifiedError:
    """Classify a failed fetch. Pure, no IO."""
    if isinstance(failure, TransportFailure):
        return _classify_transport(failure)
    if isinstance(failure, UpstreamStatusFailure):
        return _classify_status(failure)
    return ClassifiedError(ErrorType.UNKNOWN, 500, UNKNOWN_MESSAGE)


def _classify_transport(failure: TransportFailure) -> ClassifiedError:
    if failure.code == TransportErrorCode.TIMEOUT:
        return ClassifiedError(ErrorType.TIMEOUT, 408, TIMEOUT_MESSAGE)
    if failure.code == TransportErrorCode.CONNECT:
        return ClassifiedError(ErrorType.NETWORK, 503, NETWORK_MESSAGE)
    return ClassifiedError(ErrorType.UNKNOWN, 500, UNKNOWN_MESSAGE)


def _classify_status(failure: UpstreamStatusFailure) -> ClassifiedError:
    status = failure.status_code
    if status == 429:
        return ClassifiedError(ErrorType.RATE_LIMIT, 429, RATE_LIMIT_MESSAGE)
    if status == 400:
        message = extract_upstream_message(failure.body) or BAD_REQUEST_MESSAGE
        return ClassifiedError(ErrorType.VALIDATION, 400, message)
    if status == 403:
        return ClassifiedError(ErrorType.AUTH, 403, AUTH_MESSAGE)
    if status >= 500:
        return ClassifiedError(
            ErrorType.NASA_SERVER, 503, SERVER_UNAVAILABLE_MESSAGE,
        )
    if status >= 400:
        message = (
            extract_upstream_message(failure.body)
            or f"NASA API error: {status}"
        )
        return ClassifiedError(ErrorType.NASA_API, status, message)
    # 1xx/3xx surfaced as failures are not part of the upstream contract
    return ClassifiedError(ErrorType.UNKNOWN, 500, UNKNOWN_MESSAGE)


def extract_upstream_message(body: Any) -> str | None:
    """First non-empty message among error_message, msg, error.message."""
    if not isinstance(body, dict):
        return None
    nested = body.get("error")
    candidates = [
        body.get("error_message"),
        body.get("msg"),
        nested.get("message") if isinstance(nested, dict) else None,
    ]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate
    return None
