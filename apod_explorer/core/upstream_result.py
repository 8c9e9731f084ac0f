"""Upstream Result — explicit outcome of one APOD fetch attempt.

Invariants:
    - Exactly one of ApodFetched, TransportFailure, UpstreamStatusFailure per attempt
    - Frozen dataclasses: results are values, never mutated after creation
    - TransportFailure never carries an HTTP status; UpstreamStatusFailure always does
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class TransportErrorCode(str, Enum):
    """Transport-level failure kinds, independent of the HTTP library."""
    TIMEOUT = "timeout"
    CONNECT = "connect"
    INVALID_RESPONSE = "invalid_response"
    OTHER = "other"


@dataclass(frozen=True)
class ApodFetched:
    """Upstream answered 2xx with a decodable JSON body."""
    data: dict[str, Any]


@dataclass(frozen=True)
class TransportFailure:
    """No usable HTTP response: timeout, connect failure, undecodable body."""
    code: TransportErrorCode
    detail: str = ""


@dataclass(frozen=True)
class UpstreamStatusFailure:
    """Upstream answered with a non-2xx status."""
    status_code: int
    body: Any = None


UpstreamFailure = Union[TransportFailure, UpstreamStatusFailure]
UpstreamResult = Union[ApodFetched, TransportFailure, UpstreamStatusFailure]
