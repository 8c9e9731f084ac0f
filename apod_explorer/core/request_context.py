"""Request Context — per-request identity assigned on arrival.

Invariants:
    - request_id is non-empty and shaped req_<epoch-millis>_<9 base-36 chars>
    - Context is created once per inbound request and never shared
"""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timezone

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    received_at: datetime
    client_ip: str


def generate_request_id(now: datetime) -> str:
    millis = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(_SUFFIX_LENGTH))
    return f"req_{millis}_{suffix}"


def new_request_context(client_ip: str, now: datetime | None = None) -> RequestContext:
    now = now or datetime.now(timezone.utc)
    return RequestContext(
        request_id=generate_request_id(now),
        received_at=now,
        client_ip=client_ip,
    )
