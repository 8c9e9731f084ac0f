"""Service Stats — request counter and /health snapshot computation.

Invariants:
    - RequestCounter increments are serialized by a lock
    - build_health_snapshot is pure: all inputs passed in (memory sampled by the caller)
    - The API key itself never appears in the snapshot, only DEMO_KEY/CUSTOM_KEY
"""

import threading
from datetime import datetime

SERVICE_NAME = "NASA APOD API"


class RequestCounter:
    """Process-lifetime count of APOD requests."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def build_health_snapshot(
    *,
    now: datetime,
    started_at: datetime,
    request_count: int,
    uses_demo_key: bool,
    environment: str,
    version: str,
    request_id: str,
    memory: dict,
) -> dict:
    """Compute the /health payload. Pure, no IO."""
    return {
        "status": "OK",
        "timestamp": now.isoformat(),
        "service": SERVICE_NAME,
        "version": version,
        "environment": environment,
        "apiKey": "DEMO_KEY" if uses_demo_key else "CUSTOM_KEY",
        "requestCount": request_count,
        "uptime": round((now - started_at).total_seconds(), 3),
        "memory": memory,
        "requestId": request_id,
    }
