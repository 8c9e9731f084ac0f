"""Client Rate Limiter — per-IP fixed-window quota backed by the limits library.

Invariants:
    - A window starts at the first hit for a key and lasts window_seconds
    - The (max_requests + 1)-th hit inside one window is rejected
    - Rejected hits still count, so hammering does not reopen the window early
    - Counters live in a MemoryStorage owned by this instance; process restart resets them

Design Decisions:
    - limits FixedWindowRateLimiter + MemoryStorage (the engine under slowapi),
      wrapped so the middleware gets one decision with header values
    - Instance-scoped, owned by ServiceRuntime, not a module-level singleton
"""

import math
import time
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # whole seconds until the window resets


class ClientRateLimiter:
    """Counts hits per client key inside fixed windows."""

    def __init__(self, max_requests: int = 100, window_seconds: int = 15 * 60):
        self.item = RateLimitItemPerSecond(max_requests, window_seconds)
        self.storage = MemoryStorage()
        self._limiter = FixedWindowRateLimiter(self.storage)

    @property
    def max_requests(self) -> int:
        return self.item.amount

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for key and decide whether it may proceed."""
        allowed = self._limiter.hit(self.item, key)
        stats = self._limiter.get_window_stats(self.item, key)
        return RateLimitDecision(
            allowed=allowed,
            limit=self.item.amount,
            remaining=stats.remaining,
            reset_after=max(math.ceil(stats.reset_time - time.time()), 0),
        )

    def reset(self) -> None:
        self.storage.reset()
