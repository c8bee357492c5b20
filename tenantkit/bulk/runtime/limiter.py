"""Sliding-window rate limiting shared across concurrent callers.

Architecture:
    A SlidingWindowRateLimiter owns a deque of permit timestamps. Each
    ``acquire()`` purges timestamps that have aged out of the window, admits
    the caller if the window has room, and otherwise sleeps until the oldest
    permit expires and checks again. Callers are delayed, never rejected.

Design Decisions:
    - Rolling window instead of fixed buckets: no burst at bucket boundaries
    - Check-and-append under an asyncio.Lock; the sleep happens outside it
    - Explicit retry loop: woken callers re-check instead of assuming a free slot
    - Monotonic clock by default; clock and sleep are injectable
    - LimiterRegistry hands out one shared instance per OperationCategory
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable, Mapping
from time import monotonic

from ..core.config import RateBudget
from ..core.enums import OperationCategory
from .telemetry import log_permit_wait

DEFAULT_MARGIN = 0.01


class SlidingWindowRateLimiter:
    """Admit at most ``max_permits`` calls per rolling ``window`` seconds."""

    def __init__(
        self,
        max_permits: int,
        window: float,
        *,
        name: str = "default",
        margin: float = DEFAULT_MARGIN,
        clock: Callable[[], float] = monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize limiter.

        Args:
            max_permits: Permits per window, at least 1
            window: Window length in seconds, greater than 0
            name: Name used in log records
            margin: Extra seconds added to every computed wait so the remote
                side's window has also rolled over when the caller wakes
            clock: Monotonic time source in seconds
            sleep: Coroutine function used to suspend callers

        Raises:
            ValueError: If max_permits < 1, window <= 0 or margin < 0
        """
        if max_permits < 1:
            raise ValueError("max_permits must be at least 1")
        if window <= 0:
            raise ValueError("window must be positive")
        if margin < 0:
            raise ValueError("margin must not be negative")
        self._max_permits = max_permits
        self._window = window
        self._margin = margin
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()
        self.name = name

    @classmethod
    def from_budget(cls, budget: RateBudget, *, name: str = "default") -> SlidingWindowRateLimiter:
        return cls(budget.max_permits, budget.window, name=name)

    @property
    def max_permits(self) -> int:
        return self._max_permits

    @property
    def window(self) -> float:
        return self._window

    @property
    def in_window(self) -> int:
        """Permits granted within the current window."""
        self._purge(self._clock())
        return len(self._timestamps)

    async def acquire(self) -> None:
        """Wait for a free permit, record it and return."""
        while True:
            async with self._lock:
                now = self._clock()
                self._purge(now)
                if len(self._timestamps) < self._max_permits:
                    self._timestamps.append(now)
                    return
                wait = self._timestamps[0] + self._window - now + self._margin
                held = len(self._timestamps)
            log_permit_wait(limiter=self.name, wait_s=wait, in_window=held)
            await self._sleep(wait)

    def _purge(self, now: float) -> None:
        cutoff = now - self._window
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    async def __aenter__(self) -> SlidingWindowRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    def __repr__(self) -> str:
        return (
            f"SlidingWindowRateLimiter(name={self.name!r}, "
            f"max_permits={self._max_permits}, window={self._window})"
        )


class LimiterRegistry:
    """One shared limiter per operation category."""

    def __init__(self, limiters: Mapping[OperationCategory, SlidingWindowRateLimiter]) -> None:
        self._limiters = dict(limiters)

    @classmethod
    def from_budgets(cls, budgets: Mapping[OperationCategory, RateBudget]) -> LimiterRegistry:
        return cls(
            {
                category: SlidingWindowRateLimiter.from_budget(budget, name=category.value)
                for category, budget in budgets.items()
            }
        )

    def get(self, category: OperationCategory) -> SlidingWindowRateLimiter:
        """Return the limiter for ``category``.

        Raises:
            KeyError: If no budget was configured for the category
        """
        try:
            return self._limiters[category]
        except KeyError:
            raise KeyError(f"No rate budget configured for {category.value}") from None

    def __contains__(self, category: object) -> bool:
        return category in self._limiters
