"""Unit tests for the sliding-window rate limiter.

Deterministic tests drive the limiter with a fake clock; the end-to-end
scenario runs on the real event loop clock.
"""

from __future__ import annotations

import asyncio

import pytest

from tenantkit.bulk.core import OperationCategory, RateBudget, default_budgets
from tenantkit.bulk.runtime import LimiterRegistry, SlidingWindowRateLimiter


class FakeClock:
    """Manual clock whose sleep advances time instead of waiting."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay
        await asyncio.sleep(0)


def make_limiter(max_permits: int, window: float, clock: FakeClock, margin: float = 0.01):
    return SlidingWindowRateLimiter(
        max_permits, window, margin=margin, clock=clock, sleep=clock.sleep
    )


class TestSlidingWindowRateLimiterConfig:
    """Test limiter construction."""

    def test_rejects_zero_permits(self):
        """Test a zero-permit limiter is refused instead of blocking forever."""
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(0, 1.0)

    def test_rejects_non_positive_window(self):
        """Test window must be positive."""
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(1, 0)

    def test_from_budget(self):
        """Test limiter built from a RateBudget."""
        limiter = SlidingWindowRateLimiter.from_budget(
            RateBudget(max_permits=45, window=60.0), name="delete_org"
        )
        assert limiter.max_permits == 45
        assert limiter.window == 60.0
        assert limiter.name == "delete_org"


class TestSlidingWindowRateLimiterAdmission:
    """Test admission and waiting with a fake clock."""

    @pytest.mark.asyncio
    async def test_admits_up_to_max_without_waiting(self):
        """Test permits below the limit are granted immediately."""
        clock = FakeClock()
        limiter = make_limiter(3, 1.0, clock)

        for _ in range(3):
            await limiter.acquire()

        assert clock.sleeps == []
        assert limiter.in_window == 3

    @pytest.mark.asyncio
    async def test_waits_until_oldest_permit_expires(self):
        """Test a full window delays the caller by oldest + window - now + margin."""
        clock = FakeClock()
        limiter = make_limiter(2, 1.0, clock)

        await limiter.acquire()
        clock.now = 0.4
        await limiter.acquire()
        clock.now = 0.5
        await limiter.acquire()

        assert clock.sleeps == [pytest.approx(0.51)]
        assert clock.now == pytest.approx(1.01)

    @pytest.mark.asyncio
    async def test_expired_permits_are_purged(self):
        """Test permits older than the window no longer count."""
        clock = FakeClock()
        limiter = make_limiter(2, 1.0, clock)

        await limiter.acquire()
        await limiter.acquire()
        clock.now = 1.5

        assert limiter.in_window == 0
        await limiter.acquire()
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_window_invariant_under_concurrency(self):
        """Test no trailing window ever holds more than max_permits grants."""
        clock = FakeClock()
        limiter = make_limiter(3, 1.0, clock, margin=0.0)
        granted: list[float] = []

        async def worker() -> None:
            await limiter.acquire()
            granted.append(clock.now)

        await asyncio.gather(*(worker() for _ in range(20)))

        assert len(granted) == 20
        granted.sort()
        for t in granted:
            in_window = [g for g in granted if t - 1.0 < g <= t]
            assert len(in_window) <= 3

    @pytest.mark.asyncio
    async def test_async_context_manager_acquires(self):
        """Test ``async with`` takes one permit."""
        clock = FakeClock()
        limiter = make_limiter(1, 1.0, clock)

        async with limiter:
            pass

        assert limiter.in_window == 1


class TestSlidingWindowRateLimiterRealTime:
    """End-to-end scenario on the event loop clock."""

    @pytest.mark.asyncio
    async def test_five_concurrent_callers_two_per_second(self):
        """Test 2 permits/1000ms: 2 immediate, then waves of at most 2."""
        limiter = SlidingWindowRateLimiter(2, 1.0)
        loop = asyncio.get_running_loop()
        start = loop.time()
        resolved: list[float] = []

        async def caller() -> None:
            await limiter.acquire()
            resolved.append(loop.time() - start)

        await asyncio.gather(*(caller() for _ in range(5)))

        resolved.sort()
        assert resolved[0] < 0.1
        assert resolved[1] < 0.1
        assert all(t >= 1.0 for t in resolved[2:])
        assert resolved[3] < 2.0
        assert resolved[4] >= 2.0


class TestLimiterRegistry:
    """Test per-category limiter sharing."""

    def test_same_instance_per_category(self):
        """Test all call sites of one category share one limiter."""
        registry = LimiterRegistry.from_budgets(default_budgets())

        first = registry.get(OperationCategory.USER_READ)
        second = registry.get(OperationCategory.USER_READ)

        assert first is second
        assert first.max_permits == 900
        assert first.name == "user_read"

    def test_categories_are_independent(self):
        """Test distinct categories get distinct limiters."""
        registry = LimiterRegistry.from_budgets(default_budgets())
        assert registry.get(OperationCategory.USER_READ) is not registry.get(
            OperationCategory.USER_WRITE
        )

    def test_unknown_category(self):
        """Test a category with no budget raises KeyError."""
        registry = LimiterRegistry.from_budgets(
            {OperationCategory.ORG_OP: RateBudget(max_permits=1, window=1.0)}
        )
        assert OperationCategory.ORG_OP in registry
        with pytest.raises(KeyError, match="delete_org"):
            registry.get(OperationCategory.DELETE_ORG)
