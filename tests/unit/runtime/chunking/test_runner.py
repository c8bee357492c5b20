"""Unit tests for chunked concurrent execution."""

from __future__ import annotations

import asyncio
import time

import pytest

from tenantkit.bulk.core import OutcomeStatus
from tenantkit.bulk.models import Outcome
from tenantkit.bulk.runtime.chunking import ChunkRunner


class TestChunkRunner:
    """Test ChunkRunner functionality."""

    def test_rejects_zero_chunk_size(self):
        """Test chunk_size must be positive."""
        with pytest.raises(ValueError):
            ChunkRunner(chunk_size=0)

    @pytest.mark.asyncio
    async def test_rejects_zero_chunk_size_override(self):
        """Test a per-run override is validated too."""
        runner = ChunkRunner()

        async def action(item: int) -> Outcome[int]:
            return Outcome.success(item, item)

        with pytest.raises(ValueError):
            await runner.run([1], action, chunk_size=0)

    @pytest.mark.asyncio
    async def test_empty_items(self):
        """Test empty input returns no outcomes and never calls the action."""
        calls = 0

        async def action(item: int) -> Outcome[int]:
            nonlocal calls
            calls += 1
            return Outcome.success(item)

        assert await ChunkRunner(chunk_size=3).run([], action) == []
        assert calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 4, 7, 10, 50])
    async def test_order_preserved_despite_completion_order(self, chunk_size):
        """Test the i-th outcome belongs to the i-th item even when later items finish first."""
        items = list(range(10))

        async def action(item: int) -> Outcome[int]:
            # Later items finish sooner
            await asyncio.sleep((len(items) - item) * 0.002)
            return Outcome.success(item, item * 10)

        outcomes = await ChunkRunner().run(items, action, chunk_size=chunk_size)

        assert [o.item for o in outcomes] == items
        assert [o.value for o in outcomes] == [i * 10 for i in items]

    @pytest.mark.asyncio
    async def test_completeness_when_every_action_fails(self):
        """Test failures are neither lost nor duplicated."""

        async def action(item: int) -> Outcome[int]:
            return Outcome.failure(item, f"failed {item}")

        outcomes = await ChunkRunner(chunk_size=4).run(range(11), action)

        assert len(outcomes) == 11
        assert all(o.status is OutcomeStatus.FAILURE for o in outcomes)
        assert [o.reason for o in outcomes] == [f"failed {i}" for i in range(11)]

    @pytest.mark.asyncio
    async def test_raised_exception_becomes_failure(self):
        """Test an action that raises still yields one FAILURE outcome."""

        async def action(item: int) -> Outcome[int]:
            if item == 2:
                raise RuntimeError("network timeout")
            return Outcome.success(item)

        outcomes = await ChunkRunner(chunk_size=2).run([1, 2, 3], action)

        assert [o.status for o in outcomes] == [
            OutcomeStatus.SUCCESS,
            OutcomeStatus.FAILURE,
            OutcomeStatus.SUCCESS,
        ]
        assert outcomes[1].reason == "network timeout"
        assert isinstance(outcomes[1].error, RuntimeError)

    @pytest.mark.asyncio
    async def test_concurrency_bounded_by_chunk_size(self):
        """Test no more than chunk_size actions are in flight at once."""
        in_flight = 0
        peak = 0

        async def action(item: int) -> Outcome[int]:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.005)
            in_flight -= 1
            return Outcome.success(item)

        await ChunkRunner(chunk_size=3).run(range(10), action)

        assert peak == 3

    @pytest.mark.asyncio
    async def test_chunk_is_a_barrier(self):
        """Test a slow item gates the next chunk: [1..5], size 2, item 3 takes 500ms."""
        started: dict[int, float] = {}
        start = time.perf_counter()

        async def action(item: int) -> Outcome[int]:
            started[item] = time.perf_counter() - start
            if item == 3:
                await asyncio.sleep(0.5)
            return Outcome.success(item)

        outcomes = await ChunkRunner().run([1, 2, 3, 4, 5], action, chunk_size=2)
        elapsed = time.perf_counter() - start

        assert len(outcomes) == 5
        assert 0.5 <= elapsed < 1.0
        assert started[4] < 0.1
        assert started[5] >= 0.5

    @pytest.mark.asyncio
    async def test_logs_each_chunk(self, caplog):
        """Test one chunk_completed record per chunk and one run summary."""

        async def action(item: int) -> Outcome[int]:
            return Outcome.success(item)

        with caplog.at_level("INFO", logger="tenantkit.bulk.runtime.telemetry"):
            await ChunkRunner(chunk_size=2).run(range(5), action)

        messages = [r.getMessage() for r in caplog.records]
        assert messages.count("chunk_completed") == 3
        assert messages.count("chunk_run_complete") == 1
        chunk_sizes = [r.chunk_size for r in caplog.records if r.getMessage() == "chunk_completed"]
        assert chunk_sizes == [2, 2, 1]
