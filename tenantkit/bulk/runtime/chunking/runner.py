"""Chunked fan-out/fan-in execution of per-item async actions.

This module provides the ChunkRunner class that runs an action over a
sequence of items in fixed-size chunks: every item of a chunk runs
concurrently, chunks run one after another, and one Outcome comes back per
item in input order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from time import perf_counter
from typing import Any, TypeVar

from ...core.enums import OutcomeStatus
from ...models.outcome import Outcome
from ..telemetry import log_chunk_completed, log_chunk_item_error, log_chunk_run_complete

T = TypeVar("T")

Action = Callable[[T], Awaitable[Outcome[Any]]]

DEFAULT_CHUNK_SIZE = 50


class ChunkRunner:
    """Runs per-item actions in concurrent, sequential chunks.

    Chunking bounds how many requests are in flight at once; the rate limiter
    bounds how many start per window. A chunk is a barrier: chunk k+1 starts
    only after every item of chunk k has resolved.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """Initialize chunk runner.

        Args:
            chunk_size: Default number of items run concurrently per chunk

        Raises:
            ValueError: If chunk_size < 1
        """
        self._chunk_size = _validate_chunk_size(chunk_size)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    async def run(
        self,
        items: Sequence[T],
        action: Action[T],
        chunk_size: int | None = None,
    ) -> list[Outcome[Any]]:
        """Run ``action`` over ``items`` chunk by chunk.

        Args:
            items: Batch items
            action: Async function returning one Outcome for one item
            chunk_size: Override for this run (default: the runner's)

        Returns:
            Exactly ``len(items)`` outcomes; the i-th belongs to ``items[i]``
        """
        size = self._chunk_size if chunk_size is None else _validate_chunk_size(chunk_size)
        items = list(items)
        if not items:
            return []

        outcomes: list[Outcome[Any]] = []
        failures = 0
        chunks_used = 0
        run_start = perf_counter()

        for chunk_index, offset in enumerate(range(0, len(items), size)):
            chunk = items[offset : offset + size]
            chunk_start = perf_counter()
            results = await asyncio.gather(
                *(action(item) for item in chunk), return_exceptions=True
            )
            chunk_outcomes = [
                self._to_outcome(item, result, chunk_index) for item, result in zip(chunk, results)
            ]
            chunk_failures = sum(1 for o in chunk_outcomes if o.status is not OutcomeStatus.SUCCESS)
            failures += chunk_failures
            chunks_used += 1
            outcomes.extend(chunk_outcomes)

            log_chunk_completed(
                chunk_index=chunk_index,
                chunk_size=len(chunk),
                failures=chunk_failures,
                latency_ms=(perf_counter() - chunk_start) * 1000.0,
            )

        log_chunk_run_complete(
            total_items=len(items),
            chunks_used=chunks_used,
            failures=failures,
            total_latency_ms=(perf_counter() - run_start) * 1000.0,
        )
        return outcomes

    def _to_outcome(self, item: Any, result: Any, chunk_index: int) -> Outcome[Any]:
        """Turn one gather result into an Outcome.

        Actions are expected to return Outcomes; an exception that escapes
        one still yields a FAILURE so the run stays complete.
        """
        if isinstance(result, Outcome):
            return result
        if isinstance(result, Exception):
            log_chunk_item_error(
                chunk_index=chunk_index,
                error_type=type(result).__name__,
                error_message=str(result),
            )
            return Outcome.failure(item, str(result) or type(result).__name__, result)
        if isinstance(result, BaseException):
            raise result
        return Outcome.success(item, result)


def _validate_chunk_size(chunk_size: int) -> int:
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    return chunk_size
