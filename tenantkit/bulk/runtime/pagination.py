"""Cursor pagination drained into memory under a rate limiter."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter
from typing import Protocol, TypeVar

from ..models.page import Page
from .telemetry import log_drain_complete, log_page_fetched

T = TypeVar("T")

FetchPage = Callable[[str | None], Awaitable[Page[T]]]


class Limiter(Protocol):
    async def acquire(self) -> None: ...


async def drain_all(fetch_page: FetchPage[T], limiter: Limiter) -> list[T]:
    """Fetch every page of a listing and concatenate the results.

    Each page costs one permit from ``limiter``. Pages are strictly
    sequential: page k+1 is requested only once page k's cursor is known.
    Accumulation ends when a page comes back without a cursor; the remote is
    trusted to end its cursor chain.

    Args:
        fetch_page: Async function taking the cursor (None for the first page)
        limiter: Rate limiter billed once per page

    Returns:
        All items in page order

    Raises:
        Exception: Whatever ``fetch_page`` raises; partial results are dropped
    """
    items: list[T] = []
    cursor: str | None = None
    pages = 0
    start = perf_counter()

    while True:
        await limiter.acquire()
        page = await fetch_page(cursor)
        items.extend(page.data)
        log_page_fetched(page_index=pages, rows=len(page.data), has_more=page.has_more)
        pages += 1
        if not page.has_more:
            break
        cursor = page.after

    log_drain_complete(
        pages=pages, total_rows=len(items), total_latency_ms=(perf_counter() - start) * 1000.0
    )
    return items
