"""Structured logging for limiter, chunking and pagination operations.

This module provides telemetry hooks for the runtime layer, emitting
structured log records whose fields ride in ``extra`` for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_permit_wait(*, limiter: str, wait_s: float, in_window: int) -> None:
    """Log a caller suspended on a full window.

    Args:
        limiter: Limiter name
        wait_s: Seconds the caller will sleep before re-checking
        in_window: Permits currently held in the window
    """
    logger.debug(
        "permit_wait",
        extra={"limiter": limiter, "wait_s": wait_s, "in_window": in_window},
    )


def log_chunk_completed(
    *,
    chunk_index: int,
    chunk_size: int,
    failures: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk.

    Args:
        chunk_index: Zero-based index of the chunk
        chunk_size: Number of items in the chunk
        failures: Items in the chunk that did not succeed
        latency_ms: Wall time of the chunk in milliseconds (optional)
    """
    logger.info(
        "chunk_completed",
        extra={
            "chunk_index": chunk_index,
            "chunk_size": chunk_size,
            "failures": failures,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_item_error(*, chunk_index: int, error_type: str, error_message: str) -> None:
    """Log an action that raised instead of returning an outcome.

    Args:
        chunk_index: Zero-based index of the chunk
        error_type: Exception class name
        error_message: Exception message
    """
    logger.warning(
        "chunk_item_error",
        extra={
            "chunk_index": chunk_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_chunk_run_complete(
    *,
    total_items: int,
    chunks_used: int,
    failures: int,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a whole chunked run."""
    logger.info(
        "chunk_run_complete",
        extra={
            "total_items": total_items,
            "chunks_used": chunks_used,
            "failures": failures,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_page_fetched(*, page_index: int, rows: int, has_more: bool) -> None:
    """Log one fetched page.

    Args:
        page_index: Zero-based index of the page
        rows: Items on the page
        has_more: Whether the remote returned a continuation cursor
    """
    logger.info(
        "page_fetched",
        extra={"page_index": page_index, "rows": rows, "has_more": has_more},
    )


def log_drain_complete(*, pages: int, total_rows: int, total_latency_ms: float | None = None) -> None:
    """Log a fully drained listing."""
    logger.info(
        "drain_complete",
        extra={"pages": pages, "total_rows": total_rows, "total_latency_ms": total_latency_ms},
    )
