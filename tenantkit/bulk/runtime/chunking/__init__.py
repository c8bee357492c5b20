"""Chunked concurrent execution.

The chunking layer runs one async action per item with bounded concurrency:
items are split into fixed-size chunks, each chunk fans out concurrently and
fans back in before the next one starts.
"""

from __future__ import annotations

from .runner import DEFAULT_CHUNK_SIZE, Action, ChunkRunner

__all__ = [
    "Action",
    "ChunkRunner",
    "DEFAULT_CHUNK_SIZE",
]
