"""Runtime orchestration components."""

from .chunking import ChunkRunner
from .limiter import LimiterRegistry, SlidingWindowRateLimiter
from .pagination import drain_all

__all__ = [
    "ChunkRunner",
    "LimiterRegistry",
    "SlidingWindowRateLimiter",
    "drain_all",
]
