"""Core components."""

from .config import (
    BulkSettings,
    ChunkSizes,
    RateBudget,
    default_budgets,
    load_settings,
)
from .enums import OperationCategory, OutcomeStatus, ResourceKind
from .exceptions import (
    BulkError,
    ConfigurationError,
    RateLimitError,
    RemoteError,
)

__all__ = [
    "ResourceKind",
    "OperationCategory",
    "OutcomeStatus",
    "BulkSettings",
    "ChunkSizes",
    "RateBudget",
    "default_budgets",
    "load_settings",
    "BulkError",
    "ConfigurationError",
    "RemoteError",
    "RateLimitError",
]
