"""tenantkit-bulk - Rate-limited bulk operations against a multi-tenant directory API."""

from .api import BulkOperations, SkipPolicy
from .clients import BaseDirectoryClient, HTTPClient, WorkOSClient
from .core import (
    BulkError,
    BulkSettings,
    ChunkSizes,
    ConfigurationError,
    OperationCategory,
    OutcomeStatus,
    RateBudget,
    RateLimitError,
    RemoteError,
    ResourceKind,
    load_settings,
)
from .models import (
    BulkReport,
    Organization,
    OrganizationMembership,
    Outcome,
    Page,
    User,
)
from .runtime import ChunkRunner, LimiterRegistry, SlidingWindowRateLimiter, drain_all

__version__ = "0.1.0"

__all__ = [
    # Core enums
    "ResourceKind",
    "OperationCategory",
    "OutcomeStatus",
    # Configuration
    "BulkSettings",
    "ChunkSizes",
    "RateBudget",
    "load_settings",
    # Runtime
    "SlidingWindowRateLimiter",
    "LimiterRegistry",
    "ChunkRunner",
    "drain_all",
    # Clients
    "BaseDirectoryClient",
    "HTTPClient",
    "WorkOSClient",
    # Facade
    "BulkOperations",
    "SkipPolicy",
    # Models
    "Organization",
    "User",
    "OrganizationMembership",
    "Page",
    "Outcome",
    "BulkReport",
    # Exceptions
    "BulkError",
    "ConfigurationError",
    "RemoteError",
    "RateLimitError",
]
