"""High-level bulk actions."""

from .bulk import BulkOperations
from .classification import NON_DELETABLE_PHRASES, SkipPolicy, describe_error

__all__ = ["BulkOperations", "SkipPolicy", "NON_DELETABLE_PHRASES", "describe_error"]
