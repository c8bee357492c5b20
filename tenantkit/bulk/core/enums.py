"""Core enumerations shared across the bulk executor.

Architecture:
    These enums give call sites a fixed vocabulary for the three things the
    executor routes on: which remote collection an operation touches, which
    rate-limit budget it is billed against, and how a single item ended.

Design Decisions:
    - String enums: values double as log fields and config keys
    - Category is independent of kind: one collection can be read under one
      budget and written under another

Key Types:
    - ResourceKind: Remote collections (organizations, users, memberships)
    - OperationCategory: Rate-limit budget names
    - OutcomeStatus: Per-item result tag
"""

from enum import Enum


class ResourceKind(str, Enum):
    """Remote collections the directory client can page, create and delete."""

    ORGANIZATION = "organization"
    USER = "user"
    MEMBERSHIP = "membership"

    @property
    def plural(self) -> str:
        """Human-readable plural used in progress and summary lines."""
        return _PLURALS[self]


_PLURALS = {
    ResourceKind.ORGANIZATION: "organizations",
    ResourceKind.USER: "users",
    ResourceKind.MEMBERSHIP: "memberships",
}


class OperationCategory(str, Enum):
    """Rate-limit budget a remote call is billed against.

    Architecture:
        Every call site names its category; the LimiterRegistry hands out one
        shared limiter per category so concurrent callers share one window.
    """

    DELETE_ORG = "delete_org"
    USER_WRITE = "user_write"
    USER_READ = "user_read"
    ORG_OP = "org_op"


class OutcomeStatus(str, Enum):
    """How a single batch item ended."""

    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"
