"""Per-item outcome records produced by batch runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..core.enums import OutcomeStatus

R = TypeVar("R")


@dataclass(frozen=True)
class Outcome(Generic[R]):
    """Result of running one action over one batch item.

    Attributes:
        status: SUCCESS, FAILURE or SKIPPED
        item: The input item this outcome belongs to
        value: Action result (SUCCESS only)
        reason: Human-readable failure or skip reason
        error: Originating exception, when there was one
    """

    status: OutcomeStatus
    item: Any = None
    value: R | None = None
    reason: str | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, item: Any, value: R | None = None) -> Outcome[R]:
        return cls(status=OutcomeStatus.SUCCESS, item=item, value=value)

    @classmethod
    def failure(cls, item: Any, reason: str, error: BaseException | None = None) -> Outcome[R]:
        return cls(status=OutcomeStatus.FAILURE, item=item, reason=reason, error=error)

    @classmethod
    def skipped(cls, item: Any, reason: str, error: BaseException | None = None) -> Outcome[R]:
        return cls(status=OutcomeStatus.SKIPPED, item=item, reason=reason, error=error)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS
