"""Aggregate report for one bulk action invocation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.enums import OutcomeStatus
from .outcome import Outcome


@dataclass(frozen=True)
class BulkReport:
    """Counts for one bulk action, folded from its outcomes.

    The counts are computed once, after the run, from the returned outcomes;
    nothing mutates them while items are in flight.

    Attributes:
        verb: Past-tense verb for the summary ("created", "deleted", ...)
        noun: Plural resource noun ("organizations", "users", ...)
        succeeded: Items that succeeded
        skipped: Items classified as not applicable (e.g. non-deletable)
        failed: Items that failed
        outcomes: Per-item outcomes in input order
        message: Replaces the tally line when set ("Cancelled", "No users found")
    """

    verb: str
    noun: str
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: tuple[Outcome, ...] = field(default_factory=tuple)
    message: str | None = None

    @classmethod
    def from_outcomes(cls, verb: str, noun: str, outcomes: Sequence[Outcome]) -> BulkReport:
        counts = {status: 0 for status in OutcomeStatus}
        for outcome in outcomes:
            counts[outcome.status] += 1
        return cls(
            verb=verb,
            noun=noun,
            succeeded=counts[OutcomeStatus.SUCCESS],
            skipped=counts[OutcomeStatus.SKIPPED],
            failed=counts[OutcomeStatus.FAILURE],
            outcomes=tuple(outcomes),
        )

    @classmethod
    def note(cls, verb: str, noun: str, message: str) -> BulkReport:
        """Report for an action that ended without running a batch."""
        return cls(verb=verb, noun=noun, message=message)

    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + self.failed

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 if any item failed; skips do not count."""
        return 1 if self.failed else 0

    @property
    def summary(self) -> str:
        """Final tally line; zero skipped/failed counts are omitted."""
        if self.message is not None:
            return self.message
        parts = [f"Done - {self.verb} {self.succeeded} {self.noun}"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failed:
            parts.append(f"{self.failed} failed")
        return ", ".join(parts)
