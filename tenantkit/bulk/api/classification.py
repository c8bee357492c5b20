"""Failure classification for bulk writes.

The remote API has no machine-readable "this resource cannot be deleted"
code that is known to be stable, so the policy matches phrases in the error
message and, optionally, exact error codes. The matching rule lives here
alone so it can be extended without touching call sites. It is not an
exhaustive list of every non-deletable case the remote can report.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.enums import OutcomeStatus
from ..core.exceptions import RemoteError

NON_DELETABLE_PHRASES: tuple[str, ...] = (
    "cannot be deleted",
    "can not be deleted",
    "not deletable",
    "default organization",
)


@dataclass(frozen=True)
class SkipPolicy:
    """Decide whether a failed write is a skip or a hard failure."""

    phrases: tuple[str, ...] = NON_DELETABLE_PHRASES
    codes: frozenset[str] = frozenset()

    @classmethod
    def with_extra(
        cls, phrases: Iterable[str] = (), codes: Iterable[str] = ()
    ) -> SkipPolicy:
        """Default policy extended with more phrases and codes."""
        return cls(
            phrases=NON_DELETABLE_PHRASES + tuple(phrases),
            codes=frozenset(codes),
        )

    def classify(self, error: BaseException | str) -> OutcomeStatus:
        """Return SKIPPED for a known non-deletable error, FAILURE otherwise."""
        code = error.code if isinstance(error, RemoteError) else None
        if code is not None and code in self.codes:
            return OutcomeStatus.SKIPPED
        message = _message(error).lower()
        if any(phrase.lower() in message for phrase in self.phrases):
            return OutcomeStatus.SKIPPED
        return OutcomeStatus.FAILURE


def describe_error(error: BaseException | str) -> str:
    """Human-readable reason for a failed item."""
    return _message(error) or type(error).__name__


def _message(error: BaseException | str) -> str:
    if isinstance(error, str):
        return error
    if isinstance(error, RemoteError):
        return error.message
    return str(error)
