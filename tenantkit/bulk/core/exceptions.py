"""Custom exception hierarchy."""

from __future__ import annotations


class BulkError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(BulkError):
    """Required configuration is missing or invalid.

    Raised before any batch work starts (absent API key, an email template
    without the ``{n}`` placeholder, a destructive action with no way to
    confirm it).
    """

    pass


class RemoteError(BulkError):
    """Error returned by the remote directory API.

    Carries the remote-supplied message verbatim plus the HTTP status and the
    machine-readable error code when the remote sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class RateLimitError(RemoteError):
    """Remote rate limit exceeded."""

    def __init__(self, message: str, retry_after: float = 60.0, code: str | None = None) -> None:
        super().__init__(message, status_code=429, code=code)
        self.retry_after = retry_after
