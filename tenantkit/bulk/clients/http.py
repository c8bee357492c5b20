"""HTTP client helper."""

from __future__ import annotations

import json
from typing import Any

import aiohttp

from ..core.exceptions import RateLimitError, RemoteError

DEFAULT_RETRY_AFTER = 60.0


class HTTPClient:
    """Async HTTP client wrapper.

    Non-2xx responses raise RemoteError built from the remote's JSON error
    body; 429 raises RateLimitError. A 2xx body that is not JSON also raises
    RemoteError. Nothing is retried here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            RateLimitError: On HTTP 429
            RemoteError: On any other non-2xx status, or a 2xx body that is not JSON
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        async with self.session.request(
            method, self._url(url), params=params or None, json=json_body
        ) as response:
            text = await response.text()
            if response.status >= 400:
                raise _error_from_response(response, text)
            if not text:
                return None
            try:
                return json.loads(text)
            except ValueError:
                raise RemoteError(text, status_code=response.status) from None

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET request."""
        return await self.request("GET", url, params=params)

    async def post(self, url: str, json_body: dict[str, Any] | None = None) -> Any:
        """POST request."""
        return await self.request("POST", url, json_body=json_body)

    async def delete(self, url: str) -> Any:
        """DELETE request."""
        return await self.request("DELETE", url)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def _error_from_response(response: Any, text: str) -> RemoteError:
    """Build the exception for a failed response from its body."""
    body: Any = None
    if text:
        try:
            body = json.loads(text)
        except ValueError:
            body = None

    message: str | None = None
    code: str | None = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error_description") or body.get("error")
        code = body.get("code") or (body.get("error") if body.get("error_description") else None)
    if not message:
        message = text or f"HTTP {response.status}"

    if response.status == 429:
        return RateLimitError(message, retry_after=_retry_after(response), code=code)
    return RemoteError(message, status_code=response.status, code=code)


def _retry_after(response: Any) -> float:
    headers = getattr(response, "headers", None) or {}
    value = headers.get("Retry-After")
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return float(value)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER
