"""Base directory client abstract class.

Architecture:
    BaseDirectoryClient is the seam between the bulk executor and the remote
    multi-tenant API. The executor only ever pages, creates, reads and
    deletes resources by ResourceKind; everything about transport,
    authentication and payload shapes lives behind this interface.

Design Decisions:
    - Kind-generic methods: one code path in the façade serves every collection
    - Errors surface as RemoteError so failure classification sees code + message
    - Async context manager: ensures proper resource cleanup
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..core.enums import ResourceKind
from ..models.page import Page


class BaseDirectoryClient(ABC):
    """Abstract base class for remote directory clients."""

    @abstractmethod
    async def fetch_page(
        self,
        kind: ResourceKind,
        *,
        after: str | None = None,
        limit: int = 100,
        filters: dict[str, Any] | None = None,
    ) -> Page[Any]:
        """Fetch one page of ``kind`` starting at cursor ``after``."""
        pass

    @abstractmethod
    async def create(self, kind: ResourceKind, attributes: dict[str, Any]) -> Any:
        """Create one resource and return its model."""
        pass

    @abstractmethod
    async def get(self, kind: ResourceKind, resource_id: str) -> Any:
        """Fetch one resource by id."""
        pass

    @abstractmethod
    async def delete(self, kind: ResourceKind, resource_id: str) -> None:
        """Delete one resource by id."""
        pass

    async def close(self) -> None:
        """Close connections and cleanup resources. Override if needed."""
        pass

    async def __aenter__(self) -> BaseDirectoryClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
