"""WorkOS REST directory client.

This module maps ResourceKind onto the WorkOS organizations and user
management endpoints and parses responses into the package models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from ..core.config import BulkSettings
from ..core.enums import ResourceKind
from ..models import Organization, OrganizationMembership, Page, User
from .base import BaseDirectoryClient
from .http import HTTPClient

ENDPOINTS = {
    ResourceKind.ORGANIZATION: "/organizations",
    ResourceKind.USER: "/user_management/users",
    ResourceKind.MEMBERSHIP: "/user_management/organization_memberships",
}

MODELS: dict[ResourceKind, type[BaseModel]] = {
    ResourceKind.ORGANIZATION: Organization,
    ResourceKind.USER: User,
    ResourceKind.MEMBERSHIP: OrganizationMembership,
}


class WorkOSClient(BaseDirectoryClient):
    """Directory client backed by the WorkOS REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.workos.com",
        timeout: float = 30.0,
        http: HTTPClient | None = None,
    ) -> None:
        self._http = http or HTTPClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    @classmethod
    def from_settings(cls, settings: BulkSettings) -> WorkOSClient:
        return cls(settings.api_key, base_url=settings.base_url, timeout=settings.timeout)

    async def fetch_page(
        self,
        kind: ResourceKind,
        *,
        after: str | None = None,
        limit: int = 100,
        filters: dict[str, Any] | None = None,
    ) -> Page[Any]:
        params: dict[str, Any] = {"limit": limit, "after": after}
        if filters:
            params.update(filters)
        payload = await self._http.get(ENDPOINTS[kind], params=params) or {}
        model = MODELS[kind]
        list_metadata = payload.get("list_metadata") or {}
        return Page(
            data=[model.model_validate(row) for row in payload.get("data") or []],
            after=list_metadata.get("after") or None,
        )

    async def create(self, kind: ResourceKind, attributes: dict[str, Any]) -> Any:
        payload = await self._http.post(ENDPOINTS[kind], json_body=attributes)
        return MODELS[kind].model_validate(payload)

    async def get(self, kind: ResourceKind, resource_id: str) -> Any:
        payload = await self._http.get(f"{ENDPOINTS[kind]}/{resource_id}")
        return MODELS[kind].model_validate(payload)

    async def delete(self, kind: ResourceKind, resource_id: str) -> None:
        await self._http.delete(f"{ENDPOINTS[kind]}/{resource_id}")

    async def close(self) -> None:
        await self._http.close()
