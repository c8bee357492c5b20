"""Read-only checks against a live WorkOS environment."""

from __future__ import annotations

import os

import pytest

from tenantkit.bulk import BulkOperations, ResourceKind, WorkOSClient

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_TENANTKIT_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_TENANTKIT_NETWORK_TESTS=1 to run",
)


@pytest.mark.asyncio
async def test_first_page_of_organizations(live_settings):
    """Test one organizations page parses."""
    settings = live_settings
    async with WorkOSClient.from_settings(settings) as client:
        page = await client.fetch_page(ResourceKind.ORGANIZATION, limit=5)

    assert len(page.data) <= 5


@pytest.mark.asyncio
async def test_list_organizations_ends_with_one_summary(live_settings):
    """Test listing drains every page and ends with a single summary line."""
    settings = live_settings
    lines: list[str] = []
    async with WorkOSClient.from_settings(settings) as client:
        report = await BulkOperations(client, settings, echo=lines.append).list_organizations()

    assert lines[-1] == report.summary
