"""Bulk operation façade.

Architecture:
    BulkOperations composes the runtime primitives into user-facing bulk
    actions. Reads drain whole collections through ``drain_all``; writes fan
    out through the ChunkRunner; every remote call is billed against the
    limiter of its OperationCategory first.

Design Decisions:
    - Per-item errors become Outcomes inside each action; the runner never
      sees an exception from a well-behaved action
    - Counts are folded from the returned outcomes after the run, so nothing
      shared is mutated while items are in flight
    - Destructive actions confirm through an injected callback
    - Progress and summary lines go through an injected ``echo`` sink

Category mapping:
    - Organizations: listed/created under ORG_OP, deleted under DELETE_ORG
    - Users and memberships: read under USER_READ, written under USER_WRITE
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..clients.base import BaseDirectoryClient
from ..core.config import BulkSettings
from ..core.enums import OperationCategory, OutcomeStatus, ResourceKind
from ..core.exceptions import ConfigurationError
from ..models import BulkReport, Organization, OrganizationMembership, Outcome, User
from ..runtime.chunking import ChunkRunner
from ..runtime.limiter import LimiterRegistry
from ..runtime.pagination import drain_all
from .classification import SkipPolicy, describe_error

logger = logging.getLogger(__name__)

Confirm = Callable[[str], Awaitable[bool]]
Echo = Callable[[str], None]

READ_CATEGORIES = {
    ResourceKind.ORGANIZATION: OperationCategory.ORG_OP,
    ResourceKind.USER: OperationCategory.USER_READ,
    ResourceKind.MEMBERSHIP: OperationCategory.USER_READ,
}

CREATE_CATEGORIES = {
    ResourceKind.ORGANIZATION: OperationCategory.ORG_OP,
    ResourceKind.USER: OperationCategory.USER_WRITE,
    ResourceKind.MEMBERSHIP: OperationCategory.USER_WRITE,
}

DELETE_CATEGORIES = {
    ResourceKind.ORGANIZATION: OperationCategory.DELETE_ORG,
    ResourceKind.USER: OperationCategory.USER_WRITE,
    ResourceKind.MEMBERSHIP: OperationCategory.USER_WRITE,
}


class BulkOperations:
    """User-facing bulk actions over a directory client."""

    def __init__(
        self,
        client: BaseDirectoryClient,
        settings: BulkSettings,
        *,
        limiters: LimiterRegistry | None = None,
        runner: ChunkRunner | None = None,
        skip_policy: SkipPolicy | None = None,
        confirm: Confirm | None = None,
        echo: Echo = print,
    ) -> None:
        """Initialize the façade.

        Args:
            client: Remote directory client
            settings: Validated settings (budgets, chunk sizes, template)
            limiters: Shared limiters (default: built from settings.budgets)
            runner: Chunk runner (default: a new ChunkRunner)
            skip_policy: Failure classification for deletions
            confirm: Async callback asked before destructive actions
            echo: Sink for progress and summary lines
        """
        self._client = client
        self._settings = settings
        self._limiters = limiters or LimiterRegistry.from_budgets(settings.budgets)
        self._runner = runner or ChunkRunner()
        self._skip_policy = skip_policy or SkipPolicy()
        self._confirm = confirm
        self._echo = echo

    @property
    def limiters(self) -> LimiterRegistry:
        return self._limiters

    # Reads

    async def fetch_all(
        self,
        kind: ResourceKind,
        *,
        filters: dict[str, Any] | None = None,
    ) -> list[Any]:
        """Drain every page of ``kind`` under its read budget."""

        async def fetch_page(cursor: str | None):
            return await self._client.fetch_page(
                kind, after=cursor, limit=self._settings.page_size, filters=filters
            )

        return await drain_all(fetch_page, self._limiters.get(READ_CATEGORIES[kind]))

    async def count(self, kind: ResourceKind) -> int:
        return len(await self.fetch_all(kind))

    async def list_organizations(self) -> BulkReport:
        orgs: list[Organization] = await self.fetch_all(ResourceKind.ORGANIZATION)
        if not orgs:
            return self._finish(BulkReport.note("listed", "organizations", "No organizations found"))
        for org in orgs:
            self._echo(str(org))
        return self._finish(
            BulkReport.from_outcomes("listed", "organizations", [Outcome.success(o, o) for o in orgs])
        )

    async def list_users(self, organization_id: str | None = None) -> BulkReport:
        """List all users, or the members of one organization.

        Members are resolved to users with one rate-limited lookup each; a
        failed lookup is reported for that member only.
        """
        if organization_id is None:
            users: list[User] = await self.fetch_all(ResourceKind.USER)
            if not users:
                return self._finish(BulkReport.note("listed", "users", "No users found"))
            for user in users:
                self._echo(str(user))
            return self._finish(
                BulkReport.from_outcomes("listed", "users", [Outcome.success(u, u) for u in users])
            )

        memberships: list[OrganizationMembership] = await self.fetch_all(
            ResourceKind.MEMBERSHIP, filters={"organization_id": organization_id}
        )
        if not memberships:
            return self._finish(BulkReport.note("listed", "users", "No users found"))

        async def lookup(membership: OrganizationMembership) -> Outcome[User]:
            try:
                user = await self._call(
                    OperationCategory.USER_READ, self._client.get, ResourceKind.USER, membership.user_id
                )
            except Exception as e:
                return self._failed(membership, f"Failed to look up user {membership.user_id}", e)
            self._echo(str(user))
            return Outcome.success(membership, user)

        outcomes = await self._runner.run(
            memberships, lookup, self._settings.chunk_sizes.user_lookups
        )
        return self._finish(BulkReport.from_outcomes("listed", "users", outcomes))

    # Creates

    async def create_organizations(self, count: int) -> BulkReport:
        """Create organizations named ``Organization 1`` .. ``Organization <count>``."""
        _require_count(count)

        async def create_one(i: int) -> Outcome[Organization]:
            try:
                org = await self._create(ResourceKind.ORGANIZATION, {"name": f"Organization {i}"})
            except Exception as e:
                return self._failed(i, f'Failed to create org "{i}"', e)
            self._echo(f'Created org "{org.name}" ({org.id})')
            return Outcome.success(i, org)

        outcomes = await self._runner.run(
            range(1, count + 1), create_one, self._settings.chunk_sizes.create_organizations
        )
        return self._finish(BulkReport.from_outcomes("created", "organizations", outcomes))

    async def create_users(self, count: int, organization_id: str) -> BulkReport:
        """Create ``count`` users from the email template and add each to an organization.

        Raises:
            ConfigurationError: If no email template is configured
        """
        _require_count(count)
        if not organization_id:
            raise ValueError("organization_id is required")
        if not self._settings.email_template:
            raise ConfigurationError("An email template is required to create users")

        async def create_one(i: int) -> Outcome[User]:
            email = self._settings.generate_email(i)
            try:
                user = await self._create(
                    ResourceKind.USER,
                    {"email": email, "first_name": email.split("@")[0], "last_name": str(i)},
                )
                await self._create(
                    ResourceKind.MEMBERSHIP,
                    {"user_id": user.id, "organization_id": organization_id},
                )
            except Exception as e:
                return self._failed(i, f"Failed to create {email}", e)
            self._echo(f"Created {email} ({user.id})")
            return Outcome.success(i, user)

        outcomes = await self._runner.run(
            range(1, count + 1), create_one, self._settings.chunk_sizes.create_users
        )
        return self._finish(BulkReport.from_outcomes("created", "users", outcomes))

    async def add_user_to_all_organizations(self, user_id: str) -> BulkReport:
        """Create a membership for ``user_id`` in every organization."""
        if not user_id:
            raise ValueError("user_id is required")
        orgs: list[Organization] = await self.fetch_all(ResourceKind.ORGANIZATION)
        if not orgs:
            return self._finish(BulkReport.note("added", "memberships", "No organizations found"))

        async def add_one(org: Organization) -> Outcome[OrganizationMembership]:
            try:
                membership = await self._create(
                    ResourceKind.MEMBERSHIP, {"user_id": user_id, "organization_id": org.id}
                )
            except Exception as e:
                return self._failed(org, f'Failed to add {user_id} to org "{org.name}"', e)
            self._echo(f'Added {user_id} to org "{org.name}"')
            return Outcome.success(org, membership)

        outcomes = await self._runner.run(orgs, add_one, self._settings.chunk_sizes.add_memberships)
        return self._finish(BulkReport.from_outcomes("added", "memberships", outcomes))

    # Deletes

    async def delete_all_users(self, *, assume_yes: bool = False) -> BulkReport:
        return await self._delete_all(
            ResourceKind.USER,
            self._settings.chunk_sizes.delete_users,
            label=lambda user: user.email,
            assume_yes=assume_yes,
        )

    async def delete_all_organizations(self, *, assume_yes: bool = False) -> BulkReport:
        return await self._delete_all(
            ResourceKind.ORGANIZATION,
            self._settings.chunk_sizes.delete_organizations,
            label=lambda org: f'org "{org.name}"',
            assume_yes=assume_yes,
        )

    async def delete_all_memberships(self, *, assume_yes: bool = False) -> BulkReport:
        return await self._delete_all(
            ResourceKind.MEMBERSHIP,
            self._settings.chunk_sizes.delete_memberships,
            label=lambda membership: f"membership {membership.id}",
            assume_yes=assume_yes,
        )

    async def delete_organization(self, organization_id: str) -> BulkReport:
        """Delete one organization; remote errors propagate."""
        return await self._delete_one(ResourceKind.ORGANIZATION, organization_id, "org")

    async def delete_user(self, user_id: str) -> BulkReport:
        """Delete one user; remote errors propagate."""
        return await self._delete_one(ResourceKind.USER, user_id, "user")

    async def _delete_one(self, kind: ResourceKind, resource_id: str, label: str) -> BulkReport:
        if not resource_id:
            raise ValueError(f"{label} id is required")
        await self._call(DELETE_CATEGORIES[kind], self._client.delete, kind, resource_id)
        return self._finish(
            BulkReport(
                verb="deleted",
                noun=kind.plural,
                succeeded=1,
                message=f"Deleted {label} {resource_id}",
            )
        )

    async def _delete_all(
        self,
        kind: ResourceKind,
        chunk_size: int,
        *,
        label: Callable[[Any], str],
        assume_yes: bool,
    ) -> BulkReport:
        noun = kind.plural
        if not assume_yes and self._confirm is None:
            raise ConfigurationError(
                f"Deleting all {noun} needs a confirm callback or assume_yes=True"
            )

        resources = await self.fetch_all(kind)
        if not resources:
            return self._finish(BulkReport.note("deleted", noun, f"No {noun} found"))

        self._echo(f"Found {len(resources)} {noun} to delete.")
        if not assume_yes and not await self._confirm(
            f"Are you sure you want to delete all {noun}?"
        ):
            return self._finish(BulkReport.note("deleted", noun, "Cancelled"))

        category = DELETE_CATEGORIES[kind]

        async def delete_one(resource: Any) -> Outcome[None]:
            name = label(resource)
            try:
                await self._call(category, self._client.delete, kind, resource.id)
            except Exception as e:
                reason = describe_error(e)
                if self._skip_policy.classify(e) is OutcomeStatus.SKIPPED:
                    self._echo(f"Skipped {name}: {reason}")
                    return Outcome.skipped(resource, reason, e)
                return self._failed(resource, f"Failed to delete {name}", e)
            self._echo(f"Deleted {name}")
            return Outcome.success(resource)

        outcomes = await self._runner.run(resources, delete_one, chunk_size)
        return self._finish(BulkReport.from_outcomes("deleted", noun, outcomes))

    # Helpers

    async def _call(
        self, category: OperationCategory, fn: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        """Call ``fn(*args)`` once a permit for ``category`` is granted."""
        await self._limiters.get(category).acquire()
        return await fn(*args)

    async def _create(self, kind: ResourceKind, attributes: dict[str, Any]) -> Any:
        return await self._call(CREATE_CATEGORIES[kind], self._client.create, kind, attributes)

    def _failed(self, item: Any, prefix: str, error: Exception) -> Outcome[Any]:
        reason = describe_error(error)
        self._echo(f"{prefix}: {reason}")
        logger.warning(
            "bulk_item_failed",
            extra={"error_type": type(error).__name__, "error_message": reason},
        )
        return Outcome.failure(item, reason, error)

    def _finish(self, report: BulkReport) -> BulkReport:
        self._echo(report.summary)
        logger.info(
            "bulk_action_complete",
            extra={
                "verb": report.verb,
                "noun": report.noun,
                "succeeded": report.succeeded,
                "skipped": report.skipped,
                "failed": report.failed,
            },
        )
        return report


def _require_count(count: int) -> None:
    if count < 1:
        raise ValueError("count must be at least 1")

