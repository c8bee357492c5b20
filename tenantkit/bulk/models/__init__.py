"""Data models for directory resources and batch results.

Architecture:
    Remote resources are immutable Pydantic v2 models (frozen=True) that
    ignore fields the executor does not use. Batch results are frozen
    dataclasses produced by the runtime layer.

Model Categories:
    - Resources: Organization, User, OrganizationMembership
    - Pagination: Page
    - Results: Outcome, BulkReport
"""

from .membership import OrganizationMembership
from .organization import Organization
from .outcome import Outcome
from .page import Page
from .report import BulkReport
from .user import User

__all__ = [
    "Organization",
    "User",
    "OrganizationMembership",
    "Page",
    "Outcome",
    "BulkReport",
]
