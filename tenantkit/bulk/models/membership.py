"""Organization membership data model."""

from pydantic import BaseModel, ConfigDict, Field


class OrganizationMembership(BaseModel):
    """Link between a user and an organization."""

    id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    organization_id: str = Field(..., min_length=1)
    status: str | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    def __str__(self) -> str:
        return f"membership {self.id}"
