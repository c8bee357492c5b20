"""Organization data model."""

from pydantic import BaseModel, ConfigDict, Field


class Organization(BaseModel):
    """A tenant organization."""

    id: str = Field(..., min_length=1)
    name: str

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
