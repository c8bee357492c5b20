"""User data model."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A directory user."""

    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    first_name: str | None = None
    last_name: str | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    def __str__(self) -> str:
        return f"{self.email} ({self.id})"
