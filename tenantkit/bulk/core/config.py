"""Runtime configuration for the bulk executor.

Architecture:
    Settings are validated pydantic models so a bad value fails at load time,
    before any limiter or batch is built. ``load_settings`` reads the process
    environment, optionally seeded from a ``.env`` file via python-dotenv.

Design Decisions:
    - Budgets are per OperationCategory, expressed in seconds
    - Chunk sizes are per bulk action so write-heavy actions can be narrower
    - The process environment wins over the ``.env`` file
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .enums import OperationCategory
from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.workos.com"

API_KEY_ENV = "WORKOS_API_KEY"
EMAIL_TEMPLATE_ENV = "EMAIL_TEMPLATE"
BASE_URL_ENV = "WORKOS_BASE_URL"

EMAIL_PLACEHOLDER = "{n}"


class RateBudget(BaseModel):
    """Sliding-window budget: ``max_permits`` calls per ``window`` seconds."""

    max_permits: int = Field(..., ge=1)
    window: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


def default_budgets() -> dict[OperationCategory, RateBudget]:
    """Budget table matching the remote API's published limits."""
    return {
        OperationCategory.DELETE_ORG: RateBudget(max_permits=45, window=60.0),
        OperationCategory.USER_WRITE: RateBudget(max_permits=450, window=10.0),
        OperationCategory.USER_READ: RateBudget(max_permits=900, window=10.0),
        OperationCategory.ORG_OP: RateBudget(max_permits=5000, window=60.0),
    }


class ChunkSizes(BaseModel):
    """Items run concurrently per chunk, per bulk action."""

    create_organizations: int = Field(50, ge=1)
    create_users: int = Field(45, ge=1)
    delete_organizations: int = Field(45, ge=1)
    delete_users: int = Field(100, ge=1)
    delete_memberships: int = Field(100, ge=1)
    add_memberships: int = Field(50, ge=1)
    user_lookups: int = Field(100, ge=1)

    model_config = ConfigDict(frozen=True)


class BulkSettings(BaseModel):
    """Validated settings for one executor instance."""

    api_key: str = Field(..., min_length=1)
    email_template: str | None = None
    base_url: str = DEFAULT_BASE_URL
    page_size: int = Field(100, ge=1, le=100)
    timeout: float = Field(30.0, gt=0)
    budgets: dict[OperationCategory, RateBudget] = Field(default_factory=default_budgets)
    chunk_sizes: ChunkSizes = Field(default_factory=ChunkSizes)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("email_template")
    @classmethod
    def validate_email_template(cls, v: str | None) -> str | None:
        """Templates must carry the ``{n}`` placeholder."""
        if v is not None and EMAIL_PLACEHOLDER not in v:
            raise ValueError(f"email template must include {EMAIL_PLACEHOLDER} for the number")
        return v

    @field_validator("budgets")
    @classmethod
    def validate_budgets(
        cls, v: dict[OperationCategory, RateBudget]
    ) -> dict[OperationCategory, RateBudget]:
        """Fill in categories the caller left out with their defaults."""
        merged = default_budgets()
        merged.update(v)
        return merged

    @property
    def masked_api_key(self) -> str:
        return f"{self.api_key[:10]}..."

    def generate_email(self, n: int) -> str:
        """Render the email template for item ``n``.

        Raises:
            ConfigurationError: If no template is configured
        """
        if not self.email_template:
            raise ConfigurationError(f"{EMAIL_TEMPLATE_ENV} is required to create users")
        return self.email_template.replace(EMAIL_PLACEHOLDER, str(n))


def load_settings(env_file: str | Path | None = ".env", **overrides: object) -> BulkSettings:
    """Build settings from the environment.

    Args:
        env_file: Optional dotenv file; its values never override variables
            already set in the process environment
        **overrides: Explicit field values that win over the environment

    Returns:
        Validated BulkSettings

    Raises:
        ConfigurationError: If the API key is missing or a value is invalid
    """
    if env_file is not None and Path(env_file).is_file():
        load_dotenv(env_file, override=False)

    values: dict[str, object] = {}
    api_key = os.environ.get(API_KEY_ENV, "").strip()
    if api_key:
        values["api_key"] = api_key
    email_template = os.environ.get(EMAIL_TEMPLATE_ENV, "").strip()
    if email_template:
        values["email_template"] = email_template
    base_url = os.environ.get(BASE_URL_ENV, "").strip()
    if base_url:
        values["base_url"] = base_url
    values.update(overrides)

    if not values.get("api_key"):
        raise ConfigurationError(f"{API_KEY_ENV} is required")

    try:
        return BulkSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
