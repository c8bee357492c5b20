"""Cursor page data model."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a cursor-paginated listing.

    ``after`` is the opaque cursor for the next page; ``None`` means the
    listing is exhausted.
    """

    data: list[T] = Field(default_factory=list)
    after: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return self.after is not None
