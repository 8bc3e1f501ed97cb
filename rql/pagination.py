"""Filter options, result container and offset/limit paging."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class RQLModel(BaseModel):
    """Base model for rql value types."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class FilterOptions(RQLModel):
    """Pagination window applied after filtering.

    ``limit=0`` means no limit; ``offset`` past the end yields no items.
    """

    limit: int = Field(0, ge=0)
    offset: int = Field(0, ge=0)


class Result(RQLModel, Generic[T]):
    """Filtered (then paginated) items plus the pre-pagination match count."""

    items: list[T] = Field(default_factory=list)
    count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _count_covers_items(self) -> Result[T]:
        if self.count < len(self.items):
            raise ValueError(
                f"count ({self.count}) must be >= number of items ({len(self.items)})"
            )
        return self


def paginate(items: Sequence[T], options: FilterOptions | None = None) -> list[T]:
    """Apply ``offset`` then ``limit`` to ``items``."""
    opts = options or FilterOptions()
    if opts.offset >= len(items):
        return []
    window = list(items[opts.offset :])
    if opts.limit > 0:
        window = window[: opts.limit]
    return window


__all__ = ["FilterOptions", "RQLModel", "Result", "paginate"]
