"""Pagination DTOs: page request (page, size, sort) and page result.

Page numbers are zero-based. Sort orders come from query values in the
form "property" or "property,asc|desc" and are checked against a
per-entity whitelist of sortable properties.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from music_api.core.constants import DEFAULT_PAGE_SIZE, DEFAULT_SORT, MAX_PAGE_SIZE
from music_api.domain.exceptions import ValidationException

T = TypeVar("T")
R = TypeVar("R")

_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class SortOrder:
    """One sort criterion: API property name and direction."""

    name: str
    direction: str = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class PageRequest:
    """Requested page (zero-based), page size and sort orders."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = field(default=(SortOrder(DEFAULT_SORT),))

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def of(
        cls,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        sort: Iterable[str] | None = None,
        allowed: Mapping[str, object] | None = None,
    ) -> PageRequest:
        """Build a page request from raw query values.

        Args:
            page: Zero-based page number.
            size: Page size (1..MAX_PAGE_SIZE).
            sort: Values like "name" or "durationSeconds,desc"; empty means default sort.
            allowed: Sortable property names; unknown names raise ValidationException.

        Raises:
            ValidationException: If page/size are out of range or a sort value is invalid.
        """
        if page < 0:
            raise ValidationException("Page index must not be less than zero", field="page")
        if size < 1 or size > MAX_PAGE_SIZE:
            raise ValidationException(
                f"Page size must be between 1 and {MAX_PAGE_SIZE}", field="size"
            )
        orders = tuple(parse_sort(value, allowed) for value in (sort or []) if value.strip())
        return cls(page=page, size=size, sort=orders or (SortOrder(DEFAULT_SORT),))


def parse_sort(value: str, allowed: Mapping[str, object] | None = None) -> SortOrder:
    """Parse "property[,direction]" into a SortOrder.

    Raises:
        ValidationException: On unknown property or direction.
    """
    prop, _, direction = value.partition(",")
    prop = prop.strip()
    direction = (direction.strip() or "asc").lower()
    if direction not in _DIRECTIONS:
        raise ValidationException(
            f"Invalid sort direction '{direction}' (use asc or desc)", field="sort"
        )
    if allowed is not None and prop not in allowed:
        raise ValidationException(
            f"Invalid sort property '{prop}' (allowed: {', '.join(sorted(allowed))})",
            field="sort",
        )
    return SortOrder(prop, direction)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus totals."""

    content: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        """Return a page with the same totals and content converted by fn."""
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )

    @classmethod
    def of(cls, content: list[T], request: PageRequest, total_elements: int) -> Page[T]:
        return cls(
            content=content,
            page=request.page,
            size=request.size,
            total_elements=total_elements,
        )
