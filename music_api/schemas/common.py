"""Shared API schemas: camelCase base model, success envelope and page payload."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from music_api.application.dtos.pagination import Page
from music_api.core.constants import MESSAGE_SUCCESS
from music_api.shared.utils.datetime import utc_now

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope returned by every data endpoint."""

    data: T | None = None
    message: str = MESSAGE_SUCCESS
    timestamp: datetime = Field(default_factory=utc_now)


class PageResponse(CamelModel, Generic[T]):
    """One page of results with paging metadata."""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page[Any], convert: Callable[[Any], T]) -> PageResponse[T]:
        """Build from an application Page, converting each item with convert."""
        return cls(
            content=[convert(item) for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.first,
            last=page.last,
        )
