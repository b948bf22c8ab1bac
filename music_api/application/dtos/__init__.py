"""Application DTOs (no ORM dependency)."""

from music_api.application.dtos.author import (
    AuthorCommand,
    AuthorResult,
    AuthorWithMusicsResult,
    MusicSummary,
)
from music_api.application.dtos.music import (
    AuthorSummary,
    MusicCommand,
    MusicResult,
    MusicSearchCriteria,
)
from music_api.application.dtos.pagination import Page, PageRequest, SortOrder

__all__ = [
    "AuthorCommand",
    "AuthorResult",
    "AuthorSummary",
    "AuthorWithMusicsResult",
    "MusicCommand",
    "MusicResult",
    "MusicSearchCriteria",
    "MusicSummary",
    "Page",
    "PageRequest",
    "SortOrder",
]
