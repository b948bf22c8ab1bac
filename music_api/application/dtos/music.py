"""DTOs for music use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MusicCommand:
    """Validated input for creating or updating a music."""

    name: str
    duration_seconds: int
    author_id: int
    genre: str | None = None


@dataclass(frozen=True)
class AuthorSummary:
    """Owning author as shown on a music."""

    id: int
    name: str


@dataclass(frozen=True)
class MusicResult:
    """Music read-model with its owning author summary."""

    id: int
    name: str
    duration_seconds: int
    genre: str | None
    author: AuthorSummary
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class MusicSearchCriteria:
    """Optional music search filters; a None (or blank) field adds no constraint."""

    name: str | None = None
    genre: str | None = None
    author_id: int | None = None
    min_duration: int | None = None
    max_duration: int | None = None
