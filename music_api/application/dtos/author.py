"""DTOs for author use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class AuthorCommand:
    """Validated input for creating or updating an author."""

    name: str
    email: str


@dataclass(frozen=True)
class AuthorResult:
    """Author read-model (result of get, create, update, list)."""

    id: int
    name: str
    email: str
    music_count: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class MusicSummary:
    """Music entry inside the author-with-musics aggregate."""

    id: int
    name: str
    duration_seconds: int
    genre: str | None


@dataclass(frozen=True)
class AuthorWithMusicsResult:
    """Author joined to all of its musics; the value held by the author-musics cache."""

    id: int
    name: str
    email: str
    musics: list[MusicSummary] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
