"""Author API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from music_api.schemas.common import CamelModel

AuthorName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=2, max_length=255)
]


class AuthorRequest(CamelModel):
    """Request body for creating or replacing an author."""

    name: AuthorName = Field(..., description="Author name (2-255 characters)")
    email: EmailStr = Field(..., description="Unique contact email")


class AuthorResponse(CamelModel):
    """Author with the number of musics it owns."""

    id: int
    name: str
    email: str
    music_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MusicSummaryResponse(CamelModel):
    """Music entry inside the author-with-musics response."""

    id: int
    name: str
    duration_seconds: int
    genre: str | None = None


class AuthorWithMusicsResponse(CamelModel):
    """Author joined to all of its musics."""

    id: int
    name: str
    email: str
    musics: list[MusicSummaryResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
