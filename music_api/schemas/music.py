"""Music API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator

from music_api.schemas.common import CamelModel

MusicName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


class MusicRequest(CamelModel):
    """Request body for creating or replacing a music."""

    name: MusicName
    duration_seconds: int = Field(..., gt=0, description="Duration in seconds")
    genre: str | None = Field(default=None, max_length=100)
    author_id: int

    @field_validator("genre")
    @classmethod
    def blank_genre_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class AuthorSummaryResponse(CamelModel):
    """Owning author as embedded in a music response."""

    id: int
    name: str


class MusicResponse(CamelModel):
    """Music with its owning author."""

    id: int
    name: str
    duration_seconds: int
    genre: str | None = None
    author: AuthorSummaryResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None
