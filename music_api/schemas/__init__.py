"""API request/response schemas (pydantic). JSON is camelCase on the wire."""

from music_api.schemas.author import (
    AuthorRequest,
    AuthorResponse,
    AuthorWithMusicsResponse,
    MusicSummaryResponse,
)
from music_api.schemas.common import ApiResponse, CamelModel, PageResponse
from music_api.schemas.health import HealthResponse, ReadinessResponse
from music_api.schemas.music import AuthorSummaryResponse, MusicRequest, MusicResponse

__all__ = [
    "ApiResponse",
    "AuthorRequest",
    "AuthorResponse",
    "AuthorSummaryResponse",
    "AuthorWithMusicsResponse",
    "CamelModel",
    "HealthResponse",
    "MusicRequest",
    "MusicResponse",
    "MusicSummaryResponse",
    "PageResponse",
    "ReadinessResponse",
]
