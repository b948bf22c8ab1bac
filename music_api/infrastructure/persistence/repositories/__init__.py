"""Persistence repositories. Re-exports for dependency injection."""

from music_api.infrastructure.persistence.repositories.author_repo import AuthorRepository
from music_api.infrastructure.persistence.repositories.base import BaseRepository
from music_api.infrastructure.persistence.repositories.music_repo import MusicRepository

__all__ = [
    "AuthorRepository",
    "BaseRepository",
    "MusicRepository",
]
