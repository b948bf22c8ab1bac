"""Application services: author and music use cases."""

from music_api.application.services.author_service import AuthorService
from music_api.application.services.music_service import MusicService

__all__ = ["AuthorService", "MusicService"]
