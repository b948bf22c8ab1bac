"""Application ports (Protocols) implemented by infrastructure."""

from music_api.application.interfaces.repositories import (
    IAuthorRepository,
    IMusicRepository,
)

__all__ = ["IAuthorRepository", "IMusicRepository"]
