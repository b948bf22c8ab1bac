"""Persistence models: ORM entities and mixins."""

from music_api.infrastructure.persistence.models.author import Author
from music_api.infrastructure.persistence.models.mixins import (
    CatalogModel,
    IntegerIdMixin,
    TimestampMixin,
)
from music_api.infrastructure.persistence.models.music import Music

__all__ = [
    "Author",
    "CatalogModel",
    "IntegerIdMixin",
    "Music",
    "TimestampMixin",
]
