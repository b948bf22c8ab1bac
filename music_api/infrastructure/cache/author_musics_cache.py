"""Read-through cache for the author-with-musics aggregate.

Entries live under ``authorMusics:<id>`` with a fixed TTL. Writes evict
explicitly; the whole region is also cleared periodically by the sweep
task (see sweeper.py).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from music_api.application.dtos import AuthorWithMusicsResult, MusicSummary
from music_api.core.constants import CACHE_TTL_AUTHOR_MUSICS
from music_api.infrastructure.cache.cache_protocol import CacheProtocol
from music_api.infrastructure.cache.keys import (
    author_musics_key,
    author_musics_pattern,
)

logger = logging.getLogger(__name__)


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _str_to_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def aggregate_to_dict(result: AuthorWithMusicsResult) -> dict[str, Any]:
    """Serialize aggregate to a JSON-safe dict."""
    return {
        "id": result.id,
        "name": result.name,
        "email": result.email,
        "created_at": _dt_to_str(result.created_at),
        "updated_at": _dt_to_str(result.updated_at),
        "musics": [
            {
                "id": m.id,
                "name": m.name,
                "duration_seconds": m.duration_seconds,
                "genre": m.genre,
            }
            for m in result.musics
        ],
    }


def aggregate_from_dict(data: dict[str, Any]) -> AuthorWithMusicsResult:
    """Rebuild aggregate from a cached dict."""
    return AuthorWithMusicsResult(
        id=data["id"],
        name=data["name"],
        email=data["email"],
        musics=[
            MusicSummary(
                id=m["id"],
                name=m["name"],
                duration_seconds=m["duration_seconds"],
                genre=m.get("genre"),
            )
            for m in data.get("musics", [])
        ],
        created_at=_str_to_dt(data.get("created_at")),
        updated_at=_str_to_dt(data.get("updated_at")),
    )


class AuthorMusicsCache:
    """Read-through cache of AuthorWithMusicsResult keyed by author id."""

    def __init__(self, cache: CacheProtocol, ttl: int = CACHE_TTL_AUTHOR_MUSICS) -> None:
        self.cache = cache
        self.ttl = ttl

    async def get_or_load(
        self,
        author_id: int,
        loader: Callable[[int], Awaitable[AuthorWithMusicsResult]],
    ) -> AuthorWithMusicsResult:
        """Return the cached aggregate or load, cache and return it.

        Exceptions from the loader (e.g. ResourceNotFoundException) propagate
        and nothing is cached.
        """
        key = author_musics_key(author_id)
        cached = await self.cache.get(key)
        if cached is not None:
            return aggregate_from_dict(cached)
        result = await loader(author_id)
        await self.cache.set(key, aggregate_to_dict(result), ttl=self.ttl)
        return result

    async def evict(self, author_id: int) -> None:
        """Drop the cached aggregate of one author."""
        await self.cache.delete(author_musics_key(author_id))

    async def clear(self) -> int:
        """Drop every cached aggregate. Returns number of entries removed."""
        removed = await self.cache.delete_pattern(author_musics_pattern())
        logger.debug("Cleared author-musics region (%s entries)", removed)
        return removed
