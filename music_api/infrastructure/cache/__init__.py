"""Cache infrastructure: Redis and in-memory backends, author-musics read-through cache and sweep."""

from music_api.core.config import Settings
from music_api.infrastructure.cache.author_musics_cache import AuthorMusicsCache
from music_api.infrastructure.cache.cache_protocol import CacheProtocol
from music_api.infrastructure.cache.keys import (
    author_musics_key,
    author_musics_pattern,
)
from music_api.infrastructure.cache.memory_cache import InMemoryCache
from music_api.infrastructure.cache.redis_cache import CacheService
from music_api.infrastructure.cache.sweeper import run_cache_sweep, sweep_author_musics


def create_cache_backend(settings: Settings) -> CacheService | InMemoryCache:
    """Build the cache backend selected by settings.cache_backend (not yet connected)."""
    if settings.cache_backend == "memory":
        return InMemoryCache()
    return CacheService(settings=settings)


__all__ = [
    "AuthorMusicsCache",
    "CacheProtocol",
    "CacheService",
    "InMemoryCache",
    "author_musics_key",
    "author_musics_pattern",
    "create_cache_backend",
    "run_cache_sweep",
    "sweep_author_musics",
]
