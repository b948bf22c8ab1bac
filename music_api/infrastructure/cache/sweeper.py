"""Periodic full clear of the author-musics cache region.

Runs as a background asyncio task owned by the application lifespan.
"""

from __future__ import annotations

import asyncio
import logging

from music_api.infrastructure.cache.author_musics_cache import AuthorMusicsCache
from music_api.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)


async def sweep_author_musics(cache: CacheProtocol) -> int:
    """Clear the whole author-musics region once. Returns entries removed."""
    removed = await AuthorMusicsCache(cache).clear()
    logger.info("Author-musics cache sweep removed %s entries", removed)
    return removed


async def run_cache_sweep(cache: CacheProtocol, interval: float) -> None:
    """Sleep ``interval`` seconds, sweep, repeat until cancelled.

    A failed sweep is logged and the loop keeps going.
    """
    logger.info("Cache sweep task started (interval: %ss)", interval)
    try:
        while True:
            await asyncio.sleep(interval)
            try:
                await sweep_author_musics(cache)
            except Exception:
                logger.exception("Author-musics cache sweep failed")
    except asyncio.CancelledError:
        logger.info("Cache sweep task stopped")
        raise
