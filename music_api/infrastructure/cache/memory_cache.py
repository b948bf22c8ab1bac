"""Process-local cache backend on cachetools.

Same contract as CacheService (JSON values, TTL in seconds, glob pattern
deletes) for single-process deployments and tests. Entries live in a
TLRUCache so each set() can carry its own TTL; the timer is injectable so
expiry can be tested without sleeping.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import time
from collections.abc import Callable
from typing import Any

from cachetools import TLRUCache

from music_api.core.constants import MEMORY_CACHE_MAXSIZE

logger = logging.getLogger(__name__)


def _entry_expiry(_key: str, entry: tuple[str, int], now: float) -> float:
    """Time-to-use for a stored (payload, ttl) pair."""
    return now + entry[1]


class InMemoryCache:
    """TLRUCache-backed cache. Values are stored JSON-encoded so callers get copies, not shared objects."""

    def __init__(
        self,
        maxsize: int = MEMORY_CACHE_MAXSIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: TLRUCache[str, tuple[str, int]] = TLRUCache(
            maxsize=maxsize, ttu=_entry_expiry, timer=clock
        )

    async def connect(self) -> None:
        logger.info("In-memory cache ready (maxsize: %s)", self._entries.maxsize)

    async def disconnect(self) -> None:
        self._entries.clear()

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(entry[0])

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self._entries[key] = (json.dumps(value), ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        self._entries.pop(key, None)
        logger.debug("Cache DELETE: %s", key)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        self._entries.expire()
        matching = [k for k in list(self._entries) if fnmatch.fnmatchcase(k, pattern)]
        for key in matching:
            self._entries.pop(key, None)
        if matching:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(matching))
        return len(matching)

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
