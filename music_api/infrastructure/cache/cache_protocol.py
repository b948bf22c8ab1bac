"""Cache protocol shared by the Redis and in-memory backends (DIP)."""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends. Values are JSON-serializable."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None (missing, expired or unavailable)."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True if stored."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the backend accepted the delete."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove all keys matching a glob pattern. Returns number of keys deleted."""
        ...
