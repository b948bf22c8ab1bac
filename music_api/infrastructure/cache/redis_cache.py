"""Redis backend for the author-musics cache.

Values are JSON strings written with SETEX. Region clears walk the keyspace
with SCAN and drop keys in pipelined UNLINK batches. A lost connection is
retried once after reconnecting; any other Redis failure turns the call into
a miss (reads) or a no-op (writes), so the database stays the source of truth.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from music_api.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNLINK_BATCH = 500
_CONNECTION_ERRORS = (redis.ConnectionError, redis.TimeoutError)


class CacheService:
    """CacheProtocol implementation over redis.asyncio.

    connect() is called from the app lifespan. If Redis does not answer the
    initial PING the backend stays unavailable and author-with-musics reads
    go straight to the database.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = redis_client

    def _new_client(self) -> redis.Redis:
        password = self._settings.redis_password
        return redis.Redis(
            host=self._settings.redis_host,
            port=self._settings.redis_port,
            db=self._settings.redis_db,
            password=password.get_secret_value() if password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        if self._client is not None:
            return
        client = self._new_client()
        try:
            await client.ping()
        except _CONNECTION_ERRORS as e:
            logger.warning(
                "Redis at %s:%s did not answer PING (%s); author-musics cache off",
                self._settings.redis_host,
                self._settings.redis_port,
                e,
            )
            await client.aclose()
            return
        self._client = client
        logger.info(
            "Author-musics cache on Redis %s:%s/%s",
            self._settings.redis_host,
            self._settings.redis_port,
            self._settings.redis_db,
        )

    async def disconnect(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()
        logger.info("Redis connection closed")

    def is_available(self) -> bool:
        return self._client is not None

    async def _reconnect(self) -> bool:
        stale, self._client = self._client, None
        if stale is not None:
            try:
                await stale.aclose()
            except redis.RedisError:
                logger.debug("Stale Redis connection did not close cleanly")
        await self.connect()
        return self._client is not None

    async def _run(
        self,
        command: str,
        target: str,
        operation: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run operation against the client, retrying once on a dropped connection."""
        if self._client is None:
            return fallback
        try:
            return await operation(self._client)
        except _CONNECTION_ERRORS as e:
            logger.warning("Redis %s %s: connection lost (%s)", command, target, e)
            if not await self._reconnect():
                return fallback
            try:
                return await operation(self._client)
            except redis.RedisError:
                logger.exception("Redis %s %s failed after reconnect", command, target)
                return fallback
        except redis.RedisError:
            logger.exception("Redis %s %s failed", command, target)
            return fallback

    async def get(self, key: str) -> Any | None:
        raw = await self._run("GET", key, lambda client: client.get(key), None)
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        payload = json.dumps(value)

        async def setex(client: redis.Redis) -> bool:
            await client.setex(key, ttl, payload)
            return True

        stored = await self._run("SETEX", key, setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return stored

    async def delete(self, key: str) -> bool:
        async def delete(client: redis.Redis) -> bool:
            await client.delete(key)
            return True

        return await self._run("DEL", key, delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Drop every key matching pattern. Returns how many keys Redis removed."""

        async def scan_and_unlink(client: redis.Redis) -> int:
            removed = 0
            batch: list[str] = []
            async for key in client.scan_iter(match=pattern):
                batch.append(key)
                if len(batch) == _UNLINK_BATCH:
                    removed += await _unlink(client, batch)
                    batch = []
            if batch:
                removed += await _unlink(client, batch)
            return removed

        removed = await self._run("SCAN/UNLINK", pattern, scan_and_unlink, 0)
        if removed:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, removed)
        return removed


async def _unlink(client: redis.Redis, keys: list[str]) -> int:
    async with client.pipeline(transaction=False) as pipe:
        pipe.unlink(*keys)
        results = await pipe.execute()
    return sum(int(r or 0) for r in results)
