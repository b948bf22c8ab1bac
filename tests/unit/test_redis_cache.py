"""CacheService with a mocked Redis client (no server needed)."""

import json
from unittest.mock import AsyncMock, MagicMock

import redis.asyncio as redis

from music_api.infrastructure.cache.redis_cache import CacheService


def _service(client=None) -> tuple[CacheService, AsyncMock]:
    client = client or AsyncMock()
    return CacheService(redis_client=client), client


async def test_get_deserializes_json() -> None:
    service, client = _service()
    client.get = AsyncMock(return_value=json.dumps({"id": 1}))
    assert await service.get("authorMusics:1") == {"id": 1}
    client.get.assert_awaited_once_with("authorMusics:1")


async def test_get_miss_returns_none() -> None:
    service, client = _service()
    client.get = AsyncMock(return_value=None)
    assert await service.get("authorMusics:1") is None


async def test_set_uses_setex_with_ttl() -> None:
    service, client = _service()
    assert await service.set("authorMusics:1", {"id": 1}, ttl=300)
    client.setex.assert_awaited_once_with("authorMusics:1", 300, json.dumps({"id": 1}))


async def test_delete() -> None:
    service, client = _service()
    assert await service.delete("authorMusics:1")
    client.delete.assert_awaited_once_with("authorMusics:1")


async def test_unavailable_service_is_a_noop() -> None:
    """Without a connection every read misses and every write reports False."""
    service = CacheService()
    assert not service.is_available()
    assert await service.get("k") is None
    assert not await service.set("k", 1)
    assert not await service.delete("k")
    assert await service.delete_pattern("k*") == 0


async def test_redis_error_on_get_is_a_miss() -> None:
    service, client = _service()
    client.get = AsyncMock(side_effect=redis.RedisError("boom"))
    assert await service.get("k") is None


async def test_delete_pattern_unlinks_scanned_keys() -> None:
    service, client = _service()

    async def scan_iter(match: str):
        assert match == "authorMusics:*"
        for key in ("authorMusics:1", "authorMusics:2"):
            yield key

    client.scan_iter = scan_iter
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipeline_ctx = MagicMock()
    pipeline_ctx.__aenter__ = AsyncMock(return_value=pipe)
    pipeline_ctx.__aexit__ = AsyncMock(return_value=False)
    client.pipeline = MagicMock(return_value=pipeline_ctx)

    assert await service.delete_pattern("authorMusics:*") == 2
    pipe.unlink.assert_called_once_with("authorMusics:1", "authorMusics:2")


async def test_disconnect_closes_client() -> None:
    service, client = _service()
    await service.disconnect()
    client.aclose.assert_awaited_once()
    assert not service.is_available()


async def test_dropped_connection_is_retried_on_a_new_client(monkeypatch) -> None:
    service, broken = _service()
    broken.get = AsyncMock(side_effect=redis.ConnectionError("reset by peer"))
    fresh = AsyncMock()
    fresh.get = AsyncMock(return_value=json.dumps([1, 2]))
    monkeypatch.setattr(service, "_new_client", lambda: fresh)

    assert await service.get("authorMusics:1") == [1, 2]
    broken.aclose.assert_awaited_once()
    fresh.ping.assert_awaited_once()
    assert service.is_available()


async def test_failed_reconnect_leaves_cache_unavailable(monkeypatch) -> None:
    service, broken = _service()
    broken.setex = AsyncMock(side_effect=redis.TimeoutError("timed out"))
    fresh = AsyncMock()
    fresh.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
    monkeypatch.setattr(service, "_new_client", lambda: fresh)

    assert not await service.set("authorMusics:1", {"id": 1})
    fresh.aclose.assert_awaited_once()
    assert not service.is_available()
    assert await service.get("authorMusics:1") is None
