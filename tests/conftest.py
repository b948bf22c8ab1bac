"""Pytest configuration and fixtures for the music catalog API.

Environment is set before music_api is imported: a temporary SQLite file
(aiosqlite), the in-memory cache backend and no rate limiting. HTTP tests
use music_api.main:app through httpx ASGITransport (lifespan does not run,
so the cache is placed on app.state by the memory_cache fixture).
"""

import os
import tempfile
from pathlib import Path

_TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="music-api-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_CREATE_TABLES"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from music_api.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from music_api.infrastructure.cache import InMemoryCache  # noqa: E402
from music_api.infrastructure.persistence import database  # noqa: E402
from music_api.main import app  # noqa: E402


@pytest.fixture
async def database_tables():
    """Create all tables before the test; drop them and dispose the engine after."""
    await database.create_tables()
    yield
    await database.drop_tables()
    # Pooled connections belong to this test's event loop
    await database.dispose_engine()


@pytest.fixture
def memory_cache() -> InMemoryCache:
    """Fresh in-memory cache installed on app.state for one test."""
    cache = InMemoryCache()
    app.state.cache = cache
    return cache


@pytest.fixture
async def client(database_tables, memory_cache) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with empty tables and cache."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(database_tables) -> AsyncSession:
    """Database session for repository tests. Rolls back after the test."""
    session_factory = database.AsyncSessionLocal
    assert session_factory is not None
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def create_author(client: AsyncClient):
    """Factory: POST an author and return the response data."""

    async def _create(name: str = "Alice", email: str = "alice@example.com") -> dict:
        response = await client.post("/api/v1/authors", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_music(client: AsyncClient):
    """Factory: POST a music and return the response data."""

    async def _create(
        author_id: int,
        name: str = "Song",
        duration_seconds: int = 200,
        genre: str | None = "Rock",
    ) -> dict:
        response = await client.post(
            "/api/v1/musics",
            json={
                "name": name,
                "durationSeconds": duration_seconds,
                "genre": genre,
                "authorId": author_id,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
