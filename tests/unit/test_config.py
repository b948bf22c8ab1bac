"""Settings validation (database URL driver, cache backend, durations)."""

import pytest
from pydantic import ValidationError

from music_api.core.config import Settings

SQLITE_URL = "sqlite+aiosqlite:///./dev.db"


def test_defaults_for_cache() -> None:
    settings = Settings(database_url=SQLITE_URL, _env_file=None)
    assert settings.cache_ttl_author_musics == 300
    assert settings.cache_sweep_interval_seconds == 3600
    assert settings.is_sqlite


def test_postgres_url_is_accepted() -> None:
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@db:5432/music", _env_file=None
    )
    assert not settings.is_sqlite


def test_sync_driver_is_rejected() -> None:
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        Settings(database_url="postgresql://u:p@db/music", _env_file=None)


def test_unknown_cache_backend_is_rejected() -> None:
    with pytest.raises(ValidationError, match="cache_backend"):
        Settings(database_url=SQLITE_URL, cache_backend="memcached", _env_file=None)


@pytest.mark.parametrize(
    "field", ["cache_ttl_author_musics", "cache_sweep_interval_seconds"]
)
def test_non_positive_durations_are_rejected(field: str) -> None:
    with pytest.raises(ValidationError, match=field):
        Settings(database_url=SQLITE_URL, _env_file=None, **{field: 0})
