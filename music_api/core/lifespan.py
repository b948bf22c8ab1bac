"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, tables
in dev, cache backend, cache sweep task, DB engine dispose).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from music_api.core.config import get_settings
from music_api.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, create tables (if enabled), cache backend,
    cache sweep task. Shutdown order: sweep task cancel, cache disconnect,
    SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    logger.info("Starting %s %s", settings.app_name, settings.app_version)

    if settings.database_create_tables:
        from music_api.infrastructure.persistence.database import create_tables

        await create_tables()
        logger.info("Database tables ensured")

    from music_api.infrastructure.cache import create_cache_backend, run_cache_sweep

    cache = create_cache_backend(settings)
    await cache.connect()
    app.state.cache = cache
    app.state.cache_sweep_task = asyncio.create_task(
        run_cache_sweep(cache, settings.cache_sweep_interval_seconds)
    )

    yield

    # ---- Shutdown ----
    sweep_task = getattr(app.state, "cache_sweep_task", None)
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass
        app.state.cache_sweep_task = None

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from music_api.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
