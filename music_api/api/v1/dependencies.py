"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for services and paging parameters. Services
are built here from infrastructure implementations; routes depend only
on these dependencies, not on infra directly.

Read endpoints get services bound to a non-committing session; write
endpoints get services bound to a transactional session (commit on
success, rollback on error). The cache backend comes from
app.state.cache, set in the app lifespan.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from music_api.application.dtos.music import MusicSearchCriteria
from music_api.application.dtos.pagination import PageRequest
from music_api.application.services.author_service import AuthorService
from music_api.application.services.music_service import MusicService
from music_api.core.config import get_settings
from music_api.core.constants import DEFAULT_PAGE_SIZE
from music_api.infrastructure.cache import AuthorMusicsCache, CacheProtocol, InMemoryCache
from music_api.infrastructure.persistence.database import get_db, get_db_transactional
from music_api.infrastructure.persistence.repositories import (
    AuthorRepository,
    MusicRepository,
)

logger = logging.getLogger(__name__)


def get_cache(request: Request) -> CacheProtocol:
    """Return the cache backend from app.state (in-memory one created if lifespan did not run)."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        logger.warning("No cache backend on app.state; using in-memory cache")
        cache = InMemoryCache()
        request.app.state.cache = cache
    return cache


def get_author_musics_cache(
    cache: Annotated[CacheProtocol, Depends(get_cache)],
) -> AuthorMusicsCache:
    """Read-through cache for the author-with-musics aggregate (TTL from settings)."""
    return AuthorMusicsCache(cache, ttl=get_settings().cache_ttl_author_musics)


# ---- Services (read path: no commit) ----


async def get_author_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    author_musics_cache: Annotated[AuthorMusicsCache, Depends(get_author_musics_cache)],
) -> AuthorService:
    return AuthorService(AuthorRepository(db), author_musics_cache)


async def get_music_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    author_musics_cache: Annotated[AuthorMusicsCache, Depends(get_author_musics_cache)],
) -> MusicService:
    return MusicService(MusicRepository(db), AuthorRepository(db), author_musics_cache)


# ---- Services (write path: one transaction per request) ----
# scope="function": the transaction commits when the endpoint returns, before
# the response is sent, so an acknowledged write is already visible to readers.

WriteSession = Annotated[AsyncSession, Depends(get_db_transactional, scope="function")]


async def get_author_service_for_write(
    db: WriteSession,
    author_musics_cache: Annotated[AuthorMusicsCache, Depends(get_author_musics_cache)],
) -> AuthorService:
    return AuthorService(AuthorRepository(db), author_musics_cache)


async def get_music_service_for_write(
    db: WriteSession,
    author_musics_cache: Annotated[AuthorMusicsCache, Depends(get_author_musics_cache)],
) -> MusicService:
    return MusicService(MusicRepository(db), AuthorRepository(db), author_musics_cache)


# ---- Query parameters ----


def _page_request_dependency(allowed: dict[str, object]):
    """Build a dependency that parses page/size/sort against the given sortable properties."""

    def page_request(
        page: Annotated[int, Query(description="Zero-based page index")] = 0,
        size: Annotated[int, Query(description="Page size")] = DEFAULT_PAGE_SIZE,
        sort: Annotated[
            list[str] | None,
            Query(description="Sort as property[,asc|desc]; repeatable"),
        ] = None,
    ) -> PageRequest:
        return PageRequest.of(page=page, size=size, sort=sort, allowed=allowed)

    return page_request


get_author_page_request = _page_request_dependency(AuthorRepository.sortable_columns)
get_music_page_request = _page_request_dependency(MusicRepository.sortable_columns)


def get_music_search_criteria(
    name: Annotated[str | None, Query()] = None,
    genre: Annotated[str | None, Query()] = None,
    author_id: Annotated[int | None, Query(alias="authorId")] = None,
    min_duration: Annotated[int | None, Query(alias="minDuration")] = None,
    max_duration: Annotated[int | None, Query(alias="maxDuration")] = None,
) -> MusicSearchCriteria:
    """Collect the optional search filters; absent ones add no constraint."""
    return MusicSearchCriteria(
        name=name,
        genre=genre,
        author_id=author_id,
        min_duration=min_duration,
        max_duration=max_duration,
    )


# Type aliases for route signatures
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
AuthorWriteServiceDep = Annotated[
    AuthorService, Depends(get_author_service_for_write, scope="function")
]
MusicServiceDep = Annotated[MusicService, Depends(get_music_service)]
MusicWriteServiceDep = Annotated[
    MusicService, Depends(get_music_service_for_write, scope="function")
]
AuthorPageRequestDep = Annotated[PageRequest, Depends(get_author_page_request)]
MusicPageRequestDep = Annotated[PageRequest, Depends(get_music_page_request)]
MusicSearchCriteriaDep = Annotated[MusicSearchCriteria, Depends(get_music_search_criteria)]
