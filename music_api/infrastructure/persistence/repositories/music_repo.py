"""Music repository. Returns application DTOs; search uses the filter composer."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from music_api.application.dtos.music import (
    AuthorSummary,
    MusicCommand,
    MusicResult,
    MusicSearchCriteria,
)
from music_api.application.dtos.pagination import Page, PageRequest
from music_api.core.constants import DUPLICATE_MUSIC_MESSAGE
from music_api.domain.exceptions import BusinessRuleException
from music_api.infrastructure.persistence.filters import build_music_filter
from music_api.infrastructure.persistence.models.music import Music
from music_api.infrastructure.persistence.repositories.base import BaseRepository
from music_api.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _to_result(m: Music) -> MusicResult:
    """Map ORM Music (author loaded) to application MusicResult."""
    return MusicResult(
        id=m.id,
        name=m.name,
        duration_seconds=m.duration_seconds,
        genre=m.genre,
        author=AuthorSummary(id=m.author.id, name=m.author.name),
        created_at=ensure_utc(m.created_at),
        updated_at=ensure_utc(m.updated_at),
    )


class MusicRepository(BaseRepository[Music]):
    """Music persistence: CRUD, uniqueness check, listing, search and per-author listing."""

    sortable_columns = {
        "id": Music.id,
        "name": Music.name,
        "durationSeconds": Music.duration_seconds,
        "genre": Music.genre,
        "createdAt": Music.created_at,
        "updatedAt": Music.updated_at,
    }

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Music)

    async def get_entity(self, music_id: int) -> Music | None:
        """Get music ORM by ID for update/delete."""
        return await super().get_by_id(music_id)

    async def get_with_author(self, music_id: int) -> MusicResult | None:
        """Get music by ID with its owning author loaded."""
        result = await self.db.execute(
            select(Music).where(Music.id == music_id).options(joinedload(Music.author))
        )
        music = result.scalar_one_or_none()
        return _to_result(music) if music else None

    async def exists_by_name_and_author(
        self, name: str, author_id: int, exclude_music_id: int | None = None
    ) -> bool:
        """Return True if author already has a music with this name (optionally ignoring one music)."""
        stmt = select(Music.id).where(Music.name == name, Music.author_id == author_id)
        if exclude_music_id is not None:
            stmt = stmt.where(Music.id != exclude_music_id)
        result = await self.db.execute(stmt)
        return result.first() is not None

    async def create_music(self, data: MusicCommand) -> MusicResult:
        """Create music for an existing author.

        Raises BusinessRuleException on unique constraint violation (duplicate name for author).
        """
        music = Music(
            name=data.name,
            duration_seconds=data.duration_seconds,
            genre=data.genre,
            author_id=data.author_id,
        )
        try:
            created = await self.create(music)
        except IntegrityError as e:
            logger.warning(
                "Unique constraint hit creating music %r for author %s",
                data.name,
                data.author_id,
            )
            raise BusinessRuleException(DUPLICATE_MUSIC_MESSAGE) from e
        return await self._reload(created.id)

    async def update_music(self, music: Music, data: MusicCommand) -> MusicResult:
        """Apply all fields (including a new author_id) to an attached music and flush."""
        music.name = data.name
        music.duration_seconds = data.duration_seconds
        music.genre = data.genre
        music.author_id = data.author_id
        try:
            updated = await self.update(music)
        except IntegrityError as e:
            logger.warning("Unique constraint hit updating music %s", music.id)
            raise BusinessRuleException(DUPLICATE_MUSIC_MESSAGE) from e
        return await self._reload(updated.id)

    async def delete_music(self, music: Music) -> None:
        await self.delete(music)

    async def _reload(self, music_id: int) -> MusicResult:
        """Re-read a music with its (possibly reassigned) author."""
        result = await self.db.execute(
            select(Music)
            .where(Music.id == music_id)
            .options(joinedload(Music.author))
            .execution_options(populate_existing=True)
        )
        return _to_result(result.scalar_one())

    async def list_musics(self, page_request: PageRequest) -> Page[MusicResult]:
        page = await self.paginate(select(Music), page_request, joinedload(Music.author))
        return page.map(_to_result)

    async def search(
        self, criteria: MusicSearchCriteria, page_request: PageRequest
    ) -> Page[MusicResult]:
        """Return one page of musics matching every criterion that is set."""
        stmt = select(Music).where(build_music_filter(criteria))
        page = await self.paginate(stmt, page_request, joinedload(Music.author))
        return page.map(_to_result)

    async def list_by_author(
        self, author_id: int, page_request: PageRequest
    ) -> Page[MusicResult]:
        stmt = select(Music).where(Music.author_id == author_id)
        page = await self.paginate(stmt, page_request, joinedload(Music.author))
        return page.map(_to_result)
