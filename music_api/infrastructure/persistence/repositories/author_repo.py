"""Author repository. Returns application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from music_api.application.dtos.author import (
    AuthorResult,
    AuthorWithMusicsResult,
    MusicSummary,
)
from music_api.application.dtos.pagination import Page, PageRequest
from music_api.domain.exceptions import BusinessRuleException
from music_api.infrastructure.persistence.models.author import Author
from music_api.infrastructure.persistence.models.music import Music
from music_api.infrastructure.persistence.repositories.base import BaseRepository
from music_api.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _to_result(a: Author, music_count: int) -> AuthorResult:
    """Map ORM Author to application AuthorResult."""
    return AuthorResult(
        id=a.id,
        name=a.name,
        email=a.email,
        music_count=music_count,
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
    )


def _to_aggregate(a: Author) -> AuthorWithMusicsResult:
    """Map ORM Author (musics loaded) to the author-with-musics aggregate."""
    return AuthorWithMusicsResult(
        id=a.id,
        name=a.name,
        email=a.email,
        musics=[
            MusicSummary(
                id=m.id,
                name=m.name,
                duration_seconds=m.duration_seconds,
                genre=m.genre,
            )
            for m in a.musics
        ],
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
    )


class AuthorRepository(BaseRepository[Author]):
    """Author persistence: lookups, uniqueness checks, CRUD and paginated listing."""

    sortable_columns = {
        "id": Author.id,
        "name": Author.name,
        "email": Author.email,
        "createdAt": Author.created_at,
        "updatedAt": Author.updated_at,
    }

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Author)

    async def _count_musics(self, author_ids: list[int]) -> dict[int, int]:
        """Return music counts per author id (authors without musics are absent)."""
        if not author_ids:
            return {}
        result = await self.db.execute(
            select(Music.author_id, func.count(Music.id))
            .where(Music.author_id.in_(author_ids))
            .group_by(Music.author_id)
        )
        return {author_id: count for author_id, count in result.all()}

    async def _with_count(self, author: Author) -> AuthorResult:
        counts = await self._count_musics([author.id])
        return _to_result(author, counts.get(author.id, 0))

    async def get_entity(self, author_id: int) -> Author | None:
        """Get author ORM by ID for update/delete."""
        return await super().get_by_id(author_id)

    async def get_author(self, author_id: int) -> AuthorResult | None:
        """Get author by ID with its music count."""
        author = await super().get_by_id(author_id)
        return await self._with_count(author) if author else None

    async def get_with_musics(self, author_id: int) -> AuthorWithMusicsResult | None:
        """Get author with all musics eagerly loaded (one aggregate read)."""
        result = await self.db.execute(
            select(Author)
            .where(Author.id == author_id)
            .options(selectinload(Author.musics))
        )
        author = result.scalar_one_or_none()
        return _to_aggregate(author) if author else None

    async def exists_by_email(self, email: str) -> bool:
        """Return True if any author uses this email."""
        result = await self.db.execute(select(Author.id).where(Author.email == email))
        return result.first() is not None

    async def create_author(self, name: str, email: str) -> AuthorResult:
        """Create author; return created entity.

        Raises BusinessRuleException on unique constraint violation (duplicate email).
        """
        try:
            created = await self.create(Author(name=name, email=email))
        except IntegrityError as e:
            logger.warning("Unique constraint hit creating author with email %s", email)
            raise BusinessRuleException(f"Email already exists: {email}", email=email) from e
        return _to_result(created, 0)

    async def update_author(self, author: Author, name: str, email: str) -> AuthorResult:
        """Apply name/email to an attached author and flush."""
        author.name = name
        author.email = email
        try:
            updated = await self.update(author)
        except IntegrityError as e:
            logger.warning("Unique constraint hit updating author %s", author.id)
            raise BusinessRuleException(f"Email already exists: {email}", email=email) from e
        return await self._with_count(updated)

    async def delete_author(self, author: Author) -> None:
        """Delete author; its musics are deleted with it."""
        await self.delete(author)

    async def list_authors(self, page_request: PageRequest) -> Page[AuthorResult]:
        """Return one page of authors with music counts."""
        page = await self.paginate(select(Author), page_request)
        counts = await self._count_musics([a.id for a in page.content])
        return page.map(lambda a: _to_result(a, counts.get(a.id, 0)))
