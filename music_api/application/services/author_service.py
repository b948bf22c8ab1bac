"""Author application service: CRUD, paginated listing and the cached author-with-musics read."""

from __future__ import annotations

from typing import TYPE_CHECKING

from music_api.application.dtos.author import (
    AuthorCommand,
    AuthorResult,
    AuthorWithMusicsResult,
)
from music_api.application.dtos.pagination import Page, PageRequest
from music_api.application.interfaces.repositories import IAuthorRepository
from music_api.domain.exceptions import BusinessRuleException, ResourceNotFoundException
from music_api.shared.logging import get_logger

if TYPE_CHECKING:
    from music_api.infrastructure.cache.author_musics_cache import AuthorMusicsCache

logger = get_logger(__name__)


def _author_not_found(author_id: int) -> ResourceNotFoundException:
    return ResourceNotFoundException("Author", "id", author_id)


class AuthorService:
    """Author use cases. Writes evict the author's cached aggregate before the unit of work commits."""

    def __init__(
        self,
        author_repo: IAuthorRepository,
        author_musics_cache: AuthorMusicsCache,
    ) -> None:
        self._author_repo = author_repo
        self._cache = author_musics_cache

    async def create(self, command: AuthorCommand) -> AuthorResult:
        """Create author. Raises BusinessRuleException if the email is taken."""
        logger.info("Creating author with email %s", command.email)
        if await self._author_repo.exists_by_email(command.email):
            raise BusinessRuleException(
                f"Email already exists: {command.email}", email=command.email
            )
        created = await self._author_repo.create_author(command.name, command.email)
        logger.info("Author created with id %s", created.id)
        return created

    async def find_by_id(self, author_id: int) -> AuthorResult:
        """Return author by ID. Raises ResourceNotFoundException if absent."""
        author = await self._author_repo.get_author(author_id)
        if author is None:
            raise _author_not_found(author_id)
        return author

    async def find_by_id_with_musics(self, author_id: int) -> AuthorWithMusicsResult:
        """Return author with all musics, served from the author-musics cache when present."""
        return await self._cache.get_or_load(author_id, self._load_with_musics)

    async def _load_with_musics(self, author_id: int) -> AuthorWithMusicsResult:
        logger.info("Cache miss: loading author %s with musics from database", author_id)
        aggregate = await self._author_repo.get_with_musics(author_id)
        if aggregate is None:
            raise _author_not_found(author_id)
        return aggregate

    async def update(self, author_id: int, command: AuthorCommand) -> AuthorResult:
        """Replace name and email.

        Raises:
            ResourceNotFoundException: Author does not exist.
            BusinessRuleException: New email belongs to another author.
        """
        logger.info("Updating author %s", author_id)
        author = await self._author_repo.get_entity(author_id)
        if author is None:
            raise _author_not_found(author_id)
        if command.email != author.email and await self._author_repo.exists_by_email(
            command.email
        ):
            raise BusinessRuleException(
                f"Email already exists: {command.email}", email=command.email
            )
        updated = await self._author_repo.update_author(author, command.name, command.email)
        await self._cache.evict(author_id)
        return updated

    async def delete(self, author_id: int) -> None:
        """Delete author and, by cascade, all of its musics."""
        logger.info("Deleting author %s", author_id)
        author = await self._author_repo.get_entity(author_id)
        if author is None:
            raise _author_not_found(author_id)
        await self._author_repo.delete_author(author)
        await self._cache.evict(author_id)

    async def list(self, page_request: PageRequest) -> Page[AuthorResult]:
        """Return one page of authors."""
        return await self._author_repo.list_authors(page_request)
