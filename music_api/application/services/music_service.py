"""Music application service: CRUD, listing, search and per-author listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from music_api.application.dtos.music import MusicCommand, MusicResult, MusicSearchCriteria
from music_api.application.dtos.pagination import Page, PageRequest
from music_api.application.interfaces.repositories import IAuthorRepository, IMusicRepository
from music_api.core.constants import DUPLICATE_MUSIC_MESSAGE
from music_api.domain.exceptions import BusinessRuleException, ResourceNotFoundException
from music_api.shared.logging import get_logger

if TYPE_CHECKING:
    from music_api.infrastructure.cache.author_musics_cache import AuthorMusicsCache

logger = get_logger(__name__)


class MusicService:
    """Music use cases.

    Every music write evicts the cached aggregate of each author whose
    music list changed (both authors on a reassignment).
    """

    def __init__(
        self,
        music_repo: IMusicRepository,
        author_repo: IAuthorRepository,
        author_musics_cache: AuthorMusicsCache,
    ) -> None:
        self._music_repo = music_repo
        self._author_repo = author_repo
        self._cache = author_musics_cache

    async def _ensure_author_exists(self, author_id: int) -> None:
        if not await self._author_repo.exists_by_id(author_id):
            raise ResourceNotFoundException("Author", "id", author_id)

    async def create(self, command: MusicCommand) -> MusicResult:
        """Create music for an existing author.

        Raises:
            ResourceNotFoundException: Author does not exist.
            BusinessRuleException: Author already has a music with this name.
        """
        logger.info("Creating music %r for author %s", command.name, command.author_id)
        await self._ensure_author_exists(command.author_id)
        if await self._music_repo.exists_by_name_and_author(command.name, command.author_id):
            raise BusinessRuleException(
                DUPLICATE_MUSIC_MESSAGE, name=command.name, author_id=command.author_id
            )
        created = await self._music_repo.create_music(command)
        await self._cache.evict(command.author_id)
        logger.info("Music created with id %s", created.id)
        return created

    async def find_by_id(self, music_id: int) -> MusicResult:
        music = await self._music_repo.get_with_author(music_id)
        if music is None:
            raise ResourceNotFoundException("Music", "id", music_id)
        return music

    async def update(self, music_id: int, command: MusicCommand) -> MusicResult:
        """Replace every field of a music, possibly moving it to another author.

        Raises:
            ResourceNotFoundException: Music, or the new author, does not exist.
            BusinessRuleException: Target author already has another music with this name.
        """
        logger.info("Updating music %s", music_id)
        music = await self._music_repo.get_entity(music_id)
        if music is None:
            raise ResourceNotFoundException("Music", "id", music_id)
        previous_author_id = music.author_id
        if command.author_id != previous_author_id:
            await self._ensure_author_exists(command.author_id)
        if await self._music_repo.exists_by_name_and_author(
            command.name, command.author_id, exclude_music_id=music_id
        ):
            raise BusinessRuleException(
                DUPLICATE_MUSIC_MESSAGE, name=command.name, author_id=command.author_id
            )
        updated = await self._music_repo.update_music(music, command)
        await self._cache.evict(previous_author_id)
        if command.author_id != previous_author_id:
            await self._cache.evict(command.author_id)
        return updated

    async def delete(self, music_id: int) -> None:
        logger.info("Deleting music %s", music_id)
        music = await self._music_repo.get_entity(music_id)
        if music is None:
            raise ResourceNotFoundException("Music", "id", music_id)
        author_id = music.author_id
        await self._music_repo.delete_music(music)
        await self._cache.evict(author_id)

    async def list(self, page_request: PageRequest) -> Page[MusicResult]:
        return await self._music_repo.list_musics(page_request)

    async def search(
        self, criteria: MusicSearchCriteria, page_request: PageRequest
    ) -> Page[MusicResult]:
        """Return one page of musics matching every criterion that is set (none = all)."""
        return await self._music_repo.search(criteria, page_request)

    async def find_by_author_id(
        self, author_id: int, page_request: PageRequest
    ) -> Page[MusicResult]:
        """Return one page of one author's musics. Raises ResourceNotFoundException if the author is absent."""
        await self._ensure_author_exists(author_id)
        return await self._music_repo.list_by_author(author_id, page_request)
