"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
ORM entities are passed through as opaque objects (Any); everything returned
to callers is an application DTO.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from music_api.application.dtos.author import AuthorResult, AuthorWithMusicsResult
    from music_api.application.dtos.music import (
        MusicCommand,
        MusicResult,
        MusicSearchCriteria,
    )
    from music_api.application.dtos.pagination import Page, PageRequest


# Author repository interface
class IAuthorRepository(Protocol):
    """Protocol for author repository (DIP)."""

    async def exists_by_id(self, entity_id: int) -> bool:
        """Return True if an author with this ID exists."""

    async def get_entity(self, author_id: int) -> Any:
        """Return the attached author entity for update/delete, or None."""

    async def get_author(self, author_id: int) -> AuthorResult | None:
        """Return author read-model by ID, or None."""

    async def get_with_musics(self, author_id: int) -> AuthorWithMusicsResult | None:
        """Return author joined to all of its musics, or None."""

    async def exists_by_email(self, email: str) -> bool:
        """Return True if any author uses this email."""

    async def create_author(self, name: str, email: str) -> AuthorResult:
        """Insert an author."""

    async def update_author(self, author: Any, name: str, email: str) -> AuthorResult:
        """Apply name/email to an attached author."""

    async def delete_author(self, author: Any) -> None:
        """Delete an author and its musics."""

    async def list_authors(self, page_request: PageRequest) -> Page[AuthorResult]:
        """Return one page of authors."""


# Music repository interface
class IMusicRepository(Protocol):
    """Protocol for music repository (DIP)."""

    async def get_entity(self, music_id: int) -> Any:
        """Return the attached music entity for update/delete, or None."""

    async def get_with_author(self, music_id: int) -> MusicResult | None:
        """Return music with its owning author, or None."""

    async def exists_by_name_and_author(
        self, name: str, author_id: int, exclude_music_id: int | None = None
    ) -> bool:
        """Return True if the author already has a music with this name."""

    async def create_music(self, data: MusicCommand) -> MusicResult:
        """Insert a music."""

    async def update_music(self, music: Any, data: MusicCommand) -> MusicResult:
        """Apply all fields of data to an attached music."""

    async def delete_music(self, music: Any) -> None:
        """Delete a music."""

    async def list_musics(self, page_request: PageRequest) -> Page[MusicResult]:
        """Return one page of all musics."""

    async def search(
        self, criteria: MusicSearchCriteria, page_request: PageRequest
    ) -> Page[MusicResult]:
        """Return one page of musics matching the criteria."""

    async def list_by_author(
        self, author_id: int, page_request: PageRequest
    ) -> Page[MusicResult]:
        """Return one page of the musics of one author."""
