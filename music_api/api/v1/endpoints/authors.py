"""Author API: thin routes delegating to AuthorService."""

from fastapi import APIRouter, Request, Response

from music_api.api.v1.dependencies import (
    AuthorPageRequestDep,
    AuthorServiceDep,
    AuthorWriteServiceDep,
)
from music_api.application.dtos.author import AuthorCommand
from music_api.core.constants import MESSAGE_AUTHOR_CREATED, MESSAGE_AUTHOR_UPDATED
from music_api.core.limiter import limit_writes
from music_api.schemas.author import (
    AuthorRequest,
    AuthorResponse,
    AuthorWithMusicsResponse,
)
from music_api.schemas.common import ApiResponse, PageResponse

router = APIRouter()


def _to_command(body: AuthorRequest) -> AuthorCommand:
    return AuthorCommand(name=body.name, email=str(body.email))


@router.post("", response_model=ApiResponse[AuthorResponse], status_code=201)
@limit_writes
async def create_author(
    request: Request,
    response: Response,
    body: AuthorRequest,
    service: AuthorWriteServiceDep,
):
    """Create an author. 400 if the email is already used."""
    created = await service.create(_to_command(body))
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{created.id}"
    return ApiResponse(
        data=AuthorResponse.model_validate(created), message=MESSAGE_AUTHOR_CREATED
    )


@router.get("", response_model=ApiResponse[PageResponse[AuthorResponse]])
async def list_authors(page_request: AuthorPageRequestDep, service: AuthorServiceDep):
    """List authors (zero-based page, default size 20, sorted by name)."""
    page = await service.list(page_request)
    return ApiResponse(data=PageResponse.from_page(page, AuthorResponse.model_validate))


@router.get("/{author_id}", response_model=ApiResponse[AuthorResponse])
async def get_author(author_id: int, service: AuthorServiceDep):
    """Get author by id."""
    author = await service.find_by_id(author_id)
    return ApiResponse(data=AuthorResponse.model_validate(author))


@router.get("/{author_id}/musics", response_model=ApiResponse[AuthorWithMusicsResponse])
async def get_author_with_musics(author_id: int, service: AuthorServiceDep):
    """Get author with all of its musics (served from cache for up to 5 minutes)."""
    aggregate = await service.find_by_id_with_musics(author_id)
    return ApiResponse(data=AuthorWithMusicsResponse.model_validate(aggregate))


@router.put("/{author_id}", response_model=ApiResponse[AuthorResponse])
@limit_writes
async def update_author(
    request: Request,
    author_id: int,
    body: AuthorRequest,
    service: AuthorWriteServiceDep,
):
    """Replace author name and email."""
    updated = await service.update(author_id, _to_command(body))
    return ApiResponse(
        data=AuthorResponse.model_validate(updated), message=MESSAGE_AUTHOR_UPDATED
    )


@router.delete("/{author_id}", status_code=204)
@limit_writes
async def delete_author(request: Request, author_id: int, service: AuthorWriteServiceDep):
    """Delete author and all of its musics."""
    await service.delete(author_id)
