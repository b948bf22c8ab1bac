"""Music API: thin routes delegating to MusicService.

Static paths (/search, /author/{author_id}) are declared before /{music_id}.
"""

from fastapi import APIRouter, Request, Response

from music_api.api.v1.dependencies import (
    MusicPageRequestDep,
    MusicSearchCriteriaDep,
    MusicServiceDep,
    MusicWriteServiceDep,
)
from music_api.application.dtos.music import MusicCommand
from music_api.core.constants import MESSAGE_MUSIC_CREATED, MESSAGE_MUSIC_UPDATED
from music_api.core.limiter import limit_writes
from music_api.schemas.common import ApiResponse, PageResponse
from music_api.schemas.music import MusicRequest, MusicResponse

router = APIRouter()


def _to_command(body: MusicRequest) -> MusicCommand:
    return MusicCommand(
        name=body.name,
        duration_seconds=body.duration_seconds,
        author_id=body.author_id,
        genre=body.genre,
    )


@router.post("", response_model=ApiResponse[MusicResponse], status_code=201)
@limit_writes
async def create_music(
    request: Request,
    response: Response,
    body: MusicRequest,
    service: MusicWriteServiceDep,
):
    """Create a music for an existing author."""
    created = await service.create(_to_command(body))
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{created.id}"
    return ApiResponse(
        data=MusicResponse.model_validate(created), message=MESSAGE_MUSIC_CREATED
    )


@router.get("", response_model=ApiResponse[PageResponse[MusicResponse]])
async def list_musics(page_request: MusicPageRequestDep, service: MusicServiceDep):
    """List all musics."""
    page = await service.list(page_request)
    return ApiResponse(data=PageResponse.from_page(page, MusicResponse.model_validate))


@router.get("/search", response_model=ApiResponse[PageResponse[MusicResponse]])
async def search_musics(
    criteria: MusicSearchCriteriaDep,
    page_request: MusicPageRequestDep,
    service: MusicServiceDep,
):
    """Search musics by name (substring), genre, authorId and duration range; all optional."""
    page = await service.search(criteria, page_request)
    return ApiResponse(data=PageResponse.from_page(page, MusicResponse.model_validate))


@router.get("/author/{author_id}", response_model=ApiResponse[PageResponse[MusicResponse]])
async def list_musics_by_author(
    author_id: int, page_request: MusicPageRequestDep, service: MusicServiceDep
):
    """List the musics of one author. 404 if the author does not exist."""
    page = await service.find_by_author_id(author_id, page_request)
    return ApiResponse(data=PageResponse.from_page(page, MusicResponse.model_validate))


@router.get("/{music_id}", response_model=ApiResponse[MusicResponse])
async def get_music(music_id: int, service: MusicServiceDep):
    music = await service.find_by_id(music_id)
    return ApiResponse(data=MusicResponse.model_validate(music))


@router.put("/{music_id}", response_model=ApiResponse[MusicResponse])
@limit_writes
async def update_music(
    request: Request,
    music_id: int,
    body: MusicRequest,
    service: MusicWriteServiceDep,
):
    """Replace every field of a music (may move it to another author)."""
    updated = await service.update(music_id, _to_command(body))
    return ApiResponse(
        data=MusicResponse.model_validate(updated), message=MESSAGE_MUSIC_UPDATED
    )


@router.delete("/{music_id}", status_code=204)
@limit_writes
async def delete_music(request: Request, music_id: int, service: MusicWriteServiceDep):
    await service.delete(music_id)
