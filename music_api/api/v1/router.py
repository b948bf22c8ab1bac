"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from music_api.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from music_api.api.v1.endpoints import authors, health, musics

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(authors.router, prefix="/authors", tags=["authors"])
api_router.include_router(musics.router, prefix="/musics", tags=["musics"])
