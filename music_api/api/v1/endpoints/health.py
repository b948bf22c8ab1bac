"""Health check endpoints: liveness and readiness (database reachable, cache status)."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from music_api.core.config import get_settings
from music_api.infrastructure.persistence.database import ping_database
from music_api.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


async def _database_status() -> str:
    try:
        await ping_database()
        return "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness: database unavailable: %s", e)
        return "unavailable"


def _cache_status(request: Request) -> str:
    cache = getattr(request.app.state, "cache", None)
    if cache is None or not cache.is_available():
        return "unavailable"
    return get_settings().cache_backend


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers; 503 otherwise.

    The cache status is reported but never fails readiness: reads fall back
    to the database when the cache is down.
    """
    result = ReadinessResponse(
        database=await _database_status(),
        cache=_cache_status(request),
    )
    if result.database == "ok":
        return result
    result.status = "not_ready"
    return JSONResponse(status_code=503, content=result.model_dump())
