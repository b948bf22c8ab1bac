"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    status: str = Field(default="ok", description="'ok' or 'not_ready'")
    database: str = Field(..., description="'ok' or 'unavailable'")
    cache: str = Field(..., description="'ok', 'unavailable' or 'memory'")
