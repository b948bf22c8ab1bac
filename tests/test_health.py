"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_readiness_reports_database_and_cache(client: AsyncClient) -> None:
    """GET /api/v1/health/ready checks the database and reports the cache backend."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok", "cache": "memory"}


async def test_request_id_is_generated_and_forwarded(client: AsyncClient) -> None:
    """Responses carry X-Request-ID; a safe client value is echoed back."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("x-request-id")

    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("x-request-id") == "abc-123"


async def test_unknown_route_uses_error_body(client: AsyncClient) -> None:
    """Unknown routes answer 404 with the standard error body."""
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert body["path"] == "/api/v1/nope"
    assert "timestamp" in body
