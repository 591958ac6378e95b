"""Integration tests for health endpoints."""
import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestHealth:
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    async def test_health_db(self, async_client: AsyncClient):
        response = await async_client.get("/api/health/db")

        assert response.json()["database"] == "connected"

    async def test_request_id_is_echoed(self, async_client: AsyncClient):
        request_id = "3f2b8c1e-8d9a-4c1e-9a4b-2a6f1f0b7c55"

        response = await async_client.get("/api/health", headers={"X-Request-ID": request_id})

        assert response.headers["X-Request-ID"] == request_id

    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get("/api/nope")

        assert response.status_code == 404
