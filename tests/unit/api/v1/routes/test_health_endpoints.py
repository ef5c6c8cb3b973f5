import pytest
from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/api/v1/health/")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "subsaggregator"}

    @pytest.mark.asyncio
    async def test_ping(self, client: AsyncClient):
        response = await client.get("/api/v1/health/ping")
        assert response.status_code == 200
        assert response.text == "pong"

    @pytest.mark.asyncio
    async def test_db_health_check(self, client: AsyncClient):
        """Database check runs against the patched test session."""
        response = await client.get("/api/v1/health/db")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
