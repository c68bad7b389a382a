"""
Tests for application structure: routes, OpenAPI schema, and health endpoints.
"""

import pytest
from httpx import AsyncClient

from sqlalchemy import inspect

from rental_manager import database
from rental_manager.config import Settings


class TestOpenAPI:
    """Test the published API surface."""

    @pytest.mark.asyncio
    async def test_paths_registered(self, async_client: AsyncClient):
        response = await async_client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]

        expected = {
            "/api/properties": {"get", "post"},
            "/api/properties/{property_id}": {"get", "put", "delete"},
            "/api/rooms": {"get", "post"},
            "/api/rooms/property/{property_id}": {"get"},
            "/api/rooms/{room_id}": {"get", "put", "delete"},
            "/api/leads": {"get", "post"},
            "/api/leads/reminders": {"get"},
            "/api/leads/status/{lead_status}": {"get"},
            "/api/leads/property/{property_id}": {"get"},
            "/api/leads/{lead_id}": {"get", "put", "delete"},
            "/api/dashboard/summary": {"get"},
        }
        for path, methods in expected.items():
            assert path in paths
            assert set(paths[path]) == methods

    @pytest.mark.asyncio
    async def test_schemas_use_camel_case(self, async_client: AsyncClient):
        schemas = (await async_client.get("/openapi.json")).json()["components"]["schemas"]

        assert "roomNumber" in schemas["RoomResponse"]["properties"]
        assert "type" in schemas["RoomResponse"]["properties"]
        assert "contactNumber" in schemas["LeadResponse"]["properties"]


class TestHealthEndpoints:
    """Test root and health endpoints."""

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["api_prefix"] == "/api"

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_database_down(self, async_client: AsyncClient, monkeypatch):
        async def unreachable():
            return False

        monkeypatch.setattr("rental_manager.main.test_database_connection", unreachable)

        response = await async_client.get("/health")

        assert response.status_code == 503
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"


class TestSettings:
    """Test configuration parsing."""

    def test_postgres_url_uses_asyncpg(self):
        settings = Settings(database_url="postgresql://user:pw@db:5432/rentals")

        assert settings.database_url == "postgresql+asyncpg://user:pw@db:5432/rentals"
        assert settings.is_sqlite is False

    def test_sqlite_url_uses_aiosqlite(self):
        settings = Settings(database_url="sqlite:///./rentals.db")

        assert settings.database_url == "sqlite+aiosqlite:///./rentals.db"
        assert settings.is_sqlite is True

    def test_invalid_environment(self):
        with pytest.raises(ValueError):
            Settings(environment="moon")

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"


class TestTableManagement:
    """Test the table helpers used by migrate.py and the startup hook."""

    @staticmethod
    async def _table_names():
        async with database.engine.connect() as conn:
            return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))

    @pytest.mark.asyncio
    async def test_create_then_drop_tables(self):
        await database.create_tables()
        assert {"properties", "rooms", "leads"} <= await self._table_names()
        assert await database.test_database_connection() is True

        await database.drop_tables()
        assert await self._table_names() == set()

    @pytest.mark.asyncio
    async def test_drop_refused_in_production(self, monkeypatch):
        monkeypatch.setattr(database.settings, "environment", "production")

        with pytest.raises(RuntimeError):
            await database.drop_tables()
