"""
Test configuration and fixtures for the rental manager API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Point the application at an in-memory database before it is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["ENABLE_REQUEST_LOGGING"] = "false"

import pytest
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from rental_manager.main import app
from rental_manager.database import Base, enable_sqlite_foreign_keys, get_db
from rental_manager.models.property import Property
from rental_manager.models.room import Room, RoomType
from rental_manager.models.lead import Lead, LeadSource
from rental_manager.repositories.property import PropertyRepository
from rental_manager.repositories.room import RoomRepository
from rental_manager.repositories.lead import LeadRepository
from rental_manager.services.property import PropertyService
from rental_manager.services.room import RoomService
from rental_manager.services.lead import LeadService
from rental_manager.services.dashboard import DashboardService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client; every request gets its own session."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def room_repository(db_session: AsyncSession) -> RoomRepository:
    return RoomRepository(db_session)


@pytest.fixture
def lead_repository(db_session: AsyncSession) -> LeadRepository:
    return LeadRepository(db_session)


# Service fixtures
@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def room_service(db_session: AsyncSession) -> RoomService:
    return RoomService(db_session)


@pytest.fixture
def lead_service(db_session: AsyncSession) -> LeadService:
    return LeadService(db_session)


@pytest.fixture
def dashboard_service(db_session: AsyncSession) -> DashboardService:
    return DashboardService(db_session)


# Test data factories
class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        name: str = "Sunset",
        address: str = "1 Main St",
        description: Optional[str] = None
    ) -> dict:
        """Create property data dictionary."""
        return {
            "name": name,
            "address": address,
            "description": description
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        name: str = "Sunset",
        address: str = "1 Main St",
        description: Optional[str] = None
    ) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(name=name, address=address, description=description)
        )


class RoomFactory:
    """Factory for creating test rooms."""

    @staticmethod
    def create_room_data(
        property_id: uuid.UUID,
        room_number: str = "101",
        room_type: RoomType = RoomType.PRIVATE_BATH,
        rent: Decimal = Decimal("500.00"),
        description: Optional[str] = None
    ) -> dict:
        """Create room data dictionary."""
        return {
            "property_id": property_id,
            "room_number": room_number,
            "room_type": room_type,
            "rent": rent,
            "description": description
        }

    @staticmethod
    async def create_room(
        room_repo: RoomRepository,
        property_id: uuid.UUID,
        room_number: str = "101",
        room_type: RoomType = RoomType.PRIVATE_BATH,
        rent: Decimal = Decimal("500.00")
    ) -> Room:
        """Create a test room in the database."""
        return await room_repo.create_room(
            RoomFactory.create_room_data(
                property_id=property_id,
                room_number=room_number,
                room_type=room_type,
                rent=rent
            )
        )


class LeadFactory:
    """Factory for creating test leads."""

    @staticmethod
    def create_lead_data(
        name: str = "Alice",
        contact_number: str = "555-1111",
        source: LeadSource = LeadSource.WHATSAPP,
        property_id: Optional[uuid.UUID] = None,
        room_id: Optional[uuid.UUID] = None,
        reminder_date: Optional[datetime] = None,
        notes: Optional[str] = None
    ) -> dict:
        """Create lead data dictionary."""
        return {
            "name": name,
            "contact_number": contact_number,
            "source": source,
            "property_id": property_id,
            "room_id": room_id,
            "reminder_date": reminder_date,
            "notes": notes
        }

    @staticmethod
    async def create_lead(lead_repo: LeadRepository, **kwargs) -> Lead:
        """Create a test lead in the database."""
        return await lead_repo.create_lead(LeadFactory.create_lead_data(**kwargs))


def future(days: int = 1) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


# Common test fixtures
@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    """Create a test property."""
    return await PropertyFactory.create_property(property_repository)


@pytest.fixture
async def test_room(room_repository: RoomRepository, test_property: Property) -> Room:
    """Create a test room inside the test property."""
    return await RoomFactory.create_room(room_repository, property_id=test_property.id)


@pytest.fixture
async def test_lead(lead_repository: LeadRepository) -> Lead:
    """Create a test lead without references."""
    return await LeadFactory.create_lead(lead_repository)


# API helpers
async def api_create_property(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Sunset", "address": "1 Main St"}
    payload.update(overrides)
    response = await client.post("/api/properties", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def api_create_room(client: AsyncClient, property_id: str, **overrides) -> dict:
    payload = {"propertyId": property_id, "roomNumber": "101", "type": "Private Bath", "rent": 500}
    payload.update(overrides)
    response = await client.post("/api/rooms", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def api_create_lead(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Alice", "contactNumber": "555-1111", "source": "WhatsApp"}
    payload.update(overrides)
    response = await client.post("/api/leads", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
