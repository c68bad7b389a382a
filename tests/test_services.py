"""
Tests for service layer business logic.
Tests reference checks, merge semantics, and delete policies.
"""

import pytest
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from sqlalchemy.exc import OperationalError

from rental_manager.models.room import RoomType, RoomStatus
from rental_manager.models.lead import LeadSource, LeadStatus
from rental_manager.schemas.property import PropertyCreate, PropertyUpdate
from rental_manager.schemas.room import RoomCreate, RoomUpdate
from rental_manager.schemas.lead import LeadCreate, LeadUpdate
from rental_manager.services.property import PropertyService
from rental_manager.services.room import RoomService
from rental_manager.services.lead import LeadService
from rental_manager.services.dashboard import DashboardService
from rental_manager.utils.exceptions import (
    NotFoundError,
    PropertyNotFoundError,
    RoomNotFoundError,
    LeadNotFoundError,
    RoomPropertyMismatchError,
    StorageError
)
from tests.conftest import future


def room_create(property_id, room_number="101", rent=500):
    return RoomCreate(
        property_id=property_id,
        room_number=room_number,
        room_type=RoomType.PRIVATE_BATH,
        rent=Decimal(str(rent))
    )


class TestPropertyService:
    """Test property service operations."""

    @pytest.mark.asyncio
    async def test_create_property(self, property_service: PropertyService):
        property_obj = await property_service.create_property(
            PropertyCreate(name="Sunset", address="1 Main St")
        )

        assert property_obj.name == "Sunset"
        assert property_obj.room_ids == []

    @pytest.mark.asyncio
    async def test_get_property_not_found(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError) as exc_info:
            await property_service.get_property(uuid.uuid4())

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Property not found"

    @pytest.mark.asyncio
    async def test_update_only_supplied_fields(self, property_service: PropertyService, test_property):
        updated = await property_service.update_property(
            test_property.id,
            PropertyUpdate(address="2 Side St")
        )

        assert updated.address == "2 Side St"
        assert updated.name == "Sunset"

    @pytest.mark.asyncio
    async def test_update_explicit_null_clears_description(self, property_service: PropertyService):
        property_obj = await property_service.create_property(
            PropertyCreate(name="Sunset", address="1 Main St", description="Old")
        )

        updated = await property_service.update_property(
            property_obj.id,
            PropertyUpdate.model_validate({"description": None})
        )

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_empty_update_returns_unchanged(self, property_service: PropertyService, test_property):
        before = (await property_service.get_property(test_property.id)).updated_at

        updated = await property_service.update_property(test_property.id, PropertyUpdate())

        assert updated.name == "Sunset"
        assert updated.updated_at == before

    @pytest.mark.asyncio
    async def test_update_not_found(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError):
            await property_service.update_property(uuid.uuid4(), PropertyUpdate(name="X"))

    @pytest.mark.asyncio
    async def test_delete_property(self, property_service: PropertyService, test_property, test_room):
        assert await property_service.delete_property(test_property.id) is True

        with pytest.raises(PropertyNotFoundError):
            await property_service.get_property(test_property.id)

    @pytest.mark.asyncio
    async def test_delete_property_not_found(self, property_service: PropertyService):
        with pytest.raises(NotFoundError):
            await property_service.delete_property(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_storage_error(self, property_service: PropertyService):
        failure = OperationalError("SELECT", {}, Exception("database is locked"))

        with patch.object(property_service.property_repo, "list_properties", AsyncMock(side_effect=failure)):
            with pytest.raises(StorageError) as exc_info:
                await property_service.list_properties()

        assert exc_info.value.status_code == 500


class TestRoomService:
    """Test room service operations."""

    @pytest.mark.asyncio
    async def test_create_room_appends_to_property(
        self,
        room_service: RoomService,
        property_service: PropertyService,
        test_property
    ):
        first = await room_service.create_room(room_create(test_property.id, "101"))
        second = await room_service.create_room(room_create(test_property.id, "102"))

        assert first.status == RoomStatus.VACANT
        property_obj = await property_service.get_property(test_property.id)
        assert property_obj.room_ids == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_create_room_unknown_property(self, room_service: RoomService):
        with pytest.raises(PropertyNotFoundError):
            await room_service.create_room(room_create(uuid.uuid4()))

        assert await room_service.list_rooms() == []

    @pytest.mark.asyncio
    async def test_get_room_resolves_property(self, room_service: RoomService, test_room, test_property):
        room = await room_service.get_room(test_room.id)

        assert room.property_rel.id == test_property.id

    @pytest.mark.asyncio
    async def test_get_room_not_found(self, room_service: RoomService):
        with pytest.raises(RoomNotFoundError):
            await room_service.get_room(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_room_merge(self, room_service: RoomService, test_room):
        updated = await room_service.update_room(
            test_room.id,
            RoomUpdate(status=RoomStatus.OCCUPIED, occupancy_end_date=future(30))
        )

        assert updated.status == RoomStatus.OCCUPIED
        assert updated.occupancy_end_date is not None
        assert updated.room_number == "101"
        assert updated.rent == Decimal("500.00")

    @pytest.mark.asyncio
    async def test_delete_room_removes_from_property(
        self,
        room_service: RoomService,
        property_service: PropertyService,
        test_property,
        test_room
    ):
        assert await room_service.delete_room(test_room.id) is True

        property_obj = await property_service.get_property(test_property.id)
        assert property_obj.room_ids == []

    @pytest.mark.asyncio
    async def test_delete_room_twice(self, room_service: RoomService, test_room):
        await room_service.delete_room(test_room.id)

        with pytest.raises(RoomNotFoundError):
            await room_service.delete_room(test_room.id)

    @pytest.mark.asyncio
    async def test_room_list_matches_existing_rooms(
        self,
        room_service: RoomService,
        property_service: PropertyService,
        test_property
    ):
        expected = []
        for index in range(5):
            room = await room_service.create_room(room_create(test_property.id, str(index)))
            expected.append(room.id)

        for room_id in (expected[1], expected[3]):
            await room_service.delete_room(room_id)
            expected.remove(room_id)

        room = await room_service.create_room(room_create(test_property.id, "new"))
        expected.append(room.id)

        property_obj = await property_service.get_property(test_property.id)
        listed = await room_service.list_rooms_by_property(test_property.id)

        assert property_obj.room_ids == expected
        assert [r.id for r in listed] == expected


class TestLeadService:
    """Test lead service operations."""

    @pytest.mark.asyncio
    async def test_create_lead_starts_new(self, lead_service: LeadService):
        lead = await lead_service.create_lead(
            LeadCreate(name="Alice", contact_number="555-1111", source=LeadSource.WHATSAPP)
        )

        assert lead.status == LeadStatus.NEW

    @pytest.mark.asyncio
    async def test_create_lead_with_references(self, lead_service: LeadService, test_property, test_room):
        lead = await lead_service.create_lead(
            LeadCreate(
                name="Alice",
                contact_number="555-1111",
                source=LeadSource.FACEBOOK,
                property_id=test_property.id,
                room_id=test_room.id
            )
        )

        fetched = await lead_service.get_lead(lead.id)
        assert fetched.property_rel.id == test_property.id
        assert fetched.room_rel.id == test_room.id

    @pytest.mark.asyncio
    async def test_create_lead_unknown_property(self, lead_service: LeadService):
        with pytest.raises(PropertyNotFoundError):
            await lead_service.create_lead(
                LeadCreate(
                    name="Alice",
                    contact_number="555-1111",
                    source=LeadSource.OTHERS,
                    property_id=uuid.uuid4()
                )
            )

    @pytest.mark.asyncio
    async def test_create_lead_unknown_room(self, lead_service: LeadService):
        with pytest.raises(RoomNotFoundError):
            await lead_service.create_lead(
                LeadCreate(
                    name="Alice",
                    contact_number="555-1111",
                    source=LeadSource.OTHERS,
                    room_id=uuid.uuid4()
                )
            )

    @pytest.mark.asyncio
    async def test_create_lead_room_from_other_property(
        self,
        lead_service: LeadService,
        property_service: PropertyService,
        test_room
    ):
        other = await property_service.create_property(PropertyCreate(name="Other", address="2 Side St"))

        with pytest.raises(RoomPropertyMismatchError) as exc_info:
            await lead_service.create_lead(
                LeadCreate(
                    name="Alice",
                    contact_number="555-1111",
                    source=LeadSource.ROOMIES,
                    property_id=other.id,
                    room_id=test_room.id
                )
            )

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_update_checks_merged_references(
        self,
        lead_service: LeadService,
        property_service: PropertyService,
        test_property,
        test_room
    ):
        lead = await lead_service.create_lead(
            LeadCreate(
                name="Alice",
                contact_number="555-1111",
                source=LeadSource.TELEGRAM,
                property_id=test_property.id,
                room_id=test_room.id
            )
        )
        other = await property_service.create_property(PropertyCreate(name="Other", address="2 Side St"))

        with pytest.raises(RoomPropertyMismatchError):
            await lead_service.update_lead(lead.id, LeadUpdate(property_id=other.id))

        moved = await lead_service.update_lead(
            lead.id,
            LeadUpdate.model_validate({"propertyId": str(other.id), "roomId": None})
        )
        assert moved.property_id == other.id
        assert moved.room_id is None

    @pytest.mark.asyncio
    async def test_any_status_transition(self, lead_service: LeadService, test_lead):
        for status in [LeadStatus.LANDED, LeadStatus.NEW, LeadStatus.DENY, LeadStatus.HOT]:
            updated = await lead_service.update_lead(test_lead.id, LeadUpdate(status=status))
            assert updated.status == status

    @pytest.mark.asyncio
    async def test_pending_reminders_exclude_landed(self, lead_service: LeadService, test_lead):
        await lead_service.update_lead(test_lead.id, LeadUpdate(reminder_date=future(1)))
        assert [lead.id for lead in await lead_service.list_pending_reminders()] == [test_lead.id]

        await lead_service.update_lead(test_lead.id, LeadUpdate(status=LeadStatus.LANDED))
        assert await lead_service.list_pending_reminders() == []

    @pytest.mark.asyncio
    async def test_delete_lead(self, lead_service: LeadService, test_lead):
        assert await lead_service.delete_lead(test_lead.id) is True

        with pytest.raises(LeadNotFoundError):
            await lead_service.get_lead(test_lead.id)

        with pytest.raises(LeadNotFoundError):
            await lead_service.delete_lead(test_lead.id)


class TestDashboardService:
    """Test dashboard aggregation."""

    @pytest.mark.asyncio
    async def test_repositories_share_session(self, db_session, dashboard_service: DashboardService):
        repos = (dashboard_service.property_repo, dashboard_service.room_repo, dashboard_service.lead_repo)
        assert all(repo.db is db_session for repo in repos)
        assert not hasattr(dashboard_service, "db")

    @pytest.mark.asyncio
    async def test_empty_summary(self, dashboard_service: DashboardService):
        summary = await dashboard_service.get_summary()

        assert summary["total_properties"] == 0
        assert summary["total_rooms"] == 0
        assert summary["rooms_by_status"] == {"Vacant": 0, "Occupied": 0}
        assert summary["occupancy_rate"] == 0.0
        assert summary["leads_by_status"] == {"New": 0, "Hot": 0, "Lease": 0, "Landed": 0, "Deny": 0}
        assert summary["pending_reminders"] == 0

    @pytest.mark.asyncio
    async def test_summary_counts(
        self,
        dashboard_service: DashboardService,
        room_service: RoomService,
        lead_service: LeadService,
        test_property,
        test_room
    ):
        await room_service.create_room(room_create(test_property.id, "102"))
        await room_service.update_room(test_room.id, RoomUpdate(status=RoomStatus.OCCUPIED))
        await lead_service.create_lead(
            LeadCreate(
                name="Alice",
                contact_number="555-1111",
                source=LeadSource.SULEKHA,
                reminder_date=future(2)
            )
        )

        summary = await dashboard_service.get_summary()

        assert summary["total_properties"] == 1
        assert summary["total_rooms"] == 2
        assert summary["rooms_by_status"] == {"Vacant": 1, "Occupied": 1}
        assert summary["occupancy_rate"] == 0.5
        assert summary["total_leads"] == 1
        assert summary["leads_by_status"]["New"] == 1
        assert summary["pending_reminders"] == 1
