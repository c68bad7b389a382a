"""
Lead service implementing lead business rules.
Handles reference checks against properties and rooms and pipeline queries.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from rental_manager.repositories.lead import LeadRepository
from rental_manager.repositories.property import PropertyRepository
from rental_manager.repositories.room import RoomRepository
from rental_manager.models.lead import Lead, LeadStatus
from rental_manager.schemas.lead import LeadCreate, LeadUpdate
from rental_manager.utils.exceptions import (
    LeadNotFoundError,
    PropertyNotFoundError,
    RoomNotFoundError,
    RoomPropertyMismatchError,
    StorageError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class LeadService:
    """
    Lead service for managing prospective tenants.
    Status changes are unrestricted: any status can follow any other.
    """

    def __init__(self, db_session: AsyncSession):
        self.lead_repo = LeadRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.room_repo = RoomRepository(db_session)

    async def create_lead(self, lead_data: LeadCreate) -> Lead:
        """
        Create a new lead with status New.

        Args:
            lead_data: Lead creation data

        Returns:
            Created lead

        Raises:
            NotFoundError: If a referenced property or room doesn't exist
            ValidationError: If lead data is invalid or the room belongs to another property
            StorageError: If the database operation fails
        """
        create_data = lead_data.model_dump()

        try:
            await self._validate_references(create_data.get("property_id"), create_data.get("room_id"))

            lead = await self.lead_repo.create_lead(create_data)
            logger.info(f"Lead created: {lead.name} (ID: {lead.id}, source: {lead.source.value})")
            return lead
        except ValueError as e:
            raise ValidationError(str(e))
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to create lead: {e}")
            raise StorageError("Failed to create lead") from e

    async def get_lead(self, lead_id: uuid.UUID) -> Lead:
        """
        Get lead by ID with its property and room loaded.

        Raises:
            NotFoundError: If lead doesn't exist
        """
        try:
            lead = await self.lead_repo.get_by_id(lead_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get lead {lead_id}: {e}")
            raise StorageError("Failed to retrieve lead") from e

        if not lead:
            raise LeadNotFoundError(str(lead_id))
        return lead

    async def list_leads(self) -> List[Lead]:
        return await self._query("list leads", self.lead_repo.get_multi())

    async def list_leads_by_property(self, property_id: uuid.UUID) -> List[Lead]:
        return await self._query(
            f"list leads for property {property_id}",
            self.lead_repo.get_leads_by_property(property_id)
        )

    async def list_leads_by_status(self, status: LeadStatus) -> List[Lead]:
        return await self._query(
            f"list leads with status {status.value}",
            self.lead_repo.get_leads_by_status(status)
        )

    async def list_pending_reminders(self) -> List[Lead]:
        """Leads with a reminder set whose status is not Landed, earliest reminder first."""
        return await self._query("list pending reminders", self.lead_repo.get_pending_reminders())

    async def update_lead(self, lead_id: uuid.UUID, lead_data: LeadUpdate) -> Lead:
        """
        Apply a partial update to a lead.
        References are checked against the lead's state after the merge.

        Raises:
            NotFoundError: If the lead or a newly referenced property/room doesn't exist
            ValidationError: If the merged room and property disagree
            StorageError: If the database operation fails
        """
        update_data = lead_data.model_dump(exclude_unset=True)
        lead = await self.get_lead(lead_id)

        try:
            if "property_id" in update_data or "room_id" in update_data:
                await self._validate_references(
                    update_data.get("property_id", lead.property_id),
                    update_data.get("room_id", lead.room_id)
                )

            updated_lead = await self.lead_repo.update(lead_id, update_data)
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to update lead {lead_id}: {e}")
            raise StorageError("Failed to update lead") from e

        if not updated_lead:
            raise LeadNotFoundError(str(lead_id))

        if update_data:
            logger.info(f"Lead updated: {lead_id} (fields: {', '.join(sorted(update_data))})")
        return updated_lead

    async def delete_lead(self, lead_id: uuid.UUID) -> bool:
        """
        Delete a lead.

        Raises:
            NotFoundError: If lead doesn't exist
        """
        try:
            deleted = await self.lead_repo.delete(lead_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete lead {lead_id}: {e}")
            raise StorageError("Failed to delete lead") from e

        if not deleted:
            raise LeadNotFoundError(str(lead_id))

        logger.info(f"Lead deleted: {lead_id}")
        return True

    async def _validate_references(
        self,
        property_id: Optional[uuid.UUID],
        room_id: Optional[uuid.UUID]
    ) -> None:
        """
        Check that referenced records exist and agree with each other.

        Raises:
            NotFoundError: If the property or room doesn't exist
            RoomPropertyMismatchError: If the room belongs to a different property
        """
        if property_id is not None and not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(str(property_id))

        if room_id is not None:
            room = await self.room_repo.get_by_id(room_id)
            if not room:
                raise RoomNotFoundError(str(room_id))
            if property_id is not None and room.property_id != property_id:
                raise RoomPropertyMismatchError(str(room_id), str(property_id))

    async def _query(self, action: str, awaitable) -> List[Lead]:
        try:
            return await awaitable
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}: {e}")
            raise StorageError("Failed to retrieve leads") from e
