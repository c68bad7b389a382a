"""
Lead repository for prospective tenant inquiries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
from sqlalchemy.orm import selectinload
from rental_manager.repositories.base import BaseRepository
from rental_manager.models.lead import Lead, LeadStatus
from rental_manager.models.property import Property
from typing import List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class LeadRepository(BaseRepository[Lead]):
    """Repository for lead management and pipeline queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Lead, db)

    def _loader_options(self) -> tuple:
        return (
            selectinload(Lead.property_rel).selectinload(Property.rooms),
            selectinload(Lead.room_rel),
        )

    async def create_lead(self, lead_data: Dict[str, Any]) -> Lead:
        """
        Create a new lead with validation.

        Args:
            lead_data: Dictionary containing lead information

        Returns:
            Created lead with its references loaded

        Raises:
            ValueError: If validation fails
            Exception: If database operation fails
        """
        try:
            Lead(**lead_data).validate_all()

            created_lead = await self.create(lead_data)
            logger.info(f"Created lead: {created_lead.name} (ID: {created_lead.id})")
            return await self.get_by_id(created_lead.id)
        except ValueError as e:
            logger.error(f"Lead validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create lead: {e}")
            raise

    async def get_leads_by_property(self, property_id: uuid.UUID) -> List[Lead]:
        return await self.get_multi(filters={"property_id": property_id})

    async def get_leads_by_status(self, status: LeadStatus) -> List[Lead]:
        return await self.get_multi(filters={"status": status})

    @staticmethod
    def _pending_reminder_condition():
        return and_(Lead.reminder_date.isnot(None), Lead.status != LeadStatus.LANDED)

    async def get_pending_reminders(self) -> List[Lead]:
        """
        Get leads with a reminder set that have not landed yet.

        Returns:
            Leads ordered by reminder time, earliest first
        """
        try:
            query = (
                self._select()
                .where(self._pending_reminder_condition())
                .order_by(Lead.reminder_date.asc(), Lead.created_at.asc())
            )
            result = await self.db.execute(query)
            leads = result.scalars().all()

            logger.debug(f"Found {len(leads)} leads with pending reminders")
            return list(leads)
        except Exception as e:
            logger.error(f"Failed to get leads with pending reminders: {e}")
            raise

    async def count_pending_reminders(self) -> int:
        try:
            query = select(func.count(Lead.id)).where(self._pending_reminder_condition())
            result = await self.db.execute(query)
            return result.scalar()
        except Exception as e:
            logger.error(f"Failed to count pending reminders: {e}")
            raise

    async def count_by_status(self) -> Dict[LeadStatus, int]:
        """
        Count leads per pipeline status.

        Returns:
            Mapping with an entry for every LeadStatus
        """
        try:
            query = select(Lead.status, func.count(Lead.id)).group_by(Lead.status)
            result = await self.db.execute(query)

            counts = {status: 0 for status in LeadStatus}
            for status, count in result.all():
                counts[status] = count
            return counts
        except Exception as e:
            logger.error(f"Failed to count leads by status: {e}")
            raise
