"""
Dashboard service aggregating portfolio statistics.
"""

from typing import Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from rental_manager.repositories.property import PropertyRepository
from rental_manager.repositories.room import RoomRepository
from rental_manager.repositories.lead import LeadRepository
from rental_manager.models.room import RoomStatus
from rental_manager.utils.exceptions import StorageError
import logging

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only statistics across properties, rooms and leads."""

    def __init__(self, db_session: AsyncSession):
        self.property_repo = PropertyRepository(db_session)
        self.room_repo = RoomRepository(db_session)
        self.lead_repo = LeadRepository(db_session)

    async def get_summary(self) -> Dict[str, Any]:
        """
        Build the dashboard summary.

        Returns:
            Dictionary with counts per entity and status, occupancy rate and
            the number of pending reminders

        Raises:
            StorageError: If the database operation fails
        """
        try:
            total_properties = await self.property_repo.count()
            rooms_by_status = await self.room_repo.count_by_status()
            leads_by_status = await self.lead_repo.count_by_status()
            pending_reminders = await self.lead_repo.count_pending_reminders()
        except SQLAlchemyError as e:
            logger.error(f"Failed to build dashboard summary: {e}")
            raise StorageError("Failed to build dashboard summary") from e

        total_rooms = sum(rooms_by_status.values())
        occupied = rooms_by_status[RoomStatus.OCCUPIED]
        occupancy_rate = round(occupied / total_rooms, 4) if total_rooms else 0.0

        summary = {
            "total_properties": total_properties,
            "total_rooms": total_rooms,
            "rooms_by_status": {status.value: count for status, count in rooms_by_status.items()},
            "occupancy_rate": occupancy_rate,
            "total_leads": sum(leads_by_status.values()),
            "leads_by_status": {status.value: count for status, count in leads_by_status.items()},
            "pending_reminders": pending_reminders,
        }

        logger.debug(f"Generated dashboard summary: {summary}")
        return summary
