"""
Room repository for rentable units.

A property's room list is the set of rooms whose ``property_id`` points at it,
so inserting or deleting a room row is the whole list update: there is no
separate array to push to or pull from and nothing to race on.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import selectinload
from rental_manager.repositories.base import BaseRepository
from rental_manager.models.property import Property
from rental_manager.models.room import Room, RoomStatus
from rental_manager.models.lead import Lead
from typing import List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class RoomRepository(BaseRepository[Room]):
    """Repository for room management."""

    def __init__(self, db: AsyncSession):
        super().__init__(Room, db)

    def _loader_options(self) -> tuple:
        # The owning property is rendered with its room ids, so its rooms
        # must be loaded too; the Room -> Property -> rooms cycle is not
        # followed by the relationship defaults.
        return (selectinload(Room.property_rel).selectinload(Property.rooms),)

    async def create_room(self, room_data: Dict[str, Any]) -> Room:
        """
        Create a new room with validation.

        Args:
            room_data: Dictionary containing room information

        Returns:
            Created room with its owning property loaded

        Raises:
            ValueError: If validation fails
            Exception: If database operation fails
        """
        try:
            Room(**room_data).validate_all()

            created_room = await self.create(room_data)
            logger.info(
                f"Created room {created_room.room_number} (ID: {created_room.id}) "
                f"in property {created_room.property_id}"
            )
            return await self.get_by_id(created_room.id)
        except ValueError as e:
            logger.error(f"Room validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create room: {e}")
            raise

    async def get_rooms_by_property(self, property_id: uuid.UUID) -> List[Room]:
        """
        Get the rooms of one property in creation order.

        Args:
            property_id: UUID of the owning property

        Returns:
            List of rooms
        """
        return await self.get_multi(filters={"property_id": property_id})

    async def delete_room(self, room_id: uuid.UUID) -> bool:
        """
        Delete a room and detach any leads pointing at it, in one transaction.

        Args:
            room_id: UUID of the room to delete

        Returns:
            True if room was deleted, False if not found
        """
        try:
            await self.db.execute(
                update(Lead).where(Lead.room_id == room_id).values(room_id=None)
            )
            result = await self.db.execute(delete(Room).where(Room.id == room_id))

            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"Room with id {room_id} not found for deletion")
                return False

            await self.db.commit()
            logger.info(f"Deleted room {room_id}")
            return True
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete room {room_id}: {e}")
            raise

    async def count_by_status(self) -> Dict[RoomStatus, int]:
        """
        Count rooms per occupancy status.

        Returns:
            Mapping with an entry for every RoomStatus
        """
        try:
            query = select(Room.status, func.count(Room.id)).group_by(Room.status)
            result = await self.db.execute(query)

            counts = {status: 0 for status in RoomStatus}
            for status, count in result.all():
                counts[status] = count
            return counts
        except Exception as e:
            logger.error(f"Failed to count rooms by status: {e}")
            raise
