"""
Property repository for managing properties and their owned rooms.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from rental_manager.repositories.base import BaseRepository
from rental_manager.models.property import Property
from rental_manager.models.room import Room
from rental_manager.models.lead import Lead
from typing import List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property management.
    Property reads always carry the property's rooms, loaded eagerly in creation order.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property with validation.

        Args:
            property_data: Dictionary containing property information

        Returns:
            Created property instance with its (empty) room list loaded

        Raises:
            ValueError: If validation fails
            Exception: If database operation fails
        """
        try:
            Property(**property_data).validate_all()

            created_property = await self.create(property_data)
            logger.info(f"Created property: {created_property.name} (ID: {created_property.id})")
            return await self.get_by_id(created_property.id)
        except ValueError as e:
            logger.error(f"Property validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise

    async def list_properties(self) -> List[Property]:
        """
        Get all properties with their rooms, oldest first.

        Returns:
            List of properties
        """
        return await self.get_multi()

    async def delete_property_cascade(self, property_id: uuid.UUID) -> bool:
        """
        Delete a property together with its rooms in one transaction.
        Leads pointing at the property or at any of its rooms are kept with
        those references cleared.

        Args:
            property_id: UUID of the property to delete

        Returns:
            True if the property was deleted, False if not found
        """
        try:
            room_ids_result = await self.db.execute(
                select(Room.id).where(Room.property_id == property_id)
            )
            room_ids = list(room_ids_result.scalars().all())

            if room_ids:
                await self.db.execute(
                    update(Lead).where(Lead.room_id.in_(room_ids)).values(room_id=None)
                )
            await self.db.execute(
                update(Lead).where(Lead.property_id == property_id).values(property_id=None)
            )
            await self.db.execute(delete(Room).where(Room.property_id == property_id))

            result = await self.db.execute(delete(Property).where(Property.id == property_id))
            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"Property with id {property_id} not found for deletion")
                return False

            await self.db.commit()
            logger.info(f"Deleted property {property_id} with {len(room_ids)} rooms")
            return True
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise
