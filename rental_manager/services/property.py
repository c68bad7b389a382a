"""
Property service implementing property business rules.
Handles CRUD operations, merge-style updates and the cascading delete policy.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from rental_manager.repositories.property import PropertyRepository
from rental_manager.models.property import Property
from rental_manager.schemas.property import PropertyCreate, PropertyUpdate
from rental_manager.utils.exceptions import (
    PropertyNotFoundError,
    StorageError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for managing properties.
    Deleting a property deletes its rooms and detaches any leads that pointed at it.
    """

    def __init__(self, db_session: AsyncSession):
        self.property_repo = PropertyRepository(db_session)

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a new property with an empty room list.

        Args:
            property_data: Property creation data

        Returns:
            Created property instance

        Raises:
            ValidationError: If property data is invalid
            StorageError: If the database operation fails
        """
        try:
            property_obj = await self.property_repo.create_property(property_data.model_dump())
            logger.info(f"Property created: {property_obj.name} (ID: {property_obj.id})")
            return property_obj
        except ValueError as e:
            raise ValidationError(str(e))
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to create property: {e}")
            raise StorageError("Failed to create property") from e

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get property by ID.

        Raises:
            NotFoundError: If property doesn't exist
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise StorageError("Failed to retrieve property") from e

        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def list_properties(self) -> List[Property]:
        """Get all properties with their rooms."""
        try:
            return await self.property_repo.list_properties()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list properties: {e}")
            raise StorageError("Failed to retrieve properties") from e

    async def update_property(self, property_id: uuid.UUID, property_data: PropertyUpdate) -> Property:
        """
        Apply a partial update to a property.
        Only fields present in the request are written; an empty update is a no-op.

        Args:
            property_id: UUID of the property to update
            property_data: Property update data

        Returns:
            Updated property

        Raises:
            NotFoundError: If property doesn't exist
            StorageError: If the database operation fails
        """
        update_data = property_data.model_dump(exclude_unset=True)

        try:
            updated_property = await self.property_repo.update(property_id, update_data)
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to update property {property_id}: {e}")
            raise StorageError("Failed to update property") from e

        if not updated_property:
            raise PropertyNotFoundError(str(property_id))

        if update_data:
            logger.info(f"Property updated: {property_id} (fields: {', '.join(sorted(update_data))})")
        return updated_property

    async def delete_property(self, property_id: uuid.UUID) -> bool:
        """
        Delete a property, its rooms, and clear lead references to them.

        Raises:
            NotFoundError: If property doesn't exist
            StorageError: If the database operation fails
        """
        try:
            deleted = await self.property_repo.delete_property_cascade(property_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise StorageError("Failed to delete property") from e

        if not deleted:
            raise PropertyNotFoundError(str(property_id))

        logger.info(f"Property deleted: {property_id}")
        return True
