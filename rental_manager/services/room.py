"""
Room service implementing room business rules.
Rooms can only be created inside an existing property, and a room never moves
to another property.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from rental_manager.repositories.property import PropertyRepository
from rental_manager.repositories.room import RoomRepository
from rental_manager.models.room import Room
from rental_manager.schemas.room import RoomCreate, RoomUpdate
from rental_manager.utils.exceptions import (
    PropertyNotFoundError,
    RoomNotFoundError,
    StorageError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class RoomService:
    """Room service for managing rooms and their owning property's room list."""

    def __init__(self, db_session: AsyncSession):
        self.room_repo = RoomRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_room(self, room_data: RoomCreate) -> Room:
        """
        Create a room; it appears last in the owning property's room list.

        Args:
            room_data: Room creation data

        Returns:
            Created room with status Vacant

        Raises:
            NotFoundError: If the owning property doesn't exist
            ValidationError: If room data is invalid
            StorageError: If the database operation fails
        """
        try:
            if not await self.property_repo.exists(room_data.property_id):
                raise PropertyNotFoundError(str(room_data.property_id))

            room = await self.room_repo.create_room(room_data.model_dump())
            logger.info(f"Room created: {room.room_number} (ID: {room.id}) in property {room.property_id}")
            return room
        except ValueError as e:
            raise ValidationError(str(e))
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to create room: {e}")
            raise StorageError("Failed to create room") from e

    async def get_room(self, room_id: uuid.UUID) -> Room:
        """
        Get room by ID with its owning property loaded.

        Raises:
            NotFoundError: If room doesn't exist
        """
        try:
            room = await self.room_repo.get_by_id(room_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to get room {room_id}: {e}")
            raise StorageError("Failed to retrieve room") from e

        if not room:
            raise RoomNotFoundError(str(room_id))
        return room

    async def list_rooms(self) -> List[Room]:
        try:
            return await self.room_repo.get_multi()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list rooms: {e}")
            raise StorageError("Failed to retrieve rooms") from e

    async def list_rooms_by_property(self, property_id: uuid.UUID) -> List[Room]:
        """
        Get a property's rooms in creation order.
        An unknown property simply has no rooms.
        """
        try:
            return await self.room_repo.get_rooms_by_property(property_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list rooms for property {property_id}: {e}")
            raise StorageError("Failed to retrieve rooms") from e

    async def update_room(self, room_id: uuid.UUID, room_data: RoomUpdate) -> Room:
        """
        Apply a partial update to a room.

        Raises:
            NotFoundError: If room doesn't exist
            StorageError: If the database operation fails
        """
        update_data = room_data.model_dump(exclude_unset=True)

        try:
            updated_room = await self.room_repo.update(room_id, update_data)
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to update room {room_id}: {e}")
            raise StorageError("Failed to update room") from e

        if not updated_room:
            raise RoomNotFoundError(str(room_id))

        if update_data:
            logger.info(f"Room updated: {room_id} (fields: {', '.join(sorted(update_data))})")
        return updated_room

    async def delete_room(self, room_id: uuid.UUID) -> bool:
        """
        Delete a room; it leaves its property's room list in the same transaction.

        Raises:
            NotFoundError: If room doesn't exist
            StorageError: If the database operation fails
        """
        try:
            deleted = await self.room_repo.delete_room(room_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete room {room_id}: {e}")
            raise StorageError("Failed to delete room") from e

        if not deleted:
            raise RoomNotFoundError(str(room_id))

        logger.info(f"Room deleted: {room_id}")
        return True
