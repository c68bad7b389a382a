"""
Property model for managed buildings.
A property owns an ordered collection of rooms; the room id list is derived
from the rooms' foreign key so it can never disagree with the rooms table.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_manager.database import Base
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_manager.models.room import Room


class Property(Base):
    """
    Property model for a managed building or unit grouping.
    Rooms are loaded eagerly in creation order.
    """

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property display name"
    )

    address: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Street address"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Free-form property description"
    )

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="Room.created_at.asc(), Room.id.asc()"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, name={self.name})>"

    @property
    def room_ids(self) -> List[uuid.UUID]:
        """Ids of the rooms owned by this property, in creation order."""
        return [room.id for room in self.rooms]

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    def validate_name(self) -> None:
        """
        Validate property name.

        Raises:
            ValueError: If name is empty
        """
        if not self.name or not self.name.strip():
            raise ValueError("Property name cannot be empty")

    def validate_address(self) -> None:
        """
        Validate property address.

        Raises:
            ValueError: If address is empty
        """
        if not self.address or not self.address.strip():
            raise ValueError("Property address cannot be empty")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_name()
        self.validate_address()

    def to_dict(self, include_rooms: bool = False) -> dict:
        """
        Convert property to dictionary.

        Args:
            include_rooms: Render full room records instead of room ids

        Returns:
            Dictionary representation of property
        """
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "description": self.description,
            "rooms": [room.to_dict() for room in self.rooms] if include_rooms else self.room_ids,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
