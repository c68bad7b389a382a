"""
Room model for rentable units within a property.
"""

from sqlalchemy import String, Text, Numeric, DateTime, ForeignKey, Index, Enum as SQLEnum, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_manager.database import Base
from decimal import Decimal
from datetime import datetime
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_manager.models.property import Property


class RoomType(str, enum.Enum):
    """Kind of rentable unit."""
    PRIVATE_BATH = "Private Bath"
    SHARED_BATH = "Shared Bath"
    GARAGE = "Garage"


class RoomStatus(str, enum.Enum):
    """Occupancy state of a room."""
    VACANT = "Vacant"
    OCCUPIED = "Occupied"


class Room(Base):
    """
    Room model for a rentable unit.
    Belongs to exactly one property for its whole lifetime.
    """

    __tablename__ = "rooms"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the owning property"
    )

    room_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Room label within the property"
    )

    room_type: Mapped[RoomType] = mapped_column(
        SQLEnum(RoomType, name="room_type"),
        nullable=False,
        comment="Room type"
    )

    status: Mapped[RoomStatus] = mapped_column(
        SQLEnum(RoomStatus, name="room_status"),
        nullable=False,
        default=RoomStatus.VACANT,
        index=True,
        comment="Occupancy status"
    )

    occupancy_end_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the current occupancy ends"
    )

    rent: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
        comment="Monthly rent"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Free-form room description"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="rooms",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        """String representation of the room."""
        return f"<Room(id={self.id}, property_id={self.property_id}, room_number={self.room_number})>"

    @property
    def is_vacant(self) -> bool:
        return self.status == RoomStatus.VACANT

    def validate_rent(self) -> None:
        """
        Validate room rent.

        Raises:
            ValueError: If rent is not positive
        """
        if self.rent is None or self.rent <= 0:
            raise ValueError("Room rent must be greater than 0")

        if self.rent > Decimal('99999999.99'):
            raise ValueError("Room rent exceeds maximum allowed value")

    def validate_room_number(self) -> None:
        """
        Validate room number.

        Raises:
            ValueError: If room number is empty
        """
        if not self.room_number or not self.room_number.strip():
            raise ValueError("Room number cannot be empty")

    def validate_all(self) -> None:
        """
        Run all validation checks on the room.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_room_number()
        self.validate_rent()

    def to_dict(self, include_property: bool = False) -> dict:
        """
        Convert room to dictionary.

        Args:
            include_property: Whether to include the owning property

        Returns:
            Dictionary representation of room
        """
        result = {
            "id": self.id,
            "property_id": self.property_id,
            "room_number": self.room_number,
            "room_type": self.room_type,
            "status": self.status,
            "occupancy_end_date": self.occupancy_end_date,
            "rent": float(self.rent),
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

        if include_property:
            result["property"] = self.property_rel.to_dict() if self.property_rel else None

        return result


# Listing a property's rooms in creation order
property_rooms_index = Index(
    'idx_rooms_property_created',
    Room.property_id,
    Room.created_at.asc()
)
