"""
Pydantic schemas for room requests and responses.
"""

from pydantic import AliasChoices, Field, field_validator
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from rental_manager.models.room import RoomType, RoomStatus
from rental_manager.schemas.common import CamelModel, as_utc, clean_required_text, reject_null

if TYPE_CHECKING:
    from rental_manager.schemas.property import PropertyResponse


class RoomCreate(CamelModel):
    """Schema for creating a room inside an existing property."""

    property_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("propertyId", "property_id", "property"),
        description="ID of the owning property"
    )

    room_number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Room label within the property",
        examples=["101"]
    )

    room_type: RoomType = Field(
        ...,
        alias="type",
        description="Room type",
        examples=["Private Bath"]
    )

    rent: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Monthly rent",
        examples=[500]
    )

    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Free-form room description"
    )

    @field_validator('room_number')
    @classmethod
    def validate_room_number(cls, v):
        return clean_required_text(v, "roomNumber")


class RoomUpdate(CamelModel):
    """
    Schema for partially updating a room.
    The owning property cannot be changed.
    """

    room_number: Optional[str] = Field(None, min_length=1, max_length=50)
    room_type: Optional[RoomType] = Field(None, alias="type")
    status: Optional[RoomStatus] = Field(None, description="Occupancy status")
    occupancy_end_date: Optional[datetime] = Field(
        None,
        description="When the current occupancy ends; null clears it"
    )
    rent: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator('room_number')
    @classmethod
    def validate_room_number(cls, v):
        return clean_required_text(v, "roomNumber")

    @field_validator('room_type', 'status', 'rent')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)

    @field_validator('occupancy_end_date')
    @classmethod
    def normalize_occupancy_end_date(cls, v):
        return as_utc(v)


class RoomResponse(CamelModel):
    """Schema for room response."""

    id: UUID
    property_id: UUID
    room_number: str
    room_type: RoomType = Field(..., alias="type")
    status: RoomStatus
    occupancy_end_date: Optional[datetime] = None
    rent: float
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator('occupancy_end_date', 'created_at', 'updated_at')
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)


class RoomDetailResponse(RoomResponse):
    """Room with its owning property resolved."""

    property: Optional["PropertyResponse"] = Field(
        None,
        description="Owning property"
    )
