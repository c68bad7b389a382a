"""
Pydantic schemas for property requests and responses.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from rental_manager.schemas.common import CamelModel, as_utc, clean_required_text
from rental_manager.schemas.room import RoomResponse


class PropertyBase(CamelModel):
    """Base property schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property display name",
        examples=["Sunset"]
    )

    address: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Street address",
        examples=["1 Main St"]
    )

    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Free-form property description",
        examples=["Four-bedroom house near the station"]
    )

    @field_validator('name', 'address')
    @classmethod
    def validate_required_text(cls, v, info):
        """Validate and clean required text fields."""
        return clean_required_text(v, info.field_name)


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""


class PropertyUpdate(CamelModel):
    """
    Schema for partially updating a property.
    Only fields present in the request body are applied.
    """

    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Property display name"
    )

    address: Optional[str] = Field(
        None,
        min_length=1,
        max_length=500,
        description="Street address"
    )

    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Free-form property description; null clears it"
    )

    @field_validator('name', 'address')
    @classmethod
    def validate_required_text(cls, v, info):
        """Reject explicit nulls and blanks for required fields."""
        return clean_required_text(v, info.field_name)


class PropertyResponse(CamelModel):
    """Property with its room ids in creation order."""

    id: UUID = Field(..., description="Property unique identifier")
    name: str
    address: str
    description: Optional[str] = None
    rooms: List[UUID] = Field(
        default_factory=list,
        description="Ids of the rooms owned by this property, oldest first"
    )
    created_at: datetime
    updated_at: datetime

    @field_validator('created_at', 'updated_at')
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)


class PropertyWithRoomsResponse(PropertyResponse):
    """Property with its full room records, used by the property list."""

    rooms: List[RoomResponse] = Field(
        default_factory=list,
        description="Rooms owned by this property, oldest first"
    )
