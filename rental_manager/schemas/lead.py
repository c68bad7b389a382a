"""
Pydantic schemas for lead requests and responses.
"""

from pydantic import AliasChoices, Field, field_validator
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID
from rental_manager.models.lead import LeadSource, LeadStatus
from rental_manager.schemas.common import CamelModel, as_utc, clean_required_text, reject_null
from rental_manager.schemas.room import RoomResponse

if TYPE_CHECKING:
    from rental_manager.schemas.property import PropertyResponse


class LeadCreate(CamelModel):
    """Schema for creating a lead. New leads always start with status New."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Alice"])

    contact_number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Prospect phone number",
        examples=["555-1111"]
    )

    source: LeadSource = Field(..., description="Where the lead came from", examples=["WhatsApp"])

    property_id: Optional[UUID] = Field(
        None,
        validation_alias=AliasChoices("propertyId", "property_id", "property"),
        description="Property the lead is interested in"
    )

    room_id: Optional[UUID] = Field(
        None,
        validation_alias=AliasChoices("roomId", "room_id", "room"),
        description="Room the lead is interested in"
    )

    reminder_date: Optional[datetime] = Field(None, description="Follow-up time")
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator('name', 'contact_number')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name)

    @field_validator('reminder_date')
    @classmethod
    def normalize_reminder_date(cls, v):
        return as_utc(v)


class LeadUpdate(CamelModel):
    """
    Schema for partially updating a lead.
    Any status may be set from any other status.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_number: Optional[str] = Field(None, min_length=1, max_length=50)
    source: Optional[LeadSource] = None
    status: Optional[LeadStatus] = None
    property_id: Optional[UUID] = Field(
        None,
        validation_alias=AliasChoices("propertyId", "property_id", "property")
    )
    room_id: Optional[UUID] = Field(
        None,
        validation_alias=AliasChoices("roomId", "room_id", "room")
    )
    reminder_date: Optional[datetime] = Field(None, description="Follow-up time; null clears it")
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator('name', 'contact_number')
    @classmethod
    def validate_required_text(cls, v, info):
        return clean_required_text(v, info.field_name)

    @field_validator('reminder_date')
    @classmethod
    def normalize_reminder_date(cls, v):
        return as_utc(v)

    @field_validator('source', 'status')
    @classmethod
    def validate_not_null(cls, v, info):
        return reject_null(v, info.field_name)


class LeadResponse(CamelModel):
    """Schema for lead response."""

    id: UUID
    name: str
    contact_number: str
    source: LeadSource
    status: LeadStatus
    property_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    reminder_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator('reminder_date', 'created_at', 'updated_at')
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)


class LeadDetailResponse(LeadResponse):
    """Lead with its referenced property and room resolved."""

    property: Optional["PropertyResponse"] = None
    room: Optional[RoomResponse] = None
