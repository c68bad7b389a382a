"""
Lead model for prospective tenant inquiries.
Leads move freely between pipeline statuses; there is no transition workflow.
"""

from sqlalchemy import String, Text, DateTime, ForeignKey, Index, Enum as SQLEnum, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_manager.database import Base
from datetime import datetime
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_manager.models.property import Property
    from rental_manager.models.room import Room


class LeadSource(str, enum.Enum):
    """Channel a lead came in through."""
    ROOMIES = "Roomies"
    FACEBOOK = "Facebook"
    ROOMSTER = "Roomster"
    TELEGRAM = "Telegram"
    SULEKHA = "Sulekha"
    WHATSAPP = "WhatsApp"
    OTHERS = "Others"


class LeadStatus(str, enum.Enum):
    """Sales pipeline status of a lead."""
    NEW = "New"
    HOT = "Hot"
    LEASE = "Lease"
    LANDED = "Landed"
    DENY = "Deny"


class Lead(Base):
    """
    Lead model for tracking a prospective tenant.
    Optionally points at the property and room the prospect is interested in.
    """

    __tablename__ = "leads"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Prospect name"
    )

    contact_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Prospect phone number"
    )

    source: Mapped[LeadSource] = mapped_column(
        SQLEnum(LeadSource, name="lead_source"),
        nullable=False,
        comment="Where the lead came from"
    )

    status: Mapped[LeadStatus] = mapped_column(
        SQLEnum(LeadStatus, name="lead_status"),
        nullable=False,
        default=LeadStatus.NEW,
        index=True,
        comment="Pipeline status"
    )

    property_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Property the lead is interested in"
    )

    room_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Room the lead is interested in"
    )

    reminder_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Operator follow-up time"
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Free-form notes"
    )

    property_rel: Mapped[Optional["Property"]] = relationship(
        "Property",
        lazy="selectin"
    )

    room_rel: Mapped[Optional["Room"]] = relationship(
        "Room",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        """String representation of the lead."""
        return f"<Lead(id={self.id}, name={self.name}, status={self.status})>"

    @property
    def has_pending_reminder(self) -> bool:
        """A reminder is pending while it is set and the lead has not landed."""
        return self.reminder_date is not None and self.status != LeadStatus.LANDED

    def validate_all(self) -> None:
        """
        Run all validation checks on the lead.

        Raises:
            ValueError: If any validation fails
        """
        if not self.name or not self.name.strip():
            raise ValueError("Lead name cannot be empty")

        if not self.contact_number or not self.contact_number.strip():
            raise ValueError("Lead contact number cannot be empty")

    def to_dict(self, include_property: bool = False, include_room: bool = False) -> dict:
        """
        Convert lead to dictionary.

        Args:
            include_property: Whether to include the referenced property
            include_room: Whether to include the referenced room

        Returns:
            Dictionary representation of lead
        """
        result = {
            "id": self.id,
            "name": self.name,
            "contact_number": self.contact_number,
            "source": self.source,
            "status": self.status,
            "property_id": self.property_id,
            "room_id": self.room_id,
            "reminder_date": self.reminder_date,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

        if include_property:
            result["property"] = self.property_rel.to_dict() if self.property_rel else None

        if include_room:
            result["room"] = self.room_rel.to_dict() if self.room_rel else None

        return result


# Pending reminder lookups filter on status and order by reminder time
lead_reminders_index = Index(
    'idx_leads_status_reminder',
    Lead.status,
    Lead.reminder_date
)
