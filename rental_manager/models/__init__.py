"""
Database models for the Rental Manager API.
Includes Property, Room and Lead models with their relationships.
"""

from rental_manager.models.property import Property
from rental_manager.models.room import Room, RoomType, RoomStatus
from rental_manager.models.lead import Lead, LeadSource, LeadStatus

# Export all models for easy importing
__all__ = [
    "Property",
    "Room",
    "RoomType",
    "RoomStatus",
    "Lead",
    "LeadSource",
    "LeadStatus",
]
