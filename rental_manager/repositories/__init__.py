"""
Repository layer for data access operations.
"""

from rental_manager.repositories.base import BaseRepository
from rental_manager.repositories.property import PropertyRepository
from rental_manager.repositories.room import RoomRepository
from rental_manager.repositories.lead import LeadRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "RoomRepository",
    "LeadRepository"
]
