"""
Service layer for business logic implementation.
Contains services for properties, rooms, leads, the dashboard, and error handling.
"""

from .property import PropertyService
from .room import RoomService
from .lead import LeadService
from .dashboard import DashboardService
from .error_handler import ErrorHandlerService

__all__ = [
    "PropertyService",
    "RoomService",
    "LeadService",
    "DashboardService",
    "ErrorHandlerService"
]
