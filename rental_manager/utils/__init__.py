"""
Utility modules for the Rental Manager API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    StorageError,
    ServiceUnavailableError,
    PropertyNotFoundError,
    RoomNotFoundError,
    LeadNotFoundError,
    RoomPropertyMismatchError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "ServiceUnavailableError",
    "PropertyNotFoundError",
    "RoomNotFoundError",
    "LeadNotFoundError",
    "RoomPropertyMismatchError",
]
