"""
Application exceptions.

Each maps onto one HTTP status and error code; the handlers in
``rental_manager.services.error_handler`` turn them into JSON bodies.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base class carrying an ``error_code`` next to the HTTP status."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Missing or invalid field."""

    def __init__(self, detail: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, "VALIDATION_ERROR")
        self.field_errors = field_errors or []


class NotFoundError(APIException):
    def __init__(self, resource: str, resource_id: Optional[str] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", "NOT_FOUND")
        self.resource = resource
        self.resource_id = resource_id


class StorageError(APIException):
    """Underlying persistence failed or is unavailable."""

    def __init__(self, detail: str = "Storage operation failed"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail, "STORAGE_ERROR")


class ServiceUnavailableError(APIException):
    """Raised by the health check when the database cannot be reached."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail, "SERVICE_UNAVAILABLE")


class PropertyNotFoundError(NotFoundError):
    def __init__(self, property_id: str):
        super().__init__("Property", property_id)


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_id: str):
        super().__init__("Room", room_id)


class LeadNotFoundError(NotFoundError):
    def __init__(self, lead_id: str):
        super().__init__("Lead", lead_id)


class RoomPropertyMismatchError(ValidationError):
    """A lead references a room that belongs to a different property."""

    def __init__(self, room_id: str, property_id: str):
        super().__init__(
            f"Room {room_id} does not belong to property {property_id}",
            field_errors=[{"field": "roomId", "message": "Room belongs to a different property"}]
        )
