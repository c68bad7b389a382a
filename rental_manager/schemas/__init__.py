"""
Pydantic schemas for request/response validation.
"""

from .common import CamelModel, DeleteResponse

# Room schemas
from .room import (
    RoomCreate,
    RoomUpdate,
    RoomResponse,
    RoomDetailResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyWithRoomsResponse
)

# Lead schemas
from .lead import (
    LeadCreate,
    LeadUpdate,
    LeadResponse,
    LeadDetailResponse
)

from .dashboard import DashboardSummary
from .error import ErrorDetail, ErrorResponse

# Resolve the nested property references now that PropertyResponse exists
RoomDetailResponse.model_rebuild()
LeadDetailResponse.model_rebuild()

__all__ = [
    "CamelModel",
    "DeleteResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "RoomDetailResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyWithRoomsResponse",
    "LeadCreate",
    "LeadUpdate",
    "LeadResponse",
    "LeadDetailResponse",
    "DashboardSummary",
    "ErrorDetail",
    "ErrorResponse",
]
