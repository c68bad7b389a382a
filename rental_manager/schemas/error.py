"""
Error body schemas, used to document the error responses of each route.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """One failing field of a request."""

    field: Optional[str] = Field(None, description="Location of the field", examples=["body -> source"])
    message: str = Field(..., description="What is wrong with it", examples=["Field required"])
    type: Optional[str] = Field(None, description="Validator that failed", examples=["missing"])
    input: Optional[Any] = Field(None, description="Value received")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    message: str = Field(..., examples=["Room not found"])
    code: str = Field(..., description="Machine readable error code", examples=["NOT_FOUND"])
    timestamp: str = Field(..., description="UTC time of the failure", examples=["2024-01-01T00:00:00.000000Z"])
    requestId: Optional[str] = Field(None, description="Value of the X-Request-ID header", examples=["a1b2c3d4"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Present for validation failures")


def _documented(description: str, message: str, code: str, **extra) -> Dict[str, Any]:
    example = {
        "message": message,
        "code": code,
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "requestId": "a1b2c3d4",
        **extra,
    }
    return {
        "description": description,
        "model": ErrorResponse,
        "content": {"application/json": {"example": example}},
    }


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: _documented(
        "Missing or invalid field",
        "Validation failed: body -> name: Field required",
        "VALIDATION_ERROR",
        details=[{"field": "body -> name", "message": "Field required", "type": "missing"}],
    ),
    404: _documented("Entity does not exist", "Property not found", "NOT_FOUND"),
    500: _documented("Storage failure", "Database operation failed", "DATABASE_ERROR"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """``responses=`` mapping for a route that can fail with the given statuses."""
    return {code: ERROR_RESPONSES[code] for code in status_codes if code in ERROR_RESPONSES}


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    return get_error_responses(400, 404, 500)
