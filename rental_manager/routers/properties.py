"""
Property management API endpoints.
A property's ``rooms`` field is kept in sync with the rooms that reference it.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
from uuid import UUID

from rental_manager.services.property import PropertyService
from rental_manager.schemas.common import DeleteResponse
from rental_manager.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyWithRoomsResponse
)
from rental_manager.schemas.error import get_crud_error_responses, get_error_responses
from rental_manager.utils.dependencies import get_property_service


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyWithRoomsResponse],
    status_code=status.HTTP_200_OK,
    summary="List properties",
    description="Get all properties, each with its full room records in creation order",
    responses=get_error_responses(500)
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyWithRoomsResponse]:
    properties = await property_service.list_properties()
    return [
        PropertyWithRoomsResponse.model_validate(prop.to_dict(include_rooms=True))
        for prop in properties
    ]


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a property with an empty room list",
    responses=get_error_responses(400, 500)
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """New properties start with no rooms."""
    property_obj = await property_service.create_property(property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Get a property with the ordered ids of its rooms",
    responses=get_crud_error_responses()
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Merge the supplied fields into the property; omitted fields are unchanged",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update a property.

    Keys absent from the body are left as they are; sending ``null`` for
    ``description`` clears it.
    """
    property_obj = await property_service.update_property(property_id, property_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/{property_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    description="Delete a property and its rooms; leads keep existing with their references cleared",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> DeleteResponse:
    await property_service.delete_property(property_id)
    return DeleteResponse(message="Property deleted")
