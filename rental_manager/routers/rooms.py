"""
Room management API endpoints.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
from uuid import UUID

from rental_manager.services.room import RoomService
from rental_manager.schemas.common import DeleteResponse
from rental_manager.schemas.room import (
    RoomCreate,
    RoomUpdate,
    RoomResponse,
    RoomDetailResponse
)
from rental_manager.schemas.error import get_crud_error_responses, get_error_responses
from rental_manager.utils.dependencies import get_room_service


router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get(
    "",
    response_model=List[RoomDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List rooms",
    description="Get all rooms, each with its owning property",
    responses=get_error_responses(500)
)
async def list_rooms(
    room_service: RoomService = Depends(get_room_service)
) -> List[RoomDetailResponse]:
    rooms = await room_service.list_rooms()
    return [RoomDetailResponse.model_validate(room.to_dict(include_property=True)) for room in rooms]


@router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new room",
    description="Create a vacant room inside an existing property",
    responses=get_crud_error_responses()
)
async def create_room(
    room_data: RoomCreate,
    room_service: RoomService = Depends(get_room_service)
) -> RoomResponse:
    """
    Create a new room and append it to its property's room list.

    Args:
        room_data: Room creation data
        room_service: Room service instance

    Returns:
        Created room

    Raises:
        NotFoundError: If the property doesn't exist
        ValidationError: If room data is invalid
    """
    room = await room_service.create_room(room_data)
    return RoomResponse.model_validate(room.to_dict())


@router.get(
    "/property/{property_id}",
    response_model=List[RoomResponse],
    status_code=status.HTTP_200_OK,
    summary="List rooms of a property",
    description="Get a property's rooms in creation order",
    responses=get_error_responses(400, 500)
)
async def list_rooms_by_property(
    property_id: UUID = Path(..., description="Property ID"),
    room_service: RoomService = Depends(get_room_service)
) -> List[RoomResponse]:
    rooms = await room_service.list_rooms_by_property(property_id)
    return [RoomResponse.model_validate(room.to_dict()) for room in rooms]


@router.get(
    "/{room_id}",
    response_model=RoomDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get room details",
    description="Get a room with its owning property",
    responses=get_crud_error_responses()
)
async def get_room(
    room_id: UUID = Path(..., description="Room ID"),
    room_service: RoomService = Depends(get_room_service)
) -> RoomDetailResponse:
    room = await room_service.get_room(room_id)
    return RoomDetailResponse.model_validate(room.to_dict(include_property=True))


@router.put(
    "/{room_id}",
    response_model=RoomResponse,
    status_code=status.HTTP_200_OK,
    summary="Update room",
    description="Merge the supplied fields into the room; the owning property cannot change",
    responses=get_crud_error_responses()
)
async def update_room(
    room_data: RoomUpdate,
    room_id: UUID = Path(..., description="Room ID"),
    room_service: RoomService = Depends(get_room_service)
) -> RoomResponse:
    room = await room_service.update_room(room_id, room_data)
    return RoomResponse.model_validate(room.to_dict())


@router.delete(
    "/{room_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete room",
    description="Delete a room and remove it from its property's room list",
    responses=get_crud_error_responses()
)
async def delete_room(
    room_id: UUID = Path(..., description="Room ID"),
    room_service: RoomService = Depends(get_room_service)
) -> DeleteResponse:
    await room_service.delete_room(room_id)
    return DeleteResponse(message="Room deleted")
