"""
Lead management API endpoints.
Fixed paths are registered before ``/{lead_id}`` so they are not read as ids.
Reads return each lead with its property and room resolved.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
from uuid import UUID

from rental_manager.models.lead import LeadStatus
from rental_manager.services.lead import LeadService
from rental_manager.schemas.common import DeleteResponse
from rental_manager.schemas.lead import (
    LeadCreate,
    LeadUpdate,
    LeadResponse,
    LeadDetailResponse
)
from rental_manager.schemas.error import get_crud_error_responses, get_error_responses
from rental_manager.utils.dependencies import get_lead_service


router = APIRouter(prefix="/leads", tags=["Leads"])


def _to_detail(lead) -> LeadDetailResponse:
    return LeadDetailResponse.model_validate(lead.to_dict(include_property=True, include_room=True))


def _to_responses(leads) -> List[LeadDetailResponse]:
    return [_to_detail(lead) for lead in leads]


@router.get(
    "",
    response_model=List[LeadDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List leads",
    responses=get_error_responses(500)
)
async def list_leads(
    lead_service: LeadService = Depends(get_lead_service)
) -> List[LeadDetailResponse]:
    return _to_responses(await lead_service.list_leads())


@router.post(
    "",
    response_model=LeadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new lead",
    description="Create a lead with status New, optionally pointing at a property and room",
    responses=get_crud_error_responses()
)
async def create_lead(
    lead_data: LeadCreate,
    lead_service: LeadService = Depends(get_lead_service)
) -> LeadResponse:
    """
    Create a new lead.

    Args:
        lead_data: Lead creation data
        lead_service: Lead service instance

    Returns:
        Created lead

    Raises:
        NotFoundError: If a referenced property or room doesn't exist
        ValidationError: If lead data is invalid
    """
    lead = await lead_service.create_lead(lead_data)
    return LeadResponse.model_validate(lead.to_dict())


@router.get(
    "/reminders",
    response_model=List[LeadDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List pending reminders",
    description="Leads with a reminder set that have not landed, earliest reminder first",
    responses=get_error_responses(500)
)
async def list_pending_reminders(
    lead_service: LeadService = Depends(get_lead_service)
) -> List[LeadDetailResponse]:
    return _to_responses(await lead_service.list_pending_reminders())


@router.get(
    "/status/{lead_status}",
    response_model=List[LeadDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List leads by status",
    responses=get_error_responses(400, 500)
)
async def list_leads_by_status(
    lead_status: LeadStatus = Path(..., description="Pipeline status"),
    lead_service: LeadService = Depends(get_lead_service)
) -> List[LeadDetailResponse]:
    return _to_responses(await lead_service.list_leads_by_status(lead_status))


@router.get(
    "/property/{property_id}",
    response_model=List[LeadDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List leads of a property",
    responses=get_error_responses(400, 500)
)
async def list_leads_by_property(
    property_id: UUID = Path(..., description="Property ID"),
    lead_service: LeadService = Depends(get_lead_service)
) -> List[LeadDetailResponse]:
    return _to_responses(await lead_service.list_leads_by_property(property_id))


@router.get(
    "/{lead_id}",
    response_model=LeadDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get lead details",
    description="Get a lead with its referenced property and room",
    responses=get_crud_error_responses()
)
async def get_lead(
    lead_id: UUID = Path(..., description="Lead ID"),
    lead_service: LeadService = Depends(get_lead_service)
) -> LeadDetailResponse:
    return _to_detail(await lead_service.get_lead(lead_id))


@router.put(
    "/{lead_id}",
    response_model=LeadResponse,
    status_code=status.HTTP_200_OK,
    summary="Update lead",
    description="Merge the supplied fields into the lead; any status may follow any other",
    responses=get_crud_error_responses()
)
async def update_lead(
    lead_data: LeadUpdate,
    lead_id: UUID = Path(..., description="Lead ID"),
    lead_service: LeadService = Depends(get_lead_service)
) -> LeadResponse:
    lead = await lead_service.update_lead(lead_id, lead_data)
    return LeadResponse.model_validate(lead.to_dict())


@router.delete(
    "/{lead_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete lead",
    responses=get_crud_error_responses()
)
async def delete_lead(
    lead_id: UUID = Path(..., description="Lead ID"),
    lead_service: LeadService = Depends(get_lead_service)
) -> DeleteResponse:
    await lead_service.delete_lead(lead_id)
    return DeleteResponse(message="Lead deleted")
