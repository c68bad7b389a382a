"""
Dashboard statistics endpoint.
"""

from fastapi import APIRouter, Depends, status

from rental_manager.services.dashboard import DashboardService
from rental_manager.schemas.dashboard import DashboardSummary
from rental_manager.schemas.error import get_error_responses
from rental_manager.utils.dependencies import get_dashboard_service


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/summary",
    response_model=DashboardSummary,
    status_code=status.HTTP_200_OK,
    summary="Dashboard summary",
    description="Counts of properties, rooms and leads by status, occupancy rate and pending reminders",
    responses=get_error_responses(500)
)
async def get_dashboard_summary(
    dashboard_service: DashboardService = Depends(get_dashboard_service)
) -> DashboardSummary:
    summary = await dashboard_service.get_summary()
    return DashboardSummary.model_validate(summary)
