"""
Pydantic schemas for dashboard statistics.
"""

from pydantic import Field
from typing import Dict
from rental_manager.schemas.common import CamelModel


class DashboardSummary(CamelModel):
    """Aggregate counts shown on the operator dashboard."""

    total_properties: int = Field(..., ge=0)
    total_rooms: int = Field(..., ge=0)
    rooms_by_status: Dict[str, int] = Field(
        ...,
        description="Room count per occupancy status, every status included",
        examples=[{"Vacant": 3, "Occupied": 5}]
    )
    occupancy_rate: float = Field(
        ...,
        ge=0,
        le=1,
        description="Occupied rooms divided by total rooms, 0 when there are no rooms"
    )
    total_leads: int = Field(..., ge=0)
    leads_by_status: Dict[str, int] = Field(
        ...,
        description="Lead count per pipeline status, every status included"
    )
    pending_reminders: int = Field(
        ...,
        ge=0,
        description="Leads with a reminder set that have not landed"
    )
