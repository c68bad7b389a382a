"""
FastAPI dependency injection utilities for database-backed services.
Each request gets its own session and its own service instances.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from rental_manager.database import get_db
from rental_manager.services.property import PropertyService
from rental_manager.services.room import RoomService
from rental_manager.services.lead import LeadService
from rental_manager.services.dashboard import DashboardService


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_room_service(db: AsyncSession = Depends(get_db)) -> RoomService:
    return RoomService(db)


async def get_lead_service(db: AsyncSession = Depends(get_db)) -> LeadService:
    return LeadService(db)


async def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
