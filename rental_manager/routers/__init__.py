"""
API route handlers for the Rental Manager API.
"""

from .properties import router as properties_router
from .rooms import router as rooms_router
from .leads import router as leads_router
from .dashboard import router as dashboard_router

__all__ = ["properties_router", "rooms_router", "leads_router", "dashboard_router"]
