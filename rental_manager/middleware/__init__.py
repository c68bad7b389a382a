"""
Middleware package for the Rental Manager API.
"""

from .request_logging import RequestLoggingMiddleware, REQUEST_ID_HEADER

__all__ = ["RequestLoggingMiddleware", "REQUEST_ID_HEADER"]
