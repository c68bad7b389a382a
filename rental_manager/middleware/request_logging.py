"""
Request id and access logging middleware.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from rental_manager.services.error_handler import ErrorHandlerService

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an 8-character id.

    The id is put on ``request.state`` before routing so error bodies can carry
    it, and echoed back in the ``X-Request-ID`` response header. Exceptions that
    no handler claimed are turned into a generic 500 here.
    """

    def __init__(self, app: ASGIApp, enable_request_logging: bool = True):
        super().__init__(app)
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            response = ErrorHandlerService.handle_unexpected_error(exc, request)

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id

        if self.enable_request_logging:
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed * 1000:.1f} ms)",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "processing_time": elapsed,
                    "client_ip": request.client.host if request.client else "unknown"
                }
            )

        return response
