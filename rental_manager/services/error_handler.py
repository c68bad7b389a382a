"""
Translation of exceptions into JSON error responses.

Every error body has the same shape::

    {"message": ..., "code": ..., "timestamp": ..., "requestId": ..., "details": [...]}

``details`` is only present when there is field-level information.
"""

from typing import Dict, Any, Optional, List
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from rental_manager.utils.exceptions import APIException
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route not found"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

# Substrings of driver messages mapped to client-safe descriptions
CONSTRAINT_MESSAGES = (
    ("unique constraint", "Duplicate value for unique field"),
    ("foreign key constraint", "Referenced record does not exist"),
    ("not null constraint", "Required field cannot be empty"),
    ("check constraint", "Value does not meet validation requirements"),
)


class ErrorHandlerService:
    """
    Static helpers used by the application's exception handlers.
    Each ``handle_*`` method logs the failure and returns the response to send.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "message": message,
            "code": error_code,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        }
        if details:
            body["details"] = details
        if request_id:
            body["requestId"] = request_id
        return body

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Application errors: validation (400), not found (404), storage (500)."""
        code = exception.error_code or "API_ERROR"
        request_id = ErrorHandlerService._log(
            logging.WARNING, request, f"{code} - {exception.detail}",
            error_code=code, status_code=exception.status_code
        )
        return ErrorHandlerService._respond(
            exception.status_code,
            code,
            exception.detail,
            request_id,
            details=getattr(exception, "field_errors", None),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Request body, path and query validation failures.

        Works for both FastAPI's ``RequestValidationError`` and a raw Pydantic
        ``ValidationError``; the first failing field is named in ``message``.
        """
        details = [
            {
                "field": " -> ".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input"),
            }
            for error in exception.errors()
        ]

        if details:
            message = f"Validation failed: {details[0]['field']}: {details[0]['message']}"
        else:
            message = "Request validation failed"

        request_id = ErrorHandlerService._log(
            logging.WARNING, request, f"{len(details)} invalid field(s): {message}",
            error_count=len(details)
        )
        return ErrorHandlerService._respond(400, "VALIDATION_ERROR", message, request_id, details=details)

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Database failures that escaped the service layer.
        Constraint violations become 409; anything else is a 500. Driver text
        is logged but never returned.
        """
        if isinstance(exception, IntegrityError):
            status_code, code = 409, "INTEGRITY_ERROR"
            constraint = ErrorHandlerService._extract_constraint_info(exception)
            message = f"Constraint violation: {constraint}" if constraint else "Data integrity constraint violation"
        else:
            status_code, code, message = 500, "DATABASE_ERROR", "Database operation failed"

        request_id = ErrorHandlerService._log(
            logging.ERROR, request, f"{code} - {exception}",
            error_code=code, exception_type=type(exception).__name__, exc_info=True
        )
        return ErrorHandlerService._respond(status_code, code, message, request_id)

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Framework HTTP errors; an unmatched path is reported as ``Route not found``."""
        if exception.status_code == 404:
            code, message = "ROUTE_NOT_FOUND", ROUTE_NOT_FOUND_MESSAGE
        else:
            code, message = f"HTTP_{exception.status_code}", str(exception.detail)

        request_id = ErrorHandlerService._log(
            logging.WARNING, request, f"HTTP {exception.status_code} - {exception.detail}",
            status_code=exception.status_code
        )
        return ErrorHandlerService._respond(
            exception.status_code, code, message, request_id,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        request_id = ErrorHandlerService._log(
            logging.ERROR, request, f"Unexpected {type(exception).__name__}: {exception}",
            exception_type=type(exception).__name__, exc_info=exception
        )
        return ErrorHandlerService._respond(500, "INTERNAL_SERVER_ERROR", GENERIC_ERROR_MESSAGE, request_id)

    @staticmethod
    def _respond(
        status_code: int,
        code: str,
        message: str,
        request_id: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        body = ErrorHandlerService.format_error_response(code, message, details, request_id)
        return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)

    @staticmethod
    def _log(level: int, request: Optional[Request], message: str, exc_info=None, **context) -> str:
        """Log with request context and return the request id used."""
        request_id = ErrorHandlerService._get_request_id(request)
        context.update(request_id=request_id, path=request.url.path if request else None)
        logger.log(level, f"[{request_id}] {message}", extra=context, exc_info=exc_info)
        return request_id

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Reuse the id assigned by the request middleware, or mint one."""
        request_id = getattr(request.state, "request_id", None) if request is not None else None
        return request_id or str(uuid.uuid4())[:8]

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        error_msg = str(exception.orig).lower()
        for needle, description in CONSTRAINT_MESSAGES:
            if needle in error_msg:
                return description
        return None
