"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError as PydanticValidationError
import logging

from rental_manager.config import settings
from rental_manager.database import test_database_connection, create_tables, close_db_connection
from rental_manager.routers import properties_router, rooms_router, leads_router, dashboard_router
from rental_manager.utils.exceptions import APIException, ServiceUnavailableError
from rental_manager.services.error_handler import ErrorHandlerService
from rental_manager.middleware.request_logging import RequestLoggingMiddleware, REQUEST_ID_HEADER

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.is_sqlite:
        # SQLite databases are local and created on demand
        await create_tables()

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for managing rental properties, their rooms, and prospective tenants.

    ## Features

    * **Properties**: CRUD with an ordered list of owned rooms
    * **Rooms**: rentable units with type, rent and occupancy status
    * **Leads**: tenant inquiries tracked through a sales pipeline with reminders
    * **Dashboard**: occupancy and pipeline counts
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Properties",
            "description": "Property management"
        },
        {
            "name": "Rooms",
            "description": "Room management within properties"
        },
        {
            "name": "Leads",
            "description": "Prospective tenant pipeline and reminders"
        },
        {
            "name": "Dashboard",
            "description": "Aggregate statistics"
        },
        {
            "name": "Health",
            "description": "Service health endpoints"
        }
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

app.add_middleware(
    RequestLoggingMiddleware,
    enable_request_logging=settings.enable_request_logging
)

app.include_router(properties_router, prefix=settings.api_prefix)
app.include_router(rooms_router, prefix=settings.api_prefix)
app.include_router(leads_router, prefix=settings.api_prefix)
app.include_router(dashboard_router, prefix=settings.api_prefix)


def _adapt(handle):
    async def handler(request: Request, exc: Exception):
        return handle(exc, request)
    return handler


def register_exception_handlers(application: FastAPI) -> None:
    """
    Route every error type through ErrorHandlerService.
    Starlette picks the handler of the closest class in the exception's MRO,
    so APIException subclasses never reach the generic HTTP handler.
    """
    handlers = (
        (APIException, ErrorHandlerService.handle_api_exception),
        (RequestValidationError, ErrorHandlerService.handle_validation_error),
        (PydanticValidationError, ErrorHandlerService.handle_validation_error),
        (SQLAlchemyError, ErrorHandlerService.handle_database_error),
        (StarletteHTTPException, ErrorHandlerService.handle_http_exception),
        (Exception, ErrorHandlerService.handle_unexpected_error),
    )
    for exc_class, handle in handlers:
        application.add_exception_handler(exc_class, _adapt(handle))


register_exception_handlers(app)


@app.get("/", tags=["Health"])
async def root():
    """Service name, version and where to find the API."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "api_prefix": settings.api_prefix,
        "docs": app.docs_url
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    """
    db_healthy = await test_database_connection()

    if not db_healthy:
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "rental_manager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
