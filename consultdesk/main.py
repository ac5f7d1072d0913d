"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from consultdesk.config import settings
from consultdesk.application.dto.base_dto import HealthCheckResponseDTO
from consultdesk.infrastructure.db.database import engine
from consultdesk.infrastructure.db.models import create_all_tables
from consultdesk.infrastructure.events.event_setup import initialize_event_system
from consultdesk.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    BusinessException,
    business_exception_handler,
)
from consultdesk.infrastructure.web.routers import (
    clients,
    dashboard,
    date_ranges,
    engagements,
    invoices,
    time_logs,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Creates missing tables and wires the event handlers on startup.
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    create_all_tables(engine)
    initialize_event_system()

    yield

    logger.info("Shutting down application")
    engine.dispose()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlerMiddleware)

    app.add_exception_handler(BusinessException, business_exception_handler)

    routers = [
        (date_ranges.router, "/date-ranges", "Date Ranges"),
        (clients.router, "/clients", "Clients"),
        (engagements.router, "/engagements", "Engagements"),
        (time_logs.router, "/time-logs", "Time Tracking"),
        (invoices.router, "/invoices", "Invoices"),
        (dashboard.router, "/dashboard", "Dashboard"),
    ]
    for router, prefix, tag in routers:
        app.include_router(router, prefix=f"{settings.api_prefix}{prefix}", tags=[tag])

    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO)
    async def health_check() -> HealthCheckResponseDTO:
        """Health check endpoint for monitoring."""
        return HealthCheckResponseDTO(
            status="healthy",
            version=settings.api_version,
            environment=settings.environment,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unknown paths and methods use the same error body as domain errors."""
        message = exc.detail
        if exc.status_code == 404:
            message = f"The path {request.url.path} was not found"
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR",
                "message": message,
                "status_code": exc.status_code,
            },
            headers=getattr(exc, "headers", None),
        )

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "consultdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
