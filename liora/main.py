"""
Main FastAPI application with modular architecture.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from liora.config import get_settings
from liora.routes import (
    interview_router,
    auth_router,
    calls_router,
    notifications_router,
    preferences_router,
    companies_router,
    investors_router,
    uploads_router,
    founder_router,
)
from liora.core.deps import get_auth_store, get_founder_store, get_investor_store
from liora.core.events import event_bus, EventType, log_toast
from liora.core.providers import registry
from liora.core.exceptions import AppException, http_status_for
from liora.database import init_db, close_db
from liora.models.schemas import HealthResponse

# Import providers to register them
import liora.providers  # noqa: F401


# Configure logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format=settings.log_format
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    # Startup
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Upload mode: {settings.upload_mode.value}")

    logger.info("📦 Initializing database...")
    await init_db()
    logger.info("✅ Database initialized")

    # Hydrate persisted stores before serving requests
    for store in (get_auth_store(), get_investor_store(), get_founder_store()):
        logger.info(f"💾 Hydrated {store.storage_key}")

    if event_bus.handler_count(EventType.TOAST) == 0:
        event_bus.subscribe(EventType.TOAST, log_toast)

    yield

    # Shutdown
    logger.info("👋 Shutting down...")
    event_bus.unsubscribe(EventType.TOAST, log_toast)
    await registry.cleanup_all()
    await close_db()
    logger.info("✅ Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Matchmaking backend for startup founders and investors: profiles, preferences, discovery, interviews, calls and uploads.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# Exception handler for custom exceptions
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle application-specific exceptions."""
    status_code = http_status_for(exc)
    if status_code >= 500:
        logger.error(f"Application error: {exc.code} - {exc.message}")
    else:
        logger.info(f"Request failed: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict()
    )


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.parsed_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(interview_router)
app.include_router(auth_router)
app.include_router(calls_router)
app.include_router(notifications_router)
app.include_router(preferences_router)
app.include_router(companies_router)
app.include_router(investors_router)
app.include_router(uploads_router)
app.include_router(founder_router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment.value,
    )


@app.get("/info")
async def app_info():
    """Get application information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment.value,
        "available_providers": {
            "llm": registry.list_providers("llm"),
            "upload": registry.list_providers("upload"),
        },
        "default_llm": settings.default_llm_provider,
        "interview_llm_enabled": settings.interview_llm_enabled,
        "upload_mode": settings.upload_mode.value,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "liora.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
