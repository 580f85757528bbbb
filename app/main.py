"""
FastAPI Photo Albums Application.

Main application entry point that configures:
- CORS middleware
- API routers
- Uploaded files under /uploads
- Database lifecycle
- Logging system
- Exception handlers
- Prometheus metrics
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.database import close_db, init_db
from app.middlewares.error_handlers import setup_exception_handlers
from app.middlewares.logging_middleware import LoggingMiddleware
from app.routers import (
    albums_router,
    health_router,
    photos_router,
    system_router,
    theme_router,
)
from app.services.local_storage import get_storage_service
from app.utils.logger import get_request_id, log_error, log_info, setup_logging
from app.utils.prometheus_metrics import exceptions_total, setup_prometheus

settings = get_settings()
logger = logging.getLogger("app")

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Create tables on startup and release connections on shutdown."""
    get_storage_service().ensure_dir()
    await init_db()
    log_info(
        "Application startup completed",
        event="lifecycle",
        version=settings.app_version,
        environment=settings.environment.value,
        uploads_dir=str(settings.uploads_dir),
    )

    yield

    await close_db()
    log_info("Application shutdown completed", event="lifecycle")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Photo Albums

A local photo album manager built with FastAPI:

- **Albums**: create, rename, reorder, set covers, download as ZIP
- **Photos**: upload, delete, reorder, move between albums
- **Theme**: the UI theme is stored on the server
- **Proxy**: fetch images dragged in from other sites
    """,
    openapi_tags=[
        {"name": "Albums", "description": "Album management and ordering"},
        {"name": "Photos", "description": "Photo upload and management"},
        {"name": "Theme", "description": "UI theme"},
        {"name": "System", "description": "Disk usage and image proxy"},
        {"name": "Health", "description": "Health checks"},
    ],
    lifespan=lifespan,
)

# Prometheus: FastAPI metrics + node info at /metrics
setup_prometheus(app)

# Domain errors → 4xx/5xx responses
setup_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Unhandled exception handler.
    Logs the error and answers 500 with the Request ID so the failure can
    be found in the logs.
    """
    exceptions_total.inc()
    rid = get_request_id()

    log_error(
        "Unhandled exception occurred",
        error_type=type(exc).__name__,
        error_message=str(exc),
        error_code="INTERNAL_SERVER_ERROR",
        http_method=request.method,
        http_path=request.url.path,
        request_id=rid,
        event="exception",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "request_id": rid,
        },
    )


# Include routers
app.include_router(health_router)
app.include_router(albums_router)
app.include_router(photos_router)
app.include_router(theme_router)
app.include_router(system_router)

# Uploaded binaries; the directory must exist before mounting
get_storage_service().ensure_dir()
app.mount(
    settings.uploads_url_prefix,
    StaticFiles(directory=str(settings.uploads_dir)),
    name="uploads",
)


@app.get(
    "/",
    tags=["Root"],
    summary="API information",
)
async def root():
    """
    Root endpoint with API information.
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
