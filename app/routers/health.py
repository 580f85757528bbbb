"""
Health check router.
"""
import asyncio
import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from prometheus_client import REGISTRY, Gauge
from sqlalchemy import text

from app.config import get_settings
from app.database import engine

logger = logging.getLogger("app.health")
router = APIRouter(prefix="/health", tags=["Health"])

settings = get_settings()

health_check_status = Gauge(
    "photo_albums_health_check_status",
    "Health check status (1=healthy, 0=unhealthy)",
    registry=REGISTRY,
)


async def _check_db() -> None:
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))


@router.get(
    "",
    summary="Health check",
)
async def health_check() -> Dict[str, Any]:
    """
    Application and database status.

    - runs `SELECT 1` with a one second timeout
    - 503 when the database does not answer
    """
    start_time = time.perf_counter()

    try:
        await asyncio.wait_for(_check_db(), timeout=1.0)
    except asyncio.TimeoutError:
        logger.warning("DB health check timeout", extra={"event": "health"})
        health_check_status.set(0)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection timeout",
        )
    except Exception as e:
        logger.warning(
            "DB health check failed",
            extra={"event": "health", "error": str(e)[:200]},
        )
        health_check_status.set(0)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed",
        )

    health_check_status.set(1)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
    }


@router.get(
    "/liveness",
    summary="Liveness probe",
)
async def liveness_probe() -> Dict[str, str]:
    """The process is up; no dependencies are checked."""
    return {"status": "alive"}
