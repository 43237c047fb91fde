# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation): 
# This file provides health check endpoints that tell us if VideoTube's API is working properly,
# like a doctor's checkup that also makes sure the database answers.
# 🧪 Purpose (Technical Summary): 
# Health check endpoints: liveness, database-backed health, and a detailed view with
# process/system metrics. Responses use the standard ApiResponse envelope.
# 🔗 Dependencies: 
# FastAPI, psutil, app.shared.infrastructure.database (connection manager on app.state)
# 🔄 Connected Modules / Calls From: 
# app.main.py (mounted without prefix), monitoring systems, load balancers

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.shared.config.settings import Settings, get_app_settings
from app.shared.core.responses import ApiResponse
from app.shared.infrastructure.database.connection import DatabaseConnectionManager
from app.shared.infrastructure.database.session import get_database

logger = logging.getLogger(__name__)

# Create router for health endpoints
health_router = APIRouter()

# Application start time for uptime calculation
_app_start_time = datetime.now(timezone.utc)

SERVICE_NAME = "videotube-api"


def _uptime_seconds() -> float:
    return (datetime.now(timezone.utc) - _app_start_time).total_seconds()


def _envelope(status_code: int, data: Dict[str, Any], message: str) -> JSONResponse:
    body = ApiResponse.ok(data, message=message, status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


@health_router.get("/health",
                  summary="Basic Health Check",
                  description="Liveness plus a database ping, for load balancers and monitoring",
                  tags=["Health Check"])
async def health_check(
    db: DatabaseConnectionManager = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Basic health check endpoint

    Returns 200 when the database answers, 503 otherwise.
    """
    db_health = await db.health_check()
    healthy = db_health["status"] == "healthy"

    data = {
        "status": "healthy" if healthy else "unhealthy",
        "service": SERVICE_NAME,
        "version": settings.APP_VERSION,
        "database": db_health,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not healthy:
        logger.warning(f"Health check failed: {db_health.get('error')}")
        return _envelope(503, data, "Service unavailable")
    return _envelope(200, data, "OK")


@health_router.get("/health/live",
                  summary="Liveness Probe",
                  description="Process liveness probe endpoint",
                  tags=["Health Check"])
async def liveness_probe() -> Response:
    """Returns 200 while the process is running."""
    return Response(status_code=200, content="OK")


@health_router.get("/health/detailed",
                  summary="Detailed Health Check",
                  description="Database status with process and system resource metrics",
                  tags=["Health Check"])
async def detailed_health_check(
    db: DatabaseConnectionManager = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    start_time = datetime.now(timezone.utc)
    overall_status = "healthy"

    db_health = await db.health_check()
    if db_health["status"] != "healthy":
        overall_status = "unhealthy"

    system_metrics = _get_system_metrics()
    if (system_metrics["cpu_percent"] > 90 or
            system_metrics["memory_percent"] > 90 or
            system_metrics["disk_percent"] > 95):
        if overall_status == "healthy":
            overall_status = "degraded"

    data = {
        "status": overall_status,
        "service": SERVICE_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "uptime_seconds": _uptime_seconds(),
        "response_time_seconds": (datetime.now(timezone.utc) - start_time).total_seconds(),
        "components": {
            "database": db_health,
            "system": system_metrics,
        },
    }

    # degraded is still operational
    status_code = 503 if overall_status == "unhealthy" else 200
    return _envelope(status_code, data, overall_status)


def _get_system_metrics() -> Dict[str, Any]:
    """Get basic system metrics"""
    memory = psutil.virtual_memory()
    disk = psutil.disk_usage("/")
    process = psutil.Process()

    return {
        "cpu_percent": psutil.cpu_percent(interval=None),
        "memory_percent": memory.percent,
        "memory_available_mb": round(memory.available / (1024 * 1024), 1),
        "disk_percent": disk.percent,
        "process_rss_mb": round(process.memory_info().rss / (1024 * 1024), 1),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
