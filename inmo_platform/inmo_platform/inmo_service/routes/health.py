"""
Health check endpoints for the listing service
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from datetime import datetime, timezone
from typing import Dict, Any
import time

from ..db import Database, get_database

router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.api_route("", methods=["GET", "HEAD"], status_code=status.HTTP_200_OK)
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Basic liveness check.

    Returns:
        dict: Health status, service identity and timestamp
    """
    settings = request.app.state.settings
    return {
        "status": "OK",
        "message": "Server is running",
        "timestamp": _now(),
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION
    }


@router.api_route("/detailed", methods=["GET", "HEAD"], status_code=status.HTTP_200_OK)
def detailed_health_check(
    request: Request,
    database: Database = Depends(get_database)
) -> Dict[str, Any]:
    """
    Readiness check including database connectivity and uptime.

    Raises:
        HTTPException: 503 if the database cannot be reached
    """
    settings = request.app.state.settings
    db_connected = database.check_connection()
    uptime = time.monotonic() - request.app.state.started_at

    response = {
        "status": "OK" if db_connected else "DEGRADED",
        "message": "All services are operational" if db_connected else "Database is unreachable",
        "timestamp": _now(),
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "checks": {
            "database": "connected" if db_connected else "disconnected"
        },
        "uptime_seconds": round(uptime, 3)
    }

    if not db_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response
        )

    return response


@router.api_route("/ping", methods=["GET", "HEAD"], status_code=status.HTTP_200_OK)
async def ping() -> Dict[str, str]:
    return {"message": "pong"}
