"""Health Probe: liveness endpoint with uptime, memory and user counts.

Invariants:
    - GET /health always returns 200 if the process is up
    - peak_memory is the process high-water mark RSS, not current usage
    - uptime is measured from app creation (app.state.started_at, monotonic clock)
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status

from users_api.api.dependencies import get_app_settings, get_store
from users_api.config import Settings
from users_api.core.user_store import UserStore
from users_api.infrastructure.observability import peak_memory_mb

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(
    request: Request,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Basic liveness probe. Returns 200 if the process is up."""
    uptime = time.monotonic() - request.app.state.started_at
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment,
        "uptime_seconds": round(uptime, 3),
        "peak_memory": peak_memory_mb(),
        "users": store.counts(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
