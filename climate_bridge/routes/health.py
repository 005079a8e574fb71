"""
Health check endpoints.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request

from climate_bridge.utils.auth import validate_api_key

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """
    Liveness check for the add-on watchdog.
    No authentication required.

    Returns:
        dict: {"ok": true}
    """
    return {"ok": True}


@router.get("/health")
async def health_check(request: Request, _: None = Depends(validate_api_key)):
    """
    Hub connectivity as seen by the sync loop.

    Returns:
        dict: {
            "ok": true,
            "timestamp": "2024-01-01T12:00:00+00:00",
            "hub_reachable": true,
            "consecutive_failures": 0
        }
    """
    sync_loop = request.app.state.context.sync_loop
    hub_reachable = sync_loop.last_success_at is not None and sync_loop.consecutive_failures == 0

    return {
        "ok": sync_loop.running,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "hub_reachable": hub_reachable,
        "consecutive_failures": sync_loop.consecutive_failures
    }
