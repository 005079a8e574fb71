"""
Status API endpoint - returns what the accessory currently exposes.
"""

from fastapi import APIRouter, Depends, Request

from climate_bridge.utils.auth import validate_api_key

router = APIRouter()


@router.get("/status")
async def get_status(request: Request, _: None = Depends(validate_api_key)):
    """
    Get the accessory state and sync loop statistics.

    The state reflects the last successful poll, not pending commands.
    """
    context = request.app.state.context

    return {
        "entity_id": context.config.climate,
        "sim_mode": context.hub.sim_mode,
        "accessory": context.accessory.to_dict(),
        "sync": context.sync_loop.to_dict(),
        "pending_commands": context.router.pending
    }
