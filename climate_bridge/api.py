"""
FastAPI application for bridge diagnostics.
"""

from fastapi import FastAPI

from climate_bridge.version import __version__
from climate_bridge.dependencies import BridgeContext
from climate_bridge.routes import health, status


def create_app(context: BridgeContext) -> FastAPI:
    """
    Create the status API bound to a bridge context.

    Args:
        context: Running bridge components

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title="HomeKit Climate Bridge",
        version=__version__,
        description="Diagnostics for the HomeKit climate bridge"
    )
    app.state.context = context

    app.include_router(health.router, tags=["Health"])
    app.include_router(status.router, tags=["Status"])

    @app.get("/")
    async def root():
        """
        Root endpoint - basic info.

        Returns:
            dict: Application information
        """
        return {
            "ok": True,
            "name": context.config.name,
            "version": __version__,
            "entity_id": context.config.climate
        }

    return app
