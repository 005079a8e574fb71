"""
Bridge context wiring.
Centralizes client initialization so every component shares one instance.
"""

from dataclasses import dataclass

from climate_bridge.devices.hub_client import HubClient
from climate_bridge.homekit.accessory import ClimateAccessory
from climate_bridge.models.config import BridgeConfig
from climate_bridge.services.command_router import CommandRouter
from climate_bridge.services.sync_loop import SyncLoop


@dataclass
class BridgeContext:
    """Process-lifetime owner of the bridge components."""
    config: BridgeConfig
    hub: HubClient
    router: CommandRouter
    accessory: ClimateAccessory
    sync_loop: SyncLoop


def build_context(config: BridgeConfig, driver) -> BridgeContext:
    """
    Build the bridge components for one climate entity.

    Args:
        config: Validated bridge configuration
        driver: HAP accessory driver the accessory will be added to

    Returns:
        BridgeContext with every component wired up
    """
    hub = HubClient(
        base_url=config.ha_url,
        token=config.token,
        entity_id=config.climate,
        sim_mode=config.sim_mode
    )
    router = CommandRouter(hub, config.climate)
    accessory = ClimateAccessory(driver, config.name, router)
    sync_loop = SyncLoop(hub, accessory, config.poll_interval_seconds)

    return BridgeContext(
        config=config,
        hub=hub,
        router=router,
        accessory=accessory,
        sync_loop=sync_loop
    )
