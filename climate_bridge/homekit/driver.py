"""
HAP-python accessory driver setup.
"""

import asyncio
import os

from pyhap.accessory_driver import AccessoryDriver

from climate_bridge.models.config import BridgeConfig

PERSIST_FILE = "accessory.state"


def create_driver(config: BridgeConfig, loop: asyncio.AbstractEventLoop) -> AccessoryDriver:
    """
    Build the accessory driver with persistent pairing storage.

    Args:
        config: Bridge configuration (HomeKit identity and storage path)
        loop: Running event loop shared with the sync loop and status API

    Returns:
        AccessoryDriver, not yet started
    """
    os.makedirs(config.persist_path, exist_ok=True)

    return AccessoryDriver(
        loop=loop,
        port=config.homekit_port,
        persist_file=os.path.join(config.persist_path, PERSIST_FILE),
        pincode=config.homekit_pincode.encode("ascii"),
        mac=config.homekit_username,
    )
