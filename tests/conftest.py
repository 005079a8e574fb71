"""
Pytest fixtures for testing.
Provides a stand-in HAP driver, configuration and mocked hub clients.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from pyhap.loader import get_loader

from climate_bridge.devices.hub_client import HubClient
from climate_bridge.homekit.accessory import ClimateAccessory
from climate_bridge.models.config import BridgeConfig
from climate_bridge.services.command_router import CommandRouter

HA_URL = "http://hass.local:8123"
ENTITY_ID = "climate.living_room"


class MockDriver:
    """
    Minimal accessory driver: loads service definitions and records
    characteristic notifications instead of sending them to controllers.
    """

    def __init__(self):
        self.loader = get_loader()
        self.published = []

    def publish(self, data, sender_client_addr=None, immediate=False):
        self.published.append(data)


@pytest.fixture
def mock_driver():
    return MockDriver()


@pytest.fixture
def bridge_config():
    return BridgeConfig(
        ha_url=HA_URL,
        token="test-token",
        climate=ENTITY_ID,
        name="Living Room AC",
        poll_interval=5000,
        persist_path="/tmp/homekit-test",
    )


@pytest.fixture
def hub_client():
    """Real client; pair with the httpx_mock fixture."""
    return HubClient(base_url=HA_URL, token="test-token", entity_id=ENTITY_ID)


@pytest.fixture
def mock_hub():
    """
    Provides a mock hub client.
    Use this when the test is about what gets sent, not how it is sent.
    """
    hub = AsyncMock(spec=HubClient)
    hub.entity_id = ENTITY_ID
    hub.sim_mode = False
    hub.fetch_snapshot = AsyncMock(return_value=None)
    hub.call_service = AsyncMock(return_value=True)
    hub.execute = AsyncMock(return_value=True)
    return hub


@pytest.fixture
def mock_router():
    return MagicMock(spec=CommandRouter)


@pytest.fixture
def accessory(mock_driver, mock_router):
    return ClimateAccessory(mock_driver, "Living Room AC", mock_router)
