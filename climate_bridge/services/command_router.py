"""
Command router - turns HomeKit characteristic writes into hub service calls.

Each Command maps to one translator function and one climate service. There is
no debouncing and no optimistic state update: every write produces exactly one
hub call, and the accessory only changes when the next poll reports back.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Set

from climate_bridge.devices.hub_client import HubClient
from climate_bridge.models.commands import Command, ServiceCall
from climate_bridge.services import translator
from climate_bridge.utils.logging import get_logger

logger = get_logger(__name__)

CLIMATE_DOMAIN = "climate"


@dataclass(frozen=True)
class CommandRoute:
    """Translator and hub service for one command."""
    service: str
    payload: Callable[[Any], Dict[str, Any]]
    domain: str = CLIMATE_DOMAIN


COMMAND_ROUTES: Dict[Command, CommandRoute] = {
    Command.TARGET_TEMPERATURE: CommandRoute("set_temperature", translator.temperature_payload),
    Command.TARGET_HEATING_COOLING: CommandRoute("set_hvac_mode", translator.hvac_mode_payload),
    Command.ROTATION_SPEED: CommandRoute("set_fan_mode", translator.fan_mode_payload),
    Command.ECO: CommandRoute("set_preset_mode", translator.preset_payload),
    Command.FAN_ONLY: CommandRoute("set_hvac_mode", translator.fan_only_payload),
}


class CommandRouter:
    """
    Stateless dispatch from Command to hub service call.

    submit() is the entry point for HAP setter callbacks: it schedules the hub
    call on the running loop and returns immediately. Callers must not assume
    that calls complete, or complete in submission order.
    """

    def __init__(self, hub: HubClient, entity_id: str):
        self.hub = hub
        self.entity_id = entity_id
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def build_call(self, command: Command, value: Any) -> ServiceCall:
        """
        Build the service call for a characteristic write.

        Args:
            command: Which characteristic was written
            value: Raw HomeKit value

        Returns:
            ServiceCall targeting the configured entity
        """
        route = COMMAND_ROUTES[command]
        data = {"entity_id": self.entity_id, **route.payload(value)}
        return ServiceCall(domain=route.domain, service=route.service, data=data)

    async def dispatch(self, command: Command, value: Any) -> bool:
        """
        Translate and send one command. Never raises.

        Returns:
            True if the hub accepted the call
        """
        try:
            call = self.build_call(command, value)
            logger.info(
                "command_dispatched",
                command=command.value,
                value=value,
                service=f"{call.domain}.{call.service}",
                data=call.data,
            )
            return await self.hub.execute(call)
        except Exception:
            logger.exception("command_dispatch_failed", command=command.value, value=value)
            return False

    def submit(self, command: Command, value: Any) -> asyncio.Task:
        """
        Schedule dispatch() without waiting for it.

        Must be called from the event loop thread.
        """
        task = asyncio.get_running_loop().create_task(self.dispatch(command, value))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every submitted command to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
