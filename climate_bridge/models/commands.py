"""
Command models for HomeKit-originated writes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Command(str, Enum):
    """User-settable characteristics that produce a hub service call."""
    TARGET_TEMPERATURE = "target_temperature"
    TARGET_HEATING_COOLING = "target_heating_cooling"
    ROTATION_SPEED = "rotation_speed"
    ECO = "eco"
    FAN_ONLY = "fan_only"


@dataclass(frozen=True)
class ServiceCall:
    """A single hub service invocation."""
    domain: str
    service: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return f"/api/services/{self.domain}/{self.service}"
