"""
Domain models for the bridged climate entity and its HomeKit surface.

These are pure data structures with no business logic dependencies.
"""

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HeatingCoolingState(IntEnum):
    """HomeKit TargetHeatingCoolingState values."""
    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class ClimateAttributes(BaseModel):
    """Subset of climate entity attributes read by the bridge."""
    current_temperature: Optional[float] = None
    temperature: Optional[float] = None
    fan_mode: Optional[str] = None
    preset_mode: Optional[str] = None

    class Config:
        extra = "ignore"


class EntityState(BaseModel):
    """Body of GET /api/states/{entity_id}."""
    entity_id: Optional[str] = None
    state: str
    attributes: ClimateAttributes = Field(default_factory=ClimateAttributes)

    class Config:
        extra = "ignore"


@dataclass(frozen=True)
class ClimateSnapshot:
    """One poll's worth of hub state. Replaced wholesale every poll."""
    state: str
    current_temperature: Optional[float] = None
    target_temperature: Optional[float] = None
    fan_mode: Optional[str] = None
    preset_mode: Optional[str] = None

    @classmethod
    def from_entity_state(cls, entity: EntityState) -> "ClimateSnapshot":
        attrs = entity.attributes
        return cls(
            state=entity.state,
            current_temperature=attrs.current_temperature,
            target_temperature=attrs.temperature,
            fan_mode=attrs.fan_mode,
            preset_mode=attrs.preset_mode,
        )


@dataclass(frozen=True)
class AccessoryUpdate:
    """Translated characteristic values ready to apply to the accessory."""
    target_heating_cooling: HeatingCoolingState
    current_temperature: Optional[float]
    target_temperature: Optional[float]
    fan_speed_percent: int
    fan_running: bool
    eco_on: bool
    fan_only_on: bool


@dataclass
class AccessoryState:
    """Characteristic values currently exposed over HomeKit."""
    target_heating_cooling: HeatingCoolingState = HeatingCoolingState.OFF
    current_temperature: float = 0.0
    target_temperature: float = 10.0  # HomeKit TargetTemperature minimum
    fan_active: bool = True  # Always true, the fan surface is never switched off
    fan_speed_percent: int = 100
    fan_running: bool = False
    eco_on: bool = False
    fan_only_on: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        data = asdict(self)
        data["target_heating_cooling"] = self.target_heating_cooling.name
        return data
