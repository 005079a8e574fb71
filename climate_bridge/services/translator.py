"""
State translation between Home Assistant climate attributes and HomeKit
characteristics.

Inbound functions turn a ClimateSnapshot into characteristic values. Outbound
functions turn a characteristic write into a service-call payload. Every
function here is pure and falls back to a safe default instead of raising.

The fan speed mapping is lossy: a 0-100 percentage collapses onto six hub fan
modes, so writing a percentage and reading it back on the next poll yields the
band's representative speed, not the original value.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from climate_bridge.models.climate import (
    AccessoryUpdate,
    ClimateSnapshot,
    HeatingCoolingState,
)

# Hub HVAC state -> HomeKit heating/cooling state
HVAC_STATE_TO_HEATING_COOLING: Dict[str, HeatingCoolingState] = {
    "off": HeatingCoolingState.OFF,
    "heat": HeatingCoolingState.HEAT,
    "cool": HeatingCoolingState.COOL,
    "auto": HeatingCoolingState.AUTO,
    "dry": HeatingCoolingState.AUTO,  # No dry mode in HomeKit
}

# HomeKit heating/cooling index -> hub HVAC mode
HEATING_COOLING_TO_HVAC_MODE: List[str] = ["off", "heat", "cool", "auto"]

# Hub fan mode -> representative rotation speed
FAN_MODE_TO_SPEED: Dict[str, int] = {
    "silent": 15,
    "low": 30,
    "medium": 45,
    "high": 60,
    "full": 75,
    "auto": 100,
}

# Rotation speed bands, upper bound inclusive, checked low to high
FAN_SPEED_BANDS: List[Tuple[int, str]] = [
    (16, "silent"),
    (33, "low"),
    (50, "medium"),
    (66, "high"),
    (83, "full"),
]

DEFAULT_FAN_MODE = "auto"
DEFAULT_FAN_SPEED = FAN_MODE_TO_SPEED[DEFAULT_FAN_MODE]

ECO_PRESET = "eco"
NO_PRESET = "none"
FAN_ONLY_MODE = "fan_only"
OFF_MODE = "off"


# ---------------------------------------------------------------------------
# Inbound: hub -> HomeKit
# ---------------------------------------------------------------------------

def heating_cooling_from_hvac(state: Optional[str]) -> HeatingCoolingState:
    """
    Map a hub HVAC state to a HomeKit heating/cooling state.

    Args:
        state: Hub entity state (off, heat, cool, auto, dry, fan_only, ...)

    Returns:
        Matching HeatingCoolingState, OFF for anything unrecognised
    """
    return HVAC_STATE_TO_HEATING_COOLING.get(state, HeatingCoolingState.OFF)


def fan_speed_from_mode(fan_mode: Optional[str]) -> int:
    """
    Map a hub fan mode to a rotation speed percentage.

    Missing or unrecognised modes are treated as "auto" (100%).
    """
    return FAN_MODE_TO_SPEED.get(fan_mode, DEFAULT_FAN_SPEED)


def is_fan_running(state: Optional[str], fan_mode: Optional[str]) -> bool:
    """
    Whether the fan should be reported as blowing air.

    The fan counts as running unless the unit is off with its fan on auto.
    A missing fan mode counts as auto.
    """
    if fan_mode is None:
        fan_mode = DEFAULT_FAN_MODE
    return state != OFF_MODE or fan_mode != DEFAULT_FAN_MODE


def eco_from_preset(preset_mode: Optional[str]) -> bool:
    return preset_mode == ECO_PRESET


def fan_only_from_state(state: Optional[str]) -> bool:
    return state == FAN_ONLY_MODE


def translate_snapshot(snapshot: ClimateSnapshot) -> AccessoryUpdate:
    """
    Translate a full hub snapshot into accessory characteristic values.

    Temperatures pass through unchanged, including None.

    Args:
        snapshot: State read from the hub on this poll

    Returns:
        AccessoryUpdate ready for ClimateAccessory.apply_update
    """
    return AccessoryUpdate(
        target_heating_cooling=heating_cooling_from_hvac(snapshot.state),
        current_temperature=snapshot.current_temperature,
        target_temperature=snapshot.target_temperature,
        fan_speed_percent=fan_speed_from_mode(snapshot.fan_mode),
        fan_running=is_fan_running(snapshot.state, snapshot.fan_mode),
        eco_on=eco_from_preset(snapshot.preset_mode),
        fan_only_on=fan_only_from_state(snapshot.state),
    )


# ---------------------------------------------------------------------------
# Outbound: HomeKit -> hub
# ---------------------------------------------------------------------------

def hvac_mode_from_heating_cooling(value: Any) -> str:
    """
    Map a HomeKit heating/cooling index to a hub HVAC mode.

    HomeKit only sends 0-3, but the index is clamped anyway.

    Args:
        value: TargetHeatingCoolingState value

    Returns:
        One of off, heat, cool, auto
    """
    try:
        index = int(value)
    except (TypeError, ValueError, OverflowError):
        return OFF_MODE
    index = max(0, min(index, len(HEATING_COOLING_TO_HVAC_MODE) - 1))
    return HEATING_COOLING_TO_HVAC_MODE[index]


def fan_mode_from_speed(value: Any) -> str:
    """
    Map a rotation speed percentage to a hub fan mode.

    Bands (upper bound inclusive):
        0-16 silent, 17-33 low, 34-50 medium, 51-66 high, 67-83 full,
        84-100 auto

    Args:
        value: RotationSpeed value, 0-100

    Returns:
        Hub fan mode string
    """
    try:
        speed = float(value)
    except (TypeError, ValueError):
        return DEFAULT_FAN_MODE
    if math.isnan(speed):
        return DEFAULT_FAN_MODE
    speed = max(0.0, min(speed, 100.0))

    for upper, mode in FAN_SPEED_BANDS:
        if speed <= upper:
            return mode
    return DEFAULT_FAN_MODE


def preset_from_eco(on: Any) -> str:
    return ECO_PRESET if on else NO_PRESET


def hvac_mode_from_fan_only(on: Any) -> str:
    # Turning fan-only off switches the unit off rather than restoring a mode
    return FAN_ONLY_MODE if on else OFF_MODE


def temperature_payload(value: Any) -> Dict[str, Any]:
    return {"temperature": value}


def hvac_mode_payload(value: Any) -> Dict[str, Any]:
    return {"hvac_mode": hvac_mode_from_heating_cooling(value)}


def fan_mode_payload(value: Any) -> Dict[str, Any]:
    return {"fan_mode": fan_mode_from_speed(value)}


def preset_payload(value: Any) -> Dict[str, Any]:
    return {"preset_mode": preset_from_eco(value)}


def fan_only_payload(value: Any) -> Dict[str, Any]:
    return {"hvac_mode": hvac_mode_from_fan_only(value)}
