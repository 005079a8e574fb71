"""
HomeKit accessory exposing one Home Assistant climate entity.

Surfaces:
- Thermostat: current/target temperature, target heating/cooling state
- Fanv2 "Fan Speed": always active, manual, rotation speed 0-100
- Switch "Eco Mode": eco preset
- Switch "Fan Only": fan_only HVAC mode
"""

from typing import Any, Dict

from pyhap.accessory import Accessory
from pyhap.const import CATEGORY_THERMOSTAT

from climate_bridge.models.climate import AccessoryState, AccessoryUpdate
from climate_bridge.models.commands import Command
from climate_bridge.services.command_router import CommandRouter
from climate_bridge.utils.logging import get_logger

logger = get_logger(__name__)

MANUFACTURER = "Home Assistant"
MODEL = "Climate Wrapper"

# HAP characteristic values
ACTIVE = 1
TARGET_FAN_STATE_MANUAL = 0
CURRENT_FAN_STATE_IDLE = 1
CURRENT_FAN_STATE_BLOWING_AIR = 2


class ClimateAccessory(Accessory):
    """
    Thermostat accessory backed by AccessoryState.

    apply_update() is driven by the sync loop. Setter callbacks hand writes to
    the CommandRouter and return straight away; they never touch
    AccessoryState, which only changes when a poll reports the new hub state.
    """

    category = CATEGORY_THERMOSTAT

    def __init__(self, driver, display_name: str, router: CommandRouter):
        super().__init__(driver, display_name)
        self.router = router
        self.state = AccessoryState()

        self.set_info_service(manufacturer=MANUFACTURER, model=MODEL)

        serv_thermostat = self.add_preload_service("Thermostat", chars=["Name"])
        serv_thermostat.configure_char("Name", value=display_name)
        self.char_current_temp = serv_thermostat.configure_char(
            "CurrentTemperature", value=self.state.current_temperature
        )
        self.char_target_temp = serv_thermostat.configure_char(
            "TargetTemperature",
            value=self.state.target_temperature,
            setter_callback=self._setter(Command.TARGET_TEMPERATURE),
        )
        self.char_target_heat_cool = serv_thermostat.configure_char(
            "TargetHeatingCoolingState",
            value=int(self.state.target_heating_cooling),
            setter_callback=self._setter(Command.TARGET_HEATING_COOLING),
        )

        serv_fan = self.add_preload_service(
            "Fanv2", chars=["Name", "CurrentFanState", "TargetFanState", "RotationSpeed"]
        )
        serv_fan.configure_char("Name", value="Fan Speed")
        self.char_fan_active = serv_fan.configure_char("Active", value=ACTIVE)
        self.char_target_fan_state = serv_fan.configure_char(
            "TargetFanState", value=TARGET_FAN_STATE_MANUAL
        )
        self.char_current_fan_state = serv_fan.configure_char(
            "CurrentFanState", value=CURRENT_FAN_STATE_IDLE
        )
        self.char_rotation_speed = serv_fan.configure_char(
            "RotationSpeed",
            value=self.state.fan_speed_percent,
            properties={"minValue": 0, "maxValue": 100, "minStep": 1},
            setter_callback=self._setter(Command.ROTATION_SPEED),
        )

        serv_eco = self.add_preload_service("Switch", chars=["Name"])
        serv_eco.configure_char("Name", value="Eco Mode")
        self.char_eco = serv_eco.configure_char(
            "On", value=self.state.eco_on, setter_callback=self._setter(Command.ECO)
        )

        serv_fan_only = self.add_preload_service("Switch", chars=["Name"])
        serv_fan_only.configure_char("Name", value="Fan Only")
        self.char_fan_only = serv_fan_only.configure_char(
            "On", value=self.state.fan_only_on, setter_callback=self._setter(Command.FAN_ONLY)
        )

    def _setter(self, command: Command):
        def setter(value: Any) -> None:
            try:
                self.router.submit(command, value)
            except Exception:
                # An exception here would reach the HAP session
                logger.exception("command_submit_failed", command=command.value, value=value)
        return setter

    def apply_update(self, update: AccessoryUpdate) -> None:
        """
        Overwrite every tracked characteristic with translated hub values.

        Idempotent. A None temperature keeps the value currently shown.
        """
        state = self.state

        if update.current_temperature is not None:
            state.current_temperature = update.current_temperature
        if update.target_temperature is not None:
            state.target_temperature = update.target_temperature
        state.target_heating_cooling = update.target_heating_cooling
        state.fan_active = True
        state.fan_speed_percent = update.fan_speed_percent
        state.fan_running = update.fan_running
        state.eco_on = update.eco_on
        state.fan_only_on = update.fan_only_on

        self.char_current_temp.set_value(state.current_temperature)
        self.char_target_temp.set_value(state.target_temperature)
        # HAP-python clamps to the characteristic range; keep what controllers see
        state.current_temperature = self.char_current_temp.value
        state.target_temperature = self.char_target_temp.value
        self.char_target_heat_cool.set_value(int(state.target_heating_cooling))

        self.char_fan_active.set_value(ACTIVE)
        self.char_target_fan_state.set_value(TARGET_FAN_STATE_MANUAL)
        self.char_current_fan_state.set_value(
            CURRENT_FAN_STATE_BLOWING_AIR if state.fan_running else CURRENT_FAN_STATE_IDLE
        )
        self.char_rotation_speed.set_value(state.fan_speed_percent)

        self.char_eco.set_value(state.eco_on)
        self.char_fan_only.set_value(state.fan_only_on)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.display_name, **self.state.to_dict()}
