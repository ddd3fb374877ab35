"""Climate entities for Frigidaire air conditioners.

The climate entity renders the heater-cooler characteristics of an
accessory binding: hvac mode from the active and fan states, the eco intent
as a preset, fan modes from the fan target state and rotation speed, and
temperatures in the display unit selected on the device.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.components.climate.const import (
    FAN_AUTO,
    FAN_HIGH,
    FAN_LOW,
    FAN_MEDIUM,
    PRESET_ECO,
    PRESET_NONE,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from .const import DOMAIN, MAX_TARGET_TEMP_C, MIN_TARGET_TEMP_C, TARGET_TEMP_STEP
from .converter import level_to_speed, render_temperature, speed_to_level, to_celsius
from .entity import FrigidaireEntity
from .models import (
    Active,
    Characteristic,
    CurrentHeaterCoolerState,
    FanLevel,
    TargetFanState,
    TargetHeaterCoolerState,
    TemperatureUnit,
)

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .binding import FrigidaireAccessory

_LOGGER = logging.getLogger(__name__)

FAN_MODE_TO_LEVEL = {
    FAN_LOW: FanLevel.LOW,
    FAN_MEDIUM: FanLevel.MEDIUM,
    FAN_HIGH: FanLevel.HIGH,
}
LEVEL_TO_FAN_MODE = {value: key for key, value in FAN_MODE_TO_LEVEL.items()}

MIN_TEMP_F = 60.0
MAX_TEMP_F = 90.0


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up climate entities for Frigidaire AC devices."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    entities = [
        FrigidaireClimateEntity(accessory)
        for accessory in entry_data["accessories"].values()
    ]
    async_add_entities(entities)


class FrigidaireClimateEntity(FrigidaireEntity, ClimateEntity):
    """Climate entity for a Frigidaire air conditioner."""

    _attr_name = None
    _attr_fan_modes = [FAN_AUTO, FAN_LOW, FAN_MEDIUM, FAN_HIGH]
    _attr_preset_modes = [PRESET_NONE, PRESET_ECO]
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.FAN_MODE
        | ClimateEntityFeature.PRESET_MODE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )

    def __init__(self, accessory: FrigidaireAccessory) -> None:
        super().__init__(accessory)
        self._has_fan_service = self._binding.capabilities.has_separate_fan_service
        self._attr_hvac_modes = [HVACMode.OFF, HVACMode.COOL]
        if self._has_fan_service:
            self._attr_hvac_modes.append(HVACMode.FAN_ONLY)

    @property
    def _display_unit(self) -> TemperatureUnit:
        return self._accessory.cache.snapshot.display_unit

    @property
    def temperature_unit(self) -> str:
        if self._display_unit == TemperatureUnit.CELSIUS:
            return UnitOfTemperature.CELSIUS
        return UnitOfTemperature.FAHRENHEIT

    @property
    def target_temperature_step(self) -> float:
        return TARGET_TEMP_STEP if self._display_unit == TemperatureUnit.CELSIUS else 1.0

    @property
    def min_temp(self) -> float:
        if self._display_unit == TemperatureUnit.CELSIUS:
            return MIN_TARGET_TEMP_C
        return MIN_TEMP_F

    @property
    def max_temp(self) -> float:
        if self._display_unit == TemperatureUnit.CELSIUS:
            return MAX_TARGET_TEMP_C
        return MAX_TEMP_F

    @property
    def current_temperature(self) -> float:
        snapshot = self._accessory.cache.snapshot
        return render_temperature(snapshot.current_temperature_raw, self._display_unit)

    @property
    def target_temperature(self) -> float:
        snapshot = self._accessory.cache.snapshot
        return render_temperature(snapshot.target_temperature_raw, self._display_unit)

    @property
    def hvac_mode(self) -> HVACMode:
        if self._value(Characteristic.ACTIVE) == Active.ACTIVE:
            return HVACMode.COOL
        if self._has_fan_service and self._value(Characteristic.FAN_ACTIVE) == Active.ACTIVE:
            return HVACMode.FAN_ONLY
        return HVACMode.OFF

    @property
    def hvac_action(self) -> HVACAction:
        state = self._value(Characteristic.CURRENT_HEATER_COOLER_STATE)
        if state == CurrentHeaterCoolerState.COOLING:
            return HVACAction.COOLING
        if self._accessory.cache.snapshot.fan_active:
            return HVACAction.FAN
        return HVACAction.OFF

    @property
    def preset_mode(self) -> str:
        target = self._value(Characteristic.TARGET_HEATER_COOLER_STATE)
        return PRESET_ECO if target == TargetHeaterCoolerState.AUTO else PRESET_NONE

    @property
    def _auto_fan(self) -> bool:
        if Characteristic.TARGET_FAN_STATE in self._binding.characteristics:
            return self._value(Characteristic.TARGET_FAN_STATE) == TargetFanState.AUTO
        return bool(self._value(Characteristic.AUTO_FAN))

    @property
    def fan_mode(self) -> str:
        if self._auto_fan:
            return FAN_AUTO
        level = speed_to_level(self._accessory.cache.snapshot.fan_speed)
        return LEVEL_TO_FAN_MODE[level]

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: The HVAC mode to set.

        """
        if hvac_mode == HVACMode.COOL:
            await self._binding.async_set(Characteristic.ACTIVE, Active.ACTIVE)
        elif hvac_mode == HVACMode.FAN_ONLY and self._has_fan_service:
            await self._binding.async_set(Characteristic.ACTIVE, Active.INACTIVE)
            await self._binding.async_set(Characteristic.FAN_ACTIVE, Active.ACTIVE)
        elif hvac_mode == HVACMode.OFF:
            if self._has_fan_service:
                await self._binding.async_set(Characteristic.FAN_ACTIVE, Active.INACTIVE)
            else:
                await self._binding.async_set(Characteristic.ACTIVE, Active.INACTIVE)
        else:
            _LOGGER.warning("%s: unsupported hvac mode %s", self.name, hvac_mode)

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return
        if self._display_unit == TemperatureUnit.FAHRENHEIT:
            temperature = to_celsius(temperature)
        await self._binding.async_set(
            Characteristic.COOLING_THRESHOLD_TEMPERATURE, temperature
        )

    async def async_set_fan_mode(self, fan_mode: str) -> None:
        """Set the fan mode.

        Args:
            fan_mode: The fan mode to set.

        """
        if fan_mode == FAN_AUTO:
            if Characteristic.TARGET_FAN_STATE in self._binding.characteristics:
                await self._binding.async_set(
                    Characteristic.TARGET_FAN_STATE, TargetFanState.AUTO
                )
            else:
                await self._binding.async_set(Characteristic.AUTO_FAN, True)
            return
        level = FAN_MODE_TO_LEVEL[fan_mode]
        await self._binding.async_set(Characteristic.ROTATION_SPEED, level_to_speed(level))

    async def async_set_preset_mode(self, preset_mode: str) -> None:
        """Set the preset mode.

        Args:
            preset_mode: PRESET_ECO to cool in eco mode, PRESET_NONE otherwise.

        """
        target = (
            TargetHeaterCoolerState.AUTO
            if preset_mode == PRESET_ECO
            else TargetHeaterCoolerState.COOL
        )
        await self._binding.async_set(Characteristic.TARGET_HEATER_COOLER_STATE, target)

    async def async_turn_on(self) -> None:
        await self.async_set_hvac_mode(HVACMode.COOL)

    async def async_turn_off(self) -> None:
        await self.async_set_hvac_mode(HVACMode.OFF)
