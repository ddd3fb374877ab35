"""Translation of accessory set requests into device commands.

Every command updates the cache optimistically before the device answers.
When the acknowledgement arrives the written value is applied again, so the
cache ends up holding whichever callback resolved last. A failed write is
logged and abandoned; the optimistic value stays until the next poll
reconciles it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from .api import FrigidaireApiError
from .const import (
    FAN_MODE_MAP,
    MAX_TARGET_TEMP_C,
    MIN_TARGET_TEMP_C,
    MODE_MAP,
    UNIT_MAP,
)
from .converter import level_to_speed, speed_to_level, to_fahrenheit
from .models import (
    CapabilitySet,
    DevicePower,
    FanLevel,
    FanTargetState,
    TargetMode,
    TemperatureUnit,
)

if TYPE_CHECKING:
    from .api import DeviceClient
    from .state import DeviceStateCache

_LOGGER = logging.getLogger(__name__)

TEMPERATURE_TOLERANCE = 0.01


class UnsupportedCharacteristicError(Exception):
    """Raised when a characteristic is not available on the device."""


class TemperatureOutOfRangeError(ValueError):
    """Raised when a target temperature is outside the supported range."""


class CommandTranslator:
    """Turns accessory set requests into device writes for one device."""

    def __init__(
        self,
        client: DeviceClient,
        cache: DeviceStateCache,
        capabilities: CapabilitySet,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._capabilities = capabilities
        self._on_update = on_update

    @property
    def _serial(self) -> str:
        return self._cache.serial_number

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()

    def _update(self, **values: Any) -> None:
        changed = False
        for field, value in values.items():
            changed = self._cache.set(field, value) or changed
        if changed:
            self._notify()

    async def _send(
        self,
        label: str,
        write: Callable[[str, Any], Awaitable[Any]],
        code: Any,
        confirmed: dict[str, Any],
    ) -> bool:
        """Write a code to the device and re-apply the confirmed fields on ack."""
        try:
            result = await write(self._serial, code)
        except FrigidaireApiError as err:
            _LOGGER.error(
                "%s: failed to set %s to %s: %s", self._cache.name, label, code, err
            )
            return False

        self._update(**confirmed)
        _LOGGER.debug("%s: successfully set %s: %s", self._cache.name, label, result)
        return True

    def _mode_for(self, target_mode: TargetMode) -> DevicePower:
        return DevicePower.ECO if target_mode == TargetMode.AUTO else DevicePower.COOLING

    async def _send_mode(self, power: DevicePower) -> bool:
        self._update(power=power)
        return await self._send(
            "mode", self._client.write_mode, MODE_MAP[power], {"power": power}
        )

    async def set_active(self, active: bool) -> None:
        """Turn cooling on (with the sticky target mode) or off.

        Without a separate fan service, turning off also stops a device
        running fan-only.
        """
        snapshot = self._cache.snapshot
        if active:
            if not snapshot.is_active:
                await self._send_mode(self._mode_for(self._cache.get("target_mode")))
            return

        if snapshot.is_active or (
            snapshot.fan_active and not self._capabilities.has_separate_fan_service
        ):
            await self._send_mode(DevicePower.OFF)

    async def set_target_mode(self, target_mode: TargetMode) -> None:
        """Record the target mode and re-issue the mode if cooling."""
        if target_mode == self._cache.get("target_mode"):
            return

        self._update(target_mode=target_mode)
        if not self._cache.snapshot.is_active:
            _LOGGER.debug(
                "%s: device inactive, target mode %s takes effect on next activation",
                self._cache.name,
                target_mode,
            )
            return
        await self._send_mode(self._mode_for(target_mode))

    async def set_eco_mode(self, enabled: bool) -> None:
        if not self._capabilities.has_eco_switch:
            error_msg = "Eco mode switch is not available for this device"
            raise UnsupportedCharacteristicError(error_msg)
        await self.set_target_mode(TargetMode.AUTO if enabled else TargetMode.COOL)

    async def set_fan_active(self, active: bool) -> None:
        """Switch the fan service; starting it from off runs fan-only."""
        power = self._cache.get("power")
        if active and power == DevicePower.OFF:
            await self._send_mode(DevicePower.FAN_ONLY)
        elif not active and power != DevicePower.OFF:
            await self._send_mode(DevicePower.OFF)

    async def set_target_temperature(self, celsius: float) -> None:
        """Set the cooling threshold, given in Celsius.

        Raises:
            TemperatureOutOfRangeError: If outside 15.56 to 32.22 °C.

        """
        # 15.56 and 32.22 are 60 °F and 90 °F rounded, both ends stay reachable
        low = MIN_TARGET_TEMP_C - TEMPERATURE_TOLERANCE
        high = MAX_TARGET_TEMP_C + TEMPERATURE_TOLERANCE
        if not low <= celsius <= high:
            error_msg = (
                f"Target temperature {celsius} °C outside "
                f"{MIN_TARGET_TEMP_C}-{MAX_TARGET_TEMP_C} °C"
            )
            raise TemperatureOutOfRangeError(error_msg)

        raw = to_fahrenheit(celsius)
        if math.isclose(
            raw, self._cache.get("target_temperature_raw"), abs_tol=TEMPERATURE_TOLERANCE
        ):
            return

        self._update(target_temperature_raw=raw)
        await self._send(
            "temperature",
            self._client.write_temperature,
            raw,
            {"target_temperature_raw": raw},
        )

    async def set_display_unit(self, unit: TemperatureUnit) -> None:
        """Change the display unit; cached raw temperatures are not converted."""
        if unit == self._cache.get("display_unit"):
            return

        self._update(display_unit=unit)
        await self._send(
            "temperature display units",
            self._client.write_unit,
            UNIT_MAP[unit],
            {"display_unit": unit},
        )

    async def set_fan_speed(self, speed: float) -> None:
        """Set a manual fan speed, caching the quantized percentage."""
        speed = min(max(speed, 0), 100)
        level = speed_to_level(speed)
        quantized = level_to_speed(level)
        snapshot = self._cache.snapshot
        if (
            snapshot.fan_target_state == FanTargetState.MANUAL
            and snapshot.fan_mode == level
            and snapshot.fan_speed == quantized
        ):
            return

        fields = {
            "fan_speed": quantized,
            "fan_mode": level,
            "fan_target_state": FanTargetState.MANUAL,
        }
        self._update(**fields)
        await self._send(
            "fan mode", self._client.write_fan_mode, FAN_MODE_MAP[level], fields
        )

    async def set_fan_target_state(self, state: FanTargetState) -> None:
        """Switch between automatic and manual fan."""
        if state == self._cache.get("fan_target_state"):
            return

        self._update(fan_target_state=state)
        if not self._cache.snapshot.fan_active:
            _LOGGER.debug(
                "%s: fan inactive, recorded fan target state %s",
                self._cache.name,
                state,
            )
            return

        if state == FanTargetState.AUTO:
            level = FanLevel.AUTO
        else:
            level = speed_to_level(self._cache.get("fan_speed"))
        fields = {"fan_mode": level, "fan_target_state": state}
        self._update(fan_mode=level)
        await self._send(
            "fan mode", self._client.write_fan_mode, FAN_MODE_MAP[level], fields
        )

    async def set_auto_fan(self, enabled: bool) -> None:
        await self.set_fan_target_state(
            FanTargetState.AUTO if enabled else FanTargetState.MANUAL
        )

    async def set_swing_mode(self, enabled: bool) -> None:
        error_msg = "Swing mode is not supported by the device API"
        raise UnsupportedCharacteristicError(error_msg)
