"""Accessory binding for Frigidaire AC devices.

Exposes the cache and translators as get/set handlers per characteristic.
Getters answer from the cache straight away and refresh the feeding device
attribute in the background; a changed value is then pushed to the
coordinator listeners.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback

from .commands import CommandTranslator, UnsupportedCharacteristicError
from .const import (
    APPLIANCE_TYPE_AC,
    CAPABILITY_PROFILES,
    DEFAULT_PROFILE,
    TELEMETRY_GRACE_SECONDS,
)
from .coordinator import FrigidairePollScheduler, PollState
from .models import (
    Active,
    CapabilitySet,
    Characteristic,
    DeviceDescriptor,
    FrigidaireConfig,
    TargetFanState,
    TargetHeaterCoolerState,
    TargetMode,
    TemperatureDisplayUnits,
    TemperatureUnit,
)
from .state import DeviceStateCache
from .status import StatusTranslator, derive_characteristics

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from homeassistant.core import HomeAssistant

    from .api import DeviceClient

_LOGGER = logging.getLogger(__name__)


def capabilities_for(profile: str | None) -> CapabilitySet:
    """Return the capability set of a named profile."""
    if profile is None:
        profile = DEFAULT_PROFILE
    try:
        return CAPABILITY_PROFILES[profile]
    except KeyError as err:
        error_msg = f"Unknown accessory profile: {profile}"
        raise ValueError(error_msg) from err


def select_devices(
    devices: list[DeviceDescriptor], config: FrigidaireConfig
) -> list[DeviceDescriptor]:
    """Keep the AC appliances matching the optional device id filter."""
    selected = []
    for device in devices:
        if device.appliance_type != APPLIANCE_TYPE_AC:
            _LOGGER.info(
                "Skipping non AC device %s (%s)",
                device.display_name,
                device.appliance_type,
            )
            continue
        if config.device_id is not None and device.serial_number != config.device_id:
            _LOGGER.debug("Skipping filtered device %s", device.serial_number)
            continue
        selected.append(device)
    return selected


class AccessoryBinding:
    """Get/set/push surface of one device."""

    def __init__(
        self,
        cache: DeviceStateCache,
        capabilities: CapabilitySet,
        client: DeviceClient,
        on_push: Callable[[], None] | None = None,
    ) -> None:
        self._cache = cache
        self.capabilities = capabilities
        self.commands = CommandTranslator(client, cache, capabilities, self.publish)
        self.status = StatusTranslator(client, cache, self.publish)
        self._on_push = on_push
        self._last_pushed: dict[Characteristic, Any] = {}
        self._refresh_tasks: dict[str, asyncio.Task[bool]] = {}
        self._setters: dict[Characteristic, Callable[[Any], Awaitable[None]]] = {
            Characteristic.ACTIVE: self._set_active,
            Characteristic.TARGET_HEATER_COOLER_STATE: self._set_target_state,
            Characteristic.COOLING_THRESHOLD_TEMPERATURE: self.commands.set_target_temperature,
            Characteristic.TEMPERATURE_DISPLAY_UNITS: self._set_display_units,
            Characteristic.ROTATION_SPEED: self.commands.set_fan_speed,
            Characteristic.SWING_MODE: self.commands.set_swing_mode,
            Characteristic.FAN_ACTIVE: self._set_fan_active,
            Characteristic.TARGET_FAN_STATE: self._set_target_fan_state,
            Characteristic.AUTO_FAN: self.commands.set_auto_fan,
            Characteristic.ECO_MODE: self.commands.set_eco_mode,
        }

    @property
    def characteristics(self) -> tuple[Characteristic, ...]:
        return tuple(self.values())

    def values(self) -> dict[Characteristic, Any]:
        """Return every exposed characteristic derived from the cache."""
        return derive_characteristics(self._cache.snapshot, self.capabilities)

    def _check_supported(self, characteristic: Characteristic) -> None:
        if characteristic not in self.values():
            error_msg = f"{characteristic} is not supported by {self._cache.name}"
            raise UnsupportedCharacteristicError(error_msg)

    def peek(self, characteristic: Characteristic) -> Any:
        """Return the cached value without touching the device."""
        self._check_supported(characteristic)
        return self.values()[characteristic]

    def get(self, characteristic: Characteristic) -> Any:
        """Return the cached value and refresh it in the background."""
        value = self.peek(characteristic)
        refresher = self.status.refresher_for(characteristic)
        if refresher is not None:
            self._schedule_refresh(*refresher)
        return value

    def _schedule_refresh(
        self, name: str, refresh: Callable[[], Awaitable[bool]]
    ) -> None:
        task = self._refresh_tasks.get(name)
        if task is not None and not task.done():
            return
        task = asyncio.create_task(refresh())
        self._refresh_tasks[name] = task

        def _forget(done: asyncio.Task[bool]) -> None:
            if self._refresh_tasks.get(name) is done:
                del self._refresh_tasks[name]

        task.add_done_callback(_forget)

    async def async_set(self, characteristic: Characteristic, value: Any) -> None:
        """Handle a set request from the accessory framework."""
        setter = self._setters.get(characteristic)
        if setter is None:
            error_msg = f"{characteristic} is read-only"
            raise UnsupportedCharacteristicError(error_msg)
        if characteristic != Characteristic.SWING_MODE:
            self._check_supported(characteristic)
        _LOGGER.debug("%s: set %s to %s", self._cache.name, characteristic, value)
        await setter(value)

    async def _set_active(self, value: Any) -> None:
        await self.commands.set_active(int(value) == Active.ACTIVE)

    async def _set_fan_active(self, value: Any) -> None:
        await self.commands.set_fan_active(int(value) == Active.ACTIVE)

    async def _set_target_state(self, value: Any) -> None:
        if int(value) == TargetHeaterCoolerState.AUTO:
            await self.commands.set_target_mode(TargetMode.AUTO)
        elif int(value) == TargetHeaterCoolerState.COOL:
            await self.commands.set_target_mode(TargetMode.COOL)
        else:
            error_msg = f"Unsupported target heater cooler state: {value}"
            raise ValueError(error_msg)

    async def _set_display_units(self, value: Any) -> None:
        unit = (
            TemperatureUnit.CELSIUS
            if int(value) == TemperatureDisplayUnits.CELSIUS
            else TemperatureUnit.FAHRENHEIT
        )
        await self.commands.set_display_unit(unit)

    async def _set_target_fan_state(self, value: Any) -> None:
        await self.commands.set_auto_fan(int(value) == TargetFanState.AUTO)

    def publish(self, force: bool = False) -> dict[Characteristic, Any]:
        """Push characteristics that changed since the last push, or all if forced.

        The push sink is called once per publish, however many values changed.

        Returns:
            The pushed characteristics and their values.

        """
        pushed = {
            characteristic: value
            for characteristic, value in self.values().items()
            if force or self._last_pushed.get(characteristic) != value
        }
        if not pushed:
            return pushed

        self._last_pushed.update(pushed)
        _LOGGER.debug(
            "%s: pushing %s", self._cache.name, ", ".join(map(str, pushed))
        )
        if self._on_push is not None:
            self._on_push()
        return pushed

    async def async_shutdown(self) -> None:
        """Cancel background refreshes."""
        tasks = list(self._refresh_tasks.values())
        self._refresh_tasks.clear()
        for task in tasks:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


class FrigidaireAccessory:
    """Cache, translators, binding and poll coordinator for one device."""

    def __init__(
        self,
        hass: HomeAssistant,
        client: DeviceClient,
        descriptor: DeviceDescriptor,
        capabilities: CapabilitySet,
        polling_interval: timedelta,
        grace: float = TELEMETRY_GRACE_SECONDS,
    ) -> None:
        self.descriptor = descriptor
        self.cache = DeviceStateCache(descriptor.serial_number, descriptor.display_name)
        self.binding = AccessoryBinding(
            self.cache, capabilities, client, on_push=self._async_push
        )
        self.scheduler = FrigidairePollScheduler(
            hass,
            self.cache,
            self.binding.status,
            interval=polling_interval,
            grace=grace,
        )

    @property
    def serial_number(self) -> str:
        return self.descriptor.serial_number

    @callback
    def _async_push(self) -> None:
        # A running refresh notifies the listeners once it completes.
        if self.scheduler.state == PollState.REFRESHING:
            return
        self.scheduler.async_update_listeners()

    async def async_start(self) -> None:
        """Request initial telemetry and schedule polling."""
        _LOGGER.info("Starting polling for %s", self.descriptor.display_name)
        await self.binding.status.refresh_telemetry()
        self.scheduler.async_set_updated_data(self.cache.snapshot)

    async def async_shutdown(self) -> None:
        _LOGGER.info("Stopping polling for %s", self.descriptor.display_name)
        await self.scheduler.async_shutdown()
        await self.binding.async_shutdown()
