"""Translation of device reads into accessory characteristics.

A single device attribute can feed several characteristics, e.g. the raw
mode feeds active, current heater-cooler state, eco mode and the fan
service state. Reads update the cache through ``apply_telemetry`` and the
characteristic values are always derived from the cached snapshot.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from .api import FrigidaireApiError, FrigidaireProtocolError
from .const import (
    ATTR_FAN_MODE,
    ATTR_FILTER,
    ATTR_MODE,
    ATTR_ROOM_TEMPERATURE,
    ATTR_TARGET_TEMPERATURE,
    ATTR_UNIT,
    FAN_MODE_REVERSE_MAP,
    FILTER_GOOD,
    MODE_REVERSE_MAP,
    UNIT_REVERSE_MAP,
)
from .converter import level_to_speed, to_celsius
from .models import (
    Active,
    CapabilitySet,
    Characteristic,
    CurrentFanState,
    CurrentHeaterCoolerState,
    DevicePower,
    DeviceReading,
    DeviceStateSnapshot,
    FanLevel,
    FanTargetState,
    FilterChangeIndication,
    TargetFanState,
    TargetHeaterCoolerState,
    TargetMode,
    TemperatureDisplayUnits,
    TemperatureUnit,
)

if TYPE_CHECKING:
    from .api import DeviceClient
    from .state import DeviceStateCache

_LOGGER = logging.getLogger(__name__)

HEATER_COOLER_CHARACTERISTICS = (
    Characteristic.ACTIVE,
    Characteristic.CURRENT_HEATER_COOLER_STATE,
    Characteristic.TARGET_HEATER_COOLER_STATE,
    Characteristic.CURRENT_TEMPERATURE,
    Characteristic.COOLING_THRESHOLD_TEMPERATURE,
    Characteristic.TEMPERATURE_DISPLAY_UNITS,
    Characteristic.ROTATION_SPEED,
    Characteristic.FILTER_CHANGE_INDICATION,
)
FAN_SERVICE_CHARACTERISTICS = (
    Characteristic.FAN_ACTIVE,
    Characteristic.CURRENT_FAN_STATE,
)

# Name of the StatusTranslator coroutine that refreshes each characteristic
REFRESHERS = {
    Characteristic.ACTIVE: "refresh_mode",
    Characteristic.CURRENT_HEATER_COOLER_STATE: "refresh_mode",
    Characteristic.TARGET_HEATER_COOLER_STATE: "refresh_mode",
    Characteristic.ECO_MODE: "refresh_mode",
    Characteristic.FAN_ACTIVE: "refresh_mode",
    Characteristic.CURRENT_FAN_STATE: "refresh_mode",
    Characteristic.ROTATION_SPEED: "refresh_fan_mode",
    Characteristic.TARGET_FAN_STATE: "refresh_fan_mode",
    Characteristic.AUTO_FAN: "refresh_fan_mode",
    Characteristic.CURRENT_TEMPERATURE: "refresh_current_temperature",
    Characteristic.COOLING_THRESHOLD_TEMPERATURE: "refresh_target_temperature",
    Characteristic.TEMPERATURE_DISPLAY_UNITS: "refresh_unit",
    Characteristic.FILTER_CHANGE_INDICATION: "refresh_filter",
}


def _normalize_code(raw: Any) -> Any:
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw)
    return raw


def _decode(raw: Any, mapping: Mapping[Any, Any], attribute: str) -> Any:
    code = _normalize_code(raw)
    try:
        return mapping[code]
    except (KeyError, TypeError) as err:
        error_msg = f"Unknown {attribute} code: {raw!r}"
        raise FrigidaireProtocolError(error_msg) from err


def decode_mode(raw: Any) -> DevicePower:
    return _decode(raw, MODE_REVERSE_MAP, ATTR_MODE)


def decode_fan_mode(raw: Any) -> FanLevel:
    return _decode(raw, FAN_MODE_REVERSE_MAP, ATTR_FAN_MODE)


def decode_unit(raw: Any) -> TemperatureUnit:
    if isinstance(raw, str) and raw.upper() in ("F", "C"):
        return TemperatureUnit(raw.upper())
    return _decode(raw, UNIT_REVERSE_MAP, ATTR_UNIT)


def decode_filter(raw: Any) -> bool:
    """Return True when the filter is reported as good."""
    return _normalize_code(raw) == FILTER_GOOD


def decode_temperature(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as err:
        error_msg = f"Invalid temperature value: {raw!r}"
        raise FrigidaireProtocolError(error_msg) from err


TELEMETRY_DECODERS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    ATTR_MODE: ("power", decode_mode),
    ATTR_FAN_MODE: ("fan_mode", decode_fan_mode),
    ATTR_ROOM_TEMPERATURE: ("current_temperature_raw", decode_temperature),
    ATTR_TARGET_TEMPERATURE: ("target_temperature_raw", decode_temperature),
    ATTR_UNIT: ("display_unit", decode_unit),
    ATTR_FILTER: ("filter_ok", decode_filter),
}


def decode_telemetry(telemetry: Mapping[str, Any]) -> DeviceReading:
    """Decode a bulk telemetry mapping, skipping attributes that fail to decode."""
    reading = DeviceReading()
    for attribute, (field, decoder) in TELEMETRY_DECODERS.items():
        if telemetry.get(attribute) is None:
            continue
        try:
            setattr(reading, field, decoder(telemetry[attribute]))
        except FrigidaireProtocolError as err:
            _LOGGER.warning("Ignoring telemetry attribute %s: %s", attribute, err)
    return reading


def supported_characteristics(capabilities: CapabilitySet) -> tuple[Characteristic, ...]:
    """Return the characteristics exposed for a capability set."""
    characteristics = list(HEATER_COOLER_CHARACTERISTICS)
    if capabilities.has_separate_fan_service:
        characteristics.extend(FAN_SERVICE_CHARACTERISTICS)
    if capabilities.has_separate_fan_service and capabilities.has_auto_fan_target_state:
        characteristics.append(Characteristic.TARGET_FAN_STATE)
    else:
        characteristics.append(Characteristic.AUTO_FAN)
    if capabilities.has_eco_switch:
        characteristics.append(Characteristic.ECO_MODE)
    return tuple(characteristics)


def rotation_speed(snapshot: DeviceStateSnapshot) -> int:
    """Return the rotation speed shown for the snapshot.

    Reports 0 while the fan is off and 100 while on auto, neither of which
    is a manual speed.
    """
    if not snapshot.fan_active:
        return 0
    if snapshot.fan_target_state == FanTargetState.AUTO or snapshot.fan_mode == FanLevel.AUTO:
        return level_to_speed(FanLevel.AUTO)
    return snapshot.fan_speed


def derive_characteristics(
    snapshot: DeviceStateSnapshot,
    capabilities: CapabilitySet,
) -> dict[Characteristic, Any]:
    """Derive every exposed characteristic value from a snapshot."""
    cooling = snapshot.is_active
    values: dict[Characteristic, Any] = {
        Characteristic.ACTIVE: Active.ACTIVE if cooling else Active.INACTIVE,
        Characteristic.CURRENT_HEATER_COOLER_STATE: (
            CurrentHeaterCoolerState.COOLING
            if cooling
            else CurrentHeaterCoolerState.INACTIVE
        ),
        Characteristic.TARGET_HEATER_COOLER_STATE: (
            TargetHeaterCoolerState.AUTO
            if snapshot.target_mode == TargetMode.AUTO
            else TargetHeaterCoolerState.COOL
        ),
        Characteristic.CURRENT_TEMPERATURE: round(
            to_celsius(snapshot.current_temperature_raw), 2
        ),
        Characteristic.COOLING_THRESHOLD_TEMPERATURE: round(
            to_celsius(snapshot.target_temperature_raw), 2
        ),
        Characteristic.TEMPERATURE_DISPLAY_UNITS: (
            TemperatureDisplayUnits.CELSIUS
            if snapshot.display_unit == TemperatureUnit.CELSIUS
            else TemperatureDisplayUnits.FAHRENHEIT
        ),
        Characteristic.ROTATION_SPEED: rotation_speed(snapshot),
        Characteristic.FAN_ACTIVE: (
            Active.ACTIVE if snapshot.fan_active else Active.INACTIVE
        ),
        Characteristic.CURRENT_FAN_STATE: (
            CurrentFanState.BLOWING_AIR
            if snapshot.fan_active
            else CurrentFanState.INACTIVE
        ),
        Characteristic.TARGET_FAN_STATE: (
            TargetFanState.AUTO
            if snapshot.fan_target_state == FanTargetState.AUTO
            else TargetFanState.MANUAL
        ),
        Characteristic.AUTO_FAN: snapshot.fan_target_state == FanTargetState.AUTO,
        Characteristic.ECO_MODE: snapshot.target_mode == TargetMode.AUTO,
        Characteristic.FILTER_CHANGE_INDICATION: (
            FilterChangeIndication.FILTER_OK
            if snapshot.filter_ok
            else FilterChangeIndication.CHANGE_FILTER
        ),
    }
    return {
        characteristic: values[characteristic]
        for characteristic in supported_characteristics(capabilities)
    }


class StatusTranslator:
    """Reads device attributes and feeds them into the state cache."""

    def __init__(
        self,
        client: DeviceClient,
        cache: DeviceStateCache,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._on_update = on_update

    @property
    def _serial(self) -> str:
        return self._cache.serial_number

    def refresher_for(
        self, characteristic: Characteristic
    ) -> tuple[str, Callable[[], Awaitable[bool]]] | None:
        """Return the name and coroutine function refreshing a characteristic."""
        name = REFRESHERS.get(characteristic)
        if name is None:
            return None
        return name, getattr(self, name)

    def apply(self, reading: DeviceReading) -> set[str]:
        changed = self._cache.apply_telemetry(reading)
        if changed and self._on_update is not None:
            self._on_update()
        return changed

    async def _refresh(
        self,
        label: str,
        read: Callable[[str], Awaitable[Any]],
        build: Callable[[Any], DeviceReading],
    ) -> bool:
        try:
            raw = await read(self._serial)
            reading = build(raw)
        except FrigidaireApiError as err:
            _LOGGER.error("%s: failed to get %s: %s", self._cache.name, label, err)
            return False

        self.apply(reading)
        _LOGGER.debug("%s: successfully got %s: %s", self._cache.name, label, raw)
        return True

    async def refresh_mode(self) -> bool:
        return await self._refresh(
            "mode",
            self._client.read_mode,
            lambda raw: DeviceReading(power=decode_mode(raw)),
        )

    async def refresh_fan_mode(self) -> bool:
        return await self._refresh(
            "fan mode",
            self._client.read_fan_mode,
            lambda raw: DeviceReading(fan_mode=decode_fan_mode(raw)),
        )

    async def refresh_current_temperature(self) -> bool:
        return await self._refresh(
            "room temperature",
            self._client.read_room_temperature,
            lambda raw: DeviceReading(current_temperature_raw=decode_temperature(raw)),
        )

    async def refresh_target_temperature(self) -> bool:
        return await self._refresh(
            "target temperature",
            self._client.read_temperature,
            lambda raw: DeviceReading(target_temperature_raw=decode_temperature(raw)),
        )

    async def refresh_unit(self) -> bool:
        return await self._refresh(
            "temperature unit",
            self._client.read_unit,
            lambda raw: DeviceReading(display_unit=decode_unit(raw)),
        )

    async def refresh_filter(self) -> bool:
        return await self._refresh(
            "filter status",
            self._client.read_filter,
            lambda raw: DeviceReading(filter_ok=decode_filter(raw)),
        )

    async def refresh_all(self) -> bool:
        """Re-read every attribute concurrently; True if all reads succeeded."""
        results = await asyncio.gather(
            self.refresh_mode(),
            self.refresh_fan_mode(),
            self.refresh_current_temperature(),
            self.refresh_target_temperature(),
            self.refresh_unit(),
            self.refresh_filter(),
        )
        return all(results)

    async def refresh_telemetry(self) -> bool:
        """Request a bulk telemetry fetch and apply it when returned inline."""
        try:
            telemetry = await self._client.read_telemetry(self._serial)
        except FrigidaireApiError as err:
            _LOGGER.error("%s: failed to get telemetry: %s", self._cache.name, err)
            return False

        if telemetry:
            self.apply(decode_telemetry(telemetry))
        _LOGGER.debug("%s: requested telemetry", self._cache.name)
        return True
