"""Per-device state cache.

All access happens on the event loop, and no method awaits, so a reader
never sees a half-applied reading. Callers running on OS threads would need
a per-device lock around read-modify-write sequences.
"""

from __future__ import annotations

import logging
from typing import Any

from .converter import level_to_speed
from .models import (
    SNAPSHOT_FIELDS,
    DevicePower,
    DeviceReading,
    DeviceStateSnapshot,
    FanLevel,
    FanTargetState,
    TargetMode,
)

_LOGGER = logging.getLogger(__name__)


class DeviceStateCache:
    """Last known state of one device plus its identity."""

    def __init__(self, serial_number: str, name: str) -> None:
        self.serial_number = serial_number
        self.name = name
        self._snapshot = DeviceStateSnapshot()

    @property
    def snapshot(self) -> DeviceStateSnapshot:
        return self._snapshot

    def get(self, field: str) -> Any:
        """Return the cached value of a snapshot field."""
        if field not in SNAPSHOT_FIELDS:
            raise KeyError(field)
        return getattr(self._snapshot, field)

    def set(self, field: str, value: Any) -> bool:
        """Store a value and return True if it changed."""
        if field not in SNAPSHOT_FIELDS:
            raise KeyError(field)
        if getattr(self._snapshot, field) == value:
            return False
        setattr(self._snapshot, field, value)
        _LOGGER.debug("%s: %s -> %s", self.name, field, value)
        return True

    def apply_telemetry(self, reading: DeviceReading) -> set[str]:
        """Apply a decoded reading to every field it feeds in one pass.

        Args:
            reading: Decoded device values; None fields are left untouched.

        Returns:
            Names of the snapshot fields that changed.

        """
        changed: set[str] = set()

        def _update(field: str, value: Any) -> None:
            if self.set(field, value):
                changed.add(field)

        if reading.power is not None:
            _update("power", reading.power)
            if reading.power == DevicePower.ECO:
                _update("target_mode", TargetMode.AUTO)
            elif reading.power == DevicePower.COOLING:
                _update("target_mode", TargetMode.COOL)

        if reading.fan_mode is not None:
            _update("fan_mode", reading.fan_mode)
            # Intent recorded while the fan is off survives until it runs again
            if self._snapshot.fan_active:
                if reading.fan_mode == FanLevel.AUTO:
                    _update("fan_target_state", FanTargetState.AUTO)
                else:
                    _update("fan_target_state", FanTargetState.MANUAL)
                    _update("fan_speed", level_to_speed(reading.fan_mode))

        if reading.current_temperature_raw is not None:
            _update("current_temperature_raw", reading.current_temperature_raw)
        if reading.target_temperature_raw is not None:
            _update("target_temperature_raw", reading.target_temperature_raw)
        if reading.display_unit is not None:
            _update("display_unit", reading.display_unit)
        if reading.filter_ok is not None:
            _update("filter_ok", reading.filter_ok)

        return changed
