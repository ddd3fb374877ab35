"""Pytest configuration and fixtures for Frigidaire AC tests."""

import asyncio
from collections import Counter
from datetime import timedelta
from typing import Any
from unittest.mock import Mock

import pytest

from custom_components.frigidaire_ac.binding import AccessoryBinding, FrigidaireAccessory
from custom_components.frigidaire_ac.const import (
    CAPABILITY_PROFILES,
    FAHRENHEIT,
    FANMODE_AUTO,
    FILTER_GOOD,
    MODE_OFF,
    PROFILE_CLASSIC,
)
from custom_components.frigidaire_ac.models import DeviceDescriptor
from custom_components.frigidaire_ac.state import DeviceStateCache

SERIAL = "AC-0001"
DEVICE_NAME = "Bedroom AC"


class FakeDeviceClient:
    """In-memory DeviceClient.

    Reads capture the device value before waiting on an optional gate, so a
    gated read returns what the device held when the read was issued. Writes
    are recorded before the gate and applied to the device after it.
    """

    def __init__(self) -> None:
        self.values: dict[str, Any] = {
            "mode": MODE_OFF,
            "fan_mode": FANMODE_AUTO,
            "temperature": 72.0,
            "room_temperature": 75.0,
            "unit": FAHRENHEIT,
            "filter": FILTER_GOOD,
        }
        self.telemetry: dict[str, Any] | None = None
        self.devices: list[DeviceDescriptor] = []
        self.writes: list[tuple[str, str, Any]] = []
        self.calls: Counter[str] = Counter()
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}

    async def _checkpoint(self, operation: str) -> None:
        self.calls[operation] += 1
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        if operation in self.failures:
            raise self.failures[operation]

    async def _read(self, operation: str, key: str) -> Any:
        value = self.values[key]
        await self._checkpoint(operation)
        return value

    async def _write(self, operation: str, key: str, serial: str, value: Any) -> bool:
        self.writes.append((key, serial, value))
        await self._checkpoint(operation)
        self.values[key] = value
        return True

    async def list_devices(self) -> list[DeviceDescriptor]:
        await self._checkpoint("list_devices")
        return self.devices

    async def read_mode(self, serial: str) -> Any:
        return await self._read("read_mode", "mode")

    async def read_fan_mode(self, serial: str) -> Any:
        return await self._read("read_fan_mode", "fan_mode")

    async def read_temperature(self, serial: str) -> Any:
        return await self._read("read_temperature", "temperature")

    async def read_room_temperature(self, serial: str) -> Any:
        return await self._read("read_room_temperature", "room_temperature")

    async def read_unit(self, serial: str) -> Any:
        return await self._read("read_unit", "unit")

    async def read_filter(self, serial: str) -> Any:
        return await self._read("read_filter", "filter")

    async def read_telemetry(self, serial: str) -> dict[str, Any] | None:
        await self._checkpoint("read_telemetry")
        return self.telemetry

    async def write_mode(self, serial: str, value: Any) -> bool:
        return await self._write("write_mode", "mode", serial, value)

    async def write_fan_mode(self, serial: str, value: Any) -> bool:
        return await self._write("write_fan_mode", "fan_mode", serial, value)

    async def write_temperature(self, serial: str, value: float) -> bool:
        return await self._write("write_temperature", "temperature", serial, value)

    async def write_unit(self, serial: str, value: Any) -> bool:
        return await self._write("write_unit", "unit", serial, value)


async def settle(rounds: int = 20) -> None:
    """Let pending tasks run until they block."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def client() -> FakeDeviceClient:
    """Fixture providing an in-memory device client."""
    return FakeDeviceClient()


@pytest.fixture
def descriptor() -> DeviceDescriptor:
    """Fixture providing the identity of a sample air conditioner."""
    return DeviceDescriptor(
        serial_number=SERIAL,
        display_name=DEVICE_NAME,
        appliance_model="FHWW083WBE",
        firmware_version="1.2.3",
        appliance_type="AC",
    )


@pytest.fixture
def cache() -> DeviceStateCache:
    """Fixture providing a fresh state cache."""
    return DeviceStateCache(SERIAL, DEVICE_NAME)


@pytest.fixture
def binding(cache: DeviceStateCache, client: FakeDeviceClient) -> AccessoryBinding:
    """Fixture providing a binding with the classic accessory layout."""
    return AccessoryBinding(cache, CAPABILITY_PROFILES[PROFILE_CLASSIC], client)


@pytest.fixture
def mock_hass() -> Mock:
    """Create a mock Home Assistant instance."""
    hass = Mock()
    hass.data = {}
    hass.is_stopping = False
    hass.loop.time.return_value = 0.0
    return hass


@pytest.fixture
def accessory(
    mock_hass: Mock, client: FakeDeviceClient, descriptor: DeviceDescriptor
) -> FrigidaireAccessory:
    """Fixture providing a classic accessory with a zero grace period."""
    return FrigidaireAccessory(
        mock_hass,
        client,
        descriptor,
        CAPABILITY_PROFILES[PROFILE_CLASSIC],
        polling_interval=timedelta(seconds=10),
        grace=0,
    )
