"""Data models for Frigidaire AC integration."""

from dataclasses import dataclass, fields
from datetime import timedelta
from enum import IntEnum, StrEnum


class DevicePower(StrEnum):
    """Raw operating mode reported by the air conditioner."""

    OFF = "off"
    COOLING = "cooling"
    FAN_ONLY = "fan_only"
    ECO = "eco"


class TargetMode(StrEnum):
    """User intent for the mode used when the device is switched on."""

    AUTO = "auto"
    COOL = "cool"


class FanLevel(StrEnum):
    """Fan enumeration understood by the device."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    AUTO = "auto"


class FanTargetState(StrEnum):
    AUTO = "auto"
    MANUAL = "manual"


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class Characteristic(StrEnum):
    """Accessory characteristics populated by the translators."""

    ACTIVE = "active"
    CURRENT_HEATER_COOLER_STATE = "current_heater_cooler_state"
    TARGET_HEATER_COOLER_STATE = "target_heater_cooler_state"
    CURRENT_TEMPERATURE = "current_temperature"
    COOLING_THRESHOLD_TEMPERATURE = "cooling_threshold_temperature"
    TEMPERATURE_DISPLAY_UNITS = "temperature_display_units"
    ROTATION_SPEED = "rotation_speed"
    SWING_MODE = "swing_mode"
    FAN_ACTIVE = "fan_active"
    CURRENT_FAN_STATE = "current_fan_state"
    TARGET_FAN_STATE = "target_fan_state"
    AUTO_FAN = "auto_fan"
    ECO_MODE = "eco_mode"
    FILTER_CHANGE_INDICATION = "filter_change_indication"


class Active(IntEnum):
    INACTIVE = 0
    ACTIVE = 1


class CurrentHeaterCoolerState(IntEnum):
    INACTIVE = 0
    IDLE = 1
    HEATING = 2
    COOLING = 3


class TargetHeaterCoolerState(IntEnum):
    AUTO = 0
    HEAT = 1
    COOL = 2


class TemperatureDisplayUnits(IntEnum):
    CELSIUS = 0
    FAHRENHEIT = 1


class CurrentFanState(IntEnum):
    INACTIVE = 0
    IDLE = 1
    BLOWING_AIR = 2


class TargetFanState(IntEnum):
    MANUAL = 0
    AUTO = 1


class FilterChangeIndication(IntEnum):
    FILTER_OK = 0
    CHANGE_FILTER = 1


@dataclass(frozen=True)
class DeviceDescriptor:
    """Identity of an appliance as returned by discovery.

    Attributes:
        serial_number: Stable device identifier, used to address every call.
        display_name: Human-readable nickname.
        appliance_model: Vendor model designation.
        firmware_version: Firmware revision reported by the cloud.
        appliance_type: Vendor appliance category (only "AC" is bridged).

    """

    serial_number: str
    display_name: str
    appliance_model: str = ""
    firmware_version: str = ""
    appliance_type: str = "AC"


@dataclass(frozen=True)
class CapabilitySet:
    """Accessory layout selected per device at bind time."""

    has_eco_switch: bool
    has_separate_fan_service: bool
    has_auto_fan_target_state: bool


@dataclass(slots=True)
class DeviceStateSnapshot:
    """Last known state of one device.

    Raw temperatures are always Fahrenheit, the unit the device speaks
    internally. ``display_unit`` only affects presentation.
    """

    power: DevicePower = DevicePower.OFF
    target_mode: TargetMode = TargetMode.AUTO
    current_temperature_raw: float = 32.0
    target_temperature_raw: float = 60.0
    display_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT
    fan_mode: FanLevel = FanLevel.AUTO
    fan_speed: int = 100
    fan_target_state: FanTargetState = FanTargetState.AUTO
    swing_enabled: bool | None = None  # None: not readable from the device API
    filter_ok: bool = True

    @property
    def is_active(self) -> bool:
        """Return True when the device is cooling (plain or eco)."""
        return self.power in (DevicePower.COOLING, DevicePower.ECO)

    @property
    def fan_active(self) -> bool:
        return self.power != DevicePower.OFF


SNAPSHOT_FIELDS = frozenset(field.name for field in fields(DeviceStateSnapshot))


@dataclass(slots=True)
class DeviceReading:
    """Decoded device values from a single read or telemetry fetch.

    Fields left as None were not part of the reading.
    """

    power: DevicePower | None = None
    fan_mode: FanLevel | None = None
    current_temperature_raw: float | None = None
    target_temperature_raw: float | None = None
    display_unit: TemperatureUnit | None = None
    filter_ok: bool | None = None


@dataclass(frozen=True)
class FrigidaireConfig:
    """Validated configuration consumed by the core."""

    host: str
    api_key: str
    polling_interval_ms: int
    device_id: str | None
    profile: str

    @property
    def polling_interval(self) -> timedelta:
        """Return the time between polls."""
        return timedelta(milliseconds=self.polling_interval_ms)
