"""Constants for the Frigidaire AC integration.

This module contains the constants used throughout the integration,
including vendor attribute codes, configuration keys, and mapping
dictionaries between device codes and the internal enumerations.
"""

from .models import (
    CapabilitySet,
    DevicePower,
    FanLevel,
    TemperatureUnit,
)

DOMAIN = "frigidaire_ac"
MANUFACTURER = "Frigidaire"

DEFAULT_HOST = "https://api.frigidaire-gateway.local"
API_KEY_HEADER = "x-api-key"
REQUEST_TIMEOUT = 5.0

CONF_POLLING_INTERVAL = "polling_interval"
CONF_PROFILE = "profile"

DEFAULT_POLLING_INTERVAL_MS = 10000
# Bulk telemetry completion is not signalled reliably, attribute reads wait this long
TELEMETRY_GRACE_SECONDS = 2.0
MIN_POLLING_INTERVAL_MS = int(TELEMETRY_GRACE_SECONDS * 1000) + 1000

MIN_TARGET_TEMP_C = 15.56
MAX_TARGET_TEMP_C = 32.22
TARGET_TEMP_STEP = 0.1

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"
ERROR_NO_DEVICES = "no_devices"

APPLIANCE_TYPE_AC = "AC"

# Gateway attribute names
ATTR_MODE = "mode"
ATTR_FAN_MODE = "fanMode"
ATTR_TARGET_TEMPERATURE = "temp"
ATTR_ROOM_TEMPERATURE = "roomTemp"
ATTR_UNIT = "unit"
ATTR_FILTER = "filter"

# Vendor codes
MODE_OFF = 0
MODE_COOL = 1
MODE_FAN = 3
MODE_ECON = 4

FANMODE_LOW = 1
FANMODE_MED = 2
FANMODE_HIGH = 4
FANMODE_AUTO = 7

CELSIUS = 0
FAHRENHEIT = 1

FILTER_GOOD = 0
FILTER_CHANGE = 2

MODE_MAP = {
    DevicePower.OFF: MODE_OFF,
    DevicePower.COOLING: MODE_COOL,
    DevicePower.FAN_ONLY: MODE_FAN,
    DevicePower.ECO: MODE_ECON,
}
MODE_REVERSE_MAP = {value: key for key, value in MODE_MAP.items()}
FAN_MODE_MAP = {
    FanLevel.LOW: FANMODE_LOW,
    FanLevel.MEDIUM: FANMODE_MED,
    FanLevel.HIGH: FANMODE_HIGH,
    FanLevel.AUTO: FANMODE_AUTO,
}
FAN_MODE_REVERSE_MAP = {value: key for key, value in FAN_MODE_MAP.items()}
UNIT_MAP = {
    TemperatureUnit.CELSIUS: CELSIUS,
    TemperatureUnit.FAHRENHEIT: FAHRENHEIT,
}
UNIT_REVERSE_MAP = {value: key for key, value in UNIT_MAP.items()}

PROFILE_CLASSIC = "classic"
PROFILE_FAN_SERVICE = "fan_service"
PROFILE_UNIFIED = "unified"
DEFAULT_PROFILE = PROFILE_CLASSIC

CAPABILITY_PROFILES = {
    PROFILE_CLASSIC: CapabilitySet(
        has_eco_switch=True,
        has_separate_fan_service=False,
        has_auto_fan_target_state=False,
    ),
    PROFILE_FAN_SERVICE: CapabilitySet(
        has_eco_switch=True,
        has_separate_fan_service=True,
        has_auto_fan_target_state=True,
    ),
    PROFILE_UNIFIED: CapabilitySet(
        has_eco_switch=False,
        has_separate_fan_service=True,
        has_auto_fan_target_state=True,
    ),
}
