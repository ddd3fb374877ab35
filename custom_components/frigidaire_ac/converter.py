"""Temperature and fan speed conversions.

The device exposes three discrete fan levels behind the continuous rotation
speed slider, so the speed mapping is lossy: any percentage collapses to the
upper bound of its band. Auto fan has no fixed percentage and always reads
back as 100; that value is presentation-only and is never written back as a
manual speed.
"""

from .models import FanLevel, TemperatureUnit

LOW_SPEED = 33
MEDIUM_SPEED = 66
HIGH_SPEED = 100


def to_celsius(fahrenheit: float) -> float:
    """Convert a Fahrenheit temperature to Celsius."""
    return (fahrenheit - 32) / 1.8


def to_fahrenheit(celsius: float) -> float:
    """Convert a Celsius temperature to Fahrenheit."""
    return celsius * 1.8 + 32


def speed_to_level(speed: float) -> FanLevel:
    """Quantize a rotation speed percentage into a device fan level.

    Args:
        speed: Rotation speed between 0 and 100.

    Returns:
        LOW up to 33, MEDIUM up to 66, HIGH above.

    """
    if speed <= LOW_SPEED:
        return FanLevel.LOW
    if speed <= MEDIUM_SPEED:
        return FanLevel.MEDIUM
    return FanLevel.HIGH


def level_to_speed(level: FanLevel) -> int:
    """Return the rotation speed a device fan level reads back as."""
    if level == FanLevel.LOW:
        return LOW_SPEED
    if level == FanLevel.MEDIUM:
        return MEDIUM_SPEED
    return HIGH_SPEED


def render_temperature(raw_fahrenheit: float, unit: TemperatureUnit) -> float:
    """Render a raw device temperature in the display unit."""
    if unit == TemperatureUnit.CELSIUS:
        return round(to_celsius(raw_fahrenheit), 2)
    return raw_fahrenheit
