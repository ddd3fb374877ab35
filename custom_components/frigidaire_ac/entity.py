"""Base entity for Frigidaire AC integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER
from .coordinator import FrigidairePollScheduler

if TYPE_CHECKING:
    from .binding import FrigidaireAccessory
    from .models import Characteristic


class FrigidaireEntity(CoordinatorEntity[FrigidairePollScheduler]):
    """Entity rendering the characteristics of an accessory binding."""

    _attr_has_entity_name = True

    def __init__(self, accessory: FrigidaireAccessory, unique_id_suffix: str | None = None) -> None:
        """Initialize the entity.

        Args:
            accessory: Runtime of the device this entity belongs to.
            unique_id_suffix: Appended to the serial number for secondary entities.

        """
        super().__init__(accessory.scheduler)
        self._accessory = accessory
        self._binding = accessory.binding
        serial = accessory.serial_number
        self._attr_unique_id = f"{serial}_{unique_id_suffix}" if unique_id_suffix else serial

    @property
    def device_info(self) -> DeviceInfo:
        """Return device information for device registry."""
        descriptor = self._accessory.descriptor
        return DeviceInfo(
            identifiers={(DOMAIN, descriptor.serial_number)},
            name=descriptor.display_name,
            manufacturer=MANUFACTURER,
            model=descriptor.appliance_model or None,
            serial_number=descriptor.serial_number,
            sw_version=descriptor.firmware_version or None,
        )

    def _value(self, characteristic: Characteristic) -> Any:
        return self._binding.peek(characteristic)
