"""Filter status sensor for Frigidaire AC devices."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)

from .const import DOMAIN
from .entity import FrigidaireEntity
from .models import Characteristic, FilterChangeIndication

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .binding import FrigidaireAccessory


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    entry_data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [
            FrigidaireFilterSensor(accessory)
            for accessory in entry_data["accessories"].values()
        ]
    )


class FrigidaireFilterSensor(FrigidaireEntity, BinarySensorEntity):
    """On when the filter needs replacing."""

    _attr_name = "Replace Filter"
    _attr_device_class = BinarySensorDeviceClass.PROBLEM

    def __init__(self, accessory: FrigidaireAccessory) -> None:
        super().__init__(accessory, "filter")

    @property
    def is_on(self) -> bool:
        indication = self._value(Characteristic.FILTER_CHANGE_INDICATION)
        return indication == FilterChangeIndication.CHANGE_FILTER
