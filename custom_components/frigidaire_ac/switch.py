"""Switch entities for Frigidaire AC eco mode and auto fan."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchEntity

from .const import DOMAIN
from .entity import FrigidaireEntity
from .models import Characteristic

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
    """Set up the switches each accessory profile exposes."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    entities: list[SwitchEntity] = []
    for accessory in entry_data["accessories"].values():
        characteristics = accessory.binding.characteristics
        if Characteristic.ECO_MODE in characteristics:
            entities.append(FrigidaireEcoModeSwitch(accessory))
        if Characteristic.AUTO_FAN in characteristics:
            entities.append(FrigidaireAutoFanSwitch(accessory))
    async_add_entities(entities)


class FrigidaireCharacteristicSwitch(FrigidaireEntity, SwitchEntity):
    """Switch backed by a boolean characteristic."""

    characteristic: Characteristic

    def __init__(self, accessory: FrigidaireAccessory) -> None:
        super().__init__(accessory, self.characteristic.value)

    @property
    def is_on(self) -> bool:
        return bool(self._value(self.characteristic))

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._binding.async_set(self.characteristic, True)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._binding.async_set(self.characteristic, False)


class FrigidaireEcoModeSwitch(FrigidaireCharacteristicSwitch):
    _attr_name = "Econ Mode"
    _attr_icon = "mdi:leaf"
    characteristic = Characteristic.ECO_MODE


class FrigidaireAutoFanSwitch(FrigidaireCharacteristicSwitch):
    _attr_name = "Auto Fan"
    _attr_icon = "mdi:fan-auto"
    characteristic = Characteristic.AUTO_FAN
