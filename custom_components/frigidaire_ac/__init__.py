from __future__ import annotations

import logging

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant

from . import api
from .api import create_session_client
from .binding import FrigidaireAccessory, capabilities_for, select_devices
from .config_flow import build_config
from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.BINARY_SENSOR, Platform.CLIMATE, Platform.SWITCH]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up Frigidaire AC integration for entry %s", entry.entry_id)

    try:
        config = build_config(entry.data)
    except vol.Invalid as err:
        _LOGGER.error("Invalid configuration for entry %s: %s", entry.entry_id, err)
        return False

    session = create_session_client(hass)
    client = api.HttpDeviceClient(session, config.host, config.api_key)

    try:
        _LOGGER.debug("Searching for devices")
        devices = await client.list_devices()
        _LOGGER.info("Successfully retrieved %d appliances", len(devices))
    except api.FrigidaireAuthError as err:
        _LOGGER.warning(
            "Authentication failed for entry %s: %s", entry.entry_id, str(err)
        )
        return False
    except api.FrigidaireApiError as err:
        _LOGGER.error("API error for entry %s: %s", entry.entry_id, str(err))
        return False
    except Exception as err:
        _LOGGER.exception(
            "Unexpected error during setup for entry %s: %s", entry.entry_id, err
        )
        return False

    capabilities = capabilities_for(config.profile)
    accessories = {
        device.serial_number: FrigidaireAccessory(
            hass,
            client,
            device,
            capabilities,
            config.polling_interval,
        )
        for device in select_devices(devices, config)
    }

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "client": client,
        "config": config,
        "accessories": accessories,
    }
    _LOGGER.debug(
        "Stored data for entry %s: %d accessories", entry.entry_id, len(accessories)
    )

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception as err:
        _LOGGER.error("Failed to setup platforms for entry %s: %s", entry.entry_id, err)
        hass.data[DOMAIN].pop(entry.entry_id)
        return False

    for accessory in accessories.values():
        await accessory.async_start()

    _LOGGER.info(
        "Successfully setup Frigidaire AC integration for entry %s", entry.entry_id
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading Frigidaire AC integration for entry %s", entry.entry_id)

    try:
        unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
        if unload_ok:
            if DOMAIN in hass.data and entry.entry_id in hass.data[DOMAIN]:
                entry_data = hass.data[DOMAIN].pop(entry.entry_id)
                for accessory in entry_data["accessories"].values():
                    await accessory.async_shutdown()
                _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)
            _LOGGER.info(
                "Successfully unloaded Frigidaire AC integration for entry %s",
                entry.entry_id,
            )
        else:
            _LOGGER.warning(
                "Failed to unload some platforms for entry %s", entry.entry_id
            )

        return unload_ok
    except Exception as err:
        _LOGGER.error(
            "Error unloading Frigidaire AC integration for entry %s: %s",
            entry.entry_id,
            err,
        )
        return False
