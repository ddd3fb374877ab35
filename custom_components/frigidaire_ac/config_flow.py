"""
Configuration flow for Frigidaire AC integration.

This module handles the setup and configuration of the Frigidaire AC
integration through Home Assistant's config flow system.
"""

import logging
from collections.abc import Mapping
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_API_KEY, CONF_DEVICE_ID, CONF_HOST
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .binding import select_devices
from .const import (
    CAPABILITY_PROFILES,
    CONF_POLLING_INTERVAL,
    CONF_PROFILE,
    DEFAULT_HOST,
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_PROFILE,
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_NO_DEVICES,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
    MIN_POLLING_INTERVAL_MS,
)
from .models import FrigidaireConfig

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST, default=DEFAULT_HOST): str,
        vol.Required(CONF_API_KEY): str,
        vol.Optional(
            CONF_POLLING_INTERVAL, default=DEFAULT_POLLING_INTERVAL_MS
        ): vol.All(vol.Coerce(int), vol.Range(min=MIN_POLLING_INTERVAL_MS)),
        vol.Optional(CONF_DEVICE_ID): str,
        vol.Optional(CONF_PROFILE, default=DEFAULT_PROFILE): vol.In(
            list(CAPABILITY_PROFILES)
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


def build_config(data: Mapping[str, Any]) -> FrigidaireConfig:
    """Validate entry data into a FrigidaireConfig.

    Raises:
        vol.Invalid: If the data does not match CONFIG_SCHEMA.

    """
    validated = CONFIG_SCHEMA(
        {key: value for key, value in data.items() if value is not None}
    )
    return FrigidaireConfig(
        host=validated[CONF_HOST],
        api_key=validated[CONF_API_KEY],
        polling_interval_ms=validated[CONF_POLLING_INTERVAL],
        device_id=validated.get(CONF_DEVICE_ID) or None,
        profile=validated[CONF_PROFILE],
    )


class FrigidaireAcConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for Frigidaire AC integration."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: Gateway host, API key and polling options.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            config = build_config(user_input)

            try:
                session = get_async_client(self.hass)
                client = api.HttpDeviceClient(session, config.host, config.api_key)
                devices = await client.list_devices()
                _LOGGER.info("Found %d appliances on %s", len(devices), config.host)

            except api.FrigidaireAuthError as err:
                _LOGGER.warning(
                    "Authentication failed (%s): %s", ERROR_INVALID_AUTH, err
                )
                errors["base"] = ERROR_INVALID_AUTH
            except api.FrigidaireTimeoutError:
                _LOGGER.exception("Timeout error (%s)", ERROR_TIMEOUT)
                errors["base"] = ERROR_TIMEOUT
            except api.FrigidaireTransportError:
                _LOGGER.exception("Connection error (%s)", ERROR_CANNOT_CONNECT)
                errors["base"] = ERROR_CANNOT_CONNECT
            except api.FrigidaireProtocolError:
                _LOGGER.exception("API client error (%s)", ERROR_API_ERROR)
                errors["base"] = ERROR_API_ERROR
            except Exception:
                _LOGGER.exception(
                    "Unexpected error while listing appliances (%s)",
                    ERROR_UNKNOWN,
                )
                errors["base"] = ERROR_UNKNOWN

            else:
                if not select_devices(devices, config):
                    _LOGGER.warning("No matching appliances on %s", config.host)
                    errors["base"] = ERROR_NO_DEVICES
                else:
                    await self.async_set_unique_id(
                        f"{config.host.lower()}_{config.device_id or 'all'}"
                    )
                    self._abort_if_unique_id_configured()

                    return self.async_create_entry(
                        title=f"Frigidaire AC ({config.host})",
                        data={
                            CONF_HOST: config.host,
                            CONF_API_KEY: config.api_key,
                            CONF_POLLING_INTERVAL: config.polling_interval_ms,
                            CONF_DEVICE_ID: config.device_id,
                            CONF_PROFILE: config.profile,
                        },
                    )

        return self.async_show_form(
            step_id="user",
            data_schema=CONFIG_SCHEMA,
            errors=errors,
        )
