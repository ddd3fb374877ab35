"""Device client for Frigidaire air conditioners.

This module defines the error taxonomy, the ``DeviceClient`` capability the
reconciliation core depends on, and an HTTP implementation that talks to a
Frigidaire cloud gateway exposing vendor attribute codes as JSON.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

import httpx
from homeassistant.helpers.httpx_client import create_async_httpx_client
from httpx_retries import Retry, RetryTransport

from .const import (
    API_KEY_HEADER,
    ATTR_FAN_MODE,
    ATTR_FILTER,
    ATTR_MODE,
    ATTR_ROOM_TEMPERATURE,
    ATTR_TARGET_TEMPERATURE,
    ATTR_UNIT,
    REQUEST_TIMEOUT,
)
from .models import DeviceDescriptor

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403

AUTH_API_STATUSES = (401, 403)


class FrigidaireApiError(Exception):
    """Base exception for Frigidaire device client errors."""


class FrigidaireTransportError(FrigidaireApiError):
    """Exception raised when the device or gateway cannot be reached."""


class FrigidaireTimeoutError(FrigidaireTransportError):
    """Exception raised when a request times out."""


class FrigidaireProtocolError(FrigidaireApiError):
    """Exception raised when a command or value is rejected."""


class FrigidaireAuthError(FrigidaireProtocolError):
    """Exception raised for authentication errors."""


class DeviceClient(Protocol):
    """Capability used by the core to reach the appliances.

    Every operation is addressed by serial number and may fail with a
    ``FrigidaireApiError``.
    """

    async def list_devices(self) -> list[DeviceDescriptor]: ...

    async def read_mode(self, serial: str) -> Any: ...

    async def read_fan_mode(self, serial: str) -> Any: ...

    async def read_temperature(self, serial: str) -> Any: ...

    async def read_room_temperature(self, serial: str) -> Any: ...

    async def read_unit(self, serial: str) -> Any: ...

    async def read_filter(self, serial: str) -> Any: ...

    async def read_telemetry(self, serial: str) -> Mapping[str, Any] | None: ...

    async def write_mode(self, serial: str, value: Any) -> Any: ...

    async def write_fan_mode(self, serial: str, value: Any) -> Any: ...

    async def write_temperature(self, serial: str, value: float) -> Any: ...

    async def write_unit(self, serial: str, value: Any) -> Any: ...


def create_headers(api_key: str | None = None) -> dict[str, str]:
    """Create HTTP headers for gateway requests.

    Args:
        api_key: Optional API key to include in headers.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        "content-type": "application/json",
        "accept": "application/json",
    }
    if api_key:
        headers[API_KEY_HEADER] = api_key
    return headers


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error."""
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates authentication error."""
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def is_api_error(data: dict[str, Any]) -> bool:
    """Check if API response indicates an error."""
    return data.get("status", 0) != 0


def is_auth_api_error(data: dict[str, Any]) -> bool:
    """Check if API response indicates authentication error."""
    return data.get("status", 0) in AUTH_API_STATUSES


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        FrigidaireAuthError: If authentication error is detected.
        FrigidaireProtocolError: If the gateway or device rejected the request.

    """
    _validate_http_status(response)
    try:
        data = response.json()
    except ValueError as err:
        error_msg = f"Invalid JSON in response: {err}"
        raise FrigidaireProtocolError(error_msg) from err
    _validate_api_status(data)
    return data


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    if is_auth_error(response.status_code):
        auth_error = "Authentication error"
        raise FrigidaireAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise FrigidaireProtocolError(client_error)


def _validate_api_status(data: dict[str, Any]) -> None:
    if not is_api_error(data):
        return

    error_message = data.get("errorMessage", "Unknown API error")

    if is_auth_api_error(data):
        raise FrigidaireAuthError(error_message)

    raise FrigidaireProtocolError(error_message)


def extract_devices(data: dict[str, Any]) -> list[DeviceDescriptor]:
    """Extract the appliance list from a gateway response.

    Args:
        data: API response data dictionary.

    Returns:
        List of DeviceDescriptor objects.

    """
    appliances = data.get("body", {}).get("appliances", [])
    return [
        DeviceDescriptor(
            serial_number=str(appliance["sn"]),
            display_name=appliance.get("nickname") or str(appliance["sn"]),
            appliance_model=appliance.get("applianceModel", ""),
            firmware_version=appliance.get("version", ""),
            appliance_type=appliance.get("applianceType", ""),
        )
        for appliance in appliances
    ]


def extract_value(data: dict[str, Any]) -> Any:
    """Extract an attribute value from a gateway response."""
    body = data.get("body", {})
    if "value" not in body:
        error_msg = "Response is missing the attribute value"
        raise FrigidaireProtocolError(error_msg)
    return body["value"]


def extract_result(data: dict[str, Any]) -> bool:
    """Extract result status from a write response."""
    return data.get("body", {}).get("result", False)


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client with retry logic for the gateway.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient with retry transport.

    """
    base_client = create_async_httpx_client(hass, timeout=REQUEST_TIMEOUT)
    retry = Retry(total=3, backoff_factor=0.5)
    base_client._transport = RetryTransport(  # noqa: SLF001
        transport=base_client._transport,  # noqa: SLF001
        retry=retry,
    )
    return base_client


class HttpDeviceClient:
    """``DeviceClient`` implementation backed by the HTTP gateway."""

    def __init__(self, session: httpx.AsyncClient, host: str, api_key: str) -> None:
        self._session = session
        self._host = host.rstrip("/")
        self._api_key = api_key

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._host}{path}"
        try:
            response = await self._session.request(
                method,
                url,
                headers=create_headers(self._api_key),
                json=payload,
            )
        except httpx.TimeoutException as err:
            error_msg = f"Timeout calling {method} {path}: {err}"
            raise FrigidaireTimeoutError(error_msg) from err
        except httpx.RequestError as err:
            error_msg = f"Connection error calling {method} {path}: {err}"
            raise FrigidaireTransportError(error_msg) from err
        return validate_response(response)

    async def list_devices(self) -> list[DeviceDescriptor]:
        _LOGGER.debug("Fetching appliances from gateway %s", self._host)
        data = await self._request("GET", "/appliances")
        devices = extract_devices(data)
        _LOGGER.debug("Retrieved %d appliances from gateway", len(devices))
        return devices

    async def _read(self, serial: str, attribute: str) -> Any:
        data = await self._request("GET", f"/appliances/{serial}/attributes/{attribute}")
        value = extract_value(data)
        _LOGGER.debug("Read %s for %s: %s", attribute, serial, value)
        return value

    async def _write(self, serial: str, attribute: str, value: Any) -> bool:
        _LOGGER.debug("Writing %s for %s: %s", attribute, serial, value)
        data = await self._request(
            "PUT",
            f"/appliances/{serial}/attributes/{attribute}",
            {"value": value},
        )
        if not extract_result(data):
            error_msg = f"Device {serial} rejected {attribute}={value}"
            raise FrigidaireProtocolError(error_msg)
        return True

    async def read_mode(self, serial: str) -> Any:
        return await self._read(serial, ATTR_MODE)

    async def read_fan_mode(self, serial: str) -> Any:
        return await self._read(serial, ATTR_FAN_MODE)

    async def read_temperature(self, serial: str) -> Any:
        return await self._read(serial, ATTR_TARGET_TEMPERATURE)

    async def read_room_temperature(self, serial: str) -> Any:
        return await self._read(serial, ATTR_ROOM_TEMPERATURE)

    async def read_unit(self, serial: str) -> Any:
        return await self._read(serial, ATTR_UNIT)

    async def read_filter(self, serial: str) -> Any:
        return await self._read(serial, ATTR_FILTER)

    async def read_telemetry(self, serial: str) -> Mapping[str, Any] | None:
        """Trigger a bulk status fetch and return whatever the gateway echoes."""
        data = await self._request("POST", f"/appliances/{serial}/telemetry", {})
        return data.get("body", {}).get("telemetry")

    async def write_mode(self, serial: str, value: Any) -> bool:
        return await self._write(serial, ATTR_MODE, value)

    async def write_fan_mode(self, serial: str, value: Any) -> bool:
        return await self._write(serial, ATTR_FAN_MODE, value)

    async def write_temperature(self, serial: str, value: float) -> bool:
        return await self._write(serial, ATTR_TARGET_TEMPERATURE, value)

    async def write_unit(self, serial: str, value: Any) -> bool:
        return await self._write(serial, ATTR_UNIT, value)
