"""API client for the Gizwits cloud used by Lay-Z spas.

This module provides functions to interact with the Gizwits app API,
including authentication, device discovery, status reads and control writes.
Every call is a single attempt: no retries and no caching happen here.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import httpx
from homeassistant.core import HomeAssistant
from homeassistant.helpers.httpx_client import create_async_httpx_client

from .const import (
    APPLICATION_ID,
    ATTR_FILTER_POWER,
    ATTR_HEAT_POWER,
    ATTR_POWER,
    ATTR_TEMP_NOW,
    ATTR_TEMP_SET,
    ATTR_WAVE_POWER,
    BASE_URL,
    LOGIN_LANGUAGE,
    REQUEST_TIMEOUT,
)
from .models import GizwitsSession, SpaDevice, SpaState

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200
HTTP_MULTIPLE_CHOICES = 300
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403

STATE_ATTRIBUTES = (
    ATTR_TEMP_NOW,
    ATTR_TEMP_SET,
    ATTR_HEAT_POWER,
    ATTR_FILTER_POWER,
    ATTR_WAVE_POWER,
)


class LayZSpaApiClientError(Exception):
    """Base exception for Lay-Z Spa API client errors."""


class RemoteUnavailableError(LayZSpaApiClientError):
    """Exception raised for transport failures and non-2xx responses."""


class LayZSpaApiAuthError(RemoteUnavailableError):
    """Exception raised for authentication errors."""


class MalformedResponseError(LayZSpaApiClientError):
    """Exception raised when a response body does not have the expected shape."""


class DeviceDisconnectedError(LayZSpaApiClientError):
    """Exception raised when a well-formed status lacks the power attribute."""


def create_headers(token: str | None = None) -> dict[str, str]:
    """Create HTTP headers for Gizwits API requests.

    Args:
        token: Optional user token to include in headers.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        "Content-Type": "application/json; charset=UTF-8",
        "X-Gizwits-Application-Id": APPLICATION_ID,
    }
    if token:
        headers["X-Gizwits-User-token"] = token
    return headers


def is_http_error(status: int) -> bool:
    """Check if HTTP status code is anything other than 2xx."""
    return not HTTP_OK <= status < HTTP_MULTIPLE_CHOICES


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates an authentication error."""
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def validate_response(response: httpx.Response) -> Any:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        LayZSpaApiAuthError: If authentication error is detected.
        RemoteUnavailableError: If the status code is not successful.
        MalformedResponseError: If the body is not valid JSON.

    """
    _validate_http_status(response)
    try:
        return response.json()
    except ValueError as err:
        error_msg = f"Response body is not valid JSON: {err}"
        raise MalformedResponseError(error_msg) from err


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    if is_auth_error(response.status_code):
        auth_error = f"Authentication error: {response.status_code}"
        raise LayZSpaApiAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise RemoteUnavailableError(client_error)


async def _async_request(
    session: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,  # noqa: ANN401
) -> httpx.Response:
    try:
        return await session.request(method, url, **kwargs)
    except httpx.RequestError as err:
        error_msg = f"Connection error: {err}"
        raise RemoteUnavailableError(error_msg) from err


def extract_session(data: Any) -> GizwitsSession:  # noqa: ANN401
    """Extract the user session from a login response.

    Args:
        data: Login response data.

    Returns:
        GizwitsSession with token, user id and expiry.

    Raises:
        MalformedResponseError: If the token is missing.

    """
    if not isinstance(data, Mapping) or not data.get("token"):
        error_msg = "Login response does not contain a token"
        raise MalformedResponseError(error_msg)

    expire_at = data.get("expire_at")
    return GizwitsSession(
        token=str(data["token"]),
        uid=str(data.get("uid", "")),
        expire_at=(
            datetime.fromtimestamp(expire_at, tz=UTC)
            if isinstance(expire_at, int | float)
            else None
        ),
    )


def extract_devices(data: Any) -> list[SpaDevice]:  # noqa: ANN401
    """Extract device list from a bindings response.

    Args:
        data: Bindings response data.

    Returns:
        List of SpaDevice objects.

    Raises:
        MalformedResponseError: If the devices list is missing.

    """
    devices = data.get("devices") if isinstance(data, Mapping) else None
    if not isinstance(devices, list):
        error_msg = "Bindings response does not contain a devices list"
        raise MalformedResponseError(error_msg)

    return [
        SpaDevice(
            id=str(device["did"]),
            name=str(
                device.get("dev_alias") or device.get("product_name") or "Lay-Z Spa"
            ),
        )
        for device in devices
        if isinstance(device, Mapping) and device.get("did")
    ]


def extract_attributes(data: Any) -> dict[str, Any]:  # noqa: ANN401
    """Extract the raw attribute set from a devdata response.

    Raises:
        MalformedResponseError: If the attr object is missing.

    """
    attrs = data.get("attr") if isinstance(data, Mapping) else None
    if not isinstance(attrs, Mapping):
        error_msg = "Status response does not contain an attr object"
        raise MalformedResponseError(error_msg)
    return dict(attrs)


def extract_spa_state(attrs: Mapping[str, Any], fetched_at: datetime) -> SpaState:
    """Map raw device attributes 1:1 onto a SpaState.

    Args:
        attrs: Raw attribute set as reported by the device.
        fetched_at: Timestamp of the read.

    Returns:
        SpaState mirroring the attributes.

    Raises:
        DeviceDisconnectedError: If the power attribute is absent.
        MalformedResponseError: If any other attribute is absent or invalid.

    """
    if attrs.get(ATTR_POWER) is None:
        error_msg = "Device reported no power attribute"
        raise DeviceDisconnectedError(error_msg)

    missing = [key for key in STATE_ATTRIBUTES if attrs.get(key) is None]
    if missing:
        error_msg = f"Status is missing attributes: {', '.join(missing)}"
        raise MalformedResponseError(error_msg)

    try:
        return SpaState(
            power=bool(attrs[ATTR_POWER]),
            current_temperature=float(attrs[ATTR_TEMP_NOW]),
            target_temperature=float(attrs[ATTR_TEMP_SET]),
            heating_on=bool(attrs[ATTR_HEAT_POWER]),
            filter_on=bool(attrs[ATTR_FILTER_POWER]),
            waves_on=bool(attrs[ATTR_WAVE_POWER]),
            last_fetched_at=fetched_at,
        )
    except (TypeError, ValueError) as err:
        error_msg = f"Status contains invalid temperature values: {err}"
        raise MalformedResponseError(error_msg) from err


def encode_attributes(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """Encode attribute values for a control request.

    Booleans are sent as 1/0 and whole-number temperatures as integers.
    """
    encoded: dict[str, Any] = {}
    for key, value in attrs.items():
        if isinstance(value, bool):
            encoded[key] = 1 if value else 0
        elif isinstance(value, float) and value.is_integer():
            encoded[key] = int(value)
        else:
            encoded[key] = value
    return encoded


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client for the Gizwits API.

    Args:
        hass: Home Assistant instance.

    Returns:
        httpx AsyncClient managed by Home Assistant.

    """
    return create_async_httpx_client(hass, timeout=REQUEST_TIMEOUT)


async def async_authenticate(
    session: httpx.AsyncClient,
    username: str,
    password: str,
) -> GizwitsSession:
    """Authenticate with the Gizwits API using username and password.

    Args:
        session: HTTP client session.
        username: Account user name (email).
        password: Account password.

    Returns:
        GizwitsSession for subsequent requests.

    Raises:
        LayZSpaApiAuthError: If authentication fails.
        RemoteUnavailableError: If the request fails.
        MalformedResponseError: If the response has no token.

    """
    url = f"{BASE_URL}/login"
    payload = {"username": username, "password": password, "lang": LOGIN_LANGUAGE}

    _LOGGER.debug("Authenticating with Gizwits API")
    response = await _async_request(
        session, "POST", url, headers=create_headers(), json=payload
    )
    data = validate_response(response)
    user_session = extract_session(data)
    _LOGGER.debug("Successfully authenticated with Gizwits API")
    return user_session


async def async_get_devices(
    session: httpx.AsyncClient,
    token: str,
) -> list[SpaDevice]:
    """Fetch devices bound to the account.

    Raises:
        LayZSpaApiAuthError: If authentication fails.
        RemoteUnavailableError: If the request fails.
        MalformedResponseError: If the response has no devices list.

    """
    url = f"{BASE_URL}/bindings"

    _LOGGER.debug("Fetching bound devices from Gizwits API")
    response = await _async_request(session, "GET", url, headers=create_headers(token))
    data = validate_response(response)
    devices = extract_devices(data)
    _LOGGER.debug("Retrieved %d devices from Gizwits API", len(devices))
    return devices


async def async_fetch_status(
    session: httpx.AsyncClient,
    token: str,
    device_id: str,
) -> dict[str, Any]:
    """Fetch the latest raw attribute set of a device.

    Args:
        session: HTTP client session.
        token: User token.
        device_id: Target device identifier.

    Returns:
        Raw attributes exactly as reported.

    Raises:
        RemoteUnavailableError: If the request fails.
        MalformedResponseError: If the body is not the expected shape.

    """
    url = f"{BASE_URL}/devdata/{device_id}/latest"

    response = await _async_request(session, "GET", url, headers=create_headers(token))
    data = validate_response(response)
    attrs = extract_attributes(data)
    _LOGGER.debug("Status for device %s: %s", device_id, attrs)
    return attrs


async def async_send_command(
    session: httpx.AsyncClient,
    token: str,
    device_id: str,
    attrs: Mapping[str, Any],
) -> None:
    """Write one or more attributes to a device in a single request.

    Args:
        session: HTTP client session.
        token: User token.
        device_id: Target device identifier.
        attrs: Attributes to write, keyed by wire name.

    Raises:
        RemoteUnavailableError: If the request fails.

    """
    url = f"{BASE_URL}/control/{device_id}"
    payload = {"attrs": encode_attributes(attrs)}

    _LOGGER.debug("Sending command to device %s: %s", device_id, payload)
    response = await _async_request(
        session, "POST", url, headers=create_headers(token), json=payload
    )
    _validate_http_status(response)
