from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_PASSWORD, CONF_USERNAME, Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryAuthFailed, ConfigEntryNotReady

from . import api
from .api import create_session_client
from .const import DOMAIN
from .coordinator import LayZSpaCoordinator

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE, Platform.SWITCH]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up Lay-Z Spa integration for entry %s", entry.entry_id)

    session = create_session_client(hass)

    try:
        user_session = await api.async_authenticate(
            session, entry.data[CONF_USERNAME], entry.data[CONF_PASSWORD]
        )
        devices = await api.async_get_devices(session, user_session.token)
    except api.LayZSpaApiAuthError as err:
        _LOGGER.warning(
            "Authentication failed for entry %s: %s", entry.entry_id, str(err)
        )
        raise ConfigEntryAuthFailed(str(err)) from err
    except api.LayZSpaApiClientError as err:
        _LOGGER.error("API client error for entry %s: %s", entry.entry_id, str(err))
        raise ConfigEntryNotReady(str(err)) from err

    if not devices:
        _LOGGER.error("No spa bound to the account of entry %s", entry.entry_id)
        return False

    device = devices[0]
    if len(devices) > 1:
        _LOGGER.warning(
            "Account has %d bound devices, only %s is used", len(devices), device.name
        )
    _LOGGER.info("Using spa %s (%s)", device.name, device.id)

    coordinator = LayZSpaCoordinator(
        hass, session, user_session, device, config_entry=entry
    )
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {"coordinator": coordinator}

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    _LOGGER.info(
        "Successfully setup Lay-Z Spa integration for entry %s", entry.entry_id
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading Lay-Z Spa integration for entry %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
        _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)
    else:
        _LOGGER.warning("Failed to unload some platforms for entry %s", entry.entry_id)

    return unload_ok
