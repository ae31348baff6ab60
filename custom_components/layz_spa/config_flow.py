"""
Configuration flow for Lay-Z Spa integration.

This module handles the setup of the integration through Home Assistant's
config flow system. Credentials are checked against the Gizwits cloud and
the account must have at least one bound spa.
"""

import logging
from typing import Any

import httpx
import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_PASSWORD, CONF_USERNAME
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .const import (
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_NO_DEVICES,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
    }
)


class LayZSpaConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for Lay-Z Spa integration."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing username and password.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            username = user_input[CONF_USERNAME]
            password = user_input[CONF_PASSWORD]

            try:
                session = get_async_client(self.hass)
                user_session = await api.async_authenticate(session, username, password)
                devices = await api.async_get_devices(session, user_session.token)
                _LOGGER.info("Successfully authenticated with Gizwits API")

            except api.LayZSpaApiAuthError as err:
                _LOGGER.warning(
                    "Authentication failed (%s): %s", ERROR_INVALID_AUTH, err
                )
                errors["base"] = ERROR_INVALID_AUTH
            except api.RemoteUnavailableError as err:
                if isinstance(err.__cause__, httpx.TimeoutException):
                    _LOGGER.exception("Timeout error (%s)", ERROR_TIMEOUT)
                    errors["base"] = ERROR_TIMEOUT
                else:
                    _LOGGER.exception("Connection error (%s)", ERROR_CANNOT_CONNECT)
                    errors["base"] = ERROR_CANNOT_CONNECT
            except api.LayZSpaApiClientError:
                _LOGGER.exception("API client error (%s)", ERROR_API_ERROR)
                errors["base"] = ERROR_API_ERROR
            except Exception:
                _LOGGER.exception(
                    "Unexpected error during authentication (%s)",
                    ERROR_UNKNOWN,
                )
                errors["base"] = ERROR_UNKNOWN

            else:
                if not devices:
                    _LOGGER.warning("No spa bound to account (%s)", ERROR_NO_DEVICES)
                    errors["base"] = ERROR_NO_DEVICES
                else:
                    await self.async_set_unique_id(username.lower())
                    self._abort_if_unique_id_configured()

                    return self.async_create_entry(
                        title=f"Lay-Z Spa ({devices[0].name})",
                        data={
                            CONF_USERNAME: username,
                            CONF_PASSWORD: password,
                        },
                    )

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )
