"""Coordinator for Lay-Z Spa integration."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import api
from .const import CACHE_WINDOW, DEFAULT_POLL_INTERVAL, DOMAIN
from .models import GizwitsSession, HeatingState, SpaDevice, SpaState
from .transitions import SpaChange, SpaField, plan_transition

if TYPE_CHECKING:
    import httpx
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


class CommandRejectedError(HomeAssistantError):
    """Raised when the spa does not accept a control write."""


class LayZSpaCoordinator(DataUpdateCoordinator[SpaState]):
    """Coordinator that mirrors the state of one spa.

    Timer polls and host commands are serialized through a single lock, so
    the remote calls of one operation never interleave with another's. The
    last confirmed mirror is kept apart from an optimistic pending value,
    which is promoted only by a successful read after a write.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        session: httpx.AsyncClient,
        user_session: GizwitsSession,
        device: SpaDevice,
        config_entry: ConfigEntry | None = None,
    ) -> None:
        """Initialize the coordinator."""
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            config_entry=config_entry,
            update_interval=timedelta(seconds=DEFAULT_POLL_INTERVAL),
        )
        self.session = session
        self.device = device
        self._token = user_session.token
        self._lock = asyncio.Lock()
        self._confirmed = SpaState()
        self._pending: SpaState | None = None
        self.data = self._confirmed

    @property
    def state(self) -> SpaState:
        """Return the pending optimistic state, or the confirmed mirror."""
        if self._pending is not None:
            return self._pending
        return self._confirmed

    @property
    def confirmed_state(self) -> SpaState:
        """Return the state last confirmed by a remote read."""
        return self._confirmed

    @property
    def power(self) -> bool:
        return self.state.power

    @property
    def current_temperature(self) -> float:
        return self.state.current_temperature

    @property
    def target_temperature(self) -> float:
        return self.state.target_temperature

    @property
    def heating_on(self) -> bool:
        return self.state.heating_on

    @property
    def filter_on(self) -> bool:
        return self.state.filter_on

    @property
    def waves_on(self) -> bool:
        return self.state.waves_on

    @property
    def heating_state(self) -> HeatingState:
        return self.state.heating_state

    async def _async_update_data(self) -> SpaState:
        """Poll the spa unless the cache window is still open."""
        async with self._lock:
            return await self._async_refresh_locked(force=False)

    async def async_refresh_state(self, *, force: bool = False) -> SpaState:
        """Refresh the mirror and publish it to listeners.

        Args:
            force: Read from the cloud even if the cache window is open.

        Returns:
            The current state, cached or freshly read.

        """
        async with self._lock:
            state = await self._async_refresh_locked(force=force)
        self.async_set_updated_data(state)
        return state

    async def _async_refresh_locked(self, *, force: bool) -> SpaState:
        last_fetched_at = self._confirmed.last_fetched_at
        if (
            not force
            and last_fetched_at is not None
            and dt_util.utcnow() - last_fetched_at < timedelta(seconds=CACHE_WINDOW)
        ):
            _LOGGER.debug(
                "Last fetch was under %d seconds ago, using last state", CACHE_WINDOW
            )
            return self.state

        try:
            attrs = await api.async_fetch_status(
                self.session, self._token, self.device.id
            )
            state = api.extract_spa_state(attrs, dt_util.utcnow())
        except api.DeviceDisconnectedError:
            _LOGGER.debug(
                "Spa %s not connected, setting default values", self.device.name
            )
            state = SpaState.disconnected(dt_util.utcnow())
        except (api.RemoteUnavailableError, api.MalformedResponseError) as err:
            _LOGGER.error("Could not retrieve status of %s: %s", self.device.name, err)
            return self.state

        self._confirmed = state
        self._pending = None
        return state

    async def async_set_power(self, value: bool) -> None:
        """Turn the spa on or off."""
        await self._async_apply(SpaChange(SpaField.POWER, value))

    async def async_set_target_temperature(self, value: float) -> None:
        """Set the target temperature; the value must already be within limits."""
        await self._async_apply(SpaChange(SpaField.TARGET_TEMPERATURE, value))

    async def async_set_waves(self, value: bool) -> None:
        """Turn the bubble jets on or off."""
        await self._async_apply(SpaChange(SpaField.WAVES, value))

    async def async_set_filter(self, value: bool) -> None:
        """Turn filtration on or off, turning heating off first if needed."""
        await self._async_apply(SpaChange(SpaField.FILTER, value))

    async def async_set_heating(self, value: bool) -> None:
        """Turn heating and filtration on or off together."""
        await self._async_apply(SpaChange(SpaField.HEATING, value))

    async def _async_apply(self, change: SpaChange) -> None:
        """Execute a change and reconcile the mirror with a forced read.

        Raises:
            InvalidTransitionError: If the change is not allowed.
            CommandRejectedError: If a control write fails.

        """
        async with self._lock:
            plan = plan_transition(self.state, change)
            _LOGGER.debug(
                "Set %s -> %s on %s", change.field, change.value, self.device.name
            )

            self._pending = plan.target
            self.async_set_updated_data(self.state)

            sent = 0
            try:
                for batch in plan.batches:
                    await api.async_send_command(
                        self.session, self._token, self.device.id, batch
                    )
                    sent += 1
            except api.LayZSpaApiClientError as err:
                _LOGGER.error(
                    "Could not set %s on %s: %s", change.field, self.device.name, err
                )
                self._pending = None
                if sent:
                    await self._async_refresh_locked(force=True)
                self.async_set_updated_data(self.state)
                error_msg = f"Spa rejected {change.field} change: {err}"
                raise CommandRejectedError(error_msg) from err

            state = await self._async_refresh_locked(force=True)

        self.async_set_updated_data(state)
