"""Climate entity for Lay-Z spas.

This module exposes the spa heater as a Home Assistant thermostat with
two HVAC modes (off and heat) and a whole-degree target temperature.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.exceptions import ServiceValidationError

from .const import (
    DOMAIN,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    TEMPERATURE_STEP,
)
from .entity import LayZSpaEntity
from .models import HeatingState
from .transitions import InvalidTransitionError

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import LayZSpaCoordinator

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the climate entity for the spa."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities([LayZSpaClimateEntity(coordinator)])


def clamp_temperature(value: float) -> float:
    """Round to a whole step and clamp into the supported range."""
    stepped = math.floor(value / TEMPERATURE_STEP + 0.5) * TEMPERATURE_STEP
    return float(min(MAX_TEMPERATURE, max(MIN_TEMPERATURE, stepped)))


class LayZSpaClimateEntity(LayZSpaEntity, ClimateEntity):
    """Thermostat for the spa heater.

    Heating on always brings filtration along; turning heating off also
    turns filtration off.
    """

    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = TEMPERATURE_STEP
    _attr_min_temp = MIN_TEMPERATURE
    _attr_max_temp = MAX_TEMPERATURE
    _attr_hvac_modes = [HVACMode.OFF, HVACMode.HEAT]
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )
    _attr_name = "Heating"

    def __init__(self, coordinator: LayZSpaCoordinator) -> None:
        """Initialize the climate entity."""
        super().__init__(coordinator, "heating")

    @property
    def current_temperature(self) -> float:
        return self.coordinator.current_temperature

    @property
    def target_temperature(self) -> float:
        return self.coordinator.target_temperature

    @property
    def hvac_mode(self) -> HVACMode:
        if self.coordinator.heating_state is HeatingState.HEAT:
            return HVACMode.HEAT
        return HVACMode.OFF

    @property
    def hvac_action(self) -> HVACAction:
        if self.coordinator.heating_state is HeatingState.HEAT:
            return HVACAction.HEATING
        return HVACAction.OFF

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: HEAT turns heating and filtration on, OFF turns both off.

        """
        if hvac_mode not in self._attr_hvac_modes:
            error_msg = f"Unsupported HVAC mode: {hvac_mode}"
            raise ServiceValidationError(error_msg)

        _LOGGER.debug(
            "Set HVAC mode of %s -> %s", self.coordinator.device.name, hvac_mode
        )
        await self.coordinator.async_set_heating(hvac_mode == HVACMode.HEAT)

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return

        target = clamp_temperature(float(temperature))
        _LOGGER.debug(
            "Set target temperature of %s -> %s", self.coordinator.device.name, target
        )
        try:
            await self.coordinator.async_set_target_temperature(target)
        except InvalidTransitionError as err:
            raise ServiceValidationError(str(err)) from err

    async def async_turn_on(self) -> None:
        await self.async_set_hvac_mode(HVACMode.HEAT)

    async def async_turn_off(self) -> None:
        await self.async_set_hvac_mode(HVACMode.OFF)
