"""Switch entities for Lay-Z spas: power, filter and waves."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from homeassistant.components.switch import SwitchEntity, SwitchEntityDescription

from .const import DOMAIN
from .entity import LayZSpaEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import LayZSpaCoordinator

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class LayZSpaSwitchEntityDescription(SwitchEntityDescription):
    """Describes a spa switch."""

    is_on_fn: Callable[[LayZSpaCoordinator], bool]
    set_fn: Callable[[LayZSpaCoordinator, bool], Awaitable[None]]


SWITCHES: tuple[LayZSpaSwitchEntityDescription, ...] = (
    LayZSpaSwitchEntityDescription(
        key="power",
        name="On/Off",
        is_on_fn=lambda coordinator: coordinator.power,
        set_fn=lambda coordinator, value: coordinator.async_set_power(value),
    ),
    LayZSpaSwitchEntityDescription(
        key="filter",
        name="Filter",
        is_on_fn=lambda coordinator: coordinator.filter_on,
        set_fn=lambda coordinator, value: coordinator.async_set_filter(value),
    ),
    LayZSpaSwitchEntityDescription(
        key="waves",
        name="Waves",
        is_on_fn=lambda coordinator: coordinator.waves_on,
        set_fn=lambda coordinator, value: coordinator.async_set_waves(value),
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up switch entities for the spa."""
    coordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    async_add_entities(
        LayZSpaSwitchEntity(coordinator, description) for description in SWITCHES
    )


class LayZSpaSwitchEntity(LayZSpaEntity, SwitchEntity):
    """Switch for one on/off field of the spa."""

    entity_description: LayZSpaSwitchEntityDescription

    def __init__(
        self,
        coordinator: LayZSpaCoordinator,
        description: LayZSpaSwitchEntityDescription,
    ) -> None:
        super().__init__(coordinator, description.key)
        self.entity_description = description

    @property
    def is_on(self) -> bool:
        return self.entity_description.is_on_fn(self.coordinator)

    async def async_turn_on(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_set(True)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        await self._async_set(False)

    async def _async_set(self, value: bool) -> None:
        _LOGGER.debug(
            "Set %s of %s -> %s",
            self.entity_description.key,
            self.coordinator.device.name,
            value,
        )
        await self.entity_description.set_fn(self.coordinator, value)
