"""Base entity for Lay-Z Spa integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN, MANUFACTURER, MODEL

if TYPE_CHECKING:
    from .coordinator import LayZSpaCoordinator


class LayZSpaEntity(CoordinatorEntity["LayZSpaCoordinator"]):
    """Entity backed by the spa coordinator.

    State is read from the coordinator on demand; coordinator updates are
    pushed to Home Assistant as they arrive.
    """

    _attr_has_entity_name = True

    def __init__(self, coordinator: LayZSpaCoordinator, key: str) -> None:
        super().__init__(coordinator)
        device = coordinator.device
        self._attr_unique_id = f"{device.id}_{key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, device.id)},
            name=device.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
        )
