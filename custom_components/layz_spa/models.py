"""Data models for Lay-Z Spa integration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from .const import (
    DEFAULT_CURRENT_TEMPERATURE,
    DEFAULT_TARGET_TEMPERATURE,
    DISCONNECTED_TARGET_TEMPERATURE,
)


class HeatingState(StrEnum):
    """Two-value heating state exposed to the thermostat."""

    OFF = "off"
    HEAT = "heat"


@dataclass(frozen=True)
class GizwitsSession:
    """Represents a logged-in Gizwits user session."""

    token: str
    uid: str
    expire_at: datetime | None


@dataclass(frozen=True)
class SpaDevice:
    """Represents a spa bound to the Gizwits account.

    Attributes:
        id: Gizwits device identifier (did).
        name: Human-readable device name.

    """

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class SpaState:
    """Local mirror of the spa state reported by the Gizwits cloud."""

    power: bool = False
    current_temperature: float = DEFAULT_CURRENT_TEMPERATURE
    target_temperature: float = DEFAULT_TARGET_TEMPERATURE
    heating_on: bool = False
    filter_on: bool = False
    waves_on: bool = False
    last_fetched_at: datetime | None = None

    @property
    def heating_state(self) -> HeatingState:
        """Return the derived heating state."""
        return HeatingState.HEAT if self.heating_on else HeatingState.OFF

    @classmethod
    def disconnected(cls, fetched_at: datetime) -> SpaState:
        """Return the state used when the device reports no power attribute."""
        return cls(
            target_temperature=DISCONNECTED_TARGET_TEMPERATURE,
            last_fetched_at=fetched_at,
        )

    def with_changes(self, **changes: object) -> SpaState:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
