"""State transition rules for Lay-Z spas.

Heating requires filtration. Every requested change is turned into a target
state plus the ordered write batches that reach it, and the target is
validated before any remote call is made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .const import (
    ATTR_FILTER_POWER,
    ATTR_HEAT_POWER,
    ATTR_POWER,
    ATTR_TEMP_SET,
    ATTR_WAVE_POWER,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    TEMPERATURE_STEP,
)
from .models import SpaState

_LOGGER = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when a requested target state violates a spa invariant."""


class SpaField(StrEnum):
    """Fields of the spa state that can be changed from the host."""

    POWER = "power"
    TARGET_TEMPERATURE = "target_temperature"
    WAVES = "waves_on"
    FILTER = "filter_on"
    HEATING = "heating_on"


@dataclass(frozen=True)
class SpaChange:
    """A single requested change."""

    field: SpaField
    value: bool | float


@dataclass(frozen=True)
class CommandPlan:
    """Target state and the ordered write batches that reach it."""

    target: SpaState
    batches: tuple[dict[str, Any], ...]


def validate_target(state: SpaState, field: SpaField) -> None:
    """Reject a target state that breaks an invariant touched by a change.

    Fields the change does not touch are left alone, so a device reading that
    disagrees with the rules does not block unrelated commands.

    Raises:
        InvalidTransitionError: If heating is on without filtration or the
            target temperature is out of range.

    """
    if field in (SpaField.FILTER, SpaField.HEATING) and (
        state.heating_on and not state.filter_on
    ):
        error_msg = "Heating cannot be on while filtration is off"
        raise InvalidTransitionError(error_msg)

    if field is not SpaField.TARGET_TEMPERATURE:
        return

    if not MIN_TEMPERATURE <= state.target_temperature <= MAX_TEMPERATURE:
        error_msg = (
            f"Target temperature {state.target_temperature} outside "
            f"{MIN_TEMPERATURE}-{MAX_TEMPERATURE}"
        )
        raise InvalidTransitionError(error_msg)

    if state.target_temperature % TEMPERATURE_STEP:
        error_msg = f"Target temperature {state.target_temperature} is not a whole step"
        raise InvalidTransitionError(error_msg)


def plan_transition(current: SpaState, change: SpaChange) -> CommandPlan:
    """Plan the remote writes for a requested change.

    Args:
        current: State the change is applied to.
        change: Requested change.

    Returns:
        CommandPlan whose batches must be sent strictly in order.

    Raises:
        InvalidTransitionError: If the resulting target is not allowed.

    """
    value = change.value

    if change.field is SpaField.POWER:
        target = current.with_changes(power=bool(value))
        batches = ({ATTR_POWER: bool(value)},)

    elif change.field is SpaField.TARGET_TEMPERATURE:
        target = current.with_changes(target_temperature=float(value))
        batches = ({ATTR_TEMP_SET: float(value)},)

    elif change.field is SpaField.WAVES:
        target = current.with_changes(waves_on=bool(value))
        batches = ({ATTR_WAVE_POWER: bool(value)},)

    elif change.field is SpaField.FILTER:
        if not value and current.heating_on:
            _LOGGER.warning(
                "Cannot turn off filter while heating is on, turning off heating too"
            )
            target = current.with_changes(filter_on=False, heating_on=False)
            batches = ({ATTR_HEAT_POWER: False}, {ATTR_FILTER_POWER: False})
        else:
            target = current.with_changes(filter_on=bool(value))
            batches = ({ATTR_FILTER_POWER: bool(value)},)

    elif change.field is SpaField.HEATING:
        target = current.with_changes(filter_on=bool(value), heating_on=bool(value))
        batches = ({ATTR_FILTER_POWER: bool(value), ATTR_HEAT_POWER: bool(value)},)

    else:
        error_msg = f"Unsupported field: {change.field}"
        raise InvalidTransitionError(error_msg)

    validate_target(target, change.field)
    return CommandPlan(target=target, batches=batches)
