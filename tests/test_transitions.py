"""Tests for the Lay-Z Spa state transition rules."""

import pytest

from custom_components.layz_spa.models import SpaState
from custom_components.layz_spa.transitions import (
    CommandPlan,
    InvalidTransitionError,
    SpaChange,
    SpaField,
    plan_transition,
    validate_target,
)

HEATING = SpaState(power=True, heating_on=True, filter_on=True)
FILTERING = SpaState(power=True, filter_on=True)


class TestPlanTransitionSimpleFields:
    """Tests for fields without coupling."""

    def test_power(self) -> None:
        """Test that power is written on its own."""
        plan = plan_transition(SpaState(), SpaChange(SpaField.POWER, True))
        assert isinstance(plan, CommandPlan)
        assert plan.target.power is True
        assert plan.batches == ({"power": True},)

    def test_waves(self) -> None:
        """Test that waves are written on their own."""
        plan = plan_transition(HEATING, SpaChange(SpaField.WAVES, True))
        assert plan.target == HEATING.with_changes(waves_on=True)
        assert plan.batches == ({"wave_power": True},)

    def test_target_temperature(self) -> None:
        """Test that the target temperature is written as temp_set."""
        plan = plan_transition(
            SpaState(), SpaChange(SpaField.TARGET_TEMPERATURE, 35)
        )
        assert plan.target.target_temperature == 35.0
        assert plan.batches == ({"temp_set": 35.0},)

    @pytest.mark.parametrize("value", [20, 40])
    def test_target_temperature_limits_are_inclusive(self, value: int) -> None:
        """Test that both ends of the range are accepted."""
        plan = plan_transition(
            SpaState(), SpaChange(SpaField.TARGET_TEMPERATURE, value)
        )
        assert plan.target.target_temperature == value

    @pytest.mark.parametrize("value", [19, 41, 35.5])
    def test_target_temperature_rejects_invalid_values(self, value: float) -> None:
        """Test that out of range or fractional temperatures are rejected."""
        with pytest.raises(InvalidTransitionError):
            plan_transition(SpaState(), SpaChange(SpaField.TARGET_TEMPERATURE, value))

    def test_unrelated_change_is_not_blocked_by_reported_state(self) -> None:
        """Test that a reading with heating on and filter off allows other changes."""
        reported = SpaState(power=True, heating_on=True, filter_on=False)
        plan = plan_transition(reported, SpaChange(SpaField.POWER, False))
        assert plan.batches == ({"power": False},)


class TestPlanTransitionFilter:
    """Tests for filter changes."""

    def test_filter_on_has_no_coupling(self) -> None:
        """Test that turning filtration on writes only the filter."""
        plan = plan_transition(SpaState(power=True), SpaChange(SpaField.FILTER, True))
        assert plan.target.filter_on is True
        assert plan.target.heating_on is False
        assert plan.batches == ({"filter_power": True},)

    def test_filter_off_without_heating(self) -> None:
        """Test that turning filtration off without heating writes only the filter."""
        plan = plan_transition(FILTERING, SpaChange(SpaField.FILTER, False))
        assert plan.batches == ({"filter_power": False},)
        assert plan.target.filter_on is False

    def test_filter_off_while_heating_turns_heating_off_first(self) -> None:
        """Test that heating off is written strictly before filter off."""
        plan = plan_transition(HEATING, SpaChange(SpaField.FILTER, False))
        assert plan.batches == ({"heat_power": False}, {"filter_power": False})
        assert plan.target.heating_on is False
        assert plan.target.filter_on is False

    def test_filter_off_while_heating_logs_override(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that the heating override is logged as a warning."""
        plan_transition(HEATING, SpaChange(SpaField.FILTER, False))
        assert "turning off heating too" in caplog.text


class TestPlanTransitionHeating:
    """Tests for heating changes."""

    def test_heating_on_brings_filtration_in_one_batch(self) -> None:
        """Test that heating on is a single combined write."""
        plan = plan_transition(SpaState(power=True), SpaChange(SpaField.HEATING, True))
        assert plan.batches == ({"filter_power": True, "heat_power": True},)
        assert plan.target.heating_on is True
        assert plan.target.filter_on is True

    def test_heating_off_turns_filtration_off(self) -> None:
        """Test that heating off is sent together with filter off."""
        plan = plan_transition(HEATING, SpaChange(SpaField.HEATING, False))
        assert plan.batches == ({"filter_power": False, "heat_power": False},)
        assert plan.target.heating_on is False
        assert plan.target.filter_on is False


class TestValidateTarget:
    """Tests for validate_target function."""

    def test_rejects_heating_without_filtration(self) -> None:
        """Test that heating on with filtration off is never a valid target."""
        with pytest.raises(InvalidTransitionError):
            validate_target(
                SpaState(heating_on=True, filter_on=False), SpaField.HEATING
            )

    def test_accepts_heating_with_filtration(self) -> None:
        """Test that heating on with filtration on is valid."""
        validate_target(HEATING, SpaField.HEATING)

    def test_invalid_transition_is_value_error(self) -> None:
        """Test that InvalidTransitionError can be handled as ValueError."""
        assert issubclass(InvalidTransitionError, ValueError)
