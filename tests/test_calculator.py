"""
Tests for sizing calculations.

Tests output speed, output torque, efficiency/torque fallbacks and
service factor.
"""

import pytest

from gearsel.models.catalog import RatioSpec, Reducer
from gearsel.models.selection import Suitability
from gearsel.sizing.calculator import (
    effective_efficiency,
    effective_rated_torque,
    evaluate,
    output_rpm,
    output_torque,
    service_factor,
)


class TestOutputRpm:
    """Tests for output_rpm."""

    def test_divides_by_ratio(self):
        assert output_rpm(3000, 10) == pytest.approx(300.0)

    @pytest.mark.parametrize("ratio", [0, -5, None])
    def test_degenerate_ratio_gives_zero(self, ratio):
        """Missing or non-positive ratio yields 0 rather than raising."""
        assert output_rpm(3000, ratio) == 0.0


class TestOutputTorque:
    """Tests for output_torque."""

    def test_multiplies_ratio_and_efficiency(self):
        assert output_torque(2.39, 10, 0.95) == pytest.approx(22.705)

    def test_zero_ratio_gives_zero(self):
        assert output_torque(2.39, 0, 0.95) == 0.0

    def test_efficiency_above_one_is_clamped(self):
        """An efficiency above 1 behaves like exactly 1."""
        assert output_torque(2.0, 5, 1.4) == output_torque(2.0, 5, 1.0)

    @pytest.mark.parametrize("efficiency", [0, -0.3, None])
    def test_non_positive_efficiency_is_treated_as_one(self, efficiency):
        assert output_torque(2.0, 5, efficiency) == pytest.approx(10.0)


class TestServiceFactor:
    """Tests for service_factor."""

    def test_rated_over_applied(self):
        """Service factor is rated / applied, not the inverse."""
        assert service_factor(22.705, 24) == pytest.approx(1.057, abs=0.001)

    def test_zero_applied_gives_zero(self):
        assert service_factor(0, 24) == 0.0

    def test_zero_rated_gives_zero(self):
        assert service_factor(10, 0) == 0.0

    def test_negative_inputs_give_zero(self):
        assert service_factor(-1, 24) == 0.0
        assert service_factor(10, -24) == 0.0

    def test_strictly_decreasing_in_applied_torque(self):
        values = [service_factor(t, 50) for t in (1, 5, 10, 25, 50, 100)]
        assert all(a > b for a, b in zip(values, values[1:]))


class TestEffectiveValues:
    """Tests for per-ratio lookups with reducer-level fallbacks."""

    def test_uses_ratio_spec(self, gpb060):
        assert effective_efficiency(gpb060, 10) == pytest.approx(0.95)
        assert effective_rated_torque(gpb060, 10) == pytest.approx(24)

    def test_unknown_ratio_falls_back_to_aggregate(self, gpb060):
        assert effective_efficiency(gpb060, 7) == pytest.approx(0.97)
        assert effective_rated_torque(gpb060, 7) == pytest.approx(40)

    def test_zero_torque_falls_back_to_max(self):
        reducer = Reducer(
            id="r",
            series="GPB",
            size=42,
            model_name="GPB042",
            shaft_hole_diameter=8,
            supported_ratios=[3],
            ratio_data={3: RatioSpec(torque=0, efficiency=0.97)},
            max_output_torque=12,
        )
        assert effective_rated_torque(reducer, 3) == pytest.approx(12)

    def test_missing_aggregate_efficiency_is_one(self):
        reducer = Reducer(
            id="r",
            series="GPB",
            size=42,
            model_name="GPB042",
            shaft_hole_diameter=8,
            supported_ratios=[3],
            ratio_data={3: RatioSpec(torque=9, efficiency=0.97)},
        )
        assert effective_efficiency(reducer, 5) == 1.0
        assert effective_rated_torque(reducer, 5) == 0.0


class TestEvaluate:
    """End-to-end sizing of one motor/reducer/ratio."""

    def test_uniform_load_is_unsuitable(self, servo_motor, gpb060):
        """2.39 N·m x 10 x 0.95 against 24 N·m rated, uniform load factor 1.25."""
        outputs = evaluate(servo_motor, gpb060, 10, load_factor=1.25)

        assert outputs.output_rpm == pytest.approx(300.0)
        assert outputs.output_torque == pytest.approx(22.705)
        assert outputs.service_factor == pytest.approx(24 / 22.705)
        assert outputs.suitability == Suitability.UNSUITABLE

    def test_unit_load_factor_is_caution(self, servo_motor, gpb060):
        outputs = evaluate(servo_motor, gpb060, 10, load_factor=1.0)

        assert outputs.suitability == Suitability.CAUTION

    def test_reports_stage_and_rated_torque(self, servo_motor, gpb060):
        outputs = evaluate(servo_motor, gpb060, 10)

        assert outputs.stage == "L1"
        assert outputs.rated_torque == 24
        assert outputs.efficiency == pytest.approx(0.95)

    def test_lower_ratio_is_safer(self, servo_motor, gpb060):
        low = evaluate(servo_motor, gpb060, 5)
        high = evaluate(servo_motor, gpb060, 10)

        assert low.service_factor > high.service_factor
        assert low.suitability == Suitability.SUITABLE
