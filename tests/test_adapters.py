"""
Tests for adapter part resolution.
"""

from gearsel.sizing.adapters import (
    DEFAULT_STRATEGIES,
    find_adapter,
    first_entry,
    flange_code_for,
    prefer_servo_type,
)

GPB042_ONLY = {"GPB042": {"G08": {"SV1": "8-30-45-M3", "ST1": "8-30-45"}}}


class TestFlangeCode:
    """Tests for flange_code_for."""

    def test_full_flange_spec(self, servo_motor):
        assert flange_code_for(servo_motor) == "14-70-90-M6"

    def test_fractional_flange_kept_exact(self, servo_motor):
        motor = servo_motor.model_copy(update={"shaft_diameter": 6.3456789, "centering_dia": 22.25})
        assert flange_code_for(motor) == "6.3456789-22.25-90-M6"

    def test_incomplete_flange_spec(self, small_motor):
        assert flange_code_for(small_motor) is None

    def test_tap_alone_is_not_enough(self, small_motor):
        motor = small_motor.model_copy(update={"mounting_tap": "M3"})
        assert flange_code_for(motor) is None


class TestFindAdapter:
    """Tests for find_adapter."""

    def test_servo_entry_preferred_without_flange_data(self, small_motor):
        """8 mm motor with no flange data on GPB042 gets the SV1 entry."""
        adapter = find_adapter("GPB042", small_motor, GPB042_ONLY)

        assert adapter is not None
        assert adapter.type == "SV1"
        assert adapter.shaft == "G08"
        assert adapter.shaft_dia == 8
        assert adapter.centering_dia == 30
        assert adapter.fixing_pcd == 45
        assert adapter.mounting_tap == "M3"

    def test_exact_flange_match_wins(self, catalog):
        """MSMF motor (14-70-90-M6) on GPB060 picks SV2 over the first SV entry."""
        motor = catalog.get_motor("M0002")
        adapter = find_adapter("GPB060", motor, catalog.adapters)

        assert adapter.type == "SV2"
        assert adapter.code == "14-70-90-M6"

    def test_no_exact_match_falls_back_to_servo(self, catalog):
        """HG-KR motor (14-50-70-M4) on GPL060: the tapless ST2 code is not an exact match."""
        motor = catalog.get_motor("M0001")
        adapter = find_adapter("GPL060", motor, catalog.adapters)

        assert adapter.type == "SV1"
        assert adapter.code == "14-70-90-M6"

    def test_first_entry_when_no_servo_type(self, catalog):
        motor = catalog.get_motor("M0004")
        adapter = find_adapter("GPB042", motor, catalog.adapters)

        assert adapter.type == "ST1"
        assert adapter.shaft == "G6.35"
        assert adapter.mounting_tap is None

    def test_unknown_model(self, small_motor):
        assert find_adapter("GHR080", small_motor, GPB042_ONLY) is None

    def test_unknown_shaft(self, servo_motor):
        assert find_adapter("GPB042", servo_motor, GPB042_ONLY) is None

    def test_empty_entries(self, small_motor):
        assert find_adapter("GPB042", small_motor, {"GPB042": {"G08": {}}}) is None

    def test_custom_strategy_order(self, small_motor):
        adapter = find_adapter("GPB042", small_motor, GPB042_ONLY, strategies=(first_entry,))
        assert adapter.type == "SV1"

        catalog = {"GPB042": {"G08": {"ST1": "8-30-45", "SV1": "8-30-45-M3"}}}
        assert find_adapter("GPB042", small_motor, catalog, strategies=(first_entry,)).type == "ST1"
        assert find_adapter("GPB042", small_motor, catalog).type == "SV1"

    def test_default_strategies_end_with_first_entry(self):
        assert DEFAULT_STRATEGIES[-1] is first_entry
        assert prefer_servo_type in DEFAULT_STRATEGIES
