"""
Tests for pulley shaft sizing and the PCI tube stress check.
"""

import math

import pytest

from conveyorcalc.calculator.constants import STANDARD_SHAFT_DIAMETERS_IN
from conveyorcalc.calculator.shaft import next_standard_shaft_diameter, size_shaft
from conveyorcalc.calculator.tube_stress import calculate_tube_stress
from conveyorcalc.enums import TubeStressStatus


# ---------------------------------------------------------------------------
# Shaft sizing
# ---------------------------------------------------------------------------

class TestStandardDiameter:
    def test_exact_size(self):
        assert next_standard_shaft_diameter(1.0) == 1.0

    def test_rounds_up(self):
        assert next_standard_shaft_diameter(1.01) == 1.125

    def test_beyond_table(self):
        assert next_standard_shaft_diameter(3.1) == 3.25


class TestSizeShaft:
    def test_drive_shaft(self):
        shaft = size_shaft(18.0, 4.0, 100.0, is_drive_pulley=True)
        assert shaft.required_diameter_in in STANDARD_SHAFT_DIAMETERS_IN
        assert shaft.required_diameter_in >= shaft.calculated_diameter_in
        assert shaft.bearing_span_in == pytest.approx(23.0)
        assert shaft.torque_lb_in == pytest.approx(120.0 * 2.0)

    def test_tension_ratio(self):
        """T1/T2 follows Euler-Eytelwein and T1 - T2 is the effective tension."""
        shaft = size_shaft(18.0, 4.0, 100.0, is_drive_pulley=True)
        assert shaft.t1_lbf / shaft.t2_lbf == pytest.approx(math.exp(0.3 * math.pi))
        assert shaft.t1_lbf - shaft.t2_lbf == pytest.approx(120.0)

    def test_tail_shaft_carries_no_torque(self):
        drive = size_shaft(18.0, 4.0, 100.0, is_drive_pulley=True)
        tail = size_shaft(18.0, 4.0, 100.0, is_drive_pulley=False)
        assert tail.torque_lb_in == 0.0
        assert tail.calculated_diameter_in < drive.calculated_diameter_in

    def test_more_tension_never_shrinks_shaft(self):
        light = size_shaft(18.0, 4.0, 100.0, is_drive_pulley=True)
        heavy = size_shaft(18.0, 4.0, 1000.0, is_drive_pulley=True)
        assert heavy.required_diameter_in >= light.required_diameter_in

    def test_zero_tension_gives_smallest_shaft(self):
        shaft = size_shaft(18.0, 4.0, 0.0, is_drive_pulley=True)
        assert shaft.required_diameter_in == STANDARD_SHAFT_DIAMETERS_IN[0]
        assert shaft.deflection_ok

    def test_nan_tension(self):
        shaft = size_shaft(18.0, 4.0, math.nan, is_drive_pulley=True)
        assert math.isnan(shaft.required_diameter_in)
        assert math.isnan(shaft.radial_load_lbf)
        assert not shaft.deflection_ok

    def test_missing_width(self):
        shaft = size_shaft(None, 4.0, 100.0, is_drive_pulley=True)
        assert math.isnan(shaft.required_diameter_in)


# ---------------------------------------------------------------------------
# Tube stress
# ---------------------------------------------------------------------------

class TestTubeStress:
    def test_within_limit(self):
        result = calculate_tube_stress(4.0, 0.25, 18.0, 500.0, 10000.0)
        expected = 8 * 4.0 * 500.0 * 18.0 / (math.pi * (4.0 ** 4 - 3.5 ** 4))
        assert result.stress_psi == pytest.approx(expected)
        assert result.status == TubeStressStatus.OK

    def test_estimated_hub_centers(self):
        result = calculate_tube_stress(4.0, 0.25, 18.0, 500.0, 10000.0, hub_centers_estimated=True)
        assert result.status == TubeStressStatus.ESTIMATED
        assert result.hub_centers_estimated

    def test_over_limit_warns(self):
        result = calculate_tube_stress(4.0, 0.25, 18.0, 20000.0, 10000.0)
        assert result.status == TubeStressStatus.WARN

    def test_over_limit_fails_when_enforced(self):
        result = calculate_tube_stress(4.0, 0.25, 18.0, 20000.0, 10000.0, enforce_checks=True)
        assert result.status == TubeStressStatus.FAIL

    def test_v_groove_limit_is_stricter(self):
        drum = calculate_tube_stress(4.0, 0.25, 18.0, 3000.0, 10000.0)
        v_groove = calculate_tube_stress(4.0, 0.25, 18.0, 3000.0, 3400.0)
        assert drum.status == TubeStressStatus.OK
        assert v_groove.status == TubeStressStatus.WARN

    def test_wall_exceeds_radius(self):
        result = calculate_tube_stress(4.0, 2.0, 18.0, 500.0, 10000.0)
        assert result.status == TubeStressStatus.ERROR
        assert result.stress_psi is None
        assert "exceeds radius" in result.error_message

    @pytest.mark.parametrize("od,wall,hub", [
        (None, 0.25, 18.0),
        (4.0, None, 18.0),
        (4.0, 0.25, None),
        (0.0, 0.25, 18.0),
    ])
    def test_incomplete(self, od, wall, hub):
        result = calculate_tube_stress(od, wall, hub, 500.0, 10000.0)
        assert result.status == TubeStressStatus.INCOMPLETE
        assert result.stress_psi is None
