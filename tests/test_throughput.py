"""
Tests for parts and bulk throughput.
"""

import math

import pytest

from conveyorcalc.calculator.drivetrain import calculate_drive_rpm
from conveyorcalc.calculator.throughput import (
    calculate_bulk_throughput,
    calculate_margin_achieved,
    calculate_parts_throughput,
    travel_dimension,
)
from conveyorcalc.enums import BulkInputMethod, FeedBehavior, PartOrientation
from conveyorcalc.io import BulkMaterial, PartsMaterial


def _parts(**overrides):
    fields = dict(part_weight_lb=5.0, part_length_in=12.0, part_width_in=6.0, part_spacing_in=0.0)
    fields.update(overrides)
    return PartsMaterial(**fields)


class TestParts:
    def test_baseline(self):
        result = calculate_parts_throughput(_parts(), 120.0, 50.0, 4.0, 0.0)
        assert result.pitch_in == 12.0
        assert result.parts_on_belt == pytest.approx(10.0)
        assert result.load_on_belt_lb == pytest.approx(50.0)
        assert result.capacity_pph == pytest.approx(3000.0)

    def test_crosswise_uses_width(self):
        material = _parts(orientation=PartOrientation.CROSSWISE)
        assert travel_dimension(material) == 6.0
        result = calculate_parts_throughput(material, 120.0, 50.0, 4.0, 0.0)
        assert result.capacity_pph == pytest.approx(6000.0)

    def test_spacing_adds_to_pitch(self):
        result = calculate_parts_throughput(_parts(part_spacing_in=6.0), 120.0, 50.0, 4.0, 0.0)
        assert result.pitch_in == 18.0

    def test_missing_spacing_is_zero(self):
        result = calculate_parts_throughput(_parts(part_spacing_in=None), 120.0, 50.0, 4.0, 0.0)
        assert result.pitch_in == 12.0

    def test_no_requirement_leaves_target_empty(self):
        result = calculate_parts_throughput(_parts(), 120.0, 50.0, 4.0, 0.0)
        assert result.target_pph is None
        assert result.meets_throughput is None
        assert result.rpm_required_for_target is None

    def test_requirement_with_margin(self):
        material = _parts(required_throughput_pph=2500.0)
        result = calculate_parts_throughput(material, 120.0, 50.0, 4.0, 10.0)
        assert result.target_pph == pytest.approx(2750.0)
        assert result.meets_throughput is True
        assert result.throughput_margin_achieved_pct == pytest.approx(20.0)
        # 2750 parts/hr at a 12" pitch is 45.83 FPM of belt
        assert result.rpm_required_for_target == pytest.approx(calculate_drive_rpm(2750.0 * 12 / 720, 4.0))

    def test_requirement_not_met(self):
        material = _parts(required_throughput_pph=4000.0)
        result = calculate_parts_throughput(material, 120.0, 50.0, 4.0, 0.0)
        assert result.meets_throughput is False

    def test_missing_part_length_is_nan(self):
        result = calculate_parts_throughput(_parts(part_length_in=None), 120.0, 50.0, 4.0, 0.0)
        assert math.isnan(result.pitch_in)
        assert math.isnan(result.capacity_pph)
        assert math.isnan(result.load_on_belt_lb)

    def test_margin_achieved_without_requirement(self):
        assert calculate_margin_achieved(3000.0, 0.0) == 0.0


class TestBulk:
    def test_weight_flow(self):
        material = BulkMaterial(mass_flow_lbs_per_hr=600.0, density_lbs_per_ft3=50.0)
        result = calculate_bulk_throughput(material, 120.0, 50.0)
        assert result.mass_flow_lbs_per_hr == 600.0
        assert result.volume_flow_ft3_per_hr == pytest.approx(12.0)
        assert result.residence_time_min == pytest.approx(0.2)
        assert result.load_on_belt_lb == pytest.approx(2.0)

    def test_volume_flow(self):
        material = BulkMaterial(
            bulk_input_method=BulkInputMethod.VOLUME_FLOW,
            volume_flow_ft3_per_hr=12.0,
            density_lbs_per_ft3=50.0,
        )
        result = calculate_bulk_throughput(material, 120.0, 50.0)
        assert result.mass_flow_lbs_per_hr == pytest.approx(600.0)

    def test_surge_feed(self):
        material = BulkMaterial(
            mass_flow_lbs_per_hr=600.0,
            feed_behavior=FeedBehavior.SURGE,
            surge_multiplier=1.5,
        )
        result = calculate_bulk_throughput(material, 120.0, 50.0)
        assert result.design_mass_flow_lbs_per_hr == pytest.approx(900.0)
        assert result.load_on_belt_lb == pytest.approx(3.0)

    def test_surge_multiplier_ignored_for_continuous_feed(self):
        material = BulkMaterial(mass_flow_lbs_per_hr=600.0, surge_multiplier=1.5)
        result = calculate_bulk_throughput(material, 120.0, 50.0)
        assert result.design_mass_flow_lbs_per_hr == 600.0

    def test_weight_flow_without_density(self):
        material = BulkMaterial(mass_flow_lbs_per_hr=600.0)
        result = calculate_bulk_throughput(material, 120.0, 50.0)
        assert math.isnan(result.volume_flow_ft3_per_hr)
        assert result.load_on_belt_lb == pytest.approx(2.0)

    def test_zero_speed(self):
        material = BulkMaterial(mass_flow_lbs_per_hr=600.0)
        result = calculate_bulk_throughput(material, 120.0, 0.0)
        assert math.isnan(result.residence_time_min)
        assert math.isnan(result.load_on_belt_lb)
