"""
Tests for the formula engine pipeline (calculate()).
"""

import math

import pytest

from conveyorcalc.calculator.core import calculate
from conveyorcalc.calculator.parameters import Parameters, resolve_parameters
from conveyorcalc.io import ConfigurationInputs


class TestBaseline:
    """The baseline record exercised end to end."""

    def test_speed_chain(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.speed_mode == "belt_speed"
        assert out.belt_speed_fpm == 50.0
        assert out.drive_rpm == pytest.approx(50.0 / (math.pi * 4 / 12))
        assert out.gear_ratio == pytest.approx(1750.0 / out.drive_rpm)
        assert out.chain_ratio == 1.0
        assert out.gm_sprocket_teeth is None

    def test_belt(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.total_belt_length_in == pytest.approx(240 + 4 * math.pi)
        assert out.piw_used == 0.109
        assert out.belt_weight_lb == pytest.approx(0.109 * 0.109 * 18 * out.total_belt_length_in)
        assert out.cleat_weight_total_lb is None
        assert out.effective_belt_weight_lb == pytest.approx(out.belt_weight_lb)

    def test_parts(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.material_form == "PARTS"
        assert out.pitch_in == 12.0
        assert out.parts_on_belt == pytest.approx(10.0)
        assert out.load_on_belt_lb == pytest.approx(50.0)
        assert out.capacity_pph == pytest.approx(3000.0)
        assert out.mass_flow_lbs_per_hr is None

    def test_pull_and_torque(self, baseline_inputs):
        out = calculate(baseline_inputs)
        total_load = out.belt_weight_lb + 50.0
        assert out.total_load_lb == pytest.approx(total_load)
        assert out.total_belt_pull_lb == pytest.approx(0.25 * total_load + 75.0)
        assert out.torque_drive_pulley_lb_in == pytest.approx(out.total_belt_pull_lb * 2.0 * 2.0)

    def test_frame(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.frame_height_mode == "standard"
        assert out.required_frame_height_in == pytest.approx(6.0)
        assert out.reference_frame_height_in == pytest.approx(6.5)
        assert not out.requires_snub_rollers
        assert out.snub_roller_quantity == 0
        assert out.gravity_roller_quantity == 3
        assert out.frame_side_thickness_in == pytest.approx(0.1046)

    def test_tracking_and_face(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert not out.is_v_guided
        assert out.pulley_requires_crown
        assert out.pulley_face_length_in == pytest.approx(20.0)

    def test_support_and_shafts(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.support_method == "external"
        assert not out.legs_required
        assert out.tail_tob_in is None
        assert out.shaft_diameter_mode == "calculated"
        assert out.drive_shaft_diameter_in >= out.tail_shaft_diameter_in
        assert out.tube_stress_status == "incomplete"

    def test_no_belt_minimum_without_catalog_data(self, baseline_inputs):
        out = calculate(baseline_inputs)
        assert out.min_pulley_required_in is None
        assert out.drive_pulley_meets_minimum is None


class TestModes:
    def test_small_pulley_belt_coefficients(self, make_inputs):
        out = calculate(make_inputs(drive_pulley_diameter_in=2.5, tail_pulley_diameter_in=2.5))
        assert out.piw_used == 0.138
        assert out.pil_used == 0.138

    def test_drive_rpm_mode(self, make_inputs):
        inputs = make_inputs(
            speed_mode="drive_rpm", drive_rpm_input=100.0,
            drive_pulley_diameter_in=2.5, tail_pulley_diameter_in=2.5,
        )
        out = calculate(inputs)
        assert out.drive_rpm == 100.0
        assert out.belt_speed_fpm == pytest.approx(65.45, abs=0.01)
        assert out.gear_ratio == pytest.approx(17.5)

    def test_bottom_mount(self, make_inputs):
        inputs = make_inputs(
            gearmotor_mounting_style="bottom_mount", gm_sprocket_teeth=18, drive_shaft_sprocket_teeth=24,
        )
        out = calculate(inputs)
        assert out.chain_ratio == pytest.approx(24 / 18)
        assert out.gearmotor_output_rpm == pytest.approx(out.drive_rpm * 24 / 18)
        assert out.gm_sprocket_teeth == 18

    def test_bottom_mount_default_sprockets(self, make_inputs):
        out = calculate(make_inputs(gearmotor_mounting_style="bottom_mount"))
        assert out.gm_sprocket_teeth == 18
        assert out.drive_shaft_sprocket_teeth == 24

    def test_low_profile(self, make_inputs):
        out = calculate(make_inputs(frame_height_mode="low_profile"))
        assert out.required_frame_height_in == pytest.approx(4.0)
        assert out.reference_frame_height_in == pytest.approx(4.5)
        assert out.requires_snub_rollers
        assert out.snub_roller_quantity == 2
        assert out.gravity_roller_quantity == 1
        assert out.cost_flag_low_profile

    def test_cleats(self, make_inputs):
        out = calculate(make_inputs(cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=12.0))
        assert out.cleat_weight_each_lb == pytest.approx(0.25 * 2.5 * 18 * 0.045)
        assert out.effective_belt_weight_lb == pytest.approx(out.belt_weight_lb + out.cleat_weight_total_lb)
        assert out.required_frame_height_in == pytest.approx(8.0)

    def test_disabled_cleats_ignore_stale_fields(self, baseline_record, baseline_inputs):
        """Cleat geometry left on a record with cleats off changes nothing."""
        record = dict(baseline_record, cleats_enabled=False, cleat_height_in=3.0, cleat_spacing_in=6.0)
        stale = calculate(ConfigurationInputs.from_record(record))
        clean = calculate(baseline_inputs)
        assert stale.required_frame_height_in == clean.required_frame_height_in
        assert stale.effective_belt_weight_lb == pytest.approx(clean.effective_belt_weight_lb)
        assert stale.cleat_weight_total_lb is None

    def test_hot_welded_cleats_raise_belt_minimum(self, make_inputs):
        inputs = make_inputs(
            cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=4.0, cleat_method="hot_welded",
            belt_min_pulley_dia_no_vguide_in=2.5,
        )
        out = calculate(inputs)
        assert out.cleat_spacing_multiplier == pytest.approx(1.35)
        assert out.min_pulley_required_in == 3.5
        assert out.drive_pulley_meets_minimum is True

    def test_pulley_below_belt_minimum(self, make_inputs):
        out = calculate(make_inputs(belt_min_pulley_dia_no_vguide_in=5.0))
        assert out.min_pulley_required_in == 5.0
        assert out.drive_pulley_meets_minimum is False
        assert out.tail_pulley_meets_minimum is False

    def test_bulk(self, make_inputs):
        inputs = make_inputs(material_form="BULK", mass_flow_lbs_per_hr=600.0, density_lbs_per_ft3=50.0)
        out = calculate(inputs)
        assert out.material_form == "BULK"
        assert out.mass_flow_lbs_per_hr == 600.0
        assert out.load_on_belt_lb == pytest.approx(2.0)
        assert out.capacity_pph is None
        assert out.pitch_in is None

    def test_manual_shaft(self, make_inputs):
        inputs = make_inputs(
            shaft_diameter_mode="manual", drive_shaft_diameter_in=1.5, tail_shaft_diameter_in=1.25,
        )
        out = calculate(inputs)
        assert out.drive_shaft_diameter_in == 1.5
        assert out.tail_shaft_diameter_in == 1.25

    def test_tube_stress_with_estimated_hub_centers(self, make_inputs):
        out = calculate(make_inputs(pulley_tube_od_in=4.0, pulley_tube_wall_in=0.25))
        assert out.tube_stress_hub_centers_estimated
        assert out.tube_stress_status == "estimated"
        assert out.tube_stress_psi > 0

    def test_floor_support_tob(self, make_inputs):
        inputs = make_inputs(
            tail_support_type="legs", drive_support_type="legs", leg_model_key="L-12",
            tail_tob_in=30.0, conveyor_incline_deg=30.0,
        )
        out = calculate(inputs)
        assert out.legs_required
        assert out.tail_tob_in == 30.0
        assert out.drive_tob_in == pytest.approx(90.0)

    def test_actual_belt_speed(self, make_inputs):
        out = calculate(make_inputs(actual_gearmotor_output_rpm=50.0))
        assert out.actual_belt_speed_fpm == pytest.approx(50.0 * math.pi * 4 / 12)
        assert out.actual_speed_delta_pct == pytest.approx((out.actual_belt_speed_fpm - 50.0) / 50.0 * 100)
        assert out.actual_speed_warning_code is None


class TestParameters:
    def test_overrides_dict(self, baseline_inputs):
        out = calculate(baseline_inputs, {"safety_factor": 1.5, "friction_coeff": 0.3})
        assert out.safety_factor_used == 1.5
        assert out.friction_coeff_used == 0.3

    def test_overrides_model(self, baseline_inputs):
        out = calculate(baseline_inputs, Parameters(motor_rpm=1165))
        assert out.motor_rpm == 1165

    def test_input_override_wins(self, make_inputs):
        out = calculate(make_inputs(safety_factor=3.0), {"safety_factor": 1.5})
        assert out.safety_factor_used == 3.0

    def test_roller_bed_friction(self, make_inputs):
        out = calculate(make_inputs(bed_type="roller_bed"))
        assert out.friction_coeff_used == pytest.approx(0.03)

    def test_belt_override_wins_over_catalog(self, make_inputs):
        inputs = make_inputs(belt_piw=0.12, belt_piw_override=0.2)
        resolved = resolve_parameters(inputs)
        assert resolved.piw == 0.2
        assert resolved.pil == 0.109

    def test_resolved_parameters_passed_through(self, baseline_inputs):
        resolved = resolve_parameters(baseline_inputs, {"starting_belt_pull_lb": 0})
        out = calculate(baseline_inputs, resolved)
        assert out.starting_pull_lb == 0


class TestIncompleteInputs:
    """Uncomputable quantities are nan; everything else still computes."""

    def test_missing_speed(self, make_inputs):
        out = calculate(make_inputs(belt_speed_fpm=None))
        assert math.isnan(out.belt_speed_fpm)
        assert math.isnan(out.drive_rpm)
        assert math.isnan(out.capacity_pph)
        assert out.total_belt_length_in == pytest.approx(240 + 4 * math.pi)
        assert out.required_frame_height_in == pytest.approx(6.0)

    def test_missing_length(self, make_inputs):
        out = calculate(make_inputs(conveyor_length_cc_in=None))
        assert math.isnan(out.total_belt_length_in)
        assert math.isnan(out.total_load_lb)
        assert math.isnan(out.torque_drive_pulley_lb_in)
        assert out.gravity_roller_quantity == 0
        assert out.drive_rpm == pytest.approx(50.0 / (math.pi * 4 / 12))

    def test_missing_width(self, make_inputs):
        out = calculate(make_inputs(belt_width_in=None))
        assert math.isnan(out.belt_weight_lb)
        assert math.isnan(out.drive_shaft_diameter_in)

    def test_empty_record(self):
        out = calculate(ConfigurationInputs())
        assert math.isnan(out.conveyor_length_cc_in)
        assert math.isnan(out.largest_pulley_diameter_in)
        assert out.frame_height_mode == "standard"
