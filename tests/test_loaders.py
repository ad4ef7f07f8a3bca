"""
Tests for typed configuration inputs and their tagged variants.
"""

import pytest
from pydantic import ValidationError

from conveyorcalc.enums import (
    ApplicationClass,
    BeltTrackingMethod,
    PartOrientation,
    SupportType,
    TrackingPreference,
)
from conveyorcalc.io import (
    BottomMountDrive,
    BulkMaterial,
    CleatsDisabled,
    CleatsEnabled,
    ConfigurationInputs,
    CustomFrame,
    DriveRpmMode,
    ExternalSupport,
    FloorSupport,
    HorizontalTobGeometry,
    PartsMaterial,
    ShaftMountedDrive,
    StructuralChannelFrame,
    migrate_inputs,
)


def _inputs(record):
    return ConfigurationInputs.from_record(migrate_inputs(record))


class TestVariantSelection:
    def test_baseline_variants(self, baseline_inputs):
        assert baseline_inputs.speed.mode == "belt_speed"
        assert baseline_inputs.speed.belt_speed_fpm == 50.0
        assert isinstance(baseline_inputs.drive, ShaftMountedDrive)
        assert isinstance(baseline_inputs.cleats, CleatsDisabled)
        assert isinstance(baseline_inputs.support, ExternalSupport)
        assert isinstance(baseline_inputs.material, PartsMaterial)
        assert baseline_inputs.material.orientation == PartOrientation.LENGTHWISE

    def test_drive_rpm_mode_reads_input_field(self):
        inputs = _inputs({"speed_mode": "drive_rpm", "drive_rpm_input": 80})
        assert isinstance(inputs.speed, DriveRpmMode)
        assert inputs.speed.drive_rpm == 80

    def test_bottom_mount_carries_sprockets(self):
        inputs = _inputs({
            "gearmotor_mounting_style": "bottom_mount",
            "gm_sprocket_teeth": 18,
            "drive_shaft_sprocket_teeth": 24,
        })
        assert isinstance(inputs.drive, BottomMountDrive)
        assert inputs.drive.gm_sprocket_teeth == 18
        assert inputs.is_bottom_mount

    def test_cleats_enabled(self):
        inputs = _inputs({"cleats_enabled": True, "cleat_height_in": 1.5, "cleat_spacing_in": 12})
        assert isinstance(inputs.cleats, CleatsEnabled)
        assert inputs.cleats.cleat_height_in == 1.5
        assert inputs.cleats.cleat_edge_offset_in == 0.0
        assert inputs.cleats_enabled

    def test_custom_frame(self):
        inputs = _inputs({"frame_height_mode": "custom", "custom_frame_height_in": 5})
        assert isinstance(inputs.frame_height, CustomFrame)
        assert inputs.frame_height.custom_frame_height_in == 5

    def test_structural_channel(self):
        inputs = _inputs({
            "frame_construction_type": "structural_channel",
            "frame_structural_channel_series": "C4",
        })
        assert isinstance(inputs.frame_construction, StructuralChannelFrame)
        assert inputs.frame_construction.frame_structural_channel_series.value == "C4"

    def test_bulk_material(self):
        inputs = _inputs({"material_form": "BULK", "mass_flow_lbs_per_hr": 500, "density_lbs_per_ft3": 50})
        assert isinstance(inputs.material, BulkMaterial)
        assert inputs.material.mass_flow_lbs_per_hr == 500

    def test_floor_support(self):
        inputs = _inputs({
            "tail_support_type": "legs",
            "drive_support_type": "casters",
            "leg_model_key": "L-12",
            "tail_tob_in": 30,
        })
        assert isinstance(inputs.support, FloorSupport)
        assert inputs.support.mode == "floor_supported"
        assert inputs.support.has_legs
        assert inputs.support.has_casters
        assert inputs.support.tail_support_type == SupportType.LEGS
        assert inputs.legs_required

    def test_horizontal_tob_geometry(self):
        inputs = _inputs({
            "geometry_mode": "H_TOB",
            "horizontal_run_in": 100,
            "tail_tob_in": 30,
            "drive_tob_in": 40,
        })
        assert isinstance(inputs.geometry, HorizontalTobGeometry)
        assert inputs.geometry_mode == "H_TOB"
        assert inputs.geometry.drive_tob_in == 40
        assert isinstance(inputs.support, ExternalSupport)

    def test_fractional_teeth_reach_the_validator(self):
        inputs = _inputs({
            "gearmotor_mounting_style": "bottom_mount",
            "gm_sprocket_teeth": 18.5,
        })
        assert inputs.drive.gm_sprocket_teeth == 18.5

    def test_tracking_inputs(self):
        inputs = _inputs({
            "application_class": "bulk_handling",
            "reversing_operation": True,
            "tracking_preference": "prefer_hybrid",
        })
        assert inputs.application_class == ApplicationClass.BULK_HANDLING
        assert inputs.reversing_operation
        assert not inputs.disturbance_side_loading
        assert inputs.tracking_preference == TrackingPreference.PREFER_HYBRID

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            ConfigurationInputs.from_record({"frame_height_mode": "tall"})

    def test_variants_are_immutable(self, baseline_inputs):
        with pytest.raises(ValidationError):
            baseline_inputs.material.part_weight_lb = 10


class TestProperties:
    def test_largest_pulley(self):
        inputs = _inputs({"drive_pulley_diameter_in": 4, "tail_pulley_diameter_in": 6})
        assert inputs.largest_pulley_diameter_in == 6

    def test_largest_pulley_missing(self):
        inputs = ConfigurationInputs()
        assert inputs.largest_pulley_diameter_in is None

    def test_v_guided(self):
        inputs = _inputs({"belt_tracking_method": "v_guided"})
        assert inputs.is_v_guided
        assert inputs.belt_tracking_method == BeltTrackingMethod.V_GUIDED

    def test_external_support_method(self, baseline_inputs):
        assert baseline_inputs.support_method == "external"
        assert not baseline_inputs.legs_required

    def test_legacy_record_builds(self, legacy_record):
        inputs = _inputs(legacy_record)
        assert inputs.belt_width_in == 24
        assert inputs.conveyor_length_cc_in == 96.0
        assert inputs.drive_pulley_diameter_in == 2.5
        assert isinstance(inputs.speed, DriveRpmMode)
        assert inputs.speed.drive_rpm == 100
        assert inputs.support_method == "legs"
        assert inputs.support.tail_tob_in == 36
