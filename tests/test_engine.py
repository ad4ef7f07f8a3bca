"""
Tests for the calculation orchestrator and its JSON entry point.
"""

import json
from datetime import datetime

import pytest

from conveyorcalc.calculator.engine import (
    MODEL_KEY,
    MODEL_VERSION_ID,
    CalculationResult,
    calculate_json,
    enrich_from_catalog,
    run_calculation,
)
from conveyorcalc.calculator.validation import MAGNETIC_CONVEYOR
from conveyorcalc.catalog import CatalogLookupError
from conveyorcalc.io import MigrationError


def _codes(issues):
    return [issue['code'] for issue in issues]


class TestRunCalculation:
    def test_baseline_record(self, baseline_record):
        result = run_calculation(baseline_record)
        assert isinstance(result, CalculationResult)
        assert result.success
        assert result.errors == []
        assert result.outputs.capacity_pph == pytest.approx(3000.0)

    def test_typed_inputs_accepted(self, baseline_inputs):
        result = run_calculation(baseline_inputs)
        assert result.success
        assert result.outputs.belt_speed_fpm == 50.0

    def test_metadata(self, baseline_record):
        result = run_calculation(baseline_record, product_key="belt_conveyor_v1")
        assert result.metadata.model_key == MODEL_KEY
        assert result.metadata.model_version_id == MODEL_VERSION_ID
        assert result.metadata.product_key == "belt_conveyor_v1"
        assert result.metadata.schema_version == "2.0"
        assert datetime.fromisoformat(result.metadata.calculated_at).tzinfo is not None

    def test_legacy_record(self, legacy_record):
        """A record predating versioning migrates and calculates from drive RPM."""
        result = run_calculation(legacy_record)
        assert result.outputs.speed_mode == "drive_rpm"
        assert result.outputs.belt_speed_fpm == pytest.approx(65.45, abs=0.01)
        assert result.outputs.gear_ratio == pytest.approx(17.5)
        assert result.outputs.piw_used == 0.138
        assert result.outputs.support_method == "legs"

    def test_outputs_present_when_invalid(self, legacy_record):
        result = run_calculation(legacy_record)
        assert not result.success
        assert sorted(_codes(result.errors)) == ["BELT_REQUIRED", "LEG_MODEL_REQUIRED"]
        assert result.outputs is not None

    def test_issue_shape(self, legacy_record):
        issue = next(i for i in run_calculation(legacy_record).errors if i['code'] == "BELT_REQUIRED")
        assert issue['field'] == "belt_catalog_key"
        assert issue['severity'] == "error"
        assert issue['suggestion']

    def test_infos_reported(self, baseline_record):
        record = dict(baseline_record, cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=12.0)
        result = run_calculation(record)
        assert _codes(result.infos) == ["CLEATS_ADD_FRAME_HEIGHT"]

    def test_product_key_scopes_belt(self, baseline_record):
        record = dict(baseline_record, belt_catalog_key=None)
        assert not run_calculation(record).success
        assert run_calculation(record, product_key=MAGNETIC_CONVEYOR).success

    def test_parameters(self, baseline_record):
        result = run_calculation(baseline_record, {"safety_factor": 1.5})
        assert result.outputs.safety_factor_used == 1.5

    def test_fractional_sprocket_is_an_issue(self, baseline_record):
        record = dict(
            baseline_record,
            gearmotor_mounting_style="bottom_mount",
            gm_sprocket_teeth="18.5",
            drive_shaft_sprocket_teeth=24,
        )
        result = run_calculation(record)
        assert not result.success
        assert _codes(result.errors) == ["SPROCKET_TEETH_NOT_WHOLE"]
        assert result.outputs.chain_ratio == pytest.approx(24 / 18.5)

    def test_horizontal_angle_record(self, baseline_record):
        record = dict(
            baseline_record,
            geometry_mode="H_ANGLE",
            horizontal_run_in=100,
            conveyor_incline_deg=10,
            conveyor_length_cc_in=None,
        )
        result = run_calculation(record)
        assert result.success
        assert result.outputs.geometry_mode == "H_ANGLE"
        assert result.outputs.conveyor_length_cc_in == pytest.approx(101.543, abs=0.001)
        assert result.outputs.horizontal_run_in == 100.0
        assert result.outputs.rise_in == pytest.approx(17.633, abs=0.001)

    def test_horizontal_tob_record(self, baseline_record):
        record = dict(
            baseline_record,
            geometry_mode="H_TOB",
            horizontal_run_in=100,
            tail_tob_in=30,
            drive_tob_in=40,
        )
        result = run_calculation(record)
        assert result.success
        assert result.outputs.conveyor_incline_deg == pytest.approx(5.711, abs=0.001)
        assert result.outputs.tail_tob_in == 30
        assert result.outputs.drive_tob_in == 40

    def test_tracking_recommendation(self, baseline_record):
        result = run_calculation(dict(baseline_record, reversing_operation=True))
        assert result.outputs.tracking_lw_ratio == 6.7
        assert result.outputs.tracking_lw_band == "medium"
        assert result.outputs.tracking_disturbance_count == 1
        assert result.outputs.tracking_mode_recommended == "hybrid"
        assert result.outputs.tracking_recommendation_note is None

    def test_migration_error_propagates(self):
        with pytest.raises(MigrationError):
            run_calculation({"belt_width_in": "wide"})

    def test_original_record_untouched(self, legacy_record):
        snapshot = dict(legacy_record)
        run_calculation(legacy_record)
        assert legacy_record == snapshot


class TestCatalogEnrichment:
    def test_fills_belt_data(self, baseline_inputs, catalog):
        enriched = enrich_from_catalog(baseline_inputs, catalog)
        assert enriched.belt_piw == 0.109
        assert enriched.belt_min_pulley_dia_no_vguide_in == 2.5
        assert enriched.belt_min_pulley_dia_with_vguide_in == 3.0
        assert baseline_inputs.belt_piw is None

    def test_existing_values_win(self, make_inputs, catalog):
        enriched = enrich_from_catalog(make_inputs(belt_piw=0.2), catalog)
        assert enriched.belt_piw == 0.2
        assert enriched.belt_pil == 0.109

    def test_no_belt_key(self, make_inputs, catalog):
        inputs = make_inputs(belt_catalog_key=None)
        assert enrich_from_catalog(inputs, catalog) is inputs

    def test_belt_minimum_from_catalog(self, baseline_record, catalog):
        record = dict(baseline_record, belt_catalog_key="URE200")
        result = run_calculation(record, catalog=catalog)
        assert result.success
        assert result.outputs.piw_used == 0.138
        assert result.outputs.min_pulley_required_in == 5.0
        assert _codes(result.warnings) == ["PULLEY_BELOW_BELT_MINIMUM", "PULLEY_BELOW_BELT_MINIMUM"]

    def test_unknown_belt_raises(self, baseline_record, catalog):
        record = dict(baseline_record, belt_catalog_key="NOPE")
        with pytest.raises(CatalogLookupError):
            run_calculation(record, catalog=catalog)


class TestCalculateJson:
    def test_request_envelope(self, baseline_record):
        request = json.dumps({
            "inputs": baseline_record,
            "parameters": {"safety_factor": 1.5},
            "product_key": "belt_conveyor_v1",
        })
        result = json.loads(calculate_json(request))
        assert result['success'] is True
        assert result['outputs']['safety_factor_used'] == 1.5
        assert result['metadata']['product_key'] == "belt_conveyor_v1"
        assert result['error'] is None

    def test_bare_record(self, baseline_record):
        result = json.loads(calculate_json(json.dumps(baseline_record)))
        assert result['success'] is True
        assert result['outputs']['capacity_pph'] == pytest.approx(3000.0)

    def test_nan_serialized_as_null(self, baseline_record):
        record = dict(baseline_record, belt_speed_fpm=None)
        result = json.loads(calculate_json(json.dumps(record)))
        assert result['success'] is False
        assert result['outputs']['drive_rpm'] is None

    def test_invalid_json(self):
        result = json.loads(calculate_json("{not json"))
        assert result['success'] is False
        assert result['error'].startswith("Invalid JSON")
        assert result['outputs'] is None

    def test_migration_failure_reported(self):
        result = json.loads(calculate_json("[1, 2, 3]"))
        assert result['success'] is False
        assert "must be a mapping" in result['error']

    def test_catalog_failure_reported(self, baseline_record, catalog):
        record = dict(baseline_record, belt_catalog_key="NOPE")
        result = json.loads(calculate_json(json.dumps(record), catalog=catalog))
        assert result['success'] is False
        assert "NOPE" in result['error']
