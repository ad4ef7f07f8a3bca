"""
Pytest configuration and shared fixtures for conveyorcalc tests.
"""

import pytest

from conveyorcalc.catalog import BeltRecord, GearmotorPerformancePoint, InMemoryCatalog
from conveyorcalc.io import ConfigurationInputs, migrate_inputs


# ─── Raw configuration records ───────────────────────────────────────────


def _baseline_record():
    """A complete, valid parts-handling configuration with no warnings."""
    return {
        "conveyor_length_cc_in": 120.0,
        "belt_width_in": 18.0,
        "conveyor_incline_deg": 0.0,
        "drive_pulley_diameter_in": 4.0,
        "tail_pulley_diameter_in": 4.0,
        "speed_mode": "belt_speed",
        "belt_speed_fpm": 50.0,
        "material_form": "PARTS",
        "part_weight_lb": 5.0,
        "part_length_in": 12.0,
        "part_width_in": 6.0,
        "part_spacing_in": 0.0,
        "orientation": "Lengthwise",
        "belt_catalog_key": "PVC120",
        "schema_version": "2.0",
    }


def _legacy_record():
    """A record written before schema versioning."""
    return {
        "conveyor_length_cc_in": "96",
        "conveyor_width_in": 24,
        "pulley_diameter_in": 2.5,
        "tail_matches_drive": True,
        "drive_rpm": 100,
        "support_option": "Floor Mounted",
        "tail_tob_in": 36,
        "cleats_mode": "none",
        "cleat_height_in": 2.0,
        "height_input_mode": "reference_end",
        "part_weight_lb": 2,
        "part_length_in": 8,
        "part_width_in": 4,
    }


@pytest.fixture
def baseline_record():
    return _baseline_record()


@pytest.fixture
def legacy_record():
    return _legacy_record()


@pytest.fixture
def make_inputs():
    """Factory: typed inputs from the baseline record with overrides applied."""
    def _make(**overrides):
        record = _baseline_record()
        record.update(overrides)
        return ConfigurationInputs.from_record(migrate_inputs(record))
    return _make


@pytest.fixture
def baseline_inputs(make_inputs):
    return make_inputs()


# ─── Catalog ─────────────────────────────────────────────────────────────


@pytest.fixture
def belt_catalog_records():
    return [
        BeltRecord(
            catalog_key="PVC120",
            display_name="PVC 120 Black",
            piw=0.109,
            pil=0.109,
            min_pulley_dia_no_vguide_in=2.5,
            min_pulley_dia_with_vguide_in=3.0,
        ),
        BeltRecord(
            catalog_key="URE200",
            display_name="Urethane 200 Heavy",
            piw=0.138,
            pil=0.138,
            min_pulley_dia_no_vguide_in=5.0,
            min_pulley_dia_with_vguide_in=6.0,
        ),
    ]


@pytest.fixture
def performance_points():
    return [
        GearmotorPerformancePoint("FB-40-0.5", "FLEXBLOC", 0.5, 62.0, 400.0, 1.4),
        GearmotorPerformancePoint("FB-40-0.75", "FLEXBLOC", 0.75, 62.0, 600.0, 1.2),
        GearmotorPerformancePoint("FB-50-0.5", "FLEXBLOC", 0.5, 70.0, 350.0, 1.0),
        GearmotorPerformancePoint("FB-30-1.0", "FLEXBLOC", 1.0, 45.0, 900.0, 1.5),
        GearmotorPerformancePoint("MC-60-0.5", "MINICASE", 0.5, 60.0, 500.0, 1.0),
        GearmotorPerformancePoint("MC-90-1.0", "MINICASE", 1.0, 90.0, 1200.0, 1.0),
    ]


@pytest.fixture
def catalog(belt_catalog_records, performance_points):
    return InMemoryCatalog(belt_catalog_records, performance_points)
