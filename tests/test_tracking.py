"""
Tests for the belt tracking recommendation.
"""

import math

import pytest

from conveyorcalc.calculator.tracking import (
    NOTE_LESS_CONTROL,
    NOTE_REDUCED_MARGIN,
    apply_modifiers,
    calculate_lw_band,
    calculate_lw_ratio,
    recommend_tracking,
)
from conveyorcalc.enums import (
    ApplicationClass,
    BeltConstruction,
    DisturbanceSeverity,
    LwBand,
    TrackingMode,
)


def _recommend(make_inputs, length=60.0, width=18.0, **overrides):
    inputs = make_inputs(conveyor_length_cc_in=length, belt_width_in=width, **overrides)
    return recommend_tracking(inputs, length)


class TestLwRatio:
    def test_rounded(self):
        assert calculate_lw_ratio(120.0, 18.0) == 6.7

    def test_no_width(self):
        assert calculate_lw_ratio(120.0, None) == math.inf
        assert calculate_lw_ratio(120.0, 0.0) == math.inf

    @pytest.mark.parametrize("ratio,band", [
        (5.0, LwBand.LOW),
        (5.1, LwBand.MEDIUM),
        (10.0, LwBand.MEDIUM),
        (10.1, LwBand.HIGH),
        (math.inf, LwBand.HIGH),
        (math.nan, LwBand.HIGH),
    ])
    def test_band_edges(self, ratio, band):
        assert calculate_lw_band(ratio) == band


class TestSeverity:
    def test_none_is_minimal(self, make_inputs):
        rec = _recommend(make_inputs)
        assert rec.disturbance_count == 0
        assert rec.severity_raw == DisturbanceSeverity.MINIMAL

    def test_one_is_moderate(self, make_inputs):
        rec = _recommend(make_inputs, disturbance_environment=True)
        assert rec.disturbance_count == 1
        assert rec.severity_raw == DisturbanceSeverity.MODERATE

    def test_three_is_significant(self, make_inputs):
        rec = _recommend(
            make_inputs,
            disturbance_environment=True,
            disturbance_load_variability=True,
            disturbance_installation_risk=True,
        )
        assert rec.severity_raw == DisturbanceSeverity.SIGNIFICANT

    def test_reversing_with_side_loading(self, make_inputs):
        rec = _recommend(make_inputs, reversing_operation=True, disturbance_side_loading=True)
        assert rec.disturbance_count == 2
        assert rec.severity_raw == DisturbanceSeverity.SIGNIFICANT

    def test_modifiers_stack(self):
        severity = apply_modifiers(
            DisturbanceSeverity.MINIMAL,
            ApplicationClass.BULK_HANDLING,
            BeltConstruction.STEEL_CORD_OR_VERY_STIFF,
        )
        assert severity == DisturbanceSeverity.SIGNIFICANT

    def test_modifiers_capped(self):
        severity = apply_modifiers(
            DisturbanceSeverity.SIGNIFICANT, ApplicationClass.BULK_HANDLING, None
        )
        assert severity == DisturbanceSeverity.SIGNIFICANT

    def test_ordinary_belt_no_change(self):
        severity = apply_modifiers(
            DisturbanceSeverity.MINIMAL, ApplicationClass.UNIT_HANDLING, BeltConstruction.FABRIC_PLY
        )
        assert severity == DisturbanceSeverity.MINIMAL


# ─── Mode matrix ─────────────────────────────────────────────────────────


class TestMatrix:
    def test_short_quiet_is_crowned(self, make_inputs):
        rec = _recommend(make_inputs, length=60.0)
        assert rec.lw_band == LwBand.LOW
        assert rec.mode_recommended == TrackingMode.CROWNED
        assert rec.note is None
        assert "favorable" in rec.rationale

    def test_short_moderate_is_crowned_with_note(self, make_inputs):
        rec = _recommend(make_inputs, length=60.0, disturbance_environment=True)
        assert rec.mode_recommended == TrackingMode.CROWNED
        assert rec.note == NOTE_REDUCED_MARGIN

    def test_medium_quiet_is_crowned_with_note(self, baseline_inputs):
        rec = recommend_tracking(baseline_inputs, 120.0)
        assert rec.lw_ratio == 6.7
        assert rec.mode_recommended == TrackingMode.CROWNED
        assert rec.note == NOTE_REDUCED_MARGIN

    def test_medium_moderate_is_hybrid(self, make_inputs):
        rec = _recommend(make_inputs, length=120.0, reversing_operation=True)
        assert rec.mode_recommended == TrackingMode.HYBRID
        assert "moderate L/W ratio" in rec.rationale

    def test_long_quiet_is_hybrid(self, make_inputs):
        rec = _recommend(make_inputs, length=240.0)
        assert rec.lw_band == LwBand.HIGH
        assert rec.mode_recommended == TrackingMode.HYBRID

    def test_long_moderate_is_v_guided(self, make_inputs):
        rec = _recommend(make_inputs, length=240.0, disturbance_side_loading=True)
        assert rec.mode_recommended == TrackingMode.V_GUIDED
        assert rec.rationale.startswith("V-guided provides positive belt constraint")

    def test_stiff_belt_escalates(self, make_inputs):
        rec = _recommend(make_inputs, length=60.0, belt_construction="profiled_sidewall_or_high_cleat")
        assert rec.severity_raw == DisturbanceSeverity.MINIMAL
        assert rec.severity_modified == DisturbanceSeverity.MODERATE
        assert rec.note == NOTE_REDUCED_MARGIN


class TestPreference:
    def test_less_control_than_recommended(self, make_inputs):
        rec = _recommend(make_inputs, length=240.0, tracking_preference="prefer_crowned")
        assert rec.mode_recommended == TrackingMode.CROWNED
        assert rec.note == NOTE_LESS_CONTROL
        assert rec.rationale == (
            "User preference applied. Crowned pulleys selected. "
            "System would recommend Hybrid (crowned pulleys + V-guide) for these conditions."
        )

    def test_more_control_has_no_note(self, make_inputs):
        rec = _recommend(make_inputs, length=60.0, tracking_preference="prefer_v_guided")
        assert rec.mode_recommended == TrackingMode.V_GUIDED
        assert rec.note is None
        assert rec.rationale.startswith("User preference applied.")

    def test_matching_preference_reads_as_recommendation(self, make_inputs):
        rec = _recommend(make_inputs, length=60.0, tracking_preference="prefer_crowned")
        assert rec.mode_recommended == TrackingMode.CROWNED
        assert rec.rationale.startswith("Crowned pulleys are appropriate.")
