"""
Belt tracking recommendation.

Guidance only: recommends crowned, hybrid (crowned + V-guide) or V-guided
tracking from the length-to-width ratio and the disturbances the belt will
see. It never blocks a design and never changes belt_tracking_method.

    L/W band × modified severity -> mode

             minimal           moderate          significant
    low      crowned           crowned (note)    hybrid
    medium   crowned (note)    hybrid            v_guided
    high     hybrid            v_guided          v_guided

Raw severity counts disturbances (reversing, side loading, load
variability, environment, installation risk): none is minimal, one or two
moderate, three or more significant. Reversing with side loading is always
significant. Bulk handling and stiff or profiled belts each nudge severity
one step worse.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..enums import (
    ApplicationClass,
    BeltConstruction,
    DisturbanceSeverity,
    LwBand,
    TrackingMode,
    TrackingPreference,
)
from ..io.loaders import ConfigurationInputs
from .constants import (
    TRACKING_LW_BAND_LOW_MAX,
    TRACKING_LW_BAND_MEDIUM_MAX,
    TRACKING_SIGNIFICANT_MIN_COUNT,
)
from .numeric import is_number

STIFF_BELT_CONSTRUCTIONS = frozenset({
    BeltConstruction.STEEL_CORD_OR_VERY_STIFF,
    BeltConstruction.PROFILED_SIDEWALL_OR_HIGH_CLEAT,
})

_SEVERITY_ORDER = (
    DisturbanceSeverity.MINIMAL,
    DisturbanceSeverity.MODERATE,
    DisturbanceSeverity.SIGNIFICANT,
)

_MODE_ORDER = (TrackingMode.CROWNED, TrackingMode.HYBRID, TrackingMode.V_GUIDED)

# (band, severity) -> (mode, show note)
_MATRIX = {
    (LwBand.LOW, DisturbanceSeverity.MINIMAL): (TrackingMode.CROWNED, False),
    (LwBand.LOW, DisturbanceSeverity.MODERATE): (TrackingMode.CROWNED, True),
    (LwBand.LOW, DisturbanceSeverity.SIGNIFICANT): (TrackingMode.HYBRID, False),
    (LwBand.MEDIUM, DisturbanceSeverity.MINIMAL): (TrackingMode.CROWNED, True),
    (LwBand.MEDIUM, DisturbanceSeverity.MODERATE): (TrackingMode.HYBRID, False),
    (LwBand.MEDIUM, DisturbanceSeverity.SIGNIFICANT): (TrackingMode.V_GUIDED, False),
    (LwBand.HIGH, DisturbanceSeverity.MINIMAL): (TrackingMode.HYBRID, False),
    (LwBand.HIGH, DisturbanceSeverity.MODERATE): (TrackingMode.V_GUIDED, False),
    (LwBand.HIGH, DisturbanceSeverity.SIGNIFICANT): (TrackingMode.V_GUIDED, False),
}

_PREFERRED_MODE = {
    TrackingPreference.PREFER_CROWNED: TrackingMode.CROWNED,
    TrackingPreference.PREFER_HYBRID: TrackingMode.HYBRID,
    TrackingPreference.PREFER_V_GUIDED: TrackingMode.V_GUIDED,
}

MODE_DISPLAY_NAMES = {
    TrackingMode.CROWNED: "Crowned pulleys",
    TrackingMode.HYBRID: "Hybrid (crowned pulleys + V-guide)",
    TrackingMode.V_GUIDED: "V-guided (flat pulleys + V-guide)",
}

_BAND_TEXT = {LwBand.LOW: "favorable", LwBand.MEDIUM: "moderate", LwBand.HIGH: "high"}

NOTE_REDUCED_MARGIN = "Conditions may reduce tracking margin. Consider Hybrid if issues appear in service."
NOTE_LESS_CONTROL = (
    "Selected mode provides less tracking control than recommended. Tracking margin may be reduced."
)


@dataclass
class TrackingRecommendation:
    lw_ratio: float  # Rounded to 0.1; inf without a belt width
    lw_band: LwBand
    disturbance_count: int
    severity_raw: DisturbanceSeverity
    severity_modified: DisturbanceSeverity
    mode_recommended: TrackingMode
    note: Optional[str]
    rationale: str


def calculate_lw_ratio(length_in: float, width_in: Optional[float]) -> float:
    if not is_number(width_in) or width_in <= 0:
        return math.inf
    return round(length_in / width_in, 1)


def calculate_lw_band(ratio: float) -> LwBand:
    # nan (unknown length) falls through to HIGH, the most cautious band
    if ratio <= TRACKING_LW_BAND_LOW_MAX:
        return LwBand.LOW
    if ratio <= TRACKING_LW_BAND_MEDIUM_MAX:
        return LwBand.MEDIUM
    return LwBand.HIGH


def count_disturbances(inputs: ConfigurationInputs) -> int:
    return sum((
        inputs.reversing_operation,
        inputs.disturbance_side_loading,
        inputs.disturbance_load_variability,
        inputs.disturbance_environment,
        inputs.disturbance_installation_risk,
    ))


def calculate_raw_severity(inputs: ConfigurationInputs) -> DisturbanceSeverity:
    if inputs.reversing_operation and inputs.disturbance_side_loading:
        return DisturbanceSeverity.SIGNIFICANT
    count = count_disturbances(inputs)
    if count >= TRACKING_SIGNIFICANT_MIN_COUNT:
        return DisturbanceSeverity.SIGNIFICANT
    if count >= 1:
        return DisturbanceSeverity.MODERATE
    return DisturbanceSeverity.MINIMAL


def _worse(severity: DisturbanceSeverity) -> DisturbanceSeverity:
    index = _SEVERITY_ORDER.index(severity)
    return _SEVERITY_ORDER[min(index + 1, len(_SEVERITY_ORDER) - 1)]


def apply_modifiers(
    severity: DisturbanceSeverity,
    application_class: Optional[ApplicationClass],
    belt_construction: Optional[BeltConstruction],
) -> DisturbanceSeverity:
    """Bulk handling and stiff/profiled belts each nudge severity one step worse."""
    if application_class == ApplicationClass.BULK_HANDLING:
        severity = _worse(severity)
    if belt_construction in STIFF_BELT_CONSTRUCTIONS:
        severity = _worse(severity)
    return severity


def _rationale(band, severity, mode, computed_mode, is_override) -> str:
    if is_override and mode != computed_mode:
        return (
            f"User preference applied. {MODE_DISPLAY_NAMES[mode]} selected. "
            f"System would recommend {MODE_DISPLAY_NAMES[computed_mode]} for these conditions."
        )
    band_text = _BAND_TEXT[band]
    if mode == TrackingMode.CROWNED:
        if severity == DisturbanceSeverity.MINIMAL:
            return f"Crowned pulleys are appropriate. L/W ratio is {band_text} and disturbance factors are minimal."
        return "Crowned pulleys are appropriate for this geometry. Selected conditions may reduce tracking margin."
    if mode == TrackingMode.HYBRID:
        return (
            "Hybrid adds tracking margin by combining crowned pulleys with a V-guide. "
            f"Recommended given {band_text} L/W ratio and selected conditions."
        )
    return (
        "V-guided provides positive belt constraint. "
        "Recommended when geometry and conditions increase tracking sensitivity."
    )


def _note(with_note, mode, computed_mode, is_override) -> Optional[str]:
    if is_override and mode != computed_mode:
        # Choosing more constraint than needed is fine
        if _MODE_ORDER.index(mode) < _MODE_ORDER.index(computed_mode):
            return NOTE_LESS_CONTROL
        return None
    return NOTE_REDUCED_MARGIN if with_note else None


def recommend_tracking(inputs: ConfigurationInputs, conveyor_length_cc_in: float) -> TrackingRecommendation:
    """
    Recommend a belt tracking mode.

    Args:
        inputs: Typed configuration inputs
        conveyor_length_cc_in: Normalized length C-C (nan when unknown)

    Returns:
        TrackingRecommendation
    """
    ratio = calculate_lw_ratio(conveyor_length_cc_in, inputs.belt_width_in)
    band = calculate_lw_band(ratio)

    raw = calculate_raw_severity(inputs)
    modified = apply_modifiers(raw, inputs.application_class, inputs.belt_construction)
    computed_mode, with_note = _MATRIX[(band, modified)]

    preferred = _PREFERRED_MODE.get(inputs.tracking_preference)
    is_override = preferred is not None
    mode = preferred if is_override else computed_mode

    return TrackingRecommendation(
        lw_ratio=ratio,
        lw_band=band,
        disturbance_count=count_disturbances(inputs),
        severity_raw=raw,
        severity_modified=modified,
        mode_recommended=mode,
        note=_note(with_note, mode, computed_mode, is_override),
        rationale=_rationale(band, modified, mode, computed_mode, is_override),
    )
