"""
Geometry sub-calculator: length, horizontal run, incline and rise.

Three geometry input modes, each with its own primary quantities:
- L_ANGLE: length C-C (L) and incline (θ) entered; H = L × cos(θ)
- H_ANGLE: horizontal run (H) and incline entered; L = H / cos(θ)
- H_TOB:   horizontal run and both top-of-belt heights entered;
           θ = atan(rise / H) between pulley centerlines, L = H / cos(θ)

normalize_geometry() fills the derived length (and incline) onto the inputs
once, before validation and calculation read them.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..io.loaders import ConfigurationInputs, HorizontalAngleGeometry, HorizontalTobGeometry
from .constants import HORIZONTAL_THRESHOLD_DEG, INCLINE_MAX_DEG, MIN_COS_THETA, RISE_THRESHOLD_IN
from .numeric import NAN, is_number, num, positive


@dataclass
class DerivedGeometry:
    """Normalized geometry; nan where the active mode lacks an input."""
    mode: str
    conveyor_length_cc_in: float
    horizontal_run_in: float
    conveyor_incline_deg: float
    rise_in: float  # Drive centerline above tail centerline
    tail_centerline_in: Optional[float] = None
    drive_centerline_in: Optional[float] = None


def is_effectively_horizontal(angle_deg: float) -> bool:
    return abs(angle_deg) < HORIZONTAL_THRESHOLD_DEG


def axis_from_horizontal(horizontal_run_in: Optional[float], angle_deg: float) -> float:
    """L = H / cos(θ), with cos(θ) floored near vertical."""
    run = positive(horizontal_run_in)
    if math.isnan(run) or is_effectively_horizontal(angle_deg):
        return run
    cos_theta = math.cos(math.radians(angle_deg))
    if abs(cos_theta) < MIN_COS_THETA:
        return run / MIN_COS_THETA
    return run / cos_theta


def horizontal_from_axis(length_in: Optional[float], angle_deg: float) -> float:
    """H = L × cos(θ)"""
    length = positive(length_in)
    if math.isnan(length) or is_effectively_horizontal(angle_deg):
        return length
    return length * math.cos(math.radians(angle_deg))


def rise_from_horizontal(horizontal_run_in: Optional[float], angle_deg: float) -> float:
    """rise = H × tan(θ)"""
    run = positive(horizontal_run_in)
    if math.isnan(run):
        return NAN
    if is_effectively_horizontal(angle_deg):
        return 0.0
    return run * math.tan(math.radians(angle_deg))


def tob_to_centerline(tob_in: Optional[float], pulley_diameter_in: Optional[float]) -> float:
    """Pulley centerline height from top-of-belt height."""
    return num(tob_in) - num(pulley_diameter_in) / 2


def angle_from_centerlines(
    tail_centerline_in: float,
    drive_centerline_in: float,
    horizontal_run_in: Optional[float],
) -> float:
    """
    Incline between two pulley centerlines over the horizontal run.

    Positive inclines toward the drive. Clamped to ±INCLINE_MAX_DEG.
    """
    run = positive(horizontal_run_in)
    rise = drive_centerline_in - tail_centerline_in
    if math.isnan(run) or math.isnan(rise):
        return NAN
    if abs(rise) < RISE_THRESHOLD_IN:
        return 0.0
    angle = math.degrees(math.atan(rise / run))
    return max(-INCLINE_MAX_DEG, min(INCLINE_MAX_DEG, angle))


def _horizontal_run(inputs: ConfigurationInputs) -> Optional[float]:
    # Records switched into an H mode before a run was entered fall back to length
    run = inputs.geometry.horizontal_run_in
    return run if run is not None else inputs.conveyor_length_cc_in


def derive_geometry(inputs: ConfigurationInputs) -> DerivedGeometry:
    """
    Resolve length, horizontal run, incline and rise for the active mode.

    Args:
        inputs: Typed configuration inputs

    Returns:
        DerivedGeometry
    """
    geometry = inputs.geometry

    if isinstance(geometry, HorizontalTobGeometry):
        run = _horizontal_run(inputs)
        tail_cl = tob_to_centerline(geometry.tail_tob_in, inputs.tail_pulley_diameter_in)
        drive_cl = tob_to_centerline(geometry.drive_tob_in, inputs.drive_pulley_diameter_in)
        angle = angle_from_centerlines(tail_cl, drive_cl, run)
        length = axis_from_horizontal(run, angle) if is_number(angle) else NAN
        return DerivedGeometry(
            mode=geometry.mode,
            conveyor_length_cc_in=length,
            horizontal_run_in=positive(run),
            conveyor_incline_deg=angle,
            rise_in=drive_cl - tail_cl,
            tail_centerline_in=tail_cl if is_number(tail_cl) else None,
            drive_centerline_in=drive_cl if is_number(drive_cl) else None,
        )

    angle = num(inputs.conveyor_incline_deg)
    if isinstance(geometry, HorizontalAngleGeometry):
        run = _horizontal_run(inputs)
        return DerivedGeometry(
            mode=geometry.mode,
            conveyor_length_cc_in=axis_from_horizontal(run, angle),
            horizontal_run_in=positive(run),
            conveyor_incline_deg=angle,
            rise_in=rise_from_horizontal(run, angle),
        )

    run = horizontal_from_axis(inputs.conveyor_length_cc_in, angle)
    return DerivedGeometry(
        mode=geometry.mode,
        conveyor_length_cc_in=positive(inputs.conveyor_length_cc_in),
        horizontal_run_in=run,
        conveyor_incline_deg=angle,
        rise_in=rise_from_horizontal(run, angle),
    )


def normalize_geometry(inputs: ConfigurationInputs) -> ConfigurationInputs:
    """
    Inputs with the derived length (and, for H_TOB, incline) filled in.

    L_ANGLE inputs and inputs whose mode lacks a usable value come back
    unchanged, so the validator reports the missing entry. Idempotent.
    """
    if not isinstance(inputs.geometry, (HorizontalAngleGeometry, HorizontalTobGeometry)):
        return inputs

    derived = derive_geometry(inputs)
    if not is_number(derived.conveyor_length_cc_in):
        return inputs

    update = {'conveyor_length_cc_in': derived.conveyor_length_cc_in}
    if isinstance(inputs.geometry, HorizontalTobGeometry):
        update['conveyor_incline_deg'] = derived.conveyor_incline_deg
    return inputs.model_copy(update=update)
