"""
Frame sub-calculator: frame height, snub and gravity rollers, side thickness.

Frame height modes:
- standard:    required = largest pulley + 2 × cleat height + return roller
- low profile: required = largest pulley + 2 × cleat height (snub rollers
               hold belt wrap instead of a return roller)
- custom:      engineer-entered height

reference height = required height + clearance. Snub rollers are required
whenever the frame height is below largest pulley + snub clearance.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..enums import FrameHeightMode
from .constants import (
    GRAVITY_ROLLER_MIN_QTY,
    SHEET_METAL_GAUGE_THICKNESS_IN,
    SNUB_ROLLER_QTY,
    STRUCTURAL_CHANNEL_THICKNESS_IN,
)
from .numeric import NAN, is_number, num


@dataclass
class FrameHeight:
    """Frame height results and the cost flags they raise."""
    required_frame_height_in: float
    reference_frame_height_in: float
    effective_frame_height_in: float
    requires_snub_rollers: bool
    cost_flag_low_profile: bool
    cost_flag_custom_frame: bool
    cost_flag_snub_rollers: bool
    cost_flag_design_review: bool


def calculate_required_frame_height(
    largest_pulley_diameter_in: Optional[float],
    cleat_height_in: float,
    mode: FrameHeightMode,
    return_roller_diameter_in: float,
) -> float:
    """Minimum frame height for the pulley, cleats and return path."""
    height = num(largest_pulley_diameter_in) + 2 * cleat_height_in
    if mode != FrameHeightMode.LOW_PROFILE:
        height += return_roller_diameter_in
    return height


def requires_snub_rollers(
    frame_height_in: float,
    largest_pulley_diameter_in: Optional[float],
    snub_roller_clearance_in: float,
) -> bool:
    """True when the frame is too shallow for a full return roller."""
    threshold = num(largest_pulley_diameter_in) + snub_roller_clearance_in
    if not (is_number(frame_height_in) and is_number(threshold)):
        return False
    return frame_height_in < threshold


def calculate_frame_height(
    largest_pulley_diameter_in: Optional[float],
    cleat_height_in: float,
    mode: FrameHeightMode,
    custom_frame_height_in: Optional[float],
    clearance_in: float,
    return_roller_diameter_in: float,
    snub_roller_clearance_in: float,
    design_review_frame_height_in: float,
) -> FrameHeight:
    """
    Resolve frame height for the selected mode.

    Args:
        largest_pulley_diameter_in: max(drive, tail) pulley diameter
        cleat_height_in: Cleat height, 0 when cleats are disabled
        mode: Frame height mode
        custom_frame_height_in: Entered height (custom mode only)
        clearance_in: Clearance added to the required height
        return_roller_diameter_in: Return roller allowance (standard mode)
        snub_roller_clearance_in: Snub threshold above the largest pulley
        design_review_frame_height_in: Heights below this need design review

    Returns:
        FrameHeight
    """
    required = calculate_required_frame_height(
        largest_pulley_diameter_in, cleat_height_in, mode, return_roller_diameter_in
    )
    reference = required + clearance_in

    effective = reference
    if mode == FrameHeightMode.CUSTOM and custom_frame_height_in is not None:
        effective = float(custom_frame_height_in)

    snubs = requires_snub_rollers(effective, largest_pulley_diameter_in, snub_roller_clearance_in)
    return FrameHeight(
        required_frame_height_in=required,
        reference_frame_height_in=reference,
        effective_frame_height_in=effective,
        requires_snub_rollers=snubs,
        cost_flag_low_profile=mode == FrameHeightMode.LOW_PROFILE,
        cost_flag_custom_frame=mode == FrameHeightMode.CUSTOM,
        cost_flag_snub_rollers=snubs,
        cost_flag_design_review=is_number(effective) and effective < design_review_frame_height_in,
    )


def calculate_snub_roller_quantity(snub_rollers_required: bool) -> int:
    return SNUB_ROLLER_QTY if snub_rollers_required else 0


def calculate_gravity_roller_quantity(
    conveyor_length_cc_in: Optional[float],
    snub_rollers_required: bool,
    spacing_in: float,
) -> int:
    """
    Gravity (return) rollers along the conveyor.

    Positions = floor(L / spacing) + 1. Snub rollers take the two end
    positions; without snubs at least two gravity rollers are fitted.
    """
    if not is_number(conveyor_length_cc_in) or conveyor_length_cc_in <= 0:
        return 0
    positions = math.floor(conveyor_length_cc_in / spacing_in) + 1
    if snub_rollers_required:
        return max(positions - 2, 0)
    return max(positions, GRAVITY_ROLLER_MIN_QTY)


def frame_side_thickness(
    construction: str,
    gauge: Optional[str] = None,
    channel_series: Optional[str] = None,
) -> float:
    """
    Frame side material thickness (inches).

    Returns nan for special construction or an unknown selection.
    """
    if construction == "sheet_metal":
        return SHEET_METAL_GAUGE_THICKNESS_IN.get(gauge, NAN)
    if construction == "structural_channel":
        return STRUCTURAL_CHANNEL_THICKNESS_IN.get(channel_series, NAN)
    return NAN


def calculate_tob_heights(
    reference_end: str,
    tail_tob_in: Optional[float],
    drive_tob_in: Optional[float],
    conveyor_length_cc_in: Optional[float],
    incline_deg: float,
) -> tuple:
    """
    Top-of-belt heights at both ends from the height at the reference end.

    The drive (head) end sits higher by L × sin(θ) on an incline.
    """
    rise = num(conveyor_length_cc_in) * math.sin(math.radians(num(incline_deg)))
    if reference_end == "drive":
        drive = num(drive_tob_in)
        return drive - rise, drive
    tail = num(tail_tob_in)
    return tail, tail + rise
