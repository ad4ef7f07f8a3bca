"""
Belt sub-calculator: length, weight, cleat adder, pull and torque.

Belt pull is deliberately conservative: friction pull is taken against the
full load regardless of incline, and the incline component is added on top.

    belt length   = 2L + π(Dd + Dt)/2
    belt weight   = PIW × PIL × W × belt length
    friction pull = μ × total load
    incline pull  = total load × sin(θ)
    total pull    = friction pull + incline pull + starting pull
    torque        = total pull × D/2 × SF
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import (
    CLEAT_BASE_IN,
    CLEAT_DENSITY_LB_PER_IN3,
    CLEAT_SPACING_MULTIPLIER_POINTS,
    CLEAT_THICKNESS_IN,
    MIN_PULLEY_ROUNDING_INCREMENT_IN,
)
from .numeric import NAN, is_number, num, safe_div


@dataclass
class CleatWeight:
    """Weight contribution of cleats along the belt."""
    weight_each_lb: float
    weight_per_ft_lb: float
    total_weight_lb: float


@dataclass
class BeltPull:
    """Belt pull components and the resulting drive torque."""
    friction_pull_lb: float
    incline_pull_lb: float
    starting_pull_lb: float
    total_belt_pull_lb: float
    torque_drive_pulley_lb_in: float


def calculate_belt_length(
    conveyor_length_cc_in: Optional[float],
    drive_pulley_diameter_in: Optional[float],
    tail_pulley_diameter_in: Optional[float],
) -> float:
    """Open belt length around two pulleys (inches)."""
    length = num(conveyor_length_cc_in)
    return 2 * length + math.pi * (num(drive_pulley_diameter_in) + num(tail_pulley_diameter_in)) / 2


def calculate_belt_weight(piw: float, pil: float, belt_width_in: Optional[float], belt_length_in: float) -> float:
    """Belt weight (lb) from width and length coefficients."""
    return piw * pil * num(belt_width_in) * belt_length_in


def calculate_cleat_weight(
    cleat_height_in: Optional[float],
    cleat_spacing_in: Optional[float],
    cleat_edge_offset_in: float,
    belt_width_in: Optional[float],
    belt_length_in: float,
) -> CleatWeight:
    """
    Cleat unit weight and its linear density along the belt.

    Each cleat is modelled as a solid strip: thickness × (base + height) ×
    cleated width × density, with the cleated width reduced by the edge offset
    on both sides.
    """
    cleated_width = num(belt_width_in) - 2 * (cleat_edge_offset_in or 0.0)
    if is_number(cleated_width) and cleated_width < 0:
        cleated_width = 0.0
    weight_each = (
        CLEAT_THICKNESS_IN * (CLEAT_BASE_IN + num(cleat_height_in)) * cleated_width * CLEAT_DENSITY_LB_PER_IN3
    )
    per_ft = safe_div(weight_each * 12.0, num(cleat_spacing_in))
    return CleatWeight(
        weight_each_lb=weight_each,
        weight_per_ft_lb=per_ft,
        total_weight_lb=per_ft * belt_length_in / 12.0,
    )


def calculate_belt_pull(
    total_load_lb: float,
    incline_deg: float,
    friction_coeff: float,
    starting_pull_lb: float,
    pulley_diameter_in: Optional[float],
    safety_factor: float,
) -> BeltPull:
    """
    Belt pull components and drive pulley torque.

    Args:
        total_load_lb: Belt + cleats + product on the belt
        incline_deg: Conveyor incline angle
        friction_coeff: Belt-to-bed friction coefficient
        starting_pull_lb: Breakaway allowance
        pulley_diameter_in: Drive pulley diameter
        safety_factor: Torque safety factor

    Returns:
        BeltPull
    """
    friction_pull = friction_coeff * total_load_lb
    incline_pull = total_load_lb * math.sin(math.radians(num(incline_deg)))
    total_pull = friction_pull + incline_pull + starting_pull_lb
    torque = total_pull * (num(pulley_diameter_in) / 2) * safety_factor
    return BeltPull(
        friction_pull_lb=friction_pull,
        incline_pull_lb=incline_pull,
        starting_pull_lb=starting_pull_lb,
        total_belt_pull_lb=total_pull,
        torque_drive_pulley_lb_in=torque,
    )


def calculate_pulley_face_length(belt_width_in: Optional[float], face_extra_in: float) -> float:
    """Pulley face length: belt width plus the tracking allowance."""
    return num(belt_width_in) + face_extra_in


def cleat_spacing_multiplier(cleat_spacing_in: float) -> float:
    """
    Minimum pulley multiplier for hot-welded cleats.

    Closer cleats stiffen the belt: 4" or less -> 1.35, 12" or more -> 1.0,
    linear between the tabulated points.
    """
    points = CLEAT_SPACING_MULTIPLIER_POINTS
    if cleat_spacing_in <= points[0][0]:
        return points[0][1]
    if cleat_spacing_in >= points[-1][0]:
        return points[-1][1]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x0 <= cleat_spacing_in < x1:
            t = (cleat_spacing_in - x0) / (x1 - x0)
            return y0 + t * (y1 - y0)
    return 1.0


def round_up_to_increment(value: float, increment: float = MIN_PULLEY_ROUNDING_INCREMENT_IN) -> float:
    """Round up to the next increment (e.g. 0.25")."""
    if not is_number(value):
        return NAN
    # Tolerate float noise so exact multiples are not bumped up
    return math.ceil(value / increment - 1e-9) * increment


def calculate_min_pulley_required(
    belt_min_no_vguide_in: Optional[float],
    belt_min_with_vguide_in: Optional[float],
    is_v_guided: bool,
    hot_welded_cleat_spacing_in: Optional[float],
) -> tuple:
    """
    Belt minimum pulley diameter for the tracking method and cleat method.

    Returns:
        (required minimum or None, multiplier applied or None). None when the
        belt carries no minimum.
    """
    base = belt_min_with_vguide_in if is_v_guided else belt_min_no_vguide_in
    if base is None:
        return None, None
    if hot_welded_cleat_spacing_in is None:
        return base, None
    multiplier = cleat_spacing_multiplier(hot_welded_cleat_spacing_in)
    return round_up_to_increment(base * multiplier), multiplier
