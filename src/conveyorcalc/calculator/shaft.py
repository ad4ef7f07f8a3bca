"""
Pulley shaft sizing.

Combined bending and torsion by the von Mises criterion on a simply
supported shaft with a center load:

    T1/T2 = e^(μθ)                         (Euler-Eytelwein)
    R     = √(T1² + T2² - 2·T1·T2·cos θ)   (radial load)
    M     = R × span / 4
    d     = ∛( 32·SF·Kt / (π·Sy) × √(M² + 0.75·T²) )

The calculated diameter is rounded up to the next standard shaft size and
checked for deflection against 0.001 × bearing span.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import (
    BEARING_SPAN_OFFSET_IN,
    E_STEEL_PSI,
    KEYWAY_STRESS_CONCENTRATION,
    MAX_DEFLECTION_RATIO,
    SHAFT_LAGGING_FRICTION,
    SHAFT_SAFETY_FACTOR,
    SHAFT_SERVICE_FACTOR,
    SHAFT_WRAP_ANGLE_DEG,
    SHAFT_YIELD_STRENGTH_PSI,
    STANDARD_SHAFT_DIAMETERS_IN,
)
from .numeric import NAN, is_number, num


@dataclass
class ShaftSizing:
    """Shaft sizing result for one pulley."""
    required_diameter_in: float
    calculated_diameter_in: float
    t1_lbf: float
    t2_lbf: float
    radial_load_lbf: float
    bending_moment_lb_in: float
    torque_lb_in: float
    von_mises_stress_psi: float
    deflection_in: float
    deflection_ok: bool
    bearing_span_in: float


def next_standard_shaft_diameter(minimum_in: float) -> float:
    """Smallest standard size at or above minimum_in; 0.25" steps beyond the table."""
    for size in STANDARD_SHAFT_DIAMETERS_IN:
        if size >= minimum_in:
            return size
    return math.ceil(minimum_in * 4) / 4


def size_shaft(
    belt_width_in: Optional[float],
    pulley_diameter_in: Optional[float],
    effective_tension_lbf: float,
    is_drive_pulley: bool,
    wrap_angle_deg: float = SHAFT_WRAP_ANGLE_DEG,
    friction_coefficient: float = SHAFT_LAGGING_FRICTION,
    bearing_span_in: Optional[float] = None,
    yield_strength_psi: float = SHAFT_YIELD_STRENGTH_PSI,
    safety_factor: float = SHAFT_SAFETY_FACTOR,
    service_factor: float = SHAFT_SERVICE_FACTOR,
) -> ShaftSizing:
    """
    Size a pulley shaft for combined bending and torsion.

    Only the drive pulley carries torque (and a keyway, Kt = 1.6).

    Args:
        belt_width_in: Belt width; bearing span defaults to width + 5"
        pulley_diameter_in: Pulley diameter
        effective_tension_lbf: Effective belt tension Te (total belt pull)
        is_drive_pulley: True for the drive pulley

    Returns:
        ShaftSizing. Uncomputable inputs give nan fields; zero tension gives
        the smallest standard shaft.
    """
    span = bearing_span_in if bearing_span_in is not None else num(belt_width_in) + BEARING_SPAN_OFFSET_IN
    theta = math.radians(wrap_angle_deg)
    tension_ratio = math.exp(friction_coefficient * theta)
    te = effective_tension_lbf * service_factor

    if not is_number(te) or not is_number(span) or not is_number(num(pulley_diameter_in)):
        return ShaftSizing(NAN, NAN, NAN, NAN, NAN, NAN, NAN, NAN, NAN, False, span)

    if te <= 0:
        smallest = STANDARD_SHAFT_DIAMETERS_IN[0]
        return ShaftSizing(smallest, smallest, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, True, span)

    t2 = te / (tension_ratio - 1)
    t1 = t2 * tension_ratio
    radial = math.sqrt(t1 * t1 + t2 * t2 - 2 * t1 * t2 * math.cos(theta))
    moment = radial * span / 4
    torque = te * pulley_diameter_in / 2 if is_drive_pulley else 0.0
    kt = KEYWAY_STRESS_CONCENTRATION if is_drive_pulley else 1.0

    equivalent_moment = math.sqrt(moment * moment + 0.75 * torque * torque)
    calculated = (32 * safety_factor * kt * equivalent_moment / (math.pi * yield_strength_psi)) ** (1 / 3)
    d = next_standard_shaft_diameter(calculated)

    sigma_b = 32 * moment * kt / (math.pi * d ** 3)
    tau = 16 * torque / (math.pi * d ** 3)
    von_mises = math.sqrt(sigma_b * sigma_b + 3 * tau * tau)

    inertia = math.pi * d ** 4 / 64
    deflection = radial * span ** 3 / (48 * E_STEEL_PSI * inertia)

    return ShaftSizing(
        required_diameter_in=d,
        calculated_diameter_in=calculated,
        t1_lbf=t1,
        t2_lbf=t2,
        radial_load_lbf=radial,
        bending_moment_lb_in=moment,
        torque_lb_in=torque,
        von_mises_stress_psi=von_mises,
        deflection_in=deflection,
        deflection_ok=deflection <= MAX_DEFLECTION_RATIO * span,
        bearing_span_in=span,
    )
