"""
Material-form throughput: discrete parts or bulk flow.

Parts:
    pitch         = travel dimension + spacing
    parts on belt = L / pitch
    capacity      = belt speed × 720 / pitch        (parts/hr)
    target        = required × (1 + margin/100)

Bulk:
    mass flow     = entered, or volume flow × density  (lbs/hr)
    design flow   = mass flow × surge multiplier (surge feed only)
    load on belt  = design flow / 60 × residence time (min)

The two forms never read each other's fields.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..enums import BulkInputMethod, FeedBehavior, PartOrientation
from ..io.loaders import BulkMaterial, PartsMaterial
from .numeric import is_number, num, safe_div

INCHES_PER_FOOT_HOURLY = 720.0  # 12 in/ft × 60 min/hr


@dataclass
class PartsThroughput:
    travel_dimension_in: float
    pitch_in: float
    parts_on_belt: float
    load_on_belt_lb: float
    capacity_pph: float
    target_pph: Optional[float] = None
    meets_throughput: Optional[bool] = None
    rpm_required_for_target: Optional[float] = None
    throughput_margin_achieved_pct: Optional[float] = None


@dataclass
class BulkThroughput:
    mass_flow_lbs_per_hr: float
    design_mass_flow_lbs_per_hr: float
    volume_flow_ft3_per_hr: float
    residence_time_min: float
    load_on_belt_lb: float


def travel_dimension(material: PartsMaterial) -> float:
    """Part dimension along the direction of travel."""
    if material.orientation == PartOrientation.CROSSWISE:
        return num(material.part_width_in)
    return num(material.part_length_in)


def calculate_rpm_required(target_pph: float, pitch_in: float, pulley_diameter_in: Optional[float]) -> float:
    """Drive RPM needed to hit a parts-per-hour target."""
    return safe_div(target_pph * pitch_in, INCHES_PER_FOOT_HOURLY * math.pi * num(pulley_diameter_in) / 12)


def calculate_margin_achieved(capacity_pph: float, required_pph: float) -> float:
    """Capacity margin over the requirement (%); 0 when nothing is required."""
    if not required_pph:
        return 0.0
    return (capacity_pph / required_pph - 1) * 100


def calculate_parts_throughput(
    material: PartsMaterial,
    conveyor_length_cc_in: Optional[float],
    belt_speed_fpm: float,
    pulley_diameter_in: Optional[float],
    margin_pct: float,
) -> PartsThroughput:
    """
    Pitch, parts on belt, load and capacity for discrete parts.

    Target/meets/RPM-required fields are only populated when a positive
    required throughput was entered.
    """
    travel = travel_dimension(material)
    spacing = material.part_spacing_in if material.part_spacing_in is not None else 0.0
    pitch = travel + spacing
    parts_on_belt = safe_div(num(conveyor_length_cc_in), pitch)
    capacity = safe_div(belt_speed_fpm * INCHES_PER_FOOT_HOURLY, pitch)

    result = PartsThroughput(
        travel_dimension_in=travel,
        pitch_in=pitch,
        parts_on_belt=parts_on_belt,
        load_on_belt_lb=parts_on_belt * num(material.part_weight_lb),
        capacity_pph=capacity,
    )

    required = material.required_throughput_pph
    if required is not None and required > 0:
        target = required * (1 + margin_pct / 100)
        result.target_pph = target
        result.meets_throughput = is_number(capacity) and capacity >= target
        result.rpm_required_for_target = calculate_rpm_required(target, pitch, pulley_diameter_in)
        result.throughput_margin_achieved_pct = calculate_margin_achieved(capacity, required)
    return result


def calculate_bulk_throughput(
    material: BulkMaterial,
    conveyor_length_cc_in: Optional[float],
    belt_speed_fpm: float,
) -> BulkThroughput:
    """Mass flow, residence time and material load for bulk handling."""
    density = num(material.density_lbs_per_ft3)
    if material.bulk_input_method == BulkInputMethod.VOLUME_FLOW:
        volume_flow = num(material.volume_flow_ft3_per_hr)
        mass_flow = volume_flow * density
    else:
        mass_flow = num(material.mass_flow_lbs_per_hr)
        volume_flow = safe_div(mass_flow, density)

    design_flow = mass_flow
    if material.feed_behavior == FeedBehavior.SURGE:
        design_flow = mass_flow * (material.surge_multiplier if material.surge_multiplier is not None else 1.0)

    residence = safe_div(num(conveyor_length_cc_in) / 12.0, belt_speed_fpm)
    return BulkThroughput(
        mass_flow_lbs_per_hr=mass_flow,
        design_mass_flow_lbs_per_hr=design_flow,
        volume_flow_ft3_per_hr=volume_flow,
        residence_time_min=residence,
        load_on_belt_lb=design_flow / 60.0 * residence,
    )
