"""Output formatters for calculation results.

to_json() gives the machine-readable record (nan serializes as null);
to_summary() gives a fixed-layout text summary for logs and terminals.
"""

import math
from typing import Optional

from .engine import CalculationResult


def _fmt(value: Optional[float], spec: str = ".2f", unit: str = "") -> str:
    """Format a number, showing n/a for missing or uncomputable values."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    suffix = f" {unit}" if unit else ""
    return f"{value:{spec}}{suffix}"


def to_json(result: CalculationResult, indent: int = 2) -> str:
    """Convert a CalculationResult to a JSON string.

    Args:
        result: Result of run_calculation()
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string; uncomputable quantities appear as null
    """
    return result.model_dump_json(indent=indent)


def to_summary(result: CalculationResult) -> str:
    """Convert a CalculationResult to a formatted text summary.

    Args:
        result: Result of run_calculation()

    Returns:
        Multi-line formatted summary string
    """
    out = result.outputs
    if out is None:
        return f"Calculation failed: {result.error or 'no outputs'}"

    lines = [
        "═══ Belt Conveyor Design ═══",
        f"Length (C-C): {_fmt(out.conveyor_length_cc_in, '.1f', 'in')} | "
        f"Belt width: {_fmt(out.belt_width_in, '.1f', 'in')} | "
        f"Incline: {_fmt(out.conveyor_incline_deg, '.1f', 'deg')}",
        f"Horizontal run: {_fmt(out.horizontal_run_in, '.1f', 'in')} | "
        f"Rise: {_fmt(out.rise_in, '.1f', 'in')} ({out.geometry_mode})",
        "",
        "Speed:",
        f"  Belt speed:        {_fmt(out.belt_speed_fpm, '.2f', 'FPM')}",
        f"  Drive shaft RPM:   {_fmt(out.drive_rpm, '.2f')}",
        f"  Gear ratio:        {_fmt(out.gear_ratio, '.2f')}:1",
        f"  Chain ratio:       {_fmt(out.chain_ratio, '.4f')}",
        f"  Gearmotor output:  {_fmt(out.gearmotor_output_rpm, '.2f', 'RPM')}",
    ]

    if out.actual_belt_speed_fpm is not None:
        lines.append(
            f"  Actual belt speed: {_fmt(out.actual_belt_speed_fpm, '.2f', 'FPM')} "
            f"({_fmt(out.actual_speed_delta_pct, '+.1f')}%)"
        )

    lines.extend([
        "",
        "Belt:",
        f"  Total length:      {_fmt(out.total_belt_length_in, '.1f', 'in')}",
        f"  Belt weight:       {_fmt(out.belt_weight_lb, '.2f', 'lb')}",
    ])
    if out.cleat_weight_total_lb is not None:
        lines.append(f"  Cleat weight:      {_fmt(out.cleat_weight_total_lb, '.2f', 'lb')}")
    lines.extend([
        f"  Total load:        {_fmt(out.total_load_lb, '.1f', 'lb')}",
        f"  Belt pull:         {_fmt(out.total_belt_pull_lb, '.1f', 'lb')}",
        f"  Drive torque:      {_fmt(out.torque_drive_pulley_lb_in, '.1f', 'lb-in')}",
        "",
        "Frame:",
        f"  Mode:              {out.frame_height_mode}",
        f"  Required height:   {_fmt(out.required_frame_height_in, '.2f', 'in')}",
        f"  Reference height:  {_fmt(out.reference_frame_height_in, '.2f', 'in')}",
        f"  Snub rollers:      {'Yes' if out.requires_snub_rollers else 'No'}",
        f"  Gravity rollers:   {out.gravity_roller_quantity}",
        "",
        "Shafts:",
        f"  Drive:             {_fmt(out.drive_shaft_diameter_in, '.3f', 'in')}",
        f"  Tail:              {_fmt(out.tail_shaft_diameter_in, '.3f', 'in')}",
        f"  Tube stress:       {out.tube_stress_status}",
        "",
        "Tracking:",
        f"  Recommended:       {out.tracking_mode_recommended} "
        f"(L/W {_fmt(out.tracking_lw_ratio, '.1f')}, {out.tracking_disturbance_severity_modified} disturbances)",
    ])

    if out.capacity_pph is not None:
        lines.extend([
            "",
            f"Capacity: {_fmt(out.capacity_pph, '.0f', 'parts/hr')}",
        ])
    elif out.mass_flow_lbs_per_hr is not None:
        lines.extend([
            "",
            f"Mass flow: {_fmt(out.mass_flow_lbs_per_hr, '.0f', 'lbs/hr')}",
        ])

    if result.errors or result.warnings:
        lines.append("")
        for issue in result.errors:
            lines.append(f"ERROR [{issue['field']}]: {issue['message']}")
        for issue in result.warnings:
            lines.append(f"WARNING [{issue['field']}]: {issue['message']}")

    return "\n".join(lines)
