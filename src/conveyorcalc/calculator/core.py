"""
Conveyor Calculator - Formula Engine

Converts typed configuration inputs and resolved parameters into a complete
output record. calculate() always runs to completion, even over inputs that
fail validation: quantities that can't be computed are math.nan, so an
engineer fixing one field at a time still sees every other derived value.

Pipeline:
0. Geometry normalization (length, horizontal run, incline, rise)
1. Speed and ratio chain (drivetrain)
2. Material throughput and load on belt (parts or bulk)
3. Belt length, weight and cleat adder
4. Belt pull and drive torque
5. Pulley face, frame height, rollers, side thickness
6. Shaft sizing and optional PCI tube stress
7. Belt minimum pulley diameter
8. Actual belt speed from a selected gearmotor
9. Belt tracking recommendation (guidance only)
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from ..enums import CleatMethod, FrameHeightMode
from ..io.loaders import (
    BottomMountDrive,
    BulkMaterial,
    CleatsEnabled,
    ConfigurationInputs,
    CustomFrame,
    DriveRpmMode,
    FloorSupport,
    HorizontalTobGeometry,
    ManualShaft,
    SheetMetalFrame,
    StructuralChannelFrame,
)
from .belt import (
    calculate_belt_length,
    calculate_belt_pull,
    calculate_belt_weight,
    calculate_cleat_weight,
    calculate_min_pulley_required,
    calculate_pulley_face_length,
)
from .drivetrain import (
    calculate_actual_belt_speed,
    calculate_chain_ratio,
    calculate_drivetrain,
    speed_delta_pct,
)
from .frame import (
    calculate_frame_height,
    calculate_gravity_roller_quantity,
    calculate_snub_roller_quantity,
    calculate_tob_heights,
    frame_side_thickness,
)
from .geometry import derive_geometry, normalize_geometry
from .numeric import is_number, num, or_none
from .parameters import ParametersInput, ResolvedParameters, resolve_parameters
from .shaft import size_shaft
from .throughput import calculate_bulk_throughput, calculate_parts_throughput
from .tracking import recommend_tracking
from .tube_stress import calculate_tube_stress

# Cleat spacing assumed for the minimum pulley multiplier when none is entered
DEFAULT_CLEAT_SPACING_IN = 12.0


def belt_minimum_pulley(inputs: ConfigurationInputs):
    """Minimum pulley diameter for the selected belt, or (None, None) without catalog data."""
    hot_welded_spacing = None
    if isinstance(inputs.cleats, CleatsEnabled) and inputs.cleats.cleat_method == CleatMethod.HOT_WELDED:
        hot_welded_spacing = inputs.cleats.cleat_spacing_in or DEFAULT_CLEAT_SPACING_IN
    return calculate_min_pulley_required(
        inputs.belt_min_pulley_dia_no_vguide_in,
        inputs.belt_min_pulley_dia_with_vguide_in,
        inputs.is_v_guided,
        hot_welded_spacing,
    )


class CalculationOutputs(BaseModel):
    """
    Every quantity derived by the formula engine.

    float fields hold nan when uncomputable; Optional fields are None when
    the quantity does not apply to this configuration (e.g. cleat outputs
    with cleats disabled).
    """
    model_config = ConfigDict(extra='ignore')

    # Geometry
    conveyor_length_cc_in: float
    belt_width_in: float
    conveyor_incline_deg: float
    drive_pulley_diameter_in: float
    tail_pulley_diameter_in: float
    largest_pulley_diameter_in: float
    geometry_mode: str
    horizontal_run_in: float
    rise_in: float

    # Speed and ratios
    speed_mode: str
    belt_speed_fpm: float
    drive_rpm: float
    motor_rpm: float
    gear_ratio: float
    chain_ratio: float
    gm_sprocket_teeth: Optional[float] = None
    drive_shaft_sprocket_teeth: Optional[float] = None
    gearmotor_output_rpm: float
    total_drive_ratio: float

    # Actual speed from a selected gearmotor
    actual_belt_speed_fpm: Optional[float] = None
    actual_speed_delta_pct: Optional[float] = None
    actual_speed_warning_code: Optional[str] = None

    # Parameters used
    friction_coeff_used: float
    safety_factor_used: float
    starting_belt_pull_lb_used: float
    piw_used: float
    pil_used: float

    # Belt
    total_belt_length_in: float
    belt_weight_lb: float
    cleat_weight_each_lb: Optional[float] = None
    cleat_weight_per_ft_lb: Optional[float] = None
    cleat_weight_total_lb: Optional[float] = None
    effective_belt_weight_lb: float

    # Material
    material_form: str
    load_on_belt_lb: float
    total_load_lb: float
    pitch_in: Optional[float] = None
    parts_on_belt: Optional[float] = None
    capacity_pph: Optional[float] = None
    target_pph: Optional[float] = None
    meets_throughput: Optional[bool] = None
    rpm_required_for_target: Optional[float] = None
    throughput_margin_achieved_pct: Optional[float] = None
    mass_flow_lbs_per_hr: Optional[float] = None
    design_mass_flow_lbs_per_hr: Optional[float] = None
    volume_flow_ft3_per_hr: Optional[float] = None
    residence_time_min: Optional[float] = None

    # Belt pull and torque
    friction_pull_lb: float
    incline_pull_lb: float
    starting_pull_lb: float
    total_belt_pull_lb: float
    torque_drive_pulley_lb_in: float

    # Tracking and pulley face
    is_v_guided: bool
    pulley_requires_crown: bool
    pulley_face_extra_in: float
    pulley_face_length_in: float

    # Frame
    frame_height_mode: str
    required_frame_height_in: float
    reference_frame_height_in: float
    effective_frame_height_in: float
    requires_snub_rollers: bool
    snub_roller_quantity: int
    gravity_roller_quantity: int
    gravity_roller_spacing_in: float
    frame_side_thickness_in: Optional[float] = None
    cost_flag_low_profile: bool
    cost_flag_custom_frame: bool
    cost_flag_snub_rollers: bool
    cost_flag_design_review: bool

    # Support
    support_method: str
    legs_required: bool
    tail_tob_in: Optional[float] = None
    drive_tob_in: Optional[float] = None

    # Shafts
    shaft_diameter_mode: str
    drive_shaft_diameter_in: float
    tail_shaft_diameter_in: float
    drive_shaft_calculated_diameter_in: float
    drive_shaft_radial_load_lbf: float
    drive_shaft_deflection_in: float
    drive_shaft_deflection_ok: bool

    # PCI tube stress
    tube_stress_psi: Optional[float] = None
    tube_stress_limit_psi: float
    tube_stress_status: str
    tube_stress_hub_centers_estimated: bool = False
    tube_stress_error: Optional[str] = None

    # Belt minimum pulley
    min_pulley_required_in: Optional[float] = None
    cleat_spacing_multiplier: Optional[float] = None
    drive_pulley_meets_minimum: Optional[bool] = None
    tail_pulley_meets_minimum: Optional[bool] = None

    # Belt tracking recommendation
    tracking_lw_ratio: float
    tracking_lw_band: str
    tracking_disturbance_count: int
    tracking_disturbance_severity_raw: str
    tracking_disturbance_severity_modified: str
    tracking_mode_recommended: str
    tracking_recommendation_note: Optional[str] = None
    tracking_recommendation_rationale: str


def calculate(
    inputs: ConfigurationInputs,
    parameters: Union[ResolvedParameters, ParametersInput] = None,
) -> CalculationOutputs:
    """
    Run the full formula pipeline.

    Never raises for incomplete or invalid values; see module docstring.

    Args:
        inputs: Typed configuration inputs (already migrated)
        parameters: ResolvedParameters, or overrides to resolve against inputs

    Returns:
        CalculationOutputs
    """
    # 0. Geometry
    inputs = normalize_geometry(inputs)
    geometry = derive_geometry(inputs)

    if not isinstance(parameters, ResolvedParameters):
        parameters = resolve_parameters(inputs, parameters)
    p = parameters

    length = num(inputs.conveyor_length_cc_in)
    width = num(inputs.belt_width_in)
    incline = num(inputs.conveyor_incline_deg)
    drive_dia = num(inputs.drive_pulley_diameter_in)
    tail_dia = num(inputs.tail_pulley_diameter_in)
    largest = num(inputs.largest_pulley_diameter_in)

    # 1. Speed and ratio chain
    chain_ratio = calculate_chain_ratio(
        p.gm_sprocket_teeth, p.drive_shaft_sprocket_teeth, inputs.is_bottom_mount
    )
    if isinstance(inputs.speed, DriveRpmMode):
        drive = calculate_drivetrain(None, num(inputs.speed.drive_rpm), drive_dia, p.motor_rpm, chain_ratio)
    else:
        drive = calculate_drivetrain(inputs.speed.belt_speed_fpm, None, drive_dia, p.motor_rpm, chain_ratio)

    # 2. Material
    parts = bulk = None
    if isinstance(inputs.material, BulkMaterial):
        bulk = calculate_bulk_throughput(inputs.material, length, drive.belt_speed_fpm)
        load_on_belt = bulk.load_on_belt_lb
    else:
        parts = calculate_parts_throughput(
            inputs.material, length, drive.belt_speed_fpm, drive_dia, p.throughput_margin_pct
        )
        load_on_belt = parts.load_on_belt_lb

    # 3. Belt and cleats
    belt_length = calculate_belt_length(length, drive_dia, tail_dia)
    belt_weight = calculate_belt_weight(p.piw, p.pil, width, belt_length)
    cleat = None
    cleat_height = 0.0
    if isinstance(inputs.cleats, CleatsEnabled):
        cleat = calculate_cleat_weight(
            inputs.cleats.cleat_height_in,
            inputs.cleats.cleat_spacing_in,
            inputs.cleats.cleat_edge_offset_in,
            width,
            belt_length,
        )
        cleat_height = num(inputs.cleats.cleat_height_in)
    effective_belt_weight = belt_weight + (cleat.total_weight_lb if cleat else 0.0)
    total_load = effective_belt_weight + load_on_belt

    # 4. Pull and torque
    pull = calculate_belt_pull(
        total_load, incline, p.friction_coeff, p.starting_belt_pull_lb, drive_dia, p.safety_factor
    )

    # 5. Frame
    frame_mode = FrameHeightMode(inputs.frame_height.mode)
    custom_height = inputs.frame_height.custom_frame_height_in if isinstance(inputs.frame_height, CustomFrame) else None
    frame = calculate_frame_height(
        largest,
        cleat_height,
        frame_mode,
        custom_height,
        p.frame_clearance_in,
        p.return_roller_diameter_in,
        p.snub_roller_clearance_in,
        p.design_review_frame_height_in,
    )

    construction = inputs.frame_construction
    gauge = series = None
    if isinstance(construction, SheetMetalFrame) and construction.frame_sheet_metal_gauge:
        gauge = construction.frame_sheet_metal_gauge.value
    if isinstance(construction, StructuralChannelFrame) and construction.frame_structural_channel_series:
        series = construction.frame_structural_channel_series.value
    side_thickness = frame_side_thickness(construction.mode, gauge, series)

    tail_tob = drive_tob = None
    if isinstance(inputs.geometry, HorizontalTobGeometry):
        # Entered, not derived
        tail_tob = inputs.geometry.tail_tob_in
        drive_tob = inputs.geometry.drive_tob_in
    elif isinstance(inputs.support, FloorSupport):
        tail_tob, drive_tob = calculate_tob_heights(
            inputs.support.reference_end.value,
            inputs.support.tail_tob_in,
            inputs.support.drive_tob_in,
            length,
            incline,
        )

    # 6. Shafts and tube stress
    drive_shaft = size_shaft(width, drive_dia, pull.total_belt_pull_lb, is_drive_pulley=True)
    tail_shaft = size_shaft(width, tail_dia, pull.total_belt_pull_lb, is_drive_pulley=False)
    if isinstance(inputs.shaft, ManualShaft):
        drive_shaft_dia = num(inputs.shaft.drive_shaft_diameter_in)
        tail_shaft_dia = num(inputs.shaft.tail_shaft_diameter_in)
    else:
        drive_shaft_dia = drive_shaft.required_diameter_in
        tail_shaft_dia = tail_shaft.required_diameter_in

    hub_centers = inputs.hub_centers_in
    hub_estimated = False
    if hub_centers is None and inputs.pulley_tube_od_in is not None:
        hub_centers = inputs.belt_width_in
        hub_estimated = hub_centers is not None
    tube = calculate_tube_stress(
        inputs.pulley_tube_od_in,
        inputs.pulley_tube_wall_in,
        hub_centers,
        drive_shaft.radial_load_lbf,
        p.tube_stress_limit_psi,
        enforce_checks=inputs.enforce_pci_checks,
        hub_centers_estimated=hub_estimated,
    )

    # 7. Belt minimum pulley
    min_pulley, multiplier = belt_minimum_pulley(inputs)
    drive_meets = tail_meets = None
    if min_pulley is not None:
        drive_meets = is_number(drive_dia) and drive_dia >= min_pulley
        tail_meets = is_number(tail_dia) and tail_dia >= min_pulley

    # 8. Actual speed from a selected gearmotor
    gm_teeth = p.gm_sprocket_teeth
    drive_teeth = p.drive_shaft_sprocket_teeth
    actual_fpm, actual_code = calculate_actual_belt_speed(
        inputs.actual_gearmotor_output_rpm, drive_dia, gm_teeth, drive_teeth,
        isinstance(inputs.drive, BottomMountDrive),
    )
    actual_delta = None
    if actual_fpm is not None:
        actual_delta = speed_delta_pct(drive.belt_speed_fpm, actual_fpm)

    # 9. Tracking recommendation
    tracking = recommend_tracking(inputs, length)

    outputs = CalculationOutputs(
        conveyor_length_cc_in=length,
        belt_width_in=width,
        conveyor_incline_deg=incline,
        drive_pulley_diameter_in=drive_dia,
        tail_pulley_diameter_in=tail_dia,
        largest_pulley_diameter_in=largest,
        geometry_mode=geometry.mode,
        horizontal_run_in=geometry.horizontal_run_in,
        rise_in=geometry.rise_in,

        speed_mode=inputs.speed.mode,
        belt_speed_fpm=drive.belt_speed_fpm,
        drive_rpm=drive.drive_rpm,
        motor_rpm=p.motor_rpm,
        gear_ratio=drive.gear_ratio,
        chain_ratio=drive.chain_ratio,
        gm_sprocket_teeth=gm_teeth,
        drive_shaft_sprocket_teeth=drive_teeth,
        gearmotor_output_rpm=drive.gearmotor_output_rpm,
        total_drive_ratio=drive.total_drive_ratio,

        actual_belt_speed_fpm=actual_fpm,
        actual_speed_delta_pct=actual_delta,
        actual_speed_warning_code=actual_code,

        friction_coeff_used=p.friction_coeff,
        safety_factor_used=p.safety_factor,
        starting_belt_pull_lb_used=p.starting_belt_pull_lb,
        piw_used=p.piw,
        pil_used=p.pil,

        total_belt_length_in=belt_length,
        belt_weight_lb=belt_weight,
        cleat_weight_each_lb=cleat.weight_each_lb if cleat else None,
        cleat_weight_per_ft_lb=cleat.weight_per_ft_lb if cleat else None,
        cleat_weight_total_lb=cleat.total_weight_lb if cleat else None,
        effective_belt_weight_lb=effective_belt_weight,

        material_form=inputs.material.mode,
        load_on_belt_lb=load_on_belt,
        total_load_lb=total_load,

        friction_pull_lb=pull.friction_pull_lb,
        incline_pull_lb=pull.incline_pull_lb,
        starting_pull_lb=pull.starting_pull_lb,
        total_belt_pull_lb=pull.total_belt_pull_lb,
        torque_drive_pulley_lb_in=pull.torque_drive_pulley_lb_in,

        is_v_guided=inputs.is_v_guided,
        pulley_requires_crown=not inputs.is_v_guided,
        pulley_face_extra_in=p.pulley_face_extra_in,
        pulley_face_length_in=calculate_pulley_face_length(width, p.pulley_face_extra_in),

        frame_height_mode=frame_mode.value,
        required_frame_height_in=frame.required_frame_height_in,
        reference_frame_height_in=frame.reference_frame_height_in,
        effective_frame_height_in=frame.effective_frame_height_in,
        requires_snub_rollers=frame.requires_snub_rollers,
        snub_roller_quantity=calculate_snub_roller_quantity(frame.requires_snub_rollers),
        gravity_roller_quantity=calculate_gravity_roller_quantity(
            inputs.conveyor_length_cc_in, frame.requires_snub_rollers, p.gravity_roller_spacing_in
        ),
        gravity_roller_spacing_in=p.gravity_roller_spacing_in,
        frame_side_thickness_in=or_none(side_thickness),
        cost_flag_low_profile=frame.cost_flag_low_profile,
        cost_flag_custom_frame=frame.cost_flag_custom_frame,
        cost_flag_snub_rollers=frame.cost_flag_snub_rollers,
        cost_flag_design_review=frame.cost_flag_design_review,

        support_method=inputs.support_method,
        legs_required=inputs.legs_required,
        tail_tob_in=tail_tob,
        drive_tob_in=drive_tob,

        shaft_diameter_mode=inputs.shaft.mode,
        drive_shaft_diameter_in=drive_shaft_dia,
        tail_shaft_diameter_in=tail_shaft_dia,
        drive_shaft_calculated_diameter_in=drive_shaft.calculated_diameter_in,
        drive_shaft_radial_load_lbf=drive_shaft.radial_load_lbf,
        drive_shaft_deflection_in=drive_shaft.deflection_in,
        drive_shaft_deflection_ok=drive_shaft.deflection_ok,

        tube_stress_psi=tube.stress_psi,
        tube_stress_limit_psi=tube.limit_psi,
        tube_stress_status=tube.status.value,
        tube_stress_hub_centers_estimated=tube.hub_centers_estimated,
        tube_stress_error=tube.error_message,

        min_pulley_required_in=min_pulley,
        cleat_spacing_multiplier=multiplier,
        drive_pulley_meets_minimum=drive_meets,
        tail_pulley_meets_minimum=tail_meets,

        tracking_lw_ratio=tracking.lw_ratio,
        tracking_lw_band=tracking.lw_band.value,
        tracking_disturbance_count=tracking.disturbance_count,
        tracking_disturbance_severity_raw=tracking.severity_raw.value,
        tracking_disturbance_severity_modified=tracking.severity_modified.value,
        tracking_mode_recommended=tracking.mode_recommended.value,
        tracking_recommendation_note=tracking.note,
        tracking_recommendation_rationale=tracking.rationale,
    )

    if parts is not None:
        outputs.pitch_in = parts.pitch_in
        outputs.parts_on_belt = parts.parts_on_belt
        outputs.capacity_pph = parts.capacity_pph
        outputs.target_pph = parts.target_pph
        outputs.meets_throughput = parts.meets_throughput
        outputs.rpm_required_for_target = parts.rpm_required_for_target
        outputs.throughput_margin_achieved_pct = parts.throughput_margin_achieved_pct
    if bulk is not None:
        outputs.mass_flow_lbs_per_hr = bulk.mass_flow_lbs_per_hr
        outputs.design_mass_flow_lbs_per_hr = bulk.design_mass_flow_lbs_per_hr
        outputs.volume_flow_ft3_per_hr = bulk.volume_flow_ft3_per_hr
        outputs.residence_time_min = bulk.residence_time_min

    return outputs
