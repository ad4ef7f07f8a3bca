"""
Engineering parameters and per-request resolution.

Parameters holds the engineering constants a caller may override per
request. resolve_parameters() is the single defaulting step of a
calculation: it folds defaults, request overrides and the advanced overrides
carried on the inputs into one ResolvedParameters value, so the formula
modules work with plain numbers and never apply a default themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..enums import BedType
from ..io.loaders import ConfigurationInputs
from .constants import (
    DESIGN_REVIEW_FRAME_HEIGHT_IN,
    DRIVE_SHAFT_SPROCKET_TEETH_DEFAULT,
    FRAME_CLEARANCE_DEFAULT_IN,
    FRICTION_COEFF_DEFAULT,
    FRICTION_COEFF_ROLLER_BED,
    FRICTION_COEFF_SLIDER_BED,
    GRAVITY_IN_PER_S2,
    GM_SPROCKET_TEETH_DEFAULT,
    GRAVITY_ROLLER_SPACING_IN,
    MOTOR_RPM_DEFAULT,
    PIW_PIL_DEFAULT,
    PIW_PIL_SMALL_PULLEY,
    PIW_PIL_SMALL_PULLEY_DIAMETER_IN,
    PULLEY_FACE_EXTRA_CROWNED_IN,
    PULLEY_FACE_EXTRA_V_GUIDED_IN,
    RETURN_ROLLER_DIAMETER_IN,
    SAFETY_FACTOR_DEFAULT,
    SNUB_ROLLER_CLEARANCE_IN,
    STARTING_BELT_PULL_LB_DEFAULT,
    THROUGHPUT_MARGIN_PCT_DEFAULT,
    TUBE_STRESS_LIMIT_DRUM_PSI,
    TUBE_STRESS_LIMIT_VGROOVE_PSI,
)


class Parameters(BaseModel):
    """
    Overridable engineering constants.

    Every field has a safe default; validate() range-checks the ones that
    accept user overrides.
    """
    model_config = ConfigDict(extra='ignore')

    friction_coeff: float = FRICTION_COEFF_DEFAULT
    safety_factor: float = SAFETY_FACTOR_DEFAULT
    starting_belt_pull_lb: float = STARTING_BELT_PULL_LB_DEFAULT
    motor_rpm: float = MOTOR_RPM_DEFAULT
    gravity_in_per_s2: float = GRAVITY_IN_PER_S2

    # Belt weight coefficients; None selects the pulley-bracket default
    piw: Optional[float] = None
    pil: Optional[float] = None
    piw_small_pulley: float = PIW_PIL_SMALL_PULLEY
    piw_default: float = PIW_PIL_DEFAULT

    # Frame
    return_roller_diameter_in: float = RETURN_ROLLER_DIAMETER_IN
    frame_clearance_default_in: float = FRAME_CLEARANCE_DEFAULT_IN
    snub_roller_clearance_in: float = SNUB_ROLLER_CLEARANCE_IN
    design_review_frame_height_in: float = DESIGN_REVIEW_FRAME_HEIGHT_IN
    gravity_roller_spacing_in: float = GRAVITY_ROLLER_SPACING_IN

    # Pulley face
    pulley_face_extra_v_guided_in: float = PULLEY_FACE_EXTRA_V_GUIDED_IN
    pulley_face_extra_crowned_in: float = PULLEY_FACE_EXTRA_CROWNED_IN

    # PCI tube stress limits
    tube_stress_limit_drum_psi: float = TUBE_STRESS_LIMIT_DRUM_PSI
    tube_stress_limit_vgroove_psi: float = TUBE_STRESS_LIMIT_VGROOVE_PSI


ParametersInput = Union[Parameters, Dict[str, Any], None]


@dataclass(frozen=True)
class ResolvedParameters:
    """Every value a calculation needs, defaults already applied."""
    friction_coeff: float
    safety_factor: float
    starting_belt_pull_lb: float
    motor_rpm: float
    gravity_in_per_s2: float
    piw: float
    pil: float
    frame_clearance_in: float
    return_roller_diameter_in: float
    snub_roller_clearance_in: float
    design_review_frame_height_in: float
    gravity_roller_spacing_in: float
    pulley_face_extra_in: float
    tube_stress_limit_psi: float
    throughput_margin_pct: float
    gm_sprocket_teeth: Optional[float] = None  # Bottom mount only
    drive_shaft_sprocket_teeth: Optional[float] = None  # Bottom mount only


def coerce_parameters(parameters: ParametersInput) -> Parameters:
    """Accept a Parameters model, a dict of overrides, or None."""
    if parameters is None:
        return Parameters()
    if isinstance(parameters, Parameters):
        return parameters
    return Parameters.model_validate(parameters)


def bracket_piw_pil(pulley_diameter_in: Optional[float], parameters: Parameters) -> float:
    """Default belt weight coefficient for the drive pulley bracket."""
    if pulley_diameter_in == PIW_PIL_SMALL_PULLEY_DIAMETER_IN:
        return parameters.piw_small_pulley
    return parameters.piw_default


def _first(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_parameters(inputs: ConfigurationInputs, parameters: ParametersInput = None) -> ResolvedParameters:
    """
    Resolve every defaulted quantity once for this request.

    Priorities:
        friction: input override > bed type preset > parameters
        PIW/PIL: input override > catalog belt > parameters > pulley bracket
        others: input override > parameters

    Args:
        inputs: Typed configuration inputs
        parameters: Parameter overrides (model, dict, or None)

    Returns:
        ResolvedParameters
    """
    params = coerce_parameters(parameters)

    bed_friction = None
    if inputs.bed_type == BedType.SLIDER_BED:
        bed_friction = FRICTION_COEFF_SLIDER_BED
    elif inputs.bed_type == BedType.ROLLER_BED:
        bed_friction = FRICTION_COEFF_ROLLER_BED

    bracket = bracket_piw_pil(inputs.drive_pulley_diameter_in, params)

    gm_teeth = drive_teeth = None
    if inputs.is_bottom_mount:
        gm_teeth = _first(inputs.drive.gm_sprocket_teeth, GM_SPROCKET_TEETH_DEFAULT)
        drive_teeth = _first(inputs.drive.drive_shaft_sprocket_teeth, DRIVE_SHAFT_SPROCKET_TEETH_DEFAULT)

    margin = None
    if inputs.material.mode == "PARTS":
        margin = inputs.material.throughput_margin_pct

    return ResolvedParameters(
        friction_coeff=_first(inputs.friction_coeff, bed_friction, params.friction_coeff),
        safety_factor=_first(inputs.safety_factor, params.safety_factor),
        starting_belt_pull_lb=_first(inputs.starting_belt_pull_lb, params.starting_belt_pull_lb),
        motor_rpm=_first(inputs.motor_rpm, params.motor_rpm),
        gravity_in_per_s2=params.gravity_in_per_s2,
        piw=_first(inputs.belt_piw_override, inputs.belt_piw, params.piw, bracket),
        pil=_first(inputs.belt_pil_override, inputs.belt_pil, params.pil, bracket),
        frame_clearance_in=_first(inputs.frame_clearance_in, params.frame_clearance_default_in),
        return_roller_diameter_in=params.return_roller_diameter_in,
        snub_roller_clearance_in=params.snub_roller_clearance_in,
        design_review_frame_height_in=params.design_review_frame_height_in,
        gravity_roller_spacing_in=params.gravity_roller_spacing_in,
        pulley_face_extra_in=(
            params.pulley_face_extra_v_guided_in if inputs.is_v_guided
            else params.pulley_face_extra_crowned_in
        ),
        tube_stress_limit_psi=(
            params.tube_stress_limit_vgroove_psi if is_v_groove_pulley(inputs)
            else params.tube_stress_limit_drum_psi
        ),
        throughput_margin_pct=_first(margin, THROUGHPUT_MARGIN_PCT_DEFAULT),
        gm_sprocket_teeth=gm_teeth,
        drive_shaft_sprocket_teeth=drive_teeth,
    )


def is_v_groove_pulley(inputs: ConfigurationInputs) -> bool:
    """V-grooved pulley: V-guided tracking with a V-guide actually selected."""
    return inputs.is_v_guided and inputs.v_guide_key is not None
