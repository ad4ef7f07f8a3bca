"""
Conveyor Calculator - Validation Rules

Engineering validation of a configuration before (and independently of)
calculation. Every rule family is a _validate_* helper returning a list of
issues; validate() concatenates them.

Severity:
- ERROR: the calculation is not trustworthy or actionable as entered
- WARNING: the calculation proceeds but the design merits review
- INFO: advisory only

Belt-selection rules are scoped by product key: a magnetic conveyor has no
belt, so only belt products require a belt catalog selection.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from ..enums import (
    BulkInputMethod,
    DensitySource,
    FeedBehavior,
    FluidType,
    LacingStyle,
    PartTemperatureClass,
    ReferenceEnd,
    SideLoadingDirection,
    SideLoadingSeverity,
)
from ..io.loaders import (
    BottomMountDrive,
    BulkMaterial,
    CleatsEnabled,
    ConfigurationInputs,
    CustomFrame,
    DriveRpmMode,
    FloorSupport,
    HorizontalAngleGeometry,
    HorizontalTobGeometry,
    LowProfileFrame,
    ManualShaft,
    PartsMaterial,
    SheetMetalFrame,
    StructuralChannelFrame,
)
from .constants import (
    CHAIN_RATIO_MAX,
    CHAIN_RATIO_MIN,
    CLEAT_EDGE_OFFSET_MAX_IN,
    CLEAT_HEIGHT_RANGE_IN,
    CLEAT_SPACING_RANGE_IN,
    DESIGN_REVIEW_FRAME_HEIGHT_IN,
    DROP_HEIGHT_WARNING_IN,
    FRICTION_COEFF_RANGE,
    INCLINE_MAX_DEG,
    INCLINE_STEEP_WARNING_DEG,
    INCLINE_WARNING_DEG,
    LONG_CONVEYOR_IN,
    LUMP_BELT_WIDTH_RATIO_MAX,
    MANUAL_SHAFT_MAX_IN,
    MANUAL_SHAFT_MIN_IN,
    MIN_FRAME_HEIGHT_IN,
    MIN_SPROCKET_TEETH,
    MIN_START_STOP_CYCLE_S,
    MOTOR_RPM_RANGE,
    PIW_PIL_RANGE,
    SAFETY_FACTOR_RANGE,
    STARTING_BELT_PULL_RANGE_LB,
)
from .core import belt_minimum_pulley
from .geometry import derive_geometry, normalize_geometry
from .numeric import is_number
from .parameters import ParametersInput, ResolvedParameters, resolve_parameters
from .throughput import travel_dimension

# Product keys
BELT_CONVEYOR = "belt_conveyor_v1"
SLIDERBED_CONVEYOR = "sliderbed_conveyor_v1"
ROLLERBED_CONVEYOR = "rollerbed_conveyor_v1"
MAGNETIC_CONVEYOR = "magnetic_conveyor_v1"

BELT_PRODUCT_KEYS = frozenset({BELT_CONVEYOR, SLIDERBED_CONVEYOR, ROLLERBED_CONVEYOR})


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single validation finding, tied to the input field at fault"""
    field: str
    message: str
    severity: Severity
    code: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def _error(field_name: str, code: str, message: str, suggestion: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(field_name, message, Severity.ERROR, code, suggestion)


def _warning(field_name: str, code: str, message: str, suggestion: Optional[str] = None) -> ValidationIssue:
    return ValidationIssue(field_name, message, Severity.WARNING, code, suggestion)


def _info(field_name: str, code: str, message: str) -> ValidationIssue:
    return ValidationIssue(field_name, message, Severity.INFO, code)


def _positive(value: Optional[float]) -> bool:
    return is_number(value) and value > 0


def requires_belt_validation(product_key: Optional[str]) -> bool:
    """
    Whether belt selection is mandatory for a product.

    No product key means a caller predating product scoping, which always
    validated the belt. Unknown keys are not belt products.
    """
    if product_key is None:
        return True
    return product_key in BELT_PRODUCT_KEYS


def validate(
    inputs: ConfigurationInputs,
    parameters: Union[ResolvedParameters, ParametersInput] = None,
    product_key: Optional[str] = None,
) -> ValidationResult:
    """
    Validate a configuration against engineering rules.

    Never raises for domain conditions; every problem becomes an issue.

    Args:
        inputs: Typed configuration inputs (already migrated)
        parameters: ResolvedParameters, or overrides to resolve against inputs
        product_key: Active product; scopes belt-selection rules

    Returns:
        ValidationResult with all findings
    """
    inputs = normalize_geometry(inputs)
    if not isinstance(parameters, ResolvedParameters):
        parameters = resolve_parameters(inputs, parameters)

    messages: List[ValidationIssue] = []

    messages.extend(_validate_geometry(inputs))
    messages.extend(_validate_speed(inputs, parameters))
    messages.extend(_validate_drive(inputs))
    messages.extend(_validate_parameters(parameters))
    messages.extend(_validate_belt(inputs, product_key))
    messages.extend(_validate_material(inputs))
    messages.extend(_validate_environment(inputs))
    messages.extend(_validate_side_loading(inputs))
    messages.extend(_validate_frame(inputs))
    messages.extend(_validate_cleats(inputs))
    messages.extend(_validate_shaft(inputs))
    messages.extend(_validate_support(inputs))
    messages.extend(_validate_safety(inputs))
    messages.extend(_validate_tube_geometry(inputs))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_geometry_mode(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Entries the H_ANGLE and H_TOB modes derive length from"""
    geometry = inputs.geometry
    if not isinstance(geometry, (HorizontalAngleGeometry, HorizontalTobGeometry)):
        return []

    messages = []
    if not _positive(derive_geometry(inputs).horizontal_run_in):
        messages.append(_error(
            'horizontal_run_in', "HORIZONTAL_RUN_INVALID",
            "Horizontal run must be greater than 0"
        ))
    if isinstance(geometry, HorizontalTobGeometry):
        for name in ('tail_tob_in', 'drive_tob_in'):
            if getattr(geometry, name) is None:
                messages.append(_error(
                    name, "GEOMETRY_TOB_REQUIRED",
                    f"{geometry.mode} mode requires both tail and drive TOB values",
                    suggestion="Enter both top-of-belt heights, or switch to H_ANGLE"
                ))
    return messages


def _validate_geometry(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Length, width, pulley diameters and incline"""
    messages = _validate_geometry_mode(inputs)

    if not _positive(inputs.conveyor_length_cc_in):
        # A derived length whose own entries are missing is already reported
        if not messages:
            messages.append(_error(
                'conveyor_length_cc_in', "LENGTH_INVALID",
                "Conveyor length (C-C) must be greater than 0"
            ))
    elif inputs.conveyor_length_cc_in > LONG_CONVEYOR_IN:
        messages.append(_warning(
            'conveyor_length_cc_in', "LENGTH_LONG",
            f"Conveyor length {inputs.conveyor_length_cc_in:.1f}\" exceeds {LONG_CONVEYOR_IN:.0f}\"",
            suggestion="Consider a multi-section body"
        ))

    if not _positive(inputs.belt_width_in):
        messages.append(_error('belt_width_in', "BELT_WIDTH_INVALID", "Belt width must be greater than 0"))

    if not _positive(inputs.drive_pulley_diameter_in):
        messages.append(_error(
            'drive_pulley_diameter_in', "DRIVE_PULLEY_INVALID",
            "Drive pulley diameter must be greater than 0"
        ))
    if not _positive(inputs.tail_pulley_diameter_in):
        messages.append(_error(
            'tail_pulley_diameter_in', "TAIL_PULLEY_INVALID",
            "Tail pulley diameter must be greater than 0"
        ))

    incline = inputs.conveyor_incline_deg
    if incline < 0:
        messages.append(_error('conveyor_incline_deg', "INCLINE_NEGATIVE", "Incline angle must be >= 0"))
    elif incline > INCLINE_MAX_DEG:
        messages.append(_error(
            'conveyor_incline_deg', "INCLINE_TOO_STEEP",
            f"Incline exceeds {INCLINE_MAX_DEG:.0f}°. A conveyor without positive engagement "
            "is not supported at this angle."
        ))
    elif incline > INCLINE_STEEP_WARNING_DEG:
        messages.append(_warning(
            'conveyor_incline_deg', "INCLINE_STEEP",
            f"Incline exceeds {INCLINE_STEEP_WARNING_DEG:.0f}°. Product retention by friction alone is unlikely.",
            suggestion="Cleats or positive engagement features are required for reliable operation"
        ))
    elif incline > INCLINE_WARNING_DEG:
        messages.append(_warning(
            'conveyor_incline_deg', "INCLINE_HIGH",
            f"Incline exceeds {INCLINE_WARNING_DEG:.0f}°. Product retention by friction alone may be insufficient.",
            suggestion="Cleats or other retention features are typically required at this angle"
        ))

    return messages


def _validate_speed(inputs: ConfigurationInputs, parameters: ResolvedParameters) -> List[ValidationIssue]:
    """The entered speed quantity for the active speed mode, and motor RPM"""
    messages = []

    if isinstance(inputs.speed, DriveRpmMode):
        if not _positive(inputs.speed.drive_rpm):
            messages.append(_error('drive_rpm', "DRIVE_RPM_INVALID", "Drive RPM must be greater than 0"))
    elif not _positive(inputs.speed.belt_speed_fpm):
        messages.append(_error('belt_speed_fpm', "BELT_SPEED_INVALID", "Belt speed must be greater than 0"))

    low, high = MOTOR_RPM_RANGE
    if not low <= parameters.motor_rpm <= high:
        messages.append(_error(
            'motor_rpm', "MOTOR_RPM_RANGE",
            f"Motor RPM {parameters.motor_rpm:.0f} must be between {low:.0f} and {high:.0f}"
        ))

    return messages


def _validate_drive(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Bottom-mount chain stage: sprocket teeth and chain ratio"""
    messages = []
    if not isinstance(inputs.drive, BottomMountDrive):
        return messages

    # Entered values, not resolved defaults: a bottom mount must name its sprockets
    driver = inputs.drive.gm_sprocket_teeth
    driven = inputs.drive.drive_shaft_sprocket_teeth

    if not _positive(driver):
        messages.append(_error(
            'gm_sprocket_teeth', "GM_SPROCKET_REQUIRED",
            "Gearmotor sprocket teeth must be greater than 0 for a bottom mount drive"
        ))
    if not _positive(driven):
        messages.append(_error(
            'drive_shaft_sprocket_teeth', "DRIVE_SPROCKET_REQUIRED",
            "Drive shaft sprocket teeth must be greater than 0 for a bottom mount drive"
        ))
    if not (_positive(driver) and _positive(driven)):
        return messages

    for field_name, teeth in (('gm_sprocket_teeth', driver), ('drive_shaft_sprocket_teeth', driven)):
        if teeth != int(teeth):
            messages.append(_error(
                field_name, "SPROCKET_TEETH_NOT_WHOLE",
                f"Sprocket teeth must be a whole number, got {teeth:g}"
            ))
    if any(m.severity == Severity.ERROR for m in messages):
        return messages

    ratio = driven / driver
    if ratio > CHAIN_RATIO_MAX or ratio < CHAIN_RATIO_MIN:
        messages.append(_warning(
            'drive_shaft_sprocket_teeth', "CHAIN_RATIO_UNUSUAL",
            f"Chain ratio {ratio:.2f} is outside the typical range "
            f"{CHAIN_RATIO_MIN:.1f} to {CHAIN_RATIO_MAX:.1f}",
            suggestion="Take more of the reduction in the gearbox"
        ))

    for field_name, teeth in (('gm_sprocket_teeth', driver), ('drive_shaft_sprocket_teeth', driven)):
        if teeth < MIN_SPROCKET_TEETH:
            messages.append(_warning(
                field_name, "SPROCKET_SMALL",
                f"Sprocket with {teeth:g} teeth is below {MIN_SPROCKET_TEETH}; expect accelerated chain wear"
            ))

    return messages


def _validate_parameters(parameters: ResolvedParameters) -> List[ValidationIssue]:
    """Range checks on overridable engineering parameters"""
    messages = []

    checks = (
        ('safety_factor', parameters.safety_factor, SAFETY_FACTOR_RANGE, "Safety factor"),
        ('belt_piw', parameters.piw, PIW_PIL_RANGE, "Belt coefficient piw"),
        ('belt_pil', parameters.pil, PIW_PIL_RANGE, "Belt coefficient pil"),
        ('starting_belt_pull_lb', parameters.starting_belt_pull_lb, STARTING_BELT_PULL_RANGE_LB,
         "Starting belt pull"),
        ('friction_coeff', parameters.friction_coeff, FRICTION_COEFF_RANGE, "Friction coefficient"),
    )
    for field_name, value, (low, high), label in checks:
        if not is_number(value) or not low <= value <= high:
            messages.append(_error(
                field_name, f"{field_name.upper()}_RANGE",
                f"{label} must be between {low:g} and {high:g} (got {value})"
            ))

    return messages


def _validate_belt(inputs: ConfigurationInputs, product_key: Optional[str]) -> List[ValidationIssue]:
    """Belt selection (belt products only) and belt minimum pulley"""
    messages = []
    if not requires_belt_validation(product_key):
        return messages

    has_coefficients = (
        (inputs.belt_piw_override is not None or inputs.belt_piw is not None)
        and (inputs.belt_pil_override is not None or inputs.belt_pil is not None)
    )
    if not inputs.belt_catalog_key and not has_coefficients:
        messages.append(_error(
            'belt_catalog_key', "BELT_REQUIRED",
            "Belt selection is required",
            suggestion="Select a belt from the catalog or enter PIW and PIL coefficients"
        ))

    minimum, _ = belt_minimum_pulley(inputs)
    if minimum is not None:
        for field_name, label, diameter in (
            ('drive_pulley_diameter_in', "Drive", inputs.drive_pulley_diameter_in),
            ('tail_pulley_diameter_in', "Tail", inputs.tail_pulley_diameter_in),
        ):
            if _positive(diameter) and diameter < minimum:
                messages.append(_warning(
                    field_name, "PULLEY_BELOW_BELT_MINIMUM",
                    f"{label} pulley {diameter:.2f}\" is below the belt minimum of {minimum:.2f}\"",
                    suggestion="Use a larger pulley or a more flexible belt"
                ))

    return messages


def _validate_material(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    if isinstance(inputs.material, BulkMaterial):
        return _validate_bulk_material(inputs.material, inputs.belt_width_in)
    return _validate_parts_material(inputs.material)


def _validate_parts_material(material: PartsMaterial) -> List[ValidationIssue]:
    """Discrete part dimensions, spacing, throughput and drop height"""
    messages = []

    for field_name, label in (
        ('part_weight_lb', "Part weight"),
        ('part_length_in', "Part length"),
        ('part_width_in', "Part width"),
    ):
        if not _positive(getattr(material, field_name)):
            messages.append(_error(field_name, "PART_DIMENSION_INVALID", f"{label} must be greater than 0"))

    if material.part_spacing_in is not None and material.part_spacing_in < 0:
        messages.append(_error('part_spacing_in', "PART_SPACING_NEGATIVE", "Part spacing must be >= 0"))
    if material.required_throughput_pph is not None and material.required_throughput_pph < 0:
        messages.append(_error(
            'required_throughput_pph', "THROUGHPUT_NEGATIVE", "Required throughput must be >= 0"
        ))
    if material.throughput_margin_pct is not None and material.throughput_margin_pct < 0:
        messages.append(_error(
            'throughput_margin_pct', "THROUGHPUT_MARGIN_NEGATIVE", "Throughput margin must be >= 0"
        ))

    drop = material.drop_height_in
    if drop is not None:
        if drop < 0:
            messages.append(_error('drop_height_in', "DROP_HEIGHT_NEGATIVE", "Drop height cannot be negative"))
        elif drop >= DROP_HEIGHT_WARNING_IN:
            messages.append(_warning(
                'drop_height_in', "DROP_HEIGHT_HIGH",
                "Drop height is high",
                suggestion="Consider impact or wear protection"
            ))

    return messages


def _validate_bulk_material(material: BulkMaterial, belt_width_in: Optional[float]) -> List[ValidationIssue]:
    """Flow inputs, density, lump sizes and surge feed"""
    messages = []

    if material.bulk_input_method == BulkInputMethod.VOLUME_FLOW:
        if not _positive(material.volume_flow_ft3_per_hr):
            messages.append(_error(
                'volume_flow_ft3_per_hr', "VOLUME_FLOW_REQUIRED",
                "Volume flow must be greater than 0 for volume-flow input"
            ))
        if not _positive(material.density_lbs_per_ft3):
            messages.append(_error(
                'density_lbs_per_ft3', "DENSITY_REQUIRED",
                "Bulk density must be greater than 0 for volume-flow input"
            ))
    else:
        if not _positive(material.mass_flow_lbs_per_hr):
            messages.append(_error(
                'mass_flow_lbs_per_hr', "MASS_FLOW_REQUIRED",
                "Mass flow must be greater than 0 for weight-flow input"
            ))
        if material.density_lbs_per_ft3 is None:
            messages.append(_warning(
                'density_lbs_per_ft3', "DENSITY_MISSING",
                "Bulk density not entered; volume flow cannot be derived"
            ))

    if material.density_source == DensitySource.ASSUMED_CLASS:
        messages.append(_warning(
            'density_source', "DENSITY_ASSUMED",
            "Bulk density is an assumed class value",
            suggestion="Confirm density with the customer before quoting"
        ))

    smallest = material.smallest_lump_size_in
    largest = material.largest_lump_size_in
    for field_name, value in (('smallest_lump_size_in', smallest), ('largest_lump_size_in', largest)):
        if value is not None and value < 0:
            messages.append(_error(field_name, "LUMP_SIZE_NEGATIVE", "Lump size must be >= 0"))
    if is_number(smallest) and is_number(largest) and smallest > largest:
        messages.append(_error(
            'smallest_lump_size_in', "LUMP_SIZE_ORDER",
            f"Smallest lump ({smallest}\") exceeds largest lump ({largest}\")"
        ))
    if _positive(largest) and _positive(belt_width_in) and largest > LUMP_BELT_WIDTH_RATIO_MAX * belt_width_in:
        messages.append(_warning(
            'largest_lump_size_in', "LUMP_SIZE_LARGE",
            f"Largest lump exceeds {LUMP_BELT_WIDTH_RATIO_MAX:.0%} of belt width",
            suggestion="Use a wider belt or add side guards"
        ))

    surge = material.surge_multiplier
    if surge is not None and surge < 1.0:
        messages.append(_error('surge_multiplier', "SURGE_MULTIPLIER_INVALID", "Surge multiplier must be >= 1.0"))
    elif surge is None and material.feed_behavior == FeedBehavior.SURGE:
        messages.append(_warning(
            'surge_multiplier', "SURGE_MULTIPLIER_MISSING",
            "Surge feed selected without a surge multiplier; design flow equals average flow"
        ))

    return messages


def _validate_environment(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Temperature class and fluids on the product"""
    messages = []

    if inputs.part_temperature_class == PartTemperatureClass.RED_HOT:
        messages.append(_error(
            'part_temperature_class', "RED_HOT_PARTS",
            "Do not use a belt conveyor for red hot parts"
        ))
    elif inputs.part_temperature_class == PartTemperatureClass.HOT:
        messages.append(_warning(
            'part_temperature_class', "HOT_PARTS",
            "Hot parts on belt",
            suggestion="Consider a high-temperature belt"
        ))

    if inputs.fluid_type == FluidType.CONSIDERABLE:
        messages.append(_warning(
            'fluid_type', "FLUID_CONSIDERABLE",
            "Considerable oil or liquid on product",
            suggestion="Consider a ribbed or specialty belt"
        ))
    elif inputs.fluid_type == FluidType.MINIMAL:
        messages.append(_info('fluid_type', "FLUID_MINIMAL", "Minimal residual oil present"))

    return messages


def _validate_side_loading(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Side loading against belt tracking"""
    messages = []
    if inputs.side_loading_direction in (None, SideLoadingDirection.NONE):
        return messages

    severity = inputs.side_loading_severity
    if severity == SideLoadingSeverity.HEAVY:
        if inputs.is_v_guided:
            messages.append(_warning(
                'side_loading_severity', "SIDE_LOADING_HEAVY",
                "Heavy side loading; confirm V-guide size and pulley groove",
            ))
        else:
            messages.append(_error(
                'belt_tracking_method', "SIDE_LOADING_NEEDS_V_GUIDE",
                "Heavy side loading requires V-guided tracking; crowned pulleys will not hold the belt",
                suggestion="Select V-guided belt tracking"
            ))
    elif severity == SideLoadingSeverity.MODERATE:
        messages.append(_warning(
            'side_loading_severity', "SIDE_LOADING_MODERATE",
            "Moderate side loading may require a V-guide for reliable tracking"
        ))

    return messages


def _validate_frame(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Frame height mode, construction and clearance"""
    messages = []

    if isinstance(inputs.frame_height, CustomFrame):
        height = inputs.frame_height.custom_frame_height_in
        if not is_number(height) or height < MIN_FRAME_HEIGHT_IN:
            messages.append(_error(
                'custom_frame_height_in', "FRAME_HEIGHT_TOO_LOW",
                f"Custom frame height must be at least {MIN_FRAME_HEIGHT_IN:.1f}\""
            ))
        elif height < DESIGN_REVIEW_FRAME_HEIGHT_IN:
            messages.append(_warning(
                'custom_frame_height_in', "FRAME_HEIGHT_DESIGN_REVIEW",
                f"Frame height below {DESIGN_REVIEW_FRAME_HEIGHT_IN:.1f}\" requires design review"
            ))

    if isinstance(inputs.frame_height, LowProfileFrame) and isinstance(inputs.cleats, CleatsEnabled):
        messages.append(_error(
            'frame_height_mode', "LOW_PROFILE_WITH_CLEATS",
            "Low profile frame requires snub rollers, which are incompatible with a cleated belt",
            suggestion="Use a standard frame height or remove cleats"
        ))

    construction = inputs.frame_construction
    if isinstance(construction, SheetMetalFrame) and construction.frame_sheet_metal_gauge is None:
        messages.append(_error(
            'frame_sheet_metal_gauge', "FRAME_GAUGE_REQUIRED",
            "Sheet metal frame construction requires a gauge selection"
        ))
    if isinstance(construction, StructuralChannelFrame) and construction.frame_structural_channel_series is None:
        messages.append(_error(
            'frame_structural_channel_series', "FRAME_CHANNEL_REQUIRED",
            "Structural channel frame construction requires a channel series"
        ))

    if inputs.frame_clearance_in is not None and inputs.frame_clearance_in < 0:
        messages.append(_error('frame_clearance_in', "FRAME_CLEARANCE_NEGATIVE", "Frame clearance must be >= 0"))

    return messages


def _validate_cleats(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Cleat geometry when cleats are enabled"""
    messages = []
    if not isinstance(inputs.cleats, CleatsEnabled):
        return messages
    cleats = inputs.cleats

    low, high = CLEAT_HEIGHT_RANGE_IN
    if not is_number(cleats.cleat_height_in) or not low <= cleats.cleat_height_in <= high:
        messages.append(_error(
            'cleat_height_in', "CLEAT_HEIGHT_RANGE",
            f"Cleat height must be between {low:g}\" and {high:g}\""
        ))

    low, high = CLEAT_SPACING_RANGE_IN
    if not is_number(cleats.cleat_spacing_in) or not low <= cleats.cleat_spacing_in <= high:
        messages.append(_error(
            'cleat_spacing_in', "CLEAT_SPACING_RANGE",
            f"Cleat spacing must be between {low:g}\" and {high:g}\""
        ))
    elif isinstance(inputs.material, PartsMaterial):
        travel = travel_dimension(inputs.material)
        if is_number(travel) and cleats.cleat_spacing_in < travel:
            messages.append(_warning(
                'cleat_spacing_in', "CLEAT_SPACING_BELOW_PART",
                f"Cleat spacing {cleats.cleat_spacing_in:g}\" is shorter than the part ({travel:g}\")"
            ))

    offset = cleats.cleat_edge_offset_in
    if not 0 <= offset <= CLEAT_EDGE_OFFSET_MAX_IN:
        messages.append(_error(
            'cleat_edge_offset_in', "CLEAT_OFFSET_RANGE",
            f"Cleat edge offset must be between 0\" and {CLEAT_EDGE_OFFSET_MAX_IN:g}\""
        ))
    elif _positive(inputs.belt_width_in) and offset > inputs.belt_width_in / 2:
        messages.append(_warning(
            'cleat_edge_offset_in', "CLEAT_OFFSET_WIDE",
            "Cleat edge offset exceeds half the belt width; cleats will have no length"
        ))

    if is_number(cleats.cleat_height_in):
        messages.append(_info(
            'cleat_height_in', "CLEATS_ADD_FRAME_HEIGHT",
            f"Cleats add {2 * cleats.cleat_height_in:g}\" to the required frame height"
        ))

    return messages


def _validate_shaft(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Manual shaft diameters within the absolute bounds"""
    messages = []
    if not isinstance(inputs.shaft, ManualShaft):
        return messages

    for field_name, value in (
        ('drive_shaft_diameter_in', inputs.shaft.drive_shaft_diameter_in),
        ('tail_shaft_diameter_in', inputs.shaft.tail_shaft_diameter_in),
    ):
        if value is None:
            messages.append(_error(field_name, "SHAFT_DIAMETER_REQUIRED", "Manual shaft mode requires a diameter"))
        elif not MANUAL_SHAFT_MIN_IN <= value <= MANUAL_SHAFT_MAX_IN:
            messages.append(_error(
                field_name, "SHAFT_DIAMETER_RANGE",
                f"Shaft diameter must be between {MANUAL_SHAFT_MIN_IN:g}\" and {MANUAL_SHAFT_MAX_IN:g}\""
            ))

    return messages


def _validate_support(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Leg and caster selections, TOB at the reference end"""
    messages = []
    support = inputs.support
    if not isinstance(support, FloorSupport):
        return messages

    if support.has_legs and not support.leg_model_key:
        messages.append(_error('leg_model_key', "LEG_MODEL_REQUIRED", "Select a leg model for floor-standing ends"))

    if support.has_casters:
        rigid = support.caster_rigid_qty or 0
        swivel = support.caster_swivel_qty or 0
        if rigid + swivel <= 0:
            messages.append(_error(
                'caster_rigid_qty', "CASTER_QTY_REQUIRED",
                "Caster support requires at least one rigid or swivel caster"
            ))
        if rigid > 0 and not support.caster_rigid_model_key:
            messages.append(_error('caster_rigid_model_key', "CASTER_MODEL_REQUIRED", "Select a rigid caster model"))
        if swivel > 0 and not support.caster_swivel_model_key:
            messages.append(_error('caster_swivel_model_key', "CASTER_MODEL_REQUIRED", "Select a swivel caster model"))

    if support.reference_end == ReferenceEnd.DRIVE:
        field_name, tob = 'drive_tob_in', support.drive_tob_in
    else:
        field_name, tob = 'tail_tob_in', support.tail_tob_in
    if not _positive(tob):
        messages.append(_error(
            field_name, "TOB_REQUIRED",
            f"Top of belt height is required at the {support.reference_end.value} end"
        ))

    return messages


def _validate_safety(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Guarding, lacing and duty cycle"""
    messages = []

    if inputs.finger_safe and inputs.end_guards in (None, "None"):
        messages.append(_warning(
            'end_guards', "FINGER_SAFE_END_GUARDS",
            "Finger safety may require end guards depending on layout"
        ))
    if inputs.finger_safe and not inputs.bottom_covers:
        messages.append(_warning(
            'bottom_covers', "FINGER_SAFE_BOTTOM_COVERS",
            "Bottom covers may be required to achieve finger-safe access underneath"
        ))
    if inputs.lacing_style == LacingStyle.CLIPPER:
        messages.append(_warning(
            'lacing_style', "CLIPPER_LACING",
            "Clipper lacing may interfere with end guards due to protrusion"
        ))
    if (inputs.start_stop_application and inputs.cycle_time_seconds is not None
            and inputs.cycle_time_seconds < MIN_START_STOP_CYCLE_S):
        messages.append(_warning(
            'cycle_time_seconds', "SHORT_CYCLE_TIME",
            "Frequent start/stop applications may require a higher-duty gearbox"
        ))

    return messages


def _validate_tube_geometry(inputs: ConfigurationInputs) -> List[ValidationIssue]:
    """Pulley tube wall must leave a bore"""
    messages = []
    od = inputs.pulley_tube_od_in
    wall = inputs.pulley_tube_wall_in
    if is_number(od) and is_number(wall) and wall >= od / 2:
        messages.append(_error(
            'pulley_tube_wall_in', "TUBE_WALL_EXCEEDS_RADIUS",
            f"Tube wall ({wall}\") must be less than half the tube OD ({od}\")"
        ))
    return messages
