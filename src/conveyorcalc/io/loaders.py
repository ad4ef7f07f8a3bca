"""
Typed configuration inputs.

ConfigurationInputs is the validated, typed view of a migrated configuration
record. Each configuration sub-group whose fields depend on a mode is a
tagged variant: a discriminated union whose members carry only the fields
valid for that mode, so a formula can never read a stale sibling field left
behind by a mode switch.

Build one with ConfigurationInputs.from_record(migrate_inputs(raw)). The flat
record keys are lifted into the nested variants by a before-validator, so
records, dicts and already-typed models are all accepted.

Uses Pydantic for automatic validation and enum coercion.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..enums import (
    ApplicationClass,
    BedType,
    BeltConstruction,
    BeltTrackingMethod,
    BulkInputMethod,
    CleatMethod,
    DensitySource,
    DriveHand,
    DriveLocation,
    FeedBehavior,
    FluidType,
    GearmotorOrientation,
    LacingStyle,
    PartOrientation,
    PartTemperatureClass,
    ReferenceEnd,
    SheetMetalGauge,
    SideLoadingDirection,
    SideLoadingSeverity,
    StructuralChannelSeries,
    SupportType,
    TrackingPreference,
)
from .schema import derive_support_method


class _Variant(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)


# ============================================================================
# Geometry
# ============================================================================

class LengthAngleGeometry(_Variant):
    """Length C-C and incline entered; horizontal run derived."""
    mode: Literal["L_ANGLE"] = "L_ANGLE"


class HorizontalAngleGeometry(_Variant):
    """Horizontal run and incline entered; length C-C derived."""
    mode: Literal["H_ANGLE"] = "H_ANGLE"
    horizontal_run_in: Optional[float] = None


class HorizontalTobGeometry(_Variant):
    """Horizontal run and both top-of-belt heights entered; incline and length derived."""
    mode: Literal["H_TOB"] = "H_TOB"
    horizontal_run_in: Optional[float] = None
    tail_tob_in: Optional[float] = None
    drive_tob_in: Optional[float] = None


GeometrySpec = Annotated[
    Union[LengthAngleGeometry, HorizontalAngleGeometry, HorizontalTobGeometry], Field(discriminator='mode')
]


# ============================================================================
# Speed
# ============================================================================

class BeltSpeedMode(_Variant):
    """Belt speed entered; drive shaft RPM derived."""
    mode: Literal["belt_speed"] = "belt_speed"
    belt_speed_fpm: Optional[float] = None


class DriveRpmMode(_Variant):
    """Drive shaft RPM entered; belt speed derived."""
    mode: Literal["drive_rpm"] = "drive_rpm"
    drive_rpm: Optional[float] = None


SpeedSpec = Annotated[Union[BeltSpeedMode, DriveRpmMode], Field(discriminator='mode')]


# ============================================================================
# Drive arrangement
# ============================================================================

class ShaftMountedDrive(_Variant):
    """Gearmotor directly on the drive shaft (no chain stage)."""
    mode: Literal["shaft_mounted"] = "shaft_mounted"


class BottomMountDrive(_Variant):
    """Gearmotor under the frame driving the shaft through chain and sprockets."""
    mode: Literal["bottom_mount"] = "bottom_mount"
    gm_sprocket_teeth: Optional[float] = None  # Driver; whole teeth checked by the validator
    drive_shaft_sprocket_teeth: Optional[float] = None  # Driven


DriveSpec = Annotated[Union[ShaftMountedDrive, BottomMountDrive], Field(discriminator='mode')]


# ============================================================================
# Frame
# ============================================================================

class StandardFrame(_Variant):
    mode: Literal["standard"] = "standard"


class LowProfileFrame(_Variant):
    mode: Literal["low_profile"] = "low_profile"


class CustomFrame(_Variant):
    mode: Literal["custom"] = "custom"
    custom_frame_height_in: Optional[float] = None


FrameHeightSpec = Annotated[
    Union[StandardFrame, LowProfileFrame, CustomFrame], Field(discriminator='mode')
]


class SheetMetalFrame(_Variant):
    mode: Literal["sheet_metal"] = "sheet_metal"
    frame_sheet_metal_gauge: Optional[SheetMetalGauge] = None


class StructuralChannelFrame(_Variant):
    mode: Literal["structural_channel"] = "structural_channel"
    frame_structural_channel_series: Optional[StructuralChannelSeries] = None


class SpecialFrame(_Variant):
    mode: Literal["special"] = "special"


FrameConstructionSpec = Annotated[
    Union[SheetMetalFrame, StructuralChannelFrame, SpecialFrame], Field(discriminator='mode')
]


# ============================================================================
# Cleats
# ============================================================================

class CleatsDisabled(_Variant):
    mode: Literal["none"] = "none"


class CleatsEnabled(_Variant):
    mode: Literal["cleated"] = "cleated"
    cleat_height_in: Optional[float] = None
    cleat_spacing_in: Optional[float] = None
    cleat_edge_offset_in: float = 0.0
    cleat_method: Optional[CleatMethod] = None


CleatSpec = Annotated[Union[CleatsDisabled, CleatsEnabled], Field(discriminator='mode')]


# ============================================================================
# Support
# ============================================================================

class ExternalSupport(_Variant):
    """Conveyor carried by customer equipment at both ends."""
    mode: Literal["external"] = "external"


class FloorSupport(_Variant):
    """At least one end stands on the floor (legs and/or casters)."""
    mode: Literal["legs", "casters", "floor_supported"]
    tail_support_type: SupportType = SupportType.EXTERNAL
    drive_support_type: SupportType = SupportType.EXTERNAL
    leg_model_key: Optional[str] = None
    caster_rigid_qty: Optional[int] = None
    caster_rigid_model_key: Optional[str] = None
    caster_swivel_qty: Optional[int] = None
    caster_swivel_model_key: Optional[str] = None
    reference_end: ReferenceEnd = ReferenceEnd.TAIL
    tail_tob_in: Optional[float] = None
    drive_tob_in: Optional[float] = None

    @property
    def has_legs(self) -> bool:
        return SupportType.LEGS in (self.tail_support_type, self.drive_support_type)

    @property
    def has_casters(self) -> bool:
        return SupportType.CASTERS in (self.tail_support_type, self.drive_support_type)


SupportSpec = Annotated[Union[ExternalSupport, FloorSupport], Field(discriminator='mode')]


# ============================================================================
# Material
# ============================================================================

class PartsMaterial(_Variant):
    """Discrete parts."""
    mode: Literal["PARTS"] = "PARTS"
    part_weight_lb: Optional[float] = None
    part_length_in: Optional[float] = None
    part_width_in: Optional[float] = None
    part_spacing_in: Optional[float] = None
    orientation: PartOrientation = PartOrientation.LENGTHWISE
    required_throughput_pph: Optional[float] = None
    throughput_margin_pct: Optional[float] = None
    drop_height_in: Optional[float] = None


class BulkMaterial(_Variant):
    """Loose bulk material specified by weight or volume flow."""
    mode: Literal["BULK"] = "BULK"
    bulk_input_method: BulkInputMethod = BulkInputMethod.WEIGHT_FLOW
    mass_flow_lbs_per_hr: Optional[float] = None
    volume_flow_ft3_per_hr: Optional[float] = None
    density_lbs_per_ft3: Optional[float] = None
    density_source: Optional[DensitySource] = None
    smallest_lump_size_in: Optional[float] = None
    largest_lump_size_in: Optional[float] = None
    feed_behavior: FeedBehavior = FeedBehavior.CONTINUOUS
    surge_multiplier: Optional[float] = None


MaterialSpec = Annotated[Union[PartsMaterial, BulkMaterial], Field(discriminator='mode')]


# ============================================================================
# Shaft
# ============================================================================

class CalculatedShaft(_Variant):
    mode: Literal["calculated"] = "calculated"


class ManualShaft(_Variant):
    mode: Literal["manual"] = "manual"
    drive_shaft_diameter_in: Optional[float] = None
    tail_shaft_diameter_in: Optional[float] = None


ShaftSpec = Annotated[Union[CalculatedShaft, ManualShaft], Field(discriminator='mode')]


# Variant members of each tagged group
_GROUP_MEMBERS: Dict[str, tuple] = {
    "geometry": (LengthAngleGeometry, HorizontalAngleGeometry, HorizontalTobGeometry),
    "speed": (BeltSpeedMode, DriveRpmMode),
    "drive": (ShaftMountedDrive, BottomMountDrive),
    "frame_height": (StandardFrame, LowProfileFrame, CustomFrame),
    "frame_construction": (SheetMetalFrame, StructuralChannelFrame, SpecialFrame),
    "cleats": (CleatsDisabled, CleatsEnabled),
    "support": (ExternalSupport, FloorSupport),
    "material": (PartsMaterial, BulkMaterial),
    "shaft": (CalculatedShaft, ManualShaft),
}


def _group_fields(members) -> set:
    names = set()
    for member in members:
        names.update(member.model_fields)
    names.discard("mode")
    return names


def _lift(record: Dict[str, Any], group: str, mode: Any) -> Dict[str, Any]:
    """Collect the flat record fields belonging to one variant group."""
    lifted = {"mode": mode}
    for name in _group_fields(_GROUP_MEMBERS[group]):
        if name in record and record[name] is not None:
            lifted[name] = record[name]
    return lifted


class ConfigurationInputs(BaseModel):
    """
    One conveyor design request, after migration.

    Common fields sit at the top level; mode-dependent groups are tagged
    variants (geometry, speed, drive, frame_height, frame_construction,
    cleats, support, material, shaft).

    In the H_ANGLE and H_TOB geometry modes conveyor_length_cc_in (and, for
    H_TOB, conveyor_incline_deg) are derived; the calculator fills them in
    with normalize_geometry() before any formula reads them.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    # Geometry
    conveyor_length_cc_in: Optional[float] = None
    belt_width_in: Optional[float] = None
    conveyor_incline_deg: float = 0.0
    drive_pulley_diameter_in: Optional[float] = None
    tail_pulley_diameter_in: Optional[float] = None

    # Speed and drive
    motor_rpm: Optional[float] = None
    drive_location: Optional[DriveLocation] = None
    drive_hand: Optional[DriveHand] = None
    gearmotor_orientation: Optional[GearmotorOrientation] = None
    actual_gearmotor_output_rpm: Optional[float] = None

    # Belt selection
    bed_type: Optional[BedType] = None
    belt_tracking_method: BeltTrackingMethod = BeltTrackingMethod.CROWNED
    v_guide_key: Optional[str] = None
    belt_catalog_key: Optional[str] = None
    belt_piw: Optional[float] = None  # From catalog
    belt_pil: Optional[float] = None  # From catalog
    belt_piw_override: Optional[float] = None
    belt_pil_override: Optional[float] = None
    belt_min_pulley_dia_no_vguide_in: Optional[float] = None
    belt_min_pulley_dia_with_vguide_in: Optional[float] = None
    lacing_style: Optional[LacingStyle] = None

    # Advanced overrides
    friction_coeff: Optional[float] = None
    safety_factor: Optional[float] = None
    starting_belt_pull_lb: Optional[float] = None
    frame_clearance_in: Optional[float] = None

    # Application
    side_loading_direction: Optional[SideLoadingDirection] = None
    side_loading_severity: Optional[SideLoadingSeverity] = None
    part_temperature_class: Optional[PartTemperatureClass] = None
    fluid_type: Optional[FluidType] = None

    # Belt tracking recommendation
    application_class: Optional[ApplicationClass] = None
    belt_construction: Optional[BeltConstruction] = None
    reversing_operation: bool = False
    disturbance_side_loading: bool = False
    disturbance_load_variability: bool = False
    disturbance_environment: bool = False
    disturbance_installation_risk: bool = False
    tracking_preference: TrackingPreference = TrackingPreference.AUTO

    # Safety / guarding
    finger_safe: bool = False
    end_guards: Optional[str] = None
    bottom_covers: bool = False
    start_stop_application: bool = False
    cycle_time_seconds: Optional[float] = None

    # Pulley tube geometry (optional PCI check)
    pulley_tube_od_in: Optional[float] = None
    pulley_tube_wall_in: Optional[float] = None
    hub_centers_in: Optional[float] = None
    enforce_pci_checks: bool = False

    # Tagged variants
    geometry: GeometrySpec = Field(default_factory=LengthAngleGeometry)
    speed: SpeedSpec = Field(default_factory=BeltSpeedMode)
    drive: DriveSpec = Field(default_factory=ShaftMountedDrive)
    frame_height: FrameHeightSpec = Field(default_factory=StandardFrame)
    frame_construction: FrameConstructionSpec = Field(default_factory=SheetMetalFrame)
    cleats: CleatSpec = Field(default_factory=CleatsDisabled)
    support: SupportSpec = Field(default_factory=ExternalSupport)
    material: MaterialSpec = Field(default_factory=PartsMaterial)
    shaft: ShaftSpec = Field(default_factory=CalculatedShaft)

    @model_validator(mode='before')
    @classmethod
    def lift_mode_groups(cls, data):
        """Build tagged variants from flat record keys when not already nested."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if "geometry" not in data:
            data["geometry"] = _lift(data, "geometry", data.get("geometry_mode", "L_ANGLE"))
        if "speed" not in data:
            mode = data.get("speed_mode", "belt_speed")
            speed = _lift(data, "speed", mode)
            if mode == "drive_rpm" and data.get("drive_rpm_input") is not None:
                speed["drive_rpm"] = data["drive_rpm_input"]
            data["speed"] = speed
        if "drive" not in data:
            data["drive"] = _lift(data, "drive", data.get("gearmotor_mounting_style", "shaft_mounted"))
        if "frame_height" not in data:
            data["frame_height"] = _lift(data, "frame_height", data.get("frame_height_mode", "standard"))
        if "frame_construction" not in data:
            data["frame_construction"] = _lift(
                data, "frame_construction", data.get("frame_construction_type", "sheet_metal")
            )
        if "cleats" not in data:
            enabled = bool(data.get("cleats_enabled", False))
            data["cleats"] = _lift(data, "cleats", "cleated" if enabled else "none")
        if "support" not in data:
            method = derive_support_method(
                data.get("tail_support_type"), data.get("drive_support_type")
            )
            data["support"] = _lift(data, "support", method)
        if "material" not in data:
            data["material"] = _lift(data, "material", data.get("material_form", "PARTS"))
        if "shaft" not in data:
            data["shaft"] = _lift(data, "shaft", data.get("shaft_diameter_mode", "calculated"))
        return data

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ConfigurationInputs":
        """Build typed inputs from a migrated flat record."""
        return cls.model_validate(record)

    # Convenience views used across the pipeline

    @property
    def geometry_mode(self) -> str:
        return self.geometry.mode

    @property
    def cleats_enabled(self) -> bool:
        return isinstance(self.cleats, CleatsEnabled)

    @property
    def is_bottom_mount(self) -> bool:
        return isinstance(self.drive, BottomMountDrive)

    @property
    def is_v_guided(self) -> bool:
        return self.belt_tracking_method == BeltTrackingMethod.V_GUIDED

    @property
    def legs_required(self) -> bool:
        return isinstance(self.support, FloorSupport)

    @property
    def support_method(self) -> str:
        return self.support.mode

    @property
    def largest_pulley_diameter_in(self) -> Optional[float]:
        diameters = [d for d in (self.drive_pulley_diameter_in, self.tail_pulley_diameter_in) if d is not None]
        return max(diameters) if diameters else None

