"""
Conveyorcalc IO - configuration record migration and typed inputs.

Example:
    >>> from conveyorcalc.io import migrate_inputs, ConfigurationInputs
    >>>
    >>> record = migrate_inputs({"conveyor_length_cc_in": 120, "belt_width_in": 18})
    >>> inputs = ConfigurationInputs.from_record(record)
"""

from .schema import (
    SCHEMA_VERSION,
    MigrationError,
    migrate_inputs,
    detect_schema_version,
    derive_support_method,
    is_legs_required,
)

from .loaders import (
    ConfigurationInputs,
    # Tagged variants
    LengthAngleGeometry,
    HorizontalAngleGeometry,
    HorizontalTobGeometry,
    BeltSpeedMode,
    DriveRpmMode,
    ShaftMountedDrive,
    BottomMountDrive,
    StandardFrame,
    LowProfileFrame,
    CustomFrame,
    SheetMetalFrame,
    StructuralChannelFrame,
    SpecialFrame,
    CleatsDisabled,
    CleatsEnabled,
    ExternalSupport,
    FloorSupport,
    PartsMaterial,
    BulkMaterial,
    CalculatedShaft,
    ManualShaft,
)

__all__ = [
    # Migration
    "SCHEMA_VERSION",
    "MigrationError",
    "migrate_inputs",
    "detect_schema_version",
    "derive_support_method",
    "is_legs_required",

    # Typed inputs
    "ConfigurationInputs",
    "LengthAngleGeometry",
    "HorizontalAngleGeometry",
    "HorizontalTobGeometry",
    "BeltSpeedMode",
    "DriveRpmMode",
    "ShaftMountedDrive",
    "BottomMountDrive",
    "StandardFrame",
    "LowProfileFrame",
    "CustomFrame",
    "SheetMetalFrame",
    "StructuralChannelFrame",
    "SpecialFrame",
    "CleatsDisabled",
    "CleatsEnabled",
    "ExternalSupport",
    "FloorSupport",
    "PartsMaterial",
    "BulkMaterial",
    "CalculatedShaft",
    "ManualShaft",
]
