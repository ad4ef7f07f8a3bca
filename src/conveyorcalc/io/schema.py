"""
Configuration record schema versioning and migration.

Configuration records are persisted for years and reloaded into newer
releases. migrate_inputs() brings any historical record up to the current
shape: it reconciles pulley diameters, back-fills mode fields (speed and
geometry), maps retired support options onto the per-end support pair,
prunes fields that belong to an inactive mode and strips keys that no
longer exist.

The migration is a pure function of the record and is idempotent:

    migrate_inputs(migrate_inputs(x)) == migrate_inputs(x)

Records are flat dicts keyed by field name. The typed, tagged-variant view is
built from the migrated record by ConfigurationInputs.from_record().
"""

import copy
import logging
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "2.0"
MIN_SUPPORTED_VERSION = "1.0"

# Pulley diameter for records that carry none at all
PULLEY_DIAMETER_DEFAULT_IN = 4.0


class MigrationError(ValueError):
    """Raised when a stored record cannot be interpreted."""


# Fields whose values must be numbers after migration
NUMERIC_FIELDS = (
    "conveyor_length_cc_in",
    "horizontal_run_in",
    "belt_width_in",
    "conveyor_incline_deg",
    "pulley_diameter_in",
    "drive_pulley_diameter_in",
    "tail_pulley_diameter_in",
    "belt_speed_fpm",
    "drive_rpm",
    "drive_rpm_input",
    "motor_rpm",
    "gm_sprocket_teeth",
    "drive_shaft_sprocket_teeth",
    "custom_frame_height_in",
    "frame_clearance_in",
    "cleat_height_in",
    "cleat_spacing_in",
    "cleat_edge_offset_in",
    "part_weight_lb",
    "part_length_in",
    "part_width_in",
    "part_spacing_in",
    "drop_height_in",
    "required_throughput_pph",
    "throughput_margin_pct",
    "mass_flow_lbs_per_hr",
    "volume_flow_ft3_per_hr",
    "density_lbs_per_ft3",
    "smallest_lump_size_in",
    "largest_lump_size_in",
    "surge_multiplier",
    "belt_piw",
    "belt_pil",
    "belt_piw_override",
    "belt_pil_override",
    "belt_min_pulley_dia_no_vguide_in",
    "belt_min_pulley_dia_with_vguide_in",
    "friction_coeff",
    "safety_factor",
    "starting_belt_pull_lb",
    "drive_shaft_diameter_in",
    "tail_shaft_diameter_in",
    "pulley_tube_od_in",
    "pulley_tube_wall_in",
    "hub_centers_in",
    "tail_tob_in",
    "drive_tob_in",
    "caster_rigid_qty",
    "caster_swivel_qty",
    "cycle_time_seconds",
    "actual_gearmotor_output_rpm",
)

# Keys retired from the schema, removed without error
RETIRED_FIELDS = (
    "support_option",
    "support_method",
    "include_legs",
    "include_casters",
    "height_input_mode",
    "cleats_mode",
    "tail_matches_drive",
    "conveyor_width_in",
    "tail_support_type_legacy",
    "drive_support_type_legacy",
    "pulley_surface_type",
)

TOB_FIELDS = ("tail_tob_in", "drive_tob_in")
LEG_FIELDS = ("leg_model_key",)
CASTER_FIELDS = (
    "caster_rigid_qty",
    "caster_rigid_model_key",
    "caster_swivel_qty",
    "caster_swivel_model_key",
)
CLEAT_FIELDS = (
    "cleat_height_in",
    "cleat_spacing_in",
    "cleat_edge_offset_in",
    "cleat_method",
)
PARTS_FIELDS = (
    "part_weight_lb",
    "part_length_in",
    "part_width_in",
    "part_spacing_in",
    "orientation",
    "required_throughput_pph",
    "throughput_margin_pct",
    "drop_height_in",
)
BULK_FIELDS = (
    "bulk_input_method",
    "mass_flow_lbs_per_hr",
    "volume_flow_ft3_per_hr",
    "density_lbs_per_ft3",
    "density_source",
    "smallest_lump_size_in",
    "largest_lump_size_in",
    "feed_behavior",
    "surge_multiplier",
)

# Legacy display strings -> current enum values
_LEGACY_VALUES = {
    "belt_tracking_method": {"Crowned": "crowned", "V-guided": "v_guided", "V-Guided": "v_guided"},
    "frame_height_mode": {"Standard": "standard", "Low Profile": "low_profile", "Custom": "custom"},
    "shaft_diameter_mode": {"Calculated": "calculated", "Manual": "manual"},
    "gearmotor_mounting_style": {"shaft_mount": "shaft_mounted", "bottom_mount_chain": "bottom_mount"},
    "bed_type": {"Slider Bed": "slider_bed", "Roller Bed": "roller_bed"},
}

_SUPPORT_OPTION_MAP = {
    "Floor Mounted": "legs",
    "Suspended": "external",
    "Integrated Frame": "external",
}


def detect_schema_version(data: Dict) -> str:
    """
    Detect the schema version of a configuration record.

    Records written before versioning carry no marker and are treated as 1.0.
    """
    version = data.get("schema_version")
    if version is None:
        return MIN_SUPPORTED_VERSION
    return str(version)


def _version_tuple(v: str):
    try:
        return tuple(int(x) for x in v.split("."))
    except ValueError:
        raise MigrationError(f"Unrecognized schema version: {v!r}")


def derive_support_method(tail_support: Optional[str], drive_support: Optional[str]) -> str:
    """
    Collapse the per-end support pair into one support method.

    external at both ends -> "external"; legs only -> "legs"; casters only ->
    "casters"; legs and casters mixed -> "floor_supported".
    """
    ends = {tail_support or "external", drive_support or "external"}
    ends.discard("external")
    if not ends:
        return "external"
    if ends == {"legs"}:
        return "legs"
    if ends == {"casters"}:
        return "casters"
    return "floor_supported"


def is_legs_required(data: Dict) -> bool:
    """True when either end stands on the floor (legs or casters)."""
    return derive_support_method(
        data.get("tail_support_type"), data.get("drive_support_type")
    ) != "external"


def migrate_inputs(raw: Any) -> Dict[str, Any]:
    """
    Upgrade a possibly-legacy configuration record to the current schema.

    Returns a new dict - the original record is not modified.

    Args:
        raw: Configuration record (dict) as stored or as sent by a caller

    Returns:
        Migrated record (new dict)

    Raises:
        MigrationError: If the record is not a mapping, carries an
            unsupported schema version, or holds non-numeric text in a
            numeric field
    """
    if not isinstance(raw, dict):
        raise MigrationError(
            f"Configuration record must be a mapping, got {type(raw).__name__}"
        )

    # Don't modify original
    data = copy.deepcopy(raw)

    current_version = detect_schema_version(data)
    current = _version_tuple(current_version)
    if current > _version_tuple(SCHEMA_VERSION):
        raise MigrationError(
            f"Cannot read schema {current_version}; this release supports up to {SCHEMA_VERSION}."
        )
    if current < _version_tuple(MIN_SUPPORTED_VERSION):
        raise MigrationError(
            f"Schema version {current_version} is too old. "
            f"Minimum supported version is {MIN_SUPPORTED_VERSION}."
        )

    # Null means "not entered"
    data = {k: v for k, v in data.items() if v is not None}

    _coerce_numeric_fields(data)
    _normalize_legacy_values(data)
    _rename_legacy_keys(data)
    _migrate_pulley_diameters(data)
    _migrate_speed_mode(data)
    _migrate_support(data)
    _apply_mode_defaults(data)
    _prune_inactive_fields(data)
    _strip_retired_fields(data)

    if current < _version_tuple(SCHEMA_VERSION):
        logger.info(f"Migrated configuration record from schema {current_version} to {SCHEMA_VERSION}")
        data["_upgraded_from"] = current_version
    data["schema_version"] = SCHEMA_VERSION
    return data


def _coerce_numeric_fields(data: Dict) -> None:
    """Convert numeric text to float; reject anything else that isn't a number."""
    for key in NUMERIC_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool):
            raise MigrationError(f"Field '{key}' must be numeric, got a boolean")
        if isinstance(value, (int, float)):
            continue
        if isinstance(value, str):
            text = value.strip()
            if text == "":
                del data[key]
                continue
            try:
                data[key] = float(text)
            except ValueError:
                raise MigrationError(f"Field '{key}' must be numeric, got {value!r}")
            continue
        raise MigrationError(f"Field '{key}' must be numeric, got {type(value).__name__}")


def _normalize_legacy_values(data: Dict) -> None:
    for key, mapping in _LEGACY_VALUES.items():
        value = data.get(key)
        if isinstance(value, str) and value in mapping:
            data[key] = mapping[value]


def _rename_legacy_keys(data: Dict) -> None:
    if "conveyor_width_in" in data and "belt_width_in" not in data:
        data["belt_width_in"] = data["conveyor_width_in"]


def _migrate_pulley_diameters(data: Dict) -> None:
    """
    Reconcile drive/tail pulley diameters.

    - Neither present: both from the legacy single diameter (default 4.0")
    - One present: mirror it to the other
    - tail_matches_drive true: tail = drive, whatever tail held before
    """
    drive = data.get("drive_pulley_diameter_in")
    tail = data.get("tail_pulley_diameter_in")

    if drive is None and tail is None:
        legacy = data.get("pulley_diameter_in", PULLEY_DIAMETER_DEFAULT_IN)
        data["drive_pulley_diameter_in"] = legacy
        data["tail_pulley_diameter_in"] = legacy
    elif drive is None:
        data["drive_pulley_diameter_in"] = tail
    elif tail is None:
        data["tail_pulley_diameter_in"] = drive

    if data.get("tail_matches_drive") is True:
        data["tail_pulley_diameter_in"] = data["drive_pulley_diameter_in"]

    # Legacy readers still look at the single diameter
    data["pulley_diameter_in"] = data["drive_pulley_diameter_in"]


def _migrate_speed_mode(data: Dict) -> None:
    """
    Back-fill speed_mode and keep the legacy drive_rpm field mirrored.

    Records predating speed_mode that carry a positive drive_rpm were
    calculated from drive RPM and keep that behavior.
    """
    if "speed_mode" not in data:
        legacy_rpm = data.get("drive_rpm")
        if legacy_rpm is not None and legacy_rpm > 0:
            data["speed_mode"] = "drive_rpm"
            data["drive_rpm_input"] = legacy_rpm
        else:
            data["speed_mode"] = "belt_speed"

    if data["speed_mode"] == "drive_rpm":
        if "drive_rpm_input" not in data and "drive_rpm" in data:
            data["drive_rpm_input"] = data["drive_rpm"]
        if "drive_rpm_input" in data:
            data["drive_rpm"] = data["drive_rpm_input"]
        else:
            data.pop("drive_rpm", None)
        data.pop("belt_speed_fpm", None)
    else:
        data.pop("drive_rpm_input", None)
        data.pop("drive_rpm", None)


def _migrate_support(data: Dict) -> None:
    """Map retired single-value support fields onto the per-end support pair."""
    option = data.get("support_option")
    if option is not None and "tail_support_type" not in data and "drive_support_type" not in data:
        end_type = _SUPPORT_OPTION_MAP.get(option)
        if end_type is None:
            logger.warning(f"Unknown legacy support_option {option!r}, assuming external support")
            end_type = "external"
        data["tail_support_type"] = end_type
        data["drive_support_type"] = end_type

    method = data.get("support_method")
    if method is not None and "tail_support_type" not in data and "drive_support_type" not in data:
        if method == "floor_supported":
            include_legs = data.get("include_legs", True)
            include_casters = data.get("include_casters", False)
            if include_legs and include_casters:
                data["tail_support_type"], data["drive_support_type"] = "legs", "casters"
            elif include_casters:
                data["tail_support_type"] = data["drive_support_type"] = "casters"
            else:
                data["tail_support_type"] = data["drive_support_type"] = "legs"
        elif method in ("legs", "casters", "external"):
            data["tail_support_type"] = data["drive_support_type"] = method

    data.setdefault("tail_support_type", "external")
    data.setdefault("drive_support_type", "external")


def _apply_mode_defaults(data: Dict) -> None:
    if "cleats_enabled" not in data:
        data["cleats_enabled"] = data.get("cleats_mode") == "cleated"
    data["cleats_enabled"] = bool(data["cleats_enabled"])

    data.setdefault("geometry_mode", "L_ANGLE")
    data.setdefault("material_form", "PARTS")
    data.setdefault("frame_height_mode", "standard")
    data.setdefault("gearmotor_mounting_style", "shaft_mounted")
    data.setdefault("shaft_diameter_mode", "calculated")
    data.setdefault("belt_tracking_method", "crowned")

    construction = data.setdefault("frame_construction_type", "sheet_metal")
    if construction == "sheet_metal":
        data.setdefault("frame_sheet_metal_gauge", "12_GA")


def _drop(data: Dict, keys: Iterable[str]) -> None:
    for key in keys:
        data.pop(key, None)


def _prune_inactive_fields(data: Dict) -> None:
    """Remove fields that only apply to a mode that is not active."""
    geometry_mode = data["geometry_mode"]
    if geometry_mode == "L_ANGLE":
        # Derived from length and incline in this mode
        data.pop("horizontal_run_in", None)

    legs_required = is_legs_required(data)
    if not legs_required:
        data.pop("reference_end", None)
        if geometry_mode != "H_TOB":
            _drop(data, TOB_FIELDS)

    ends = {data.get("tail_support_type"), data.get("drive_support_type")}
    if "legs" not in ends:
        _drop(data, LEG_FIELDS)
    if "casters" not in ends:
        _drop(data, CASTER_FIELDS)

    if not data["cleats_enabled"]:
        _drop(data, CLEAT_FIELDS)

    if data["frame_height_mode"] != "custom":
        data.pop("custom_frame_height_in", None)

    construction = data["frame_construction_type"]
    if construction != "sheet_metal":
        data.pop("frame_sheet_metal_gauge", None)
    if construction != "structural_channel":
        data.pop("frame_structural_channel_series", None)

    if data["gearmotor_mounting_style"] != "bottom_mount":
        _drop(data, ("gm_sprocket_teeth", "drive_shaft_sprocket_teeth"))

    if data["shaft_diameter_mode"] != "manual":
        _drop(data, ("drive_shaft_diameter_in", "tail_shaft_diameter_in"))

    if data["material_form"] == "BULK":
        _drop(data, PARTS_FIELDS)
    else:
        _drop(data, BULK_FIELDS)


def _strip_retired_fields(data: Dict) -> None:
    _drop(data, RETIRED_FIELDS)
