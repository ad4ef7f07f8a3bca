"""
Engineering constants for conveyor calculations.

This module centralizes all numerical constants used by the formula engine,
the validator and the migrator. Each constant is documented with its source
(PCI guideline, catalog data, or shop practice).

MODIFICATION GUIDELINES:
- Never change PCI constants without updating the reference
- Shop practice constants may be adjusted based on field experience
- Add new constants here rather than hardcoding in functions
- Always include units in constant names (_IN, _FPM, _LB, _PSI, _DEG)

Constants are grouped by category:
- Defaults: values used when the request does not supply one
- Belt: belt weight coefficients, cleat weight model, minimum pulley
- Frame: frame height, rollers, side thickness
- Shaft: von Mises sizing
- PCI: pulley tube stress limits
- Validation: ranges and thresholds
- Geometry: normalization thresholds for the H_ANGLE and H_TOB modes
- Tracking: L/W bands and disturbance severity
- Gearmotor Selection: speed tolerance and series order
"""

from typing import Dict, Tuple

# =============================================================================
# Request Defaults
# =============================================================================

# Belt-to-bed friction coefficient (slider bed, general purpose belt)
FRICTION_COEFF_DEFAULT: float = 0.25

# Bed type friction presets
FRICTION_COEFF_SLIDER_BED: float = 0.25
FRICTION_COEFF_ROLLER_BED: float = 0.03

# Drive torque safety factor
SAFETY_FACTOR_DEFAULT: float = 2.0

# Breakaway allowance added to belt pull
STARTING_BELT_PULL_LB_DEFAULT: float = 75.0

# Standard 4-pole motor nameplate speed
MOTOR_RPM_DEFAULT: float = 1750.0

# Standard gravity
GRAVITY_IN_PER_S2: float = 386.1

# Sprocket defaults for bottom-mount chain drives
GM_SPROCKET_TEETH_DEFAULT: int = 18          # Driver (gearmotor) sprocket
DRIVE_SHAFT_SPROCKET_TEETH_DEFAULT: int = 24  # Driven (drive shaft) sprocket

# Throughput margin applied to required parts per hour
THROUGHPUT_MARGIN_PCT_DEFAULT: float = 0.0

# =============================================================================
# Belt
# =============================================================================

# Belt weight coefficients (lb per in width, per in length) by pulley bracket
# Source: Catalog belt weights, 2.5" pulley belts are the heavier lightweight series
PIW_PIL_SMALL_PULLEY_DIAMETER_IN: float = 2.5
PIW_PIL_SMALL_PULLEY: float = 0.138
PIW_PIL_DEFAULT: float = 0.109

# Cleat weight model: solid PVC cleat on a 1.5" base strip
CLEAT_THICKNESS_IN: float = 0.25
CLEAT_BASE_IN: float = 1.5
CLEAT_DENSITY_LB_PER_IN3: float = 0.045

# Hot-welded cleat spacing multiplier for belt minimum pulley diameter
# Source: Belt vendor guidance, closer cleats stiffen the belt more
CLEAT_SPACING_MULTIPLIER_POINTS: Tuple[Tuple[float, float], ...] = (
    (4.0, 1.35),
    (6.0, 1.25),
    (8.0, 1.15),
    (12.0, 1.0),
)
MIN_PULLEY_ROUNDING_INCREMENT_IN: float = 0.25

# Pulley face allowance beyond belt width
PULLEY_FACE_EXTRA_V_GUIDED_IN: float = 0.5
PULLEY_FACE_EXTRA_CROWNED_IN: float = 2.0

# =============================================================================
# Frame
# =============================================================================

RETURN_ROLLER_DIAMETER_IN: float = 2.0       # Standard frame return path
FRAME_CLEARANCE_DEFAULT_IN: float = 0.5      # Added to required height
SNUB_ROLLER_CLEARANCE_IN: float = 2.5        # Snubs required below pulley + this
MIN_FRAME_HEIGHT_IN: float = 3.0             # Absolute minimum custom height
DESIGN_REVIEW_FRAME_HEIGHT_IN: float = 4.0   # Below: flag for design review

# Gravity (return) rollers
GRAVITY_ROLLER_SPACING_IN: float = 60.0
GRAVITY_ROLLER_MIN_QTY: int = 2
SNUB_ROLLER_QTY: int = 2                     # One per end

# Frame side thickness by construction selection
SHEET_METAL_GAUGE_THICKNESS_IN: Dict[str, float] = {
    "12_GA": 0.1046,
    "16_GA": 0.0598,
}
# Source: AISC Steel Construction Manual, web thickness of the lightest section
STRUCTURAL_CHANNEL_THICKNESS_IN: Dict[str, float] = {
    "C3": 0.170,
    "C4": 0.184,
    "C5": 0.190,
    "C6": 0.200,
}

# =============================================================================
# Shaft Sizing (von Mises, simply supported, center load)
# =============================================================================

STANDARD_SHAFT_DIAMETERS_IN: Tuple[float, ...] = (
    0.5, 0.625, 0.75, 0.875, 1.0, 1.125, 1.25, 1.375, 1.5,
    1.625, 1.75, 1.875, 2.0, 2.25, 2.5, 2.75, 3.0,
)
E_STEEL_PSI: float = 30.0e6
SHAFT_YIELD_STRENGTH_PSI: float = 45000.0    # 1045 steel
SHAFT_SAFETY_FACTOR: float = 3.0
SHAFT_SERVICE_FACTOR: float = 1.2
SHAFT_WRAP_ANGLE_DEG: float = 180.0
SHAFT_LAGGING_FRICTION: float = 0.3          # Lagged pulley to belt
BEARING_SPAN_OFFSET_IN: float = 5.0          # Bearing span = belt width + this
KEYWAY_STRESS_CONCENTRATION: float = 1.6
MAX_DEFLECTION_RATIO: float = 0.001          # Of bearing span

# Manual shaft diameter bounds
MANUAL_SHAFT_MIN_IN: float = 0.5
MANUAL_SHAFT_MAX_IN: float = 4.0

# =============================================================================
# PCI - Pulley Tube Stress
# =============================================================================

# Source: PCI (Pulley Conveyor Institute) tube stress guideline
TUBE_STRESS_LIMIT_DRUM_PSI: float = 10000.0
TUBE_STRESS_LIMIT_VGROOVE_PSI: float = 3400.0

# =============================================================================
# Validation Ranges and Thresholds
# =============================================================================

SAFETY_FACTOR_RANGE: Tuple[float, float] = (1.0, 5.0)
PIW_PIL_RANGE: Tuple[float, float] = (0.05, 0.30)
STARTING_BELT_PULL_RANGE_LB: Tuple[float, float] = (0.0, 2000.0)
FRICTION_COEFF_RANGE: Tuple[float, float] = (0.05, 0.6)
MOTOR_RPM_RANGE: Tuple[float, float] = (800.0, 3600.0)

# Incline thresholds
INCLINE_MAX_DEG: float = 45.0                # Above: blocked
INCLINE_STEEP_WARNING_DEG: float = 35.0      # Above: cleats and specialty belt
INCLINE_WARNING_DEG: float = 20.0            # Above: product may slide back

LONG_CONVEYOR_IN: float = 120.0              # Above: multi-section body
DROP_HEIGHT_WARNING_IN: float = 24.0

# Chain drive
CHAIN_RATIO_MIN: float = 0.5
CHAIN_RATIO_MAX: float = 3.0
MIN_SPROCKET_TEETH: int = 12                 # Below: accelerated chain wear

# Cleats
CLEAT_HEIGHT_RANGE_IN: Tuple[float, float] = (0.5, 6.0)
CLEAT_SPACING_RANGE_IN: Tuple[float, float] = (2.0, 48.0)
CLEAT_EDGE_OFFSET_MAX_IN: float = 12.0

# Bulk material
LUMP_BELT_WIDTH_RATIO_MAX: float = 0.8

# Safety
MIN_START_STOP_CYCLE_S: float = 10.0

# =============================================================================
# Geometry Normalization
# =============================================================================

HORIZONTAL_THRESHOLD_DEG: float = 0.01       # Below: treated as level
MIN_COS_THETA: float = 0.01                  # Floor on cos(θ) when deriving length
RISE_THRESHOLD_IN: float = 0.001             # Below: TOBs treated as level

# =============================================================================
# Belt Tracking Recommendation
# =============================================================================

# Length-to-width ratio bands
TRACKING_LW_BAND_LOW_MAX: float = 5.0
TRACKING_LW_BAND_MEDIUM_MAX: float = 10.0

# Disturbance count at which severity is significant
TRACKING_SIGNIFICANT_MIN_COUNT: int = 3

# =============================================================================
# Gearmotor Selection
# =============================================================================

GEARMOTOR_SPEED_TOLERANCE_PCT: float = 15.0
GEARMOTOR_SERIES_ORDER: Tuple[str, ...] = ("FLEXBLOC", "MINICASE")
