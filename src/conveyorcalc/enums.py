"""Type-safe enums for the conveyor calculator.

Values are the strings persisted in configuration records, so they must not
change once released. Legacy spellings are normalized by the migrator.
"""

from enum import Enum


class SpeedMode(Enum):
    """Which speed quantity the user entered"""
    BELT_SPEED = "belt_speed"  # Belt speed in FPM, drive RPM derived
    DRIVE_RPM = "drive_rpm"  # Drive shaft RPM, belt speed derived


class GearmotorMountingStyle(Enum):
    """How the gearmotor couples to the drive shaft"""
    SHAFT_MOUNTED = "shaft_mounted"  # Direct on drive shaft, no chain stage
    BOTTOM_MOUNT = "bottom_mount"  # Under the frame, chain + sprockets


class FrameHeightMode(Enum):
    """Frame height selection"""
    STANDARD = "standard"  # Pulley + return roller
    LOW_PROFILE = "low_profile"  # Pulley only, snub rollers hold wrap
    CUSTOM = "custom"  # Explicit height entered by engineer


class FrameConstructionType(Enum):
    """Frame side construction"""
    SHEET_METAL = "sheet_metal"
    STRUCTURAL_CHANNEL = "structural_channel"
    SPECIAL = "special"  # Engineered per job, no thickness lookup


class SheetMetalGauge(Enum):
    """Sheet metal gauge for formed frame sides"""
    GA_12 = "12_GA"
    GA_16 = "16_GA"


class StructuralChannelSeries(Enum):
    """AISC C-channel series for channel frames"""
    C3 = "C3"
    C4 = "C4"
    C5 = "C5"
    C6 = "C6"


class SupportType(Enum):
    """Support at one end of the conveyor"""
    EXTERNAL = "external"  # Hung from or bolted to customer equipment
    LEGS = "legs"
    CASTERS = "casters"


class SupportMethod(Enum):
    """Overall support method, derived from the per-end pair"""
    EXTERNAL = "external"
    LEGS = "legs"
    CASTERS = "casters"
    FLOOR_SUPPORTED = "floor_supported"  # Legs and casters combined


class ReferenceEnd(Enum):
    """End at which top-of-belt height is specified"""
    TAIL = "tail"
    DRIVE = "drive"


class MaterialForm(Enum):
    """Form of the conveyed material"""
    PARTS = "PARTS"  # Discrete parts
    BULK = "BULK"  # Loose bulk material


class PartOrientation(Enum):
    """Part orientation relative to the direction of travel"""
    LENGTHWISE = "Lengthwise"  # Part length runs along the belt
    CROSSWISE = "Crosswise"  # Part width runs along the belt


class BulkInputMethod(Enum):
    """How bulk throughput is specified"""
    WEIGHT_FLOW = "WEIGHT_FLOW"  # lbs/hr
    VOLUME_FLOW = "VOLUME_FLOW"  # ft³/hr with density


class DensitySource(Enum):
    """Where the bulk density value came from"""
    KNOWN = "KNOWN"
    ASSUMED_CLASS = "ASSUMED_CLASS"  # Typical value for the material class


class FeedBehavior(Enum):
    """Bulk feed behavior"""
    CONTINUOUS = "CONTINUOUS"
    SURGE = "SURGE"  # Intermittent slugs, design flow scaled by surge multiplier


class BeltTrackingMethod(Enum):
    """Belt tracking method"""
    CROWNED = "crowned"  # Crowned pulleys
    V_GUIDED = "v_guided"  # V-guide on belt underside, grooved pulleys


class CleatMethod(Enum):
    """Cleat attachment method"""
    HOT_WELDED = "hot_welded"  # Stiffens the belt, raises minimum pulley
    MOLDED = "molded"


class ShaftDiameterMode(Enum):
    """Shaft sizing selection"""
    CALCULATED = "calculated"
    MANUAL = "manual"


class BedType(Enum):
    """Belt support bed"""
    SLIDER_BED = "slider_bed"
    ROLLER_BED = "roller_bed"


class SideLoadingDirection(Enum):
    """Direction parts are loaded from the side"""
    NONE = "None"
    LEFT = "Left"
    RIGHT = "Right"
    BOTH = "Both"


class SideLoadingSeverity(Enum):
    """Severity of side loading"""
    LIGHT = "Light"
    MODERATE = "Moderate"
    HEAVY = "Heavy"


class PartTemperatureClass(Enum):
    """Temperature class of conveyed material"""
    AMBIENT = "AMBIENT"
    WARM = "WARM"
    HOT = "HOT"
    RED_HOT = "RED_HOT"


class FluidType(Enum):
    """Fluid present on conveyed material"""
    NONE = "NONE"
    MINIMAL = "MINIMAL"  # Minimal residual oil
    CONSIDERABLE = "CONSIDERABLE"  # Considerable oil or liquid


class LacingStyle(Enum):
    """Belt splice style"""
    ENDLESS = "endless"
    CLIPPER = "clipper"  # Mechanical lacing, pinch point at splice


class DriveLocation(Enum):
    """Drive location along the conveyor"""
    HEAD = "head"
    TAIL = "tail"
    CENTER = "center"


class DriveHand(Enum):
    """Side of the conveyor the gearmotor sits on, looking downstream"""
    RIGHT = "right"
    LEFT = "left"


class GearmotorOrientation(Enum):
    """Motor orientation relative to the gearbox"""
    HORIZONTAL = "horizontal"
    VERTICAL_UP = "vertical_up"
    VERTICAL_DOWN = "vertical_down"


class TubeStressStatus(Enum):
    """Outcome of the pulley tube stress check"""
    OK = "ok"
    ESTIMATED = "estimated"  # Within limit but hub centers were estimated
    WARN = "warn"  # Over limit, checks not enforced
    FAIL = "fail"  # Over limit, checks enforced
    ERROR = "error"  # Impossible geometry
    INCOMPLETE = "incomplete"  # Geometry not supplied


class GearmotorSeries(Enum):
    """Catalog gearmotor series, in preferred search order"""
    FLEXBLOC = "FLEXBLOC"
    MINICASE = "MINICASE"


class GeometryMode(Enum):
    """Which pair of geometry quantities the user entered"""
    LENGTH_ANGLE = "L_ANGLE"  # Length C-C + incline, horizontal run derived
    HORIZONTAL_ANGLE = "H_ANGLE"  # Horizontal run + incline, length derived
    HORIZONTAL_TOB = "H_TOB"  # Horizontal run + both TOBs, incline and length derived


class ApplicationClass(Enum):
    """Application class, for tracking sensitivity"""
    UNIT_HANDLING = "unit_handling"
    BULK_HANDLING = "bulk_handling"


class BeltConstruction(Enum):
    """Belt construction, for tracking sensitivity"""
    GENERAL = "general"
    FABRIC_PLY = "fabric_ply"
    THERMOPLASTIC_PVC_PU = "thermoplastic_pvc_pu"
    RUBBER_COMPOUND = "rubber_compound"
    STEEL_CORD_OR_VERY_STIFF = "steel_cord_or_very_stiff"
    PROFILED_SIDEWALL_OR_HIGH_CLEAT = "profiled_sidewall_or_high_cleat"


class TrackingPreference(Enum):
    """Engineer preference for the tracking mode"""
    AUTO = "auto"  # Use the recommendation
    PREFER_CROWNED = "prefer_crowned"
    PREFER_HYBRID = "prefer_hybrid"
    PREFER_V_GUIDED = "prefer_v_guided"


class TrackingMode(Enum):
    """Recommended tracking mode, least to most belt constraint"""
    CROWNED = "crowned"  # Crowned pulleys
    HYBRID = "hybrid"  # Crowned pulleys + V-guide
    V_GUIDED = "v_guided"  # Flat pulleys + V-guide


class LwBand(Enum):
    """Length-to-width ratio band"""
    LOW = "low"  # <= 5
    MEDIUM = "medium"  # <= 10
    HIGH = "high"


class DisturbanceSeverity(Enum):
    """Severity of tracking disturbances"""
    MINIMAL = "minimal"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"
