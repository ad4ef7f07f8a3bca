"""
Conveyor Calculator - formula engine, validation and drive selection.

Example:
    >>> from conveyorcalc.calculator import run_calculation
    >>>
    >>> result = run_calculation({
    ...     "conveyor_length_cc_in": 120,
    ...     "belt_width_in": 18,
    ...     "drive_pulley_diameter_in": 4,
    ...     "belt_speed_fpm": 50,
    ...     "part_weight_lb": 5,
    ...     "part_length_in": 12,
    ...     "part_width_in": 6,
    ...     "belt_catalog_key": "PVC120",
    ... })
    >>> result.outputs.drive_rpm
"""

from .engine import (
    # Orchestrator
    run_calculation,
    calculate_json,
    enrich_from_catalog,
    CalculationResult,
    CalculationMetadata,
    MODEL_KEY,
    MODEL_VERSION_ID,
)

from .core import (
    # Formula engine
    calculate,
    CalculationOutputs,
)

from .geometry import (
    # Geometry modes
    derive_geometry,
    normalize_geometry,
    DerivedGeometry,
)

from .tracking import (
    # Tracking recommendation
    recommend_tracking,
    TrackingRecommendation,
)

from .parameters import (
    Parameters,
    ResolvedParameters,
    resolve_parameters,
)

from .validation import (
    # Validation
    validate,
    requires_belt_validation,
    Severity,
    ValidationIssue,
    ValidationResult,
)

from .selector import (
    # Gearmotor selection
    select_candidates,
    rank_candidates,
    find_gearmotor_candidates,
    GearmotorCandidate,
    GearmotorRequest,
    SelectionResult,
)

from .output import (
    # Output formatters
    to_json,
    to_summary,
)


__all__ = [
    # Orchestrator
    "run_calculation",
    "calculate_json",
    "enrich_from_catalog",
    "CalculationResult",
    "CalculationMetadata",
    "MODEL_KEY",
    "MODEL_VERSION_ID",

    # Formula engine
    "calculate",
    "CalculationOutputs",

    # Geometry modes
    "derive_geometry",
    "normalize_geometry",
    "DerivedGeometry",

    # Tracking recommendation
    "recommend_tracking",
    "TrackingRecommendation",

    # Parameters
    "Parameters",
    "ResolvedParameters",
    "resolve_parameters",

    # Validation
    "validate",
    "requires_belt_validation",
    "Severity",
    "ValidationIssue",
    "ValidationResult",

    # Gearmotor selection
    "select_candidates",
    "rank_candidates",
    "find_gearmotor_candidates",
    "GearmotorCandidate",
    "GearmotorRequest",
    "SelectionResult",

    # Output formatters
    "to_json",
    "to_summary",
]
