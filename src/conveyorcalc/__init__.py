"""
Conveyorcalc - belt conveyor configurator calculation and selection engine.

Migrates stored configuration records, validates them, derives the complete
engineering design, and ranks catalog gearmotors against the drive
requirement.

Example:
    >>> from conveyorcalc import run_calculation
    >>>
    >>> result = run_calculation(record, product_key="belt_conveyor_v1")
    >>> result.success, result.outputs.gear_ratio

Note: All imports are lazy-loaded; importing the package does not import
Pydantic until a model or calculator function is first used.
"""

__version__ = "2.0.0"

# Define which names come from which submodule

_ENUMS = {
    "SpeedMode",
    "GearmotorMountingStyle",
    "FrameHeightMode",
    "FrameConstructionType",
    "SupportType",
    "SupportMethod",
    "MaterialForm",
    "BeltTrackingMethod",
    "TubeStressStatus",
    "GeometryMode",
    "TrackingMode",
}

_CALCULATOR = {
    "run_calculation",
    "calculate_json",
    "calculate",
    "validate",
    "requires_belt_validation",
    "Parameters",
    "CalculationResult",
    "CalculationOutputs",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "find_gearmotor_candidates",
    "select_candidates",
    "GearmotorRequest",
    "to_json",
    "to_summary",
}

_IO = {
    "migrate_inputs",
    "ConfigurationInputs",
    "MigrationError",
    "SCHEMA_VERSION",
}

_CATALOG = {
    "CatalogClient",
    "CatalogLookupError",
    "InMemoryCatalog",
    "BeltRecord",
    "GearmotorPerformancePoint",
    "PerformancePointFilter",
}

_SUBMODULES = (
    ("enums", _ENUMS),
    ("calculator", _CALCULATOR),
    ("io", _IO),
    ("catalog", _CATALOG),
)

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    import importlib

    for module_name, names in _SUBMODULES:
        if name in names:
            if module_name not in _modules:
                _modules[module_name] = importlib.import_module(f".{module_name}", __name__)
            return getattr(_modules[module_name], name)

    raise AttributeError(f"module 'conveyorcalc' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "SpeedMode",
    "GearmotorMountingStyle",
    "FrameHeightMode",
    "FrameConstructionType",
    "SupportType",
    "SupportMethod",
    "MaterialForm",
    "BeltTrackingMethod",
    "TubeStressStatus",
    "GeometryMode",
    "TrackingMode",

    # Calculator (lazy loaded from calculator)
    "run_calculation",
    "calculate_json",
    "calculate",
    "validate",
    "requires_belt_validation",
    "Parameters",
    "CalculationResult",
    "CalculationOutputs",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "find_gearmotor_candidates",
    "select_candidates",
    "GearmotorRequest",
    "to_json",
    "to_summary",

    # IO (lazy loaded from io)
    "migrate_inputs",
    "ConfigurationInputs",
    "MigrationError",
    "SCHEMA_VERSION",

    # Catalog (lazy loaded from catalog)
    "CatalogClient",
    "CatalogLookupError",
    "InMemoryCatalog",
    "BeltRecord",
    "GearmotorPerformancePoint",
    "PerformancePointFilter",
]
