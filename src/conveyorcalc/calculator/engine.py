"""
Calculation orchestrator.

run_calculation() is the single library entry point: it migrates a stored
or legacy configuration record, builds typed inputs, enriches them from the
catalog, resolves parameters once, validates, and runs the formula engine.

Outputs are always populated, even when validation fails; success only
reports whether any error-severity issue was found. Migration and catalog
failures are infrastructure errors and propagate to the caller.

Usage from a JSON transport:
    from conveyorcalc.calculator.engine import calculate_json
    result_json = calculate_json(request_json)
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict

from ..catalog import CatalogClient
from ..io.loaders import ConfigurationInputs
from ..io.schema import SCHEMA_VERSION, migrate_inputs
from .core import CalculationOutputs, calculate
from .parameters import ParametersInput, resolve_parameters
from .validation import ValidationIssue, validate

logger = logging.getLogger(__name__)

MODEL_KEY = "belt_conveyor_v1"
MODEL_VERSION_ID = "belt_conveyor_v1.2.0"


class ValidationIssueDict(TypedDict, total=False):
    """Validation issue as sent to callers."""
    field: str
    message: str
    severity: str  # "error", "warning", "info"
    code: str
    suggestion: Optional[str]


class CalculationMetadata(BaseModel):
    model_config = ConfigDict(extra='ignore')

    model_version_id: str = MODEL_VERSION_ID
    calculated_at: str  # ISO 8601, UTC
    model_key: str = MODEL_KEY
    product_key: Optional[str] = None
    schema_version: str = SCHEMA_VERSION


class CalculationResult(BaseModel):
    """Response of run_calculation()."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    outputs: Optional[CalculationOutputs] = None
    errors: List[ValidationIssueDict] = Field(default_factory=list)
    warnings: List[ValidationIssueDict] = Field(default_factory=list)
    infos: List[ValidationIssueDict] = Field(default_factory=list)
    metadata: Optional[CalculationMetadata] = None

    # Infrastructure failure (JSON transport only)
    error: Optional[str] = None


def _issue_dict(issue: ValidationIssue) -> ValidationIssueDict:
    return {
        'field': issue.field,
        'message': issue.message,
        'severity': issue.severity.value,
        'code': issue.code,
        'suggestion': issue.suggestion,
    }


def enrich_from_catalog(inputs: ConfigurationInputs, catalog: CatalogClient) -> ConfigurationInputs:
    """
    Fill belt coefficients and belt minimum pulley from the belt catalog.

    Values already on the inputs win over catalog values.

    Raises:
        CatalogLookupError: belt_catalog_key is not in the catalog
    """
    key = inputs.belt_catalog_key
    if not key:
        return inputs

    belt = catalog.lookup_belt(key)
    minimum = catalog.lookup_belt_minimum_pulley_diameter(key)
    candidates = {
        'belt_piw': belt.piw,
        'belt_pil': belt.pil,
        'belt_min_pulley_dia_no_vguide_in': minimum.get('no_vguide'),
        'belt_min_pulley_dia_with_vguide_in': minimum.get('with_vguide'),
    }
    update = {
        name: value for name, value in candidates.items()
        if value is not None and getattr(inputs, name) is None
    }
    if update:
        logger.debug(f"Belt {key}: filled {sorted(update)} from catalog")
        inputs = inputs.model_copy(update=update)
    return inputs


def run_calculation(
    inputs: Union[ConfigurationInputs, Dict[str, Any]],
    parameters: ParametersInput = None,
    product_key: Optional[str] = None,
    catalog: Optional[CatalogClient] = None,
) -> CalculationResult:
    """
    Migrate, validate and calculate one configuration.

    Args:
        inputs: Configuration record (any schema revision) or typed inputs
        parameters: Parameter overrides (Parameters, dict, or None)
        product_key: Active product; scopes belt-selection validation
        catalog: Catalog client for belt enrichment (optional)

    Returns:
        CalculationResult

    Raises:
        MigrationError: the record cannot be interpreted
        CatalogLookupError: a catalog key on the record is unknown
    """
    if isinstance(inputs, ConfigurationInputs):
        typed = inputs
    else:
        typed = ConfigurationInputs.from_record(migrate_inputs(inputs))

    if catalog is not None:
        typed = enrich_from_catalog(typed, catalog)

    resolved = resolve_parameters(typed, parameters)
    logger.debug(f"Resolved parameters: {resolved}")

    validation = validate(typed, resolved, product_key)
    outputs = calculate(typed, resolved)
    logger.debug(
        f"Calculation complete: {len(validation.errors)} errors, "
        f"{len(validation.warnings)} warnings"
    )

    return CalculationResult(
        success=validation.valid,
        outputs=outputs,
        errors=[_issue_dict(m) for m in validation.errors],
        warnings=[_issue_dict(m) for m in validation.warnings],
        infos=[_issue_dict(m) for m in validation.infos],
        metadata=CalculationMetadata(
            calculated_at=datetime.now(timezone.utc).isoformat(),
            product_key=product_key,
        ),
    )


def calculate_json(request_json: str, catalog: Optional[CatalogClient] = None) -> str:
    """
    JSON entry point for transport layers.

    Args:
        request_json: JSON string {"inputs": {...}, "parameters": {...},
            "product_key": "..."}; a bare inputs record is also accepted

    Returns:
        JSON string with CalculationResult structure. Infrastructure failures
        come back as success=false with error set, never as an exception.
    """
    try:
        data = json.loads(request_json)
        if isinstance(data, dict) and "inputs" in data:
            inputs = data["inputs"]
            parameters = data.get("parameters")
            product_key = data.get("product_key")
        else:
            inputs, parameters, product_key = data, None, None

        result = run_calculation(inputs, parameters, product_key, catalog)
        return result.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculationResult(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except Exception as e:
        logger.warning(f"Calculation request failed: {e}")
        return CalculationResult(
            success=False,
            error=str(e)
        ).model_dump_json()
