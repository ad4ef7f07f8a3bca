"""
Gearmotor Candidate Ranker

Matches catalog gearmotor performance points to a drive requirement.

A point qualifies when its torque, rescaled from the catalog service factor
to the chosen one, covers the required output torque:

    adjusted_capacity = output_torque × SF_catalog / SF_chosen  >=  required

Qualifying points are returned as a ranked shortlist, never a single pick:
closest speed match first, then least oversized, then smallest motor.

Series policy: search FLEXBLOC first and fall back to MINICASE only when
FLEXBLOC has nothing that qualifies.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..catalog import CatalogClient, GearmotorPerformancePoint, PerformancePointFilter
from .constants import GEARMOTOR_SERIES_ORDER
from .numeric import is_number

logger = logging.getLogger(__name__)


@dataclass
class GearmotorCandidate:
    """A qualifying performance point with its fit against the requirement."""
    point: GearmotorPerformancePoint
    adjusted_capacity: float  # lb-in at the chosen service factor
    oversize_ratio: float  # adjusted_capacity / required torque
    speed_delta: float  # output rpm - required rpm (signed)
    speed_delta_pct: float  # speed_delta / required rpm × 100 (signed)

    @property
    def model_key(self) -> str:
        return self.point.model_key

    @property
    def series(self) -> str:
        return self.point.series

    @property
    def motor_hp(self) -> float:
        return self.point.motor_hp

    @property
    def output_rpm(self) -> float:
        return self.point.output_rpm

    @property
    def output_torque_lb_in(self) -> float:
        return self.point.output_torque_lb_in


@dataclass
class GearmotorRequest:
    """Drive requirement for a gearmotor search."""
    required_output_rpm: float
    required_output_torque_lb_in: float
    chosen_service_factor: float
    speed_tolerance_pct: Optional[float] = None  # None: no speed filter
    series: Optional[str] = None  # None: search series in preference order


@dataclass
class SelectionResult:
    candidates: List[GearmotorCandidate] = field(default_factory=list)
    selected_series: Optional[str] = None
    message: Optional[str] = None


def _positive(value: Optional[float]) -> bool:
    return is_number(value) and value > 0


def _evaluate(
    point: GearmotorPerformancePoint,
    required_output_rpm: float,
    required_output_torque_lb_in: float,
    chosen_service_factor: float,
) -> GearmotorCandidate:
    catalog_sf = point.service_factor_catalog or 1.0
    adjusted = point.output_torque_lb_in * catalog_sf / chosen_service_factor
    delta = point.output_rpm - required_output_rpm
    return GearmotorCandidate(
        point=point,
        adjusted_capacity=adjusted,
        oversize_ratio=adjusted / required_output_torque_lb_in,
        speed_delta=delta,
        speed_delta_pct=delta / required_output_rpm * 100.0,
    )


def rank_candidates(candidates: Iterable[GearmotorCandidate]) -> List[GearmotorCandidate]:
    """Closest speed, then least oversized, then smallest motor, then model key."""
    return sorted(
        candidates,
        key=lambda c: (abs(c.speed_delta_pct), c.oversize_ratio, c.motor_hp, c.model_key),
    )


def select_candidates(
    required_output_rpm: float,
    required_output_torque_lb_in: float,
    chosen_service_factor: float,
    points: Iterable[GearmotorPerformancePoint],
    speed_tolerance_pct: Optional[float] = None,
) -> List[GearmotorCandidate]:
    """
    Every point that meets the torque requirement, ranked.

    Args:
        required_output_rpm: Gearmotor output RPM the drive needs
        required_output_torque_lb_in: Output torque the drive needs
        chosen_service_factor: Service factor the application calls for
        points: Catalog performance points to consider
        speed_tolerance_pct: Drop points further than this from the required
            RPM; None keeps every speed

    Returns:
        Ranked candidates; empty when the requirement is missing or non-positive
    """
    if not all(_positive(v) for v in (required_output_rpm, required_output_torque_lb_in, chosen_service_factor)):
        return []

    qualifying = []
    for point in points:
        candidate = _evaluate(point, required_output_rpm, required_output_torque_lb_in, chosen_service_factor)
        if candidate.adjusted_capacity < required_output_torque_lb_in:
            continue
        if speed_tolerance_pct is not None and abs(candidate.speed_delta_pct) > speed_tolerance_pct:
            continue
        qualifying.append(candidate)
    return rank_candidates(qualifying)


def _request_message(request: GearmotorRequest) -> Optional[str]:
    # nan arrives here when the engine could not compute the requirement
    if not _positive(request.required_output_rpm):
        return "Required output RPM must be a number greater than 0"
    if not _positive(request.required_output_torque_lb_in):
        return "Required output torque must be a number greater than 0"
    if not _positive(request.chosen_service_factor):
        return "Service factor must be a number greater than 0"
    return None


def find_gearmotor_candidates(request: GearmotorRequest, catalog: CatalogClient) -> SelectionResult:
    """
    Search the catalog for gearmotors that satisfy a drive requirement.

    Series are searched in preference order (or only request.series when
    given); the first series with any qualifying point supplies the
    shortlist.

    Args:
        request: Drive requirement
        catalog: Catalog client to query

    Returns:
        SelectionResult; message explains an empty shortlist
    """
    message = _request_message(request)
    if message:
        return SelectionResult(message=message)

    rpm = request.required_output_rpm
    min_rpm = max_rpm = None
    if request.speed_tolerance_pct is not None:
        band = rpm * request.speed_tolerance_pct / 100.0
        min_rpm, max_rpm = rpm - band, rpm + band

    series_order = (request.series,) if request.series else GEARMOTOR_SERIES_ORDER
    for series in series_order:
        points = catalog.lookup_performance_points(
            PerformancePointFilter(series=series, min_output_rpm=min_rpm, max_output_rpm=max_rpm)
        )
        candidates = select_candidates(
            rpm,
            request.required_output_torque_lb_in,
            request.chosen_service_factor,
            points,
            request.speed_tolerance_pct,
        )
        logger.debug(f"{series}: {len(points)} points, {len(candidates)} qualify")
        if candidates:
            return SelectionResult(candidates=candidates, selected_series=series)

    return SelectionResult(message=(
        f"No gearmotor found matching requirements: {rpm:g} RPM, "
        f"{request.required_output_torque_lb_in:g} lb-in @ SF {request.chosen_service_factor:g}. "
        "Try adjusting the service factor or speed tolerance."
    ))
