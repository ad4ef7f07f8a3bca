"""
Catalog client: read-only lookups of belts and gearmotor performance data.

The calculator never owns catalog content. Callers pass any object that
satisfies CatalogClient; InMemoryCatalog serves a snapshot held in memory
(for tests, scripts, and services that preload the catalog).

Lookups are keyed by the catalog identifiers stored on a configuration
record. A missing key is an infrastructure problem, not a validation
finding, so it raises CatalogLookupError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class CatalogLookupError(LookupError):
    """A catalog key could not be resolved."""


@dataclass(frozen=True)
class BeltRecord:
    """One belt catalog entry."""
    catalog_key: str
    display_name: str
    piw: float  # Belt weight coefficient, lb per in of width
    pil: float  # Belt weight coefficient, lb per in of length
    min_pulley_dia_no_vguide_in: Optional[float] = None
    min_pulley_dia_with_vguide_in: Optional[float] = None


@dataclass(frozen=True)
class GearmotorPerformancePoint:
    """One rated operating point of a catalog gearmotor."""
    model_key: str
    series: str
    motor_hp: float
    output_rpm: float
    output_torque_lb_in: float
    service_factor_catalog: float = 1.0
    vendor: Optional[str] = None
    size_code: Optional[str] = None
    part_number: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class PerformancePointFilter:
    """Performance point query; None bounds are open."""
    series: Optional[str] = None
    min_output_rpm: Optional[float] = None
    max_output_rpm: Optional[float] = None

    def matches(self, point: GearmotorPerformancePoint) -> bool:
        if self.series is not None and point.series != self.series:
            return False
        if self.min_output_rpm is not None and point.output_rpm < self.min_output_rpm:
            return False
        if self.max_output_rpm is not None and point.output_rpm > self.max_output_rpm:
            return False
        return True


class CatalogClient(Protocol):
    """Read-only catalog interface consumed by the calculator."""

    def lookup_performance_points(self, filter: PerformancePointFilter) -> List[GearmotorPerformancePoint]:
        ...

    def lookup_belt_minimum_pulley_diameter(self, key: str) -> Dict[str, Optional[float]]:
        ...

    def lookup_belt(self, key: str) -> BeltRecord:
        ...


class InMemoryCatalog:
    """
    Catalog snapshot held in memory.

    Args:
        belts: Belt records, keyed internally by catalog_key
        performance_points: Gearmotor performance points
    """

    def __init__(
        self,
        belts: Iterable[BeltRecord] = (),
        performance_points: Iterable[GearmotorPerformancePoint] = (),
    ):
        self._belts = {belt.catalog_key: belt for belt in belts}
        self._points = list(performance_points)

    @classmethod
    def from_rows(
        cls,
        belts: Iterable[Dict[str, Any]] = (),
        performance_points: Iterable[Dict[str, Any]] = (),
    ) -> "InMemoryCatalog":
        """
        Build a snapshot from catalog rows already fetched by the caller.

        Rows are mappings keyed by record field name; unknown keys raise
        TypeError.
        """
        belt_records = [BeltRecord(**row) for row in belts]
        points = [GearmotorPerformancePoint(**row) for row in performance_points]
        logger.debug(f"Catalog snapshot: {len(belt_records)} belts, {len(points)} performance points")
        return cls(belt_records, points)

    def lookup_belt(self, key: str) -> BeltRecord:
        try:
            return self._belts[key]
        except KeyError:
            logger.warning(f"Belt catalog key not found: {key}")
            raise CatalogLookupError(f"Unknown belt catalog key: {key}") from None

    def lookup_belt_minimum_pulley_diameter(self, key: str) -> Dict[str, Optional[float]]:
        belt = self.lookup_belt(key)
        return {
            "no_vguide": belt.min_pulley_dia_no_vguide_in,
            "with_vguide": belt.min_pulley_dia_with_vguide_in,
        }

    def lookup_performance_points(self, filter: PerformancePointFilter) -> List[GearmotorPerformancePoint]:
        return [point for point in self._points if filter.matches(point)]
