"""
PCI pulley tube stress check.

    σ = 8 · OD · F · H / (π · (OD⁴ - ID⁴)),   ID = OD - 2 · wall

F is the radial load on the pulley, H the hub center distance. The limit is
10,000 psi for drum pulleys and 3,400 psi for V-groove pulleys.

The check is optional: without tube geometry it reports "incomplete" rather
than passing or failing.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..enums import TubeStressStatus
from .numeric import is_number


@dataclass
class TubeStressResult:
    stress_psi: Optional[float]
    limit_psi: float
    status: TubeStressStatus
    hub_centers_estimated: bool = False
    error_message: Optional[str] = None


def calculate_tube_stress(
    tube_od_in: Optional[float],
    tube_wall_in: Optional[float],
    hub_centers_in: Optional[float],
    radial_load_lbf: float,
    limit_psi: float,
    enforce_checks: bool = False,
    hub_centers_estimated: bool = False,
) -> TubeStressResult:
    """
    Evaluate pulley tube stress against the PCI limit.

    Args:
        tube_od_in: Tube outside diameter
        tube_wall_in: Tube wall thickness
        hub_centers_in: Hub center-to-center distance
        radial_load_lbf: Radial load on the pulley
        limit_psi: Allowed stress for the pulley construction
        enforce_checks: Over-limit is "fail" when True, "warn" otherwise
        hub_centers_estimated: Hub centers were estimated, not entered

    Returns:
        TubeStressResult
    """
    if not (is_number(tube_od_in) and tube_od_in > 0 and is_number(tube_wall_in) and tube_wall_in > 0):
        return TubeStressResult(None, limit_psi, TubeStressStatus.INCOMPLETE, hub_centers_estimated)
    if not (is_number(hub_centers_in) and is_number(radial_load_lbf)):
        return TubeStressResult(None, limit_psi, TubeStressStatus.INCOMPLETE, hub_centers_estimated)

    inner = tube_od_in - 2 * tube_wall_in
    if inner <= 0:
        return TubeStressResult(
            None, limit_psi, TubeStressStatus.ERROR, hub_centers_estimated,
            error_message=(
                f'Invalid tube geometry: wall thickness ({tube_wall_in}") '
                f'exceeds radius ({tube_od_in / 2}")'
            ),
        )

    stress = 8 * tube_od_in * radial_load_lbf * hub_centers_in / (math.pi * (tube_od_in ** 4 - inner ** 4))

    if stress > limit_psi:
        status = TubeStressStatus.FAIL if enforce_checks else TubeStressStatus.WARN
    elif hub_centers_estimated:
        status = TubeStressStatus.ESTIMATED
    else:
        status = TubeStressStatus.OK
    return TubeStressResult(stress, limit_psi, status, hub_centers_estimated)
