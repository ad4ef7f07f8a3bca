"""
NaN-sentinel arithmetic helpers.

Formulas run over incomplete inputs. A missing or uncomputable quantity is
math.nan and stays nan through every downstream formula instead of raising.
"""

import math
from typing import Optional

NAN = math.nan


def num(value: Optional[float]) -> float:
    """Float value, or nan when missing."""
    if value is None:
        return NAN
    return float(value)


def safe_div(numerator: float, denominator: float) -> float:
    """Division that yields nan for a zero or nan denominator."""
    if denominator == 0 or math.isnan(denominator) or math.isnan(numerator):
        return NAN
    return numerator / denominator


def is_number(value: Optional[float]) -> bool:
    """True for a finite, real number."""
    return value is not None and math.isfinite(value)


def positive(value: Optional[float]) -> float:
    """Value when it is a positive number, else nan."""
    if is_number(value) and value > 0:
        return float(value)
    return NAN


def or_none(value: float) -> Optional[float]:
    """nan -> None, for outputs that are absent rather than uncomputable."""
    if value is None or math.isnan(value):
        return None
    return value
