"""Numeric sanitizers shared by the engine and the state editor."""

from __future__ import annotations
import math
from typing import Any


def sanitize(value: Any) -> float:
    """Return value as a finite float; anything else becomes 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def non_negative(value: Any) -> float:
    return max(0.0, sanitize(value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the base is zero or the result is not finite."""
    if denominator == 0:
        return 0.0
    return sanitize(numerator / denominator)
