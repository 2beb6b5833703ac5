"""Rounding helpers for monetary and percentage figures."""

import math


def round_money(value: float) -> float:
    """Round a dollar amount to cents, halves away from zero."""
    scaled = abs(value) * 100
    rounded = math.floor(scaled + 0.5 + 1e-9) / 100
    return math.copysign(rounded, value) if rounded else 0.0


def percent_of(part: float, whole: float) -> int:
    """Integer percentage of ``part`` in ``whole`` (0 when whole is 0)."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))
