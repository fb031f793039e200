"""Numeric helpers shared by the scorers."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    """Round to one decimal place with half-up semantics (77.75 -> 77.8)."""
    return math.floor(value * 10 + 0.5) / 10


def clamp_percentage(value: float) -> float:
    return max(0.0, min(100.0, value))
