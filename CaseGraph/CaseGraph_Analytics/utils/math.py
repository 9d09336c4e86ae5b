"""
Mathematical utility functions for CaseGraph analytics.

This module contains numeric helpers shared by the analysis and layout
layers, and duration formatting for progress logs.
"""

import math
from typing import Union

Number = Union[int, float]


def safe_divide(numerator: Number, denominator: Number, default: float = 0.0) -> float:
    """
    Divide, returning ``default`` when the denominator is zero or not finite.

    Args:
        numerator: Dividend
        denominator: Divisor
        default: Value returned for degenerate divisors

    Returns:
        float: The quotient or ``default``
    """
    if denominator == 0 or not math.isfinite(denominator):
        return default
    return numerator / denominator


def scale_value(
    value: Number, low: Number, high: Number, out_min: Number, out_max: Number
) -> float:
    """
    Linearly map ``value`` from ``[low, high]`` onto ``[out_min, out_max]``.

    A zero-width input range maps every value onto ``out_min``.
    """
    span = high - low
    if span == 0:
        return float(out_min)
    ratio = (value - low) / span
    return out_min + clamp_value(ratio, 0.0, 1.0) * (out_max - out_min)


def clamp_value(value: Number, lower: Number, upper: Number) -> Number:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def format_time_duration(seconds: float) -> str:
    """Render a duration for progress logs, e.g. ``"45.2 seconds"`` or ``"2 minutes 5 seconds"``."""
    if seconds < 0:
        raise ValueError(f"duration must be non-negative, got {seconds}")
    if seconds < 60:
        return f"{seconds:.1f} seconds"

    minutes, rest = divmod(int(round(seconds)), 60)
    parts = [f"{minutes} minute{'s' if minutes != 1 else ''}"]
    if rest:
        parts.append(f"{rest} seconds")
    return " ".join(parts)


__all__ = [
    "safe_divide",
    "scale_value",
    "clamp_value",
    "format_time_duration",
]
