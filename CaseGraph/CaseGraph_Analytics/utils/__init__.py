"""
Shared helpers for CaseGraph analytics.

``validation`` checks call-time options, ``progress`` logs long loops and
``math`` holds the numeric helpers used for scaling and logging.
"""

from .math import clamp_value, format_time_duration, safe_divide, scale_value
from .progress import ProgressTracker
from .validation import (
    validate_choice,
    validate_non_negative_integer,
    validate_positive_integer,
    validate_range,
)

__all__ = [
    "ProgressTracker",
    "clamp_value",
    "format_time_duration",
    "safe_divide",
    "scale_value",
    "validate_choice",
    "validate_non_negative_integer",
    "validate_positive_integer",
    "validate_range",
]
