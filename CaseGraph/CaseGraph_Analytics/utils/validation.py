"""
Call-time option checks shared by the analysis and layout functions.

Every check hands back the value it was given so it can be used inline,
and raises ``ValueError`` naming the offending option otherwise.
"""

from numbers import Real
from typing import Any, Collection, TypeVar

T = TypeVar("T")


def _is_count(value: Any) -> bool:
    # bool subclasses int but is never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


def validate_positive_integer(value: Any, name: str) -> int:
    """Require a count of at least one (hierarchy levels, sample sizes)."""
    if not _is_count(value) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def validate_non_negative_integer(value: Any, name: str) -> int:
    """Require a count of zero or more (iteration budgets)."""
    if not _is_count(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def validate_range(value: Any, name: str, low: float, high: float) -> float:
    """
    Require a real number inside the closed interval ``[low, high]``.

    Args:
        value: Candidate option value
        name: Option name used in the error message
        low: Smallest accepted value
        high: Largest accepted value

    Raises:
        ValueError: If ``value`` is not a real number or lies outside the bounds
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} must lie in [{low}, {high}], got {value}")
    return value


def validate_choice(value: T, name: str, choices: Collection[Any]) -> T:
    """Require one of a fixed set of options such as layout names or sort keys."""
    if value not in choices:
        expected = ", ".join(repr(choice) for choice in choices)
        raise ValueError(f"Unknown {name} {value!r}; expected one of {expected}")
    return value


__all__ = [
    "validate_choice",
    "validate_non_negative_integer",
    "validate_positive_integer",
    "validate_range",
]
