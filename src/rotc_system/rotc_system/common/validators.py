from __future__ import annotations

import math
from typing import Any, Type

from ..core.exceptions import ValidationError


def require_number(value: Any, field_name: str, *, error: Type[ValidationError] = ValidationError) -> float:
    """Accept int/float (not bool, not NaN/inf) and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise error(f"{field_name} must be a number")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise error(f"{field_name} must be a finite number")
    return number


def require_in_range(
    value: Any,
    field_name: str,
    *,
    low: float,
    high: float,
    low_inclusive: bool = True,
    error: Type[ValidationError] = ValidationError,
) -> float:
    number = require_number(value, field_name, error=error)
    below = number < low if low_inclusive else number <= low
    if below or number > high:
        left = "[" if low_inclusive else "("
        raise error(f"{field_name} must be in {left}{low:g}, {high:g}], got {number:g}")
    return number


def require_int_in_range(
    value: Any,
    field_name: str,
    *,
    low: int,
    high: int,
    error: Type[ValidationError] = ValidationError,
) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise error(f"{field_name} must be an integer")
    if value < low or value > high:
        raise error(f"{field_name} must be in [{low}, {high}], got {value}")
    return value
