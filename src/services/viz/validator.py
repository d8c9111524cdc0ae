"""Structural validation of chart datasets.

Validation never raises. Apart from the three shape preconditions, every
item is checked and all problems are reported together.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from src.config.constants import ChartType, is_multi_series
from src.services.viz.models import ValidationResult, read_field


def _is_sequence(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value: int | float) -> bool:
    # ints wider than a double overflow in the conversion
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def validate_dataset(chart_type: ChartType | str, data: Any) -> ValidationResult:
    """Check ``data`` against the shape ``chart_type`` consumes.

    Args:
        chart_type: Chart tag; multi-series tags expect a list of series.
        data: Flat list of points, or list of series.

    Returns:
        ValidationResult with every error found, in item order.
    """
    if data is None:
        return ValidationResult(valid=False, errors=("Data is null or undefined",))
    if not _is_sequence(data):
        return ValidationResult(valid=False, errors=("Data must be an array",))
    if len(data) == 0:
        return ValidationResult(valid=False, errors=("Data array is empty",))

    if is_multi_series(chart_type):
        errors = _validate_series(data)
    else:
        errors = _validate_points(data)
    return ValidationResult(valid=not errors, errors=tuple(errors))


def _validate_series(data: Sequence[Any]) -> list[str]:
    errors: list[str] = []
    for index, series in enumerate(data):
        name = read_field(series, "seriesName", "series_name")
        if not name:
            errors.append(f"Series at index {index} is missing seriesName")
        points = read_field(series, "data")
        if not _is_sequence(points):
            errors.append(f"Series at index {index} has invalid data (not an array)")
        elif len(points) == 0:
            errors.append(f'Series "{name}" has empty data array')
    return errors


def _validate_points(data: Sequence[Any]) -> list[str]:
    errors: list[str] = []
    for index, item in enumerate(data):
        if read_field(item, "name") is None:
            errors.append(f"Data item at index {index} is missing name")
        value = read_field(item, "value")
        if value is None:
            errors.append(f"Data item at index {index} is missing value")
        elif _is_number(value) and not _is_finite(value):
            errors.append(f"Data item at index {index} has invalid value (NaN or Infinity)")
    return errors
