"""Numeric normalization for size and index arguments."""

import math
import numbers
from typing import Any, Union

Size = Union[int, float]


def to_integer(value: Any) -> Size:
    """
    Convert ``value`` to an integer the permissive way.

    Numbers are truncated toward zero, numeric strings are parsed,
    infinities are kept and anything else (including NaN) becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, numbers.Real):
        return 0
    value = float(value)
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return value
    return int(value)


def to_size(value: Any, default: int = 1) -> Size:
    """
    Normalize a take/drop count: ``None`` means ``default``,
    everything else is floored and clamped to be non-negative.

    >>> to_size(-5)
    0
    >>> to_size(2.7)
    2
    """
    if value is None:
        return default
    return max(to_integer(value), 0)
