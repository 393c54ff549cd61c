"""Numeric helpers shared by the aggregation, goals and trends packages.

Rounding is half-up (0.5 rounds toward positive infinity) so that displayed
values match what dashboard users expect, rather than Python's banker's
rounding.

Example:
    >>> round1(2.45)
    2.5
    >>> safe_divide(3, 0) is None
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from stats_engine.types import OptionalStat


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` half-up to ``digits`` decimal places.

    Args:
        value: Finite number to round.
        digits: Number of decimal places.

    Returns:
        Rounded value as float.
    """
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    # Avoid surfacing -0.0
    return rounded + 0.0


def round0(value: float) -> float:
    """Round half-up to a whole number."""
    return round_half_up(value, 0)


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return round_half_up(value, 1)


def is_number(value: object) -> bool:
    """Return True for finite int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def safe_divide(numerator: float, denominator: float) -> OptionalStat:
    """Divide, returning None instead of raising or producing NaN/inf."""
    if denominator == 0:
        return None
    result = numerator / denominator
    if not math.isfinite(result):
        return None
    return result


def non_zero_mean(values: Iterable[OptionalStat]) -> float:
    """Average of the strictly positive values, 0.0 when there are none.

    Zero and absent contributors are excluded from the denominator rather
    than counted as zero.

    Example:
        >>> non_zero_mean([0, 0, 5, 7])
        6.0
    """
    contributors = [v for v in values if v is not None and is_number(v) and v > 0]
    if not contributors:
        return 0.0
    return math.fsum(contributors) / len(contributors)
