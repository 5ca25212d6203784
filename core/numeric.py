# core/numeric.py

"""
Numeric helpers shared by every grade aggregator.

All rounding in the gradebook goes through `round_half_up()`, which rounds half away
from zero on the shortest decimal representation of its input. Doing the rounding in
`Decimal` keeps inputs such as 7.005 from being pushed below the midpoint by their
binary floating-point approximation.

Callers filter out absent values before calling `mean()` or `weighted_mean()`, so an
empty input is a normal case here and yields 0.0 rather than an error.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

MIN_GRADE = 0.0
MAX_GRADE = 10.0


def round_half_up(value: Any, decimals: int = 2) -> float:
    """
    Rounds a number half away from zero to `decimals` places.

    Args:
        value (Any): An int, float, Decimal, or numeric string.
        decimals (int): Number of decimal places to keep. Defaults to 2.

    Returns:
        The rounded value as a float, or 0.0 if `value` is not a finite number.
    """
    if isinstance(value, bool):
        return 0.0

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(number):
        return 0.0

    exact = value if isinstance(value, Decimal) else Decimal(repr(number))
    quantum = Decimal(1).scaleb(-decimals)

    try:
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return number


def mean(values: Iterable[float]) -> float:
    values = list(values)

    if not values:
        return 0.0

    return sum(values) / len(values)


def weighted_mean(pairs: Iterable[tuple[float, float]], decimals: int = 2) -> float:
    """
    Computes the weighted mean of `(value, weight)` pairs, normalized by the weight sum.

    Args:
        pairs (Iterable[tuple[float, float]]): Graded values with their weights. Pairs for
            absent values must be excluded by the caller so the weight sum only reflects
            graded items.
        decimals (int): Number of decimal places for the result. Defaults to 2.

    Returns:
        The rounded weighted mean, or 0.0 when the weights sum to zero.
    """
    weighted_sum = 0.0
    weight_sum = 0.0

    for value, weight in pairs:
        weighted_sum += value * weight
        weight_sum += weight

    if weight_sum == 0:
        return 0.0

    return round_half_up(weighted_sum / weight_sum, decimals)


def coerce_grade(value: Any) -> float | None:
    """
    Reads a stored score as a grade, mapping anything unusable to None.

    None, booleans, non-numeric strings, non-finite numbers and values outside
    [MIN_GRADE, MAX_GRADE] are all treated as "no grade".
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number) or number < MIN_GRADE or number > MAX_GRADE:
        return None

    return number


def coerce_score(value: Any) -> float:
    """Reads one rubric slot for summing: missing or unusable slots count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0

    return number if math.isfinite(number) else 0.0
