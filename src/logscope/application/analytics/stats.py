"""Analytics – zero-guarded numeric helpers.

Every helper returns ``0`` on empty input or a zero denominator; none of
them raises or produces NaN.
"""
from __future__ import annotations

from datetime import datetime
from typing import Sequence


def percentage(value: int | float, total: int | float, places: int = 2) -> float:
    if total <= 0:
        return 0.0
    return round(value / total * 100, places)


def average(values: Sequence[int | float], places: int = 2) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), places)


def nearest_rank(sorted_values: Sequence[int | float], percent: int) -> float:
    """Exact nearest-rank percentile of an ascending sequence.

    The rank is ``ceil(n * percent / 100)`` computed in integers, clamped
    to ``[1, n]``.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    rank = (n * percent + 99) // 100
    index = min(max(rank, 1), n) - 1
    return float(sorted_values[index])


def percentiles(values: Sequence[int | float]) -> tuple[float, float]:
    """``(p95, p99)`` of *values* (any order)."""
    ordered = sorted(values)
    return nearest_rank(ordered, 95), nearest_rank(ordered, 99)


def median(values: Sequence[int | float]) -> float:
    """Upper median (element ``n // 2`` of the sorted sample)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    return float(ordered[len(ordered) // 2])


def window_minutes(from_date: datetime, to_date: datetime) -> float:
    """Window length in minutes, never below one minute."""
    return max(1.0, (to_date - from_date).total_seconds() / 60)


def rate_per_minute(count: int, from_date: datetime, to_date: datetime) -> float:
    return round(count / window_minutes(from_date, to_date), 2)


__all__ = [
    "average",
    "median",
    "nearest_rank",
    "percentage",
    "percentiles",
    "rate_per_minute",
    "window_minutes",
]
