"""Unit tests for the zero-guarded analytics helpers."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from logscope.application.analytics.stats import (
    average,
    median,
    nearest_rank,
    percentage,
    percentiles,
    rate_per_minute,
    window_minutes,
)


class TestZeroGuards:
    def test_percentage_zero_total(self) -> None:
        assert percentage(5, 0) == 0.0

    def test_empty_sequences(self) -> None:
        assert average([]) == 0.0
        assert median([]) == 0.0
        assert percentiles([]) == (0.0, 0.0)
        assert nearest_rank([], 95) == 0.0


class TestValues:
    def test_percentage_rounds(self) -> None:
        assert percentage(1, 3) == 33.33
        assert percentage(10, 100) == 10.0

    def test_average(self) -> None:
        assert average([1, 2, 2]) == 1.67

    @pytest.mark.parametrize(
        ("n", "percent", "expected"),
        [(1, 95, 1), (10, 95, 10), (20, 95, 19), (100, 95, 95), (100, 99, 99), (200, 99, 198)],
    )
    def test_nearest_rank(self, n: int, percent: int, expected: int) -> None:
        assert nearest_rank(list(range(1, n + 1)), percent) == expected

    def test_percentiles_unsorted_input(self) -> None:
        assert percentiles([300, 100, 200]) == (300.0, 300.0)

    def test_upper_median(self) -> None:
        assert median([4, 1, 3, 2]) == 3.0
        assert median([5, 1, 3]) == 3.0


class TestRates:
    def test_window_minutes_floor(self) -> None:
        start = datetime(2024, 1, 1)
        assert window_minutes(start, start) == 1.0
        assert window_minutes(start, start + timedelta(hours=2)) == 120.0

    def test_rate_per_minute(self) -> None:
        start = datetime(2024, 1, 1)
        assert rate_per_minute(100, start, start + timedelta(minutes=30)) == 3.33
