"""Unit tests for DashboardRequest normalisation."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from logscope.application.analytics import DashboardRequest

NOW = datetime(2024, 6, 1, 12, 30)


class TestDashboardRequestNormalisation:
    def test_defaults_to_trailing_day(self) -> None:
        req = DashboardRequest().normalized(NOW)
        assert req.to_date == NOW
        assert req.from_date == NOW - timedelta(hours=24)

    def test_custom_default_window(self) -> None:
        req = DashboardRequest().normalized(NOW, default_window_hours=6)
        assert req.from_date == NOW - timedelta(hours=6)

    def test_reversed_window_swapped(self) -> None:
        early, late = NOW - timedelta(days=2), NOW - timedelta(days=1)
        req = DashboardRequest(from_date=late, to_date=early).normalized(NOW)
        assert (req.from_date, req.to_date) == (early, late)

    def test_window_capped_keeps_end(self) -> None:
        req = DashboardRequest(from_date=NOW - timedelta(days=90), to_date=NOW).normalized(NOW)
        assert req.to_date == NOW
        assert req.from_date == NOW - timedelta(days=30)

    def test_future_end_clamped_to_now(self) -> None:
        req = DashboardRequest(from_date=NOW - timedelta(hours=1), to_date=NOW + timedelta(days=1)).normalized(NOW)
        assert req.to_date == NOW

    def test_fully_future_window(self) -> None:
        req = DashboardRequest(from_date=NOW + timedelta(days=1), to_date=NOW + timedelta(days=2)).normalized(NOW)
        assert req.to_date == NOW
        assert req.from_date <= req.to_date

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 10), (-1, 10), (101, 10), (1, 1), (100, 100)],
    )
    def test_top_errors_count_clamped(self, value: int, expected: int) -> None:
        assert DashboardRequest(top_errors_count=value).normalized(NOW).top_errors_count == expected

    def test_other_leaderboards_clamped(self) -> None:
        req = DashboardRequest(top_endpoints_count=0, slow_requests_count=500).normalized(NOW)
        assert req.top_endpoints_count == 10
        assert req.slow_requests_count == 20

    def test_idempotent(self) -> None:
        once = DashboardRequest(top_errors_count=0).normalized(NOW)
        assert once.normalized(NOW) == once

    def test_from_dict(self) -> None:
        req = DashboardRequest.from_dict(
            {
                "fromDate": "2024-05-31T00:00:00",
                "topErrorsCount": "5",
                "includeHourlyTrends": "false",
            }
        )
        assert req.from_date == datetime(2024, 5, 31)
        assert req.top_errors_count == 5
        assert req.include_hourly_trends is False
        assert req.include_performance_metrics is True
        assert req.slow_requests_count == 20
