"""Analytics – DashboardRequest."""
from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import Any, Mapping

from logscope.application.wire import parse_bool, parse_datetime, parse_int, pick
from logscope.kernel.time import to_naive

DEFAULT_TOP_ERRORS = 10
DEFAULT_TOP_ENDPOINTS = 10
DEFAULT_SLOW_REQUESTS = 20
MAX_LEADERBOARD_SIZE = 100


def _leaderboard_size(value: int, default: int) -> int:
    return value if 0 < value <= MAX_LEADERBOARD_SIZE else default


@dataclasses.dataclass(frozen=True)
class DashboardRequest:
    """Window and leaderboard sizes for :meth:`DashboardService.build_dashboard`."""

    from_date: datetime | None = None
    to_date: datetime | None = None
    top_errors_count: int = DEFAULT_TOP_ERRORS
    top_endpoints_count: int = DEFAULT_TOP_ENDPOINTS
    slow_requests_count: int = DEFAULT_SLOW_REQUESTS
    include_hourly_trends: bool = True
    include_performance_metrics: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DashboardRequest:
        def _int(snake: str, camel: str, default: int) -> int:
            value = parse_int(pick(data, snake, camel))
            return default if value is None else value

        def _flag(snake: str, camel: str) -> bool:
            value = parse_bool(pick(data, snake, camel))
            return True if value is None else value

        return cls(
            from_date=parse_datetime(pick(data, "from_date", "fromDate")),
            to_date=parse_datetime(pick(data, "to_date", "toDate")),
            top_errors_count=_int("top_errors_count", "topErrorsCount", DEFAULT_TOP_ERRORS),
            top_endpoints_count=_int("top_endpoints_count", "topEndpointsCount", DEFAULT_TOP_ENDPOINTS),
            slow_requests_count=_int("slow_requests_count", "slowRequestsCount", DEFAULT_SLOW_REQUESTS),
            include_hourly_trends=_flag("include_hourly_trends", "includeHourlyTrends"),
            include_performance_metrics=_flag("include_performance_metrics", "includePerformanceMetrics"),
        )

    def normalized(
        self,
        now: datetime,
        *,
        default_window_hours: int = 24,
        max_window_days: int = 30,
    ) -> DashboardRequest:
        """Resolve the window against *now* and clamp leaderboard sizes.

        Missing bounds default to the trailing ``default_window_hours``; a
        reversed window is swapped; windows longer than ``max_window_days``
        keep their end; nothing extends past *now*.
        """
        now = to_naive(now)
        to_date = to_naive(self.to_date) or now
        from_date = to_naive(self.from_date) or to_date - timedelta(hours=default_window_hours)

        if from_date > to_date:
            from_date, to_date = to_date, from_date
        if to_date - from_date > timedelta(days=max_window_days):
            from_date = to_date - timedelta(days=max_window_days)
        if to_date > now:
            to_date = now
        if from_date > now:
            from_date = now - timedelta(hours=default_window_hours)

        return dataclasses.replace(
            self,
            from_date=from_date,
            to_date=to_date,
            top_errors_count=_leaderboard_size(self.top_errors_count, DEFAULT_TOP_ERRORS),
            top_endpoints_count=_leaderboard_size(self.top_endpoints_count, DEFAULT_TOP_ENDPOINTS),
            slow_requests_count=_leaderboard_size(self.slow_requests_count, DEFAULT_SLOW_REQUESTS),
        )


__all__ = ["DashboardRequest"]
