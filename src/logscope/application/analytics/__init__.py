"""Application analytics – dashboards, leaderboards and trend aggregation."""
from logscope.application.analytics.dto import (
    DashboardResult,
    DashboardStatistics,
    EndpointStats,
    HourlyTrend,
    LevelCount,
    PerformanceSnapshot,
    RecentLogEntry,
    SlowRequest,
    TopError,
)
from logscope.application.analytics.request import DashboardRequest
from logscope.application.analytics.service import DashboardService

__all__ = [
    "DashboardRequest",
    "DashboardResult",
    "DashboardService",
    "DashboardStatistics",
    "EndpointStats",
    "HourlyTrend",
    "LevelCount",
    "PerformanceSnapshot",
    "RecentLogEntry",
    "SlowRequest",
    "TopError",
]
