"""Analytics – dashboard result objects.

Plain dataclasses; :meth:`to_dict` renders the camelCase wire shape with
naive ISO timestamps.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from logscope.application.analytics.stats import percentage
from logscope.application.wire import iso
from logscope.domain.record import LogRecord


@dataclasses.dataclass(frozen=True)
class DashboardStatistics:
    total_logs: int = 0
    today_logs: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    total_requests: int = 0
    avg_response_time: float = 0.0
    slow_request_count: int = 0
    http_4xx_count: int = 0
    http_5xx_count: int = 0

    @property
    def error_rate(self) -> float:
        return percentage(self.error_count, self.total_requests)

    @property
    def success_rate(self) -> float:
        return percentage(self.total_requests - self.error_count, self.total_requests)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalLogs": self.total_logs,
            "todayLogs": self.today_logs,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "totalRequests": self.total_requests,
            "avgResponseTime": self.avg_response_time,
            "slowRequestCount": self.slow_request_count,
            "http4xxCount": self.http_4xx_count,
            "http5xxCount": self.http_5xx_count,
            "errorRate": self.error_rate,
            "successRate": self.success_rate,
        }


@dataclasses.dataclass(frozen=True)
class LevelCount:
    level: str
    count: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "count": self.count, "percentage": self.percentage}


@dataclasses.dataclass(frozen=True)
class HourlyTrend:
    hour: datetime
    total_logs: int = 0
    total_requests: int = 0
    error_count: int = 0
    warning_count: int = 0
    avg_response_time: float = 0.0
    slow_request_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_logs == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hour": iso(self.hour),
            "totalLogs": self.total_logs,
            "totalRequests": self.total_requests,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "avgResponseTime": self.avg_response_time,
            "slowRequestCount": self.slow_request_count,
        }


@dataclasses.dataclass(frozen=True)
class TopError:
    error_message: str
    exception_type: str | None
    count: int
    first_occurrence: datetime
    last_occurrence: datetime
    affected_endpoints: tuple[str, ...]
    level: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "errorMessage": self.error_message,
            "exceptionType": self.exception_type,
            "count": self.count,
            "firstOccurrence": iso(self.first_occurrence),
            "lastOccurrence": iso(self.last_occurrence),
            "affectedEndpoints": list(self.affected_endpoints),
            "level": self.level,
        }


@dataclasses.dataclass(frozen=True)
class SlowRequest:
    request_path: str
    http_method: str
    duration: int
    timestamp: datetime
    user_id: str | None
    response_status_code: int | None
    performance_level: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "requestPath": self.request_path,
            "httpMethod": self.http_method,
            "duration": self.duration,
            "timeStamp": iso(self.timestamp),
            "userId": self.user_id,
            "responseStatusCode": self.response_status_code,
            "performanceLevel": self.performance_level,
        }


@dataclasses.dataclass(frozen=True)
class EndpointStats:
    endpoint: str
    http_method: str
    request_count: int
    avg_duration: float
    min_duration: int
    max_duration: int
    error_count: int
    success_count: int

    @property
    def error_rate(self) -> float:
        return percentage(self.error_count, self.request_count)

    @property
    def success_rate(self) -> float:
        return percentage(self.success_count, self.request_count)

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "httpMethod": self.http_method,
            "requestCount": self.request_count,
            "avgDuration": self.avg_duration,
            "minDuration": self.min_duration,
            "maxDuration": self.max_duration,
            "errorCount": self.error_count,
            "successCount": self.success_count,
            "errorRate": self.error_rate,
            "successRate": self.success_rate,
        }


@dataclasses.dataclass(frozen=True)
class RecentLogEntry:
    timestamp: datetime
    level: str
    message: str
    request_path: str | None
    http_method: str | None
    duration: int | None
    response_status_code: int | None
    user_id: str | None
    has_exception: bool
    exception: str | None

    @classmethod
    def from_record(cls, record: LogRecord) -> RecentLogEntry:
        return cls(
            timestamp=record.timestamp,
            level=record.level.label,
            message=record.message,
            request_path=record.request_path,
            http_method=record.http_method,
            duration=record.duration_ms,
            response_status_code=record.response_status_code,
            user_id=record.user_id,
            has_exception=record.has_exception,
            exception=record.exception,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeStamp": iso(self.timestamp),
            "level": self.level,
            "message": self.message,
            "requestPath": self.request_path,
            "httpMethod": self.http_method,
            "duration": self.duration,
            "responseStatusCode": self.response_status_code,
            "userId": self.user_id,
            "hasException": self.has_exception,
            "exception": self.exception,
        }


@dataclasses.dataclass(frozen=True)
class PerformanceSnapshot:
    avg_response_time: float = 0.0
    p95_response_time: float = 0.0
    p99_response_time: float = 0.0
    median_response_time: float = 0.0
    requests_per_minute: int = 0
    errors_per_minute: int = 0
    throughput: float = 0.0
    total_requests: int = 0
    total_errors: int = 0
    error_rate: float = 0.0
    success_rate: float = 0.0
    health_status: str = "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgResponseTime": self.avg_response_time,
            "p95ResponseTime": self.p95_response_time,
            "p99ResponseTime": self.p99_response_time,
            "medianResponseTime": self.median_response_time,
            "requestsPerMinute": self.requests_per_minute,
            "errorsPerMinute": self.errors_per_minute,
            "throughput": self.throughput,
            "totalRequests": self.total_requests,
            "totalErrors": self.total_errors,
            "errorRate": self.error_rate,
            "successRate": self.success_rate,
            "healthStatus": self.health_status,
        }


@dataclasses.dataclass(frozen=True)
class DashboardResult:
    """Entirely derived view; recomputed per request."""

    statistics: DashboardStatistics
    level_distribution: list[LevelCount]
    hourly_trends: list[HourlyTrend]
    top_errors: list[TopError]
    slow_requests: list[SlowRequest]
    top_endpoints: list[EndpointStats]
    recent_logs: list[RecentLogEntry]
    performance: PerformanceSnapshot
    generated_at: datetime
    from_date: datetime | None = None
    to_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "statistics": self.statistics.to_dict(),
            "logLevelDistribution": [item.to_dict() for item in self.level_distribution],
            "hourlyTrends": [item.to_dict() for item in self.hourly_trends],
            "topErrors": [item.to_dict() for item in self.top_errors],
            "slowRequests": [item.to_dict() for item in self.slow_requests],
            "topEndpoints": [item.to_dict() for item in self.top_endpoints],
            "recentLogs": [item.to_dict() for item in self.recent_logs],
            "performance": self.performance.to_dict(),
            "fromDate": iso(self.from_date),
            "toDate": iso(self.to_date),
            "generatedAt": iso(self.generated_at),
        }


__all__ = [
    "DashboardResult",
    "DashboardStatistics",
    "EndpointStats",
    "HourlyTrend",
    "LevelCount",
    "PerformanceSnapshot",
    "RecentLogEntry",
    "SlowRequest",
    "TopError",
]
