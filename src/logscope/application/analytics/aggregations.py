"""Analytics – pure aggregations over a record snapshot.

Every function takes an already-fetched sequence of records and returns
plain result objects; none of them touches a store.  Inputs may be in any
order; outputs are fully ordered so repeated calls are identical.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Sequence

from logscope.application.analytics.dto import (
    DashboardStatistics,
    EndpointStats,
    HourlyTrend,
    LevelCount,
    PerformanceSnapshot,
    SlowRequest,
    TopError,
)
from logscope.application.analytics.stats import (
    average,
    median,
    percentage,
    percentiles,
    rate_per_minute,
    window_minutes,
)
from logscope.domain import classifier
from logscope.domain.classifier import SLOW_REQUEST_THRESHOLD_MS
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import floor_to_hour

_HOUR = timedelta(hours=1)


def is_request_failure(record: LogRecord) -> bool:
    """Error/Fatal level, or an HTTP status of 400 and above."""
    status = record.response_status_code
    return record.is_error or (status is not None and status >= 400)


def _durations(records: Iterable[LogRecord]) -> list[int]:
    return [r.duration_ms for r in records if r.duration_ms is not None]


def compute_statistics(
    records: Sequence[LogRecord],
    *,
    today_logs: int = 0,
    slow_threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS,
) -> DashboardStatistics:
    total = len(records)
    errors = sum(1 for r in records if r.is_error)
    warnings = sum(1 for r in records if r.is_warning)
    http = [r for r in records if r.is_http_request]
    statuses = [r.response_status_code for r in records if r.response_status_code is not None]
    return DashboardStatistics(
        total_logs=total,
        today_logs=today_logs,
        error_count=errors,
        warning_count=warnings,
        info_count=total - errors - warnings,
        total_requests=len(http),
        avg_response_time=average(_durations(http)),
        slow_request_count=sum(
            1 for r in records if classifier.is_slow_request(r.duration_ms, slow_threshold_ms)
        ),
        http_4xx_count=sum(1 for s in statuses if 400 <= s < 500),
        http_5xx_count=sum(1 for s in statuses if s >= 500),
    )


def level_distribution(counts: Mapping[Severity, int]) -> list[LevelCount]:
    """One entry per severity with a positive count, most severe first."""
    total = sum(counts.values())
    return [
        LevelCount(level=level.label, count=count, percentage=percentage(count, total))
        for level, count in sorted(counts.items(), key=lambda item: item[0], reverse=True)
        if count > 0
    ]


def level_counts_of(records: Iterable[LogRecord]) -> dict[Severity, int]:
    counts = Counter(r.level for r in records)
    return {level: counts[level] for level in sorted(counts)}


def hour_buckets(from_date: datetime, to_date: datetime, max_buckets: int) -> list[datetime]:
    """Contiguous hour starts covering ``[from_date, to_date]``, newest *max_buckets* kept."""
    first = floor_to_hour(from_date)
    last = floor_to_hour(to_date)
    if last < first or max_buckets <= 0:
        return []
    span = int((last - first) / _HOUR) + 1
    if span > max_buckets:
        first = last - (max_buckets - 1) * _HOUR
        span = max_buckets
    return [first + i * _HOUR for i in range(span)]


def hourly_trends(
    records: Iterable[LogRecord],
    from_date: datetime,
    to_date: datetime,
    *,
    max_buckets: int = 168,
    slow_threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS,
) -> list[HourlyTrend]:
    """Zero-filled hourly buckets, oldest first."""
    hours = hour_buckets(from_date, to_date, max_buckets)
    grouped: dict[datetime, list[LogRecord]] = {hour: [] for hour in hours}
    for record in records:
        bucket = grouped.get(floor_to_hour(record.timestamp))
        if bucket is not None:
            bucket.append(record)

    trends = []
    for hour in hours:
        bucket = grouped[hour]
        trends.append(
            HourlyTrend(
                hour=hour,
                total_logs=len(bucket),
                total_requests=sum(1 for r in bucket if r.is_http_request),
                error_count=sum(1 for r in bucket if r.is_error),
                warning_count=sum(1 for r in bucket if r.is_warning),
                avg_response_time=average(_durations(bucket)),
                slow_request_count=sum(
                    1 for r in bucket if classifier.is_slow_request(r.duration_ms, slow_threshold_ms)
                ),
            )
        )
    return trends


@dataclass
class _ErrorGroup:
    message: str
    exception_type: str | None
    first: datetime
    last: datetime
    level: Severity
    count: int = 0
    endpoints: list[str] = field(default_factory=list)


def _error_key(record: LogRecord) -> tuple[str, str | None]:
    if record.has_exception:
        message = classifier.error_message(record.exception) or record.message
        return message, classifier.exception_type(record.exception)
    return record.message, None


def top_errors(
    records: Iterable[LogRecord],
    count: int,
    *,
    max_endpoints: int = 5,
) -> list[TopError]:
    """Error/Fatal records grouped by message and exception type.

    Ranked by occurrences, then most recent occurrence, then message.
    """
    errors = sorted((r for r in records if r.is_error), key=lambda r: r.sort_key())
    groups: dict[tuple[str, str | None], _ErrorGroup] = {}
    for record in errors:
        key = _error_key(record)
        group = groups.get(key)
        if group is None:
            group = groups[key] = _ErrorGroup(
                message=key[0],
                exception_type=key[1],
                first=record.timestamp,
                last=record.timestamp,
                level=record.level,
            )
        group.count += 1
        group.first = min(group.first, record.timestamp)
        group.last = max(group.last, record.timestamp)
        group.level = max(group.level, record.level)
        path = record.request_path
        if path and path not in group.endpoints and len(group.endpoints) < max_endpoints:
            group.endpoints.append(path)

    ranked = sorted(groups.values(), key=lambda g: (g.message, g.exception_type or ""))
    ranked.sort(key=lambda g: (g.count, g.last), reverse=True)
    return [
        TopError(
            error_message=g.message,
            exception_type=g.exception_type,
            count=g.count,
            first_occurrence=g.first,
            last_occurrence=g.last,
            affected_endpoints=tuple(g.endpoints),
            level=g.level.label,
        )
        for g in ranked[: max(0, count)]
    ]


def slow_requests(
    records: Iterable[LogRecord],
    count: int,
    *,
    threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS,
) -> list[SlowRequest]:
    """Records slower than *threshold_ms*, slowest first (ties newest first)."""
    slow = [r for r in records if classifier.is_slow_request(r.duration_ms, threshold_ms)]
    slow.sort(key=lambda r: (r.duration_ms, r.sort_key()), reverse=True)
    return [
        SlowRequest(
            request_path=r.request_path or "",
            http_method=r.http_method or "",
            duration=r.duration_ms,
            timestamp=r.timestamp,
            user_id=r.user_id,
            response_status_code=r.response_status_code,
            performance_level=r.performance_level.value,
        )
        for r in slow[: max(0, count)]
    ]


def endpoint_statistics(records: Iterable[LogRecord], count: int) -> list[EndpointStats]:
    """Per ``(path, method)`` request statistics, busiest first."""
    grouped: dict[tuple[str, str], list[LogRecord]] = {}
    for record in records:
        if record.is_http_request:
            grouped.setdefault((record.request_path, record.http_method), []).append(record)

    stats = []
    for (path, method), bucket in grouped.items():
        durations = _durations(bucket)
        failures = sum(1 for r in bucket if is_request_failure(r))
        stats.append(
            EndpointStats(
                endpoint=path,
                http_method=method,
                request_count=len(bucket),
                avg_duration=average(durations),
                min_duration=min(durations, default=0),
                max_duration=max(durations, default=0),
                error_count=failures,
                success_count=len(bucket) - failures,
            )
        )
    stats.sort(key=lambda s: (-s.request_count, s.endpoint, s.http_method))
    return stats[: max(0, count)]


def performance_snapshot(
    records: Iterable[LogRecord],
    from_date: datetime,
    to_date: datetime,
    *,
    error_rate_thresholds: tuple[float, float, float] = (10.0, 5.0, 1.0),
    p99_thresholds_ms: tuple[float, float, float] = (10000.0, 5000.0, 2000.0),
) -> PerformanceSnapshot:
    """Latency and throughput over the HTTP records of the window."""
    http = [r for r in records if r.is_http_request]
    total = len(http)
    failures = sum(1 for r in http if is_request_failure(r))
    durations = _durations(http)
    p95, p99 = percentiles(durations)
    minutes = window_minutes(from_date, to_date)
    error_rate = percentage(failures, total)
    return PerformanceSnapshot(
        avg_response_time=average(durations),
        p95_response_time=p95,
        p99_response_time=p99,
        median_response_time=median(durations),
        requests_per_minute=int(round(total / minutes)),
        errors_per_minute=int(round(failures / minutes)),
        throughput=rate_per_minute(total, from_date, to_date),
        total_requests=total,
        total_errors=failures,
        error_rate=error_rate,
        success_rate=percentage(total - failures, total),
        health_status=classifier.health_status(
            error_rate,
            p99,
            total,
            error_rate_thresholds=error_rate_thresholds,
            p99_thresholds_ms=p99_thresholds_ms,
        ).value,
    )


__all__ = [
    "compute_statistics",
    "endpoint_statistics",
    "hour_buckets",
    "hourly_trends",
    "is_request_failure",
    "level_counts_of",
    "level_distribution",
    "performance_snapshot",
    "slow_requests",
    "top_errors",
]
