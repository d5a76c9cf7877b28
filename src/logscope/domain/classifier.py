"""Domain – pure classification functions.

Every function is total: ``None`` and out-of-range inputs map to a defined
tier (``Unknown`` / ``Normal`` / ``False``) instead of raising.
"""
from __future__ import annotations

from enum import Enum

from logscope.domain.severity import Severity

SLOW_REQUEST_THRESHOLD_MS = 5000


class PerformanceLevel(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    SLOW = "Slow"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"


class SlowOperationLevel(str, Enum):
    NORMAL = "Normal"
    WARNING = "Warning"
    SLOW = "Slow"
    CRITICAL = "Critical"


class StatusCategory(str, Enum):
    SUCCESS = "Success"
    REDIRECT = "Redirect"
    CLIENT_ERROR = "ClientError"
    SERVER_ERROR = "ServerError"
    UNKNOWN = "Unknown"


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    FAIR = "Fair"
    WARNING = "Warning"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"


_PERFORMANCE_STEPS = (
    (100, PerformanceLevel.EXCELLENT),
    (500, PerformanceLevel.GOOD),
    (1000, PerformanceLevel.FAIR),
    (5000, PerformanceLevel.SLOW),
)


def performance_level(duration_ms: int | float | None) -> PerformanceLevel:
    if duration_ms is None:
        return PerformanceLevel.UNKNOWN
    for upper, level in _PERFORMANCE_STEPS:
        if duration_ms <= upper:
            return level
    return PerformanceLevel.CRITICAL


def slow_operation_level(duration_ms: int | float | None) -> SlowOperationLevel:
    """Warning tier for long-running operations (distinct from :func:`performance_level`)."""
    if duration_ms is None:
        return SlowOperationLevel.NORMAL
    if duration_ms >= 10000:
        return SlowOperationLevel.CRITICAL
    if duration_ms >= 5000:
        return SlowOperationLevel.SLOW
    if duration_ms >= 1000:
        return SlowOperationLevel.WARNING
    return SlowOperationLevel.NORMAL


def status_category(status_code: int | None) -> StatusCategory:
    if status_code is None:
        return StatusCategory.UNKNOWN
    if 200 <= status_code < 300:
        return StatusCategory.SUCCESS
    if 300 <= status_code < 400:
        return StatusCategory.REDIRECT
    if 400 <= status_code < 500:
        return StatusCategory.CLIENT_ERROR
    if status_code >= 500:
        return StatusCategory.SERVER_ERROR
    return StatusCategory.UNKNOWN


def is_error(level: Severity | int | str | None) -> bool:
    return Severity.coerce(level) in (Severity.ERROR, Severity.FATAL)


def is_warning(level: Severity | int | str | None) -> bool:
    return Severity.coerce(level) is Severity.WARNING


def is_slow_request(
    duration_ms: int | float | None,
    threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS,
) -> bool:
    return duration_ms is not None and duration_ms > threshold_ms


def level_priority(level: Severity | int | str | None) -> int:
    """Sort key for severity tiers; unknown levels sort lowest."""
    severity = Severity.coerce(level)
    return int(severity) if severity is not None else 0


def health_status(
    error_rate: float,
    p99_ms: float,
    total_requests: int,
    *,
    error_rate_thresholds: tuple[float, float, float] = (10.0, 5.0, 1.0),
    p99_thresholds_ms: tuple[float, float, float] = (10000.0, 5000.0, 2000.0),
) -> HealthStatus:
    """Label system health from error rate (percent) and p99 latency.

    Thresholds are ``(critical, warning, fair)``; a metric strictly above a
    threshold reaches that tier.
    """
    if total_requests <= 0:
        return HealthStatus.UNKNOWN
    tiers = (HealthStatus.CRITICAL, HealthStatus.WARNING, HealthStatus.FAIR)
    for tier, rate_limit, p99_limit in zip(tiers, error_rate_thresholds, p99_thresholds_ms):
        if error_rate > rate_limit or p99_ms > p99_limit:
            return tier
    return HealthStatus.HEALTHY


def friendly_duration(duration_ms: int | float | None) -> str:
    if duration_ms is None:
        return "N/A"
    if duration_ms < 1000:
        return f"{duration_ms}ms"
    return f"{duration_ms / 1000:.2f}s"


def _first_line(exception: str | None) -> str | None:
    if exception is None:
        return None
    for line in exception.splitlines():
        if line.strip():
            return line.strip()
    return None


def exception_type(exception: str | None) -> str | None:
    """``"ValueError"`` from ``"ValueError: bad input\\n  at ..."``."""
    line = _first_line(exception)
    if line is None:
        return None
    head, sep, _ = line.partition(":")
    return head.strip() if sep and head.strip() else line


def error_message(exception: str | None) -> str | None:
    """``"bad input"`` from ``"ValueError: bad input\\n  at ..."``."""
    line = _first_line(exception)
    if line is None:
        return None
    head, sep, tail = line.partition(":")
    return tail.strip() if sep and head.strip() else line


__all__ = [
    "SLOW_REQUEST_THRESHOLD_MS",
    "HealthStatus",
    "PerformanceLevel",
    "SlowOperationLevel",
    "StatusCategory",
    "error_message",
    "exception_type",
    "friendly_duration",
    "health_status",
    "is_error",
    "is_slow_request",
    "is_warning",
    "level_priority",
    "performance_level",
    "slow_operation_level",
    "status_category",
]
