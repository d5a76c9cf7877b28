"""Domain – severity tiers, log records, payload parsing and classification."""
from logscope.domain.classifier import (
    HealthStatus,
    PerformanceLevel,
    SlowOperationLevel,
    StatusCategory,
)
from logscope.domain.payload import LogEventPayload
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity

__all__ = [
    "HealthStatus",
    "LogEventPayload",
    "LogRecord",
    "PerformanceLevel",
    "Severity",
    "SlowOperationLevel",
    "StatusCategory",
]
