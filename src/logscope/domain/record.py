"""Domain – LogRecord, the immutable unit every query reads."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from logscope.domain import classifier
from logscope.domain.classifier import PerformanceLevel, StatusCategory
from logscope.domain.severity import Severity
from logscope.kernel.time import format_timestamp, to_naive


@dataclasses.dataclass(frozen=True)
class LogRecord:
    """One persisted structured log entry.

    Records are append-only: this package never updates or deletes them.
    ``timestamp`` is always naive server-local time; aware values are
    stripped of their zone on construction.
    """

    message: str
    level: Severity
    timestamp: datetime
    exception: str | None = None
    properties: Mapping[str, Any] = dataclasses.field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )
    message_template: str | None = None
    record_id: int | None = None
    user_id: str | None = None
    request_id: str | None = None
    correlation_id: str | None = None
    http_method: str | None = None
    request_path: str | None = None
    response_status_code: int | None = None
    duration_ms: int | None = None
    application: str | None = None
    log_event: str | None = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.duration_ms is not None and self.duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        if not isinstance(self.level, Severity):
            object.__setattr__(self, "level", Severity(self.level))
        if self.timestamp.tzinfo is not None:
            object.__setattr__(self, "timestamp", to_naive(self.timestamp))
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def is_error(self) -> bool:
        return classifier.is_error(self.level)

    @property
    def is_warning(self) -> bool:
        return classifier.is_warning(self.level)

    @property
    def is_slow_request(self) -> bool:
        return classifier.is_slow_request(self.duration_ms)

    @property
    def is_http_request(self) -> bool:
        return bool(self.http_method) and bool(self.request_path)

    @property
    def has_exception(self) -> bool:
        return bool(self.exception)

    @property
    def performance_level(self) -> PerformanceLevel:
        return classifier.performance_level(self.duration_ms)

    @property
    def status_category(self) -> StatusCategory:
        return classifier.status_category(self.response_status_code)

    @property
    def formatted_timestamp(self) -> str:
        return format_timestamp(self.timestamp)

    def sort_key(self) -> tuple[datetime, int]:
        """Newest-first ordering key (timestamp, then insertion id)."""
        return (self.timestamp, self.record_id if self.record_id is not None else -1)


__all__ = ["LogRecord"]
