"""Application search – LogRecordView and SearchResult."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from logscope.application.pagination import Page
from logscope.application.wire import iso
from logscope.domain.record import LogRecord


@dataclasses.dataclass(frozen=True)
class LogRecordView:
    """Wire view of one :class:`LogRecord` with its derived tiers."""

    id: int | None
    message: str
    level: str
    timestamp: datetime
    exception: str | None
    properties: dict[str, Any]
    log_event: str | None
    user_id: str | None
    request_id: str | None
    correlation_id: str | None
    http_method: str | None
    request_path: str | None
    response_status_code: int | None
    duration: int | None
    application: str | None
    is_error: bool
    is_slow_request: bool
    has_exception: bool
    performance_level: str
    status_category: str

    @classmethod
    def from_record(cls, record: LogRecord) -> LogRecordView:
        return cls(
            id=record.record_id,
            message=record.message,
            level=record.level.label,
            timestamp=record.timestamp,
            exception=record.exception,
            properties=dict(record.properties),
            log_event=record.log_event,
            user_id=record.user_id,
            request_id=record.request_id,
            correlation_id=record.correlation_id,
            http_method=record.http_method,
            request_path=record.request_path,
            response_status_code=record.response_status_code,
            duration=record.duration_ms,
            application=record.application,
            is_error=record.is_error,
            is_slow_request=record.is_slow_request,
            has_exception=record.has_exception,
            performance_level=record.performance_level.value,
            status_category=record.status_category.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "level": self.level,
            "timeStamp": iso(self.timestamp),
            "exception": self.exception,
            "properties": self.properties,
            "logEvent": self.log_event,
            "userId": self.user_id,
            "requestId": self.request_id,
            "correlationId": self.correlation_id,
            "httpMethod": self.http_method,
            "requestPath": self.request_path,
            "responseStatusCode": self.response_status_code,
            "duration": self.duration,
            "application": self.application,
            "isError": self.is_error,
            "isSlowRequest": self.is_slow_request,
            "hasException": self.has_exception,
            "performanceLevel": self.performance_level,
            "statusCategory": self.status_category,
        }


@dataclasses.dataclass
class SearchResult:
    items: list[LogRecordView]
    total_count: int
    page: int
    page_size: int
    took_ms: int = 0

    @classmethod
    def from_page(cls, page: Page[LogRecordView], took_ms: int = 0) -> SearchResult:
        return cls(items=page.items, total_count=page.total, page=page.page, page_size=page.size, took_ms=took_ms)

    @property
    def total_pages(self) -> int:
        return Page(items=self.items, total=self.total_count, page=self.page, size=self.page_size).total_pages

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalCount": self.total_count,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
        }


__all__ = ["LogRecordView", "SearchResult"]
