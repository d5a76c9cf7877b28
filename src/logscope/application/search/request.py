"""Application search – SearchRequest value object."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Mapping

from logscope.application.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest
from logscope.application.store import RecordQuery
from logscope.application.wire import parse_bool, parse_datetime, parse_int, pick
from logscope.domain.classifier import SLOW_REQUEST_THRESHOLD_MS
from logscope.domain.severity import Severity


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclasses.dataclass(frozen=True)
class SearchRequest:
    """Filter specification for :meth:`LogSearchService.search`.

    Never rejected: :meth:`normalized` corrects paging, duration bounds,
    reversed date ranges and unknown level names.
    """

    from_date: datetime | None = None
    to_date: datetime | None = None
    log_levels: tuple[str, ...] = ()
    search_text: str | None = None
    user_id: str | None = None
    request_path: str | None = None
    http_method: str | None = None
    min_duration: int | None = None
    max_duration: int | None = None
    has_exception: bool | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchRequest:
        levels = pick(data, "log_levels", "logLevels") or ()
        if isinstance(levels, str):
            levels = [levels]
        return cls(
            from_date=parse_datetime(pick(data, "from_date", "fromDate")),
            to_date=parse_datetime(pick(data, "to_date", "toDate")),
            log_levels=tuple(str(level) for level in levels),
            search_text=pick(data, "search_text", "searchText"),
            user_id=pick(data, "user_id", "userId"),
            request_path=pick(data, "request_path", "requestPath"),
            http_method=pick(data, "http_method", "httpMethod"),
            min_duration=parse_int(pick(data, "min_duration", "minDuration")),
            max_duration=parse_int(pick(data, "max_duration", "maxDuration")),
            has_exception=parse_bool(pick(data, "has_exception", "hasException")),
            page=parse_int(data.get("page")) or 0,
            page_size=parse_int(pick(data, "page_size", "pageSize")) or 0,
        )

    def normalized(self, *, max_page_size: int | None = MAX_PAGE_SIZE) -> SearchRequest:
        paging = PageRequest.of(self.page, self.page_size, max_size=max_page_size)

        min_duration = self.min_duration
        max_duration = self.max_duration
        if min_duration is not None and min_duration < 0:
            min_duration = 0
        if max_duration is not None and max_duration < 0:
            max_duration = None
        if min_duration is not None and max_duration is not None and min_duration > max_duration:
            min_duration, max_duration = max_duration, min_duration

        from_date, to_date = parse_datetime(self.from_date), parse_datetime(self.to_date)
        if from_date is not None and to_date is not None and from_date > to_date:
            from_date, to_date = to_date, from_date

        known = [Severity.from_name(level) for level in self.log_levels]
        levels = tuple(sorted({level.label for level in known if level is not None}, key=Severity.from_name))

        return dataclasses.replace(
            self,
            from_date=from_date,
            to_date=to_date,
            log_levels=levels,
            search_text=_blank_to_none(self.search_text),
            user_id=_blank_to_none(self.user_id),
            request_path=_blank_to_none(self.request_path),
            http_method=_blank_to_none(self.http_method),
            min_duration=min_duration,
            max_duration=max_duration,
            page=paging.page,
            page_size=paging.size,
        )

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, size=self.page_size)

    def to_query(self, slow_threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS) -> RecordQuery:
        """Translate the (normalised) request into store predicates."""
        levels = {Severity.from_name(level) for level in self.log_levels}
        levels.discard(None)
        return RecordQuery(
            from_date=self.from_date,
            to_date=self.to_date,
            levels=frozenset(levels),  # type: ignore[arg-type]
            search_text=self.search_text,
            user_id=self.user_id,
            request_path=self.request_path,
            http_method=self.http_method,
            min_duration=self.min_duration,
            max_duration=self.max_duration,
            has_exception=self.has_exception,
            slow_threshold_ms=slow_threshold_ms,
        )


__all__ = ["SearchRequest"]
