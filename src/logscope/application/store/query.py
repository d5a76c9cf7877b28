"""Application store – RecordQuery, the single predicate builder.

Both the search service and the dashboard service describe what they want
as a :class:`RecordQuery` and hand it to :meth:`RecordStore.execute`, so
filter semantics live in one place.  SQL adapters translate the same
fields into ``WHERE`` clauses; :meth:`RecordQuery.matches` is the
reference evaluation used in memory.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from logscope.domain.classifier import SLOW_REQUEST_THRESHOLD_MS
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import to_naive


@dataclasses.dataclass(frozen=True)
class RecordQuery:
    """Conjunction of optional predicates over :class:`LogRecord`.

    * ``from_date`` / ``to_date`` – inclusive bounds on the naive timestamp.
    * ``levels`` – membership; ``min_level`` – severity floor.
    * ``search_text`` – case-insensitive substring of message or exception.
    * ``user_id`` exact, ``request_path`` substring, ``http_method``
      case-insensitive exact.
    * ``min_duration`` / ``max_duration`` – inclusive; records without a
      duration never match a duration bound.
    * ``has_exception`` – ``True`` non-empty exception, ``False`` none.
    * ``http_only`` – method and path both present.
    * ``slow_only`` – duration above ``slow_threshold_ms``.
    """

    from_date: datetime | None = None
    to_date: datetime | None = None
    levels: frozenset[Severity] = frozenset()
    min_level: Severity | None = None
    search_text: str | None = None
    user_id: str | None = None
    request_path: str | None = None
    http_method: str | None = None
    min_duration: int | None = None
    max_duration: int | None = None
    has_exception: bool | None = None
    http_only: bool = False
    slow_only: bool = False
    slow_threshold_ms: int = SLOW_REQUEST_THRESHOLD_MS

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_date", to_naive(self.from_date))
        object.__setattr__(self, "to_date", to_naive(self.to_date))
        object.__setattr__(self, "levels", frozenset(self.levels))

    @classmethod
    def all(cls) -> RecordQuery:
        return cls()

    @classmethod
    def between(cls, from_date: datetime | None, to_date: datetime | None) -> RecordQuery:
        return cls(from_date=from_date, to_date=to_date)

    def with_(self, **changes: Any) -> RecordQuery:
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)

    def matches(self, record: LogRecord) -> bool:  # noqa: PLR0911, PLR0912
        if self.from_date is not None and record.timestamp < self.from_date:
            return False
        if self.to_date is not None and record.timestamp > self.to_date:
            return False
        if self.levels and record.level not in self.levels:
            return False
        if self.min_level is not None and record.level < self.min_level:
            return False
        if self.search_text:
            needle = self.search_text.lower()
            in_message = needle in (record.message or "").lower()
            in_exception = needle in (record.exception or "").lower()
            if not (in_message or in_exception):
                return False
        if not self.matches_request_fields(record):
            return False
        if self.has_exception is not None and record.has_exception != self.has_exception:
            return False
        return True

    def matches_request_fields(self, record: LogRecord) -> bool:
        """Predicates over request metadata (user, path, method, duration)."""
        if self.user_id and record.user_id != self.user_id:
            return False
        if self.request_path and (record.request_path is None or self.request_path not in record.request_path):
            return False
        if self.http_method and (record.http_method or "").upper() != self.http_method.upper():
            return False
        if self.http_only and not record.is_http_request:
            return False
        duration = record.duration_ms
        if self.min_duration is not None and (duration is None or duration < self.min_duration):
            return False
        if self.max_duration is not None and (duration is None or duration > self.max_duration):
            return False
        if self.slow_only and (duration is None or duration <= self.slow_threshold_ms):
            return False
        return True

    @property
    def has_request_predicates(self) -> bool:
        return bool(
            self.user_id
            or self.request_path
            or self.http_method
            or self.http_only
            or self.slow_only
            or self.min_duration is not None
            or self.max_duration is not None
        )


__all__ = ["RecordQuery"]
