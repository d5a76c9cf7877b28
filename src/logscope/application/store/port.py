"""Application store – RecordStore port.

Adapters implement the three canonical operations (:meth:`execute`,
:meth:`count`, :meth:`level_counts`); the convenience reads are derived
from them once, here.
"""
from __future__ import annotations

import abc
from datetime import datetime, timedelta

from logscope.application.store.query import RecordQuery
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import Clock, LocalClock


class RecordStore(abc.ABC):
    """Port: read-only access to persisted log records.

    Implementations return records newest-first (timestamp descending,
    ties broken by record id descending) and raise
    :class:`~logscope.kernel.errors.InfrastructureError` subclasses when the
    backing storage fails.
    """

    name: str = "records"

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or LocalClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    @abc.abstractmethod
    async def execute(
        self,
        query: RecordQuery,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LogRecord]: ...

    @abc.abstractmethod
    async def count(self, query: RecordQuery) -> int: ...

    @abc.abstractmethod
    async def level_counts(self, query: RecordQuery) -> dict[Severity, int]: ...

    async def recent(self, count: int = 50) -> list[LogRecord]:
        return await self.execute(RecordQuery.all(), limit=max(0, count))

    async def recent_errors(self, count: int = 50, within_hours: int = 24) -> list[LogRecord]:
        cutoff = self._clock.now() - timedelta(hours=within_hours)
        query = RecordQuery(from_date=cutoff, min_level=Severity.ERROR)
        return await self.execute(query, limit=max(0, count))

    async def total_count(self) -> int:
        return await self.count(RecordQuery.all())

    async def count_in_range(self, from_date: datetime, to_date: datetime) -> int:
        return await self.count(RecordQuery.between(from_date, to_date))

    async def level_counts_between(
        self,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> dict[Severity, int]:
        return await self.level_counts(RecordQuery.between(from_date, to_date))


__all__ = ["RecordStore"]
