"""In-memory adapter – InMemoryRecordStore."""
from __future__ import annotations

import dataclasses
import itertools
from collections import Counter
from typing import Iterable

from logscope.application.store import RecordQuery, RecordStore
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import Clock


class InMemoryRecordStore(RecordStore):
    """Append-only list of records evaluated with :meth:`RecordQuery.matches`.

    Records appended without a ``record_id`` get one assigned in insertion
    order so newest-first ordering is stable for equal timestamps.
    """

    name = "memory"

    def __init__(self, records: Iterable[LogRecord] = (), clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._records: list[LogRecord] = []
        self._ids = itertools.count(1)
        self.extend(records)

    def append(self, record: LogRecord) -> LogRecord:
        if record.record_id is None:
            record = dataclasses.replace(record, record_id=next(self._ids))
        self._records.append(record)
        return record

    def extend(self, records: Iterable[LogRecord]) -> None:
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def _snapshot(self, query: RecordQuery) -> list[LogRecord]:
        # copy first so concurrent appends never change an in-flight answer
        rows = list(self._records)
        return [r for r in rows if query.matches(r)]

    async def execute(
        self,
        query: RecordQuery,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LogRecord]:
        rows = sorted(self._snapshot(query), key=LogRecord.sort_key, reverse=True)
        start = max(0, offset)
        end = None if limit is None else start + max(0, limit)
        return rows[start:end]

    async def count(self, query: RecordQuery) -> int:
        return len(self._snapshot(query))

    async def level_counts(self, query: RecordQuery) -> dict[Severity, int]:
        counts = Counter(r.level for r in self._snapshot(query))
        return {level: counts[level] for level in sorted(counts)}


__all__ = ["InMemoryRecordStore"]
