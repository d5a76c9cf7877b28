"""SQLAlchemy adapter – SqlAlchemyLegacyRecordStore over ``seriloglogs``.

The legacy table only has ``message, message_template, level, timestamp,
exception, log_event``.  Request metadata lives inside the ``log_event``
JSON and is recovered through :class:`LogEventPayload`; predicates on
those fields are evaluated after the row is parsed, the rest run in SQL.
"""
from __future__ import annotations

from collections import Counter
from typing import Any

from sqlalchemy import and_, func, or_, select

from logscope.adapters.sqlalchemy.models import serilog_logs
from logscope.adapters.sqlalchemy.session import SessionFactory, SqlAlchemyQueryRunner
from logscope.application.store import RecordQuery, RecordStore
from logscope.domain.payload import LogEventPayload
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import Clock

_MIN_ORDINAL = min(Severity)
_MAX_ORDINAL = max(Severity)


class SqlAlchemyLegacyRecordStore(RecordStore):
    """RecordStore reading the loosely-typed legacy sink table.

    Rows with a null or out-of-range level, or a null timestamp, are not
    records and are skipped by every operation.
    """

    name = "seriloglogs"

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        clock: Clock | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(clock)
        self._runner = SqlAlchemyQueryRunner(self.name, session_factory, timeout)

    def _conditions(self, query: RecordQuery) -> list[Any]:
        t = serilog_logs.c
        conditions: list[Any] = [
            t.timestamp.is_not(None),
            t.level.is_not(None),
            t.level.between(int(_MIN_ORDINAL), int(_MAX_ORDINAL)),
        ]
        if query.from_date is not None:
            conditions.append(t.timestamp >= query.from_date)
        if query.to_date is not None:
            conditions.append(t.timestamp <= query.to_date)
        if query.levels:
            conditions.append(t.level.in_(sorted(int(level) for level in query.levels)))
        if query.min_level is not None:
            conditions.append(t.level >= int(query.min_level))
        if query.search_text:
            needle = query.search_text.lower()
            conditions.append(
                or_(
                    func.lower(func.coalesce(t.message, "")).contains(needle, autoescape=True),
                    func.lower(func.coalesce(t.exception, "")).contains(needle, autoescape=True),
                )
            )
        if query.has_exception is True:
            conditions.append(and_(t.exception.is_not(None), t.exception != ""))
        elif query.has_exception is False:
            conditions.append(or_(t.exception.is_(None), t.exception == ""))
        return conditions

    @staticmethod
    def _to_record(row: Any) -> LogRecord:
        payload = LogEventPayload.parse(row.log_event)
        return LogRecord(
            message=row.message or "",
            level=Severity(row.level),
            timestamp=row.timestamp,
            exception=row.exception,
            properties=payload.properties,
            message_template=row.message_template,
            user_id=payload.user_id,
            http_method=payload.http_method,
            request_path=payload.request_path,
            application=payload.application,
            log_event=row.log_event,
        )

    def _select(self, query: RecordQuery) -> Any:
        t = serilog_logs.c
        return (
            select(serilog_logs)
            .where(*self._conditions(query))
            .order_by(t.timestamp.desc(), t.level.desc(), t.message)
        )

    async def _filtered(self, query: RecordQuery) -> list[LogRecord]:
        rows = await self._runner.rows(self._select(query))
        records = [self._to_record(row) for row in rows]
        return [r for r in records if query.matches_request_fields(r)]

    async def execute(
        self,
        query: RecordQuery,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LogRecord]:
        if query.has_request_predicates:
            records = await self._filtered(query)
            start = max(0, offset)
            end = None if limit is None else start + max(0, limit)
            return records[start:end]

        stmt = self._select(query)
        if offset > 0:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(max(0, limit))
        return [self._to_record(row) for row in await self._runner.rows(stmt)]

    async def count(self, query: RecordQuery) -> int:
        if query.has_request_predicates:
            return len(await self._filtered(query))
        stmt = select(func.count()).select_from(serilog_logs).where(*self._conditions(query))
        return int(await self._runner.scalar(stmt))

    async def level_counts(self, query: RecordQuery) -> dict[Severity, int]:
        if query.has_request_predicates:
            counts = Counter(r.level for r in await self._filtered(query))
            return {level: counts[level] for level in sorted(counts)}
        t = serilog_logs.c
        stmt = select(t.level, func.count()).where(*self._conditions(query)).group_by(t.level)
        return {Severity(level): int(count) for level, count in sorted(await self._runner.rows(stmt))}


__all__ = ["SqlAlchemyLegacyRecordStore"]
