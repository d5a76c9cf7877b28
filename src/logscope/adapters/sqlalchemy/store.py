"""SQLAlchemy adapter – SqlAlchemyRecordStore over the typed ``ApplicationLogs`` table."""
from __future__ import annotations

from typing import Any

from sqlalchemy import and_, case, func, or_, select

from logscope.adapters.sqlalchemy.models import ApplicationLogModel
from logscope.adapters.sqlalchemy.session import SessionFactory, SqlAlchemyQueryRunner
from logscope.application.store import RecordQuery, RecordStore
from logscope.domain.payload import parse_json_object
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.time import Clock
from logscope.observability.logging import get_logger

_log = get_logger(__name__)


def _severity_of(level: str | None) -> Severity:
    severity = Severity.from_name(level)
    if severity is None:
        _log.debug("record_store.unknown_level", level=level)
        return Severity.INFORMATION
    return severity


# Ordinal of the string level column, with the same fallback as _severity_of.
_LEVEL_ORDINAL = case(
    {name: int(severity) for name, severity in Severity.name_table().items()},
    value=func.lower(func.trim(ApplicationLogModel.level)),
    else_=int(Severity.INFORMATION),
)


class SqlAlchemyRecordStore(RecordStore):
    """RecordStore reading the typed log table.

    Every :class:`RecordQuery` predicate is translated to SQL; counts use
    ``COUNT`` / ``GROUP BY`` so no window is materialised for them.
    """

    name = "ApplicationLogs"

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        clock: Clock | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(clock)
        self._runner = SqlAlchemyQueryRunner(self.name, session_factory, timeout)

    # ------------------------------------------------------------------
    # Predicate translation
    # ------------------------------------------------------------------

    def _conditions(self, query: RecordQuery) -> list[Any]:  # noqa: PLR0912
        m = ApplicationLogModel
        conditions: list[Any] = []
        if query.from_date is not None:
            conditions.append(m.timestamp >= query.from_date)
        if query.to_date is not None:
            conditions.append(m.timestamp <= query.to_date)
        if query.levels:
            conditions.append(_LEVEL_ORDINAL.in_(sorted(int(level) for level in query.levels)))
        if query.min_level is not None:
            conditions.append(_LEVEL_ORDINAL >= int(query.min_level))
        if query.search_text:
            needle = query.search_text.lower()
            conditions.append(
                or_(
                    func.lower(m.message).contains(needle, autoescape=True),
                    func.lower(func.coalesce(m.exception, "")).contains(needle, autoescape=True),
                )
            )
        if query.user_id:
            conditions.append(m.user_id == query.user_id)
        if query.request_path:
            conditions.append(m.request_path.contains(query.request_path, autoescape=True))
        if query.http_method:
            conditions.append(func.upper(m.http_method) == query.http_method.upper())
        if query.http_only:
            conditions.append(and_(m.http_method.is_not(None), m.http_method != ""))
            conditions.append(and_(m.request_path.is_not(None), m.request_path != ""))
        if query.min_duration is not None:
            conditions.append(m.duration >= query.min_duration)
        if query.max_duration is not None:
            conditions.append(m.duration <= query.max_duration)
        if query.slow_only:
            conditions.append(m.duration > query.slow_threshold_ms)
        if query.has_exception is True:
            conditions.append(and_(m.exception.is_not(None), m.exception != ""))
        elif query.has_exception is False:
            conditions.append(or_(m.exception.is_(None), m.exception == ""))
        return conditions

    @staticmethod
    def _to_record(row: ApplicationLogModel) -> LogRecord:
        properties = parse_json_object(row.properties)
        application = properties.get("Application")
        return LogRecord(
            message=row.message or "",
            level=_severity_of(row.level),
            timestamp=row.timestamp,
            exception=row.exception,
            properties=properties,
            record_id=row.id,
            user_id=row.user_id,
            request_id=row.request_id,
            correlation_id=row.correlation_id,
            http_method=row.http_method,
            request_path=row.request_path,
            response_status_code=row.response_status_code,
            duration_ms=row.duration,
            application=application if isinstance(application, str) else None,
            log_event=row.log_event,
        )

    # ------------------------------------------------------------------
    # RecordStore
    # ------------------------------------------------------------------

    async def execute(
        self,
        query: RecordQuery,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LogRecord]:
        m = ApplicationLogModel
        stmt = (
            select(m)
            .where(*self._conditions(query))
            .order_by(m.timestamp.desc(), m.id.desc())
        )
        if offset > 0:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(max(0, limit))
        rows = await self._runner.scalars(stmt)
        return [self._to_record(row) for row in rows]

    async def count(self, query: RecordQuery) -> int:
        stmt = select(func.count()).select_from(ApplicationLogModel).where(*self._conditions(query))
        return int(await self._runner.scalar(stmt))

    async def level_counts(self, query: RecordQuery) -> dict[Severity, int]:
        m = ApplicationLogModel
        stmt = select(m.level, func.count()).where(*self._conditions(query)).group_by(m.level)
        counts: dict[Severity, int] = {}
        for level_name, count in await self._runner.rows(stmt):
            severity = _severity_of(level_name)
            counts[severity] = counts.get(severity, 0) + int(count)
        return dict(sorted(counts.items()))


__all__ = ["SqlAlchemyRecordStore"]
