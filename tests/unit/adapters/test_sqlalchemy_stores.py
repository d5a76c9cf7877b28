"""Unit tests for the SQLAlchemy record stores.

Uses an in-memory SQLite database via *aiosqlite* – no running server needed.
"""
from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta

import pytest
from sqlalchemy import insert
from sqlalchemy.pool import StaticPool

from logscope.adapters.memory import InMemoryRecordStore
from logscope.adapters.sqlalchemy import (
    ApplicationLogModel,
    LogBase,
    SqlAlchemyLegacyRecordStore,
    SqlAlchemyRecordStore,
    SqlAlchemySessionFactory,
    create_record_store,
    serilog_logs,
)
from logscope.application.analytics import DashboardService
from logscope.application.store import RecordQuery
from logscope.config import AnalyticsSettings, MissingRequiredSettingError
from logscope.domain.record import LogRecord
from logscope.domain.severity import Severity
from logscope.kernel.errors import QueryTimeoutError, StoreUnavailableError
from logscope.testing import FAKE_NOW, FakeClock, LogRecordBuilder

BASE = LogRecordBuilder()

# ---------------------------------------------------------------------------
# Engine + fixtures
# ---------------------------------------------------------------------------


async def _session_factory(create: bool = True) -> SqlAlchemySessionFactory:
    factory = SqlAlchemySessionFactory("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    if create:
        async with factory.engine.begin() as conn:
            await conn.run_sync(LogBase.metadata.create_all)
    return factory


def _row(record: LogRecord, level: str | None = None) -> ApplicationLogModel:
    return ApplicationLogModel(
        message=record.message,
        level=level or record.level.label,
        timestamp=record.timestamp,
        exception=record.exception,
        properties=json.dumps(dict(record.properties)),
        user_id=record.user_id,
        http_method=record.http_method,
        request_path=record.request_path,
        response_status_code=record.response_status_code,
        duration=record.duration_ms,
    )


def _sample() -> list[LogRecord]:
    return [
        BASE.ago(minutes=1).with_(message="m1").http("GET", "/api/orders", duration_ms=120)(),
        BASE.ago(minutes=2).with_(message="m2", user_id="u-7").http("post", "/api/orders", duration_ms=6200)(),
        BASE.ago(minutes=3).with_(message="m3").error("KeyError: 'sku'\n  at handler")(),
        BASE.ago(minutes=4).with_(message="m4 Disk_Full 100%").warning()(),
        BASE.ago(minutes=5).with_(message="m5").level(Severity.FATAL).http("GET", "/health", duration_ms=None)(),
        BASE.ago(hours=30).with_(message="m6").http("DELETE", "/api/items/1", duration_ms=900, status=404)(),
        BASE.ago(minutes=1).with_(message="m7").level(Severity.DEBUG)(),
    ]


async def _typed_store(records: list[LogRecord]) -> tuple[SqlAlchemyRecordStore, SqlAlchemySessionFactory]:
    factory = await _session_factory()
    async with factory() as session:
        session.add_all([_row(r) for r in records])
        await session.commit()
    return SqlAlchemyRecordStore(factory, clock=FakeClock()), factory


QUERIES = [
    RecordQuery.all(),
    RecordQuery.between(FAKE_NOW - timedelta(hours=24), FAKE_NOW),
    RecordQuery(levels=frozenset({Severity.ERROR, Severity.FATAL})),
    RecordQuery(min_level=Severity.WARNING),
    RecordQuery(search_text="sku"),
    RecordQuery(search_text="disk_full 100%"),
    RecordQuery(search_text="%"),
    RecordQuery(request_path="orders"),
    RecordQuery(http_method="POST"),
    RecordQuery(user_id="u-7"),
    RecordQuery(min_duration=100, max_duration=1000),
    RecordQuery(has_exception=True),
    RecordQuery(has_exception=False),
    RecordQuery(http_only=True),
    RecordQuery(slow_only=True),
]

# ---------------------------------------------------------------------------
# SqlAlchemyRecordStore
# ---------------------------------------------------------------------------


class TestSqlAlchemyRecordStore:
    @pytest.mark.parametrize("query", QUERIES)
    def test_parity_with_memory_store(self, query: RecordQuery) -> None:
        async def run() -> None:
            records = _sample()
            store, factory = await _typed_store(records)
            memory = InMemoryRecordStore(records)
            sql_messages = [r.message for r in await store.execute(query)]
            memory_messages = [r.message for r in await memory.execute(query)]
            assert sql_messages == memory_messages
            assert await store.count(query) == await memory.count(query)
            assert await store.level_counts(query) == await memory.level_counts(query)
            await factory.dispose()

        asyncio.run(run())

    def test_maps_row_fields(self) -> None:
        async def run() -> None:
            store, factory = await _typed_store(
                [BASE.with_(properties={"Application": "Orders.Api"}).http("GET", "/a", duration_ms=5, status=201)()]
            )
            (record,) = await store.execute(RecordQuery.all())
            assert record.record_id == 1
            assert record.level is Severity.INFORMATION
            assert record.timestamp == FAKE_NOW
            assert record.application == "Orders.Api"
            assert record.properties["Application"] == "Orders.Api"
            assert record.response_status_code == 201
            assert record.duration_ms == 5
            await factory.dispose()

        asyncio.run(run())

    def test_paging(self) -> None:
        async def run() -> None:
            store, factory = await _typed_store(_sample())
            page = await store.execute(RecordQuery.all(), limit=2, offset=1)
            assert [r.message for r in page] == ["m1", "m2"]
            await factory.dispose()

        asyncio.run(run())

    def test_level_strings_are_normalised(self) -> None:
        async def run() -> None:
            factory = await _session_factory()
            async with factory() as session:
                session.add_all(
                    [
                        _row(BASE.with_(message="a")(), level="error"),
                        _row(BASE.with_(message="b")(), level="Notice"),
                        _row(BASE.with_(message="c")(), level="Warn"),
                    ]
                )
                await session.commit()
            store = SqlAlchemyRecordStore(factory)
            counts = await store.level_counts(RecordQuery.all())
            assert counts == {Severity.INFORMATION: 1, Severity.WARNING: 1, Severity.ERROR: 1}
            errors = await store.execute(RecordQuery(levels=frozenset({Severity.ERROR})))
            assert [r.message for r in errors] == ["a"]
            informational = await store.count(RecordQuery(levels=frozenset({Severity.INFORMATION})))
            assert informational == 1
            assert await store.count(RecordQuery(min_level=Severity.WARNING)) == 2
            await factory.dispose()

        asyncio.run(run())

    def test_level_counts_sum_to_total(self) -> None:
        async def run() -> None:
            store, factory = await _typed_store(_sample())
            counts = await store.level_counts_between()
            assert sum(counts.values()) == await store.total_count() == 7
            await factory.dispose()

        asyncio.run(run())

    def test_dashboard_over_sql(self) -> None:
        async def run() -> None:
            store, factory = await _typed_store(_sample())
            result = await DashboardService(store, AnalyticsSettings(), clock=FakeClock()).build_dashboard()
            assert result.statistics.total_logs == 6
            assert result.statistics.error_count == 2
            assert [s.request_path for s in result.slow_requests] == ["/api/orders"]
            assert len(result.recent_logs) == 7
            await factory.dispose()

        asyncio.run(run())


# ---------------------------------------------------------------------------
# SqlAlchemyLegacyRecordStore
# ---------------------------------------------------------------------------


def _legacy_row(
    message: str,
    level: int | None,
    timestamp: datetime | None,
    *,
    exception: str | None = None,
    log_event: str | None = None,
) -> dict:
    return {
        "message": message,
        "message_template": message,
        "level": level,
        "timestamp": timestamp,
        "exception": exception,
        "log_event": log_event,
    }


def _event(**properties: str) -> str:
    return json.dumps({"Properties": properties})


async def _legacy_store() -> tuple[SqlAlchemyLegacyRecordStore, SqlAlchemySessionFactory]:
    factory = await _session_factory()
    rows = [
        _legacy_row("l1", 2, FAKE_NOW - timedelta(minutes=1), log_event=_event(RequestPath="/api/orders", HttpMethod="GET", UserId="u-1", Application="Shop")),
        _legacy_row("l2", 4, FAKE_NOW - timedelta(minutes=2), exception="TimeoutError: db", log_event=_event(RequestPath="/api/pay", HttpMethod="POST")),
        _legacy_row("l3", 3, FAKE_NOW - timedelta(minutes=3), log_event="{not json"),
        _legacy_row("l4", 5, FAKE_NOW - timedelta(hours=30)),
        _legacy_row("skip-null-level", None, FAKE_NOW),
        _legacy_row("skip-null-timestamp", 2, None),
        _legacy_row("skip-bad-level", 9, FAKE_NOW),
    ]
    async with factory.engine.begin() as conn:
        await conn.execute(insert(serilog_logs), rows)
    return SqlAlchemyLegacyRecordStore(factory, clock=FakeClock()), factory


class TestSqlAlchemyLegacyRecordStore:
    def test_skips_invalid_rows(self) -> None:
        async def run() -> None:
            store, factory = await _legacy_store()
            records = await store.execute(RecordQuery.all())
            assert [r.message for r in records] == ["l1", "l2", "l3", "l4"]
            assert await store.total_count() == 4
            await factory.dispose()

        asyncio.run(run())

    def test_payload_fields(self) -> None:
        async def run() -> None:
            store, factory = await _legacy_store()
            first, second, third, _ = await store.execute(RecordQuery.all())
            assert first.request_path == "/api/orders"
            assert first.http_method == "GET"
            assert first.user_id == "u-1"
            assert first.application == "Shop"
            assert first.is_http_request
            assert second.level is Severity.ERROR
            assert second.has_exception
            assert third.request_path is None
            assert third.level is Severity.WARNING
            await factory.dispose()

        asyncio.run(run())

    def test_sql_filters(self) -> None:
        async def run() -> None:
            store, factory = await _legacy_store()
            assert await store.count(RecordQuery(min_level=Severity.ERROR)) == 2
            assert await store.count(RecordQuery(levels=frozenset({Severity.WARNING}))) == 1
            assert await store.count(RecordQuery(search_text="TIMEOUT")) == 1
            assert await store.count(RecordQuery(has_exception=False)) == 3
            assert await store.count(RecordQuery.between(FAKE_NOW - timedelta(hours=1), FAKE_NOW)) == 3
            await factory.dispose()

        asyncio.run(run())

    def test_payload_filters(self) -> None:
        async def run() -> None:
            store, factory = await _legacy_store()
            query = RecordQuery(request_path="/api")
            assert [r.message for r in await store.execute(query)] == ["l1", "l2"]
            assert [r.message for r in await store.execute(query, limit=1, offset=1)] == ["l2"]
            assert await store.count(query) == 2
            assert await store.count(RecordQuery(http_method="post")) == 1
            assert await store.count(RecordQuery(user_id="u-1")) == 1
            assert await store.level_counts(query) == {Severity.INFORMATION: 1, Severity.ERROR: 1}
            await factory.dispose()

        asyncio.run(run())

    def test_level_counts(self) -> None:
        async def run() -> None:
            store, factory = await _legacy_store()
            counts = await store.level_counts(RecordQuery.all())
            assert counts == {
                Severity.INFORMATION: 1,
                Severity.WARNING: 1,
                Severity.ERROR: 1,
                Severity.FATAL: 1,
            }
            assert sum(counts.values()) == await store.total_count()
            await factory.dispose()

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Failure wrapping
# ---------------------------------------------------------------------------


class _SlowSession:
    async def __aenter__(self) -> _SlowSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def execute(self, statement: object) -> None:
        await asyncio.sleep(1)


class TestFailureWrapping:
    def test_missing_table_is_store_unavailable(self) -> None:
        async def run() -> None:
            factory = await _session_factory(create=False)
            store = SqlAlchemyRecordStore(factory)
            with pytest.raises(StoreUnavailableError) as info:
                await store.count(RecordQuery.all())
            assert info.value.store == "ApplicationLogs"
            assert info.value.cause is not None
            await factory.dispose()

        asyncio.run(run())

    def test_legacy_missing_table(self) -> None:
        async def run() -> None:
            factory = await _session_factory(create=False)
            with pytest.raises(StoreUnavailableError):
                await SqlAlchemyLegacyRecordStore(factory).execute(RecordQuery.all())
            await factory.dispose()

        asyncio.run(run())

    def test_timeout(self) -> None:
        async def run() -> None:
            store = SqlAlchemyRecordStore(_SlowSession, timeout=0.01)  # type: ignore[arg-type]
            with pytest.raises(QueryTimeoutError):
                await store.execute(RecordQuery.all())

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Settings-driven construction
# ---------------------------------------------------------------------------


class TestCreateRecordStore:
    def test_settings_timeout_reaches_queries(self) -> None:
        async def run() -> None:
            settings = AnalyticsSettings(query_timeout_seconds=0.01)
            store = create_record_store(settings, session_factory=_SlowSession)  # type: ignore[arg-type]
            assert isinstance(store, SqlAlchemyRecordStore)
            with pytest.raises(QueryTimeoutError):
                await store.count(RecordQuery.all())

        asyncio.run(run())

    def test_legacy_store_from_settings(self) -> None:
        async def run() -> None:
            settings = AnalyticsSettings(query_timeout_seconds=0.01)
            store = create_record_store(settings, legacy=True, session_factory=_SlowSession)  # type: ignore[arg-type]
            assert isinstance(store, SqlAlchemyLegacyRecordStore)
            with pytest.raises(QueryTimeoutError):
                await store.execute(RecordQuery.all())

        asyncio.run(run())

    def test_missing_database_url(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            create_record_store(AnalyticsSettings())
