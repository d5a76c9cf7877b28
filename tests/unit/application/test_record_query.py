"""Unit tests for RecordQuery predicate evaluation."""
from __future__ import annotations

from datetime import datetime

from logscope.application.store import RecordQuery
from logscope.domain.severity import Severity
from logscope.testing import LogRecordBuilder

BASE = LogRecordBuilder()


class TestRecordQuery:
    def test_all_matches_everything(self) -> None:
        assert RecordQuery.all().matches(BASE.build())

    def test_time_bounds_inclusive(self) -> None:
        record = BASE.at(datetime(2024, 1, 1, 12)).build()
        assert RecordQuery.between(datetime(2024, 1, 1, 12), datetime(2024, 1, 1, 12)).matches(record)
        assert not RecordQuery.between(datetime(2024, 1, 1, 12, 1), None).matches(record)
        assert not RecordQuery.between(None, datetime(2024, 1, 1, 11)).matches(record)

    def test_levels_and_min_level(self) -> None:
        record = BASE.error().build()
        assert RecordQuery(levels=frozenset({Severity.ERROR})).matches(record)
        assert not RecordQuery(levels=frozenset({Severity.WARNING})).matches(record)
        assert RecordQuery(min_level=Severity.WARNING).matches(record)
        assert not RecordQuery(min_level=Severity.FATAL).matches(record)

    def test_search_text_covers_exception(self) -> None:
        record = BASE.error("TimeoutException: Database Gone").build()
        assert RecordQuery(search_text="database gone").matches(record)
        assert RecordQuery(search_text="REQUEST").matches(record)
        assert not RecordQuery(search_text="nothing").matches(record)

    def test_request_fields(self) -> None:
        record = BASE.http("GET", "/api/orders/7", duration_ms=300).with_(user_id="u1").build()
        assert RecordQuery(request_path="orders").matches(record)
        assert RecordQuery(http_method="get").matches(record)
        assert not RecordQuery(http_method="POST").matches(record)
        assert RecordQuery(user_id="u1").matches(record)
        assert not RecordQuery(user_id="U1").matches(record)

    def test_duration_bounds_exclude_missing_duration(self) -> None:
        assert not RecordQuery(min_duration=0).matches(BASE.build())
        assert not RecordQuery(max_duration=10).matches(BASE.build())
        assert RecordQuery(min_duration=100, max_duration=500).matches(BASE.with_(duration_ms=500).build())

    def test_has_exception(self) -> None:
        assert RecordQuery(has_exception=False).matches(BASE.build())
        assert not RecordQuery(has_exception=True).matches(BASE.build())

    def test_http_only_and_slow_only(self) -> None:
        plain = BASE.with_(duration_ms=9000).build()
        assert not RecordQuery(http_only=True).matches(plain)
        assert RecordQuery(slow_only=True).matches(plain)
        assert not RecordQuery(slow_only=True, slow_threshold_ms=9000).matches(plain)

    def test_has_request_predicates(self) -> None:
        assert not RecordQuery(search_text="x", levels=frozenset({Severity.ERROR})).has_request_predicates
        assert RecordQuery(min_duration=0).has_request_predicates
        assert RecordQuery.all().with_(http_method="GET").has_request_predicates
