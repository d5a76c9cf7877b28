"""Unit tests for the naive timestamp helpers and clocks."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from logscope.kernel.time import (
    TIMEZONE_STRATEGY,
    FrozenClock,
    LocalClock,
    floor_to_hour,
    format_timestamp,
    format_timestamp_precise,
    start_of_day,
    to_naive,
)


class TestToNaive:
    def test_none_passes_through(self) -> None:
        assert to_naive(None) is None

    def test_naive_unchanged(self) -> None:
        dt = datetime(2024, 3, 1, 10, 30)
        assert to_naive(dt) is dt

    def test_zone_dropped_without_conversion(self) -> None:
        aware = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_naive(aware) == datetime(2024, 3, 1, 10, 0)

    def test_strategy_constant(self) -> None:
        assert TIMEZONE_STRATEGY == "LOCAL_TIMEZONE_STORAGE"


class TestBuckets:
    def test_floor_to_hour(self) -> None:
        assert floor_to_hour(datetime(2024, 3, 1, 10, 59, 59, 999)) == datetime(2024, 3, 1, 10)

    def test_start_of_day(self) -> None:
        assert start_of_day(datetime(2024, 3, 1, 23, 5)) == datetime(2024, 3, 1)


class TestFormatting:
    def test_format_timestamp(self) -> None:
        assert format_timestamp(datetime(2024, 3, 1, 9, 5, 7, 123456)) == "2024-03-01 09:05:07"

    def test_format_timestamp_precise(self) -> None:
        assert format_timestamp_precise(datetime(2024, 3, 1, 9, 5, 7, 123456)) == "2024-03-01 09:05:07.123"

    def test_precise_pads_milliseconds(self) -> None:
        assert format_timestamp_precise(datetime(2024, 3, 1, 9, 5, 7, 4000)).endswith(".004")


class TestClocks:
    def test_local_clock_is_naive(self) -> None:
        clock = LocalClock()
        assert clock.now().tzinfo is None
        assert isinstance(clock.today(), date)

    def test_frozen_clock_strips_zone(self) -> None:
        clock = FrozenClock(datetime(2024, 1, 1, 12, tzinfo=timezone.utc))
        assert clock.now() == datetime(2024, 1, 1, 12)
        assert clock.today() == date(2024, 1, 1)

    def test_frozen_clock_advance(self) -> None:
        clock = FrozenClock(datetime(2024, 1, 1, 23, 30))
        clock.advance(hours=1)
        assert clock.now() == datetime(2024, 1, 2, 0, 30)
        assert clock.today() == date(2024, 1, 2)
