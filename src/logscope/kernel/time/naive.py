"""Kernel time – naive local timestamp convention.

Every producer writes ``timestamp without time zone`` values in the
server's local time, and every read compares against values of the same
kind.  Time values entering a comparison (range filters, hourly bucketing,
trailing windows) go through :func:`to_naive` first.

The zone identity is dropped, never converted: ``10:00+02:00`` becomes
``10:00``.  This is only correct while all producers and readers share one
timezone.  Multi-timezone deployments are unsupported.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import overload

TIMEZONE_STRATEGY = "LOCAL_TIMEZONE_STORAGE"

_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


@overload
def to_naive(value: datetime) -> datetime: ...
@overload
def to_naive(value: None) -> None: ...


def to_naive(value: datetime | None) -> datetime | None:
    """Strip ``tzinfo`` while keeping the wall-clock reading."""
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def floor_to_hour(value: datetime) -> datetime:
    """Calendar-hour bucket (year/month/day/hour) of *value*."""
    return to_naive(value).replace(minute=0, second=0, microsecond=0)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(to_naive(value).date(), time.min)


def format_timestamp(value: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SS`` display form."""
    return to_naive(value).strftime(_DISPLAY_FORMAT)


def format_timestamp_precise(value: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SS.fff`` form used by exports."""
    naive = to_naive(value)
    return f"{naive.strftime(_DISPLAY_FORMAT)}.{naive.microsecond // 1000:03d}"


__all__ = [
    "TIMEZONE_STRATEGY",
    "floor_to_hour",
    "format_timestamp",
    "format_timestamp_precise",
    "start_of_day",
    "to_naive",
]
