"""Kernel time – Clock port, implementations and naive-timestamp helpers."""
from logscope.kernel.time.clock import Clock, FrozenClock, LocalClock
from logscope.kernel.time.naive import (
    TIMEZONE_STRATEGY,
    floor_to_hour,
    format_timestamp,
    format_timestamp_precise,
    start_of_day,
    to_naive,
)

__all__ = [
    "TIMEZONE_STRATEGY",
    "Clock",
    "FrozenClock",
    "LocalClock",
    "floor_to_hour",
    "format_timestamp",
    "format_timestamp_precise",
    "start_of_day",
    "to_naive",
]
