"""Testing – pytest fixtures.

Enable with ``pytest_plugins = ["logscope.testing.fixtures"]``.
"""
from __future__ import annotations

import pytest

from logscope.adapters.memory import InMemoryRecordStore
from logscope.kernel.time import FrozenClock
from logscope.testing.builder import LogRecordBuilder
from logscope.testing.clock import FakeClock


@pytest.fixture
def fake_clock() -> FrozenClock:
    """A clock pinned to 2026-01-01 12:00 local time."""
    return FakeClock()


@pytest.fixture
def record_builder() -> LogRecordBuilder:
    return LogRecordBuilder()


@pytest.fixture
def memory_store(fake_clock: FrozenClock) -> InMemoryRecordStore:
    return InMemoryRecordStore(clock=fake_clock)


__all__ = ["fake_clock", "memory_store", "record_builder"]
