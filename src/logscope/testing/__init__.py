"""Testing support – record builders, a frozen clock and pytest fixtures.

Import the fixtures in your ``conftest.py``::

    pytest_plugins = ["logscope.testing.fixtures"]
"""
from logscope.testing.builder import Builder, LogRecordBuilder
from logscope.testing.clock import FAKE_NOW, FakeClock

__all__ = ["FAKE_NOW", "Builder", "FakeClock", "LogRecordBuilder"]
