"""In-memory adapter – list-backed RecordStore for tests and embedding."""
from logscope.adapters.memory.store import InMemoryRecordStore

__all__ = ["InMemoryRecordStore"]
