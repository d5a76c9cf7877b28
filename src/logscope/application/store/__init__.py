"""Application store – RecordQuery value type and RecordStore port."""
from logscope.application.store.port import RecordStore
from logscope.application.store.query import RecordQuery

__all__ = ["RecordQuery", "RecordStore"]
