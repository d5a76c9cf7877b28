"""SQLAlchemy adapter – ORM/Core mappings and RecordStore implementations."""
from logscope.adapters.sqlalchemy.factory import create_record_store
from logscope.adapters.sqlalchemy.legacy import SqlAlchemyLegacyRecordStore
from logscope.adapters.sqlalchemy.models import ApplicationLogModel, LogBase, serilog_logs
from logscope.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from logscope.adapters.sqlalchemy.store import SqlAlchemyRecordStore

__all__ = [
    "ApplicationLogModel",
    "LogBase",
    "SqlAlchemyLegacyRecordStore",
    "SqlAlchemyRecordStore",
    "SqlAlchemySessionFactory",
    "create_record_store",
    "serilog_logs",
]
