"""
logscope – read-only analytics over structured application logs.

Import path convention::

    from logscope.domain import LogRecord, Severity
    from logscope.application.search import LogSearchService, SearchRequest
    from logscope.application.analytics import DashboardService, DashboardRequest
    from logscope.adapters.sqlalchemy import SqlAlchemyRecordStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
