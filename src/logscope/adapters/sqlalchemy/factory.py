"""SQLAlchemy adapter – build a record store from AnalyticsSettings."""
from __future__ import annotations

from logscope.adapters.sqlalchemy.legacy import SqlAlchemyLegacyRecordStore
from logscope.adapters.sqlalchemy.session import SessionFactory, SqlAlchemySessionFactory
from logscope.adapters.sqlalchemy.store import SqlAlchemyRecordStore
from logscope.application.store import RecordStore
from logscope.config import AnalyticsSettings, MissingRequiredSettingError
from logscope.kernel.time import Clock
from logscope.observability.logging import get_logger

_log = get_logger(__name__)


def create_record_store(
    settings: AnalyticsSettings,
    *,
    legacy: bool = False,
    session_factory: SessionFactory | None = None,
    clock: Clock | None = None,
) -> RecordStore:
    """Typed (or, with *legacy*, ``seriloglogs``) store bound to *settings*.

    ``settings.query_timeout`` becomes the per-operation deadline.  Without
    an explicit *session_factory* one is created from ``database_url``.
    """
    if session_factory is None:
        if not settings.database_url:
            raise MissingRequiredSettingError("LOGSCOPE_DATABASE_URL")
        session_factory = SqlAlchemySessionFactory(settings.database_url)
    store_cls = SqlAlchemyLegacyRecordStore if legacy else SqlAlchemyRecordStore
    _log.info("record_store.created", store=store_cls.name, timeout=settings.query_timeout)
    return store_cls(session_factory, clock=clock, timeout=settings.query_timeout)


__all__ = ["create_record_store"]
