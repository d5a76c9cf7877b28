"""Application search – LogSearchService."""
from __future__ import annotations

import time
import uuid

from logscope.application.pagination import Page
from logscope.application.search.request import SearchRequest
from logscope.application.search.result import LogRecordView, SearchResult
from logscope.application.store import RecordStore
from logscope.config import AnalyticsSettings
from logscope.kernel.errors import InfrastructureError
from logscope.observability.logging import QueryContextProcessor, get_logger

_log = get_logger(__name__)


class LogSearchService:
    """Filtered, counted, newest-first search over a :class:`RecordStore`."""

    def __init__(self, store: RecordStore, settings: AnalyticsSettings | None = None) -> None:
        self._store = store
        self._settings = settings or AnalyticsSettings()

    async def search(self, request: SearchRequest) -> SearchResult:
        """Normalise *request* and run it."""
        return await self.execute(request.normalized())

    async def execute(self, request: SearchRequest) -> SearchResult:
        """Run an already-normalised request (exports use larger pages)."""
        token = QueryContextProcessor.bind(f"search-{uuid.uuid4().hex[:12]}")
        try:
            _log.info(
                "log_search.started",
                from_date=request.from_date,
                to_date=request.to_date,
                levels=list(request.log_levels),
                page=request.page,
                page_size=request.page_size,
            )
            t0 = time.monotonic()
            query = request.to_query(self._settings.slow_request_threshold_ms)
            paging = request.page_request
            try:
                total = await self._store.count(query)
                records = await self._store.execute(query, limit=paging.size, offset=paging.offset)
            except InfrastructureError:
                _log.error("log_search.store_failed", store=self._store.name, exc_info=True)
                raise

            page = Page(items=records, total=total, page=paging.page, size=paging.size)
            result = SearchResult.from_page(
                page.map(LogRecordView.from_record),
                took_ms=int((time.monotonic() - t0) * 1000),
            )
            _log.info("log_search.completed", total=total, returned=len(records), took_ms=result.took_ms)
            return result
        finally:
            QueryContextProcessor.reset(token)


__all__ = ["LogSearchService"]
