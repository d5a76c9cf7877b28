"""Application export – LogExportService dispatches to the right renderer."""
from __future__ import annotations

import dataclasses
import json
import time

from logscope.application.analytics import DashboardRequest, DashboardService
from logscope.application.export.csv_export import CsvExporter
from logscope.application.export.report import render_performance_report
from logscope.application.search import LogSearchService, SearchRequest
from logscope.application.search.result import LogRecordView
from logscope.config import AnalyticsSettings
from logscope.observability.logging import get_logger

__all__ = ["LogExportService"]

_log = get_logger(__name__)


class LogExportService:
    """Exports search results and renders dashboard reports."""

    def __init__(
        self,
        search_service: LogSearchService,
        dashboard_service: DashboardService,
        settings: AnalyticsSettings | None = None,
        *,
        bom: bool = False,
    ) -> None:
        self._search = search_service
        self._dashboard = dashboard_service
        self._settings = settings or AnalyticsSettings()
        self._csv_exporter = CsvExporter(bom=bom)

    async def export(self, request: SearchRequest, fmt: str = "csv") -> bytes:
        """Render the first ``export_page_size`` matches as ``csv`` or ``json``.

        Unknown formats fall back to CSV.
        """
        start = time.monotonic()
        normalized = dataclasses.replace(
            request.normalized(max_page_size=self._settings.export_page_size),
            page=1,
            page_size=self._settings.export_page_size,
        )
        result = await self._search.execute(normalized)

        if fmt.lower() == "json":
            payload = self._export_json(result.items)
        else:
            if fmt.lower() != "csv":
                _log.warning("log_export.unknown_format", fmt=fmt, fallback="csv")
            payload = self._csv_exporter.export(result.items)

        _log.info(
            "log_export.completed",
            fmt=fmt,
            rows=len(result.items),
            total=result.total_count,
            took_ms=int((time.monotonic() - start) * 1000),
        )
        return payload

    @staticmethod
    def _export_json(views: list[LogRecordView]) -> bytes:
        rows = [view.to_dict() for view in views]
        return json.dumps(rows, default=str, ensure_ascii=False, indent=2).encode("utf-8")

    async def performance_report(self, request: DashboardRequest | None = None) -> bytes:
        dashboard = await self._dashboard.build_dashboard(request)
        return render_performance_report(dashboard).encode("utf-8")
