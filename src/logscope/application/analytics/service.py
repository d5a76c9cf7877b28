"""Application analytics – DashboardService."""
from __future__ import annotations

import asyncio
import time
import uuid
from datetime import timedelta
from typing import Any, Awaitable, Callable, TypeVar

from logscope.application.analytics import aggregations
from logscope.application.analytics.dto import (
    DashboardResult,
    EndpointStats,
    HourlyTrend,
    LevelCount,
    PerformanceSnapshot,
    RecentLogEntry,
    SlowRequest,
    TopError,
)
from logscope.application.analytics.request import DashboardRequest
from logscope.application.store import RecordQuery, RecordStore
from logscope.config import AnalyticsSettings
from logscope.domain.record import LogRecord
from logscope.kernel.errors import InfrastructureError
from logscope.kernel.time import Clock, start_of_day
from logscope.observability.logging import QueryContextProcessor, get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class DashboardService:
    """Builds dashboards and leaderboards from a :class:`RecordStore`.

    A dashboard is derived from a single snapshot of the requested window;
    only the "today" counter and the recent feed are separate reads.  The
    build yields to the event loop between sections, so cancelling the
    awaiting task abandons it without a partial result.
    """

    def __init__(
        self,
        store: RecordStore,
        settings: AnalyticsSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or AnalyticsSettings()
        self._clock = clock or store.clock

    @property
    def settings(self) -> AnalyticsSettings:
        return self._settings

    def normalize(self, request: DashboardRequest | None) -> DashboardRequest:
        return (request or DashboardRequest()).normalized(
            self._clock.now(),
            default_window_hours=self._settings.default_window_hours,
            max_window_days=self._settings.max_window_days,
        )

    async def _read(self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        try:
            return await operation(*args, **kwargs)
        except InfrastructureError:
            _log.error("dashboard.store_failed", store=self._store.name, exc_info=True)
            raise

    async def _snapshot(self, request: DashboardRequest) -> list[LogRecord]:
        return await self._read(
            self._store.execute, RecordQuery.between(request.from_date, request.to_date)
        )

    async def build_dashboard(self, request: DashboardRequest | None = None) -> DashboardResult:
        token = QueryContextProcessor.bind(f"dashboard-{uuid.uuid4().hex[:12]}")
        try:
            request = self.normalize(request)
            settings = self._settings
            _log.info(
                "dashboard.started",
                from_date=request.from_date,
                to_date=request.to_date,
                include_hourly_trends=request.include_hourly_trends,
                include_performance_metrics=request.include_performance_metrics,
            )
            t0 = time.monotonic()

            records = await self._snapshot(request)
            _log.info("dashboard.snapshot", records=len(records))
            await asyncio.sleep(0)

            day = start_of_day(self._clock.now())
            today_logs = await self._read(
                self._store.count_in_range, day, day + timedelta(days=1) - timedelta(microseconds=1)
            )
            statistics = aggregations.compute_statistics(
                records,
                today_logs=today_logs,
                slow_threshold_ms=settings.slow_request_threshold_ms,
            )
            distribution = aggregations.level_distribution(aggregations.level_counts_of(records))
            await asyncio.sleep(0)

            trends: list[HourlyTrend] = []
            if request.include_hourly_trends:
                trends = aggregations.hourly_trends(
                    records,
                    request.from_date,
                    request.to_date,
                    max_buckets=settings.max_trend_buckets,
                    slow_threshold_ms=settings.slow_request_threshold_ms,
                )
                await asyncio.sleep(0)

            errors = aggregations.top_errors(
                records,
                request.top_errors_count,
                max_endpoints=settings.max_affected_endpoints,
            )
            await asyncio.sleep(0)

            slow: list[SlowRequest] = []
            endpoints: list[EndpointStats] = []
            performance = PerformanceSnapshot()
            if request.include_performance_metrics:
                slow = aggregations.slow_requests(
                    records,
                    request.slow_requests_count,
                    threshold_ms=settings.slow_request_threshold_ms,
                )
                endpoints = aggregations.endpoint_statistics(records, request.top_endpoints_count)
                performance = self._performance(records, request)
                await asyncio.sleep(0)

            recent = await self._read(self._store.recent, settings.recent_logs_count)
            await asyncio.sleep(0)

            result = DashboardResult(
                statistics=statistics,
                level_distribution=distribution,
                hourly_trends=trends,
                top_errors=errors,
                slow_requests=slow,
                top_endpoints=endpoints,
                recent_logs=[RecentLogEntry.from_record(r) for r in recent],
                performance=performance,
                generated_at=self._clock.now(),
                from_date=request.from_date,
                to_date=request.to_date,
            )
            _log.info(
                "dashboard.completed",
                total_logs=statistics.total_logs,
                health_status=performance.health_status,
                took_ms=int((time.monotonic() - t0) * 1000),
            )
            return result
        finally:
            QueryContextProcessor.reset(token)

    def _performance(self, records: list[LogRecord], request: DashboardRequest) -> PerformanceSnapshot:
        return aggregations.performance_snapshot(
            records,
            request.from_date,
            request.to_date,
            error_rate_thresholds=self._settings.error_rate_thresholds,
            p99_thresholds_ms=self._settings.p99_thresholds_ms,
        )

    # ------------------------------------------------------------------
    # Stand-alone leaderboards
    # ------------------------------------------------------------------

    async def top_errors(self, count: int = 50, within_hours: int = 24) -> list[TopError]:
        """Most frequent errors of the trailing *within_hours*."""
        now = self._clock.now()
        records = await self._read(
            self._store.execute, RecordQuery.between(now - timedelta(hours=within_hours), now)
        )
        return aggregations.top_errors(
            records, count, max_endpoints=self._settings.max_affected_endpoints
        )

    async def slow_requests(self, count: int = 50, min_duration: int | None = None) -> list[SlowRequest]:
        """Slowest records of all time above *min_duration* (default: the slow threshold)."""
        threshold = self._settings.slow_request_threshold_ms if min_duration is None else min_duration
        query = RecordQuery(slow_only=True, slow_threshold_ms=threshold)
        records = await self._read(self._store.execute, query)
        return aggregations.slow_requests(records, count, threshold_ms=threshold)

    async def endpoint_statistics(self, request: DashboardRequest | None = None) -> list[EndpointStats]:
        request = self.normalize(request)
        records = await self._read(
            self._store.execute,
            RecordQuery(from_date=request.from_date, to_date=request.to_date, http_only=True),
        )
        return aggregations.endpoint_statistics(records, request.top_endpoints_count)

    async def hourly_trends(self, request: DashboardRequest | None = None) -> list[HourlyTrend]:
        request = self.normalize(request)
        records = await self._snapshot(request)
        return aggregations.hourly_trends(
            records,
            request.from_date,
            request.to_date,
            max_buckets=self._settings.max_trend_buckets,
            slow_threshold_ms=self._settings.slow_request_threshold_ms,
        )

    async def level_distribution(self, request: DashboardRequest | None = None) -> list[LevelCount]:
        request = self.normalize(request)
        counts = await self._read(
            self._store.level_counts, RecordQuery.between(request.from_date, request.to_date)
        )
        return aggregations.level_distribution(counts)

    async def performance(self) -> PerformanceSnapshot:
        """Performance snapshot of the last 24 hours."""
        now = self._clock.now()
        request = DashboardRequest(from_date=now - timedelta(hours=24), to_date=now)
        records = await self._read(
            self._store.execute,
            RecordQuery(from_date=request.from_date, to_date=request.to_date, http_only=True),
        )
        return self._performance(records, request)


__all__ = ["DashboardService"]
