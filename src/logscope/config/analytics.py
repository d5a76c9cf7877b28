"""Config – AnalyticsSettings."""
from __future__ import annotations

import dataclasses
from typing import Any

from logscope.config.settings import EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader
from logscope.config.validation import InvalidSettingValueError
from logscope.kernel.time import TIMEZONE_STRATEGY


@dataclasses.dataclass
class AnalyticsSettings(Settings):
    """Tunables for search, dashboards and exports.

    Environment variables use the ``LOGSCOPE_`` prefix, e.g.
    ``LOGSCOPE_SLOW_REQUEST_THRESHOLD_MS=3000``.

    ``timezone_strategy`` documents the naive local timestamp convention;
    it is validated rather than acted on, because the only supported
    deployment is a single-timezone one.
    """

    _prefix = "LOGSCOPE"

    database_url: str = ""
    slow_request_threshold_ms: int = 5000
    default_window_hours: int = 24
    max_window_days: int = 30
    recent_logs_count: int = 50
    max_trend_buckets: int = 168
    max_affected_endpoints: int = 5
    export_page_size: int = 10000
    query_timeout_seconds: float = 0.0
    health_error_rate_critical: float = 10.0
    health_error_rate_warning: float = 5.0
    health_error_rate_fair: float = 1.0
    health_p99_critical_ms: float = 10000.0
    health_p99_warning_ms: float = 5000.0
    health_p99_fair_ms: float = 2000.0
    timezone_strategy: str = TIMEZONE_STRATEGY

    def _validate(self) -> None:
        for name in (
            "slow_request_threshold_ms",
            "default_window_hours",
            "max_window_days",
            "recent_logs_count",
            "max_trend_buckets",
            "max_affected_endpoints",
            "export_page_size",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidSettingValueError(name, value, "must be positive")
        if self.query_timeout_seconds < 0:
            raise InvalidSettingValueError("query_timeout_seconds", self.query_timeout_seconds, "must be >= 0")
        rates = self.error_rate_thresholds
        if not rates[0] >= rates[1] >= rates[2] >= 0:
            raise InvalidSettingValueError("health_error_rate_*", rates, "must be critical >= warning >= fair >= 0")
        latencies = self.p99_thresholds_ms
        if not latencies[0] >= latencies[1] >= latencies[2] >= 0:
            raise InvalidSettingValueError("health_p99_*_ms", latencies, "must be critical >= warning >= fair >= 0")
        if self.timezone_strategy != TIMEZONE_STRATEGY:
            raise InvalidSettingValueError(
                "timezone_strategy",
                self.timezone_strategy,
                f"only {TIMEZONE_STRATEGY} (single-timezone, naive local timestamps) is supported",
            )

    @property
    def error_rate_thresholds(self) -> tuple[float, float, float]:
        return (self.health_error_rate_critical, self.health_error_rate_warning, self.health_error_rate_fair)

    @property
    def p99_thresholds_ms(self) -> tuple[float, float, float]:
        return (self.health_p99_critical_ms, self.health_p99_warning_ms, self.health_p99_fair_ms)

    @property
    def query_timeout(self) -> float | None:
        return self.query_timeout_seconds or None


def load_settings(
    loaders: list[SettingsLoader] | None = None,
    overrides: dict[str, Any] | None = None,
) -> AnalyticsSettings:
    """Build :class:`AnalyticsSettings` from the environment (default) or *loaders*."""
    return SettingsFactory.create(
        AnalyticsSettings,
        loaders=loaders if loaders is not None else [EnvSettingsLoader()],
        overrides=overrides,
    )


__all__ = ["AnalyticsSettings", "load_settings"]
