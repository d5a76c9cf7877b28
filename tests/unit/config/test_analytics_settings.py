"""Unit tests – AnalyticsSettings, loaders and SettingsFactory."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar

import pytest

from logscope.config import (
    AnalyticsSettings,
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    SettingsFactory,
    load_settings,
)
from logscope.config.settings import SettingsLoader

# ---------------------------------------------------------------------------
# Shared settings fixture
# ---------------------------------------------------------------------------


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"
    api_key: str  # no default → required


class _FailingLoader(SettingsLoader):
    def load(self, settings_class):
        raise ConfigError("source unavailable")


class TestAnalyticsSettingsDefaults:
    def test_defaults(self) -> None:
        s = AnalyticsSettings()
        assert s.slow_request_threshold_ms == 5000
        assert s.default_window_hours == 24
        assert s.max_window_days == 30
        assert s.recent_logs_count == 50
        assert s.max_trend_buckets == 168
        assert s.export_page_size == 10000
        assert s.error_rate_thresholds == (10.0, 5.0, 1.0)
        assert s.p99_thresholds_ms == (10000.0, 5000.0, 2000.0)
        assert s.timezone_strategy == "LOCAL_TIMEZONE_STORAGE"

    def test_query_timeout_zero_means_none(self) -> None:
        assert AnalyticsSettings().query_timeout is None
        assert AnalyticsSettings(query_timeout_seconds=2.5).query_timeout == 2.5


class TestAnalyticsSettingsValidation:
    @pytest.mark.parametrize(
        "field",
        ["slow_request_threshold_ms", "recent_logs_count", "export_page_size", "max_trend_buckets"],
    )
    def test_non_positive_sizes(self, field: str) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            AnalyticsSettings(**{field: 0})
        assert info.value.setting_name == field
        assert info.value.to_dict()["detail"] == {"setting": field, "reason": "must be positive"}

    def test_negative_timeout(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            AnalyticsSettings(query_timeout_seconds=-1)

    def test_thresholds_must_descend(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            AnalyticsSettings(health_error_rate_warning=20.0)
        with pytest.raises(InvalidSettingValueError):
            AnalyticsSettings(health_p99_fair_ms=20000.0)

    def test_only_local_timezone_storage(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            AnalyticsSettings(timezone_strategy="UTC")
        assert "LOCAL_TIMEZONE_STORAGE" in info.value.reason


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGSCOPE_SLOW_REQUEST_THRESHOLD_MS", "3000")
        monkeypatch.setenv("LOGSCOPE_QUERY_TIMEOUT_SECONDS", "1.5")
        monkeypatch.setenv("LOGSCOPE_DATABASE_URL", "sqlite+aiosqlite:///logs.db")
        s = EnvSettingsLoader().load(AnalyticsSettings)
        assert s.slow_request_threshold_ms == 3000
        assert s.query_timeout == 1.5
        assert s.database_url == "sqlite+aiosqlite:///logs.db"

    def test_invalid_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGSCOPE_RECENT_LOGS_COUNT", "many")
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader().load(AnalyticsSettings)
        assert info.value.setting_name == "LOGSCOPE_RECENT_LOGS_COUNT"

    def test_missing_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError):
            EnvSettingsLoader().load(RequiredSettings)


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOGSCOPE_MAX_WINDOW_DAYS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LOGSCOPE_MAX_WINDOW_DAYS=7\n")
        try:
            s = DotenvSettingsLoader(str(env_file)).load(AnalyticsSettings)
            assert s.max_window_days == 7
        finally:
            os.environ.pop("LOGSCOPE_MAX_WINDOW_DAYS", None)


class TestSettingsFactory:
    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGSCOPE_RECENT_LOGS_COUNT", "10")
        s = SettingsFactory.create(AnalyticsSettings, [EnvSettingsLoader()], {"recent_logs_count": 20})
        assert s.recent_logs_count == 20

    def test_failing_loader_skipped(self) -> None:
        s = SettingsFactory.create(AnalyticsSettings, [_FailingLoader()])
        assert s.recent_logs_count == 50

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(RequiredSettings, [_FailingLoader()])

    def test_validation_error_surfaces(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(AnalyticsSettings, overrides={"max_window_days": 0})

    def test_unknown_field_wrapped(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(AnalyticsSettings, overrides={"no_such_field": 1})

    def test_load_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGSCOPE_MAX_AFFECTED_ENDPOINTS", "3")
        assert load_settings().max_affected_endpoints == 3
        assert load_settings(loaders=[], overrides={"recent_logs_count": 5}).recent_logs_count == 5
