"""Config settings – 12-factor env-based configuration."""
from logscope.config.settings.base import Settings
from logscope.config.settings.factory import SettingsFactory
from logscope.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
