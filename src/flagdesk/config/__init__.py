"""Config – env-based settings, loaders and errors."""

from flagdesk.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from flagdesk.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from flagdesk.config.settings import ConsoleSettings, DEFAULT_STORAGE_KEY, Settings

__all__ = [
    "ConfigError",
    "ConsoleSettings",
    "DEFAULT_STORAGE_KEY",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
