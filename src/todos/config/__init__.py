"""Config – 12-factor settings for the API, database and broker."""

from todos.config.app import AppSettings, DatabaseSettings, RabbitMQSettings, load_settings
from todos.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from todos.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "DatabaseSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RabbitMQSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
