"""Config settings – env-based configuration."""
from todos.config.settings.base import Settings
from todos.config.settings.factory import SettingsFactory
from todos.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
