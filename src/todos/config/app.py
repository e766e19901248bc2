"""Concrete settings for the todos service."""
from __future__ import annotations

import dataclasses
from typing import Sequence

from todos.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader


@dataclasses.dataclass
class RabbitMQSettings(Settings):
    """Broker endpoint, topology and publish policy (``RABBITMQ_*``)."""

    _prefix = "rabbitmq"

    host: str = "localhost"
    port: int = 5672
    username: str = "guest"
    password: str = dataclasses.field(default="guest", repr=False)
    virtual_host: str = "/"
    exchange_name: str = "notifications.exchange"
    queue_name: str = "notification.send.notify"
    routing_key: str = "notification.send.notify"
    recovery_interval: float = 10.0
    prefetch_count: int = 1
    source: str = "TodoApi"
    schema_version: str = "1.0"
    publish_max_attempts: int = 4
    publish_base_delay: float = 0.1
    stable_message_id: bool = True

    def _validate(self) -> None:
        if not 1 <= self.port <= 65535:
            self._reject("port", "must be between 1 and 65535")
        if self.publish_max_attempts < 1:
            self._reject("publish_max_attempts", "must be at least 1")
        if self.recovery_interval <= 0:
            self._reject("recovery_interval", "must be positive")
        if self.publish_base_delay < 0:
            self._reject("publish_base_delay", "must not be negative")
        if self.prefetch_count < 0:
            self._reject("prefetch_count", "must not be negative")


@dataclasses.dataclass
class DatabaseSettings(Settings):
    """SQLAlchemy async engine settings (``DATABASE_*``)."""

    _prefix = "database"

    url: str = "sqlite+aiosqlite:///./todos.db"
    echo: bool = False


@dataclasses.dataclass
class AppSettings(Settings):
    """HTTP app settings (``APP_*``) plus the nested database and broker sections."""

    _prefix = "app"

    host: str = "0.0.0.0"
    port: int = 8000
    title: str = "Todos API"
    log_level: str = "INFO"
    json_logs: bool = True
    database: DatabaseSettings = dataclasses.field(default_factory=DatabaseSettings)
    rabbitmq: RabbitMQSettings = dataclasses.field(default_factory=RabbitMQSettings)

    def _validate(self) -> None:
        if not 1 <= self.port <= 65535:
            self._reject("port", "must be between 1 and 65535")


def load_settings(
    env_file: str | None = ".env",
    loaders: Sequence[SettingsLoader] | None = None,
) -> AppSettings:
    """Build :class:`AppSettings` from ``.env`` (if present) and the environment."""
    if loaders is None:
        loaders = [DotenvSettingsLoader(env_file)] if env_file else [EnvSettingsLoader()]

    database = SettingsFactory.create(DatabaseSettings, loaders)
    rabbitmq = SettingsFactory.create(RabbitMQSettings, loaders)
    return SettingsFactory.create(
        AppSettings,
        loaders,
        overrides={"database": database, "rabbitmq": rabbitmq},
    )


__all__ = ["AppSettings", "DatabaseSettings", "RabbitMQSettings", "load_settings"]
