"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, NoReturn, Self

from todos.config.errors import ConfigError, InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """One section of environment-driven settings.

    ``_prefix`` names the environment namespace: a ``host`` field on a class
    with ``_prefix = "rabbitmq"`` is read from ``RABBITMQ_HOST``. Subclasses
    check their values in ``_validate``, which runs on construction, so an
    instance that exists can be used as is.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to reject unusable values via :meth:`_reject`."""

    def _reject(self, field_name: str, reason: str) -> NoReturn:
        raise InvalidSettingValueError(
            field_name,
            getattr(self, field_name),
            reason,
            env_var=self.env_key(field_name),
        )

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        """Names of the fields that have neither a default nor a factory."""
        return tuple(
            f.name
            for f in dataclasses.fields(cls)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )

    @classmethod
    def from_values(cls, values: dict[str, Any]) -> Self:
        try:
            return cls(**values)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to build {cls.__name__}: {exc}", cause=exc) from exc


__all__ = ["Settings"]
