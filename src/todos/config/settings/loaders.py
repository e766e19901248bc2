"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from dotenv import load_dotenv

from todos.config.errors import InvalidSettingValueError, MissingRequiredSettingError
from todos.config.settings.base import Settings

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class SettingsLoader(abc.ABC):
    """Port: read raw values for a settings class from an external source."""

    @abc.abstractmethod
    def values(self, settings_class: type[Settings], *, strict: bool = True) -> dict[str, Any]:
        """Values found for *settings_class*.

        With *strict* a required field the source does not provide raises
        :class:`MissingRequiredSettingError`; otherwise it is left out.
        """

    def load(self, settings_class: type[T]) -> T:
        return settings_class.from_values(self.values(settings_class))


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables (``<PREFIX>_<FIELD>``).

    Values are coerced to the field's annotated type; ``bool`` accepts
    1/0, true/false, yes/no and on/off in any case.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def values(self, settings_class: type[Settings], *, strict: bool = True) -> dict[str, Any]:
        environ = self._environ if self._environ is not None else os.environ
        hints = typing.get_type_hints(settings_class)
        required = settings_class.required_fields()
        found: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):
            key = settings_class.env_key(field.name)
            raw = environ.get(key)
            if raw is None:
                if strict and field.name in required:
                    raise MissingRequiredSettingError(field.name, env_var=key)
                continue
            found[field.name] = _coerce(field.name, key, raw, hints.get(field.name, str))
        return found


class DotenvSettingsLoader(EnvSettingsLoader):
    """Load a ``.env`` file into the process environment, then read it."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        super().__init__()
        self._env_file = env_file
        self._override = override

    def values(self, settings_class: type[Settings], *, strict: bool = True) -> dict[str, Any]:
        load_dotenv(self._env_file, override=self._override)
        return super().values(settings_class, strict=strict)


def _coerce(name: str, key: str, raw: str, type_hint: Any) -> Any:
    try:
        if type_hint is bool:
            lowered = raw.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError("expected a boolean")
        if type_hint is int:
            return int(raw)
        if type_hint is float:
            return float(raw)
    except ValueError as exc:
        raise InvalidSettingValueError(name, raw, str(exc), env_var=key) from exc
    return raw


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
