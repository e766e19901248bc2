"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar

from todos.config.errors import MissingRequiredSettingError
from todos.config.settings.base import Settings
from todos.config.settings.loaders import SettingsLoader

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Merge values from several loaders plus explicit overrides.

    Later loaders win on overlapping fields and *overrides* win over all of
    them. A required field only has to come from one of the sources.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            merged.update(loader.values(settings_cls, strict=False))
        merged.update(overrides or {})

        for name in settings_cls.required_fields():
            if name not in merged:
                raise MissingRequiredSettingError(name, env_var=settings_cls.env_key(name))
        return settings_cls.from_values(merged)


__all__ = ["SettingsFactory"]
