"""Config – errors raised while loading or validating settings."""
from __future__ import annotations

from todos.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded; the service must not start."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default received no value from any source."""

    default_code = "missing_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        hint = f" (set {env_var})" if env_var else ""
        super().__init__(
            f"Required setting '{setting_name}' is missing{hint}",
            detail={"setting": setting_name, "env_var": env_var},
        )
        self.setting_name = setting_name
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    """A value was supplied but cannot be used."""

    default_code = "invalid_setting"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        env_var: str | None = None,
    ) -> None:
        super().__init__(
            f"{env_var or setting_name}={value!r} is invalid: {reason}",
            detail={"setting": setting_name, "env_var": env_var, "reason": reason},
        )
        self.setting_name = setting_name
        self.env_var = env_var
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
