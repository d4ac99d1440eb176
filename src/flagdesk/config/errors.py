"""Config errors – raised while building :class:`ConsoleSettings`.

Each error names the setting and, when known, the environment variable to
fix, so the start-up banner can say ``set FLAGDESK_REDIS_URL`` directly.
"""
from __future__ import annotations

from flagdesk.kernel.errors import BaseError


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting required by the chosen storage backend is empty."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        hint = f" (set {env_var})" if env_var else ""
        super().__init__(
            f"Required setting '{setting_name}' is missing{hint}",
            detail={"setting": setting_name, "env_var": env_var},
        )
        self.setting_name = setting_name
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but not usable."""
    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        env_var: str | None = None,
    ) -> None:
        source = f" from {env_var}" if env_var else ""
        super().__init__(
            f"Setting '{setting_name}'{source} has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "env_var": env_var, "value": repr(value), "reason": reason},
        )
        self.setting_name = setting_name
        self.env_var = env_var
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
