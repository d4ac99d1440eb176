"""Config – env-driven settings for the console."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from flagdesk.config.errors import InvalidSettingValueError, MissingRequiredSettingError

DEFAULT_STORAGE_KEY = "pm-ffm:static:v2"
STORAGE_BACKENDS = ("memory", "file", "redis")


@dataclasses.dataclass
class Settings:
    """Base class for env-loaded settings.

    ``_prefix`` namespaces the environment variables, e.g. ``FLAGDESK``
    maps field ``log_level`` to ``FLAGDESK_LOG_LEVEL``.
    """

    _prefix: ClassVar[str] = ""

    @classmethod
    def env_var(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class ConsoleSettings(Settings):
    """Where the State blob lives and how the console logs."""

    _prefix: ClassVar[str] = "FLAGDESK"

    storage_backend: str = "file"
    storage_dir: str = ".flagdesk"
    storage_key: str = DEFAULT_STORAGE_KEY
    redis_url: str = ""
    log_level: str = "INFO"
    log_json: bool = False

    def _validate(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise InvalidSettingValueError(
                "storage_backend",
                self.storage_backend,
                f"expected one of {', '.join(STORAGE_BACKENDS)}",
                env_var=self.env_var("storage_backend"),
            )
        if not self.storage_key.strip():
            raise InvalidSettingValueError(
                "storage_key",
                self.storage_key,
                "must not be blank",
                env_var=self.env_var("storage_key"),
            )
        if self.storage_backend == "redis" and not self.redis_url:
            raise MissingRequiredSettingError("redis_url", env_var=self.env_var("redis_url"))
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError(
                "log_level", self.log_level, "unknown log level", env_var=self.env_var("log_level")
            )


__all__ = ["ConsoleSettings", "DEFAULT_STORAGE_KEY", "STORAGE_BACKENDS", "Settings"]
