"""Domain – the closed set of deployment environments."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from flagdesk.kernel.errors import UnknownEnvironmentError


class Environment(str, Enum):
    """Deployment stages a feature can be enabled in, in display order."""

    DEV = "Dev"
    TEST = "Test"
    OPS = "Ops"
    STAGE = "Stage"
    PROD = "Prod"

    @classmethod
    def parse(cls, value: "Environment | str") -> "Environment":
        """Return the member named *value*, raising for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownEnvironmentError(value) from None


ENVIRONMENTS: tuple[Environment, ...] = tuple(Environment)

EnvMap = Mapping[Environment, bool]


def freeze_env(values: Mapping[Environment, bool]) -> EnvMap:
    """Return a read-only mapping holding exactly the five environments."""
    return MappingProxyType({env: bool(values.get(env, False)) for env in ENVIRONMENTS})


def default_env() -> EnvMap:
    """Flags for a brand-new feature: on in Dev and Test only."""
    return freeze_env({Environment.DEV: True, Environment.TEST: True})


def coerce_env(raw: Any) -> EnvMap:
    """Best-effort rebuild of a persisted env mapping.

    A missing mapping yields :func:`default_env`. Otherwise each environment
    is on only when its stored value is boolean ``True``.
    """
    if not isinstance(raw, Mapping):
        return default_env()
    return freeze_env({env: raw.get(env.value) is True for env in ENVIRONMENTS})


def parse_env(values: Mapping[Environment | str, Any]) -> EnvMap:
    """Strictly convert caller-supplied flags, rejecting unknown names."""
    parsed = {Environment.parse(name): bool(flag) for name, flag in values.items()}
    return freeze_env(parsed)


def env_to_dict(env: EnvMap) -> dict[str, bool]:
    return {e.value: bool(env[e]) for e in ENVIRONMENTS}


__all__ = [
    "ENVIRONMENTS",
    "EnvMap",
    "Environment",
    "coerce_env",
    "default_env",
    "env_to_dict",
    "freeze_env",
    "parse_env",
]
