"""Kernel time – Clock protocol, implementations and ISO-8601 helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


def to_iso(moment: datetime) -> str:
    """Render *moment* as UTC ISO-8601 with milliseconds and a ``Z`` suffix.

    ``2026-01-01T12:00:00.000Z`` is the shape persisted blobs already carry.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    text = moment.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def now_iso(clock: Clock) -> str:
    """Shorthand for ``to_iso(clock.now())``."""
    return to_iso(clock.now())


__all__ = ["Clock", "FrozenClock", "SystemClock", "now_iso", "to_iso"]
