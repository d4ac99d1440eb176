"""Unit tests for kernel clocks and ISO helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from flagdesk.kernel.time import FrozenClock, SystemClock, now_iso, to_iso
from flagdesk.kernel.types import new_id


class TestToIso:
    def test_milliseconds_and_z_suffix(self) -> None:
        moment = datetime(2026, 1, 1, 12, 0, 0, 123456, tzinfo=UTC)
        assert to_iso(moment) == "2026-01-01T12:00:00.123Z"

    def test_converts_to_utc(self) -> None:
        moment = datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso(moment) == "2026-01-01T12:00:00.000Z"

    def test_naive_is_treated_as_utc(self) -> None:
        assert to_iso(datetime(2026, 1, 1)) == "2026-01-01T00:00:00.000Z"


class TestClocks:
    def test_frozen_clock_advance(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.advance(seconds=90)
        assert now_iso(clock) == "2026-01-01T00:01:30.000Z"

    def test_system_clock_is_aware(self) -> None:
        assert SystemClock().now().tzinfo is not None


class TestIds:
    def test_new_ids_are_unique_strings(self) -> None:
        ids = {new_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(isinstance(i, str) and len(i) == 36 for i in ids)
