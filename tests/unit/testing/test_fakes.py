"""Unit tests for the testing fakes."""

from __future__ import annotations

import pytest

from flagdesk.kernel.errors import BlobStoreError
from flagdesk.testing import FailingBlobStore, FakeClock, SequentialIds


class TestFakeClock:
    def test_pinned_time(self) -> None:
        clock = FakeClock()
        assert clock.now() == clock.now()
        assert clock.now().isoformat() == "2026-01-01T12:00:00+00:00"


class TestSequentialIds:
    def test_counts_from_one(self) -> None:
        ids = SequentialIds("f")
        assert [ids(), ids(), ids()] == ["f-1", "f-2", "f-3"]

    def test_instances_are_independent(self) -> None:
        a, b = SequentialIds(), SequentialIds()
        a()
        assert b() == "id-1"


class TestFailingBlobStore:
    def test_behaves_normally_by_default(self) -> None:
        store = FailingBlobStore({"k": "v"})
        store.write("k", "w")
        assert store.read("k") == "w"

    def test_failing_reads(self) -> None:
        with pytest.raises(BlobStoreError):
            FailingBlobStore(fail_reads=True).read("k")

    def test_failing_writes_can_be_switched_off(self) -> None:
        store = FailingBlobStore(fail_writes=True)
        with pytest.raises(BlobStoreError):
            store.write("k", "v")
        store.fail_writes = False
        store.write("k", "v")
        assert store.read("k") == "v"
