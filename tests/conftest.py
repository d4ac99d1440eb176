"""Shared fixtures for flagdesk unit tests."""

from __future__ import annotations

import pytest

from flagdesk.adapters.blob_store import InMemoryBlobStore
from flagdesk.application.store import FlagConsole
from flagdesk.kernel.time import FrozenClock
from flagdesk.testing import FakeClock, SequentialIds


@pytest.fixture
def clock() -> FrozenClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def console(blob_store: InMemoryBlobStore, clock: FrozenClock, ids: SequentialIds) -> FlagConsole:
    """Console hydrated from an empty store, i.e. holding the seed State."""
    return FlagConsole.open(blob_store, clock=clock, id_factory=ids)
