"""Testing – deterministic fakes for console tests."""
from flagdesk.testing.fakes import FailingBlobStore, FakeClock, SequentialIds

__all__ = ["FailingBlobStore", "FakeClock", "SequentialIds"]
