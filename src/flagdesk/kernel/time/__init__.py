"""Kernel time – Clock port + implementations."""
from flagdesk.kernel.time.clock import Clock, FrozenClock, SystemClock, now_iso, to_iso

__all__ = ["Clock", "FrozenClock", "SystemClock", "now_iso", "to_iso"]
