"""Kernel types – identifier helpers."""
from flagdesk.kernel.types.ids import IdFactory, new_id

__all__ = ["IdFactory", "new_id"]
