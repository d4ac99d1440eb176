"""Opaque identifier generation."""

from __future__ import annotations

from typing import Callable

import uuid_utils

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a fresh UUIDv7 string.

    Ids are opaque to the domain; v7 keeps them roughly creation-ordered,
    which makes persisted blobs easier to read.
    """
    return str(uuid_utils.uuid7())


__all__ = ["IdFactory", "new_id"]
