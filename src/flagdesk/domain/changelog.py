"""Domain – bounded, newest-first change log."""
from __future__ import annotations

from flagdesk.domain.models import CHANGE_LOG_LIMIT, DEFAULT_USER, ChangeLogEntry


def resolve_actor(current_user: str | None) -> str:
    """Trimmed current user, or the placeholder identity when blank."""
    return (current_user or "").strip() or DEFAULT_USER


def append_entry(
    log: tuple[ChangeLogEntry, ...],
    entry: ChangeLogEntry,
    limit: int = CHANGE_LOG_LIMIT,
) -> tuple[ChangeLogEntry, ...]:
    """Prepend *entry* and drop the oldest records beyond *limit*."""
    return (entry, *log)[:limit]


def history_for(
    log: tuple[ChangeLogEntry, ...],
    feature_id: str,
    limit: int = 20,
) -> list[ChangeLogEntry]:
    """Entries about *feature_id* plus global ones, newest first."""
    relevant = [e for e in log if e.feature_id == feature_id or e.is_global]
    return relevant[:limit]


__all__ = ["append_entry", "history_for", "resolve_actor"]
