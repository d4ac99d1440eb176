"""Domain – entity shapes and the root State aggregate.

Every entity is a frozen dataclass; the store produces a new :class:`State`
for each command instead of mutating one in place, so a State handed to a
caller is a stable snapshot.
"""
from __future__ import annotations

import dataclasses
import re
from typing import Any, Iterable, Mapping, Sequence

from flagdesk.domain.environments import EnvMap, Environment, default_env
from flagdesk.domain.targeting import AllClients, Targeting, unique_ids

MAX_TAGS = 10
CHANGE_LOG_LIMIT = 200
DEFAULT_USER = "PM"
NEW_GROUP_NAME = "New group"
UNTITLED_GROUP_NAME = "Untitled group"

_WHITESPACE_RE = re.compile(r"\s+")


def clean_tags(tags: Iterable[Any]) -> tuple[str, ...]:
    """Trim, drop empties, cap at :data:`MAX_TAGS`."""
    cleaned = [str(t).strip() for t in tags if t is not None]
    return tuple(t for t in cleaned if t)[:MAX_TAGS]


def parse_tags(text: str) -> tuple[str, ...]:
    """Split a comma-separated tag field, e.g. ``"beta, ui"``."""
    return clean_tags(text.split(","))


def normalize_key(key: str) -> str:
    """Trim and collapse inner whitespace runs to underscores."""
    return _WHITESPACE_RE.sub("_", key.strip())


@dataclasses.dataclass(frozen=True)
class Client:
    id: str
    name: str


@dataclasses.dataclass(frozen=True)
class Group:
    id: str
    name: str
    client_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_ids", unique_ids(self.client_ids))


@dataclasses.dataclass(frozen=True, eq=True)
class Feature:
    """One feature flag.

    Compared by value but unhashable: ``env`` is a read-only mapping view.
    Key features by ``id`` when a dict or set is needed.
    """

    __hash__ = None  # type: ignore[assignment]

    id: str
    key: str
    name: str
    updated_at: str
    description: str = ""
    tags: tuple[str, ...] = ()
    env: EnvMap = dataclasses.field(default_factory=default_env)
    targeting: Targeting = AllClients()
    notes: str = ""

    def is_enabled(self, env: Environment | str) -> bool:
        return self.env[Environment.parse(env)]

    def search_text(self) -> str:
        """Text searched by the feature list filter."""
        return f"{self.name} {self.key} {self.description} {' '.join(self.tags)}"


@dataclasses.dataclass(frozen=True)
class ChangeLogEntry:
    """One immutable, human-readable change record.

    ``feature_id`` is ``None`` for global events such as group edits.
    """

    id: str
    when: str
    who: str
    what: str
    feature_id: str | None = None

    @property
    def is_global(self) -> bool:
        return self.feature_id is None


@dataclasses.dataclass(frozen=True, eq=True)
class State:
    """Root aggregate persisted as one blob.

    Unhashable, like the :class:`Feature` values it holds.
    """

    __hash__ = None  # type: ignore[assignment]

    current_user: str
    clients: tuple[Client, ...]
    groups: tuple[Group, ...]
    features: tuple[Feature, ...]
    selected_feature_id: str | None = None
    change_log: tuple[ChangeLogEntry, ...] = ()

    def find_feature(self, feature_id: str | None) -> Feature | None:
        return next((f for f in self.features if f.id == feature_id), None)

    def find_group(self, group_id: str | None) -> Group | None:
        return next((g for g in self.groups if g.id == group_id), None)

    def find_client(self, client_id: str | None) -> Client | None:
        return next((c for c in self.clients if c.id == client_id), None)

    @property
    def selected_feature(self) -> Feature | None:
        return self.find_feature(self.selected_feature_id)

    def replace(self, **changes: Any) -> "State":
        return dataclasses.replace(self, **changes)


@dataclasses.dataclass
class FeatureDraft:
    """Editable input for creating or updating a feature.

    ``id=None`` asks the store for a fresh id. ``tags`` accepts either a
    sequence or the comma-separated text of a form field.
    """

    name: str = ""
    key: str = ""
    description: str = ""
    tags: Sequence[str] | str = ()
    env: Mapping[Environment | str, bool] | None = None
    targeting: Targeting = dataclasses.field(default_factory=AllClients)
    notes: str = ""
    id: str | None = None

    @classmethod
    def from_feature(cls, feature: Feature) -> "FeatureDraft":
        return cls(
            id=feature.id,
            name=feature.name,
            key=feature.key,
            description=feature.description,
            tags=list(feature.tags),
            env=dict(feature.env),
            targeting=feature.targeting,
            notes=feature.notes,
        )

    def cleaned_tags(self) -> tuple[str, ...]:
        if isinstance(self.tags, str):
            return parse_tags(self.tags)
        return clean_tags(self.tags)


__all__ = [
    "CHANGE_LOG_LIMIT",
    "ChangeLogEntry",
    "Client",
    "DEFAULT_USER",
    "Feature",
    "FeatureDraft",
    "Group",
    "MAX_TAGS",
    "NEW_GROUP_NAME",
    "State",
    "UNTITLED_GROUP_NAME",
    "clean_tags",
    "normalize_key",
    "parse_tags",
]
