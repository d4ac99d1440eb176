"""Application – FlagConsole, the single owner of the live State.

Every mutating command builds the next immutable :class:`State`, appends one
change log entry, swaps the State in and writes it back through the
:class:`~flagdesk.adapters.blob_store.BlobStore`. Commands that reference an
unknown feature or group are no-ops returning ``None``: no log entry, no
write. Validation failures raise before anything changes.

If the write fails the in-memory State has already advanced; it stays the
source of truth for the session and the :class:`BlobStoreError` propagates
so the caller can warn.
"""
from __future__ import annotations

import dataclasses
import functools
import threading
from typing import Any, Callable, TypeVar

from flagdesk.adapters.blob_store import BlobStore
from flagdesk.application.search import search_features
from flagdesk.config.settings import DEFAULT_STORAGE_KEY
from flagdesk.domain.audience import Audience
from flagdesk.domain.audience import audience_labels as _audience_labels
from flagdesk.domain.audience import resolve_audience as _resolve_audience
from flagdesk.domain.changelog import append_entry, history_for, resolve_actor
from flagdesk.domain.codec import encode_state
from flagdesk.domain.environments import Environment, default_env, freeze_env, parse_env
from flagdesk.domain.models import (
    NEW_GROUP_NAME,
    UNTITLED_GROUP_NAME,
    ChangeLogEntry,
    Feature,
    FeatureDraft,
    Group,
    State,
    normalize_key,
)
from flagdesk.domain.normalizer import normalize
from flagdesk.domain.targeting import (
    AllClients,
    ClientList,
    GroupList,
    TargetingMode,
    switch_mode,
    toggle_client,
    toggle_group,
    toggle_id,
)
from flagdesk.kernel.errors import BlobStoreError, ValidationError
from flagdesk.kernel.time import Clock, SystemClock, now_iso
from flagdesk.kernel.types import IdFactory, new_id
from flagdesk.observability.logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])


def _serialized(method: F) -> F:
    """Run *method* while holding the console's write lock."""

    @functools.wraps(method)
    def wrapper(self: "FlagConsole", *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _replace_by_id(items: tuple[Any, ...], updated: Any) -> tuple[Any, ...]:
    return tuple(updated if item.id == updated.id else item for item in items)


class FlagConsole:
    """Command/query facade over one in-memory State.

    Build it with :meth:`open` to hydrate from a blob store::

        console = FlagConsole.open(FileBlobStore(".flagdesk"))
        console.toggle_environment_flag(feature_id, "Prod")
    """

    def __init__(
        self,
        state: State,
        blob_store: BlobStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Clock | None = None,
        id_factory: IdFactory = new_id,
    ) -> None:
        self._state = state
        self._blob_store = blob_store
        self._storage_key = storage_key
        self._clock: Clock = clock or SystemClock()
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._log = get_logger(__name__, storage_key=storage_key)

    @classmethod
    def open(
        cls,
        blob_store: BlobStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Clock | None = None,
        id_factory: IdFactory = new_id,
    ) -> "FlagConsole":
        """Hydrate from *blob_store*; unreadable or missing data yields the seed."""
        raw = blob_store.read(storage_key)
        state = normalize(raw, clock=clock, id_factory=id_factory)
        console = cls(
            state, blob_store, storage_key=storage_key, clock=clock, id_factory=id_factory
        )
        console._log.info(
            "console.opened",
            features=len(state.features),
            groups=len(state.groups),
            change_log=len(state.change_log),
        )
        return console

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> State:
        return self._state

    def get_state(self) -> State:
        return self._state

    def get_selected_feature(self) -> Feature | None:
        return self._state.selected_feature

    def get_feature(self, feature_id: str) -> Feature | None:
        return self._state.find_feature(feature_id)

    def get_group(self, group_id: str) -> Group | None:
        return self._state.find_group(group_id)

    def resolve_audience(self, feature_id: str) -> Audience | None:
        """Effective audience of a feature, or ``None`` if it does not exist."""
        state = self._state
        feature = state.find_feature(feature_id)
        if feature is None:
            return None
        return _resolve_audience(feature, state)

    def audience_labels(self, feature_id: str) -> list[str]:
        state = self._state
        feature = state.find_feature(feature_id)
        if feature is None:
            return []
        return _audience_labels(_resolve_audience(feature, state), state)

    def search_features(self, query: str) -> list[Feature]:
        return search_features(self._state.features, query)

    def feature_history(self, feature_id: str, limit: int = 20) -> list[ChangeLogEntry]:
        return history_for(self._state.change_log, feature_id, limit)

    # ------------------------------------------------------------------
    # Session commands (persisted, never logged)
    # ------------------------------------------------------------------

    @_serialized
    def set_current_user(self, name: str) -> None:
        self._commit(self._state.replace(current_user=name))

    @_serialized
    def select_feature(self, feature_id: str) -> Feature | None:
        feature = self._state.find_feature(feature_id)
        if feature is None:
            return self._noop("select_feature", feature_id=feature_id)
        self._commit(self._state.replace(selected_feature_id=feature.id))
        return feature

    # ------------------------------------------------------------------
    # Feature commands
    # ------------------------------------------------------------------

    @_serialized
    def create_or_update_feature(self, draft: FeatureDraft) -> Feature:
        """Validate *draft* and save it, prepending it when its id is new."""
        name = draft.name.strip()
        key = normalize_key(draft.key)
        errors = []
        if not name:
            errors.append({"field": "name", "message": "name is required"})
        if not key:
            errors.append({"field": "key", "message": "key is required"})
        if not isinstance(draft.targeting, AllClients | ClientList | GroupList):
            errors.append({"field": "targeting", "message": "unsupported targeting"})
        if errors:
            raise ValidationError("Please fill in all required fields.", errors=errors)
        env = default_env() if draft.env is None else parse_env(draft.env)
        targeting = draft.targeting
        if isinstance(targeting, GroupList):
            # a draft taken before a group was deleted may still reference it
            targeting = GroupList(
                tuple(g for g in targeting.group_ids if self._state.find_group(g) is not None)
            )

        feature = Feature(
            id=draft.id or self._id_factory(),
            key=key,
            name=name,
            description=draft.description,
            tags=draft.cleaned_tags(),
            env=env,
            targeting=targeting,
            notes=draft.notes,
            updated_at=self._now(),
        )
        state = self._state
        if state.find_feature(feature.id) is not None:
            features = _replace_by_id(state.features, feature)
        else:
            features = (feature, *state.features)
        self._commit(
            state.replace(features=features, selected_feature_id=feature.id),
            feature_id=feature.id,
            what=f'Saved feature "{feature.name}" ({feature.key}).',
        )
        return feature

    @_serialized
    def delete_feature(self, feature_id: str) -> Feature | None:
        state = self._state
        victim = state.find_feature(feature_id)
        if victim is None:
            return self._noop("delete_feature", feature_id=feature_id)
        features = tuple(f for f in state.features if f.id != victim.id)
        selected = state.selected_feature_id
        if selected == victim.id:
            selected = features[0].id if features else None
        self._commit(
            state.replace(features=features, selected_feature_id=selected),
            feature_id=victim.id,
            what=f'Deleted feature "{victim.name}".',
        )
        return victim

    @_serialized
    def set_environment_flag(
        self, feature_id: str, env: Environment | str, value: bool
    ) -> Feature | None:
        environment = Environment.parse(env)
        return self._update_feature(
            feature_id,
            lambda f: {"env": freeze_env({**f.env, environment: bool(value)})},
            lambda f: f"Set {environment.value} → {'ON' if f.env[environment] else 'OFF'}.",
        )

    @_serialized
    def toggle_environment_flag(self, feature_id: str, env: Environment | str) -> Feature | None:
        environment = Environment.parse(env)
        return self._update_feature(
            feature_id,
            lambda f: {"env": freeze_env({**f.env, environment: not f.env[environment]})},
            lambda f: f"Set {environment.value} → {'ON' if f.env[environment] else 'OFF'}.",
        )

    @_serialized
    def set_targeting_mode(self, feature_id: str, mode: TargetingMode | str) -> Feature | None:
        target = TargetingMode.parse(mode)
        return self._update_feature(
            feature_id,
            lambda f: {"targeting": switch_mode(f.targeting, target)},
            lambda f: f"Updated audience targeting → {target.value}.",
        )

    @_serialized
    def toggle_client_in_targeting(self, feature_id: str, client_id: str) -> Feature | None:
        return self._update_feature(
            feature_id,
            lambda f: {"targeting": toggle_client(f.targeting, client_id)},
            lambda f: "Updated audience targeting.",
        )

    @_serialized
    def toggle_group_in_targeting(self, feature_id: str, group_id: str) -> Feature | None:
        if self._state.find_group(group_id) is None:
            return self._noop(
                "toggle_group_in_targeting", feature_id=feature_id, group_id=group_id
            )
        return self._update_feature(
            feature_id,
            lambda f: {"targeting": toggle_group(f.targeting, group_id)},
            lambda f: "Updated audience targeting.",
        )

    @_serialized
    def save_notes(self, feature_id: str, text: str) -> Feature | None:
        return self._update_feature(
            feature_id,
            lambda f: {"notes": text},
            lambda f: "Updated notes.",
        )

    # ------------------------------------------------------------------
    # Group commands (global log entries)
    # ------------------------------------------------------------------

    @_serialized
    def create_group(self, name: str = NEW_GROUP_NAME) -> Group:
        group = Group(id=self._id_factory(), name=name.strip() or UNTITLED_GROUP_NAME)
        self._commit_groups(self._state.replace(groups=(*self._state.groups, group)))
        return group

    @_serialized
    def rename_group(self, group_id: str, name: str) -> Group | None:
        group = self._state.find_group(group_id)
        if group is None:
            return self._noop("rename_group", group_id=group_id)
        renamed = dataclasses.replace(group, name=name.strip() or UNTITLED_GROUP_NAME)
        self._commit_groups(
            self._state.replace(groups=_replace_by_id(self._state.groups, renamed))
        )
        return renamed

    @_serialized
    def delete_group(self, group_id: str) -> Group | None:
        """Remove a group and drop it from every feature targeting it."""
        state = self._state
        group = state.find_group(group_id)
        if group is None:
            return self._noop("delete_group", group_id=group_id)
        features = tuple(
            dataclasses.replace(f, targeting=f.targeting.without(group.id))
            if isinstance(f.targeting, GroupList) and group.id in f.targeting.group_ids
            else f
            for f in state.features
        )
        self._commit_groups(
            state.replace(
                groups=tuple(g for g in state.groups if g.id != group.id),
                features=features,
            )
        )
        return group

    @_serialized
    def toggle_client_in_group(self, group_id: str, client_id: str) -> Group | None:
        group = self._state.find_group(group_id)
        if group is None:
            return self._noop("toggle_client_in_group", group_id=group_id)
        updated = dataclasses.replace(group, client_ids=toggle_id(group.client_ids, client_id))
        self._commit_groups(
            self._state.replace(groups=_replace_by_id(self._state.groups, updated))
        )
        return updated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _now(self) -> str:
        return now_iso(self._clock)

    def _noop(self, command: str, **refs: str) -> None:
        self._log.debug("command.noop", command=command, **refs)
        return None

    def _update_feature(
        self,
        feature_id: str,
        changes: Callable[[Feature], dict[str, Any]],
        describe: Callable[[Feature], str],
    ) -> Feature | None:
        state = self._state
        feature = state.find_feature(feature_id)
        if feature is None:
            return self._noop("update_feature", feature_id=feature_id)
        updated = dataclasses.replace(feature, **changes(feature), updated_at=self._now())
        self._commit(
            state.replace(features=_replace_by_id(state.features, updated)),
            feature_id=updated.id,
            what=describe(updated),
        )
        return updated

    def _commit_groups(self, state: State) -> None:
        self._commit(state, what=f"Updated client groups ({len(state.groups)} total).")

    def _commit(self, state: State, *, feature_id: str | None = None, what: str | None = None) -> None:
        if what is not None:
            entry = ChangeLogEntry(
                id=self._id_factory(),
                when=self._now(),
                who=resolve_actor(state.current_user),
                what=what,
                feature_id=feature_id,
            )
            state = state.replace(change_log=append_entry(state.change_log, entry))
            self._log.info(
                "changelog.appended", feature_id=feature_id, who=entry.who, what=what
            )
        self._state = state
        self._persist()

    def _persist(self) -> None:
        blob = encode_state(self._state)
        try:
            self._blob_store.write(self._storage_key, blob)
        except BlobStoreError as exc:
            self._log.error("state.persist_failed", error=exc.to_dict())
            raise
        self._log.debug("state.persisted", size=len(blob))


__all__ = ["FlagConsole"]
