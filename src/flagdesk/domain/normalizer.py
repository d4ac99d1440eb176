"""Domain – fail-open hydration of a persisted blob into a valid State.

:func:`normalize` never raises. Anything it cannot make sense of is replaced
by a default, and when no usable feature survives the whole State falls
back to :func:`~flagdesk.domain.seed.seed`. Legacy or hand-edited blobs
therefore always open, at the price of silently dropping what was unreadable.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from flagdesk.domain.environments import coerce_env
from flagdesk.domain.models import (
    CHANGE_LOG_LIMIT,
    DEFAULT_USER,
    UNTITLED_GROUP_NAME,
    ChangeLogEntry,
    Client,
    Feature,
    Group,
    State,
    clean_tags,
)
from flagdesk.domain.seed import seed, seed_clients, seed_features, seed_groups
from flagdesk.domain.targeting import coerce_targeting, unique_ids
from flagdesk.kernel.time import Clock, SystemClock, now_iso
from flagdesk.kernel.types import IdFactory, new_id
from flagdesk.observability.logging import get_logger

_log = get_logger(__name__)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _required(raw: Mapping[str, Any], name: str) -> str | None:
    value = raw.get(name)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_clients(items: list[Any]) -> tuple[Client, ...]:
    clients: dict[str, Client] = {}
    for item in items:
        if not isinstance(item, Mapping):
            continue
        client_id = _required(item, "id")
        if client_id is None or client_id in clients:
            continue
        clients[client_id] = Client(id=client_id, name=_text(item.get("name")) or client_id)
    return tuple(clients.values())


def _coerce_groups(items: list[Any]) -> tuple[Group, ...]:
    groups: dict[str, Group] = {}
    for item in items:
        if not isinstance(item, Mapping):
            continue
        group_id = _required(item, "id")
        if group_id is None or group_id in groups:
            continue
        members = item.get("clientIds")
        groups[group_id] = Group(
            id=group_id,
            name=_text(item.get("name")) or UNTITLED_GROUP_NAME,
            client_ids=unique_ids(members) if isinstance(members, list) else (),
        )
    return tuple(groups.values())


def _coerce_features(items: list[Any], clock: Clock) -> tuple[Feature, ...]:
    features: dict[str, Feature] = {}
    for item in items:
        if not isinstance(item, Mapping):
            continue
        feature_id = _required(item, "id")
        key = _required(item, "key")
        name = _required(item, "name")
        if feature_id is None or key is None or name is None or feature_id in features:
            continue
        tags = item.get("tags")
        updated_at = item.get("updatedAt")
        features[feature_id] = Feature(
            id=feature_id,
            key=key,
            name=name,
            description=_text(item.get("description")),
            tags=clean_tags(tags) if isinstance(tags, list) else (),
            env=coerce_env(item.get("env")),
            targeting=coerce_targeting(item.get("targeting")),
            notes=_text(item.get("notes")),
            updated_at=updated_at if isinstance(updated_at, str) else now_iso(clock),
        )
    return tuple(features.values())


def _coerce_change_log(
    items: list[Any], clock: Clock, id_factory: IdFactory
) -> tuple[ChangeLogEntry, ...]:
    entries = []
    for item in items[:CHANGE_LOG_LIMIT]:
        if not isinstance(item, Mapping):
            continue
        feature_id = item.get("featureId")
        entries.append(
            ChangeLogEntry(
                id=_text(item.get("id")) or id_factory(),
                when=_text(item.get("when")) or now_iso(clock),
                who=_text(item.get("who")) or DEFAULT_USER,
                what=_text(item.get("what")),
                feature_id=feature_id if isinstance(feature_id, str) and feature_id else None,
            )
        )
    return tuple(entries)


def decode_blob(raw: Any) -> Any:
    """Decode JSON text; anything undecodable becomes ``None``."""
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return None


def normalize(
    raw: Any,
    *,
    clock: Clock | None = None,
    id_factory: IdFactory = new_id,
) -> State:
    """Turn a persisted blob (text, decoded object or ``None``) into a State."""
    clock = clock or SystemClock()
    data = decode_blob(raw)
    if not isinstance(data, Mapping):
        _log.warning(
            "state.hydrate.fallback_to_seed",
            reason="missing" if raw is None else "unreadable",
        )
        return seed(clock, id_factory)

    clients, groups, features, change_log = (
        data.get("clients"),
        data.get("groups"),
        data.get("features"),
        data.get("changeLog"),
    )
    current_user = _text(data.get("currentUser")).strip()
    if isinstance(features, list):
        state_features = _coerce_features(features, clock)
    else:
        state_features = seed_features(clock, id_factory)
    if not state_features:
        _log.warning("state.hydrate.fallback_to_seed", reason="no_valid_features")
        return seed(clock, id_factory)

    selected = data.get("selectedFeatureId")
    if not any(f.id == selected for f in state_features):
        selected = state_features[0].id

    return State(
        current_user=current_user or DEFAULT_USER,
        # malformed rosters fall back to the sample clients and groups
        clients=_coerce_clients(clients) if isinstance(clients, list) else seed_clients(),
        groups=_coerce_groups(groups) if isinstance(groups, list) else seed_groups(),
        features=state_features,
        selected_feature_id=selected,
        change_log=(
            _coerce_change_log(change_log, clock, id_factory)
            if isinstance(change_log, list)
            else ()
        ),
    )


__all__ = ["decode_blob", "normalize"]
