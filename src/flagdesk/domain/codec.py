"""Domain – State ⇄ JSON blob.

The wire shape keeps the camelCase keys of the blobs already on disk, so a
console upgraded in place reads its previous State unchanged.
"""
from __future__ import annotations

import json
from typing import Any

from flagdesk.domain.environments import env_to_dict
from flagdesk.domain.models import ChangeLogEntry, Client, Feature, Group, State
from flagdesk.domain.targeting import targeting_to_dict
from flagdesk.kernel.errors import SerializationError


def client_to_dict(client: Client) -> dict[str, Any]:
    return {"id": client.id, "name": client.name}


def group_to_dict(group: Group) -> dict[str, Any]:
    return {"id": group.id, "name": group.name, "clientIds": list(group.client_ids)}


def feature_to_dict(feature: Feature) -> dict[str, Any]:
    return {
        "id": feature.id,
        "key": feature.key,
        "name": feature.name,
        "description": feature.description,
        "tags": list(feature.tags),
        "env": env_to_dict(feature.env),
        "targeting": targeting_to_dict(feature.targeting),
        "notes": feature.notes,
        "updatedAt": feature.updated_at,
    }


def entry_to_dict(entry: ChangeLogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "when": entry.when,
        "who": entry.who,
        "featureId": entry.feature_id,
        "what": entry.what,
    }


def state_to_dict(state: State) -> dict[str, Any]:
    return {
        "currentUser": state.current_user,
        "clients": [client_to_dict(c) for c in state.clients],
        "groups": [group_to_dict(g) for g in state.groups],
        "features": [feature_to_dict(f) for f in state.features],
        "selectedFeatureId": state.selected_feature_id,
        "changeLog": [entry_to_dict(e) for e in state.change_log],
    }


def encode_state(state: State) -> str:
    """Serialise *state* into the single blob written to the store."""
    try:
        return json.dumps(state_to_dict(state), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError("Failed to encode state", cause=exc) from exc


__all__ = [
    "client_to_dict",
    "encode_state",
    "entry_to_dict",
    "feature_to_dict",
    "group_to_dict",
    "state_to_dict",
]
