"""Domain – effective audience resolution.

The result is always derived from the current State and never stored.
"""
from __future__ import annotations

from typing import Final, Literal

from flagdesk.domain.models import Feature, State
from flagdesk.domain.targeting import AllClients, ClientList, GroupList

ALL: Final = "ALL"

Audience = Literal["ALL"] | frozenset[str]


def resolve_audience(feature: Feature, state: State) -> Audience:
    match feature.targeting:
        case AllClients():
            return ALL
        case ClientList(client_ids=client_ids):
            # dangling client ids are passed through unresolved
            return frozenset(client_ids)
        case GroupList(group_ids=group_ids):
            members: set[str] = set()
            for group_id in group_ids:
                group = state.find_group(group_id)
                if group is not None:
                    members.update(group.client_ids)
            return frozenset(members)
    raise TypeError(f"Unsupported targeting {feature.targeting!r}")


def audience_labels(audience: Audience, state: State) -> list[str]:
    """Display names for a resolved audience, sorted.

    Client ids that no longer match a client are shown as the raw id.
    """
    if audience == ALL:
        return ["All clients"]
    labels = []
    for client_id in audience:
        client = state.find_client(client_id)
        labels.append(client.name if client is not None else client_id)
    return sorted(labels)


__all__ = ["ALL", "Audience", "audience_labels", "resolve_audience"]
