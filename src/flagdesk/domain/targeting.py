"""Domain – audience targeting as an explicit sum type.

Exactly one variant is active at a time and only that variant carries a
selection, so "inactive collections are empty" holds by construction::

    AllClients()                   # every client
    ClientList(("c-aurora",))      # explicit clients
    GroupList(("g-beta",))         # clients reached through groups
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, ClassVar, Iterable, Mapping

from flagdesk.kernel.errors import ValidationError


class TargetingMode(str, Enum):
    ALL = "all"
    CLIENTS = "clients"
    GROUPS = "groups"

    @classmethod
    def parse(cls, value: "TargetingMode | str") -> "TargetingMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                f"Unknown targeting mode {value!r}",
                errors=[{"field": "mode", "message": f"unknown targeting mode {value!r}"}],
            ) from None


def unique_ids(values: Iterable[Any]) -> tuple[str, ...]:
    """Stringify, drop empties and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        text = str(value) if value is not None else ""
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def toggle_id(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    """Remove *value* if present, otherwise append it."""
    if value in values:
        return tuple(v for v in values if v != value)
    return (*values, value)


@dataclasses.dataclass(frozen=True)
class AllClients:
    mode: ClassVar[TargetingMode] = TargetingMode.ALL


@dataclasses.dataclass(frozen=True)
class ClientList:
    mode: ClassVar[TargetingMode] = TargetingMode.CLIENTS

    client_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_ids", unique_ids(self.client_ids))


@dataclasses.dataclass(frozen=True)
class GroupList:
    mode: ClassVar[TargetingMode] = TargetingMode.GROUPS

    group_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "group_ids", unique_ids(self.group_ids))

    def without(self, group_id: str) -> "GroupList":
        return GroupList(tuple(g for g in self.group_ids if g != group_id))


Targeting = AllClients | ClientList | GroupList


def empty_targeting(mode: TargetingMode) -> Targeting:
    match mode:
        case TargetingMode.ALL:
            return AllClients()
        case TargetingMode.CLIENTS:
            return ClientList()
        case TargetingMode.GROUPS:
            return GroupList()


def switch_mode(current: Targeting, mode: TargetingMode | str) -> Targeting:
    """Move to *mode*.

    Re-entering the active mode keeps its selection; any other mode starts
    from an empty selection.
    """
    target = TargetingMode.parse(mode)
    if current.mode is target:
        return current
    return empty_targeting(target)


def toggle_client(current: Targeting, client_id: str) -> ClientList:
    selected = current.client_ids if isinstance(current, ClientList) else ()
    return ClientList(toggle_id(selected, client_id))


def toggle_group(current: Targeting, group_id: str) -> GroupList:
    selected = current.group_ids if isinstance(current, GroupList) else ()
    return GroupList(toggle_id(selected, group_id))


def coerce_targeting(raw: Any) -> Targeting:
    """Rebuild persisted targeting; any unrecognised mode collapses to all."""
    if not isinstance(raw, Mapping):
        return AllClients()
    mode = raw.get("mode")
    if mode == TargetingMode.CLIENTS.value:
        ids = raw.get("clientIds")
        return ClientList(unique_ids(ids) if isinstance(ids, list) else ())
    if mode == TargetingMode.GROUPS.value:
        ids = raw.get("groupIds")
        return GroupList(unique_ids(ids) if isinstance(ids, list) else ())
    return AllClients()


def targeting_to_dict(targeting: Targeting) -> dict[str, Any]:
    match targeting:
        case ClientList(client_ids=ids):
            return {"mode": targeting.mode.value, "clientIds": list(ids), "groupIds": []}
        case GroupList(group_ids=ids):
            return {"mode": targeting.mode.value, "clientIds": [], "groupIds": list(ids)}
        case AllClients():
            return {"mode": targeting.mode.value, "clientIds": [], "groupIds": []}
    raise TypeError(f"Unsupported targeting {targeting!r}")


__all__ = [
    "AllClients",
    "ClientList",
    "GroupList",
    "Targeting",
    "TargetingMode",
    "coerce_targeting",
    "empty_targeting",
    "switch_mode",
    "targeting_to_dict",
    "toggle_client",
    "toggle_group",
    "toggle_id",
    "unique_ids",
]
