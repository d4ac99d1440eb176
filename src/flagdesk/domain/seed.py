"""Domain – canonical sample State used when nothing valid is persisted."""
from __future__ import annotations

from flagdesk.domain.environments import Environment, freeze_env
from flagdesk.domain.models import DEFAULT_USER, Client, Feature, Group, State
from flagdesk.domain.targeting import GroupList
from flagdesk.kernel.time import Clock, SystemClock, now_iso
from flagdesk.kernel.types import IdFactory, new_id

SEED_FEATURE_KEY = "audit_trail_v2"


def seed_clients() -> tuple[Client, ...]:
    return (
        Client(id="c-aurora", name="Aurora REIT"),
        Client(id="c-bayview", name="Bayview Capital"),
        Client(id="c-cypress", name="Cypress Holdings"),
    )


def seed_groups() -> tuple[Group, ...]:
    return (Group(id="g-beta", name="Beta Participants", client_ids=("c-aurora",)),)


def seed_features(clock: Clock, id_factory: IdFactory) -> tuple[Feature, ...]:
    return (
        Feature(
            id=id_factory(),
            key=SEED_FEATURE_KEY,
            name="Audit Trail v2",
            description="New audit timeline",
            tags=("Compliance",),
            env=freeze_env(
                {
                    Environment.DEV: True,
                    Environment.TEST: True,
                    Environment.OPS: False,
                    Environment.STAGE: True,
                    Environment.PROD: False,
                }
            ),
            targeting=GroupList(("g-beta",)),
            notes="Beta rollout",
            updated_at=now_iso(clock),
        ),
    )


def seed(clock: Clock | None = None, id_factory: IdFactory = new_id) -> State:
    """Build a fresh sample State; ids and timestamps differ on every call."""
    features = seed_features(clock or SystemClock(), id_factory)
    return State(
        current_user=DEFAULT_USER,
        clients=seed_clients(),
        groups=seed_groups(),
        features=features,
        selected_feature_id=features[0].id,
        change_log=(),
    )


__all__ = ["SEED_FEATURE_KEY", "seed", "seed_clients", "seed_features", "seed_groups"]
