"""Domain – entity shapes, hydration, audience resolution and change log."""

from flagdesk.domain.audience import ALL, Audience, audience_labels, resolve_audience
from flagdesk.domain.changelog import append_entry, history_for, resolve_actor
from flagdesk.domain.codec import encode_state, state_to_dict
from flagdesk.domain.environments import ENVIRONMENTS, Environment, default_env
from flagdesk.domain.models import (
    CHANGE_LOG_LIMIT,
    ChangeLogEntry,
    Client,
    Feature,
    FeatureDraft,
    Group,
    State,
)
from flagdesk.domain.normalizer import normalize
from flagdesk.domain.seed import seed
from flagdesk.domain.targeting import AllClients, ClientList, GroupList, Targeting, TargetingMode

__all__ = [
    "ALL",
    "AllClients",
    "Audience",
    "CHANGE_LOG_LIMIT",
    "ChangeLogEntry",
    "Client",
    "ClientList",
    "ENVIRONMENTS",
    "Environment",
    "Feature",
    "FeatureDraft",
    "Group",
    "GroupList",
    "State",
    "Targeting",
    "TargetingMode",
    "append_entry",
    "audience_labels",
    "default_env",
    "encode_state",
    "history_for",
    "normalize",
    "resolve_actor",
    "resolve_audience",
    "seed",
    "state_to_dict",
]
