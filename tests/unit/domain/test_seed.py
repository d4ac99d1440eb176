"""Unit tests for the sample State."""

from __future__ import annotations

from flagdesk.domain.environments import Environment
from flagdesk.domain.seed import seed
from flagdesk.domain.targeting import GroupList
from flagdesk.kernel.time import FrozenClock
from flagdesk.testing import SequentialIds


class TestSeed:
    def test_shape(self, clock: FrozenClock) -> None:
        state = seed(clock, SequentialIds())
        assert state.current_user == "PM"
        assert [c.id for c in state.clients] == ["c-aurora", "c-bayview", "c-cypress"]
        assert [(g.id, g.client_ids) for g in state.groups] == [("g-beta", ("c-aurora",))]
        assert state.change_log == ()

    def test_sample_feature(self, clock: FrozenClock) -> None:
        (feature,) = seed(clock, SequentialIds()).features
        assert feature.id == "id-1"
        assert feature.key == "audit_trail_v2"
        assert feature.name == "Audit Trail v2"
        assert feature.tags == ("Compliance",)
        assert feature.targeting == GroupList(("g-beta",))
        assert feature.updated_at == "2026-01-01T12:00:00.000Z"
        assert [e for e in Environment if feature.env[e]] == [
            Environment.DEV,
            Environment.TEST,
            Environment.STAGE,
        ]

    def test_selects_sample_feature(self, clock: FrozenClock) -> None:
        state = seed(clock, SequentialIds())
        assert state.selected_feature_id == state.features[0].id

    def test_fresh_ids_each_call(self) -> None:
        assert seed().features[0].id != seed().features[0].id
