"""Unit tests for effective audience resolution."""

from __future__ import annotations

import dataclasses

from hypothesis import given
from hypothesis import strategies as st

from flagdesk.domain.audience import ALL, audience_labels, resolve_audience
from flagdesk.domain.models import Client, Group, State
from flagdesk.domain.seed import seed
from flagdesk.domain.targeting import AllClients, ClientList, GroupList
from flagdesk.testing import FakeClock, SequentialIds


def _state(groups: tuple[Group, ...] = ()) -> State:
    base = seed(FakeClock(), SequentialIds())
    return base.replace(groups=groups or base.groups)


def _with_targeting(state: State, targeting: object) -> tuple[State, object]:
    feature = dataclasses.replace(state.features[0], targeting=targeting)
    return state.replace(features=(feature,)), feature


_GROUPS = (
    Group(id="g-1", name="One", client_ids=("c-aurora", "c-bayview")),
    Group(id="g-2", name="Two", client_ids=("c-bayview", "c-cypress")),
    Group(id="g-3", name="Three", client_ids=()),
)


class TestResolveAudience:
    def test_all_mode_returns_sentinel(self) -> None:
        state, feature = _with_targeting(_state(), AllClients())
        assert resolve_audience(feature, state) == ALL

    def test_clients_mode_passes_ids_through(self) -> None:
        state, feature = _with_targeting(_state(), ClientList(("c-aurora", "c-deleted")))
        assert resolve_audience(feature, state) == frozenset({"c-aurora", "c-deleted"})

    def test_groups_mode_unions_members(self) -> None:
        state, feature = _with_targeting(_state(_GROUPS), GroupList(("g-1", "g-2")))
        assert resolve_audience(feature, state) == frozenset(
            {"c-aurora", "c-bayview", "c-cypress"}
        )

    def test_missing_groups_are_skipped(self) -> None:
        state, feature = _with_targeting(_state(_GROUPS), GroupList(("g-gone", "g-3")))
        assert resolve_audience(feature, state) == frozenset()

    def test_seed_feature_reaches_beta_group(self) -> None:
        state = _state()
        assert resolve_audience(state.features[0], state) == frozenset({"c-aurora"})

    def test_derived_from_current_groups(self) -> None:
        state, feature = _with_targeting(_state(_GROUPS), GroupList(("g-3",)))
        assert resolve_audience(feature, state) == frozenset()
        grown = state.replace(groups=(Group(id="g-3", name="Three", client_ids=("c-cypress",)),))
        assert resolve_audience(feature, grown) == frozenset({"c-cypress"})

    @given(order=st.permutations(["g-1", "g-2", "g-3"]), repeats=st.integers(1, 3))
    def test_groups_result_ignores_order_and_duplicates(self, order: list[str], repeats: int) -> None:
        state = _state(_GROUPS)
        _, reference = _with_targeting(state, GroupList(("g-1", "g-2", "g-3")))
        expected = resolve_audience(reference, state)
        shuffled_groups = state.replace(groups=tuple(reversed(_GROUPS)))
        _, feature = _with_targeting(state, GroupList(tuple(order * repeats)))
        assert resolve_audience(feature, state) == expected
        assert resolve_audience(feature, shuffled_groups) == expected


class TestAudienceLabels:
    def test_all(self) -> None:
        assert audience_labels(ALL, _state()) == ["All clients"]

    def test_names_with_raw_id_fallback(self) -> None:
        state = _state().replace(clients=(Client(id="c-1", name="Zeta"),))
        assert audience_labels(frozenset({"c-1", "c-gone"}), state) == ["Zeta", "c-gone"]
