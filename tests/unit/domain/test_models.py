"""Unit tests for entity helpers and environments."""

from __future__ import annotations

import pytest

from flagdesk.domain.environments import (
    ENVIRONMENTS,
    Environment,
    coerce_env,
    default_env,
    env_to_dict,
    parse_env,
)
from flagdesk.domain.models import (
    Feature,
    FeatureDraft,
    Group,
    State,
    clean_tags,
    normalize_key,
    parse_tags,
)
from flagdesk.domain.targeting import ClientList
from flagdesk.kernel.errors import UnknownEnvironmentError, ValidationError


class TestEnvironment:
    def test_fixed_order(self) -> None:
        assert [e.value for e in ENVIRONMENTS] == ["Dev", "Test", "Ops", "Stage", "Prod"]

    def test_parse(self) -> None:
        assert Environment.parse("Prod") is Environment.PROD
        assert Environment.parse(Environment.OPS) is Environment.OPS

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(UnknownEnvironmentError) as exc_info:
            Environment.parse("QA")
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.code == "unknown_environment"

    def test_default_env(self) -> None:
        assert env_to_dict(default_env()) == {
            "Dev": True,
            "Test": True,
            "Ops": False,
            "Stage": False,
            "Prod": False,
        }

    def test_env_mapping_is_read_only(self) -> None:
        env = default_env()
        with pytest.raises(TypeError):
            env[Environment.PROD] = True  # type: ignore[index]

    def test_parse_env_fills_missing(self) -> None:
        env = parse_env({"Prod": True})
        assert set(env) == set(Environment)
        assert env[Environment.PROD] is True
        assert env[Environment.DEV] is False

    def test_parse_env_rejects_unknown(self) -> None:
        with pytest.raises(UnknownEnvironmentError):
            parse_env({"Staging": True})

    def test_coerce_env_only_accepts_true(self) -> None:
        env = coerce_env({"Dev": 1, "Test": True})
        assert env[Environment.DEV] is False
        assert env[Environment.TEST] is True


class TestTextHelpers:
    def test_normalize_key(self) -> None:
        assert normalize_key("  new  checkout flow ") == "new_checkout_flow"
        assert normalize_key("a\tb\nc") == "a_b_c"

    def test_clean_tags(self) -> None:
        assert clean_tags([" a ", "", "  ", "b"]) == ("a", "b")
        assert len(clean_tags(str(i) for i in range(20))) == 10

    def test_parse_tags(self) -> None:
        assert parse_tags("beta, ui ,,compliance") == ("beta", "ui", "compliance")


class TestEntities:
    def test_group_members_deduplicated(self) -> None:
        assert Group(id="g", name="G", client_ids=("a", "a", "b")).client_ids == ("a", "b")

    def test_feature_is_enabled(self) -> None:
        feature = Feature(id="f", key="k", name="n", updated_at="t")
        assert feature.is_enabled("Dev") is True
        assert feature.is_enabled(Environment.PROD) is False

    def test_search_text(self) -> None:
        feature = Feature(
            id="f", key="k", name="Name", updated_at="t", description="desc", tags=("x", "y")
        )
        assert feature.search_text() == "Name k desc x y"

    def test_features_compare_by_value_but_are_unhashable(self) -> None:
        a = Feature(id="f", key="k", name="n", updated_at="t")
        b = Feature(id="f", key="k", name="n", updated_at="t")
        assert a == b
        with pytest.raises(TypeError):
            hash(a)

    def test_state_is_unhashable(self) -> None:
        state = State(current_user="PM", clients=(), groups=(), features=())
        with pytest.raises(TypeError):
            hash(state)


class TestFeatureDraft:
    def test_defaults(self) -> None:
        draft = FeatureDraft()
        assert draft.id is None
        assert draft.env is None
        assert draft.cleaned_tags() == ()

    def test_comma_separated_tags(self) -> None:
        assert FeatureDraft(tags="a, b").cleaned_tags() == ("a", "b")

    def test_from_feature(self) -> None:
        feature = Feature(
            id="f", key="k", name="n", updated_at="t", tags=("a",), targeting=ClientList(("c",))
        )
        draft = FeatureDraft.from_feature(feature)
        assert draft.id == "f"
        assert draft.targeting == ClientList(("c",))
        assert draft.env is not None
        assert draft.env[Environment.DEV] is True
