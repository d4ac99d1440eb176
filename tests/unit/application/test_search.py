from __future__ import annotations

from flagdesk.application.search import matches, search_features
from flagdesk.domain.models import Feature

_DARK = Feature(id="f1", key="ui_dark", name="Dark mode", updated_at="t", tags=("UI",))
_AUDIT = Feature(
    id="f2",
    key="audit_trail_v2",
    name="Audit Trail v2",
    updated_at="t",
    description="New audit timeline",
    tags=("Compliance",),
    notes="dark launch",
)


class TestMatches:
    def test_blank_query_matches(self) -> None:
        assert matches(_DARK, "")
        assert matches(_DARK, "   ")

    def test_case_insensitive_over_name_key_description_tags(self) -> None:
        assert matches(_DARK, "DARK")
        assert matches(_AUDIT, "trail_v2")
        assert matches(_AUDIT, "timeline")
        assert matches(_AUDIT, "compliance")

    def test_notes_are_not_searched(self) -> None:
        assert not matches(_AUDIT, "launch")


class TestSearchFeatures:
    def test_keeps_order(self) -> None:
        assert search_features([_AUDIT, _DARK], "") == [_AUDIT, _DARK]

    def test_filters(self) -> None:
        assert search_features([_AUDIT, _DARK], " ui ") == [_DARK]
        assert search_features([_AUDIT, _DARK], "nothing") == []
