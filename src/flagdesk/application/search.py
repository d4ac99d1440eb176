"""Application search – case-insensitive feature list filter."""
from __future__ import annotations

from typing import Iterable

from flagdesk.domain.models import Feature


def matches(feature: Feature, query: str) -> bool:
    needle = query.strip().lower()
    return not needle or needle in feature.search_text().lower()


def search_features(features: Iterable[Feature], query: str) -> list[Feature]:
    """Features whose name, key, description or tags contain *query*.

    A blank query returns every feature in its current order.
    """
    return [f for f in features if matches(f, query)]


__all__ = ["matches", "search_features"]
