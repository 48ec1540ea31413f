from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

from ..catalog.models import ProductOut


class Preference(str, Enum):
    liked = "liked"
    disliked = "disliked"
    neutral = "neutral"


@dataclass(frozen=True)
class PreferenceState:
    liked: frozenset[str] = field(default_factory=frozenset)
    disliked: frozenset[str] = field(default_factory=frozenset)
    stated_categories: frozenset[str] = field(default_factory=frozenset)

    def set_preference(self, product_id: str, preference: Preference) -> PreferenceState:
        """Return a new state with *product_id* moved to the given bucket."""
        liked = self.liked - {product_id}
        disliked = self.disliked - {product_id}
        if preference is Preference.liked:
            liked = liked | {product_id}
        elif preference is Preference.disliked:
            disliked = disliked | {product_id}
        return replace(self, liked=liked, disliked=disliked)

    def with_categories(self, categories: Iterable[str]) -> PreferenceState:
        cleaned = frozenset(c.strip() for c in categories if c and c.strip())
        return replace(self, stated_categories=cleaned)

    def preference_for(self, product_id: str) -> Preference:
        if product_id in self.liked:
            return Preference.liked
        if product_id in self.disliked:
            return Preference.disliked
        return Preference.neutral

    def preferred_categories(self, catalog: Iterable[ProductOut]) -> frozenset[str]:
        """Stated categories plus the categories of liked products still in *catalog*."""
        liked_categories = {p.category for p in catalog if p.id in self.liked}
        return self.stated_categories | liked_categories
