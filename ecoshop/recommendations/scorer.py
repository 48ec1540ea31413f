from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import pandas as pd

from ..catalog.models import ProductOut

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ScoreWeights:
    category: float = 2.0
    liked: float = 3.0
    disliked: float = 3.0


DEFAULT_WEIGHTS = ScoreWeights()


def _catalog_frame(catalog: Sequence[ProductOut]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": [p.id for p in catalog],
            "category": [p.category for p in catalog],
            "sustainability_score": [float(p.sustainability_score) for p in catalog],
            "_position": range(len(catalog)),
        }
    )


def score_catalog(
    catalog: Sequence[ProductOut],
    liked: Iterable[str],
    disliked: Iterable[str],
    preferred_categories: Iterable[str],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> pd.DataFrame:
    """Return the catalog as a frame with a ``_score`` column, in catalog order.

    score = sustainability_score
            + weights.category  if category is preferred
            + weights.liked     if liked
            - weights.disliked  if disliked
    """
    df = _catalog_frame(catalog)
    liked_ids = list(set(liked))
    disliked_ids = list(set(disliked))

    df["_liked"] = df["id"].isin(liked_ids)
    df["_disliked"] = df["id"].isin(disliked_ids)
    df["_preferred"] = df["category"].isin(list(set(preferred_categories)))

    df["_score"] = (
        df["sustainability_score"]
        + weights.category * df["_preferred"].astype(float)
        + weights.liked * df["_liked"].astype(float)
        - weights.disliked * df["_disliked"].astype(float)
    )
    return df


def rank_products(
    catalog: Sequence[ProductOut],
    liked: Iterable[str],
    disliked: Iterable[str],
    preferred_categories: Iterable[str],
    limit: int = DEFAULT_LIMIT,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[tuple[ProductOut, float]]:
    """Rank *catalog* for one user and return ``(product, score)`` pairs.

    Products already liked or disliked never appear. Ordering is by score
    descending, then by catalog position, so equal scores keep catalog order.
    """
    if limit <= 0 or not catalog:
        return []

    df = score_catalog(catalog, liked, disliked, preferred_categories, weights)
    candidates = df.loc[~(df["_liked"] | df["_disliked"])]
    top = candidates.sort_values(
        ["_score", "_position"], ascending=[False, True], kind="stable"
    ).head(limit)

    return [
        (catalog[int(position)], round(float(score), 4))
        for position, score in zip(top["_position"], top["_score"])
    ]
