from __future__ import annotations

import logging
import time

from ..auth.users import get_user
from ..catalog.data_store import list_products
from ..config import DEFAULT_APP_CONFIG
from ..errors import StorageError, ValidationError
from ..preferences.store import get_state
from .models import RecommendationResponse, RecommendedProduct
from .scorer import rank_products

logger = logging.getLogger(__name__)


def get_recommendations(user_id: str, limit: int | None = None) -> RecommendationResponse:
    """Recommend up to *limit* products for *user_id*.

    Raises ``ValidationError`` for a blank id, ``NotFoundError`` for an
    unknown user and ``StorageError`` when the catalog or preference read
    fails. Nothing is retried.
    """
    start_time = time.time()

    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required", details={"user_id": user_id})
    limit = DEFAULT_APP_CONFIG.recommendation_limit if limit is None else limit

    get_user(user_id)

    try:
        state = get_state(user_id)
        catalog = list_products()
    except Exception as e:
        logger.error(
            "Failed to load recommendation inputs",
            extra={"user_id": user_id},
            exc_info=True,
        )
        raise StorageError("recommendation fetch", e) from e

    preferred = state.preferred_categories(catalog)
    ranked = rank_products(
        catalog,
        liked=state.liked,
        disliked=state.disliked,
        preferred_categories=preferred,
        limit=limit,
    )

    items = [
        RecommendedProduct(**product.model_dump(), score=score)
        for product, score in ranked
    ]
    total_candidates = sum(
        1 for p in catalog if p.id not in state.liked and p.id not in state.disliked
    )

    logger.info(
        "Recommendations generated",
        extra={
            "user_id": user_id,
            "total_candidates": total_candidates,
            "results_returned": len(items),
            "duration_ms": round((time.time() - start_time) * 1000, 2),
        },
    )
    return RecommendationResponse(
        user_id=user_id,
        recommendations=items,
        total_candidates=total_candidates,
    )
