from __future__ import annotations

import threading
import time
import uuid

from ..catalog.data_store import get_product
from .models import FeedbackOut, ProductFeedbackResponse

_lock = threading.Lock()
_feedback: list[FeedbackOut] = []


def record_feedback(
    user_id: str,
    product_id: str,
    rating: int,
    comment: str | None = None,
) -> FeedbackOut:
    get_product(product_id)
    entry = FeedbackOut(
        id=uuid.uuid4().hex,
        user_id=user_id,
        product_id=product_id,
        rating=rating,
        comment=comment.strip() if comment else None,
        created_at=time.time(),
    )
    with _lock:
        _feedback.append(entry)
    return entry


def get_product_feedback(product_id: str) -> ProductFeedbackResponse:
    """Entries for one product, newest first, with the average rating."""
    get_product(product_id)
    entries = [f for f in _feedback if f.product_id == product_id]
    entries.reverse()
    average = round(sum(f.rating for f in entries) / len(entries), 2) if entries else 0.0
    return ProductFeedbackResponse(
        product_id=product_id,
        count=len(entries),
        average_rating=average,
        feedback=entries,
    )


def get_feedback() -> list[FeedbackOut]:
    return _feedback


def clear_feedback() -> None:
    with _lock:
        _feedback.clear()
