from __future__ import annotations

from pydantic import BaseModel

from ..catalog.models import ProductOut


class RecommendedProduct(ProductOut):
    score: float


class RecommendationResponse(BaseModel):
    user_id: str
    recommendations: list[RecommendedProduct]
    total_candidates: int
