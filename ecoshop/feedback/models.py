from __future__ import annotations

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)


class FeedbackOut(BaseModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: str | None = None
    created_at: float


class ProductFeedbackResponse(BaseModel):
    product_id: str
    count: int
    average_rating: float
    feedback: list[FeedbackOut]
