from __future__ import annotations

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    sustainability_score: float = Field(..., ge=0.0)
    price: float = Field(..., ge=0.0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    image_url: str = Field(..., min_length=1)


class ProductOut(BaseModel):
    id: str
    name: str
    category: str
    sustainability_score: float
    price: float
    currency: str
    image_url: str
