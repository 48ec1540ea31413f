from __future__ import annotations

from pydantic import BaseModel, Field

from ..catalog.models import ProductOut


class CartAddRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=100)


class CartUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=1, le=100)


class CartLineOut(BaseModel):
    product: ProductOut
    quantity: int
    line_total: float
    added_at: float


class CartOut(BaseModel):
    lines: list[CartLineOut]
    item_count: int
    total: float
    currency: str
