from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    created = "created"
    payment_pending = "payment_pending"
    paid = "paid"


class OrderLine(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int
    line_total: float


class OrderOut(BaseModel):
    id: str
    user_id: str
    lines: list[OrderLine]
    total_amount: float
    currency: str
    status: OrderStatus
    gateway_order_id: str | None = None
    payment_id: str | None = None
    created_at: float


class GatewayOrder(BaseModel):
    gateway_order_id: str
    key_id: str
    amount: int = Field(..., description="Amount in minor currency units")
    currency: str
    receipt: str


class PaymentVerifyRequest(BaseModel):
    gateway_order_id: str = Field(..., min_length=1)
    payment_id: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)
