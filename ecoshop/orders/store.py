from __future__ import annotations

import logging
import threading
import time
import uuid

from ..cart.store import pop_cart
from ..errors import NotFoundError, PaymentVerificationError, ValidationError
from .models import GatewayOrder, OrderLine, OrderOut, OrderStatus
from .payment import create_gateway_order, verify_signature

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_orders: dict[str, OrderOut] = {}


def place_order(user_id: str) -> OrderOut:
    """Snapshot the user's cart into a new order and empty the cart."""
    cart = pop_cart(user_id)
    if not cart.lines:
        raise ValidationError("Cart is empty", details={"user_id": user_id})

    order = OrderOut(
        id=uuid.uuid4().hex,
        user_id=user_id,
        lines=[
            OrderLine(
                product_id=line.product.id,
                name=line.product.name,
                unit_price=line.product.price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in cart.lines
        ],
        total_amount=cart.total,
        currency=cart.currency,
        status=OrderStatus.created,
        created_at=time.time(),
    )
    with _lock:
        _orders[order.id] = order

    logger.info(
        "Order placed",
        extra={"user_id": user_id, "order_id": order.id, "total_amount": order.total_amount},
    )
    return order


def get_order(user_id: str, order_id: str) -> OrderOut:
    """Fetch an order owned by *user_id*; other users' orders read as missing."""
    order = _orders.get(order_id)
    if order is None or order.user_id != user_id:
        raise NotFoundError("order", order_id)
    return order


def list_orders(user_id: str) -> list[OrderOut]:
    orders = [o for o in _orders.values() if o.user_id == user_id]
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def create_payment(user_id: str, order_id: str) -> GatewayOrder:
    with _lock:
        order = get_order(user_id, order_id)
        if order.status is OrderStatus.paid:
            raise ValidationError("Order is already paid", details={"order_id": order_id})

        gateway_order = create_gateway_order(order.total_amount, order.currency, receipt=order.id)
        _orders[order.id] = order.model_copy(update={
            "status": OrderStatus.payment_pending,
            "gateway_order_id": gateway_order.gateway_order_id,
        })

    logger.info(
        "Payment order created",
        extra={"order_id": order_id, "gateway_order_id": gateway_order.gateway_order_id},
    )
    return gateway_order


def verify_payment(
    user_id: str,
    gateway_order_id: str,
    payment_id: str,
    signature: str,
) -> OrderOut:
    """Mark the matching order paid when the callback signature checks out."""
    with _lock:
        order = next(
            (
                o for o in _orders.values()
                if o.user_id == user_id and o.gateway_order_id == gateway_order_id
            ),
            None,
        )
        if order is None:
            raise NotFoundError("payment order", gateway_order_id)

        if not verify_signature(gateway_order_id, payment_id, signature):
            logger.warning(
                "Payment signature mismatch",
                extra={"order_id": order.id, "gateway_order_id": gateway_order_id},
            )
            raise PaymentVerificationError(gateway_order_id)

        if order.status is not OrderStatus.paid:
            order = order.model_copy(update={
                "status": OrderStatus.paid,
                "payment_id": payment_id,
            })
            _orders[order.id] = order

    logger.info("Payment verified", extra={"order_id": order.id, "payment_id": payment_id})
    return order


def clear_orders() -> None:
    with _lock:
        _orders.clear()
