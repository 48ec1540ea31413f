from __future__ import annotations

import logging
import threading
import time
from typing import Any

from ..catalog.data_store import find_product, get_product
from ..config import DEFAULT_APP_CONFIG
from ..errors import NotFoundError
from .models import CartLineOut, CartOut

logger = logging.getLogger(__name__)

_lock = threading.Lock()
# user_id -> product_id -> {"quantity", "added_at"}
_carts: dict[str, dict[str, dict[str, Any]]] = {}


def add_item(user_id: str, product_id: str, quantity: int = 1) -> CartOut:
    """Add *quantity* of a product; an existing line accumulates."""
    get_product(product_id)
    with _lock:
        cart = _carts.setdefault(user_id, {})
        line = cart.get(product_id)
        if line:
            line["quantity"] += quantity
        else:
            cart[product_id] = {"quantity": quantity, "added_at": time.time()}
    return get_cart(user_id)


def update_item(user_id: str, product_id: str, quantity: int) -> CartOut:
    with _lock:
        line = _carts.get(user_id, {}).get(product_id)
        if line is None:
            raise NotFoundError("cart line", product_id)
        line["quantity"] = quantity
    return get_cart(user_id)


def remove_item(user_id: str, product_id: str) -> CartOut:
    with _lock:
        cart = _carts.get(user_id, {})
        if product_id not in cart:
            raise NotFoundError("cart line", product_id)
        del cart[product_id]
    return get_cart(user_id)


def clear_cart(user_id: str) -> CartOut:
    with _lock:
        _carts.pop(user_id, None)
    return get_cart(user_id)


def pop_cart(user_id: str) -> CartOut:
    """Take the cart contents and empty it in one step."""
    with _lock:
        raw = _carts.pop(user_id, {})
    return _build_cart(user_id, raw)


def get_cart(user_id: str) -> CartOut:
    """Current cart with line totals. Lines whose product vanished are skipped."""
    with _lock:
        raw = {pid: dict(line) for pid, line in _carts.get(user_id, {}).items()}
    return _build_cart(user_id, raw)


def _build_cart(user_id: str, raw: dict[str, dict[str, Any]]) -> CartOut:
    lines: list[CartLineOut] = []
    for product_id, line in raw.items():
        product = find_product(product_id)
        if product is None:
            logger.warning(
                "Cart line references missing product",
                extra={"user_id": user_id, "product_id": product_id},
            )
            continue
        lines.append(CartLineOut(
            product=product,
            quantity=line["quantity"],
            line_total=round(product.price * line["quantity"], 2),
            added_at=line["added_at"],
        ))

    currency = lines[0].product.currency if lines else DEFAULT_APP_CONFIG.default_currency
    return CartOut(
        lines=lines,
        item_count=sum(line.quantity for line in lines),
        total=round(sum(line.line_total for line in lines), 2),
        currency=currency,
    )


def clear_carts() -> None:
    with _lock:
        _carts.clear()
