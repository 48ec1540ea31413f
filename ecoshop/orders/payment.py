from __future__ import annotations

import hashlib
import hmac
import uuid

from ..config import DEFAULT_APP_CONFIG, AppConfig
from .models import GatewayOrder


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def create_gateway_order(
    amount: float,
    currency: str,
    receipt: str,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> GatewayOrder:
    """Build the gateway order handed to the client-side checkout widget."""
    return GatewayOrder(
        gateway_order_id=f"order_{uuid.uuid4().hex[:14]}",
        key_id=config.payment_key_id,
        amount=to_minor_units(amount),
        currency=currency,
        receipt=receipt,
    )


def compute_signature(
    gateway_order_id: str,
    payment_id: str,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> str:
    """Hex HMAC-SHA256 of ``"<gateway_order_id>|<payment_id>"``."""
    message = f"{gateway_order_id}|{payment_id}".encode()
    return hmac.new(config.payment_key_secret.encode(), message, hashlib.sha256).hexdigest()


def verify_signature(
    gateway_order_id: str,
    payment_id: str,
    signature: str,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> bool:
    expected = compute_signature(gateway_order_id, payment_id, config)
    return hmac.compare_digest(expected, signature)
