"""Domain exceptions for the EcoShop API.

Every handler raises one of these; ``app.py`` renders them as JSON with the
carried status code.
"""
from __future__ import annotations

from typing import Any


class EcoShopError(Exception):
    """Base exception for EcoShop errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}


class NotFoundError(EcoShopError):
    """Raised when a referenced user, product, cart line or order does not exist."""

    status_code = 404

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(
            message=f"{kind.capitalize()} '{identifier}' not found",
            details={"kind": kind, "id": identifier},
        )


class ValidationError(EcoShopError):
    """Raised for malformed or missing identifiers and invalid domain input."""

    status_code = 400


class ConflictError(EcoShopError):
    status_code = 409


class PaymentVerificationError(EcoShopError):
    """Raised when a payment callback signature does not match."""

    status_code = 400

    def __init__(self, gateway_order_id: str) -> None:
        super().__init__(
            message="Payment signature verification failed",
            details={"gateway_order_id": gateway_order_id},
        )


class StorageError(EcoShopError):
    """Raised when an underlying data fetch fails."""

    status_code = 500

    def __init__(self, operation: str, error: Exception) -> None:
        # the cause stays on __cause__ for the log, never in the response
        super().__init__(
            message=f"Storage failure during {operation}",
            details={"operation": operation},
        )
        self.__cause__ = error
