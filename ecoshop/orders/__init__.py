"""
Order placement and payment.

Responsibilities:
- Turn a user's cart into an order with price snapshots.
- Create a payment-gateway order for checkout.
- Verify the gateway's signed payment callback before marking an order paid.
"""
