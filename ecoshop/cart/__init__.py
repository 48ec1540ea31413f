"""Per-user shopping carts held in memory."""
