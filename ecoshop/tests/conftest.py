from __future__ import annotations

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest

from ecoshop.cart.store import clear_carts
from ecoshop.catalog.data_store import reset_catalog
from ecoshop.feedback.store import clear_feedback
from ecoshop.orders.store import clear_orders
from ecoshop.preferences.store import clear_preferences


@pytest.fixture(autouse=True)
def _reset_stores():
    reset_catalog()
    clear_preferences()
    clear_carts()
    clear_orders()
    clear_feedback()
    yield
