from __future__ import annotations

from fastapi.testclient import TestClient

from ecoshop.app import app
from ecoshop.cart.store import pop_cart

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"email": "user@ecoshop.local", "password": "user123"})


def test_cart_starts_empty():
    _login_user(client)
    body = client.get("/cart").json()
    assert body["lines"] == []
    assert body["total"] == 0.0
    assert body["item_count"] == 0


def test_add_item_and_totals():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-001", "quantity": 2})
    body = client.post("/cart", json={"product_id": "p-006"}).json()
    assert [line["product"]["id"] for line in body["lines"]] == ["p-001", "p-006"]
    assert body["item_count"] == 3
    assert body["total"] == 249 * 2 + 199
    assert body["currency"] == "INR"


def test_adding_same_product_accumulates():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-001", "quantity": 2})
    body = client.post("/cart", json={"product_id": "p-001", "quantity": 3}).json()
    assert len(body["lines"]) == 1
    assert body["lines"][0]["quantity"] == 5
    assert body["lines"][0]["line_total"] == 249 * 5


def test_add_unknown_product():
    _login_user(client)
    assert client.post("/cart", json={"product_id": "p-999"}).status_code == 404


def test_add_rejects_zero_quantity():
    _login_user(client)
    assert client.post("/cart", json={"product_id": "p-001", "quantity": 0}).status_code == 422


def test_update_quantity():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-003"})
    body = client.put("/cart/p-003", json={"quantity": 4}).json()
    assert body["lines"][0]["quantity"] == 4
    assert body["total"] == 899 * 4


def test_update_missing_line():
    _login_user(client)
    assert client.put("/cart/p-003", json={"quantity": 2}).status_code == 404


def test_remove_line():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-003"})
    client.post("/cart", json={"product_id": "p-004"})
    body = client.delete("/cart/p-003").json()
    assert [line["product"]["id"] for line in body["lines"]] == ["p-004"]
    assert client.delete("/cart/p-003").status_code == 404


def test_clear_cart():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-003"})
    client.post("/cart", json={"product_id": "p-004"})
    body = client.delete("/cart").json()
    assert body["lines"] == []
    assert client.get("/cart").json()["lines"] == []


def test_carts_are_per_user():
    _login_user(client)
    client.post("/cart", json={"product_id": "p-003"})
    other = TestClient(app)
    other.post("/auth/login", json={"email": "admin@ecoshop.local", "password": "admin123"})
    assert other.get("/cart").json()["lines"] == []


def test_pop_cart_returns_contents_and_empties():
    user_id = client.post(
        "/auth/login", json={"email": "user@ecoshop.local", "password": "user123"}
    ).json()["user"]["id"]
    client.post("/cart", json={"product_id": "p-003", "quantity": 2})

    popped = pop_cart(user_id)
    assert popped.item_count == 2
    assert popped.total == 899 * 2
    assert client.get("/cart").json()["lines"] == []
    assert pop_cart(user_id).lines == []
