from __future__ import annotations

from fastapi.testclient import TestClient

from ecoshop.app import app

client = TestClient(app)


def _login_user(c):
    c.post("/auth/login", json={"email": "user@ecoshop.local", "password": "user123"})


def test_like_updates_state_and_categories():
    _login_user(client)
    resp = client.post("/preferences/like", json={"product_id": "p-013"})
    assert resp.status_code == 200
    assert resp.json()["preference"] == "liked"

    state = client.get("/preferences").json()
    assert state["liked"] == ["p-013"]
    assert state["disliked"] == []
    assert state["preferred_categories"] == ["Apparel"]


def test_dislike_removes_from_liked():
    _login_user(client)
    client.post("/preferences/like", json={"product_id": "p-013"})
    client.post("/preferences/dislike", json={"product_id": "p-013"})
    state = client.get("/preferences").json()
    assert state["liked"] == []
    assert state["disliked"] == ["p-013"]
    assert state["preferred_categories"] == []


def test_like_removes_from_disliked():
    _login_user(client)
    client.post("/preferences/dislike", json={"product_id": "p-005"})
    client.post("/preferences/like", json={"product_id": "p-005"})
    state = client.get("/preferences").json()
    assert state["liked"] == ["p-005"]
    assert state["disliked"] == []


def test_like_unknown_product():
    _login_user(client)
    resp = client.post("/preferences/like", json={"product_id": "p-999"})
    assert resp.status_code == 404
    assert client.get("/preferences").json()["liked"] == []


def test_dislike_unknown_product():
    _login_user(client)
    assert client.post("/preferences/dislike", json={"product_id": "p-999"}).status_code == 404


def test_blank_product_id_rejected():
    _login_user(client)
    assert client.post("/preferences/like", json={"product_id": ""}).status_code == 422


def test_set_stated_categories():
    _login_user(client)
    client.post("/preferences/like", json={"product_id": "p-001"})
    resp = client.put("/preferences/categories", json={"categories": ["Kitchen", "Bags"]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["stated_categories"] == ["Bags", "Kitchen"]
    assert body["preferred_categories"] == ["Bags", "Kitchen", "Personal Care"]


def test_preferences_are_per_user():
    _login_user(client)
    client.post("/preferences/like", json={"product_id": "p-001"})
    other = TestClient(app)
    other.post("/auth/login", json={"email": "admin@ecoshop.local", "password": "admin123"})
    assert other.get("/preferences").json()["liked"] == []
