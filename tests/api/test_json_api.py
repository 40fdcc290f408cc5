# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations


def test_create_order_json(app_client):
    resp = app_client.post("/app/orders", json={"product_id": 1, "quantity": 2})

    assert resp.status_code == 200, resp.text
    assert resp.json() == {"ok": True, "messages": ["Order added successfully"]}

    orders = app_client.get("/app/orders").json()
    assert len(orders) == 1
    assert orders[0]["product_id"] == 1
    assert orders[0]["quantity"] == 2


def test_create_order_over_stock_conflicts(app_client):
    resp = app_client.post("/app/orders", json={"product_id": 1, "quantity": 5})

    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["error"] == "order_rejected"
    assert detail["message"] == "Not available"
    assert detail["messages"] == ["Not available"]
    assert app_client.get("/app/orders").json() == []


def test_create_order_validation_envelope(app_client):
    resp = app_client.post("/app/orders", json={"product_id": 1})

    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"]["error"] == "validation_error"
    assert "quantity" in body["detail"]["fields"]


def test_orders_limit(app_client):
    for _ in range(3):
        app_client.post("/app/orders", json={"product_id": 2, "quantity": 1})

    orders = app_client.get("/app/orders", params={"limit": 2}).json()

    assert [o["id"] for o in orders] == [2, 3]


def test_notifications_follow_stock(app_client):
    before = app_client.get("/app/notifications").json()["notifications"]
    assert list(before) == ["1"]

    app_client.post("/app/orders", json={"product_id": 2, "quantity": 10})

    after = app_client.get("/app/notifications").json()["notifications"]
    assert sorted(after) == ["1", "2"]


def test_unknown_json_path_uses_error_envelope(app_client):
    resp = app_client.get("/app/nothing")

    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "not_found"
