# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations


def test_root_redirects_to_products(app_client):
    resp = app_client.get("/", follow_redirects=False)

    assert resp.status_code in (302, 307)
    assert resp.headers["location"] == "/product"


def test_product_listing_sets_session_cookie(app_client):
    resp = app_client.get("/product")

    assert resp.status_code == 200
    assert "Widget" in resp.text
    assert "Gadget" in resp.text
    assert "shop_session" in resp.cookies or "shop_session" in app_client.cookies
    # Widget stock 3 is low
    assert "Product with name Widget has low stock." in resp.text


def test_order_form_lists_products(app_client):
    resp = app_client.get("/order/create")

    assert resp.status_code == 200
    assert 'name="quantity"' in resp.text
    assert "Widget (3 left)" in resp.text


def test_order_submission_redirects_and_flashes_once(app_client):
    resp = app_client.post("/order", data={"product_id": "1", "quantity": "2"}, follow_redirects=False)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/order"

    page = app_client.get("/order")
    assert "Order added successfully" in page.text
    assert "No orders yet." not in page.text

    again = app_client.get("/order")
    assert "Order added successfully" not in again.text

    products = app_client.get("/app/products").json()
    assert products[0]["stock"] == 1


def test_order_submission_with_bad_quantity(app_client):
    app_client.post("/order", data={"product_id": "1", "quantity": "0"}, follow_redirects=False)

    page = app_client.get("/order")
    assert "Invalid quantity" in page.text
    assert "No orders yet." in page.text


def test_unknown_path_is_plain_404(app_client):
    resp = app_client.get("/nowhere")

    assert resp.status_code == 404
    assert resp.text == "Error 404. Page not found"


def test_visitors_without_messages_get_no_session(app_client):
    state = app_client.app.state.app_state
    state.stores.products.write_all([{"id": 2, "name": "Gadget", "price": 24.5, "stock": 12}])

    for _ in range(20):
        resp = app_client.get("/app/products")
        assert resp.status_code == 200
        assert "shop_session" not in resp.cookies

    assert len(state.sessions) == 0


def test_flash_keeps_session_for_next_page(app_client):
    state = app_client.app.state.app_state
    state.stores.products.write_all([{"id": 2, "name": "Gadget", "price": 24.5, "stock": 12}])

    app_client.post("/order", data={"product_id": "9", "quantity": "1"}, follow_redirects=False)

    assert len(state.sessions) == 1
    assert "Product not found" in app_client.get("/order").text
