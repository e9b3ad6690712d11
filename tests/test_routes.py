from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from teapot.application.order_feed import OrderFeed
from teapot.application.storefront import Storefront
from teapot.interfaces import admin_routes, storefront_routes
from tests.conftest import make_order


@pytest.fixture
def feed(gateway) -> OrderFeed:
    return OrderFeed(gateway, interval=60)


@pytest.fixture
def client(cart_store, submitter, bus, feed) -> TestClient:
    app = FastAPI()
    app.state.storefront = Storefront(cart_store=cart_store, submitter=submitter, bus=bus)
    app.state.order_feed = feed
    app.include_router(storefront_routes.router)
    app.include_router(admin_routes.router)
    return TestClient(app)


def fill_cart(client: TestClient):
    client.post("/cart/items", data={"name": "Passion Fruit Smoothie"})
    client.post("/cart/items", data={"name": "Passion Fruit Smoothie"})
    client.post("/cart/items", data={"name": "Orange Juice"})


def test_home_page_lists_tab_items(client):
    r = client.get("/", params={"tab": "snacks"})

    assert r.status_code == 200
    assert "Mahamri" in r.text
    assert "Mango Lassi" not in r.text
    assert "cart_id" in r.cookies


def test_menu_json(client):
    r = client.get("/menu", params={"tab": "drinks"})

    assert r.json()["tab"] == "drinks"
    assert len(r.json()["items"]) == 6


def test_cart_flow(client):
    fill_cart(client)

    body = client.get("/cart").json()
    assert [(i["name"], i["quantity"]) for i in body["items"]] == [
        ("Passion Fruit Smoothie", 2),
        ("Orange Juice", 1),
    ]
    assert body["subtotal"] == 15.97
    assert body["delivery_fee"] == 2.99
    assert body["total"] == 18.96

    client.post("/cart/items/Orange Juice/decrease")
    client.post("/cart/items/Passion Fruit Smoothie/increase")
    body = client.get("/cart").json()
    assert [(i["name"], i["quantity"]) for i in body["items"]] == [("Passion Fruit Smoothie", 3)]

    body = client.delete("/cart/items/Passion Fruit Smoothie").json()
    assert body["items"] == []


def test_adding_unknown_item_is_404(client):
    r = client.post("/cart/items", data={"name": "Chai"})
    assert r.status_code == 404


def test_keystroke_validation(client):
    r = client.post("/order/delivery/validate", json={"address": "  ", "phone": "07a1-2"})

    assert r.json() == {
        "address": "",
        "phone": "0712",
        "errors": {
            "address": "Address is required",
            "phone": "Phone number must be exactly 10 digits",
        },
    }


def test_confirm_with_invalid_form_is_422(client):
    fill_cart(client)

    r = client.post("/order/confirm", data={"address": "   ", "phone": "12345"})

    assert r.status_code == 422
    assert r.json()["errors"]["phone"] == "Phone number must be exactly 10 digits"
    assert len(client.get("/cart").json()["items"]) == 2


def test_confirm_with_empty_cart_is_422(client):
    r = client.post("/order/confirm", data={"address": "12 Moi Avenue", "phone": "0712345678"})

    assert r.status_code == 422
    assert "cart" in r.json()["errors"]


def test_confirm_success_empties_cart(client, gateway):
    fill_cart(client)

    r = client.post("/order/confirm", data={"address": "12 Moi Avenue", "phone": "0712345678"})

    assert r.status_code == 200
    assert [i["name"] for i in r.json()["items"]] == ["Passion Fruit Smoothie", "Orange Juice"]
    assert r.json()["total"] == 18.96
    assert client.get("/cart").json()["items"] == []
    assert gateway.orders[0].total == Decimal("18.96")


def test_confirm_failure_keeps_cart(client, gateway):
    fill_cart(client)
    gateway.fail_submit = True

    r = client.post("/order/confirm", data={"address": "12 Moi Avenue", "phone": "0712345678"})

    assert r.status_code == 502
    assert r.json()["message"]
    assert len(client.get("/cart").json()["items"]) == 2


def test_dashboard_shows_feed(client, feed):
    feed.orders = [make_order("0711111111")]

    r = client.get("/admin/orders")

    assert r.status_code == 200
    assert "0711111111" in r.text
    assert "12 Moi Avenue" in r.text


def test_mark_sent(client, feed, gateway):
    order = make_order("0711111111")
    gateway.orders = [order]
    feed.orders = [order]

    r = client.post("/admin/orders/0711111111/sent")

    assert r.status_code == 200
    assert r.json()["orders"] == []
    assert gateway.orders == []


def test_mark_sent_failure_keeps_order(client, feed, gateway):
    order = make_order("0711111111")
    gateway.orders = [order]
    feed.orders = [order]
    gateway.fail_remove = True

    r = client.post("/admin/orders/0711111111/sent")

    assert r.status_code == 502
    assert r.json()["message"] == "Failed to delete order. Please try again."
    assert client.get("/admin/orders.json").json()["orders"][0]["deliveryInfo"]["phone"] == "0711111111"


def test_mark_sent_unknown_order_is_404(client):
    assert client.post("/admin/orders/0799999999/sent").status_code == 404
