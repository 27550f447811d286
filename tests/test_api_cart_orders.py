# tests/test_api_cart_orders.py
from decimal import Decimal

import pytest

API = "/api/v1"

CHECKOUT = {
    "customer_name": "Awa Diallo",
    "delivery_address": "12 rue des Tisserands, Dakar",
    "phone_number": "+221 77 000 00 00",
    "payment_method": "onplace",
}


@pytest.fixture
def bazin(client, admin_headers) -> dict:
    resp = client.post(
        f"{API}/products",
        json={
            "name": "Bazin riche indigo",
            "price": "10.00",
            "stock": "20",
            "fabric_type": "bazin",
            "fabric_subtype": "Riche",
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def wax(client, admin_headers) -> dict:
    resp = client.post(
        f"{API}/products",
        json={
            "name": "Wax Vlisco",
            "price": "45.00",
            "stock": "4",
            "fabric_type": "pagne",
            "fabric_subtype": "Vlisco",
        },
        headers=admin_headers,
    )
    return resp.json()


def _add(client, headers, product, quantity, **extra):
    return client.post(
        f"{API}/cart",
        json={"product_id": product["id"], "quantity": str(quantity), **extra},
        headers=headers,
    )


def test_add_and_replace_quantity(client, client_headers, bazin):
    resp = _add(client, client_headers, bazin, 3)
    assert resp.status_code == 200
    assert resp.json()["state"] == "non_empty"
    assert Decimal(resp.json()["total"]) == Decimal("30.00")

    resp = _add(client, client_headers, bazin, 5)
    body = resp.json()
    assert Decimal(body["total"]) == Decimal("50.00")
    assert body["line_count"] == 1
    assert Decimal(body["items"][0]["line_total"]) == Decimal("50.00")


def test_invalid_subtype_is_422_and_cart_unchanged(client, client_headers, bazin):
    _add(client, client_headers, bazin, 2)

    resp = _add(client, client_headers, bazin, 1, fabric_subtype="Invalide")

    assert resp.status_code == 422
    assert "fabric_subtype" in resp.json()["errors"]
    cart = client.get(f"{API}/cart", headers=client_headers).json()
    assert cart["line_count"] == 1
    assert Decimal(cart["items"][0]["quantity"]) == Decimal(2)


def test_line_unit_must_be_the_product_unit(client, client_headers, bazin):
    resp = _add(client, client_headers, bazin, 2, unit="roll")

    assert resp.status_code == 422
    assert "unit" in resp.json()["errors"]
    assert client.get(f"{API}/cart", headers=client_headers).json()["line_count"] == 0

    resp = _add(client, client_headers, bazin, 2, unit="meter")
    assert resp.status_code == 200
    line = resp.json()["items"][0]
    assert line["unit"] == "meter"
    assert Decimal(line["unit_price"]) == Decimal("10.00")


def test_product_subtype_cannot_be_overridden(client, client_headers, bazin):
    resp = _add(client, client_headers, bazin, 1, fabric_subtype="Getzner")

    assert resp.status_code == 422
    assert "fabric_subtype" in resp.json()["errors"]

    resp = _add(client, client_headers, bazin, 1, fabric_subtype="Riche")
    assert resp.json()["items"][0]["fabric_subtype"] == "Riche"


def test_shopper_picks_subtype_for_type_wide_product(client, client_headers, admin_headers):
    product = client.post(
        f"{API}/products",
        json={"name": "Bazin au mètre", "price": "8.00", "stock": "50", "fabric_type": "bazin"},
        headers=admin_headers,
    ).json()

    assert _add(client, client_headers, product, 1).status_code == 422

    resp = _add(client, client_headers, product, 1, fabric_subtype="Getzner")
    assert resp.status_code == 200
    assert resp.json()["items"][0]["fabric_subtype"] == "Getzner"


def test_quantity_above_stock_is_refused(client, client_headers, wax):
    resp = _add(client, client_headers, wax, 5)

    assert resp.status_code == 400
    assert client.get(f"{API}/cart", headers=client_headers).json()["line_count"] == 0


def test_update_remove_and_clear(client, client_headers, bazin, wax):
    _add(client, client_headers, bazin, 3)
    _add(client, client_headers, wax, 1)

    resp = client.patch(
        f"{API}/cart/{bazin['id']}", json={"quantity": "4.5"}, headers=client_headers
    )
    assert resp.status_code == 200
    assert Decimal(resp.json()["total"]) == Decimal("90.00")

    resp = client.patch(f"{API}/cart/{wax['id']}", json={"quantity": "0"}, headers=client_headers)
    assert resp.status_code == 422

    resp = client.delete(f"{API}/cart/{wax['id']}", headers=client_headers)
    assert resp.json()["line_count"] == 1
    # removing twice is fine
    assert client.delete(f"{API}/cart/{wax['id']}", headers=client_headers).status_code == 200

    resp = client.delete(f"{API}/cart", headers=client_headers)
    assert resp.json() == {"items": [], "line_count": 0, "total": "0.00", "state": "empty"}


def test_update_absent_item_is_404(client, client_headers, bazin):
    resp = client.patch(
        f"{API}/cart/{bazin['id']}", json={"quantity": "2"}, headers=client_headers
    )
    assert resp.status_code == 404


def test_carts_are_isolated_per_shopper(client, client_headers, other_client_headers, bazin):
    _add(client, client_headers, bazin, 3)

    other = client.get(f"{API}/cart", headers=other_client_headers).json()

    assert other["line_count"] == 0


def test_cart_requires_a_shopper(client, admin_headers):
    assert client.get(f"{API}/cart").status_code == 401
    assert client.get(f"{API}/cart", headers=admin_headers).status_code == 403


def test_checkout_creates_order_and_clears_cart(client, client_headers, admin_headers, bazin, wax):
    _add(client, client_headers, bazin, 3)
    _add(client, client_headers, wax, 2)

    resp = client.post(f"{API}/orders/checkout", json=CHECKOUT, headers=client_headers)

    assert resp.status_code == 200
    order = resp.json()
    assert order["status"] == "pending"
    assert Decimal(order["total_amount"]) == Decimal("120.00")
    assert {it["product_name"] for it in order["items"]} == {"Bazin riche indigo", "Wax Vlisco"}
    assert client.get(f"{API}/cart", headers=client_headers).json()["line_count"] == 0

    remaining = client.get(f"{API}/products/{wax['id']}").json()
    assert Decimal(remaining["stock"]) == Decimal(2)

    mine = client.get(f"{API}/orders/me", headers=client_headers).json()
    assert [o["id"] for o in mine] == [order["id"]]
    detail = client.get(f"{API}/orders/me/{order['id']}", headers=client_headers).json()
    assert len(detail["items"]) == 2

    admin_view = client.get(f"{API}/orders", params={"status": "pending"}, headers=admin_headers)
    assert [o["id"] for o in admin_view.json()] == [order["id"]]


def test_checkout_with_empty_cart_is_400(client, client_headers, bazin):
    _add(client, client_headers, bazin, 1)
    client.delete(f"{API}/cart/{bazin['id']}", headers=client_headers)

    resp = client.post(f"{API}/orders/checkout", json=CHECKOUT, headers=client_headers)
    assert resp.status_code == 400


def test_checkout_keeps_cart_when_stock_ran_out(client, client_headers, admin_headers, wax):
    _add(client, client_headers, wax, 3)
    client.patch(f"{API}/products/{wax['id']}", json={"stock": "1"}, headers=admin_headers)

    resp = client.post(f"{API}/orders/checkout", json=CHECKOUT, headers=client_headers)

    assert resp.status_code == 400
    assert resp.json()["detail"]["items"][0]["product_id"] == wax["id"]
    assert client.get(f"{API}/cart", headers=client_headers).json()["line_count"] == 1


def test_order_status_transitions(client, client_headers, admin_headers, bazin):
    _add(client, client_headers, bazin, 1)
    order = client.post(f"{API}/orders/checkout", json=CHECKOUT, headers=client_headers).json()
    url = f"{API}/orders/{order['id']}/status"

    resp = client.patch(url, json={"status": "delivered"}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.patch(url, json={"status": "validated"}, headers=admin_headers)
    assert resp.json()["status"] == "validated"

    resp = client.patch(url, json={"status": "validated"}, headers=admin_headers)
    assert resp.status_code == 200

    resp = client.patch(url, json={"status": "delivered"}, headers=admin_headers)
    assert resp.json()["status"] == "delivered"

    resp = client.patch(url, json={"status": "pending"}, headers=admin_headers)
    assert resp.status_code == 400

    assert client.patch(url, json={"status": "validated"}, headers=client_headers).status_code == 403
