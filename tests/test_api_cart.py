"""Tests for cart and checkout endpoints"""
from sqlmodel import select

from krishi_jyothi.models.order import Order, OrderItem

API = "/api/v1"

TOMATOES = 1
SPINACH = 2
BASMATI = 4  # seeded unlisted


def add(client, headers, product_id, quantity=1):
    return client.post(
        f"{API}/cart",
        json={"product_id": product_id, "quantity": quantity},
        headers=headers,
    )


def test_empty_cart(client, auth_headers):
    data = client.get(f"{API}/cart", headers=auth_headers).json()
    assert data == {"items": [], "item_count": 0, "subtotal": 0, "notifications": []}


def test_add_snapshots_product(client, auth_headers, seeded):
    data = add(client, auth_headers, TOMATOES, 2).json()

    line = data["items"][0]
    assert line["name"] == "Organic Tomatoes"
    assert line["price"] == 60
    assert line["farmer_name"] == "Rajesh Patel"
    assert data["item_count"] == 2
    assert data["subtotal"] == 120
    assert data["notifications"][0]["title"] == "Added to cart"


def test_cart_survives_between_requests(client, auth_headers, seeded):
    add(client, auth_headers, TOMATOES, 2)
    add(client, auth_headers, TOMATOES, 3)

    data = client.get(f"{API}/cart", headers=auth_headers).json()
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 5
    assert data["subtotal"] == 300


def test_add_unknown_product(client, auth_headers, seeded):
    assert add(client, auth_headers, 999).status_code == 404


def test_add_unlisted_product(client, auth_headers, seeded):
    assert add(client, auth_headers, BASMATI).status_code == 400


def test_add_non_positive_quantity_is_rejected(client, auth_headers, seeded):
    assert add(client, auth_headers, TOMATOES, 0).status_code == 422


def test_update_quantity_and_remove_by_zero(client, auth_headers, seeded):
    add(client, auth_headers, TOMATOES)
    add(client, auth_headers, SPINACH)

    data = client.patch(
        f"{API}/cart/{SPINACH}", json={"quantity": 4}, headers=auth_headers
    ).json()
    assert data["item_count"] == 5
    assert data["notifications"] == []

    data = client.patch(
        f"{API}/cart/{TOMATOES}", json={"quantity": 0}, headers=auth_headers
    ).json()
    assert [i["id"] for i in data["items"]] == [SPINACH]
    assert data["notifications"][0]["title"] == "Item removed"


def test_remove_and_clear(client, auth_headers, seeded):
    add(client, auth_headers, TOMATOES)
    add(client, auth_headers, SPINACH)

    data = client.delete(f"{API}/cart/{TOMATOES}", headers=auth_headers).json()
    assert data["item_count"] == 1

    data = client.delete(f"{API}/cart/777", headers=auth_headers).json()
    assert data["item_count"] == 1
    assert data["notifications"] == []

    data = client.delete(f"{API}/cart", headers=auth_headers).json()
    assert data["items"] == []
    assert data["subtotal"] == 0
    assert data["notifications"][0]["title"] == "Cart cleared"


def test_checkout_requires_login(client, auth_headers, seeded):
    add(client, auth_headers, TOMATOES)

    response = client.post(f"{API}/cart/checkout", headers=auth_headers)

    assert response.status_code == 401
    assert response.json()["detail"] == "You need to be logged in to checkout."
    assert client.get(f"{API}/cart", headers=auth_headers).json()["item_count"] == 1


def test_checkout_empty_cart(client, consumer_headers):
    response = client.post(f"{API}/cart/checkout", headers=consumer_headers)
    assert response.status_code == 400


def test_checkout_places_order_and_clears_cart(client, consumer_headers, seeded):
    add(client, consumer_headers, TOMATOES, 5)
    add(client, consumer_headers, SPINACH, 2)

    response = client.post(f"{API}/cart/checkout", headers=consumer_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["order"]["total"] == 380
    assert data["order"]["customer_name"] == "Priya Sharma"
    assert len(data["order"]["items"]) == 2
    titles = [n["title"] for n in data["notifications"]]
    assert "Order placed successfully!" in titles

    assert client.get(f"{API}/cart", headers=consumer_headers).json()["items"] == []

    orders = seeded.exec(select(Order)).all()
    assert len(orders) == 1
    assert len(seeded.exec(select(OrderItem)).all()) == 2
