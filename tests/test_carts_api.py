import pytest


@pytest.fixture
def product(client):
    response = client.post(
        "/api/products/",
        json={
            "title": "Mouse",
            "description": "Wireless mouse",
            "price": 49.5,
            "code": "MOU-1",
            "stock": 10,
            "category": "Peripherals",
        },
    )
    return response.json()


@pytest.fixture
def cart(client):
    response = client.post("/api/carts/")
    assert response.status_code == 201
    return response.json()


def test_new_cart_shape(cart):
    assert cart["products"] == []
    assert cart["totalQuantity"] == 0
    assert cart["totalPrice"] == 0


def test_add_same_product_twice(client, cart, product):
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")
    response = client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    assert response.status_code == 200
    assert response.json()["products"] == [
        {"id": product["id"], "title": "Mouse", "price": 49.5, "quantity": 2}
    ]
    assert response.json()["totalQuantity"] == 2


def test_add_unknown_product_is_404(client, cart):
    response = client.post(f"/api/carts/{cart['id']}/product/ghost")
    assert response.status_code == 404
    assert "ghost" in response.json()["error"]


def test_get_unknown_cart_is_404(client):
    assert client.get("/api/carts/unknown").status_code == 404


def test_update_quantity(client, cart, product):
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    response = client.put(f"/api/carts/{cart['id']}/product/{product['id']}", json={"quantity": 5})

    assert response.status_code == 200
    assert response.json()["products"][0]["quantity"] == 5


def test_update_quantity_zero_is_400(client, cart, product):
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    response = client.put(f"/api/carts/{cart['id']}/product/{product['id']}", json={"quantity": 0})

    assert response.status_code == 400
    assert client.get(f"/api/carts/{cart['id']}").json()["products"][0]["quantity"] == 1


def test_update_quantity_for_product_not_in_cart_is_404(client, cart, product):
    response = client.put(f"/api/carts/{cart['id']}/product/{product['id']}", json={"quantity": 2})
    assert response.status_code == 404


def test_remove_item_is_idempotent(client, cart, product):
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    first = client.delete(f"/api/carts/{cart['id']}/product/{product['id']}")
    second = client.delete(f"/api/carts/{cart['id']}/product/{product['id']}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert client.get(f"/api/carts/{cart['id']}").json()["products"] == []


def test_replace_contents(client, cart, product):
    response = client.put(
        f"/api/carts/{cart['id']}", json={"products": [{"product": product["id"], "quantity": 4}]}
    )

    assert response.status_code == 200
    assert response.json()["totalQuantity"] == 4


def test_replace_contents_with_unknown_product_is_400(client, cart, product):
    response = client.put(
        f"/api/carts/{cart['id']}",
        json={"products": [{"product": product["id"], "quantity": 1}, {"product": "ghost"}]},
    )

    assert response.status_code == 400
    assert client.get(f"/api/carts/{cart['id']}").json()["products"] == []


def test_empty_cart(client, cart, product):
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    response = client.delete(f"/api/carts/{cart['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Cart emptied successfully"}
    assert client.get(f"/api/carts/{cart['id']}").json()["products"] == []


def test_list_carts(client, cart, product):
    other = client.post("/api/carts/").json()
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")
    client.post(f"/api/carts/{cart['id']}/product/{product['id']}")

    carts = client.get("/api/carts/").json()

    assert [c["id"] for c in carts] == [cart["id"], other["id"]]
    assert carts[0]["totalQuantity"] == 2
    assert carts[0]["totalPrice"] == 99.0


def test_add_product_endpoint(client, cart, product):
    response = client.post(
        "/api/carts/addProduct", json={"productId": product["id"], "cartId": cart["id"]}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Product added to cart successfully"}


def test_add_product_endpoint_requires_ids(client):
    response = client.post("/api/carts/addProduct", json={"productId": "x"})
    assert response.status_code == 400
