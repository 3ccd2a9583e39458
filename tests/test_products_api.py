import json
from urllib.parse import parse_qs, urlparse

from sqlalchemy.exc import OperationalError


PRODUCT = {
    "title": "Monitor",
    "description": "27 inch display",
    "price": 899.0,
    "code": "MON-27",
    "stock": 4,
    "category": "Displays",
}


def create(client, **overrides):
    response = client.post("/api/products/", json={**PRODUCT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_product(client):
    created = create(client)

    response = client.get(f"/api/products/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "MON-27"
    assert body["status"] is True
    assert body["thumbnails"] == []


def test_create_with_missing_fields_is_400(client):
    response = client.post("/api/products/", json={"title": "Only a title"})

    assert response.status_code == 400
    assert response.json()["status"] == "error"
    assert "price" in response.json()["error"]


def test_infinite_price_is_400(client):
    # json.dumps writes the bare Infinity token, which the body parser accepts
    body = json.dumps({**PRODUCT, "price": float("inf")})

    response = client.post(
        "/api/products/", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "price" in response.json()["error"]
    assert client.get("/api/products/").json()["payload"] == []


def test_update_with_null_title_is_400(client):
    created = create(client)

    response = client.put(f"/api/products/{created['id']}", json={"title": None})

    assert response.status_code == 400
    assert client.get(f"/api/products/{created['id']}").json()["title"] == "Monitor"


def test_duplicate_code_is_409(client):
    create(client)

    response = client.post("/api/products/", json={**PRODUCT, "title": "Another"})

    assert response.status_code == 409
    assert "MON-27" in response.json()["error"]


def test_unknown_product_is_404(client):
    assert client.get("/api/products/unknown").status_code == 404
    assert client.put("/api/products/unknown", json={"price": 1}).status_code == 404
    assert client.delete("/api/products/unknown").status_code == 404


def test_update_and_delete(client):
    created = create(client)

    response = client.put(f"/api/products/{created['id']}", json={"stock": 0, "status": False})
    assert response.status_code == 200
    assert response.json()["stock"] == 0
    assert response.json()["status"] is False

    response = client.delete(f"/api/products/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_list_products_response_shape(client):
    for i, price in enumerate([5, 4, 3, 2, 1]):
        create(client, code=f"P{i}", price=price)

    response = client.get("/api/products/", params={"limit": 2, "page": 2, "sort": "asc"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert [p["price"] for p in body["payload"]] == [3, 4]
    assert body["totalPages"] == 3
    assert body["page"] == 2
    assert body["prevPage"] == 1
    assert body["nextPage"] == 3
    assert body["hasPrevPage"] is True
    assert body["hasNextPage"] is True

    next_link = urlparse(body["nextLink"])
    assert next_link.path == "/api/products"
    assert parse_qs(next_link.query) == {"limit": ["2"], "page": ["3"], "sort": ["asc"]}


def test_list_products_links_keep_query(client):
    for i in range(3):
        create(client, code=f"Q{i}", category="Garden tools")

    body = client.get("/api/products/", params={"limit": 1, "query": "garden"}).json()

    assert body["prevLink"] is None
    assert parse_qs(urlparse(body["nextLink"]).query)["query"] == ["garden"]


def test_list_products_invalid_limit_is_400(client):
    response = client.get("/api/products/", params={"limit": 0})
    assert response.status_code == 400


def test_list_products_huge_page_is_empty(client):
    create(client)

    response = client.get("/api/products/", params={"page": 10**18, "limit": 10})

    assert response.status_code == 200
    assert response.json()["payload"] == []
    assert response.json()["hasNextPage"] is False


def test_add_product_to_cart_via_products_router(client):
    product = create(client)
    cart = client.post("/api/carts/").json()

    response = client.post(
        "/api/products/addProduct", json={"productId": product["id"], "cartId": cart["id"]}
    )

    assert response.status_code == 200
    assert client.get(f"/api/carts/{cart['id']}").json()["totalQuantity"] == 1


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/health/db").json()["database"] == "connected"


def test_store_failure_is_generic_500(client, monkeypatch):
    failing = OperationalError("select", {}, Exception("disk I/O error"))

    def broken_execute(self, *args, **kwargs):
        raise failing

    monkeypatch.setattr("sqlalchemy.orm.Session.execute", broken_execute)

    response = client.get("/api/products/anything")

    assert response.status_code == 500
    assert response.json() == {"status": "error", "error": "Internal server error"}
