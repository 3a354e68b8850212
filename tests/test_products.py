import pytest


def product_payload(category_id, **overrides):
    payload = {
        "name": "Air filter 1.4 TSI",
        "description": "OEM air filter",
        "price": 19.9,
        "stock": 25,
        "categoryId": category_id,
    }
    payload.update(overrides)
    return payload


def test_create_product_with_missing_category_then_after_creating_it(client):
    r = client.post("/api/products", json=product_payload(1))
    assert r.status_code == 404, r.text
    assert r.json() == {"error": "Category not found"}

    category = client.post("/api/categories", json={"name": "Filters"}).json()
    assert category["id"] == 1

    r = client.post("/api/products", json=product_payload(category["id"]))
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["categoryId"] == category["id"]
    assert data["category"] == {"id": category["id"], "name": "Filters"}


def test_create_product_missing_required_field_writes_nothing(client, category):
    payload = product_payload(category["id"])
    del payload["name"]

    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "name is required"}
    assert client.get("/api/products").json() == []


def test_create_product_missing_category_id(client):
    payload = product_payload(1)
    del payload["categoryId"]

    r = client.post("/api/products", json=payload)
    assert r.status_code == 400
    assert "is required" in r.json()["error"]


def test_create_product_rejects_blank_name_and_negative_numbers(client, category):
    r = client.post("/api/products", json=product_payload(category["id"], name="  "))
    assert r.status_code == 400
    assert r.json()["error"] == "name is required"

    r = client.post("/api/products", json=product_payload(category["id"], price=-1))
    assert r.status_code == 400
    assert r.json()["error"] == "Price must be non-negative"

    r = client.post("/api/products", json=product_payload(category["id"], stock=-5))
    assert r.status_code == 400
    assert r.json()["error"] == "Stock must be non-negative"


def test_create_product_wrong_type(client, category):
    r = client.post("/api/products", json=product_payload(category["id"], price="cheap"))
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid price")


def test_create_product_malformed_json(client):
    r = client.post("/api/products", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}


def test_stock_defaults_to_zero(client, category):
    payload = product_payload(category["id"])
    del payload["stock"]
    r = client.post("/api/products", json=payload)
    assert r.status_code == 201
    assert r.json()["stock"] == 0


def test_list_products_includes_category_summary(client, category):
    for name in ("Oil filter", "Cabin filter"):
        r = client.post("/api/products", json=product_payload(category["id"], name=name))
        assert r.status_code == 201

    r = client.get("/api/products")
    assert r.status_code == 200
    products = r.json()
    assert len(products) == 2
    for p in products:
        assert p["category"] == {"id": category["id"], "name": category["name"]}
        assert p["feedbacks"] == []


def test_round_trip_post_then_get(client, category):
    payload = product_payload(category["id"])
    created = client.post("/api/products", json=payload).json()

    r = client.get(f"/api/products/{created['id']}")
    assert r.status_code == 200
    data = r.json()
    for key, value in payload.items():
        assert data[key] == value, key
    assert "createdAt" in data and "updatedAt" in data


def test_update_is_partial(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"stock": 3})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["stock"] == 3
    assert data["name"] == product["name"]
    assert data["description"] == product["description"]
    assert data["price"] == product["price"]
    assert data["categoryId"] == product["categoryId"]


def test_update_with_empty_body_changes_nothing(client, product):
    r = client.put(f"/api/products/{product['id']}", json={})
    assert r.status_code == 200
    assert r.json()["name"] == product["name"]
    assert r.json()["stock"] == product["stock"]


def test_update_moves_product_to_another_category(client, product):
    other = client.post("/api/categories", json={"name": "Brakes"}).json()

    r = client.put(f"/api/products/{product['id']}", json={"categoryId": other["id"]})
    assert r.status_code == 200
    assert r.json()["category"] == {"id": other["id"], "name": "Brakes"}


def test_update_with_dangling_category(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"categoryId": 999})
    assert r.status_code == 404
    assert r.json() == {"error": "Category not found"}
    assert client.get(f"/api/products/{product['id']}").json()["categoryId"] == product["categoryId"]


def test_update_cannot_null_required_field(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"price": None})
    assert r.status_code == 400
    assert r.json() == {"error": "price is required"}


def test_update_cannot_null_defaulted_field(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"stock": None})
    assert r.status_code == 400
    assert r.json() == {"error": "stock is required"}
    assert client.get(f"/api/products/{product['id']}").json()["stock"] == product["stock"]


def test_update_rejects_stock_out_of_column_range(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"stock": 10**12})
    assert r.status_code == 400
    assert r.json() == {"error": "Stock is too large"}


def test_update_with_invalid_field_type(client, product):
    r = client.put(f"/api/products/{product['id']}", json={"price": "x"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid price")


def test_update_missing_product_does_not_write(client, category):
    r = client.put("/api/products/42", json={"name": "Ghost"})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
    assert client.get("/api/products").json() == []


def test_update_missing_product_is_404_before_body_checks(client):
    r = client.put("/api/products/999", json={"price": "x"})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_id_out_of_range_is_malformed(client, method):
    kwargs = {"json": {"name": "x"}} if method == "put" else {}
    r = getattr(client, method)("/api/products/99999999999999999999", **kwargs)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product ID format"}


def test_create_with_category_id_out_of_range(client):
    r = client.post("/api/products", json={"name": "Pads", "price": 1, "categoryId": 99999999999999999999})
    assert r.status_code == 404
    assert r.json() == {"error": "Category not found"}
    assert client.get("/api/products").json() == []


def test_update_with_malformed_id(client):
    r = client.put("/api/products/abc", json={"name": "x"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product ID format"}


def test_delete_is_not_idempotent(client, product):
    r = client.delete(f"/api/products/{product['id']}")
    assert r.status_code == 204
    assert r.content == b""

    r = client.delete(f"/api/products/{product['id']}")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_with_malformed_id(client):
    r = client.delete("/api/products/1x")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid product ID format"}


def test_delete_product_removes_its_feedbacks(client, product, feedback):
    assert client.delete(f"/api/products/{product['id']}").status_code == 204
    assert client.get("/api/feedbacks").json() == []


def test_get_missing_product(client):
    r = client.get("/api/products/7")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
