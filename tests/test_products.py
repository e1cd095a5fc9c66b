from tests.conftest import login_headers


def test_admin_creates_and_reads_product(client, make_product):
    product_id = make_product("Widget", price=19.99)

    resp = client.get(f"/products/{product_id}")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": product_id,
        "name": "Widget",
        "description": "A Widget",
        "price": 19.99,
        "category": "misc",
    }


def test_non_admin_cannot_create_product(client, customer_headers):
    resp = client.post("/products", json={"name": "Sneaky", "price": 1}, headers=customer_headers)

    assert resp.status_code == 403
    assert resp.json()["error"] == "Forbidden"
    assert client.get("/products").json() == []


def test_anonymous_cannot_create_product(client):
    assert client.post("/products", json={"name": "Sneaky", "price": 1}).status_code == 401


def test_create_product_validates_fields(client, admin_headers):
    for body in ({"price": 5}, {"name": "NoPrice"}, {"name": "Neg", "price": -1}, {"name": "Frac", "price": 1.234}):
        assert client.post("/products", json=body, headers=admin_headers).status_code == 400


def test_list_products_search_is_case_insensitive_substring(client, make_product):
    make_product("Blue Widget")
    make_product("Gadget")
    make_product("widget stand")
    make_product("100% Cotton")

    names = [p["name"] for p in client.get("/products", params={"search": "WIDGET"}).json()]
    assert names == ["Blue Widget", "widget stand"]

    # LIKE wildcards in the search term are matched literally
    names = [p["name"] for p in client.get("/products", params={"search": "0%"}).json()]
    assert names == ["100% Cotton"]


def test_list_products_paginates(client, make_product):
    for i in range(5):
        make_product(f"Item {i}")

    page1 = client.get("/products", params={"page": 1, "limit": 2}).json()
    page3 = client.get("/products", params={"page": 3, "limit": 2}).json()

    assert [p["name"] for p in page1] == ["Item 0", "Item 1"]
    assert [p["name"] for p in page3] == ["Item 4"]
    assert len(client.get("/products").json()) == 5
    assert client.get("/products", params={"page": 0}).status_code == 400


def test_update_product_applies_only_given_fields(client, admin_headers, make_product):
    product_id = make_product("Widget", price=10)

    resp = client.put(f"/products/{product_id}", json={"price": 12.5}, headers=admin_headers)
    assert resp.json() == {"msg": "Product updated"}

    product = client.get(f"/products/{product_id}").json()
    assert product["price"] == 12.5
    assert product["name"] == "Widget"
    assert product["description"] == "A Widget"


def test_update_product_rejects_nulling_required_fields(client, admin_headers, make_product):
    product_id = make_product()
    assert client.put(f"/products/{product_id}", json={"name": None}, headers=admin_headers).status_code == 400


def test_update_and_delete_missing_product(client, admin_headers):
    assert client.put("/products/999", json={"price": 1}, headers=admin_headers).status_code == 404
    assert client.delete("/products/999", headers=admin_headers).status_code == 404


def test_delete_product(client, admin_headers, make_product):
    product_id = make_product()

    resp = client.delete(f"/products/{product_id}", headers=admin_headers)
    assert resp.json() == {"msg": "Product deleted"}
    assert client.get(f"/products/{product_id}").status_code == 404


def test_customer_cannot_update_or_delete(client, make_product):
    product_id = make_product()
    headers = login_headers(client, "mallory")

    assert client.put(f"/products/{product_id}", json={"price": 0}, headers=headers).status_code == 403
    assert client.delete(f"/products/{product_id}", headers=headers).status_code == 403
    assert client.get(f"/products/{product_id}").json()["price"] == 10.0


def test_list_products_rejects_page_beyond_range(client, make_product):
    make_product()

    resp = client.get("/products", params={"page": 10**19})

    assert resp.status_code == 400
    assert resp.json()["error"] == "BadRequest"
    assert client.get("/products", params={"page": 100_000}).json() == []


def test_product_routes_reject_out_of_range_id(client, admin_headers):
    assert client.get(f"/products/{2**63}").status_code == 400
    assert client.delete(f"/products/{2**63}", headers=admin_headers).status_code == 400
