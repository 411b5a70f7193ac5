from conftest import create_product, make_user


def test_create_product_stamps_owner(client, seller):
    _, headers = seller
    product = create_product(client, headers, price="12.5", stock="3")
    assert product["seller_email"] == "seller@example.com"
    assert product["price"] == 12.5
    assert product["stock"] == 3
    assert product["ratings"] == []
    assert product["product_id"]


def test_create_product_rejects_negative_price(client, seller):
    _, headers = seller
    res = client.post(
        "/api/products",
        json={"name": "x", "price": -1, "category": "c", "brand": "b", "stock": 1},
        headers=headers,
    )
    assert res.status_code == 400
    assert res.json()["fields"] == ["price"]


def test_get_single_product(client, seller):
    _, headers = seller
    product = create_product(client, headers)
    res = client.get(f"/api/get-single-product/{product['product_id']}")
    assert res.status_code == 200
    assert res.json()["name"] == "Trail Shoe"
    assert client.get("/api/get-single-product/missing").status_code == 404


def test_pagination_second_page(client, seller):
    _, headers = seller
    for i in range(1, 11):
        create_product(client, headers, name=f"Item {i}")

    res = client.get("/api/products", params={"limit": 6, "page": 2})
    assert res.status_code == 200
    body = res.json()
    assert [p["name"] for p in body["products"]] == [f"Item {i}" for i in range(7, 11)]
    assert body["totalProducts"] == 10


def test_page_defaults_to_first(client, seller):
    _, headers = seller
    for i in range(8):
        create_product(client, headers, name=f"Item {i}")
    body = client.get("/api/get-products").json()
    assert len(body["products"]) == 6
    assert body["totalProducts"] == 8


def test_non_positive_page_is_rejected(client):
    assert client.get("/api/products", params={"page": 0}).status_code == 400
    assert client.get("/api/products", params={"page": -2}).status_code == 400


def test_filters_and_facets(client, seller):
    _, headers = seller
    create_product(client, headers, name="Red Shoe", category="shoes", brand="Acme")
    create_product(client, headers, name="Blue shoe", category="shoes", brand="Zeta")
    create_product(client, headers, name="Hat", category="hats", brand="Acme")

    body = client.get("/api/products", params={"name": "SHOE"}).json()
    assert body["totalProducts"] == 2
    assert body["categories"] == ["shoes"]
    assert body["brands"] == ["Acme", "Zeta"]

    body = client.get("/api/products", params={"brand": "Acme"}).json()
    assert {p["name"] for p in body["products"]} == {"Red Shoe", "Hat"}

    body = client.get("/api/products", params={"category": "hats"}).json()
    assert [p["name"] for p in body["products"]] == ["Hat"]


def test_facets_cover_all_pages(client, seller):
    _, headers = seller
    for i in range(6):
        create_product(client, headers, name=f"A{i}", category="first")
    create_product(client, headers, name="Last", category="second")

    body = client.get("/api/products", params={"page": 1}).json()
    assert len(body["products"]) == 6
    assert body["categories"] == ["first", "second"]


def test_name_filter_is_literal(client, seller):
    _, headers = seller
    create_product(client, headers, name="C++ Primer")
    create_product(client, headers, name="Cat")
    body = client.get("/api/products", params={"name": "c++"}).json()
    assert [p["name"] for p in body["products"]] == ["C++ Primer"]


def test_sort_by_price(client, seller):
    _, headers = seller
    for price in (30, 10, 20):
        create_product(client, headers, name=f"P{price}", price=price)

    asc = client.get("/api/products", params={"sort": "asc"}).json()["products"]
    assert [p["price"] for p in asc] == [10, 20, 30]
    desc = client.get("/api/products", params={"sort": "desc"}).json()["products"]
    assert [p["price"] for p in desc] == [30, 20, 10]
    natural = client.get("/api/products", params={"sort": "bogus"}).json()["products"]
    assert [p["price"] for p in natural] == [30, 10, 20]


def test_partial_update(client, seller):
    _, headers = seller
    product = create_product(client, headers)
    res = client.patch(
        f"/api/update-product/{product['product_id']}",
        json={"price": "42", "stock": 7},
        headers=headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["price"] == 42.0
    assert body["stock"] == 7
    assert body["name"] == product["name"]
    assert body["brand"] == product["brand"]


def test_empty_update_is_bad_request(client, seller):
    _, headers = seller
    product = create_product(client, headers)
    res = client.patch(f"/api/update-product/{product['product_id']}", json={}, headers=headers)
    assert res.status_code == 400


def test_non_owner_cannot_update_or_delete(client, seller):
    _, owner_headers = seller
    product = create_product(client, owner_headers)
    _, other_headers = make_user(client, "other-seller@example.com", role="seller")

    res = client.patch(
        f"/api/update-product/{product['product_id']}",
        json={"price": 1},
        headers=other_headers,
    )
    assert res.status_code == 404
    assert client.delete(f"/api/products/{product['product_id']}", headers=other_headers).status_code == 404

    # le produit est intact
    assert client.get(f"/api/get-single-product/{product['product_id']}").json()["price"] == product["price"]


def test_owner_deletes_product(client, seller):
    _, headers = seller
    product = create_product(client, headers)
    res = client.delete(f"/api/delete-product/{product['product_id']}", headers=headers)
    assert res.status_code == 200
    assert client.get(f"/api/get-single-product/{product['product_id']}").status_code == 404
    assert client.delete(f"/api/delete-product/{product['product_id']}", headers=headers).status_code == 404


def test_seller_products_lists_only_own(client, seller):
    _, headers = seller
    create_product(client, headers, name="Mine")
    _, other_headers = make_user(client, "other-seller@example.com", role="seller")
    create_product(client, other_headers, name="Theirs")

    res = client.get("/api/seller-products", headers=headers)
    assert res.status_code == 200
    assert [p["name"] for p in res.json()] == ["Mine"]
