import pytest

@pytest.fixture
def product_category(client, admin_headers):
    response = client.post("/api/admin/product-categories/", json={"name": "Cámaras"}, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()

@pytest.fixture
def brand(client, admin_headers, product_category):
    response = client.post("/api/admin/brands/", json={
        "name": "Lumen Optics",
        "category_ids": [product_category["id"]],
    }, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()

def product_payload(product_category, **overrides):
    payload = {
        "name": "Lumen X100",
        "product_code": "LX-100",
        "long_description": "A compact mirrorless camera.",
        "short_description": "Compact camera",
        "sale_price": "899.00",
        "purchase_price": "610.50",
        "available_stock": 12,
        "stock_limit": 2,
        "category_id": product_category["id"],
    }
    payload.update(overrides)
    return payload

def create_product(client, headers, payload):
    response = client.post("/api/admin/products/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()

def test_product_category_slug_and_conflict(client, admin_headers, product_category):
    assert product_category["slug"] == "camaras"
    duplicate = client.post("/api/admin/product-categories/", json={"name": "Camaras"}, headers=admin_headers)
    assert duplicate.status_code == 409
    assert client.get("/api/product-categories/slug/camaras").json()["id"] == product_category["id"]

def test_brand_with_missing_category_is_not_created(client, admin_headers, product_category):
    response = client.post("/api/admin/brands/", json={
        "name": "Ghost Brand",
        "category_ids": [product_category["id"], "missing"],
    }, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "One or more categories not found"
    assert client.get("/api/admin/brands/", headers=admin_headers).json() == []

def test_brand_categories_can_be_attached_and_detached(client, admin_headers, brand, product_category):
    extra = client.post("/api/admin/product-categories/", json={"name": "Lentes"}, headers=admin_headers).json()

    added = client.post(f"/api/admin/brands/{brand['id']}/categories", json={"category_ids": [extra["id"]]}, headers=admin_headers)
    assert {category["slug"] for category in added.json()["categories"]} == {"camaras", "lentes"}

    removed = client.request(
        "DELETE",
        f"/api/admin/brands/{brand['id']}/categories",
        json={"category_ids": [product_category["id"]]},
        headers=admin_headers,
    )
    assert [category["slug"] for category in removed.json()["categories"]] == ["lentes"]

    by_category = client.get(f"/api/public/brands/category/{extra['id']}").json()
    assert [item["id"] for item in by_category] == [brand["id"]]

def test_public_brand_view(client, admin_headers, brand, product_category):
    create_product(client, admin_headers, product_payload(product_category, brand_id=brand["id"]))
    public = client.get("/api/public/brands/slug/lumen-optics").json()
    assert public["active_products_count"] == 1
    assert "sort_order" not in public

def test_public_product_view_hides_internal_fields(client, admin_headers, product_category):
    product = create_product(client, admin_headers, product_payload(
        product_category, offer_price="799.00", is_offer_active=True,
    ))
    assert product["slug"] == "lumen-x100"
    assert product["purchase_price"] == 610.5

    public = client.get(f"/api/products/{product['id']}").json()
    assert "purchase_price" not in public
    assert "stock_limit" not in public
    assert public["is_in_stock"] is True
    assert public["is_on_sale"] is True
    assert public["current_price"] == 799.0
    assert public["sale_price"] == 899.0

def test_stock_threshold(client, admin_headers, product_category):
    product = create_product(client, admin_headers, product_payload(product_category))
    response = client.patch(f"/api/admin/products/{product['id']}/stock", json={"available_stock": 2}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["is_in_stock"] is False

    assert client.get("/api/products/", params={"in_stock": True}).json() == []
    assert len(client.get("/api/products/", params={"in_stock": False}).json()) == 1

def test_duplicate_product_code_conflicts(client, admin_headers, product_category):
    create_product(client, admin_headers, product_payload(product_category))
    response = client.post("/api/admin/products/", json=product_payload(product_category, name="Lumen X100 II"), headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "A product with this code already exists"

def test_media_limits(client, admin_headers, product_category):
    images = [{"type": "image", "url": f"/uploads/p{i}.jpg"} for i in range(11)]
    response = client.post("/api/admin/products/", json=product_payload(product_category, media=images), headers=admin_headers)
    assert response.status_code == 400

    product = create_product(client, admin_headers, product_payload(product_category, media=images[:3]))
    assert [item["sort_order"] for item in product["media"]] == [0, 1, 2]

def test_missing_category_or_brand(client, admin_headers, product_category):
    missing_category = client.post("/api/admin/products/", json=product_payload({"id": "nope"}), headers=admin_headers)
    assert missing_category.status_code == 404
    missing_brand = client.post("/api/admin/products/", json=product_payload(product_category, brand_id="nope"), headers=admin_headers)
    assert missing_brand.status_code == 404

def test_inactive_and_deleted_products_are_hidden(client, admin_headers, product_category):
    hidden = create_product(client, admin_headers, product_payload(product_category, is_active=False))
    assert client.get(f"/api/products/{hidden['id']}").status_code == 404
    assert client.get(f"/api/admin/products/{hidden['id']}", headers=admin_headers).status_code == 200

    assert client.delete(f"/api/admin/products/{hidden['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/products/{hidden['id']}", headers=admin_headers).status_code == 404
