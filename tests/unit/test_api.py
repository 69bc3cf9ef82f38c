"""HTTP route tests for the admin and user endpoints"""

import base64

import pytest

from productdb.core.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x01" * 8


def product_payload(product_id="5411188124689", name="Haferdrink ungesüßt, 1 Liter", **info):
    payload = {
        "info": {
            "id": product_id,
            "name": name,
            "producer": "Alpro",
            "quantity_type": "volume",
            "portion": 250,
            "volume_weight_ratio": 1.03,
            **info,
        },
        "preview": {
            "contentType": "image/png",
            "data": base64.b64encode(PNG_BYTES).decode(),
        },
        "full_image": {
            "contentType": "image/jpeg",
            "data": base64.b64encode(JPEG_BYTES).decode(),
        },
        "nutrients": {
            "kcal": 40,
            "protein": {"value": 0.2},
            "fat": {"value": 1.5},
            "vitaminD": {"value": 0.0000008},
            "calcium": {"value": 0.12},
        },
    }
    return payload


def create_product(client, **kwargs):
    response = client.post("/admin/product", json=product_payload(**kwargs))
    assert response.status_code == 201
    return response.json()


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_new_product(client):
    data = create_product(client)

    assert data["id"] == "5411188124689"
    assert "message" in data


def test_duplicate_product(client):
    create_product(client)

    response = client.post("/admin/product", json=product_payload(name="Another name"))

    assert response.status_code == 409
    assert "already exists" in response.json()["message"]


def test_invalid_product(client):
    response = client.post(
        "/admin/product",
        json=product_payload(quantity_type="weight"),
    )

    assert response.status_code == 400
    assert "volume weight ratio" in response.json()["message"]


def test_malformed_body(client):
    payload = product_payload()
    del payload["info"]

    response = client.post("/admin/product", json=payload)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid input")


def test_get_product_without_images(client):
    create_product(client)

    response = client.get("/user/product/5411188124689")

    assert response.status_code == 200
    product = response.json()["product"]
    assert product["info"]["name"] == "Haferdrink ungesüßt, 1 Liter"
    assert product["info"]["quantity_type"] == "volume"
    assert product["nutrients"]["kcal"] == 40
    assert product["nutrients"]["vitaminD"]["value"] == pytest.approx(0.0000008)
    assert product["nutrients"]["calcium"]["value"] == pytest.approx(0.12)
    assert "preview" not in product
    assert "full_image" not in product


def test_get_product_with_preview(client):
    create_product(client)

    response = client.get("/user/product/5411188124689", params={"with_preview": True})

    product = response.json()["product"]
    assert product["preview"]["contentType"] == "image/png"
    assert base64.b64decode(product["preview"]["data"]) == PNG_BYTES
    assert "full_image" not in product


def test_get_unknown_product(client):
    response = client.get("/user/product/unknown")

    assert response.status_code == 404


def test_product_image(client):
    create_product(client)

    full = client.get("/user/product/5411188124689/image")
    preview = client.get("/user/product/5411188124689/image", params={"slot": "preview"})

    assert full.status_code == 200
    assert full.headers["content-type"] == "image/jpeg"
    assert full.content == JPEG_BYTES
    assert preview.headers["content-type"] == "image/png"
    assert preview.content == PNG_BYTES


def test_missing_product_image(client):
    payload = product_payload()
    del payload["preview"]
    client.post("/admin/product", json=payload)

    response = client.get("/user/product/5411188124689/image", params={"slot": "preview"})

    assert response.status_code == 404


def test_delete_product(client):
    create_product(client)

    response = client.delete("/admin/product/5411188124689")

    assert response.status_code == 200
    assert client.get("/user/product/5411188124689").status_code == 404
    assert client.delete("/admin/product/5411188124689").status_code == 404


def test_query_products(client):
    create_product(client)
    create_product(client, product_id="5411188000001", name="Haferdrink Barista")
    create_product(client, product_id="4000400000001", name="Vollmilch 3,5%")

    response = client.post(
        "/user/product/query",
        json={"offset": 0, "limit": 10, "filter": {"search": "Haferdrink"}},
    )

    assert response.status_code == 200
    products = response.json()["products"]
    assert [product["info"]["id"] for _, product in products] == [
        "5411188000001",
        "5411188124689",
    ]
    assert all("preview" not in product for _, product in products)


def test_query_products_with_preview(client):
    create_product(client)

    response = client.post(
        "/user/product/query",
        params={"with_preview": True},
        json={"limit": 10, "filter": "no_filter"},
    )

    internal_id, product = response.json()["products"][0]
    assert isinstance(internal_id, int)
    assert product["preview"]["contentType"] == "image/png"
    assert "full_image" not in product


def test_query_without_limit(client):
    response = client.post("/user/product/query", json={"filter": "no_filter"})

    assert response.status_code == 400


def test_product_request_flow(client):
    response = client.post("/user/product_request", json=product_payload())
    assert response.status_code == 201
    request_id = response.json()["id"]
    assert response.json()["date"]

    response = client.get(f"/admin/product_request/{request_id}", params={"with_full_image": True})
    assert response.status_code == 200
    product_request = response.json()["product_request"]
    assert product_request["product_description"]["info"]["id"] == "5411188124689"
    assert "full_image" in product_request["product_description"]
    assert "preview" not in product_request["product_description"]

    image = client.get(f"/user/product_request/{request_id}/image")
    assert image.content == JPEG_BYTES

    response = client.post("/admin/product_request/query", json={"limit": 10})
    assert [entry[0] for entry in response.json()["product_requests"]] == [request_id]

    assert client.delete(f"/admin/product_request/{request_id}").status_code == 200
    assert client.get(f"/admin/product_request/{request_id}").status_code == 404


def test_missing_product_flow(client):
    response = client.post("/user/missing_products", json={"product_id": "4000400000001"})
    assert response.status_code == 201
    report_id = response.json()["id"]

    client.post("/user/missing_products", json={"product_id": "4000400000002"})

    response = client.get(f"/admin/missing_products/{report_id}")
    assert response.status_code == 200
    assert response.json()["missing_product"]["product_id"] == "4000400000001"

    response = client.post(
        "/admin/missing_products/query",
        json={"limit": 10},
    )
    assert [entry[1]["product_id"] for entry in response.json()["missing_products"]] == [
        "4000400000001",
        "4000400000002",
    ]

    response = client.post(
        "/admin/missing_products/query",
        json={"limit": 10, "product_id": "4000400000001"},
    )
    assert [entry[0] for entry in response.json()["missing_products"]] == [report_id]

    assert client.delete(f"/admin/missing_products/{report_id}").status_code == 200
    assert client.get(f"/admin/missing_products/{report_id}").status_code == 404
    assert client.delete(f"/admin/missing_products/{report_id}").status_code == 404


def test_missing_product_requires_id(client):
    response = client.post("/user/missing_products", json={"product_id": ""})

    assert response.status_code == 400


def test_admin_token(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_token", "secret")

    assert client.post("/admin/product", json=product_payload()).status_code == 401
    response = client.post(
        "/admin/product",
        json=product_payload(),
        headers={"X-Admin-Token": "secret"},
    )
    assert response.status_code == 201
    # user routes are not guarded
    assert client.get("/user/product/5411188124689").status_code == 200


@pytest.mark.parametrize(
    "path,section,field,value",
    [
        ("/admin/product", "info", "portion", "NaN"),
        ("/admin/product", "info", "volume_weight_ratio", "Infinity"),
        ("/user/product_request", "nutrients", "kcal", "NaN"),
        ("/user/product_request", "nutrients", "salt", {"value": "-Infinity"}),
    ],
)
def test_non_finite_numbers_are_rejected(client, path, section, field, value):
    payload = product_payload()
    payload[section][field] = value

    response = client.post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid input")
