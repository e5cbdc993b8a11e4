"""
Product tests.

Verifies:
- Required fields and value ranges are enforced before anything is stored
- A unique tracking code is generated at creation
- Public lookups by id and by tracking code need no authorization
- Edits and deletes are limited to the owner
"""

import re

import pytest
from bson import ObjectId

from regal.infrastructure.persistence.mongo import PRODUCTS

from .conftest import product_payload

MISSING_ID = "64b000000000000000000099"
REQUIRED_FIELDS = [
    "owner_id",
    "company_id",
    "name",
    "producer",
    "price",
    "profit_percent",
    "manufacture_year",
    "production_year",
    "stock",
]


class TestCreateProduct:

    def test_created_with_tracking_code(self, client, alice, alice_headers):
        resp = client.post("/regal/api/product/add", json=product_payload(alice.id), headers=alice_headers)
        assert resp.status_code == 201
        product = resp.json()["product"]
        assert product["owner_id"] == alice.id
        assert re.fullmatch(r"[0-9a-f]{32}", product["auto_qr"])
        assert product["image_ids"] == []

    def test_tracking_codes_are_distinct(self, client, alice, alice_headers):
        first = client.post("/regal/api/product/add", json=product_payload(alice.id, name="A"), headers=alice_headers)
        second = client.post("/regal/api/product/add", json=product_payload(alice.id, name="B"), headers=alice_headers)
        assert first.json()["product"]["auto_qr"] != second.json()["product"]["auto_qr"]

    def test_supplied_tracking_code_is_ignored(self, client, alice, alice_headers):
        resp = client.post(
            "/regal/api/product/add",
            json=product_payload(alice.id, auto_qr="chosen-by-client"),
            headers=alice_headers,
        )
        assert resp.json()["product"]["auto_qr"] != "chosen-by-client"

    @pytest.mark.parametrize("field", REQUIRED_FIELDS)
    def test_missing_required_field(self, client, database, alice, alice_headers, field):
        payload = product_payload(alice.id)
        del payload[field]

        resp = client.post("/regal/api/product/add", json=payload, headers=alice_headers)

        assert resp.status_code == 400
        assert resp.json()["message"] == "Missing required fields"
        assert database[PRODUCTS].count_documents({}) == 0

    @pytest.mark.parametrize(
        "field,value",
        [("price", -1), ("profit_percent", 101), ("stock", -5), ("purity", 100.5), ("purity", -1)],
    )
    def test_out_of_range(self, client, database, alice, alice_headers, field, value):
        resp = client.post(
            "/regal/api/product/add",
            json=product_payload(alice.id, **{field: value}),
            headers=alice_headers,
        )
        assert resp.status_code == 400
        assert database[PRODUCTS].count_documents({}) == 0

    def test_zero_values_are_accepted(self, client, alice, alice_headers):
        resp = client.post(
            "/regal/api/product/add",
            json=product_payload(alice.id, price=0, profit_percent=0, stock=0),
            headers=alice_headers,
        )
        assert resp.status_code == 201

    def test_owner_must_be_caller(self, client, database, bob, alice_headers):
        resp = client.post("/regal/api/product/add", json=product_payload(bob.id), headers=alice_headers)
        assert resp.status_code == 403
        assert database[PRODUCTS].count_documents({}) == 0

    def test_duplicate_name(self, client, alice, bob, alice_headers, bob_headers):
        client.post("/regal/api/product/add", json=product_payload(alice.id, name="Ring"), headers=alice_headers)
        resp = client.post("/regal/api/product/add", json=product_payload(bob.id, name="Ring"), headers=bob_headers)
        assert resp.status_code == 409


class TestPublicLookup:

    def test_by_tracking_code_without_authorization(self, client, alice_product):
        resp = client.get(f"/regal/api/product/get/qr-auto/{alice_product.auto_qr}")
        assert resp.status_code == 200
        assert resp.json()["product"]["id"] == alice_product.id

    def test_by_id_without_authorization(self, client, alice_product):
        resp = client.get(f"/regal/api/product/get/one/{alice_product.id}")
        assert resp.status_code == 200
        assert resp.json()["product"]["name"] == alice_product.name

    def test_by_linked_code(self, client, container, alice_identity, alice_product):
        container.product_service.update(alice_identity, alice_product.id, {"linked_qr": "SHOP-42"})
        resp = client.get("/regal/api/product/get/qr/SHOP-42")
        assert resp.status_code == 200
        assert resp.json()["product"]["id"] == alice_product.id

    def test_unknown_tracking_code(self, client):
        resp = client.get("/regal/api/product/get/qr-auto/ffffffffffffffffffffffffffffffff")
        assert resp.status_code == 404


class TestEditProduct:

    def test_owner_can_edit(self, client, database, alice_product, alice_headers):
        resp = client.put(
            f"/regal/api/product/edit/{alice_product.id}",
            json={"stock": 3, "description": "Polished"},
            headers=alice_headers,
        )
        assert resp.status_code == 200
        stored = database[PRODUCTS].find_one({"_id": ObjectId(alice_product.id)})
        assert stored["stock"] == 3
        assert stored["description"] == "Polished"

    def test_non_owner_is_forbidden(self, client, database, alice_product, bob_headers):
        resp = client.put(f"/regal/api/product/edit/{alice_product.id}", json={"stock": 0}, headers=bob_headers)
        assert resp.status_code == 403
        assert database[PRODUCTS].find_one({"_id": ObjectId(alice_product.id)})["stock"] == 10

    def test_range_checked_on_edit(self, client, alice_product, alice_headers):
        resp = client.put(
            f"/regal/api/product/edit/{alice_product.id}",
            json={"profit_percent": 150},
            headers=alice_headers,
        )
        assert resp.status_code == 400

    def test_scoping_fields_are_immutable(self, client, database, alice, bob, alice_product, alice_headers):
        client.put(
            f"/regal/api/product/edit/{alice_product.id}",
            json={"owner_id": bob.id, "company_id": "elsewhere", "auto_qr": "x", "stock": 1},
            headers=alice_headers,
        )
        stored = database[PRODUCTS].find_one({"_id": ObjectId(alice_product.id)})
        assert stored["owner_id"] == alice.id
        assert stored["company_id"] == alice_product.company_id
        assert stored["auto_qr"] == alice_product.auto_qr

    def test_missing_product(self, client, alice_headers):
        resp = client.put(f"/regal/api/product/edit/{MISSING_ID}", json={"stock": 1}, headers=alice_headers)
        assert resp.status_code == 404


class TestDeleteProduct:

    def test_non_owner_is_forbidden(self, client, database, alice_product, bob_headers):
        resp = client.delete(f"/regal/api/product/delete/{alice_product.id}", headers=bob_headers)
        assert resp.status_code == 403
        assert database[PRODUCTS].count_documents({}) == 1

    def test_owner_can_delete(self, client, database, alice_product, alice_headers):
        resp = client.delete(f"/regal/api/product/delete/{alice_product.id}", headers=alice_headers)
        assert resp.status_code == 200
        assert database[PRODUCTS].count_documents({}) == 0


class TestOwnerScopedReads:

    def test_list_own_products(self, client, alice, alice_product, alice_headers):
        resp = client.get(f"/regal/api/product/all/{alice.id}", headers=alice_headers)
        assert resp.status_code == 200
        assert [p["id"] for p in resp.json()["products"]] == [alice_product.id]

    def test_list_other_owner_is_forbidden(self, client, alice, alice_product, bob_headers):
        resp = client.get(f"/regal/api/product/all/{alice.id}", headers=bob_headers)
        assert resp.status_code == 403

    def test_list_by_company(self, client, alice_product, alice_headers, bob_headers):
        resp = client.get(f"/regal/api/product/get/{alice_product.company_id}", headers=alice_headers)
        assert resp.status_code == 200
        assert len(resp.json()["products"]) == 1

        resp = client.get(f"/regal/api/product/get/{alice_product.company_id}", headers=bob_headers)
        assert resp.status_code == 404

    def test_single_product_in_company(self, client, alice_product, alice_headers, bob_headers):
        path = f"/regal/api/product/get/product/{alice_product.company_id}/{alice_product.id}"
        assert client.get(path, headers=alice_headers).json()["product"]["id"] == alice_product.id
        assert client.get(path, headers=bob_headers).status_code == 404
