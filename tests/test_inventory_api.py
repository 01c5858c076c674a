"""HTTP tests for the inventory, lookup and quantity endpoints."""

from datetime import date

from warehouse_service.app.models import Category, Product, ProductPricing, Warehouse
from tests.factories import add_item, get_item


def _seed_catalog(storage):
    with storage.session_scope() as db:
        db.add_all([
            Category(category_id="CAT001", category_name="Materials"),
            Category(category_id="CAT002", category_name="Products"),
            Warehouse(warehouse_id="WH001", warehouse_name="Main Warehouse"),
            Warehouse(warehouse_id="WH002", warehouse_name="Secondary Warehouse"),
            Product(product_id=1, product_name="Steel Bolt", product_category="Hardware"),
        ])


class TestInventoryCrud:

    def test_create_and_read(self, client, storage):
        _seed_catalog(storage)
        response = client.post("/api/inventory/", json={
            "item_code": "BOLT-01",
            "product_id": 1,
            "category_id": "CAT001",
            "warehouse_id": "WH001",
            "total_quantity": 40,
        })
        assert response.status_code == 200
        created = response.json()
        assert created["status"] == "active"
        assert created["product_name"] == "Steel Bolt"
        assert created["warehouse_name"] == "Main Warehouse"

        response = client.get(f"/api/inventory/{created['id']}")
        assert response.status_code == 200
        assert response.json()["item_code"] == "BOLT-01"

    def test_create_with_zero_quantity_is_out_of_stock(self, client):
        response = client.post("/api/inventory/", json={"item_code": "EMPTY", "total_quantity": 0})
        assert response.status_code == 200
        assert response.json()["status"] == "out-of-stock"

    def test_duplicate_item_code(self, client, storage):
        add_item(storage, item_code="DUP")
        response = client.post("/api/inventory/", json={"item_code": "DUP", "total_quantity": 1})
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "Failure"
        assert body["status_code"] == "202"

    def test_negative_quantity_is_invalid(self, client):
        response = client.post("/api/inventory/", json={"item_code": "NEG", "total_quantity": -1})
        assert response.status_code == 422

    def test_missing_item_is_404(self, client):
        response = client.get("/api/inventory/12345")
        assert response.status_code == 404
        assert response.json()["message"] == "Inventory item not found"

    def test_list_filters_and_search(self, client, storage):
        _seed_catalog(storage)
        add_item(storage, item_code="BOLT-01", product_id=1, warehouse_id="WH001", total_quantity=5)
        add_item(storage, item_code="NUT-01", warehouse_id="WH002", total_quantity=0, status="out-of-stock")

        everything = client.get("/api/inventory/").json()
        assert everything["total"] == 2

        by_name = client.get("/api/inventory/", params={"search": "steel"}).json()
        assert [i["item_code"] for i in by_name["items"]] == ["BOLT-01"]

        by_warehouse = client.get("/api/inventory/", params={"warehouse": "WH002"}).json()
        assert [i["item_code"] for i in by_warehouse["items"]] == ["NUT-01"]

        by_status = client.get("/api/inventory/", params={"status": "out-of-stock"}).json()
        assert by_status["total"] == 1

        blank = client.get("/api/inventory/", params={"status": " ", "search": ""}).json()
        assert blank["total"] == 2

    def test_update_partial(self, client, storage):
        item_id = add_item(storage, item_code="EDIT", total_quantity=5)
        response = client.put(f"/api/inventory/{item_id}", json={"unit_of_measure": "kg"})
        assert response.status_code == 200
        assert response.json()["unit_of_measure"] == "kg"
        assert response.json()["total_quantity"] == 5

    def test_update_missing_item(self, client):
        response = client.put("/api/inventory/999", json={"unit_of_measure": "kg"})
        assert response.status_code == 404

    def test_delete_and_delete_multiple(self, client, storage):
        ids = [add_item(storage, item_code=f"DEL-{n}") for n in range(3)]

        assert client.delete(f"/api/inventory/{ids[0]}").status_code == 200
        assert client.delete(f"/api/inventory/{ids[0]}").status_code == 404

        response = client.post("/api/inventory/delete-multiple", json={"ids": ids})
        assert response.status_code == 200
        assert response.json()["deleted"] == 2
        assert get_item(storage, ids[1]) is None


class TestQuantityEndpoint:

    def test_patch_quantity(self, client, storage):
        item_id = add_item(storage, total_quantity=10)
        response = client.patch(f"/api/inventory/{item_id}/quantity", json={"quantity": 4, "operation": "subtract"})
        assert response.status_code == 200
        assert response.json()["total_quantity"] == 6

    def test_patch_defaults_to_set(self, client, storage):
        item_id = add_item(storage, total_quantity=10)
        response = client.patch(f"/api/inventory/{item_id}/quantity", json={"quantity": 0})
        assert response.json()["status"] == "out-of-stock"

    def test_patch_unknown_item(self, client):
        response = client.patch("/api/inventory/999/quantity", json={"quantity": 1, "operation": "add"})
        assert response.status_code == 404

    def test_patch_rejects_bad_operation(self, client, storage):
        item_id = add_item(storage)
        response = client.patch(f"/api/inventory/{item_id}/quantity", json={"quantity": 1, "operation": "multiply"})
        assert response.status_code == 422


class TestLookups:

    def test_categories_and_warehouses(self, client, storage):
        _seed_catalog(storage)

        categories = client.get("/api/categories").json()
        assert categories == [
            {"id": "CAT001", "name": "Materials"},
            {"id": "CAT002", "name": "Products"},
        ]
        warehouses = client.get("/api/warehouses").json()
        assert [w["name"] for w in warehouses] == ["Main Warehouse", "Secondary Warehouse"]

    def test_products_in_id_order(self, client, storage):
        _seed_catalog(storage)
        with storage.session_scope() as db:
            db.add(Product(product_id=2, product_name="Hex Nut", product_image="/img/nut.png"))

        products = client.get("/api/products").json()

        assert [p["product_id"] for p in products] == [1, 2]
        assert products[0] == {
            "product_id": 1,
            "product_name": "Steel Bolt",
            "product_description": None,
            "product_category": "Hardware",
            "product_image": None,
        }
        assert products[1]["product_image"] == "/img/nut.png"

    def test_latest_product_pricing(self, client, storage):
        _seed_catalog(storage)
        with storage.session_scope() as db:
            db.add_all([
                ProductPricing(product_id=1, price=12.5, discount_rate=0, effective_date=date(2026, 1, 1)),
                ProductPricing(product_id=1, price=11.0, discount_rate=5, effective_date=date(2026, 6, 1)),
            ])

        pricing = client.get("/api/product-pricing/1").json()

        assert pricing == {"price": 11.0, "discount_rate": 5.0, "effective_date": "2026-06-01"}

    def test_unpriced_product_returns_null(self, client, storage):
        _seed_catalog(storage)

        response = client.get("/api/product-pricing/1")

        assert response.status_code == 200
        assert response.json() is None
