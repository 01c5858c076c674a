"""HTTP tests for order shipments and the status transition endpoint."""

from fastapi.testclient import TestClient

from tests.factories import add_item, add_plan, add_shipment, get_item


class TestShipmentCrud:

    def test_create_starts_in_processing(self, client):
        response = client.post("/api/order-shipments/", json={
            "order_id": "SO-100",
            "item_code": "ITM-001",
            "product_name": "Widget",
            "quantity": 2,
            "total_value": "19.90",
            "order_date": "2026-04-01",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "processing"
        assert body["tracking_number"] is None
        assert body["order_date"] == "2026-04-01"

    def test_create_requires_an_item_reference(self, client):
        response = client.post("/api/order-shipments/", json={"order_id": "SO-101", "quantity": 2})
        assert response.status_code == 422

    def test_create_rejects_non_positive_quantity(self, client):
        response = client.post("/api/order-shipments/", json={
            "order_id": "SO-102", "item_code": "ITM-001", "quantity": 0})
        assert response.status_code == 422

    def test_get_update_delete(self, client, storage):
        shipment_id = add_shipment(storage, quantity=2)

        assert client.get(f"/api/order-shipments/{shipment_id}").json()["order_id"] == "ORD-1"

        response = client.put(f"/api/order-shipments/{shipment_id}", json={"notes": "leave at dock 3"})
        assert response.status_code == 200
        assert response.json()["notes"] == "leave at dock 3"
        assert response.json()["status"] == "processing"

        assert client.delete(f"/api/order-shipments/{shipment_id}").status_code == 200
        assert client.get(f"/api/order-shipments/{shipment_id}").status_code == 404

    def test_update_ignores_status(self, client, storage):
        shipment_id = add_shipment(storage, quantity=2)
        response = client.put(f"/api/order-shipments/{shipment_id}", json={"status": "shipped"})
        assert response.status_code == 200
        assert response.json()["status"] == "processing"

    def test_list_filters(self, client, storage):
        add_shipment(storage, order_id="SO-1", product_name="Widget")
        add_shipment(storage, order_id="SO-2", product_name="Gadget", status="cancelled")

        assert client.get("/api/order-shipments/").json()["total"] == 2
        searched = client.get("/api/order-shipments/", params={"search": "gadg"}).json()
        assert [s["order_id"] for s in searched["shipments"]] == ["SO-2"]
        by_status = client.get("/api/order-shipments/", params={"status": "cancelled"}).json()
        assert by_status["total"] == 1


class TestStatusEndpoint:

    def test_ship_deducts_stock(self, client, storage):
        item_id = add_item(storage, total_quantity=10)
        shipment_id = add_shipment(storage, quantity=4)

        response = client.post(
            f"/api/order-shipments/{shipment_id}/status",
            json={"status": "shipped", "shipDate": "2026-05-02"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "shipped"
        assert body["ship_date"] == "2026-05-02"
        assert body["tracking_number"].startswith("TRCK")
        assert get_item(storage, item_id).total_quantity == 6

    def test_insufficient_stock_is_400(self, client, storage):
        add_item(storage, total_quantity=1)
        shipment_id = add_shipment(storage, quantity=4)

        response = client.post(f"/api/order-shipments/{shipment_id}/status", json={"status": "shipped"})

        assert response.status_code == 400
        assert response.json()["message"] == "cannot ship"
        assert response.json()["data"]["reason"] == "insufficient_stock"
        assert response.json()["status"] == "Failure"

    def test_unknown_shipment_is_400(self, client):
        response = client.post("/api/order-shipments/999/status", json={"status": "shipped"})
        assert response.status_code == 400
        assert response.json()["message"] == "Shipment not found"

    def test_invalid_transition_is_400(self, client, storage):
        shipment_id = add_shipment(storage, status="cancelled")
        response = client.post(f"/api/order-shipments/{shipment_id}/status", json={"status": "processing"})
        assert response.status_code == 400

    def test_unknown_status_value_is_422(self, client, storage):
        shipment_id = add_shipment(storage)
        response = client.post(f"/api/order-shipments/{shipment_id}/status", json={"status": "lost"})
        assert response.status_code == 422

    def test_unexpected_failure_is_500(self, app, storage):
        class BrokenLedger:
            def transition_shipment_status(self, *args, **kwargs):
                raise RuntimeError("boom")

        app.state.ledger = BrokenLedger()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/order-shipments/1/status", json={"status": "shipped"})

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"


class TestSyncAndReports:

    def test_sync_endpoint_and_list_pick_up_processed_plans(self, client, storage):
        add_plan(storage, order_id=501, quantity=3)

        response = client.post("/api/order-shipments/sync")
        assert response.status_code == 200
        assert response.json() == {"inserted": 1}

        add_plan(storage, order_id=502, quantity=2)
        listing = client.get("/api/order-shipments/").json()
        assert sorted(s["order_id"] for s in listing["shipments"]) == ["501", "502"]

    def test_stats(self, client, storage):
        add_shipment(storage, order_id="A", status="processing")
        add_shipment(storage, order_id="B", status="shipped")
        add_shipment(storage, order_id="C", status="shipped")
        add_shipment(storage, order_id="D", status="cancelled")

        stats = client.get("/api/order-shipments/stats").json()

        assert stats == {
            "total_orders": 4,
            "processing_orders": 1,
            "shipped_orders": 2,
            "delivered_orders": 0,
            "cancelled_orders": 1,
        }

    def test_recent_activity_limit_is_clamped(self, client, storage):
        for n in range(3):
            add_shipment(storage, order_id=f"R-{n}")

        assert len(client.get("/api/order-shipments/recent-activity", params={"limit": 0}).json()) == 1
        assert len(client.get("/api/order-shipments/recent-activity", params={"limit": 500}).json()) == 3
        assert len(client.get("/api/order-shipments/recent-activity").json()) == 3
