from warehouse_service.app.crud.scheduler.shipment_sync import sync_processed_plans_into_shipments
from warehouse_service.app.models import OrderShipment
from tests.factories import add_plan, add_shipment


def _sync(storage):
    with storage.session_scope() as db:
        return sync_processed_plans_into_shipments(db)


def _shipments(storage):
    with storage.session_scope() as db:
        return db.query(OrderShipment).order_by(OrderShipment.order_id).all()


class TestShipmentSync:

    def test_processed_plans_become_processing_shipments(self, storage):
        add_plan(storage, order_id=11, quantity=6, product_id=3, product_name="Crate")

        assert _sync(storage) == 1

        [shipment] = _shipments(storage)
        assert shipment.order_id == "11"
        assert shipment.status == "processing"
        assert shipment.quantity == 6
        assert shipment.product_id == 3
        assert shipment.product_name == "Crate"

    def test_running_twice_inserts_nothing_new(self, storage):
        add_plan(storage, order_id=11)
        add_plan(storage, order_id=12)

        assert _sync(storage) == 2
        assert _sync(storage) == 0
        assert len(_shipments(storage)) == 2

    def test_orders_with_a_shipment_are_skipped(self, storage):
        add_shipment(storage, order_id="11")
        add_plan(storage, order_id=11)

        assert _sync(storage) == 0

    def test_unfinished_or_empty_plans_are_skipped(self, storage):
        add_plan(storage, order_id=21, status="processing")
        add_plan(storage, order_id=22, quantity=0)
        add_plan(storage, order_id=None)

        assert _sync(storage) == 0
        assert _shipments(storage) == []
