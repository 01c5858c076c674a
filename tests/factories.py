from sqlalchemy.pool import StaticPool

from shared.core.database import Base, StorageClient
from warehouse_service.app.models import InventoryItem, OrderShipment, ProductionPlan


def build_storage(url: str = "sqlite://", **engine_options) -> StorageClient:
    """Connected StorageClient with the schema created. In-memory by default."""
    options = {"connect_args": {"check_same_thread": False}}
    if url == "sqlite://":
        options["poolclass"] = StaticPool
    options.update(engine_options)
    storage = StorageClient(url, connect_retries=1, engine_options=options)
    Base.metadata.create_all(storage.engine)
    return storage


def add_item(storage, item_code="ITM-001", total_quantity=10, product_id=None, status="active", **extra):
    with storage.session_scope() as db:
        item = InventoryItem(
            item_code=item_code,
            product_id=product_id,
            total_quantity=total_quantity,
            status=status,
            **extra,
        )
        db.add(item)
        db.flush()
        return item.id


def add_shipment(storage, quantity=3, item_code="ITM-001", product_id=None, status="processing", order_id="ORD-1", **extra):
    with storage.session_scope() as db:
        shipment = OrderShipment(
            order_id=order_id,
            item_code=item_code,
            product_id=product_id,
            quantity=quantity,
            status=status,
            **extra,
        )
        db.add(shipment)
        db.flush()
        return shipment.id


def add_plan(storage, order_id, quantity=5, status="processed", product_id=None, product_name="Widget"):
    with storage.session_scope() as db:
        plan = ProductionPlan(
            order_id=order_id,
            customer_id=1,
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            status=status,
        )
        db.add(plan)
        db.flush()
        return plan.plan_id


def get_item(storage, item_id) -> InventoryItem:
    with storage.session_scope() as db:
        return db.get(InventoryItem, item_id)


def get_shipment(storage, shipment_id) -> OrderShipment:
    with storage.session_scope() as db:
        return db.get(OrderShipment, shipment_id)
