"""
Shipment status transitions and the stock deduction that goes with them.

A shipment's quantity leaves inventory exactly once, on its first move into
`shipped`. The shipment row is read under `SELECT ... FOR UPDATE` and every
write to it is guarded on the status that was read:

1. the shipment is claimed with `status = :read_status` in the WHERE clause,
   so only one transaction can take it across the shipping edge;
2. stock is taken with `total_quantity >= :qty` in the WHERE clause, so the
   item can never be oversold;
3. the final status write matches zero rows if another request moved the
   shipment first, and is reported as a concurrent update.

If any step fails the transaction rolls back and nothing is written.
"""
import logging
import secrets
from datetime import date
from typing import Callable, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from shared.core.database import StorageClient
from shared.core.exceptions import FulfillmentError, InvalidTransitionError, NotFoundError
from ..enum.warehouse_enum import InventoryStatus, ShipmentStatus
from ..models.inventory_items import InventoryItem
from ..models.order_shipments import OrderShipment

logger = logging.getLogger(__name__)

ALREADY_SHIPPED = (ShipmentStatus.shipped.value, ShipmentStatus.delivered.value)

# delivered -> shipped is a correction path; it never takes stock again
ALLOWED_TRANSITIONS = {
    ShipmentStatus.processing.value: {ShipmentStatus.shipped.value, ShipmentStatus.cancelled.value},
    ShipmentStatus.shipped.value: {ShipmentStatus.delivered.value, ShipmentStatus.cancelled.value},
    ShipmentStatus.delivered.value: {ShipmentStatus.shipped.value},
    ShipmentStatus.cancelled.value: set(),
}


def generate_tracking_number() -> str:
    return f"TRCK{100000 + secrets.randbelow(900000)}"


def check_transition(current_status: str, new_status: str) -> None:
    """Forward-only lifecycle; re-entering the current status is always allowed."""
    if current_status == new_status:
        return
    if new_status not in ALLOWED_TRANSITIONS.get(current_status, set()):
        raise InvalidTransitionError(current_status, new_status)


def resolve_inventory_item(db: Session, item_code: Optional[str], product_id: Optional[int]) -> Optional[InventoryItem]:
    """Exact item code first, else the product's best-stocked item (lowest id on ties)."""
    if item_code:
        item = db.execute(
            select(InventoryItem).where(InventoryItem.item_code == item_code)
        ).scalar_one_or_none()
        if item is not None:
            return item

    if product_id is not None:
        return db.execute(
            select(InventoryItem)
            .where(InventoryItem.product_id == product_id)
            .order_by(InventoryItem.total_quantity.desc(), InventoryItem.id.asc())
            .limit(1)
        ).scalars().first()

    return None


def deduct_stock(db: Session, item_id: int, quantity: int) -> bool:
    """Compare-and-set decrement. False when the item no longer holds `quantity`."""
    remaining = InventoryItem.total_quantity - quantity
    result = db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id, InventoryItem.total_quantity >= quantity)
        .values(
            total_quantity=remaining,
            status=case(
                (remaining <= 0, InventoryStatus.out_of_stock.value),
                else_=InventoryItem.status,
            ),
            updated_at=func.now(),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


class FulfillmentLedger:

    def __init__(self, storage: StorageClient, tracking_number_factory: Callable[[], str] = generate_tracking_number):
        self.storage = storage
        self.tracking_number_factory = tracking_number_factory

    def transition_shipment_status(
        self,
        shipment_id: int,
        new_status: ShipmentStatus,
        ship_date: Optional[date] = None,
        delivery_date: Optional[date] = None,
    ) -> OrderShipment:
        new_status = ShipmentStatus(new_status).value

        with self.storage.session_scope() as db:
            shipment = self._load_shipment(db, shipment_id)
            if shipment is None:
                raise NotFoundError("Shipment", shipment_id)

            current_status = shipment.status
            check_transition(current_status, new_status)

            expected_status = current_status
            if new_status == ShipmentStatus.shipped.value and current_status not in ALREADY_SHIPPED:
                if not self._claim_for_shipping(db, shipment_id, current_status):
                    logger.warning(
                        "Shipment %s left %s before it could be shipped", shipment_id, current_status)
                    raise FulfillmentError("cannot ship", reason="concurrent_update", shipment_id=shipment_id)
                self._take_stock(db, shipment)
                expected_status = ShipmentStatus.shipped.value

            values = {
                "status": new_status,
                "updated_at": func.now(),
            }
            if ship_date is not None:
                values["ship_date"] = ship_date
            if delivery_date is not None:
                values["delivery_date"] = delivery_date
            if new_status == ShipmentStatus.shipped.value:
                values["tracking_number"] = func.coalesce(
                    OrderShipment.tracking_number, self.tracking_number_factory())

            result = db.execute(
                update(OrderShipment)
                .where(OrderShipment.id == shipment_id, OrderShipment.status == expected_status)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                logger.warning("Shipment %s changed while moving to %s", shipment_id, new_status)
                raise FulfillmentError(
                    "shipment changed concurrently", reason="concurrent_update", shipment_id=shipment_id)

            db.flush()
            db.expire_all()
            shipment = db.get(OrderShipment, shipment_id)

        logger.info("Shipment %s moved to %s", shipment_id, new_status)
        return shipment

    def _load_shipment(self, db: Session, shipment_id: int) -> Optional[OrderShipment]:
        # Row lock on PostgreSQL; SQLite writers are already serialized per transaction
        return db.get(OrderShipment, shipment_id, with_for_update=True)

    def _claim_for_shipping(self, db: Session, shipment_id: int, current_status: str) -> bool:
        result = db.execute(
            update(OrderShipment)
            .where(
                OrderShipment.id == shipment_id,
                OrderShipment.status == current_status,
            )
            .values(status=ShipmentStatus.shipped.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _take_stock(self, db: Session, shipment: OrderShipment) -> None:
        quantity = shipment.quantity or 0
        if quantity <= 0:
            return

        item = resolve_inventory_item(db, shipment.item_code, shipment.product_id)
        if item is None:
            logger.warning(
                "Shipment %s: no inventory item for code=%s product=%s",
                shipment.id, shipment.item_code, shipment.product_id)
            raise FulfillmentError("cannot ship", reason="item_not_found", shipment_id=shipment.id)

        if not deduct_stock(db, item.id, quantity):
            logger.warning(
                "Shipment %s: insufficient stock on item %s for quantity %s",
                shipment.id, item.item_code, quantity)
            raise FulfillmentError(
                "cannot ship", reason="insufficient_stock", shipment_id=shipment.id, item_id=item.id)

        logger.info("Shipment %s took %s from item %s", shipment.id, quantity, item.item_code)
