import logging

from sqlalchemy import String, cast, func, insert, literal, select
from sqlalchemy.orm import Session

from ...enum.warehouse_enum import PlanStatus, ShipmentStatus
from ...models.order_shipments import OrderShipment
from ...models.production_planning import ProductionPlan

logger = logging.getLogger(__name__)


def sync_processed_plans_into_shipments(db: Session) -> int:
    """
    Create a processing shipment for every processed production plan whose
    order has no shipment yet. A single INSERT ... SELECT ... WHERE NOT EXISTS,
    so running it twice (or concurrently) never duplicates a shipment.
    """
    already_shipped = (
        select(OrderShipment.id)
        .where(cast(OrderShipment.order_id, String) == cast(ProductionPlan.order_id, String))
        .correlate(ProductionPlan)
        .exists()
    )

    ready_plans = (
        select(
            cast(ProductionPlan.order_id, String),
            cast(ProductionPlan.customer_id, String),
            ProductionPlan.product_id,
            ProductionPlan.product_name,
            ProductionPlan.quantity,
            literal(ShipmentStatus.processing.value),
            ProductionPlan.planned_date,
            func.now(),
        )
        .where(
            ProductionPlan.status == PlanStatus.processed.value,
            ProductionPlan.order_id.isnot(None),
            ProductionPlan.quantity > 0,
            ~already_shipped,
        )
    )

    result = db.execute(
        insert(OrderShipment).from_select(
            [
                "order_id",
                "customer_id",
                "product_id",
                "product_name",
                "quantity",
                "status",
                "order_date",
                "updated_at",
            ],
            ready_plans,
        )
    )
    db.commit()

    inserted = result.rowcount if result.rowcount and result.rowcount > 0 else 0
    if inserted:
        logger.info("Synced %s processed production plans into shipments", inserted)
    return inserted
