# app/crud/order_shipments_crud.py
import logging
from typing import Optional

from sqlalchemy import cast, delete, func, or_, String
from sqlalchemy.orm import Session

from ..enum.warehouse_enum import ShipmentStatus
from ..models.order_shipments import OrderShipment
from ..schemas.order_shipments_schemas import (
    OrderShipmentCreate,
    OrderShipmentListResponse,
    OrderShipmentRequest,
    OrderShipmentUpdate,
)

logger = logging.getLogger(__name__)


def build_order_shipments_filters(params: OrderShipmentRequest):
    filters = []

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            cast(OrderShipment.order_id, String).ilike(search_term),
            OrderShipment.product_name.ilike(search_term),
        ))

    if params.status and params.status.lower() != "all":
        filters.append(func.lower(OrderShipment.status) == params.status.lower())

    if params.order_date:
        filters.append(OrderShipment.order_date == params.order_date)

    return filters


def get_order_shipments(db: Session, params: OrderShipmentRequest) -> OrderShipmentListResponse:
    base_query = db.query(OrderShipment).filter(*build_order_shipments_filters(params))

    total = base_query.count()

    query = base_query.order_by(OrderShipment.updated_at.desc(), OrderShipment.id.desc())
    if params.skip:
        query = query.offset(params.skip)
    if params.limit:
        query = query.limit(params.limit)

    return {"shipments": query.all(), "total": total}


def get_order_shipment_by_id(db: Session, shipment_id: int) -> Optional[OrderShipment]:
    return db.query(OrderShipment).filter(OrderShipment.id == shipment_id).first()


def create_order_shipment(db: Session, shipment: OrderShipmentCreate) -> OrderShipment:
    # New shipments always start in processing; tracking is assigned when shipped
    db_shipment = OrderShipment(**shipment.model_dump(), status=ShipmentStatus.processing.value)
    db.add(db_shipment)
    db.commit()
    db.refresh(db_shipment)
    logger.info("Shipment %s created for order %s", db_shipment.id, db_shipment.order_id)
    return db_shipment


def update_order_shipment(db: Session, shipment_id: int, shipment: OrderShipmentUpdate) -> Optional[OrderShipment]:
    db_shipment = get_order_shipment_by_id(db, shipment_id)
    if not db_shipment:
        return None

    for key, value in shipment.model_dump(exclude_unset=True).items():
        if key == "order_id" and value is None:
            continue
        setattr(db_shipment, key, value)

    db.commit()
    db.refresh(db_shipment)
    return db_shipment


def delete_order_shipment(db: Session, shipment_id: int) -> bool:
    # Stock already taken by a shipped shipment is not put back
    result = db.execute(delete(OrderShipment).where(OrderShipment.id == shipment_id))
    db.commit()
    return result.rowcount > 0
