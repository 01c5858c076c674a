from typing import List

from sqlalchemy import func, literal_column, or_
from sqlalchemy.orm import Session

from ..enum.warehouse_enum import InventoryStatus, ShipmentStatus
from ..models.catalog import Product, Warehouse
from ..models.inventory_items import InventoryItem
from ..models.order_shipments import OrderShipment
from ..schemas.reports_schemas import ShipmentActivity, ShipmentStats, StockGroup, StockOverview


def get_stock_overview(db: Session, threshold: int) -> StockOverview:
    total_items = db.query(func.count(InventoryItem.id)).scalar() or 0

    total_stock = db.query(func.coalesce(func.sum(InventoryItem.total_quantity), 0)).scalar() or 0

    # ------------------- Low stock (still on hand, under threshold) -------------------
    low_stock = db.query(func.count(InventoryItem.id))\
        .filter(InventoryItem.total_quantity > 0, InventoryItem.total_quantity < threshold)\
        .scalar() or 0

    out_of_stock = db.query(func.count(InventoryItem.id))\
        .filter(or_(
            InventoryItem.status == InventoryStatus.out_of_stock.value,
            InventoryItem.total_quantity == 0,
        ))\
        .scalar() or 0

    return StockOverview(
        total_items=total_items,
        total_stock_quantity=int(total_stock),
        low_stock_items=low_stock,
        out_of_stock_items=out_of_stock,
    )


def get_stock_by_category(db: Session) -> List[StockGroup]:
    # Constants rendered inline so the SELECT and GROUP BY expressions match
    category = func.coalesce(
        func.nullif(func.trim(Product.product_category), literal_column("''")),
        literal_column("'Uncategorized'"),
    )
    total = func.coalesce(func.sum(InventoryItem.total_quantity), 0)

    rows = (
        db.query(
            category.label("category"),
            total.label("total_quantity"),
            func.count(InventoryItem.id).label("item_count"),
        )
        .outerjoin(Product, Product.product_id == InventoryItem.product_id)
        .group_by(category)
        .order_by(total.desc())
        .all()
    )
    return [
        StockGroup(key=r.category, name=r.category, total_quantity=int(r.total_quantity), item_count=r.item_count)
        for r in rows
    ]


def get_stock_by_warehouse(db: Session) -> List[StockGroup]:
    total = func.coalesce(func.sum(InventoryItem.total_quantity), 0)

    rows = (
        db.query(
            InventoryItem.warehouse_id,
            Warehouse.warehouse_name,
            total.label("total_quantity"),
            func.count(InventoryItem.id).label("item_count"),
        )
        .outerjoin(Warehouse, Warehouse.warehouse_id == InventoryItem.warehouse_id)
        .group_by(InventoryItem.warehouse_id, Warehouse.warehouse_name)
        .order_by(total.desc())
        .all()
    )
    return [
        StockGroup(
            key=r.warehouse_id,
            name=r.warehouse_name or r.warehouse_id or "Unassigned",
            total_quantity=int(r.total_quantity),
            item_count=r.item_count,
        )
        for r in rows
    ]


def get_shipment_stats(db: Session) -> ShipmentStats:
    counts = dict(
        db.query(OrderShipment.status, func.count(OrderShipment.id))
        .group_by(OrderShipment.status)
        .all()
    )
    return ShipmentStats(
        total_orders=sum(counts.values()),
        processing_orders=counts.get(ShipmentStatus.processing.value, 0),
        shipped_orders=counts.get(ShipmentStatus.shipped.value, 0),
        delivered_orders=counts.get(ShipmentStatus.delivered.value, 0),
        cancelled_orders=counts.get(ShipmentStatus.cancelled.value, 0),
    )


def get_recent_shipment_activity(db: Session, limit: int = 10) -> List[ShipmentActivity]:
    rows = (
        db.query(OrderShipment)
        .order_by(OrderShipment.updated_at.desc(), OrderShipment.id.desc())
        .limit(limit)
        .all()
    )
    return [ShipmentActivity.model_validate(r) for r in rows]
