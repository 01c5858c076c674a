# app/crud/inventory_items_crud.py
import logging
from typing import List, Optional

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError
from shared.core.schemas import Lookup
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ..enum.warehouse_enum import InventoryStatus, QuantityOperation
from ..models.catalog import Category, Product, ProductPricing, Warehouse
from ..models.inventory_items import InventoryItem
from ..schemas.catalog_schemas import ProductOut, ProductPricingOut
from ..schemas.inventory_items_schemas import (
    InventoryItemCreate,
    InventoryItemListResponse,
    InventoryItemOut,
    InventoryItemRequest,
    InventoryItemUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_ITEM_FIELDS = {"item_code", "status", "total_quantity"}


def build_inventory_filters(params: InventoryItemRequest):
    filters = []

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(InventoryItem.item_code.ilike(search_term), Product.product_name.ilike(search_term)))

    if params.category:
        filters.append(InventoryItem.category_id == params.category)

    if params.status and params.status.lower() != "all":
        filters.append(func.lower(InventoryItem.status) == params.status.lower())

    if params.warehouse:
        filters.append(InventoryItem.warehouse_id == params.warehouse)

    return filters


def _item_query(db: Session):
    return (
        db.query(
            InventoryItem,
            Product.product_name.label("product_name"),
            Category.category_name.label("category_name"),
            Warehouse.warehouse_name.label("warehouse_name"),
        )
        .outerjoin(Product, Product.product_id == InventoryItem.product_id)
        .outerjoin(Category, Category.category_id == InventoryItem.category_id)
        .outerjoin(Warehouse, Warehouse.warehouse_id == InventoryItem.warehouse_id)
    )


def _to_out(item: InventoryItem, product_name=None, category_name=None, warehouse_name=None) -> InventoryItemOut:
    out = InventoryItemOut.model_validate(item)
    out.product_name = product_name
    out.category_name = category_name
    out.warehouse_name = warehouse_name
    return out


def get_inventory_items(db: Session, params: InventoryItemRequest) -> InventoryItemListResponse:
    base_query = _item_query(db).filter(*build_inventory_filters(params))

    total = base_query.count()

    query = base_query.order_by(InventoryItem.updated_at.desc(), InventoryItem.id.desc())
    if params.skip:
        query = query.offset(params.skip)
    if params.limit:
        query = query.limit(params.limit)

    items = [_to_out(*row) for row in query.all()]
    return {"items": items, "total": total}


def get_inventory_item_by_id(db: Session, item_id: int) -> Optional[InventoryItemOut]:
    row = _item_query(db).filter(InventoryItem.id == item_id).first()
    if not row:
        return None
    return _to_out(*row)


def _item_code_taken(db: Session, item_code: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(InventoryItem.id).filter(InventoryItem.item_code == item_code)
    if exclude_id is not None:
        query = query.filter(InventoryItem.id != exclude_id)
    return query.first() is not None


def create_inventory_item(db: Session, item: InventoryItemCreate) -> InventoryItemOut:
    if _item_code_taken(db, item.item_code):
        return error_response(
            f"Item code {item.item_code} already exists", AppStatusCode.DUPLICATE_ADD_ERROR)

    item_data = item.model_dump()
    if item_data["total_quantity"] <= 0:
        item_data["status"] = InventoryStatus.out_of_stock
    item_data["status"] = InventoryStatus(item_data["status"]).value

    db_item = InventoryItem(**item_data)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info("Inventory item %s created with quantity %s", db_item.item_code, db_item.total_quantity)
    return get_inventory_item_by_id(db, db_item.id)


def update_inventory_item(db: Session, item_id: int, item: InventoryItemUpdate) -> Optional[InventoryItemOut]:
    db_item = db.get(InventoryItem, item_id)
    if not db_item:
        return None

    if item.item_code and _item_code_taken(db, item.item_code, exclude_id=item_id):
        return error_response(
            f"Item code {item.item_code} already exists", AppStatusCode.DUPLICATE_ADD_ERROR)

    # Update only the fields that are provided
    for k, v in item.model_dump(exclude_unset=True).items():
        if v is None and k in REQUIRED_ITEM_FIELDS:
            continue
        if k == "status":
            v = InventoryStatus(v).value
        setattr(db_item, k, v)

    if "total_quantity" in item.model_fields_set and db_item.total_quantity <= 0:
        db_item.status = InventoryStatus.out_of_stock.value

    db.commit()
    return get_inventory_item_by_id(db, item_id)


def delete_inventory_item(db: Session, item_id: int) -> bool:
    """
    Hard delete. Shipments keep their item_code and simply stop resolving
    to this item the next time they are marked shipped.
    """
    result = db.execute(delete(InventoryItem).where(InventoryItem.id == item_id))
    db.commit()
    return result.rowcount > 0


def delete_inventory_items(db: Session, ids: List[int]) -> int:
    result = db.execute(delete(InventoryItem).where(InventoryItem.id.in_(ids)))
    db.commit()
    return result.rowcount


def adjust_quantity(db: Session, item_id: int, quantity: int, operation: QuantityOperation) -> InventoryItemOut:
    """
    Manual stock correction, done as one UPDATE so it composes with concurrent
    shipment deductions. `set` and `subtract` clamp at zero and mark the item
    out of stock; `add` leaves the status alone.
    """
    operation = QuantityOperation(operation)
    current = InventoryItem.total_quantity

    if operation == QuantityOperation.add:
        values = {"total_quantity": current + quantity}
    elif operation == QuantityOperation.subtract:
        remaining = current - quantity
        values = {
            "total_quantity": case((remaining < 0, 0), else_=remaining),
            "status": case((remaining <= 0, InventoryStatus.out_of_stock.value), else_=InventoryItem.status),
        }
    else:
        new_quantity = max(quantity, 0)
        values = {"total_quantity": new_quantity}
        if new_quantity <= 0:
            values["status"] = InventoryStatus.out_of_stock.value

    values["updated_at"] = func.now()
    result = db.execute(
        update(InventoryItem)
        .where(InventoryItem.id == item_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError("Inventory item", item_id)

    db.commit()
    db.expire_all()
    logger.info("Inventory item %s quantity %s %s", item_id, operation.value, quantity)
    return get_inventory_item_by_id(db, item_id)


def categories_lookup(db: Session) -> List[Lookup]:
    rows = db.execute(
        select(Category.category_id, Category.category_name).order_by(Category.category_id)
    ).all()
    return [Lookup(id=r.category_id, name=r.category_name) for r in rows]


def warehouses_lookup(db: Session) -> List[Lookup]:
    rows = db.execute(
        select(Warehouse.warehouse_id, Warehouse.warehouse_name).order_by(Warehouse.warehouse_name)
    ).all()
    return [Lookup(id=r.warehouse_id, name=r.warehouse_name) for r in rows]


def products_lookup(db: Session) -> List[ProductOut]:
    rows = db.execute(select(Product).order_by(Product.product_id)).scalars().all()
    return [ProductOut.model_validate(r) for r in rows]


def latest_product_pricing(db: Session, product_id: int) -> Optional[ProductPricingOut]:
    """Most recent effective price, or None when the product was never priced."""
    row = db.execute(
        select(ProductPricing)
        .where(ProductPricing.product_id == product_id)
        .order_by(ProductPricing.effective_date.desc(), ProductPricing.id.desc())
        .limit(1)
    ).scalar_one_or_none()
    return ProductPricingOut.model_validate(row) if row is not None else None
