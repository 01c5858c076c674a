# app/router/inventory_items_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.exceptions import NotFoundError
from shared.core.schemas import Lookup
from ..schemas.catalog_schemas import ProductOut, ProductPricingOut
from ..schemas.inventory_items_schemas import (
    DeleteMultipleRequest,
    DeleteResult,
    InventoryItemCreate,
    InventoryItemListResponse,
    InventoryItemOut,
    InventoryItemRequest,
    InventoryItemUpdate,
    QuantityAdjustment,
)
from ..crud import inventory_items_crud as crud

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

# Lookups live beside the inventory screen that uses them
lookup_router = APIRouter(prefix="/api", tags=["lookups"])


@router.get("/", response_model=InventoryItemListResponse)
def read_items(
    params: InventoryItemRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_inventory_items(db, params)


@router.post("/delete-multiple", response_model=DeleteResult)
def delete_items(
    request: DeleteMultipleRequest,
    db: Session = Depends(get_db)
):
    deleted = crud.delete_inventory_items(db, request.ids)
    return DeleteResult(deleted=deleted, message=f"{deleted} inventory items deleted")


@router.get("/{item_id}", response_model=InventoryItemOut)
def read_item(item_id: int, db: Session = Depends(get_db)):
    db_item = crud.get_inventory_item_by_id(db, item_id)
    if not db_item:
        raise NotFoundError("Inventory item", item_id)
    return db_item


@router.post("/", response_model=InventoryItemOut)
def create_item(item: InventoryItemCreate, db: Session = Depends(get_db)):
    return crud.create_inventory_item(db, item)


@router.put("/{item_id}", response_model=InventoryItemOut)
def update_item(
    item_id: int,
    item: InventoryItemUpdate,
    db: Session = Depends(get_db)
):
    db_item = crud.update_inventory_item(db, item_id, item)
    if not db_item:
        raise NotFoundError("Inventory item", item_id)
    return db_item


@router.patch("/{item_id}/quantity", response_model=InventoryItemOut)
def adjust_item_quantity(
    item_id: int,
    adjustment: QuantityAdjustment,
    db: Session = Depends(get_db)
):
    return crud.adjust_quantity(db, item_id, adjustment.quantity, adjustment.operation)

# ---------------- Delete Inventory Item (Hard Delete) ----------------


@router.delete("/{item_id}", response_model=DeleteResult)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    if not crud.delete_inventory_item(db, item_id):
        raise NotFoundError("Inventory item", item_id)
    return DeleteResult(deleted=1, message="Inventory item deleted")


@lookup_router.get("/categories", response_model=List[Lookup])
def category_lookup(db: Session = Depends(get_db)):
    return crud.categories_lookup(db)


@lookup_router.get("/warehouses", response_model=List[Lookup])
def warehouse_lookup(db: Session = Depends(get_db)):
    return crud.warehouses_lookup(db)


@lookup_router.get("/products", response_model=List[ProductOut])
def product_lookup(db: Session = Depends(get_db)):
    return crud.products_lookup(db)


@lookup_router.get("/product-pricing/{product_id}", response_model=Optional[ProductPricingOut])
def product_pricing(product_id: int, db: Session = Depends(get_db)):
    return crud.latest_product_pricing(db, product_id)
