from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from ..enum.warehouse_enum import InventoryStatus, QuantityOperation


class InventoryItemBase(BaseModel):
    item_code: str = Field(..., min_length=1, max_length=50)
    product_id: Optional[int] = None
    unit_of_measure: Optional[str] = "ea"
    category_id: Optional[str] = None
    warehouse_id: Optional[str] = None
    status: InventoryStatus = InventoryStatus.active
    total_quantity: int = Field(0, ge=0)


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(BaseModel):
    item_code: Optional[str] = Field(None, min_length=1, max_length=50)
    product_id: Optional[int] = None
    unit_of_measure: Optional[str] = None
    category_id: Optional[str] = None
    warehouse_id: Optional[str] = None
    status: Optional[InventoryStatus] = None
    total_quantity: Optional[int] = Field(None, ge=0)


class InventoryItemOut(BaseModel):
    id: int
    item_code: str
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    unit_of_measure: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    warehouse_id: Optional[str] = None
    warehouse_name: Optional[str] = None
    status: str
    total_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InventoryItemRequest(CommonQueryParams):
    category: Optional[str] = None
    status: Optional[str] = None
    warehouse: Optional[str] = None


class InventoryItemListResponse(BaseModel):
    items: List[InventoryItemOut]
    total: int


class QuantityAdjustment(BaseModel):
    quantity: int = Field(..., ge=0)
    operation: QuantityOperation = QuantityOperation.set


class DeleteMultipleRequest(BaseModel):
    ids: List[int] = Field(..., min_length=1)


class DeleteResult(BaseModel):
    deleted: int
    message: str
