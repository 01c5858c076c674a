from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from shared.core.schemas import CommonQueryParams
from ..enum.warehouse_enum import ShipmentStatus


class OrderShipmentCreate(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=50)
    customer_id: Optional[str] = None
    item_code: Optional[str] = None
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    quantity: int = Field(..., gt=0)
    total_value: Optional[Decimal] = None
    order_date: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_item_reference(self):
        if not self.item_code and self.product_id is None:
            raise ValueError("either item_code or product_id is required")
        return self


class OrderShipmentUpdate(BaseModel):
    # status, quantity and tracking_number only change through the status endpoint
    order_id: Optional[str] = Field(None, min_length=1, max_length=50)
    customer_id: Optional[str] = None
    item_code: Optional[str] = None
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    total_value: Optional[Decimal] = None
    order_date: Optional[date] = None
    ship_date: Optional[date] = None
    delivery_date: Optional[date] = None
    notes: Optional[str] = None


class OrderShipmentOut(BaseModel):
    id: int
    order_id: str
    customer_id: Optional[str] = None
    item_code: Optional[str] = None
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    quantity: int
    total_value: Optional[Decimal] = None
    status: str
    order_date: Optional[date] = None
    ship_date: Optional[date] = None
    delivery_date: Optional[date] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class OrderShipmentRequest(CommonQueryParams):
    status: Optional[str] = None
    order_date: Optional[date] = None


class OrderShipmentListResponse(BaseModel):
    shipments: List[OrderShipmentOut]
    total: int


class ShipmentStatusUpdate(BaseModel):
    status: ShipmentStatus
    ship_date: Optional[date] = Field(None, alias="shipDate")
    delivery_date: Optional[date] = Field(None, alias="deliveryDate")

    model_config = {
        "populate_by_name": True
    }


class ShipmentSyncResult(BaseModel):
    inserted: int
