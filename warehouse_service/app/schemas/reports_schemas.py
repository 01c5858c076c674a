from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class StockOverview(BaseModel):
    total_items: int = 0
    total_stock_quantity: int = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0


class StockGroup(BaseModel):
    key: Optional[str] = None
    name: str
    total_quantity: int
    item_count: int


class ShipmentStats(BaseModel):
    total_orders: int = 0
    processing_orders: int = 0
    shipped_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0


class ShipmentActivity(BaseModel):
    id: int
    order_id: str
    product_name: Optional[str] = None
    status: str
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class HealthStatus(BaseModel):
    ok: bool
    dialect: Optional[str] = None
