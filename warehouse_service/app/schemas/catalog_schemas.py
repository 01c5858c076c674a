from datetime import date
from typing import Optional

from pydantic import BaseModel


class ProductOut(BaseModel):
    product_id: int
    product_name: str
    product_description: Optional[str] = None
    product_category: Optional[str] = None
    product_image: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class ProductPricingOut(BaseModel):
    price: float
    discount_rate: Optional[float] = None
    effective_date: date

    model_config = {
        "from_attributes": True
    }
