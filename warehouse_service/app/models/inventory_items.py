# app/models/inventory_items.py
from sqlalchemy import CheckConstraint, Column, Integer, String, TIMESTAMP
from sqlalchemy.sql import func
from shared.core.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("total_quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_code = Column(String(50), unique=True, nullable=False)
    # Plain reference; some databases carry products elsewhere
    product_id = Column(Integer, nullable=True, index=True)
    unit_of_measure = Column(String(10), nullable=True)
    category_id = Column(String(50), nullable=True)
    warehouse_id = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    total_quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
