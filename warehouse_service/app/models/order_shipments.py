# app/models/order_shipments.py
from sqlalchemy import CheckConstraint, Column, Date, Integer, Numeric, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from shared.core.database import Base


class OrderShipment(Base):
    __tablename__ = "order_shipments"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_shipments_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(50), nullable=False, index=True)
    customer_id = Column(String(50), nullable=True)

    # Resolved against inventory_items when the shipment is marked shipped
    item_code = Column(String(50), nullable=True)
    product_id = Column(Integer, nullable=True)
    product_name = Column(String(255), nullable=True)

    quantity = Column(Integer, nullable=False)
    total_value = Column(Numeric(12, 2), nullable=True)
    status = Column(String(20), nullable=False, default="processing")

    order_date = Column(Date, nullable=True)
    ship_date = Column(Date, nullable=True)
    delivery_date = Column(Date, nullable=True)
    tracking_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
