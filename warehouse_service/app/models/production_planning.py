# app/models/production_planning.py
from sqlalchemy import Column, Date, Integer, String
from shared.core.database import Base


class ProductionPlan(Base):
    """Written by the production side; read here to pick up plans that are ready to ship."""
    __tablename__ = "production_planning"

    plan_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, unique=True, nullable=True)
    customer_id = Column(Integer, nullable=True)
    product_id = Column(Integer, nullable=True)
    product_name = Column(String(255), nullable=True)
    planned_date = Column(Date, nullable=True)
    status = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=True)
