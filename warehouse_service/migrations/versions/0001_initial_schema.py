"""initial warehouse schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("category_id", sa.String(50), nullable=False),
        sa.Column("category_name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("category_id", name="uq_categories_category_id"),
    )

    op.create_table(
        "warehouses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("warehouse_id", sa.String(50), nullable=False),
        sa.Column("warehouse_name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("warehouse_id", name="uq_warehouses_warehouse_id"),
    )

    op.create_table(
        "products",
        sa.Column("product_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("product_description", sa.Text, nullable=True),
        sa.Column("product_category", sa.String(100), nullable=True),
    )

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("item_code", sa.String(50), nullable=False),
        sa.Column("product_id", sa.Integer, nullable=True),
        sa.Column("unit_of_measure", sa.String(10), nullable=True),
        sa.Column("category_id", sa.String(50), nullable=True),
        sa.Column("warehouse_id", sa.String(50), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("total_quantity", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("item_code", name="uq_inventory_items_item_code"),
        sa.CheckConstraint("total_quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )
    op.create_index("ix_inventory_items_product_id", "inventory_items", ["product_id"], unique=False)

    op.create_table(
        "order_shipments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.String(50), nullable=False),
        sa.Column("customer_id", sa.String(50), nullable=True),
        sa.Column("item_code", sa.String(50), nullable=True),
        sa.Column("product_id", sa.Integer, nullable=True),
        sa.Column("product_name", sa.String(255), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("total_value", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="processing"),
        sa.Column("order_date", sa.Date, nullable=True),
        sa.Column("ship_date", sa.Date, nullable=True),
        sa.Column("delivery_date", sa.Date, nullable=True),
        sa.Column("tracking_number", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="ck_order_shipments_quantity_positive"),
    )
    op.create_index("ix_order_shipments_order_id", "order_shipments", ["order_id"], unique=False)

    op.create_table(
        "production_planning",
        sa.Column("plan_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer, nullable=True),
        sa.Column("customer_id", sa.Integer, nullable=True),
        sa.Column("product_id", sa.Integer, nullable=True),
        sa.Column("product_name", sa.String(255), nullable=True),
        sa.Column("planned_date", sa.Date, nullable=True),
        sa.Column("status", sa.String(50), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=True),
        sa.UniqueConstraint("order_id", name="uq_production_planning_order_id"),
    )


def downgrade():
    op.drop_table("production_planning")
    op.drop_index("ix_order_shipments_order_id", table_name="order_shipments")
    op.drop_table("order_shipments")
    op.drop_index("ix_inventory_items_product_id", table_name="inventory_items")
    op.drop_table("inventory_items")
    op.drop_table("products")
    op.drop_table("warehouses")
    op.drop_table("categories")
