"""seed default categories and warehouses

Revision ID: 0002_seed_catalog
Revises: 0001_initial_schema
Create Date: 2026-10-17 09:05:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_seed_catalog"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None

CATEGORIES = [
    {"category_id": "CAT001", "category_name": "Materials"},
    {"category_id": "CAT002", "category_name": "Products"},
]

WAREHOUSES = [
    {"warehouse_id": "WH001", "warehouse_name": "Main Warehouse"},
    {"warehouse_id": "WH002", "warehouse_name": "Secondary Warehouse"},
]


def upgrade():
    categories = sa.table(
        "categories",
        sa.column("category_id", sa.String),
        sa.column("category_name", sa.String),
    )
    warehouses = sa.table(
        "warehouses",
        sa.column("warehouse_id", sa.String),
        sa.column("warehouse_name", sa.String),
    )
    op.bulk_insert(categories, CATEGORIES)
    op.bulk_insert(warehouses, WAREHOUSES)


def downgrade():
    op.execute(
        sa.text("DELETE FROM warehouses WHERE warehouse_id IN ('WH001', 'WH002')")
    )
    op.execute(
        sa.text("DELETE FROM categories WHERE category_id IN ('CAT001', 'CAT002')")
    )
