"""product images and pricing history

Revision ID: 0003_product_catalog
Revises: 0002_seed_catalog
Create Date: 2026-10-17 11:30:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0003_product_catalog"
down_revision = "0002_seed_catalog"
branch_labels = None
depends_on = None


def upgrade():
    op.add_column("products", sa.Column("product_image", sa.String(500), nullable=True))

    op.create_table(
        "product_pricing",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "product_id",
            sa.Integer,
            sa.ForeignKey("products.product_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_rate", sa.Numeric(5, 2), nullable=True),
        sa.Column("effective_date", sa.Date, nullable=False),
    )
    op.create_index("ix_product_pricing_product_id", "product_pricing", ["product_id"])


def downgrade():
    op.drop_index("ix_product_pricing_product_id", table_name="product_pricing")
    op.drop_table("product_pricing")
    with op.batch_alter_table("products") as batch_op:
        batch_op.drop_column("product_image")
