"""Initial catalog schema: categories, suppliers, products, product sizes.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    # ============================================
    # 1. Categories and suppliers
    # ============================================
    op.create_table(
        "categories",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_categories")),
        sa.UniqueConstraint("name", name=op.f("uq_categories_name")),
    )
    op.create_index(op.f("ix_categories_created_at"), "categories", ["created_at"])

    op.create_table(
        "suppliers",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("supplier_img", sa.String(1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_suppliers")),
    )
    op.create_index(op.f("ix_suppliers_name"), "suppliers", ["name"])
    op.create_index(op.f("ix_suppliers_created_at"), "suppliers", ["created_at"])

    # ============================================
    # 2. Products
    # ============================================
    op.create_table(
        "products",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=False),
        sa.Column("supplier_id", sa.UUID(), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("img_url", sa.String(1024), nullable=False),
        sa.Column("thumbnail_img_1", sa.String(1024), nullable=True),
        sa.Column("thumbnail_img_2", sa.String(1024), nullable=True),
        sa.Column("thumbnail_img_3", sa.String(1024), nullable=True),
        sa.Column("thumbnail_img_4", sa.String(1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_products")),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name=op.f("fk_products_category_id_categories"),
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["supplier_id"],
            ["suppliers.id"],
            name=op.f("fk_products_supplier_id_suppliers"),
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint("price >= 0", name=op.f("ck_products_price_non_negative")),
        sa.CheckConstraint("stock >= 0", name=op.f("ck_products_stock_non_negative")),
    )
    op.create_index(op.f("ix_products_category_id"), "products", ["category_id"])
    op.create_index(op.f("ix_products_supplier_id"), "products", ["supplier_id"])
    op.create_index(op.f("ix_products_created_at"), "products", ["created_at"])

    # Full-text index backing search (name + description, english config)
    op.execute(
        "CREATE INDEX ix_products_search_document ON products USING gin "
        "(to_tsvector('english'::regconfig, "
        "coalesce(name, '') || ' ' || coalesce(description, '')))"
    )

    # ============================================
    # 3. Per-size stock
    # ============================================
    op.create_table(
        "product_sizes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("product_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("size", sa.String(32), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_product_sizes")),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["products.id"],
            name=op.f("fk_product_sizes_product_id_products"),
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("stock >= 0", name=op.f("ck_product_sizes_stock_non_negative")),
    )
    op.create_index(op.f("ix_product_sizes_product_id"), "product_sizes", ["product_id"])
    op.create_index(op.f("ix_product_sizes_size"), "product_sizes", ["size"])


def downgrade() -> None:
    op.drop_table("product_sizes")
    op.execute("DROP INDEX IF EXISTS ix_products_search_document")
    op.drop_table("products")
    op.drop_table("suppliers")
    op.drop_table("categories")
