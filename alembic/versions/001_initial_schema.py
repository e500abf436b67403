"""Initial schema: users, categories, items, favorites, sales.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_CATEGORIES = ["fashion", "furniture", "food", "books", "electronics", "toys"]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("balance", sa.BigInteger, nullable=False, server_default="0"),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )

    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.bulk_insert(
        categories,
        [{"id": i, "name": name} for i, name in enumerate(SEED_CATEGORIES, start=1)],
    )

    op.create_table(
        "items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("price", sa.BigInteger, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("seller_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("image", sa.LargeBinary, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="initial"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("price > 0", name="ck_items_price_positive"),
    )
    op.create_index("ix_items_status_updated_at", "items", ["status", "updated_at"])
    op.create_index("ix_items_seller_id", "items", ["seller_id"])

    op.create_table(
        "favorite_folders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_index("ix_favorite_folders_user_id", "favorite_folders", ["user_id"])

    op.create_table(
        "favorite_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "folder_id", sa.Integer,
            sa.ForeignKey("favorite_folders.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "item_id", sa.Integer,
            sa.ForeignKey("items.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("folder_id", "item_id", name="uq_favorite_items_folder_item"),
    )

    op.create_table(
        "sales",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("item_id", sa.Integer, sa.ForeignKey("items.id"), nullable=False, unique=True),
        sa.Column("buyer_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("seller_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("price", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sales_buyer_id", "sales", ["buyer_id"])


def downgrade() -> None:
    op.drop_index("ix_sales_buyer_id", table_name="sales")
    op.drop_table("sales")
    op.drop_table("favorite_items")
    op.drop_index("ix_favorite_folders_user_id", table_name="favorite_folders")
    op.drop_table("favorite_folders")
    op.drop_index("ix_items_seller_id", table_name="items")
    op.drop_index("ix_items_status_updated_at", table_name="items")
    op.drop_table("items")
    op.drop_table("categories")
    op.drop_table("users")
