"""create_order_tables

Revision ID: 5c1e8a2d9b47
Revises:
Create Date: 2026-10-19 10:12:41.502113

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5c1e8a2d9b47'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), autoincrement = True, nullable = False),
        sa.Column("external_order_id", sa.String(), nullable = False),
        sa.Column("external_checkout_id", sa.String(), nullable = True),
        sa.Column("customer_email", sa.String(), nullable = False),
        sa.Column("total_amount", sa.Integer(), nullable = False),
        sa.Column("currency", sa.String(), nullable = False),
        sa.Column("status", sa.Enum("completed", "failed", "refunded", name = "status"), nullable = False),
        sa.Column("fulfilled", sa.Boolean(), nullable = False),
        sa.Column("created_at", sa.DateTime(), server_default = sa.func.now(), nullable = False),
        sa.Column("updated_at", sa.DateTime(), server_default = sa.func.now(), nullable = False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_order_id"),
    )
    op.create_index("idx_orders_customer_email", "orders", ["customer_email"])
    op.create_index("idx_orders_status", "orders", ["status"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), autoincrement = True, nullable = False),
        sa.Column("order_id", sa.Integer(), nullable = False),
        sa.Column("item_type", sa.Enum("product", "bundle", name = "itemtype"), nullable = False),
        sa.Column("source_id", sa.String(), nullable = False),
        sa.Column("title", sa.String(), nullable = False),
        sa.Column("price", sa.Integer(), nullable = False),
        sa.Column("creator_id", sa.String(), nullable = True),
        sa.Column("file_key", sa.String(), nullable = True),
        sa.Column("max_downloads", sa.Integer(), nullable = False),
        sa.Column("downloads_used", sa.Integer(), server_default = "0", nullable = False),
        sa.Column("created_at", sa.DateTime(), server_default = sa.func.now(), nullable = False),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], name = "order_items_order_id_fkey", ondelete = "CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_order_items_order_id", "order_items", ["order_id"])
    op.create_index("idx_order_items_creator_id", "order_items", ["creator_id"])

    op.create_table(
        "analytics_events",
        sa.Column("id", sa.Integer(), autoincrement = True, nullable = False),
        sa.Column("event_type", sa.Enum("view", "add_to_cart", "purchase", name = "eventtype"), nullable = False),
        sa.Column("source_id", sa.String(), nullable = False),
        # the item type enum already exists at this point
        sa.Column("item_type", postgresql.ENUM(name = "itemtype", create_type = False), nullable = False),
        sa.Column("session_id", sa.String(), nullable = True),
        sa.Column("created_at", sa.DateTime(), server_default = sa.func.now(), nullable = False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_analytics_events_source_type", "analytics_events", ["source_id", "event_type"])


def downgrade() -> None:
    op.drop_index("idx_analytics_events_source_type", table_name = "analytics_events")
    op.drop_table("analytics_events")
    op.drop_index("idx_order_items_creator_id", table_name = "order_items")
    op.drop_index("idx_order_items_order_id", table_name = "order_items")
    op.drop_table("order_items")
    op.drop_index("idx_orders_status", table_name = "orders")
    op.drop_index("idx_orders_customer_email", table_name = "orders")
    op.drop_table("orders")

    # clean up the enum types
    op.execute("DROP TYPE IF EXISTS eventtype")
    op.execute("DROP TYPE IF EXISTS itemtype")
    op.execute("DROP TYPE IF EXISTS status")
