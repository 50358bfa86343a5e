"""initial content schema

Revision ID: 7c1e4b2a9d01
Revises:
Create Date: 2025-10-19 09:12:44.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c1e4b2a9d01"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "media",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("alt", sa.String(length=500), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=True),
        sa.Column("filesize", sa.Integer(), nullable=True),
        sa.Column("url", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("filename != ''", name="ck_media_non_empty_filename"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("filename"),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("main_image", sa.String(length=64), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("related_products", sa.JSON(), nullable=False),
        sa.Column("specifications", sa.JSON(), nullable=False),
        sa.Column("product_code", sa.String(length=100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_product_non_empty_name"),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_products_status"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_slug", "products", ["slug"], unique=True)

    op.create_table(
        "tools",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tool_type", sa.String(length=100), nullable=True),
        sa.Column("url", sa.String(length=500), nullable=True),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("related_tools", sa.JSON(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name="ck_tool_non_empty_name"),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_tools_status"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tools_slug", "tools", ["slug"], unique=True)

    op.create_table(
        "services",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("featured_image", sa.String(length=64), nullable=True),
        sa.Column("features", sa.JSON(), nullable=False),
        sa.Column("benefits", sa.JSON(), nullable=False),
        sa.Column("faq", sa.JSON(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("related_services", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("pricing", sa.JSON(), nullable=True),
        sa.Column("meta", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("title != ''", name="ck_service_non_empty_title"),
        sa.CheckConstraint(
            "type IN ('consulting', 'installation', 'maintenance', "
            "'repair', 'support', 'other')",
            name="ck_services_type",
        ),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_services_status"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_slug", "services", ["slug"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_services_slug", table_name="services")
    op.drop_table("services")
    op.drop_index("ix_tools_slug", table_name="tools")
    op.drop_table("tools")
    op.drop_index("ix_products_slug", table_name="products")
    op.drop_table("products")
    op.drop_table("media")
