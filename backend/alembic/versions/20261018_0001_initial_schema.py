"""initial supplier and conversation schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "supplier_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("provider_name", sa.String(length=500), nullable=True),
        sa.Column("source_url", sa.String(length=1000), nullable=False),
        sa.Column("product_name", sa.String(length=500), nullable=True),
        sa.Column("moq", sa.Integer(), nullable=True),
        sa.Column("price_per_unit", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(length=50), nullable=True),
        sa.Column("certifications", sa.JSON(), nullable=False),
        sa.Column("delivery_time_days", sa.Integer(), nullable=True),
        sa.Column("additional_info", sa.Text(), nullable=True),
        sa.Column("risk_assessment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("source_url", name="uq_supplier_profiles_source_url"),
    )
    op.create_index("ix_supplier_profiles_user_id", "supplier_profiles", ["user_id"], unique=False)
    op.create_index("ix_supplier_profiles_created_at", "supplier_profiles", ["created_at"], unique=False)

    op.create_table(
        "conversation_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("supplier_id", sa.Integer(), nullable=True),
        sa.Column("original_message", sa.Text(), nullable=False),
        sa.Column("translated_message", sa.Text(), nullable=True),
        sa.Column("source_language", sa.String(length=50), nullable=False),
        sa.Column("target_language", sa.String(length=50), nullable=False),
        sa.Column("ai_interpretation", sa.Text(), nullable=True),
        sa.Column("alerts", sa.Text(), nullable=False),
        sa.Column("suggested_responses", sa.Text(), nullable=True),
        sa.Column("message_type", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["supplier_id"], ["supplier_profiles.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_conversation_records_user_id", "conversation_records", ["user_id"], unique=False)
    op.create_index("ix_conversation_records_supplier_id", "conversation_records", ["supplier_id"], unique=False)
    op.create_index("ix_conversation_records_message_type", "conversation_records", ["message_type"], unique=False)
    op.create_index("ix_conversation_records_created_at", "conversation_records", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_conversation_records_created_at", table_name="conversation_records")
    op.drop_index("ix_conversation_records_message_type", table_name="conversation_records")
    op.drop_index("ix_conversation_records_supplier_id", table_name="conversation_records")
    op.drop_index("ix_conversation_records_user_id", table_name="conversation_records")
    op.drop_table("conversation_records")
    op.drop_index("ix_supplier_profiles_created_at", table_name="supplier_profiles")
    op.drop_index("ix_supplier_profiles_user_id", table_name="supplier_profiles")
    op.drop_table("supplier_profiles")
