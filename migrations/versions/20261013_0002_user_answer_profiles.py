"""user answer profiles

Revision ID: 20261013_0002
Revises: 20261006_0001
Create Date: 2026-10-13 16:40:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


revision = "20261013_0002"
down_revision = "20261006_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_answer_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("answers", JSONB(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_user_answer_profiles_user_id", "user_answer_profiles", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_user_answer_profiles_user_id", table_name="user_answer_profiles")
    op.drop_table("user_answer_profiles")
