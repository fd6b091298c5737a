"""initial schema

Revision ID: 20261006_0001
Revises: 
Create Date: 2026-10-06 10:15:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261006_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "session_videos",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("video_duration", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_session_videos_status", "session_videos", ["status"], unique=False)

    op.create_table(
        "video_watch_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("video_id", sa.String(length=36), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("watch_progress", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("watched_duration", sa.Float(), nullable=False, server_default="0"),
        sa.Column("video_duration", sa.Float(), nullable=False, server_default="0"),
        sa.Column("last_position", sa.Float(), nullable=False, server_default="0"),
        sa.Column("max_watched_position", sa.Float(), nullable=False, server_default="0"),
        sa.Column("has_skipped_forward", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "day_number", "video_id", name="uq_watch_user_day_video"),
        sa.CheckConstraint("day_number BETWEEN 1 AND 42", name="ck_watch_day_range"),
    )
    op.create_index("ix_video_watch_records_user_id", "video_watch_records", ["user_id"], unique=False)
    op.create_index("ix_video_watch_records_video_id", "video_watch_records", ["video_id"], unique=False)
    op.create_index("ix_video_watch_records_is_completed", "video_watch_records", ["is_completed"], unique=False)
    op.create_index(
        "ix_video_watch_records_user_day_completed",
        "video_watch_records",
        ["user_id", "day_number", "is_completed"],
        unique=False,
    )

    op.create_table(
        "daily_sessions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("answers", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default="[]"),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "day", name="uq_daily_session_user_day"),
    )
    op.create_index("ix_daily_sessions_user_id", "daily_sessions", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_daily_sessions_user_id", table_name="daily_sessions")
    op.drop_table("daily_sessions")

    op.drop_index("ix_video_watch_records_user_day_completed", table_name="video_watch_records")
    op.drop_index("ix_video_watch_records_is_completed", table_name="video_watch_records")
    op.drop_index("ix_video_watch_records_video_id", table_name="video_watch_records")
    op.drop_index("ix_video_watch_records_user_id", table_name="video_watch_records")
    op.drop_table("video_watch_records")

    op.drop_index("ix_session_videos_status", table_name="session_videos")
    op.drop_table("session_videos")
