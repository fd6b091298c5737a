import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Float, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

JsonDocument = JSON().with_variant(JSONB(), "postgresql")

VIDEO_STATUS_UPLOADED = "uploaded"
VIDEO_STATUS_DRAFT = "draft"


def _new_id() -> str:
    return str(uuid.uuid4())


class SessionVideo(Base):
    """Catalog entry owned by the content admin service; read here for gating."""

    __tablename__ = "session_videos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=VIDEO_STATUS_UPLOADED, index=True)
    video_duration: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class VideoWatchRecord(Base):
    __tablename__ = "video_watch_records"
    __table_args__ = (
        UniqueConstraint("user_id", "day_number", "video_id", name="uq_watch_user_day_video"),
        CheckConstraint("day_number BETWEEN 1 AND 42", name="ck_watch_day_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    video_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    watch_progress: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    watched_duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    video_duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    last_position: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_watched_position: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    has_skipped_forward: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class DailySession(Base):
    __tablename__ = "daily_sessions"
    __table_args__ = (UniqueConstraint("user_id", "day", name="uq_daily_session_user_day"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    answers: Mapped[list] = mapped_column(JsonDocument, nullable=False, default=list)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class UserAnswerProfile(Base):
    __tablename__ = "user_answer_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    answers: Mapped[list] = mapped_column(JsonDocument, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
