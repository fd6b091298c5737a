"""
Per user/day/video watch tracking.

A progress report is folded into the stored record by ``compute_watch_update``,
a pure function of the freshly loaded previous state. ``track_progress`` wraps
it in one transaction: insert-if-absent, row lock, recompute, commit. Two
devices reporting the same key at once serialize on the row lock, so the
monotonic fields (``max_watched_position``) and the sticky ones
(``is_completed``, ``completed_at``) are always combined against the latest
committed state rather than a client's stale view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import InternalError, NotFoundError
from app.core.security import now_utc
from app.models import VideoWatchRecord
from app.services.video_catalog import VideoCatalog

logger = logging.getLogger(__name__)

SKIP_THRESHOLD_SECONDS = 5.0
COMPLETION_THRESHOLD_PERCENT = 95.0
REWIND_RESET_SECONDS = 10.0
NEAR_END_SECONDS = 1.0
DURATION_TOLERANCE_SECONDS = 0.5


@dataclass(frozen=True)
class WatchState:
    video_duration: float
    last_position: float
    max_watched_position: float
    watched_duration: float
    watch_progress: float
    has_skipped_forward: bool
    is_completed: bool
    completed_at: datetime | None = None

    @classmethod
    def from_record(cls, record: VideoWatchRecord) -> WatchState:
        return cls(
            video_duration=record.video_duration or 0.0,
            last_position=record.last_position or 0.0,
            max_watched_position=record.max_watched_position or 0.0,
            watched_duration=record.watched_duration or 0.0,
            watch_progress=record.watch_progress or 0.0,
            has_skipped_forward=bool(record.has_skipped_forward),
            is_completed=bool(record.is_completed),
            completed_at=record.completed_at,
        )


@dataclass(frozen=True)
class WatchUpdate:
    state: WatchState
    duration_adopted: bool
    newly_completed: bool


def reconcile_duration(stored: float | None, reported: float) -> float:
    """Players report more precise durations once buffered; only ever grow the stored one."""
    if not stored:
        return reported
    if abs(reported - stored) > DURATION_TOLERANCE_SECONDS and reported > stored:
        return reported
    return stored


def compute_watch_update(
    previous: WatchState | None,
    current_position: float,
    reported_duration: float,
    now: datetime,
) -> WatchUpdate:
    """Fold one progress report into the previous state.

    ``previous`` is None for the first report on a key. A first report has no
    baseline position, so it never counts as a forward skip.
    """
    stored_duration = previous.video_duration if previous else 0.0
    duration = reconcile_duration(stored_duration, reported_duration)

    previous_max = previous.max_watched_position if previous else 0.0
    max_position = max(previous_max, current_position)

    skipped_now = False
    reset_skip = False
    if previous is not None:
        position_diff = current_position - previous.last_position
        skipped_now = position_diff > SKIP_THRESHOLD_SECONDS
        # Rewinding to the start after previewing ahead earns a clean slate.
        reset_skip = current_position < REWIND_RESET_SECONDS and previous.has_skipped_forward

    previous_skip = previous.has_skipped_forward if previous else False
    has_skipped_forward = False if reset_skip else (previous_skip or skipped_now)

    watch_progress = min(100.0, max_position / duration * 100.0) if duration > 0 else 0.0
    near_end = duration > 0 and (duration - max_position) <= NEAR_END_SECONDS
    completed_now = watch_progress >= COMPLETION_THRESHOLD_PERCENT and (not has_skipped_forward or near_end)

    was_completed = previous.is_completed if previous else False
    newly_completed = completed_now and not was_completed
    if newly_completed:
        completed_at = now
    else:
        completed_at = previous.completed_at if previous else None

    state = WatchState(
        video_duration=duration,
        last_position=current_position,
        max_watched_position=max_position,
        watched_duration=max_position,
        watch_progress=watch_progress,
        has_skipped_forward=has_skipped_forward,
        is_completed=completed_now or was_completed,
        completed_at=completed_at,
    )
    return WatchUpdate(state=state, duration_adopted=duration != stored_duration, newly_completed=newly_completed)


def track_progress(
    db: Session,
    catalog: VideoCatalog,
    user_id: str,
    video_id: str,
    day_number: int,
    current_position: float,
    reported_duration: float,
) -> VideoWatchRecord:
    try:
        video = catalog.get_video(video_id)
        if video is None:
            raise NotFoundError(code=ErrorCode.VIDEO_NOT_FOUND, message="Video not found")

        created = _insert_if_absent(db, user_id, day_number, video_id, reported_duration)
        record = _lock_record(db, user_id, day_number, video_id)
        previous = None if created else WatchState.from_record(record)

        result = compute_watch_update(previous, current_position, reported_duration, now_utc())
        _apply_state(record, result.state)

        cached = video.duration
        if not cached or (result.duration_adopted and result.state.video_duration > cached):
            catalog.update_cached_duration(video_id, result.state.video_duration)

        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update watch progress user=%s day=%s video=%s", user_id, day_number, video_id)
        raise InternalError("Failed to update video watch progress") from exc

    if result.newly_completed:
        logger.info("Video completed user=%s day=%s video=%s", user_id, day_number, video_id)
    return record


def get_watch_status(db: Session, user_id: str, day_number: int) -> VideoWatchRecord | None:
    return db.execute(
        select(VideoWatchRecord)
        .where(VideoWatchRecord.user_id == user_id, VideoWatchRecord.day_number == day_number)
        .order_by(VideoWatchRecord.created_at, VideoWatchRecord.id)
        .limit(1)
    ).scalars().first()


def _insert_if_absent(db: Session, user_id: str, day_number: int, video_id: str, video_duration: float) -> bool:
    """Create the seeded record unless one exists; returns True when this call created it."""
    values = {
        "user_id": user_id,
        "day_number": day_number,
        "video_id": video_id,
        "video_duration": video_duration,
        "watch_progress": 0.0,
        "is_completed": False,
        "watched_duration": 0.0,
        "last_position": 0.0,
        "max_watched_position": 0.0,
        "has_skipped_forward": False,
    }
    conflict_keys = ["user_id", "day_number", "video_id"]

    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = pg_insert(VideoWatchRecord).values(**values).on_conflict_do_nothing(index_elements=conflict_keys)
        return db.execute(stmt).rowcount == 1
    if dialect == "sqlite":
        stmt = sqlite_insert(VideoWatchRecord).values(**values).on_conflict_do_nothing(index_elements=conflict_keys)
        return db.execute(stmt).rowcount == 1

    if _find_record(db, user_id, day_number, video_id) is not None:
        return False
    try:
        with db.begin_nested():
            db.add(VideoWatchRecord(**values))
        return True
    except IntegrityError:
        return False


def _find_record(db: Session, user_id: str, day_number: int, video_id: str) -> VideoWatchRecord | None:
    return db.execute(
        select(VideoWatchRecord).where(
            VideoWatchRecord.user_id == user_id,
            VideoWatchRecord.day_number == day_number,
            VideoWatchRecord.video_id == video_id,
        )
    ).scalars().first()


def _lock_record(db: Session, user_id: str, day_number: int, video_id: str) -> VideoWatchRecord:
    return db.execute(
        select(VideoWatchRecord)
        .where(
            VideoWatchRecord.user_id == user_id,
            VideoWatchRecord.day_number == day_number,
            VideoWatchRecord.video_id == video_id,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalars().one()


def _apply_state(record: VideoWatchRecord, state: WatchState) -> None:
    record.video_duration = state.video_duration
    record.last_position = state.last_position
    record.max_watched_position = state.max_watched_position
    record.watched_duration = state.watched_duration
    record.watch_progress = state.watch_progress
    record.has_skipped_forward = state.has_skipped_forward
    record.is_completed = state.is_completed
    record.completed_at = state.completed_at
