from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.error_codes import ErrorCode
from app.core.errors import AccessDeniedError, ConflictError, InternalError, NotFoundError
from app.models import DailySession
from app.schemas.daily_sessions import CreateDailySessionRequest, DayWithFlags
from app.services.answer_profiles import get_answers
from app.services.day_access import validate_day_access
from app.services.session_processor import add_day_if_missing, process_sessions_by_day
from app.services.skip_policy import SkipPolicy
from app.services.video_catalog import VideoCatalog

logger = logging.getLogger(__name__)

DUPLICATE_SESSION_MESSAGE = "You have already submitted a session for this day. Each day allows only one session."


def find_session(db: Session, user_id: str, day: int) -> DailySession | None:
    return db.execute(
        select(DailySession).where(DailySession.user_id == user_id, DailySession.day == day)
    ).scalars().first()


def create_daily_session(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    payload: CreateDailySessionRequest,
) -> DailySession:
    try:
        existing = find_session(db, user_id, payload.day)
        decision = None if existing else validate_day_access(db, catalog, skip_policy, user_id, payload.day)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to check day access user=%s day=%s", user_id, payload.day)
        raise InternalError("Failed to create daily session") from exc

    if existing:
        raise ConflictError(code=ErrorCode.SESSION_ALREADY_SUBMITTED, message=DUPLICATE_SESSION_MESSAGE)
    if not decision.can_proceed:
        raise AccessDeniedError(blocking_day=decision.blocking_day, requested_day=payload.day)

    row = DailySession(
        user_id=user_id,
        day=payload.day,
        answers=[answer.model_dump(by_alias=True) for answer in payload.answers],
        feedback=payload.feedback,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(code=ErrorCode.SESSION_ALREADY_SUBMITTED, message=DUPLICATE_SESSION_MESSAGE) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create daily session user=%s day=%s", user_id, payload.day)
        raise InternalError("Failed to create daily session") from exc

    db.refresh(row)
    logger.info("Daily session submitted user=%s day=%s", user_id, payload.day)
    return row


def list_daily_sessions(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    day: int | None = None,
) -> list[DayWithFlags]:
    stmt = select(DailySession).where(DailySession.user_id == user_id).order_by(DailySession.day)
    if day is not None:
        stmt = stmt.where(DailySession.day == day)
    sessions = db.execute(stmt).scalars().all()

    answers = get_answers(db, user_id)
    days = process_sessions_by_day(db, catalog, skip_policy, user_id, sessions, answers)
    if day is not None:
        days = add_day_if_missing(db, catalog, skip_policy, user_id, days, day, answers)
    return days


def get_daily_session(db: Session, user_id: str, day: int) -> DailySession:
    row = find_session(db, user_id, day)
    if not row:
        raise NotFoundError(code=ErrorCode.SESSION_NOT_FOUND, message="Session not found for this day")
    return row
