"""
Day-access gate: may a user submit the session for a given program day?

Checks run in a fixed order:

1. Day 1 is always open.
2. A prior day whose session was submitted but whose videos were never
   finished blocks first, whatever the skip policy says.
3. A skip-eligible user may proceed.
4. Otherwise every prior day must have its videos completed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import DailySession
from app.schemas.answers import AnswerItem
from app.services.answer_profiles import get_answers
from app.services.completion import completed_days, is_previous_day_video_complete
from app.services.skip_policy import SkipPolicy
from app.services.video_catalog import VideoCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayAccessDecision:
    can_proceed: bool
    blocking_day: int | None = None


def submitted_days(db: Session, user_id: str, days: Sequence[int]) -> set[int]:
    if not days:
        return set()
    rows = db.execute(
        select(DailySession.day).where(DailySession.user_id == user_id, DailySession.day.in_(list(days)))
    ).scalars().all()
    return set(rows)


def can_skip_to_day(skip_policy: SkipPolicy, answers: Sequence[AnswerItem] | None, day_number: int) -> bool:
    if not answers:
        return False
    return skip_policy(answers, day_number)


def validate_day_access(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    day_number: int,
) -> DayAccessDecision:
    if day_number == 1:
        return DayAccessDecision(can_proceed=True)

    prior_days = list(range(1, day_number))
    complete = completed_days(db, catalog, user_id, prior_days)

    for day in sorted(submitted_days(db, user_id, prior_days)):
        if day not in complete:
            logger.info("Day %s blocked for user=%s: day %s submitted without finishing its video", day_number, user_id, day)
            return DayAccessDecision(can_proceed=False, blocking_day=day)

    if can_skip_to_day(skip_policy, get_answers(db, user_id), day_number):
        return DayAccessDecision(can_proceed=True)

    for day in prior_days:
        if day not in complete:
            logger.info("Day %s blocked for user=%s: day %s video incomplete", day_number, user_id, day)
            return DayAccessDecision(can_proceed=False, blocking_day=day)

    return DayAccessDecision(can_proceed=True)


def calculate_can_submit(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    day_number: int,
    session_exists: bool,
    answers: Sequence[AnswerItem] | None,
) -> bool:
    if session_exists:
        return True
    if day_number == 1:
        return True
    if can_skip_to_day(skip_policy, answers, day_number):
        return True
    return is_previous_day_video_complete(db, catalog, user_id, day_number)
