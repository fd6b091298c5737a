from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.models import DailySession
from app.schemas.answers import AnswerItem
from app.schemas.daily_sessions import DayWithFlags
from app.services.completion import is_day_video_complete
from app.services.day_access import calculate_can_submit
from app.services.skip_policy import SkipPolicy
from app.services.video_catalog import VideoCatalog


def process_sessions_by_day(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    sessions: Sequence[DailySession],
    answers: Sequence[AnswerItem] | None,
) -> list[DayWithFlags]:
    """Group sessions by day and attach flags computed for each day on its own."""
    by_day: dict[int, list[DailySession]] = {}
    for session in sessions:
        by_day.setdefault(int(session.day), []).append(session)

    days = []
    for day, day_sessions in by_day.items():
        days.append(
            DayWithFlags(
                day=day,
                video_completed=is_day_video_complete(db, catalog, user_id, day),
                can_submit=calculate_can_submit(db, catalog, skip_policy, user_id, day, True, answers),
                answers=list(day_sessions[0].answers or []),
            )
        )
    days.sort(key=lambda d: d.day)
    return days


def add_day_if_missing(
    db: Session,
    catalog: VideoCatalog,
    skip_policy: SkipPolicy,
    user_id: str,
    days: list[DayWithFlags],
    day: int,
    answers: Sequence[AnswerItem] | None,
) -> list[DayWithFlags]:
    if any(d.day == day for d in days):
        return days

    days.append(
        DayWithFlags(
            day=day,
            video_completed=is_day_video_complete(db, catalog, user_id, day),
            can_submit=calculate_can_submit(db, catalog, skip_policy, user_id, day, False, answers),
            answers=[],
        )
    )
    days.sort(key=lambda d: d.day)
    return days
