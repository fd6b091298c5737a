from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import VideoWatchRecord
from app.services.video_catalog import VideoCatalog


def completed_days(db: Session, catalog: VideoCatalog, user_id: str, days: Iterable[int]) -> set[int]:
    """Days among ``days`` whose every publishable video is completed by the user.

    The catalog is read fresh on each call. An empty catalog completes nothing:
    with no videos to watch the requirement is never considered satisfied.
    """
    day_list = sorted(set(days))
    if not day_list:
        return set()

    video_ids = {video.id for video in catalog.list_publishable_videos()}
    if not video_ids:
        return set()

    rows = db.execute(
        select(VideoWatchRecord.day_number, VideoWatchRecord.video_id).where(
            VideoWatchRecord.user_id == user_id,
            VideoWatchRecord.day_number.in_(day_list),
            VideoWatchRecord.video_id.in_(video_ids),
            VideoWatchRecord.is_completed.is_(True),
        )
    ).all()

    watched: dict[int, set[str]] = {}
    for day_number, video_id in rows:
        watched.setdefault(day_number, set()).add(video_id)
    return {day for day in day_list if watched.get(day, set()) >= video_ids}


def is_day_video_complete(db: Session, catalog: VideoCatalog, user_id: str, day_number: int) -> bool:
    return day_number in completed_days(db, catalog, user_id, [day_number])


def is_previous_day_video_complete(db: Session, catalog: VideoCatalog, user_id: str, day_number: int) -> bool:
    if day_number <= 1:
        return True
    return is_day_video_complete(db, catalog, user_id, day_number - 1)
