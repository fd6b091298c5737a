from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import VIDEO_STATUS_DRAFT, VIDEO_STATUS_UPLOADED, SessionVideo


def seed_if_needed(db: Session) -> None:
    existing_video = db.execute(select(SessionVideo.id).limit(1)).scalar_one_or_none()
    if existing_video:
        return

    db.add_all(
        [
            SessionVideo(title="Program orientation", status=VIDEO_STATUS_UPLOADED, video_duration=None),
            SessionVideo(title="Breathing basics (draft)", status=VIDEO_STATUS_DRAFT, video_duration=None),
        ]
    )
    db.commit()
