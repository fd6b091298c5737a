from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import Catalog, CurrentUser
from app.db.session import get_db
from app.schemas.watch import PROGRAM_DAYS, TrackProgressRequest, TrackProgressResponse, WatchRecordOut
from app.services.watch_tracker import get_watch_status, track_progress

router = APIRouter(prefix="/v1/video-watch", tags=["video-watch"])


@router.put("/track", response_model=TrackProgressResponse)
def track_video(
    payload: TrackProgressRequest,
    current_user: CurrentUser,
    catalog: Catalog,
    db: Session = Depends(get_db),
) -> TrackProgressResponse:
    record = track_progress(
        db,
        catalog,
        user_id=current_user.id,
        video_id=payload.video_id,
        day_number=payload.day_number,
        current_position=payload.current_position,
        reported_duration=payload.video_duration,
    )
    return TrackProgressResponse.model_validate(record)


@router.get("/status", response_model=WatchRecordOut | None)
def watch_status(
    current_user: CurrentUser,
    db: Session = Depends(get_db),
    day_number: int = Query(alias="dayNumber", ge=1, le=PROGRAM_DAYS),
) -> WatchRecordOut | None:
    record = get_watch_status(db, current_user.id, day_number)
    return WatchRecordOut.model_validate(record) if record else None
