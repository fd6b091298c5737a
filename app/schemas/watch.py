from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel

PROGRAM_DAYS = 42


class TrackProgressRequest(CamelModel):
    video_id: str = Field(min_length=1, max_length=36)
    day_number: int = Field(ge=1, le=PROGRAM_DAYS)
    current_position: float = Field(ge=0, allow_inf_nan=False)
    video_duration: float = Field(gt=0, allow_inf_nan=False)


class WatchRecordOut(CamelModel):
    user_id: str
    video_id: str
    day_number: int
    watch_progress: float
    is_completed: bool
    watched_duration: float
    video_duration: float
    last_position: float
    max_watched_position: float
    has_skipped_forward: bool
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TrackProgressResponse(WatchRecordOut):
    can_proceed: bool = True
