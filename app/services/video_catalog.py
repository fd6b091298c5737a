"""
Read-side adapter over the session video catalog.

The catalog is administered elsewhere; this core only lists publishable
videos, looks single videos up, and writes back a cached duration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models import VIDEO_STATUS_UPLOADED, SessionVideo


@dataclass(frozen=True)
class CatalogVideo:
    id: str
    status: str
    duration: float | None

    @property
    def is_publishable(self) -> bool:
        return self.status == VIDEO_STATUS_UPLOADED


class VideoCatalog(Protocol):
    def list_publishable_videos(self) -> list[CatalogVideo]: ...

    def get_video(self, video_id: str) -> CatalogVideo | None: ...

    def update_cached_duration(self, video_id: str, seconds: float) -> None: ...


class SqlVideoCatalog:
    """Catalog reader backed by the ``session_videos`` table, sharing the caller's transaction."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_publishable_videos(self) -> list[CatalogVideo]:
        rows = self._db.execute(
            select(SessionVideo)
            .where(SessionVideo.status == VIDEO_STATUS_UPLOADED)
            .order_by(SessionVideo.created_at, SessionVideo.id)
        ).scalars().all()
        return [_to_catalog_video(row) for row in rows]

    def get_video(self, video_id: str) -> CatalogVideo | None:
        row = self._db.get(SessionVideo, video_id)
        return _to_catalog_video(row) if row else None

    def update_cached_duration(self, video_id: str, seconds: float) -> None:
        # Not committed here: the watch tracker commits it with the record.
        self._db.execute(
            update(SessionVideo).where(SessionVideo.id == video_id).values(video_duration=seconds)
        )


def _to_catalog_video(row: SessionVideo) -> CatalogVideo:
    return CatalogVideo(id=row.id, status=row.status, duration=row.video_duration)
