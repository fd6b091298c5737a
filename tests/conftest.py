import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DATA", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from httpx import Client
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import VIDEO_STATUS_UPLOADED, DailySession, SessionVideo, UserAnswerProfile
from app.services.video_catalog import SqlVideoCatalog
from app.services.watch_tracker import track_progress


RUN_INTEGRATION = os.getenv("RUN_INTEGRATION") == "1"
BASE_URL = os.getenv("BASE_URL", "http://localhost:10723")


@pytest.fixture(scope="session")
def base_url() -> str:
    return BASE_URL


@pytest.fixture(scope="session")
def client(base_url: str):
    with Client(base_url=base_url, timeout=20.0) as c:
        yield c


@pytest.fixture(scope="session")
def integration_enabled() -> bool:
    return RUN_INTEGRATION


# ── In-process fixtures (SQLite) ──────────────────────────────────────────────

@pytest.fixture
def db():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def catalog(db: Session) -> SqlVideoCatalog:
    return SqlVideoCatalog(db)


@pytest.fixture
def add_video(db: Session):
    def _add(title: str = "Lesson", status: str = VIDEO_STATUS_UPLOADED, duration: float | None = None) -> SessionVideo:
        video = SessionVideo(title=title, status=status, video_duration=duration)
        db.add(video)
        db.commit()
        return video

    return _add


@pytest.fixture
def watch_fully(db: Session, catalog: SqlVideoCatalog):
    def _watch(user_id: str, video_id: str, day_number: int, duration: float = 100.0):
        return track_progress(db, catalog, user_id, video_id, day_number, duration, duration)

    return _watch


@pytest.fixture
def submit_session(db: Session):
    def _submit(user_id: str, day: int) -> DailySession:
        row = DailySession(
            user_id=user_id,
            day=day,
            answers=[{"questionId": f"question_{i}", "answer": i} for i in range(1, 7)],
        )
        db.add(row)
        db.commit()
        return row

    return _submit


@pytest.fixture
def set_answers(db: Session):
    def _set(user_id: str, answers: list[dict]) -> None:
        db.add(UserAnswerProfile(user_id=user_id, answers=answers))
        db.commit()

    return _set


@pytest.fixture
def api_client(db: Session):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id: str = "user-1", role: str = "user") -> dict[str, str]:
        token = create_access_token(user_id, extra={"role": role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
