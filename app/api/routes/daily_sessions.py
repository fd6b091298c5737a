from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.api.deps import Catalog, CurrentUser, SkipPolicyDep
from app.core.error_codes import ErrorCode
from app.core.errors import ApiError
from app.db.session import get_db
from app.schemas.daily_sessions import CreateDailySessionRequest, DailySessionOut, DailySessionsResponse
from app.schemas.watch import PROGRAM_DAYS
from app.services.daily_session_service import create_daily_session, get_daily_session, list_daily_sessions

router = APIRouter(prefix="/v1/daily-sessions", tags=["daily-sessions"])


@router.post("", response_model=DailySessionOut, status_code=201)
def submit_daily_session(
    payload: CreateDailySessionRequest,
    current_user: CurrentUser,
    catalog: Catalog,
    skip_policy: SkipPolicyDep,
    db: Session = Depends(get_db),
) -> DailySessionOut:
    if current_user.is_admin:
        raise ApiError(status_code=403, code=ErrorCode.FORBIDDEN, message="Admins cannot submit daily sessions")

    row = create_daily_session(db, catalog, skip_policy, current_user.id, payload)
    return DailySessionOut.model_validate(row)


@router.get("", response_model=DailySessionsResponse)
def list_sessions(
    current_user: CurrentUser,
    catalog: Catalog,
    skip_policy: SkipPolicyDep,
    db: Session = Depends(get_db),
    day: int | None = Query(default=None, ge=1, le=PROGRAM_DAYS),
    user_id: str | None = Query(default=None, alias="userId"),
) -> DailySessionsResponse:
    target_user_id = _target_user_id(current_user, user_id)
    days = list_daily_sessions(db, catalog, skip_policy, target_user_id, day)
    return DailySessionsResponse(days=days)


@router.get("/{day}", response_model=DailySessionOut)
def get_session_for_day(
    current_user: CurrentUser,
    db: Session = Depends(get_db),
    day: int = Path(ge=1, le=PROGRAM_DAYS),
    user_id: str | None = Query(default=None, alias="userId"),
) -> DailySessionOut:
    target_user_id = _target_user_id(current_user, user_id)
    return DailySessionOut.model_validate(get_daily_session(db, target_user_id, day))


def _target_user_id(current_user, requested_user_id: str | None) -> str:
    # Only admins may look at another user's program.
    if current_user.is_admin and requested_user_id:
        return requested_user_id
    return current_user.id
