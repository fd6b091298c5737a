from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import CurrentUser
from app.db.session import get_db
from app.schemas.answers import AnswerProfileRequest, AnswerProfileResponse
from app.services.answer_profiles import get_answers, save_answers

router = APIRouter(prefix="/v1/answers", tags=["answers"])


@router.get("", response_model=AnswerProfileResponse)
def get_my_answers(current_user: CurrentUser, db: Session = Depends(get_db)) -> AnswerProfileResponse:
    return AnswerProfileResponse(user_id=current_user.id, answers=get_answers(db, current_user.id) or [])


@router.put("", response_model=AnswerProfileResponse)
def put_my_answers(
    payload: AnswerProfileRequest,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> AnswerProfileResponse:
    answers = save_answers(db, current_user.id, payload.answers)
    return AnswerProfileResponse(user_id=current_user.id, answers=answers)
