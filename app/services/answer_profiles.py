import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InternalError
from app.models import UserAnswerProfile
from app.schemas.answers import AnswerItem

logger = logging.getLogger(__name__)


def get_answers(db: Session, user_id: str) -> list[AnswerItem] | None:
    row = db.execute(select(UserAnswerProfile).where(UserAnswerProfile.user_id == user_id)).scalars().first()
    if not row:
        return None
    try:
        return [AnswerItem.model_validate(item) for item in row.answers or []]
    except PydanticValidationError:
        # Treated as no profile, so the user is not skip-eligible.
        logger.warning("Ignoring malformed answer profile user=%s", user_id)
        return None


def save_answers(db: Session, user_id: str, answers: list[AnswerItem]) -> list[AnswerItem]:
    payload = [item.model_dump(by_alias=True) for item in answers]
    row = db.execute(select(UserAnswerProfile).where(UserAnswerProfile.user_id == user_id)).scalars().first()
    if row:
        row.answers = payload
    else:
        row = UserAnswerProfile(user_id=user_id, answers=payload)
        db.add(row)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalError("Failed to save answers") from exc
    return answers
