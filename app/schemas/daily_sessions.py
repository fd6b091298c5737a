from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.schemas.base import CamelModel
from app.schemas.watch import PROGRAM_DAYS

REQUIRED_QUESTIONS = ["question_1", "question_2", "question_3", "question_4", "question_5", "question_6"]
RATING_QUESTIONS = {"question_2", "question_3", "question_4"}


class SessionAnswer(CamelModel):
    question_id: str = Field(min_length=1)
    answer: int | float | str

    @field_validator("answer")
    @classmethod
    def validate_rating(cls, value, info):
        question_id = info.data.get("question_id")
        if question_id in RATING_QUESTIONS and (isinstance(value, bool) or not isinstance(value, (int, float))):
            raise ValueError(f"{question_id} must be a number (rating type)")
        return value


class CreateDailySessionRequest(CamelModel):
    day: int = Field(ge=1, le=PROGRAM_DAYS)
    answers: list[SessionAnswer]
    feedback: str | None = None

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, value: list[SessionAnswer]) -> list[SessionAnswer]:
        if len(value) != len(REQUIRED_QUESTIONS):
            raise ValueError("All 6 questions (question_1 to question_6) are required")
        provided = [a.question_id for a in value]
        missing = [q for q in REQUIRED_QUESTIONS if q not in provided]
        if missing:
            raise ValueError(f"Missing required questions: {', '.join(missing)}")
        return value


class DailySessionOut(CamelModel):
    id: str
    user_id: str
    day: int
    answers: list[dict[str, Any]]
    feedback: str | None = None
    created_at: datetime | None = None


class DayWithFlags(CamelModel):
    day: int
    video_completed: bool
    can_submit: bool
    answers: list[dict[str, Any]] = []


class DailySessionsResponse(CamelModel):
    days: list[DayWithFlags]
