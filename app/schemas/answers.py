from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel


class AnswerItem(CamelModel):
    question_id: str = Field(min_length=1)
    question_type: Literal["single", "multi"]
    selected_option: str | list[str]


class AnswerProfileRequest(CamelModel):
    answers: list[AnswerItem]


class AnswerProfileResponse(CamelModel):
    user_id: str
    answers: list[AnswerItem] = []
