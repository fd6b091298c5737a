"""
Skip-eligibility policies for the day-access gate.

A policy answers "may this user jump to ``day`` without having watched the
previous days' videos?" from their onboarding answers. The rule is owned by
the program designers, so it is selected by configuration and injected into
the gate instead of being baked in.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from app.core.config import get_settings
from app.schemas.answers import AnswerItem

SkipPolicy = Callable[[Sequence[AnswerItem] | None, int], bool]

MAIN_SYMPTOM_QUESTION = "question_2"
HEADACHE_DETAIL_QUESTION = "question_3"

# Headache description -> days the user may jump straight to.
SYMPTOM_SKIP_DAYS: dict[str, tuple[int, ...]] = {
    "throbbing headache": (4,),
    "constant": (5,),
    "pressure headache": (8,),
    "sinus headache": (8,),
    "located mainly in forehead": (9,),
    "behind eyes": (9,),
    "in temples": (9,),
    "back of head/base of skull": (11,),
    "all over head": (11,),
    "affects vision": (11,),
}

# Words too generic to tie a symptom to one entry.
_GENERIC_WORDS = {"headache", "head", "located", "mainly", "all", "over"}


def no_skip(answers: Sequence[AnswerItem] | None, day: int) -> bool:
    return False


def symptom_skip(answers: Sequence[AnswerItem] | None, day: int) -> bool:
    if not answers:
        return False

    main = _selected_options(answers, MAIN_SYMPTOM_QUESTION)
    if not any("headache" in option for option in main):
        return False

    for symptom in _selected_options(answers, HEADACHE_DETAIL_QUESTION):
        for mapped, allowed_days in SYMPTOM_SKIP_DAYS.items():
            if day in allowed_days and _symptom_matches(symptom, mapped):
                return True
    return False


SKIP_POLICIES: dict[str, SkipPolicy] = {
    "none": no_skip,
    "symptom_map": symptom_skip,
}


def get_skip_policy() -> SkipPolicy:
    name = get_settings().skip_policy
    try:
        return SKIP_POLICIES[name]
    except KeyError:
        raise RuntimeError(f"Unknown SKIP_POLICY {name!r}; expected one of {sorted(SKIP_POLICIES)}") from None


def _selected_options(answers: Sequence[AnswerItem], question_id: str) -> list[str]:
    for item in answers:
        if item.question_id != question_id:
            continue
        options = item.selected_option if isinstance(item.selected_option, list) else [item.selected_option]
        return [_normalize(str(option)) for option in options if option]
    return []


def _normalize(text: str) -> str:
    text = re.sub(r"\([^)]*\)", "", text)
    return re.sub(r"\s+", " ", text).strip().lower()


def _keywords(text: str) -> set[str]:
    return {w for w in re.split(r"[\s/]+", text) if len(w) > 2 and w not in _GENERIC_WORDS}


def _symptom_matches(symptom: str, mapped: str) -> bool:
    mapped = _normalize(mapped)
    if not symptom:
        return False
    if symptom in mapped or mapped in symptom:
        return True
    return bool(_keywords(symptom) & _keywords(mapped))
