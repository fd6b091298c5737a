from types import SimpleNamespace

import pytest

from app.schemas.answers import AnswerItem
from app.services import skip_policy
from app.services.skip_policy import get_skip_policy, no_skip, symptom_skip


def _answers(main, detail):
    return [
        AnswerItem(question_id="question_1", question_type="single", selected_option="Female"),
        AnswerItem(question_id="question_2", question_type="multi", selected_option=main),
        AnswerItem(question_id="question_3", question_type="multi", selected_option=detail),
    ]


def test_no_skip_never_grants():
    answers = _answers(["Headache"], ["Throbbing headache"])

    assert all(no_skip(answers, day) is False for day in range(1, 43))


@pytest.mark.parametrize(
    ("detail", "day"),
    [
        (["Throbbing headache"], 4),
        (["Throbbing"], 4),
        (["Constant"], 5),
        (["Pressure headache (tight band)"], 8),
        (["Sinus"], 8),
        (["Behind eyes"], 9),
        (["Temples"], 9),
        (["Back of head/base of skull"], 11),
        (["Affects vision"], 11),
    ],
)
def test_symptom_grants_mapped_day(detail, day):
    assert symptom_skip(_answers(["Headache", "Fatigue"], detail), day) is True


def test_symptom_only_grants_its_own_day():
    answers = _answers(["Headache"], ["Throbbing headache"])

    assert symptom_skip(answers, 4) is True
    assert symptom_skip(answers, 5) is False
    assert symptom_skip(answers, 8) is False


def test_single_choice_answer_is_supported():
    assert symptom_skip(_answers("Migraine headache", "Sinus headache"), 8) is True


def test_requires_headache_in_main_symptoms():
    assert symptom_skip(_answers(["Back pain"], ["Throbbing headache"]), 4) is False


def test_missing_answers_never_grant():
    assert symptom_skip(None, 4) is False
    assert symptom_skip([], 4) is False
    only_main = [AnswerItem(question_id="question_2", question_type="multi", selected_option=["Headache"])]
    assert symptom_skip(only_main, 4) is False


def test_generic_headache_word_does_not_match_every_entry():
    assert symptom_skip(_answers(["Headache"], ["Pressure headache"]), 4) is False


def test_get_skip_policy_resolves_by_name(monkeypatch):
    monkeypatch.setattr(skip_policy, "get_settings", lambda: SimpleNamespace(skip_policy="symptom_map"))
    assert get_skip_policy() is symptom_skip

    monkeypatch.setattr(skip_policy, "get_settings", lambda: SimpleNamespace(skip_policy="none"))
    assert get_skip_policy() is no_skip


def test_get_skip_policy_rejects_unknown_name(monkeypatch):
    monkeypatch.setattr(skip_policy, "get_settings", lambda: SimpleNamespace(skip_policy="vip"))

    with pytest.raises(RuntimeError):
        get_skip_policy()
