from app.models import VIDEO_STATUS_DRAFT
from app.services.completion import completed_days, is_day_video_complete, is_previous_day_video_complete
from app.services.day_access import DayAccessDecision, calculate_can_submit, validate_day_access
from app.services.skip_policy import no_skip
from app.services.watch_tracker import track_progress

HEADACHE_ANSWERS = [
    {"questionId": "question_2", "questionType": "multi", "selectedOption": ["Headache"]},
    {"questionId": "question_3", "questionType": "multi", "selectedOption": ["Throbbing headache"]},
]


def always_skip(answers, day):
    return True


# ── Completion evaluator ──────────────────────────────────────────────────────

def test_empty_catalog_never_completes_a_day(db, catalog):
    assert is_day_video_complete(db, catalog, "user-1", 1) is False


def test_draft_only_catalog_never_completes_a_day(db, catalog, add_video, watch_fully):
    video = add_video(status=VIDEO_STATUS_DRAFT, duration=100.0)
    watch_fully("user-1", video.id, 1)

    assert is_day_video_complete(db, catalog, "user-1", 1) is False


def test_day_needs_every_publishable_video(db, catalog, add_video, watch_fully):
    first = add_video(title="First", duration=100.0)
    second = add_video(title="Second", duration=100.0)

    watch_fully("user-1", first.id, 1)
    assert is_day_video_complete(db, catalog, "user-1", 1) is False

    watch_fully("user-1", second.id, 1)
    assert is_day_video_complete(db, catalog, "user-1", 1) is True


def test_completion_is_per_day_and_per_user(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)
    watch_fully("user-1", video.id, 2)

    assert is_day_video_complete(db, catalog, "user-1", 2) is True
    assert is_day_video_complete(db, catalog, "user-1", 1) is False
    assert is_day_video_complete(db, catalog, "user-2", 2) is False


def test_newly_published_video_reopens_requirement(db, catalog, add_video, watch_fully):
    first = add_video(title="First", duration=100.0)
    watch_fully("user-1", first.id, 1)
    assert is_day_video_complete(db, catalog, "user-1", 1) is True

    add_video(title="Added later", duration=100.0)
    assert is_day_video_complete(db, catalog, "user-1", 1) is False


def test_partially_watched_video_does_not_complete(db, catalog, add_video):
    video = add_video(duration=100.0)
    track_progress(db, catalog, "user-1", video.id, 1, 50.0, 100.0)

    assert is_day_video_complete(db, catalog, "user-1", 1) is False


def test_completed_days_batches_many_days(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)
    for day in (1, 2, 4):
        watch_fully("user-1", video.id, day)

    assert completed_days(db, catalog, "user-1", range(1, 6)) == {1, 2, 4}
    assert completed_days(db, catalog, "user-1", []) == set()


def test_previous_day_check(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)

    assert is_previous_day_video_complete(db, catalog, "user-1", 1) is True
    assert is_previous_day_video_complete(db, catalog, "user-1", 2) is False

    watch_fully("user-1", video.id, 1)
    assert is_previous_day_video_complete(db, catalog, "user-1", 2) is True


# ── validate_day_access ───────────────────────────────────────────────────────

def test_day_one_is_always_open(db, catalog, submit_session):
    submit_session("user-1", 1)

    assert validate_day_access(db, catalog, no_skip, "user-1", 1) == DayAccessDecision(can_proceed=True)


def test_missing_watch_record_blocks_next_day(db, catalog, add_video):
    add_video(duration=100.0)

    decision = validate_day_access(db, catalog, no_skip, "user-1", 2)

    assert decision == DayAccessDecision(can_proceed=False, blocking_day=1)


def test_empty_catalog_blocks_next_day(db, catalog):
    decision = validate_day_access(db, catalog, no_skip, "user-1", 2)

    assert decision.can_proceed is False
    assert decision.blocking_day == 1


def test_blocks_on_first_incomplete_prior_day(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)
    watch_fully("user-1", video.id, 1)
    watch_fully("user-1", video.id, 3)

    decision = validate_day_access(db, catalog, no_skip, "user-1", 5)

    assert decision == DayAccessDecision(can_proceed=False, blocking_day=2)


def test_all_prior_days_complete_opens_day(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)
    for day in (1, 2, 3):
        watch_fully("user-1", video.id, day)

    assert validate_day_access(db, catalog, no_skip, "user-1", 4).can_proceed is True


def test_skip_policy_opens_day(db, catalog, add_video, set_answers):
    add_video(duration=100.0)
    set_answers("user-1", HEADACHE_ANSWERS)

    assert validate_day_access(db, catalog, always_skip, "user-1", 4).can_proceed is True


def test_skip_policy_ignored_without_answer_profile(db, catalog, add_video):
    add_video(duration=100.0)

    decision = validate_day_access(db, catalog, always_skip, "user-1", 4)

    assert decision == DayAccessDecision(can_proceed=False, blocking_day=1)


def test_submitted_day_with_unwatched_video_takes_precedence_over_skip(
    db, catalog, add_video, watch_fully, submit_session, set_answers
):
    video = add_video(duration=100.0)
    set_answers("user-1", HEADACHE_ANSWERS)
    watch_fully("user-1", video.id, 1)
    submit_session("user-1", 1)
    submit_session("user-1", 3)

    decision = validate_day_access(db, catalog, always_skip, "user-1", 5)

    assert decision == DayAccessDecision(can_proceed=False, blocking_day=3)


def test_precedence_cites_first_offending_day(db, catalog, add_video, submit_session):
    add_video(duration=100.0)
    submit_session("user-1", 2)
    submit_session("user-1", 4)

    decision = validate_day_access(db, catalog, always_skip, "user-1", 6)

    assert decision.blocking_day == 2


# ── calculate_can_submit ──────────────────────────────────────────────────────

def test_can_submit_when_session_exists(db, catalog, add_video):
    add_video(duration=100.0)

    assert calculate_can_submit(db, catalog, no_skip, "user-1", 7, True, None) is True


def test_can_submit_day_one(db, catalog):
    assert calculate_can_submit(db, catalog, no_skip, "user-1", 1, False, None) is True


def test_can_submit_with_skip(db, catalog, add_video):
    add_video(duration=100.0)

    assert calculate_can_submit(db, catalog, always_skip, "user-1", 4, False, HEADACHE_ANSWERS) is True
    assert calculate_can_submit(db, catalog, always_skip, "user-1", 4, False, []) is False


def test_can_submit_follows_previous_day_only(db, catalog, add_video, watch_fully):
    video = add_video(duration=100.0)
    watch_fully("user-1", video.id, 2)

    # Day 1 unwatched does not matter here: only the previous day is checked.
    assert calculate_can_submit(db, catalog, no_skip, "user-1", 3, False, None) is True
    assert calculate_can_submit(db, catalog, no_skip, "user-1", 2, False, None) is False
