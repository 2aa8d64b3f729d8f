from datetime import timedelta

import pytest

from memwright.application.scheduling.review import is_lapse, previous_ease, record_review
from memwright.domain.scheduling.models import Rating, ScheduleInput, ScheduleOutput, State
from memwright.domain.scheduling.ports import SchedulingAlgorithm


@pytest.mark.parametrize(
    "state,rating,expected",
    [
        (State.REVIEW, Rating.WRONG, True),
        (State.MASTERED, Rating.WRONG, True),
        (State.RELEARNING, Rating.WRONG, False),
        (State.LEARNING, Rating.WRONG, False),
        (State.NEW, Rating.WRONG, False),
        (State.REVIEW, Rating.CORRECT, False),
        (State.MASTERED, Rating.EASY, False),
    ],
)
def test_is_lapse(state, rating, expected):
    assert is_lapse(state, rating) is expected


def test_record_review_counts_and_logs_lapse(scheduler, now):
    inp = ScheduleInput(
        state=State.MASTERED, interval=30, ease_factor=2.5, review_count=12, lapse_count=1
    )

    outcome = record_review(scheduler, inp, Rating.WRONG, now, review_duration_ms=4200)

    assert outcome.output.state == State.RELEARNING
    assert outcome.review_count == 13
    assert outcome.lapse_count == 2
    assert outcome.last_reviewed_at == now

    log = outcome.log
    assert log.rating == 1
    assert log.previous_state == State.MASTERED
    assert log.new_state == State.RELEARNING
    assert log.previous_ease == pytest.approx(2.5)
    assert log.new_ease == pytest.approx(2.3)
    assert log.previous_interval == 30
    assert log.new_interval == 1
    assert log.review_duration_ms == 4200
    assert log.reviewed_at == now


def test_record_review_success_keeps_lapses(scheduler, now):
    inp = ScheduleInput(state=State.REVIEW, interval=4, ease_factor=2.0, lapse_count=3)

    outcome = record_review(scheduler, inp, Rating.CORRECT, now)

    assert outcome.output.interval == 8
    assert outcome.review_count == 1
    assert outcome.lapse_count == 3
    assert outcome.log.review_duration_ms == 0


def test_record_review_logs_resolved_initial_ease(scheduler, now):
    outcome = record_review(scheduler, ScheduleInput(state=State.NEW), Rating.EASY, now)

    assert outcome.log.previous_ease == pytest.approx(2.5)
    assert outcome.log.new_ease == pytest.approx(2.65)
    assert outcome.output.interval == 3


def test_relearning_wrong_is_not_a_new_lapse(scheduler, now):
    inp = ScheduleInput(state=State.RELEARNING, interval=1, ease_factor=2.3, lapse_count=1)

    outcome = record_review(scheduler, inp, Rating.WRONG, now)

    assert outcome.lapse_count == 1


def test_record_review_logs_clamped_stored_ease(scheduler, now):
    inp = ScheduleInput(state=State.REVIEW, interval=4, ease_factor=3.6)

    outcome = record_review(scheduler, inp, Rating.CORRECT, now)

    assert outcome.log.previous_ease == pytest.approx(3.0)
    assert outcome.log.new_ease == pytest.approx(3.0)
    assert outcome.output.interval == 12


def test_previous_ease_defaults_to_stored_value(now):
    class FixedScheduler(SchedulingAlgorithm):
        @property
        def name(self) -> str:
            return "fixed"

        def schedule(self, schedule_input, rating, now):
            return ScheduleOutput(State.REVIEW, 7, 2.0, now + timedelta(days=7))

    algo = FixedScheduler()

    assert previous_ease(algo, ScheduleInput(state=State.REVIEW, ease_factor=1.7)) == 1.7
    assert previous_ease(algo, ScheduleInput(state=State.NEW)) == 0.0
