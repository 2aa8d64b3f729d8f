from dataclasses import FrozenInstanceError

import pytest

from memwright.domain.scheduling import (
    InvalidConfigError,
    Rating,
    ScheduleInput,
    SchedulingAlgorithm,
    SchedulingValidationError,
    State,
    UnknownAlgorithmError,
)


def test_rating_values():
    assert [int(r) for r in Rating] == [1, 2, 3]
    assert Rating(2) is Rating.CORRECT


def test_state_values_are_persisted_strings():
    assert [s.value for s in State] == ["new", "learning", "review", "relearning", "mastered"]
    assert State("review") is State.REVIEW
    assert State.MASTERED == "mastered"


def test_schedule_input_defaults():
    inp = ScheduleInput(state=State.NEW)

    assert inp.interval == 0
    assert inp.ease_factor is None
    assert inp.review_count == 0
    assert inp.lapse_count == 0
    assert inp.last_reviewed_at is None


def test_schedule_input_is_frozen():
    inp = ScheduleInput(state=State.REVIEW, interval=3)

    with pytest.raises(FrozenInstanceError):
        inp.interval = 4


def test_port_cannot_be_instantiated():
    with pytest.raises(TypeError):
        SchedulingAlgorithm()


def test_error_hierarchy():
    assert issubclass(InvalidConfigError, SchedulingValidationError)
    assert issubclass(SchedulingValidationError, ValueError)

    err = UnknownAlgorithmError("fsrs", [])
    assert "none" in str(err)
