"""
Review bookkeeping.

Wraps one scheduling transition with the counters and review-log record a
caller persists next to it. Pure: nothing here touches storage.
"""

from dataclasses import dataclass
from datetime import datetime

from memwright.domain.scheduling.models import (
    Rating,
    ReviewLogEntry,
    ScheduleInput,
    ScheduleOutput,
    State,
)
from memwright.domain.scheduling.ports import SchedulingAlgorithm

from .dispatch import schedule

LAPSE_STATES = frozenset({State.REVIEW, State.MASTERED})


@dataclass(frozen=True)
class ReviewOutcome:
    """Everything a caller writes back after a review."""

    output: ScheduleOutput
    review_count: int
    lapse_count: int
    last_reviewed_at: datetime
    log: ReviewLogEntry


def is_lapse(state: State, rating: Rating | int) -> bool:
    """A Wrong rating on a card that had reached Review or Mastered."""
    return rating == Rating.WRONG and state in LAPSE_STATES


def previous_ease(algorithm: SchedulingAlgorithm, schedule_input: ScheduleInput) -> float:
    """
    Ease the algorithm started from, as the engine saw it.

    The "unset" sentinel and out-of-bounds stored values are resolved by the
    algorithm, so previous_ease and new_ease on a log entry share one scale.
    """
    return algorithm.resolve_ease(schedule_input.ease_factor)


def record_review(
    algorithm: SchedulingAlgorithm,
    schedule_input: ScheduleInput,
    rating: Rating | int,
    now: datetime,
    review_duration_ms: int = 0,
) -> ReviewOutcome:
    """
    Schedule a review and build the bookkeeping that goes with it.

    Args:
        algorithm: Active scheduler for the card's deck.
        schedule_input: Card state projected from its schedule row.
        rating: Learner's rating.
        now: Review timestamp.
        review_duration_ms: Time spent answering, stored on the log entry.

    Returns:
        ReviewOutcome with the new schedule, updated counters and a log entry.
    """
    output = schedule(algorithm, schedule_input, rating, now)

    lapse_count = schedule_input.lapse_count
    if is_lapse(schedule_input.state, rating):
        lapse_count += 1

    log = ReviewLogEntry(
        rating=int(rating),
        previous_state=schedule_input.state,
        new_state=output.state,
        previous_ease=previous_ease(algorithm, schedule_input),
        new_ease=output.ease_factor,
        previous_interval=schedule_input.interval,
        new_interval=output.interval,
        review_duration_ms=review_duration_ms,
        reviewed_at=now,
    )

    return ReviewOutcome(
        output=output,
        review_count=schedule_input.review_count + 1,
        lapse_count=lapse_count,
        last_reviewed_at=now,
        log=log,
    )
