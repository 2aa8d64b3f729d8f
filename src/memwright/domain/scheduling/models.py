"""
Domain models for card scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum


class Rating(IntEnum):
    """The learner's recall-quality report for one review."""

    WRONG = 1
    CORRECT = 2
    EASY = 3


class State(str, Enum):
    """
    Lifecycle stage of a card schedule.

    The string values are the persisted representation.
    """

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"
    MASTERED = "mastered"


@dataclass(frozen=True)
class ScheduleInput:
    """
    Current memorization state of a card, as projected from its schedule row.

    Attributes:
        state: Lifecycle stage before this review.
        interval: Current interval in days (>= 0).
        ease_factor: Difficulty multiplier. None (or the legacy 0) means
            "unset", resolved to the configured initial ease.
        review_count: Reviews recorded so far (bookkeeping only).
        lapse_count: Lapses recorded so far (bookkeeping only).
        last_reviewed_at: Timestamp of the previous review, if any.
    """

    state: State
    interval: int = 0
    ease_factor: float | None = None
    review_count: int = 0
    lapse_count: int = 0
    last_reviewed_at: datetime | None = None


@dataclass(frozen=True)
class ScheduleOutput:
    """Result of one scheduling transition."""

    state: State
    interval: int  # days
    ease_factor: float
    due_at: datetime


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    Immutable before/after record of a single review.

    Attributes:
        rating: Rating submitted by the learner.
        previous_state / new_state: Lifecycle stage around the transition.
        previous_ease / new_ease: Ease factor around the transition.
        previous_interval / new_interval: Interval (days) around the transition.
        review_duration_ms: Time the learner spent on the card.
        reviewed_at: When the review happened.
    """

    rating: int
    previous_state: State
    new_state: State
    previous_ease: float
    new_ease: float
    previous_interval: int
    new_interval: int
    review_duration_ms: int
    reviewed_at: datetime
