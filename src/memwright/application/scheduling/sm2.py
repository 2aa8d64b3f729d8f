"""
SM2-family scheduler.

A deterministic state machine over (state, rating). This is a pure
computation module with no I/O.
"""

import math
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from memwright.domain import constants
from memwright.domain.scheduling.models import Rating, ScheduleInput, ScheduleOutput, State
from memwright.domain.scheduling.ports import SchedulingAlgorithm


class SM2Config(BaseModel):
    """
    Per-deck tunables for the SM2 scheduler.

    There are no defaults: a zero graduating interval or mastered threshold
    silently changes scheduling, so every field must be supplied. Use
    `SM2Config.standard()` for the standard preset.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    initial_ease_factor: float = Field(gt=0)
    min_ease_factor: float = Field(gt=0)
    max_ease_factor: float = Field(gt=0)
    ease_decrement: float = Field(ge=0)
    ease_increment: float = Field(ge=0)
    easy_bonus_multiplier: float = Field(gt=0)
    graduating_interval: int = Field(ge=1)  # days
    mastered_threshold: int = Field(ge=1)  # days

    @model_validator(mode="after")
    def check_ease_bounds(self) -> "SM2Config":
        if self.min_ease_factor > self.max_ease_factor:
            raise ValueError("min_ease_factor must not exceed max_ease_factor")
        if not self.min_ease_factor <= self.initial_ease_factor <= self.max_ease_factor:
            raise ValueError(
                "initial_ease_factor must lie within [min_ease_factor, max_ease_factor]"
            )
        return self

    @classmethod
    def standard(cls) -> "SM2Config":
        return cls(
            initial_ease_factor=constants.SM2_STANDARD_INITIAL_EASE,
            min_ease_factor=constants.SM2_STANDARD_MIN_EASE,
            max_ease_factor=constants.SM2_STANDARD_MAX_EASE,
            ease_decrement=constants.SM2_STANDARD_EASE_DECREMENT,
            ease_increment=constants.SM2_STANDARD_EASE_INCREMENT,
            easy_bonus_multiplier=constants.SM2_STANDARD_EASY_BONUS,
            graduating_interval=constants.SM2_STANDARD_GRADUATING_INTERVAL,
            mastered_threshold=constants.SM2_STANDARD_MASTERED_THRESHOLD,
        )


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class SM2Scheduler(SchedulingAlgorithm):
    """
    SM2 transition policy over five lifecycle states.

    Wrong ratings reset the interval to the graduating interval and lower the
    ease; Correct grows the interval by the ease; Easy additionally applies the
    easy bonus and raises the ease. From Learning onwards a non-Wrong rating
    always grows the interval by at least one day.

    Stateless and side-effect free.
    """

    def __init__(self, config: SM2Config):
        self._config = config

    @property
    def name(self) -> str:
        return constants.ALGORITHM_SM2

    @property
    def config(self) -> SM2Config:
        return self._config

    def schedule(
        self, schedule_input: ScheduleInput, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        ease = self.resolve_ease(schedule_input.ease_factor)
        state = schedule_input.state

        if state == State.LEARNING:
            return self._schedule_learning(schedule_input, ease, rating, now)
        if state in (State.REVIEW, State.RELEARNING):
            return self._schedule_review(schedule_input, ease, rating, now)
        if state == State.MASTERED:
            return self._schedule_mastered(schedule_input, ease, rating, now)
        # NEW, and anything that slipped past boundary validation
        return self._schedule_new(schedule_input, ease, rating, now)

    # ------------------------------------------------------------------
    # Per-state transitions
    # ------------------------------------------------------------------

    def _schedule_new(
        self, schedule_input: ScheduleInput, ease: float, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        cfg = self._config
        if rating == Rating.WRONG:
            return self._output(State.NEW, 0, self._lower(ease), now)
        if rating == Rating.CORRECT:
            return self._output(State.LEARNING, cfg.graduating_interval, ease, now)
        if rating == Rating.EASY:
            interval = round_half_away(
                cfg.graduating_interval * cfg.easy_bonus_multiplier * ease
            )
            return self._output(State.REVIEW, interval, self._raise(ease), now)
        return self._hold(schedule_input, ease, now)

    def _schedule_learning(
        self, schedule_input: ScheduleInput, ease: float, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        if rating == Rating.WRONG:
            return self._output(
                State.LEARNING, self._config.graduating_interval, self._lower(ease), now
            )
        if rating == Rating.CORRECT:
            interval = self._grow(schedule_input.interval, ease)
            return self._output(State.REVIEW, interval, ease, now)
        if rating == Rating.EASY:
            interval = self._grow(schedule_input.interval, ease, self._config.easy_bonus_multiplier)
            return self._output(State.REVIEW, interval, self._raise(ease), now)
        return self._hold(schedule_input, ease, now)

    def _schedule_review(
        self, schedule_input: ScheduleInput, ease: float, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        if rating == Rating.WRONG:
            return self._relearn(ease, now)
        if rating == Rating.CORRECT:
            interval = self._grow(schedule_input.interval, ease)
            return self._output(self._review_or_mastered(interval), interval, ease, now)
        if rating == Rating.EASY:
            interval = self._grow(schedule_input.interval, ease, self._config.easy_bonus_multiplier)
            return self._output(
                self._review_or_mastered(interval), interval, self._raise(ease), now
            )
        return self._hold(schedule_input, ease, now)

    def _schedule_mastered(
        self, schedule_input: ScheduleInput, ease: float, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        if rating == Rating.WRONG:
            return self._relearn(ease, now)
        if rating == Rating.CORRECT:
            interval = self._grow(schedule_input.interval, ease)
            return self._output(State.MASTERED, interval, ease, now)
        if rating == Rating.EASY:
            interval = self._grow(schedule_input.interval, ease, self._config.easy_bonus_multiplier)
            return self._output(State.MASTERED, interval, self._raise(ease), now)
        return self._hold(schedule_input, ease, now)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolve_ease(self, ease_factor: float | None) -> float:
        if not ease_factor:
            # None or the legacy 0 sentinel
            return self._config.initial_ease_factor
        return self._clamp(ease_factor)

    def _clamp(self, ease: float) -> float:
        return max(self._config.min_ease_factor, min(self._config.max_ease_factor, ease))

    def _lower(self, ease: float) -> float:
        return self._clamp(ease - self._config.ease_decrement)

    def _raise(self, ease: float) -> float:
        return self._clamp(ease + self._config.ease_increment)

    @staticmethod
    def _grow(interval: int, ease: float, bonus: float = 1.0) -> int:
        """Multiply the interval, never by less than one extra day."""
        return max(round_half_away(interval * ease * bonus), interval + 1)

    def _review_or_mastered(self, interval: int) -> State:
        if interval >= self._config.mastered_threshold:
            return State.MASTERED
        return State.REVIEW

    def _relearn(self, ease: float, now: datetime) -> ScheduleOutput:
        return self._output(
            State.RELEARNING, self._config.graduating_interval, self._lower(ease), now
        )

    def _hold(self, schedule_input: ScheduleInput, ease: float, now: datetime) -> ScheduleOutput:
        """No-op transition for ratings outside the Rating enum."""
        return self._output(schedule_input.state, schedule_input.interval, ease, now)

    @staticmethod
    def _output(state: State, interval: int, ease: float, now: datetime) -> ScheduleOutput:
        # Calendar days: timedelta on an aware datetime keeps the wall-clock time.
        return ScheduleOutput(
            state=state,
            interval=interval,
            ease_factor=ease,
            due_at=now + timedelta(days=interval),
        )
