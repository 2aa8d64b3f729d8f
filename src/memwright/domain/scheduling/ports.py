"""
Ports (interfaces) for scheduling algorithms.

Every algorithm family implements this contract. Callers and the dispatch
layer depend on this abstraction, not on concrete schedulers.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import Rating, ScheduleInput, ScheduleOutput


class SchedulingAlgorithm(ABC):
    """
    Port for computing the next review of a card.

    Implementations:
        - SM2Scheduler: SM2-family state machine.

    Implementations must be deterministic and side-effect free: identical
    (schedule_input, rating, now) always yields an identical output, and
    nothing outside the arguments is read or written.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier stored alongside decks and users (e.g. "sm2")."""
        pass

    @abstractmethod
    def schedule(
        self, schedule_input: ScheduleInput, rating: Rating | int, now: datetime
    ) -> ScheduleOutput:
        """
        Compute the next schedule for a card.

        Args:
            schedule_input: Card state before the review.
            rating: The learner's rating.
            now: Review timestamp; due dates are computed from it.

        Returns:
            A freshly constructed ScheduleOutput.
        """
        pass

    def resolve_ease(self, ease_factor: float | None) -> float:
        """
        Ease the algorithm actually starts from for a stored value.

        Algorithms with an initial or bounded ease override this; the default
        returns the stored value, with "unset" as 0.0.
        """
        return ease_factor or 0.0
