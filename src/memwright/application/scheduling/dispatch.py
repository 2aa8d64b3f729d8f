"""
Scheduler dispatch.

Selects the active scheduling algorithm by the identifier stored on a deck
or user. The registry is the only place that knows about concrete
schedulers; callers only ever see SchedulingAlgorithm.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from memwright.domain import constants
from memwright.domain.scheduling.errors import InvalidConfigError, UnknownAlgorithmError
from memwright.domain.scheduling.models import Rating, ScheduleInput, ScheduleOutput
from memwright.domain.scheduling.ports import SchedulingAlgorithm

from .options import SRSOptions
from .sm2 import SM2Scheduler

logger = logging.getLogger(__name__)

AlgorithmFactory = Callable[[SRSOptions], SchedulingAlgorithm]


def _build_sm2(options: SRSOptions) -> SchedulingAlgorithm:
    if options.sm2 is None:
        raise InvalidConfigError("No sm2 configuration supplied for this deck")
    return SM2Scheduler(options.sm2)


ALGORITHMS: dict[str, AlgorithmFactory] = {
    constants.ALGORITHM_SM2: _build_sm2,
}


def available_algorithms() -> list[str]:
    return sorted(ALGORITHMS)


def _normalize(name: str | None) -> str | None:
    if name is None:
        return None
    name = name.strip().lower()
    return name or None


def resolve_algorithm_name(
    deck_algorithm: str | None,
    user_algorithm: str | None = None,
    default: str = constants.DEFAULT_ALGORITHM,
) -> str:
    """
    Pick the algorithm identifier for a review.

    A deck override wins over the user's preference, which wins over the
    default. Blank strings count as unset.
    """
    return _normalize(deck_algorithm) or _normalize(user_algorithm) or _normalize(default) or ""


def get_algorithm(name: str, options: SRSOptions) -> SchedulingAlgorithm:
    """
    Build the scheduler registered under `name`.

    Raises:
        UnknownAlgorithmError: If no scheduler is registered for `name`.
        InvalidConfigError: If `options` lacks the section the scheduler needs.
    """
    key = _normalize(name) or ""
    factory = ALGORITHMS.get(key)
    if factory is None:
        raise UnknownAlgorithmError(name, available_algorithms())
    return factory(options)


def schedule(
    algorithm: SchedulingAlgorithm,
    schedule_input: ScheduleInput,
    rating: Rating | int,
    now: datetime,
) -> ScheduleOutput:
    """Run one scheduling transition through `algorithm`."""
    if rating not in list(Rating):
        logger.warning(
            f"Rating {rating!r} outside {[int(r) for r in Rating]}; "
            f"{algorithm.name} holds the current schedule"
        )

    output = algorithm.schedule(schedule_input, rating, now)
    logger.debug(
        f"[{algorithm.name}] {schedule_input.state.value}/{schedule_input.interval}d "
        f"-> {output.state.value}/{output.interval}d (ease {output.ease_factor:.2f})"
    )
    return output
