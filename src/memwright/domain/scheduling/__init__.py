# Domain Scheduling Package
from .errors import (
    InvalidConfigError,
    InvalidRatingError,
    InvalidStateError,
    SchedulingValidationError,
    UnknownAlgorithmError,
)
from .models import Rating, ReviewLogEntry, ScheduleInput, ScheduleOutput, State
from .ports import SchedulingAlgorithm

__all__ = [
    "Rating",
    "State",
    "ScheduleInput",
    "ScheduleOutput",
    "ReviewLogEntry",
    "SchedulingAlgorithm",
    "SchedulingValidationError",
    "InvalidStateError",
    "InvalidRatingError",
    "InvalidConfigError",
    "UnknownAlgorithmError",
]
