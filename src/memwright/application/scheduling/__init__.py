# Application Scheduling Package
from .dispatch import (
    ALGORITHMS,
    available_algorithms,
    get_algorithm,
    resolve_algorithm_name,
    schedule,
)
from .options import SRSOptions
from .review import ReviewOutcome, is_lapse, record_review
from .sm2 import SM2Config, SM2Scheduler

__all__ = [
    "ALGORITHMS",
    "available_algorithms",
    "get_algorithm",
    "resolve_algorithm_name",
    "schedule",
    "SRSOptions",
    "ReviewOutcome",
    "is_lapse",
    "record_review",
    "SM2Config",
    "SM2Scheduler",
]
