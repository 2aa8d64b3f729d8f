"""
Validation errors raised at the scheduling boundary.

The engine itself never raises; these are reported by the code that turns
persisted or user-supplied values into engine inputs.
"""


class SchedulingValidationError(ValueError):
    """Base class for rejected scheduling inputs."""


class InvalidStateError(SchedulingValidationError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unknown schedule state: {value!r}")


class InvalidRatingError(SchedulingValidationError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Rating must be 1 (wrong), 2 (correct) or 3 (easy), got {value!r}")


class InvalidConfigError(SchedulingValidationError):
    """Scheduling configuration is missing, malformed or out of range."""


class UnknownAlgorithmError(SchedulingValidationError):
    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown scheduling algorithm {name!r}. Available: {', '.join(available) or 'none'}"
        )
