"""
Row codecs for persisted schedules, review logs and deck options.

This is the validation boundary: malformed states, ratings and deck
configuration are rejected here, before the engine ever sees them.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from memwright.application.scheduling.options import SRSOptions
from memwright.domain.scheduling.errors import (
    InvalidConfigError,
    InvalidRatingError,
    InvalidStateError,
    SchedulingValidationError,
)
from memwright.domain.scheduling.models import (
    Rating,
    ReviewLogEntry,
    ScheduleInput,
    ScheduleOutput,
    State,
)

logger = logging.getLogger(__name__)


def parse_state(value: Any) -> State:
    """Parse a persisted state string (case-insensitive)."""
    if isinstance(value, State):
        return value
    if not isinstance(value, str):
        raise InvalidStateError(value)
    try:
        return State(value.strip().lower())
    except ValueError:
        raise InvalidStateError(value) from None


def parse_rating(value: Any) -> Rating:
    """
    Parse a rating from an int, a numeric string or a name ("wrong", "correct", "easy").
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, bool):
        raise InvalidRatingError(value)
    if isinstance(value, str):
        text = value.strip()
        if text.upper() in Rating.__members__:
            return Rating[text.upper()]
        if not (text.isascii() and text.isdigit()):
            raise InvalidRatingError(value)
        value = int(text)
    if not isinstance(value, int):
        raise InvalidRatingError(value)
    try:
        return Rating(value)
    except ValueError:
        raise InvalidRatingError(value) from None


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise SchedulingValidationError(f"Unparseable timestamp: {value!r}") from None
    raise SchedulingValidationError(f"Unsupported timestamp type: {type(value).__name__}")


def _parse_count(row: Mapping[str, Any], column: str) -> int:
    """Non-negative whole number; missing or empty reads as 0."""
    value = row.get(column)
    if value is None or value == "":
        return 0
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise SchedulingValidationError(f"Column {column!r} must be a whole number, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise SchedulingValidationError(
            f"Column {column!r} must be a whole number, got {value!r}"
        ) from None
    if number < 0:
        raise SchedulingValidationError(f"Column {column!r} must not be negative, got {number}")
    return number


def _parse_ease(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise SchedulingValidationError(f"Column 'ease_factor' must be a number, got {value!r}")
    try:
        ease = float(value)
    except (TypeError, ValueError):
        raise SchedulingValidationError(
            f"Column 'ease_factor' must be a number, got {value!r}"
        ) from None
    if not math.isfinite(ease) or ease < 0:
        raise SchedulingValidationError(f"Column 'ease_factor' out of range: {value!r}")
    # 0 is the legacy "unset" sentinel
    return ease or None


def schedule_input_from_row(row: Mapping[str, Any]) -> ScheduleInput:
    """
    Project a persisted card-schedule row into engine input.

    Missing counters default to 0; a missing or zero ease becomes None ("unset").

    Raises:
        SchedulingValidationError: On an unknown state, a non-numeric or
            negative interval, ease or counter, or an unparseable timestamp.
    """
    return ScheduleInput(
        state=parse_state(row.get("state")),
        interval=_parse_count(row, "interval"),
        ease_factor=_parse_ease(row.get("ease_factor")),
        review_count=_parse_count(row, "review_count"),
        lapse_count=_parse_count(row, "lapse_count"),
        last_reviewed_at=_parse_timestamp(row.get("last_reviewed_at")),
    )


def schedule_output_to_row(output: ScheduleOutput) -> dict[str, Any]:
    """Columns of the schedule row overwritten after a review."""
    return {
        "state": output.state.value,
        "interval": output.interval,
        "ease_factor": output.ease_factor,
        "due_at": output.due_at,
    }


def review_log_to_row(entry: ReviewLogEntry) -> dict[str, Any]:
    return {
        "rating": entry.rating,
        "previous_state": entry.previous_state.value,
        "new_state": entry.new_state.value,
        "previous_ease": entry.previous_ease,
        "new_ease": entry.new_ease,
        "previous_interval": entry.previous_interval,
        "new_interval": entry.new_interval,
        "review_duration": entry.review_duration_ms,
        "reviewed_at": entry.reviewed_at,
    }


def load_srs_options(value: Any) -> SRSOptions:
    """
    Decode a deck's stored scheduling options column.

    NULL and non-text payloads decode to empty options; text or bytes must be
    a JSON object.

    Raises:
        InvalidConfigError: On malformed JSON or out-of-range values.
    """
    if value is None:
        return SRSOptions()
    if not isinstance(value, (bytes, bytearray, str)):
        logger.debug(f"Ignoring non-text srs options payload of type {type(value).__name__}")
        return SRSOptions()
    try:
        return SRSOptions.model_validate_json(value)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid deck scheduling options: {e}") from e


def dump_srs_options(options: SRSOptions) -> bytes | None:
    """Encode deck scheduling options; empty options are stored as NULL."""
    if options.is_empty:
        return None
    return options.model_dump_json(exclude_none=True).encode("utf-8")
