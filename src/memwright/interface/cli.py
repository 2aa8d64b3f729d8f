"""memwright CLI: compute schedules and inspect configuration."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from memwright.application.config import AppConfig, resolve_config
from memwright.application.scheduling import (
    available_algorithms,
    get_algorithm,
    record_review,
    resolve_algorithm_name,
)
from memwright.domain.scheduling.errors import SchedulingValidationError
from memwright.domain.scheduling.models import ScheduleInput
from memwright.infrastructure.codec import (
    load_srs_options,
    parse_rating,
    parse_state,
    review_log_to_row,
    schedule_output_to_row,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="memwright: spaced-repetition scheduling engine.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage memwright configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _apply_verbosity(verbose: int) -> None:
    level = logging.WARNING if verbose <= 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.getLogger("memwright").setLevel(level)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only log warnings and errors.")
    ] = False,
):
    """Global settings for memwright."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    ctx.obj["quiet"] = quiet


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config(ctx: typer.Context) -> AppConfig:
    """Resolve configuration and apply its log level; invalid config exits with code 2."""
    obj = ctx.obj or {}
    try:
        config = resolve_config()
    except SchedulingValidationError as e:
        raise _fail(str(e))

    if obj.get("quiet"):
        _apply_verbosity(0)
    else:
        _apply_verbosity(config.verbose + obj.get("verbose_bonus", 0))
    return config


def _parse_now(value: str | None, config: AppConfig) -> datetime:
    try:
        tz = ZoneInfo(config.timezone)
    except ZoneInfoNotFoundError:
        logger.warning(f"Unknown timezone {config.timezone!r}, falling back to UTC")
        tz = timezone.utc

    if value is None:
        return datetime.now(tz)

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise SchedulingValidationError(f"Invalid --now timestamp: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _fail(message: str) -> typer.Exit:
    typer.secho(f"Error: {message}", fg="red", err=True)
    return typer.Exit(2)


def _jsonable(row: dict) -> dict:
    return {k: v.isoformat() if isinstance(v, datetime) else v for k, v in row.items()}


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def schedule(
    ctx: typer.Context,
    state: Annotated[
        str, typer.Option(help="Current state: new, learning, review, relearning, mastered.")
    ] = "new",
    rating: Annotated[str, typer.Option(help="Rating: 1/wrong, 2/correct, 3/easy.")] = "correct",
    interval: Annotated[int, typer.Option(min=0, help="Current interval in days.")] = 0,
    ease: Annotated[
        float | None, typer.Option(help="Current ease factor. Omit (or 0) for the initial ease.")
    ] = None,
    review_count: Annotated[int, typer.Option(min=0, help="Reviews recorded so far.")] = 0,
    lapse_count: Annotated[int, typer.Option(min=0, help="Lapses recorded so far.")] = 0,
    now: Annotated[
        str | None, typer.Option(help="Review time (ISO 8601). Defaults to the current time.")
    ] = None,
    algorithm: Annotated[
        str | None, typer.Option(help="Algorithm identifier. Defaults to config.")
    ] = None,
    deck_config: Annotated[
        Path | None,
        typer.Option("--config", help="JSON file with the deck's scheduling options."),
    ] = None,
    show_log: Annotated[
        bool, typer.Option("--log", help="Include the review-log record in the output.")
    ] = False,
):
    """Compute the next schedule for one card and print it as JSON."""
    config = _load_config(ctx)

    try:
        options = config.fallback_options()
        if deck_config is not None:
            options = load_srs_options(deck_config.read_bytes()).merged(options)

        scheduler = get_algorithm(
            resolve_algorithm_name(algorithm, default=config.default_algorithm), options
        )
        schedule_input = ScheduleInput(
            state=parse_state(state),
            interval=interval,
            ease_factor=ease or None,
            review_count=review_count,
            lapse_count=lapse_count,
        )
        outcome = record_review(
            scheduler, schedule_input, parse_rating(rating), _parse_now(now, config)
        )
    except SchedulingValidationError as e:
        raise _fail(str(e))
    except OSError as e:
        raise _fail(f"Cannot read {deck_config}: {e}")

    result = _jsonable(schedule_output_to_row(outcome.output))
    result["review_count"] = outcome.review_count
    result["lapse_count"] = outcome.lapse_count
    if show_log:
        result["log"] = _jsonable(review_log_to_row(outcome.log))

    typer.echo(json.dumps(result, indent=2))


@app.command()
def algorithms(ctx: typer.Context):
    """List registered scheduling algorithms."""
    config = _load_config(ctx)
    for name in available_algorithms():
        marker = " (default)" if name == config.default_algorithm else ""
        typer.echo(f"{name}{marker}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _load_config(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))
