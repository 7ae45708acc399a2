"""Humanize command for alertfmt CLI."""

from collections.abc import Callable
from enum import StrEnum

import typer

from alertfmt.cli_utils import EXIT_ERROR, _error, _output
from alertfmt.core.exceptions import TemplateFuncError
from alertfmt.notifier.humanizers import (
    humanize,
    humanize_1024,
    humanize_duration,
    humanize_percentage,
    humanize_timestamp,
)


class HumanizeMode(StrEnum):
    """Formatter to apply."""

    DECIMAL = "decimal"
    BINARY = "binary"
    DURATION = "duration"
    PERCENTAGE = "percentage"
    TIMESTAMP = "timestamp"


FORMATTERS: dict[HumanizeMode, Callable[[float], str]] = {
    HumanizeMode.DECIMAL: humanize,
    HumanizeMode.BINARY: humanize_1024,
    HumanizeMode.DURATION: humanize_duration,
    HumanizeMode.PERCENTAGE: humanize_percentage,
    HumanizeMode.TIMESTAMP: humanize_timestamp,
}


def humanize_command(
    value: float = typer.Argument(
        ...,
        help="Raw value (use -- before negative numbers)",
    ),
    mode: HumanizeMode = typer.Option(
        HumanizeMode.DECIMAL,
        "--mode",
        "-m",
        help="Formatter: decimal, binary, duration, percentage or timestamp",
    ),
) -> None:
    """Format a raw value the way notification templates do.

    Examples:
        alertfmt humanize 1500                 # 1.5k
        alertfmt humanize 1048576 -m binary    # 1Mi
        alertfmt humanize -- -65 -m duration   # -1m 5s

    """
    try:
        _output(FORMATTERS[mode](value))
    except TemplateFuncError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None
