"""alertfmt command line interface.

Commands:
    render    Render an annotation template for a single alert
    humanize  Format a raw value the way templates do
    validate  Validate the annotation templates in a config file
"""

import typer

from alertfmt.cli_utils import _setup_logging
from alertfmt.commands.humanize import humanize_command
from alertfmt.commands.render import render_command
from alertfmt.commands.validate import validate_command

app = typer.Typer(
    name="alertfmt",
    help="Template helpers for human-readable alert notifications",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Template helpers for human-readable alert notifications."""
    _setup_logging(verbose)


app.command(name="render")(render_command)
app.command(name="humanize")(humanize_command)
app.command(name="validate")(validate_command)
