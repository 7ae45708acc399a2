"""Render command for alertfmt CLI.

Renders one annotation template against alert data given on the command
line. No datasource is attached, so query() returns no metrics.
"""

import typer

from alertfmt.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    _error,
    _output,
)
from alertfmt.core.exceptions import ConfigError, TemplateRenderError
from alertfmt.notifier.template import AlertTplData, template_annotations
from alertfmt.notifier.template_func import init_template_funcs


def _parse_labels(pairs: list[str]) -> dict[str, str]:
    """Parse name=value label pairs.

    Raises:
        typer.Exit: If a pair has no "=" or an empty name.

    """
    labels: dict[str, str] = {}
    for pair in pairs:
        name, sep, val = pair.partition("=")
        if not sep or not name:
            _error(f"Invalid label {pair!r}, expected name=value")
            raise typer.Exit(code=EXIT_ERROR)
        labels[name] = val
    return labels


def render_command(
    template: str = typer.Argument(
        ...,
        help="Jinja2 template text to render",
    ),
    external_url: str = typer.Option(
        "",
        "--external-url",
        "-u",
        help="External-facing base URL reported by externalURL()/pathPrefix()",
    ),
    label: list[str] = typer.Option(
        [],
        "--label",
        "-l",
        help="Alert label as name=value (repeatable)",
    ),
    value: float = typer.Option(
        0.0,
        "--value",
        help="Alert value",
    ),
    expr: str = typer.Option(
        "",
        "--expr",
        help="Alerting rule expression",
    ),
) -> None:
    """Render an annotation template for a single alert.

    Examples:
        alertfmt render '{{ humanize(alert.value) }}' --value 1500
        alertfmt render '{{ externalURL() }}' -u https://host/prefix/

    """
    labels = _parse_labels(label)

    try:
        init_template_funcs(external_url)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    data = AlertTplData(labels=labels, value=value, expr=expr)
    try:
        rendered = template_annotations({"template": template}, data)
    except TemplateRenderError as e:
        for msg in e.errors.values():
            _error(msg)
        raise typer.Exit(code=EXIT_ERROR) from None

    _output(rendered["template"])
