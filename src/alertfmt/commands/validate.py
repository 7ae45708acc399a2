"""Validate command for alertfmt CLI.

Loads a YAML config and checks its annotation templates against the base
function registry.
"""

from pathlib import Path

import typer

from alertfmt.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    _error,
    _success,
)
from alertfmt.core.config import load_config
from alertfmt.core.exceptions import ConfigError, TemplateRenderError
from alertfmt.notifier.template import validate_templates
from alertfmt.notifier.template_func import init_template_funcs


def validate_command(
    config_path: Path = typer.Argument(
        ...,
        help="Path to alertfmt YAML config",
    ),
) -> None:
    """Validate the annotation templates in a config file."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    init_template_funcs(config.external_url)

    try:
        validate_templates(config.annotations)
    except TemplateRenderError as e:
        for key, msg in e.errors.items():
            _error(f"{key}: {msg}")
        raise typer.Exit(code=EXIT_ERROR) from None

    _success(f"{len(config.annotations)} annotation template(s) valid")
