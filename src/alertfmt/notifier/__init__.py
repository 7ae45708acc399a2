"""Notifier module: template functions and annotation rendering.

This module provides:
- Humanizing formatters for raw metric values
- The base template function registry and per-render derived tables
- Jinja2 annotation rendering and validation
"""

from alertfmt.notifier.datasource import Label, Metric, QueryFn
from alertfmt.notifier.humanizers import (
    format_float,
    humanize,
    humanize_1024,
    humanize_duration,
    humanize_percentage,
    humanize_timestamp,
    scale,
    scale_fraction,
)
from alertfmt.notifier.template import (
    AlertTplData,
    render_template,
    template_annotations,
    validate_templates,
)
from alertfmt.notifier.template_func import (
    FuncMap,
    funcs_with_query,
    get_template_funcs,
    init_template_funcs,
    new_template_funcs,
    reset_template_funcs,
)

__all__ = [
    # Datasource models
    "Label",
    "Metric",
    "QueryFn",
    # Formatters
    "format_float",
    "humanize",
    "humanize_1024",
    "humanize_duration",
    "humanize_percentage",
    "humanize_timestamp",
    "scale",
    "scale_fraction",
    # Function table
    "FuncMap",
    "funcs_with_query",
    "get_template_funcs",
    "init_template_funcs",
    "new_template_funcs",
    "reset_template_funcs",
    # Templating
    "AlertTplData",
    "render_template",
    "template_annotations",
    "validate_templates",
]
