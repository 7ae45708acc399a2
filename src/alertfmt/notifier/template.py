"""Annotation templating on top of the template function table.

Annotations are Jinja2 templates rendered as plain text. Besides the
template functions, each render sees:

- ``alert``: the AlertTplData being rendered (``alert.value``, ``alert.labels``)
- ``labels``: shortcut for ``alert.labels``
- ``expr``: shortcut for ``alert.expr``

Example:
    >>> data = AlertTplData(labels={"instance": "db-1"}, value=0.93, expr="disk_used")
    >>> template_annotations(
    ...     {"summary": "{{ labels.instance }} disk at {{ humanizePercentage(alert.value) }}"},
    ...     data,
    ... )
    {'summary': 'db-1 disk at 93%'}

"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from jinja2 import Environment, TemplateSyntaxError, meta
from pydantic import BaseModel, ConfigDict, Field

from alertfmt.core.exceptions import TemplateRenderError
from alertfmt.notifier.datasource import QueryFn
from alertfmt.notifier.template_func import FuncMap, funcs_with_query, get_template_funcs

logger = logging.getLogger(__name__)

# Names every render provides in addition to the template functions
DATA_NAMES: frozenset[str] = frozenset({"alert", "labels", "expr"})

# Text output; safeHtml results pass through unchanged either way
_env = Environment(autoescape=False, keep_trailing_newline=True)


class AlertTplData(BaseModel):
    """Alert data available to annotation templates.

    Attributes:
        labels: Alert labels.
        value: Value of the sample that triggered the alert.
        expr: Query expression of the alerting rule.

    """

    model_config = ConfigDict(frozen=True)

    labels: dict[str, str] = Field(default_factory=dict)
    value: float = 0.0
    expr: str = ""


def render_template(text: str, data: AlertTplData, funcs: FuncMap) -> str:
    """Render a single template string.

    Exceptions raised by template functions, including the query binding,
    propagate unchanged.

    Args:
        text: Jinja2 template source.
        data: Alert data for the render.
        funcs: Function table to expose to the template.

    Returns:
        Rendered text.

    """
    template = _env.from_string(text)
    return template.render(
        **funcs,
        alert=data,
        labels=data.labels,
        expr=data.expr,
    )


def template_annotations(
    annotations: Mapping[str, str],
    data: AlertTplData,
    query_fn: QueryFn | None = None,
) -> dict[str, str]:
    """Render every annotation for one alert.

    A single derived function table is built for the whole alert. Failures
    do not stop the remaining annotations from rendering; they are
    collected and reported together.

    Args:
        annotations: Annotation templates keyed by name.
        data: Alert data for the render.
        query_fn: Datasource call bound to the query function, or None to
            keep the base registry's placeholder.

    Returns:
        Rendered annotations keyed by name.

    Raises:
        TemplateRenderError: If any annotation failed; ``errors`` maps each
            failing key to its message.

    """
    if query_fn is None:
        funcs: FuncMap = get_template_funcs()
    else:
        funcs = funcs_with_query(query_fn)

    rendered: dict[str, str] = {}
    errors: dict[str, str] = {}
    first_error: Exception | None = None

    for key, text in annotations.items():
        try:
            rendered[key] = render_template(text, data, funcs)
        except Exception as e:
            logger.error("Failed to render annotation: key=%s, error=%s", key, str(e))
            errors[key] = str(e)
            if first_error is None:
                first_error = e

    if errors:
        summary = "; ".join(f"key {k!r}: {msg}" for k, msg in errors.items())
        raise TemplateRenderError(
            f"error templating annotations: {summary}", errors
        ) from first_error

    return rendered


def validate_templates(annotations: Mapping[str, str]) -> None:
    """Check that every annotation parses and only calls known names.

    Validation uses the base registry, so it works before any datasource
    is available.

    Args:
        annotations: Annotation templates keyed by name.

    Raises:
        TemplateRenderError: If any annotation is invalid.

    """
    known = set(get_template_funcs()) | DATA_NAMES | set(_env.globals)
    errors: dict[str, str] = {}

    for key, text in annotations.items():
        try:
            ast = _env.parse(text)
        except TemplateSyntaxError as e:
            errors[key] = f"line {e.lineno}: {e.message}"
            continue
        unknown = sorted(meta.find_undeclared_variables(ast) - known)
        if unknown:
            errors[key] = f"undefined names: {', '.join(unknown)}"

    if errors:
        summary = "; ".join(f"key {k!r}: {msg}" for k, msg in errors.items())
        raise TemplateRenderError(f"invalid annotation templates: {summary}", errors)
