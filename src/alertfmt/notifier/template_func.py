"""Template helper functions for alert notification rendering.

The base registry is built once by init_template_funcs() from the external
URL and never modified afterwards; every render gets its own derived table
from funcs_with_query(), which overlays the render's query binding. Renders
running in parallel therefore share only read-only state.

Example:
    >>> from alertfmt.notifier import init_template_funcs, funcs_with_query
    >>> _ = init_template_funcs("https://alerts.example.com/prefix/")
    >>> funcs = funcs_with_query(datasource.query)
    >>> funcs["humanize"](1500)
    '1.5k'

"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any, TypeAlias
from urllib.parse import quote, quote_plus

from markupsafe import Markup
from pydantic import ValidationError

from alertfmt.core.config import ExternalURLConfig
from alertfmt.core.exceptions import (
    ConfigError,
    EmptyInputError,
    PatternError,
    TemplateFuncsNotInitializedError,
)
from alertfmt.notifier.datasource import Metric, QueryFn
from alertfmt.notifier.humanizers import (
    humanize,
    humanize_1024,
    humanize_duration,
    humanize_percentage,
    humanize_timestamp,
)

logger = logging.getLogger(__name__)

FuncMap: TypeAlias = Mapping[str, Callable[..., Any]]

# $$, ${name} and $name references in reReplaceAll replacement strings
_EXPAND_RE = re.compile(r"\$(?:\$|\{(\w+)\}|(\w+))", re.ASCII)


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"invalid regular expression {pattern!r}: {e}", pattern) from e


def _expand(template: str, m: re.Match[str]) -> str:
    """Expand group references in a replacement template.

    Unknown or unmatched groups expand to an empty string; a lone "$"
    that does not start a reference is kept as is.
    """

    def repl(ref: re.Match[str]) -> str:
        if ref.group(0) == "$$":
            return "$"
        name = ref.group(1) or ref.group(2)
        if name.isascii() and name.isdigit():
            index = int(name)
            if index > m.re.groups:
                return ""
            return m.group(index) or ""
        if name in m.re.groupindex:
            return m.group(name) or ""
        return ""

    return _EXPAND_RE.sub(repl, template)


def args(*values: Any) -> dict[str, Any]:
    """Map positional values to keys arg0, arg1, ..."""
    return {f"arg{i}": v for i, v in enumerate(values)}


def re_replace_all(pattern: str, repl: str, text: str) -> str:
    """Replace every match of pattern in text.

    The replacement may reference groups as ``$1``, ``${1}``, ``$name`` or
    ``${name}``; ``$$`` inserts a literal dollar sign. An empty match that
    directly follows another match is not replaced.

    Raises:
        PatternError: If pattern is not a valid regular expression.

    """
    regex = _compile(pattern)
    out = []
    last_end = 0
    for m in regex.finditer(text):
        out.append(text[last_end : m.start()])
        if m.end() > last_end or m.start() == 0:
            out.append(_expand(repl, m))
        last_end = m.end()
    out.append(text[last_end:])
    return "".join(out)


def match(pattern: str, text: str) -> bool:
    """Report whether text contains any match of pattern.

    Raises:
        PatternError: If pattern is not a valid regular expression.

    """
    return _compile(pattern).search(text) is not None


def safe_html(text: str) -> Markup:
    return Markup(text)


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def title(text: str) -> str:
    """Upper-case the first letter of each word, leaving the rest untouched.

    Letters, digits and underscores join words; ASCII punctuation and
    whitespace separate them.

    Examples:
        >>> title("disk usage high")
        'Disk Usage High'
        >>> title("hELLO-world")
        'HELLO-World'

    """
    out = []
    prev = " "
    for ch in text:
        if _is_separator(prev):
            titled = ch.title()
            out.append(titled if len(titled) == 1 else ch)
        else:
            out.append(ch)
        prev = ch
    return "".join(out)


def to_upper(text: str) -> str:
    return text.upper()


def to_lower(text: str) -> str:
    return text.lower()


def path_prefix(config: ExternalURLConfig) -> str:
    """Path component of the configured external URL."""
    return config.path


def external_url(config: ExternalURLConfig) -> str:
    """Configured external URL in full form."""
    return config.full


def path_escape(text: str) -> str:
    """Escape text for use as a URL path segment."""
    return quote(text, safe="$&+:=@")


def query_escape(text: str) -> str:
    """Escape text for use in a URL query; spaces become '+'."""
    return quote_plus(text, safe="")


def crlf_escape(text: str) -> str:
    r"""Replace literal newlines and carriage returns with ``\n`` and ``\r``."""
    return text.replace("\n", r"\n").replace("\r", r"\r")


def quotes_escape(text: str) -> str:
    return text.replace('"', r"\"")


def query_placeholder(q: str) -> list[Metric]:
    """Stand-in query used until a render binds a real datasource.

    Returns no metrics so templates can be validated without a datasource.
    """
    return []


def first(metrics: Sequence[Metric]) -> Metric:
    """Return the first metric.

    Raises:
        EmptyInputError: If metrics is empty.

    """
    if len(metrics) > 0:
        return metrics[0]
    raise EmptyInputError("first() called on vector with no elements")


def label(name: str, metric: Metric) -> str:
    return metric.label(name)


def value(metric: Metric) -> float:
    return metric.value


def new_template_funcs(config: ExternalURLConfig) -> FuncMap:
    """Build a read-only function registry bound to an external URL.

    Args:
        config: External URL the pathPrefix and externalURL entries report.

    Returns:
        Immutable mapping of template function name to callable.

    """
    funcs: dict[str, Callable[..., Any]] = {
        "args": args,
        "reReplaceAll": re_replace_all,
        "safeHtml": safe_html,
        "match": match,
        "title": title,
        "toUpper": to_upper,
        "toLower": to_lower,
        "humanize": humanize,
        "humanize1024": humanize_1024,
        "humanizeDuration": humanize_duration,
        "humanizePercentage": humanize_percentage,
        "humanizeTimestamp": humanize_timestamp,
        "pathPrefix": functools.partial(path_prefix, config),
        "externalURL": functools.partial(external_url, config),
        "pathEscape": path_escape,
        "queryEscape": query_escape,
        "crlfEscape": crlf_escape,
        "quotesEscape": quotes_escape,
        # Replaced per render by funcs_with_query()
        "query": query_placeholder,
        "first": first,
        "label": label,
        "value": value,
    }
    return MappingProxyType(funcs)


# Global base registry
_template_funcs: FuncMap | None = None


def init_template_funcs(url: str | ExternalURLConfig) -> FuncMap:
    """Initialize the global base registry.

    Must be called once at startup, before any render. Calling it again
    rebinds the registry and is unsafe while renders are in flight.

    Args:
        url: External-facing base URL, as a string or validated config.

    Returns:
        The new base registry.

    Raises:
        ConfigError: If url is not a valid URL.

    """
    global _template_funcs

    if isinstance(url, ExternalURLConfig):
        config = url
    else:
        try:
            config = ExternalURLConfig(url=url)
        except ValidationError as e:
            raise ConfigError(f"Invalid external URL {url!r}: {e}") from e

    if _template_funcs is not None:
        logger.warning("Template functions already initialized, re-initializing")

    _template_funcs = new_template_funcs(config)
    logger.info(
        "Template functions initialized with %d entries, external_url=%s",
        len(_template_funcs),
        config.full,
    )
    return _template_funcs


def get_template_funcs() -> FuncMap:
    """Get the global base registry.

    Raises:
        TemplateFuncsNotInitializedError: If init_template_funcs() was not called.

    """
    if _template_funcs is None:
        raise TemplateFuncsNotInitializedError(
            "Template functions not initialized. Call init_template_funcs() first."
        )
    return _template_funcs


def reset_template_funcs() -> None:
    """Reset the global base registry (for testing)."""
    global _template_funcs
    _template_funcs = None


def funcs_with_query(query_fn: QueryFn, base: FuncMap | None = None) -> dict[str, Callable[..., Any]]:
    """Derive a per-render function table with a live query binding.

    The base registry is only read. The returned dict belongs to the caller
    and may be discarded after the render.

    Args:
        query_fn: Datasource call backing the template's query function.
            Its exceptions propagate unchanged.
        base: Registry to derive from; defaults to the global one.

    Returns:
        Copy of base with "query" bound to query_fn.

    """
    if base is None:
        base = get_template_funcs()

    fm = dict(base)

    def query(q: str) -> Sequence[Metric]:
        return query_fn(q)

    fm["query"] = query
    logger.debug("Derived template function table with %d entries", len(fm))
    return fm
