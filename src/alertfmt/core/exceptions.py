"""Exception hierarchy for alertfmt.

All package-specific exceptions inherit from AlertFmtError so callers can
catch every library failure with a single except clause.

Numeric edge cases (NaN, infinities, zero) are not errors: each formatter
renders them deterministically. Exceptions raised by a caller-supplied
query function are never wrapped and propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping


class AlertFmtError(Exception):
    """Base exception for alertfmt."""

    pass


class ConfigError(AlertFmtError):
    """Configuration error.

    Raised when:
    - Config file is missing or unreadable
    - YAML is malformed or its root is not a mapping
    - External URL is not a valid URL
    """

    pass


class TemplateFuncError(AlertFmtError):
    """Invalid input passed to a template function.

    Aborts the render that called the function.
    """

    pass


class PatternError(TemplateFuncError):
    """Regular expression passed to reReplaceAll or match does not compile.

    Attributes:
        pattern: The offending pattern text.

    """

    def __init__(self, message: str, pattern: str) -> None:
        """Initialize PatternError with the offending pattern.

        Args:
            message: Human-readable error message.
            pattern: Pattern that failed to compile.

        """
        super().__init__(message)
        self.pattern = pattern


class EmptyInputError(TemplateFuncError):
    """Template function received an empty sequence where one element is required."""

    pass


class TemplateFuncsNotInitializedError(AlertFmtError):
    """Base function registry requested before init_template_funcs() was called."""

    pass


class TemplateRenderError(AlertFmtError):
    """One or more annotation templates failed to render or parse.

    Attributes:
        errors: Mapping of annotation key to the error message for that key.

    """

    def __init__(self, message: str, errors: Mapping[str, str] | None = None) -> None:
        """Initialize TemplateRenderError with per-key failures.

        Args:
            message: Human-readable error message.
            errors: Annotation key to error message.

        """
        super().__init__(message)
        self.errors = dict(errors or {})
