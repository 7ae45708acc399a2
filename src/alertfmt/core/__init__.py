"""Core module for alertfmt configuration, errors and time handling.

This module provides:
- Configuration models (Config, ExternalURLConfig)
- File-based configuration loading via load_config()
- Custom exception hierarchy with AlertFmtError as base
- Millisecond tick time via Time
"""

from alertfmt.core.config import (
    ENV_EXTERNAL_URL,
    MAX_CONFIG_SIZE,
    Config,
    ExternalURLConfig,
    load_config,
)
from alertfmt.core.exceptions import (
    AlertFmtError,
    ConfigError,
    EmptyInputError,
    PatternError,
    TemplateFuncError,
    TemplateFuncsNotInitializedError,
    TemplateRenderError,
)
from alertfmt.core.timing import Time

__all__ = [
    # Config constants
    "ENV_EXTERNAL_URL",
    "MAX_CONFIG_SIZE",
    # Config models
    "Config",
    "ExternalURLConfig",
    # Config functions
    "load_config",
    # Exceptions
    "AlertFmtError",
    "ConfigError",
    "EmptyInputError",
    "PatternError",
    "TemplateFuncError",
    "TemplateFuncsNotInitializedError",
    "TemplateRenderError",
    # Time
    "Time",
]
