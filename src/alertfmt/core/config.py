"""Configuration models and loading for alertfmt.

Usage:
    from alertfmt.core.config import load_config

    config = load_config(Path("alertfmt.yaml"))
    config.external_url.path  # '/prefix/'

Example YAML:
    external_url: https://alerts.example.com/prefix/
    annotations:
      summary: "Disk usage is {{ humanizePercentage(value) }}"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from alertfmt.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Environment variable overriding external_url from the config file
ENV_EXTERNAL_URL = "ALERTFMT_EXTERNAL_URL"

# Maximum config file size in bytes
MAX_CONFIG_SIZE = 1_048_576


class ExternalURLConfig(BaseModel):
    """External-facing base URL used by pathPrefix and externalURL.

    Attributes:
        url: Base URL as configured. Absolute URLs need a scheme and a host;
            a bare path such as ``/alerts/`` is also accepted.

    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="",
        description="External-facing base URL of the alerting service",
    )

    @field_validator("url", mode="after")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the URL parses and normalize its scheme case."""
        try:
            parts = urlsplit(v.strip())
        except ValueError as e:
            raise ValueError(f"invalid external URL {v!r}: {e}") from e
        if parts.scheme and not parts.netloc:
            raise ValueError(f"invalid external URL {v!r}: missing host")
        if parts.netloc and not parts.scheme:
            raise ValueError(f"invalid external URL {v!r}: missing scheme")
        return urlunsplit(parts)

    @property
    def path(self) -> str:
        """Decoded path component of the URL."""
        return unquote(urlsplit(self.url).path)

    @property
    def full(self) -> str:
        """URL in its full string form."""
        return self.url


class Config(BaseModel):
    """Top-level alertfmt configuration.

    Attributes:
        external_url: External-facing base URL.
        annotations: Annotation templates keyed by annotation name.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    external_url: ExternalURLConfig = Field(default_factory=ExternalURLConfig)
    annotations: dict[str, str] = Field(
        default_factory=dict,
        description="Annotation templates rendered per alert",
    )

    @field_validator("external_url", mode="before")
    @classmethod
    def coerce_external_url(cls, v: Any) -> Any:
        """Accept a plain string in place of the nested model."""
        if isinstance(v, str):
            return {"url": v}
        return v


def load_config(path: Path) -> Config:
    """Load configuration from a YAML file.

    The ALERTFMT_EXTERNAL_URL environment variable, when set, overrides
    the file's external_url.

    Args:
        path: Path to the YAML config file.

    Returns:
        Validated Config.

    Raises:
        ConfigError: If the file is missing, too large, malformed or invalid.

    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    size = path.stat().st_size
    if size > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config file too large: {path} ({size} bytes, max {MAX_CONFIG_SIZE})")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    env_url = os.environ.get(ENV_EXTERNAL_URL)
    if env_url:
        logger.debug("Using external URL from %s", ENV_EXTERNAL_URL)
        raw["external_url"] = env_url

    try:
        config = Config.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config
