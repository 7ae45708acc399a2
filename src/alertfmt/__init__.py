"""alertfmt - template helper functions for human-readable alert notifications."""

from importlib.metadata import version

try:
    __version__ = version("alertfmt")
except Exception:
    __version__ = "0.0.0-dev"
