"""Metric models returned by the data-query function.

The retrieval subsystem that produces these values lives outside alertfmt;
templates only read them through the first, label and value functions.

Example:
    >>> m = Metric.from_labels({"job": "api"}, value=1.5, timestamp=1700000000)
    >>> m.label("job")
    'api'
    >>> m.label("missing")
    ''

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class Label(BaseModel):
    """Single name/value label pair."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class Metric(BaseModel):
    """Named, labeled numeric observation.

    Frozen so concurrent renders can share instances safely.

    Attributes:
        labels: Label pairs in the order the datasource returned them.
        timestamp: Unix timestamp of the sample, in seconds.
        value: Sample value.

    """

    model_config = ConfigDict(frozen=True)

    labels: tuple[Label, ...] = Field(default_factory=tuple)
    timestamp: int = 0
    value: float = 0.0

    @classmethod
    def from_labels(
        cls, labels: Mapping[str, str], value: float = 0.0, timestamp: int = 0
    ) -> Metric:
        """Build a Metric from a name-to-value mapping."""
        return cls(
            labels=tuple(Label(name=k, value=v) for k, v in labels.items()),
            timestamp=timestamp,
            value=value,
        )

    def label(self, name: str) -> str:
        """Return the value of the named label, or an empty string if absent."""
        for lbl in self.labels:
            if lbl.name == name:
                return lbl.value
        return ""


# Wraps a datasource call into a simple-to-use function for templates.
# May raise; errors propagate unchanged to the render.
QueryFn: TypeAlias = Callable[[str], Sequence[Metric]]
