"""Millisecond tick time for alertfmt.

Time is the number of milliseconds since the epoch (1970-01-01 00:00 UTC),
excluding leap seconds. The tick size is fixed at one millisecond; anything
finer is truncated toward zero on the way in.

Usage:
    from alertfmt.core.timing import Time, format_verbose

    t = Time.from_unix_nano(1_700_000_000_123_456_789)
    format_verbose(t.to_datetime())  # '2023-11-14 22:13:20.123 +0000 UTC'
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

# Minimum supported time resolution
NANOS_PER_TICK = 1_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Time(int):
    """Signed count of one-millisecond ticks since the Unix epoch."""

    __slots__ = ()

    @classmethod
    def from_unix_nano(cls, nanos: int) -> Time:
        """Return the Time equivalent to a Unix time in nanoseconds.

        Args:
            nanos: Nanoseconds since the epoch.

        Returns:
            Tick time, truncated toward zero.

        """
        return cls(_trunc_div(nanos, NANOS_PER_TICK))

    def to_datetime(self) -> datetime:
        """Return the aware UTC datetime for this tick.

        Raises:
            OverflowError: If the instant is outside the datetime range.

        """
        return EPOCH + timedelta(milliseconds=int(self))

    def __repr__(self) -> str:
        return f"Time({int(self)})"


def format_verbose(dt: datetime) -> str:
    """Format a UTC datetime in the verbose timestamp form.

    The layout is ``YYYY-MM-DD HH:MM:SS[.fraction] +0000 UTC``. The fraction
    is printed only when non-zero and has its trailing zeros removed.

    Args:
        dt: Datetime to format (converted to UTC if aware, taken as UTC if naive).

    Returns:
        Verbose timestamp string.

    Examples:
        >>> format_verbose(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
        '2024-01-02 03:04:05 +0000 UTC'
        >>> format_verbose(datetime(2024, 1, 2, 3, 4, 5, 500_000, tzinfo=UTC))
        '2024-01-02 03:04:05.5 +0000 UTC'

    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    text = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    fraction = f"{dt.microsecond:06d}".rstrip("0")
    if fraction:
        text += "." + fraction
    return text + " +0000 UTC"
