"""Human-readable formatting of raw metric values for alert templates.

Every formatter renders its mantissa with four significant digits using
``%.4g`` semantics, so the output is identical across implementations:

    >>> humanize(1500)
    '1.5k'
    >>> humanize(0.0015)
    '1.5m'
    >>> humanize_1024(1024)
    '1ki'
    >>> humanize_duration(90061)
    '1d 1h 1m 1s'
    >>> humanize_duration(0.5)
    '500ms'
    >>> humanize_percentage(0.5)
    '50%'

NaN and infinities are never errors: they render as ``NaN``, ``+Inf`` and
``-Inf``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from alertfmt.core.exceptions import TemplateFuncError
from alertfmt.core.timing import Time, format_verbose

DECIMAL_BASE = 1000
BINARY_BASE = 1024

DECIMAL_PREFIXES: tuple[str, ...] = ("k", "M", "G", "T", "P", "E", "Z", "Y")
FRACTION_PREFIXES: tuple[str, ...] = ("m", "u", "n", "p", "f", "a", "z", "y")
BINARY_PREFIXES: tuple[str, ...] = ("ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 60 * _SECONDS_PER_MINUTE
_SECONDS_PER_DAY = 24 * _SECONDS_PER_HOUR


def format_float(v: float) -> str:
    """Format a float with four significant digits.

    Args:
        v: Value to format.

    Returns:
        ``%.4g`` rendering, with ``NaN``, ``+Inf`` and ``-Inf`` for
        non-finite values.

    Examples:
        >>> format_float(1234567)
        '1.235e+06'
        >>> format_float(float("inf"))
        '+Inf'

    """
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    return "%.4g" % v


def _is_special(v: float) -> bool:
    return math.isnan(v) or math.isinf(v)


def scale(value: float, base: int, prefixes: Sequence[str]) -> tuple[float, str]:
    """Divide value by base while its magnitude is at least base.

    Each division advances one prefix. Scaling stops at the first prefix
    where ``|value| < base`` or when prefixes run out.

    Args:
        value: Value to scale.
        base: 1000 for metric prefixes, 1024 for binary prefixes.
        prefixes: Prefixes in increasing order of magnitude.

    Returns:
        Tuple of (scaled value, prefix); prefix is "" when no scaling happened.

    """
    prefix = ""
    for p in prefixes:
        if abs(value) < base:
            break
        prefix = p
        value /= base
    return value, prefix


def scale_fraction(value: float, base: int, prefixes: Sequence[str]) -> tuple[float, str]:
    """Multiply value by base while its magnitude is below one.

    Args:
        value: Value to scale, expected to satisfy ``0 < |value| < 1``.
        base: Multiplier per step.
        prefixes: Prefixes in decreasing order of magnitude.

    Returns:
        Tuple of (scaled value, prefix).

    """
    prefix = ""
    for p in prefixes:
        if abs(value) >= 1:
            break
        prefix = p
        value *= base
    return value, prefix


def humanize(v: float) -> str:
    """Format a value with metric (base 1000) prefixes.

    Zero, NaN and infinities are returned without a prefix.
    """
    if v == 0 or _is_special(v):
        return format_float(v)
    if abs(v) >= 1:
        v, prefix = scale(v, DECIMAL_BASE, DECIMAL_PREFIXES)
    else:
        v, prefix = scale_fraction(v, DECIMAL_BASE, FRACTION_PREFIXES)
    return format_float(v) + prefix


def humanize_1024(v: float) -> str:
    """Format a value with binary (base 1024) prefixes.

    Values with ``|v| <= 1`` are returned without a prefix.
    """
    if abs(v) <= 1 or _is_special(v):
        return format_float(v)
    v, prefix = scale(v, BINARY_BASE, BINARY_PREFIXES)
    return format_float(v) + prefix


def humanize_duration(v: float) -> str:
    """Format a duration in seconds.

    Durations of a minute or more are split into whole days, hours, minutes
    and seconds, starting at the largest non-zero unit. Shorter durations
    keep four significant digits, and sub-second ones get a metric prefix.

    Args:
        v: Duration in seconds. Negative values are prefixed with "-".

    Returns:
        Human-readable duration.

    Examples:
        >>> humanize_duration(0)
        '0s'
        >>> humanize_duration(-65)
        '-1m 5s'
        >>> humanize_duration(3.14159)
        '3.142s'

    """
    if _is_special(v):
        return format_float(v)
    if v == 0:
        return format_float(v) + "s"

    if abs(v) >= 1:
        sign = ""
        if v < 0:
            sign = "-"
            v = -v
        total = int(v)
        seconds = total % _SECONDS_PER_MINUTE
        minutes = (total // _SECONDS_PER_MINUTE) % 60
        hours = (total // _SECONDS_PER_HOUR) % 24
        days = total // _SECONDS_PER_DAY
        # Days to minutes show whole seconds
        if days != 0:
            return f"{sign}{days}d {hours}h {minutes}m {seconds}s"
        if hours != 0:
            return f"{sign}{hours}h {minutes}m {seconds}s"
        if minutes != 0:
            return f"{sign}{minutes}m {seconds}s"
        return f"{sign}{format_float(v)}s"

    v, prefix = scale_fraction(v, DECIMAL_BASE, FRACTION_PREFIXES)
    return f"{format_float(v)}{prefix}s"


def humanize_percentage(v: float) -> str:
    """Format a ratio as a percentage, e.g. 0.5 -> '50%'."""
    return format_float(v * 100) + "%"


def humanize_timestamp(v: float) -> str:
    """Format Unix seconds as a verbose UTC timestamp.

    The instant is truncated to millisecond ticks before formatting.

    Args:
        v: Seconds since the epoch.

    Returns:
        Timestamp such as ``2023-11-14 22:13:20.5 +0000 UTC``; NaN and
        infinities are formatted as numbers.

    Raises:
        TemplateFuncError: If the instant cannot be represented.

    """
    if _is_special(v):
        return format_float(v)
    tick = Time.from_unix_nano(int(v * 1e9))
    try:
        dt = tick.to_datetime()
    except OverflowError as e:
        raise TemplateFuncError(f"humanizeTimestamp: timestamp {v!r} out of range") from e
    return format_verbose(dt)
