"""Tests for humanizing formatters.

Tests cover:
- Four-significant-digit formatting and non-finite values
- Metric (base 1000) and binary (base 1024) prefix scaling
- Duration decomposition with sign handling
- Percentage and timestamp formatting
"""

import math

import pytest

from alertfmt.core.exceptions import TemplateFuncError
from alertfmt.notifier.humanizers import (
    BINARY_PREFIXES,
    DECIMAL_PREFIXES,
    FRACTION_PREFIXES,
    format_float,
    humanize,
    humanize_1024,
    humanize_duration,
    humanize_percentage,
    humanize_timestamp,
    scale,
    scale_fraction,
)

NAN = float("nan")
INF = float("inf")


class TestFormatFloat:
    """Test %.4g rendering shared by every formatter."""

    def test_rounds_to_four_significant_digits(self) -> None:
        """Test values are rounded to four significant digits."""
        assert format_float(123.456) == "123.5"
        assert format_float(1.23456) == "1.235"

    def test_trailing_zeros_dropped(self) -> None:
        """Test trailing zeros are not printed."""
        assert format_float(1.5) == "1.5"
        assert format_float(1500) == "1500"

    def test_exponent_notation_for_large_and_small(self) -> None:
        """Test exponent form is used outside the fixed-notation range."""
        assert format_float(1234567) == "1.235e+06"
        assert format_float(0.00001234) == "1.234e-05"
        assert format_float(0.0001234) == "0.0001234"

    def test_non_finite_values(self) -> None:
        """Test NaN and infinities render as NaN, +Inf and -Inf."""
        assert format_float(NAN) == "NaN"
        assert format_float(INF) == "+Inf"
        assert format_float(-INF) == "-Inf"

    def test_negative_zero(self) -> None:
        """Test negative zero keeps its sign."""
        assert format_float(-0.0) == "-0"


class TestScale:
    """Test the magnitude scaler."""

    def test_scale_up_one_step(self) -> None:
        """Test one division advances to the first prefix."""
        assert scale(1500, 1000, DECIMAL_PREFIXES) == (1.5, "k")

    def test_scale_below_base_unchanged(self) -> None:
        """Test values below base keep no prefix."""
        assert scale(999, 1000, DECIMAL_PREFIXES) == (999, "")

    def test_scale_stops_when_prefixes_exhausted(self) -> None:
        """Test scaling stops at the last prefix."""
        v, prefix = scale(1e30, 1000, DECIMAL_PREFIXES)
        assert prefix == "Y"
        assert math.isclose(v, 1e6)

    def test_scale_binary(self) -> None:
        """Test binary scaling divides by 1024."""
        assert scale(1024 * 1024, 1024, BINARY_PREFIXES) == (1.0, "Mi")

    def test_scale_fraction(self) -> None:
        """Test fractional values are multiplied up to at least one."""
        assert scale_fraction(0.5, 1000, FRACTION_PREFIXES) == (500.0, "m")


class TestHumanize:
    """Test metric-prefix humanize()."""

    def test_zero(self) -> None:
        """Test zero renders without prefix."""
        assert humanize(0) == "0"

    def test_nan_and_inf(self) -> None:
        """Test non-finite values render without prefix."""
        assert humanize(NAN) == "NaN"
        assert humanize(INF) == "+Inf"
        assert humanize(-INF) == "-Inf"

    def test_kilo(self) -> None:
        """Test 1500 -> 1.5k."""
        assert humanize(1500) == "1.5k"

    def test_milli(self) -> None:
        """Test 0.0015 -> 1.5m."""
        assert humanize(0.0015) == "1.5m"

    def test_exact_boundaries(self) -> None:
        """Test values at the prefix boundaries."""
        assert humanize(1) == "1"
        assert humanize(999) == "999"
        assert humanize(1000) == "1k"

    def test_mega_rounded(self) -> None:
        """Test mantissa keeps four significant digits after scaling."""
        assert humanize(1234567) == "1.235M"

    def test_negative_values(self) -> None:
        """Test scaling uses the magnitude and keeps the sign."""
        assert humanize(-1500) == "-1.5k"
        assert humanize(-0.5) == "-500m"

    def test_micro(self) -> None:
        """Test two fractional steps reach the micro prefix."""
        assert humanize(0.00001) == "10u"

    def test_beyond_largest_prefix(self) -> None:
        """Test values beyond yotta keep the Y prefix."""
        assert humanize(1e30) == "1e+06Y"


class TestHumanize1024:
    """Test binary-prefix humanize_1024()."""

    def test_one_kibi(self) -> None:
        """Test 1024 -> 1ki."""
        assert humanize_1024(1024) == "1ki"

    def test_one_and_below_unprefixed(self) -> None:
        """Test |v| <= 1 renders without prefix."""
        assert humanize_1024(1) == "1"
        assert humanize_1024(0.5) == "0.5"
        assert humanize_1024(-1) == "-1"
        assert humanize_1024(0) == "0"

    def test_below_base_unprefixed(self) -> None:
        """Test values under 1024 render without prefix."""
        assert humanize_1024(1023) == "1023"

    def test_larger_prefixes(self) -> None:
        """Test Mi and fractional mantissas."""
        assert humanize_1024(1048576) == "1Mi"
        assert humanize_1024(1536) == "1.5ki"
        assert humanize_1024(1025) == "1.001ki"

    def test_nan_and_inf(self) -> None:
        """Test non-finite values render without prefix."""
        assert humanize_1024(NAN) == "NaN"
        assert humanize_1024(INF) == "+Inf"


class TestHumanizeDuration:
    """Test humanize_duration()."""

    def test_zero(self) -> None:
        """Test 0 -> 0s."""
        assert humanize_duration(0) == "0s"

    def test_all_units(self) -> None:
        """Test a value with every unit non-zero."""
        assert humanize_duration(90061) == "1d 1h 1m 1s"

    def test_negative_minutes(self) -> None:
        """Test -65 -> -1m 5s."""
        assert humanize_duration(-65) == "-1m 5s"

    def test_sub_second(self) -> None:
        """Test sub-second durations use metric prefixes."""
        assert humanize_duration(0.5) == "500ms"
        assert humanize_duration(0.0015) == "1.5ms"
        assert humanize_duration(-0.5) == "-500ms"

    def test_seconds_keep_significant_digits(self) -> None:
        """Test sub-minute durations are not truncated."""
        assert humanize_duration(1) == "1s"
        assert humanize_duration(59.5) == "59.5s"
        assert humanize_duration(1.23456) == "1.235s"
        assert humanize_duration(-1.5) == "-1.5s"

    def test_zero_lower_units_still_printed(self) -> None:
        """Test lower units are printed even when zero."""
        assert humanize_duration(60) == "1m 0s"
        assert humanize_duration(3600) == "1h 0m 0s"
        assert humanize_duration(86400) == "1d 0h 0m 0s"

    def test_coarse_units_truncate(self) -> None:
        """Test fractional seconds are dropped once minutes appear."""
        assert humanize_duration(3661.9) == "1h 1m 1s"
        assert humanize_duration(12345.678) == "3h 25m 45s"

    def test_nan_and_inf(self) -> None:
        """Test non-finite values have no unit suffix."""
        assert humanize_duration(NAN) == "NaN"
        assert humanize_duration(INF) == "+Inf"
        assert humanize_duration(-INF) == "-Inf"


class TestHumanizePercentage:
    """Test humanize_percentage()."""

    @pytest.mark.parametrize(
        ("ratio", "expected"),
        [
            (0.5, "50%"),
            (1, "100%"),
            (0, "0%"),
            (0.123456, "12.35%"),
        ],
    )
    def test_ratios(self, ratio: float, expected: str) -> None:
        """Test ratios are scaled by 100 with four significant digits."""
        assert humanize_percentage(ratio) == expected

    def test_nan(self) -> None:
        """Test NaN flows through the float formatter."""
        assert humanize_percentage(NAN) == "NaN%"


class TestHumanizeTimestamp:
    """Test humanize_timestamp()."""

    def test_whole_seconds(self) -> None:
        """Test a whole-second timestamp has no fraction."""
        assert humanize_timestamp(1700000000) == "2023-11-14 22:13:20 +0000 UTC"

    def test_epoch(self) -> None:
        """Test zero is the Unix epoch."""
        assert humanize_timestamp(0) == "1970-01-01 00:00:00 +0000 UTC"

    def test_fraction_trailing_zeros_trimmed(self) -> None:
        """Test millisecond fraction drops trailing zeros."""
        assert humanize_timestamp(1700000000.5) == "2023-11-14 22:13:20.5 +0000 UTC"

    def test_before_epoch(self) -> None:
        """Test negative timestamps resolve before the epoch."""
        assert humanize_timestamp(-1) == "1969-12-31 23:59:59 +0000 UTC"

    def test_sub_tick_truncated_toward_zero(self) -> None:
        """Test nanoseconds below one tick are truncated toward zero."""
        assert humanize_timestamp(-0.0015) == "1969-12-31 23:59:59.999 +0000 UTC"

    def test_nan_and_inf(self) -> None:
        """Test non-finite values are formatted as numbers."""
        assert humanize_timestamp(NAN) == "NaN"
        assert humanize_timestamp(INF) == "+Inf"

    def test_out_of_range(self) -> None:
        """Test instants beyond the datetime range raise TemplateFuncError."""
        with pytest.raises(TemplateFuncError, match="out of range"):
            humanize_timestamp(1e12)


class TestSignificantDigitsProperty:
    """Test every finite mantissa has at most four significant digits."""

    @pytest.mark.parametrize(
        "v",
        [1.23456789, 12345.6789, 98765432.1, 0.000123456, 7777777.7, 1e-20, 3.99999e21],
    )
    def test_mantissa_significant_digits(self, v: float) -> None:
        """Test the numeric part before any prefix/suffix has <= 4 digits."""
        for text in (humanize(v), humanize_1024(v)):
            mantissa = text.rstrip("kMGTPEZYmunpfazyi")
            digits = mantissa.split("e")[0].replace(".", "").replace("-", "").lstrip("0")
            assert len(digits) <= 4, text
