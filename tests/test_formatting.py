"""Tests for half-life and abundance text."""

import pytest

from nuclidesim.reporting.formatting import (
    BELOW_DETECTION,
    SECONDS_PER_YEAR,
    format_abundance,
    format_half_life,
)


class TestFormatHalfLife:
    """Tests for half-life formatting."""

    def test_sentinels(self):
        assert format_half_life(-1) == "stable"
        assert format_half_life(0) == "< 1 µs"

    def test_years(self):
        assert format_half_life(SECONDS_PER_YEAR * 5) == "5.00 yr"
        assert format_half_life(388789632) == "12.32 yr"

    def test_long_years_scientific(self):
        assert format_half_life(1.41e17) == "4.5E+09 yr"

    @pytest.mark.parametrize("seconds, expected", [
        (2 * 86400.0, "2.00 d"),
        (7200.0, "2.00 h"),
        (613.9, "613.90 s"),
        (0.0202, "20.20 ms"),
        (3.0e-4, "300.00 µs"),
    ])
    def test_units(self, seconds, expected):
        assert format_half_life(seconds) == expected


class TestFormatAbundance:
    """Tests for abundance formatting."""

    def test_percent(self):
        assert format_abundance(0.7381) == "73.81%"

    def test_ppb(self):
        assert format_abundance(1.29e-3 / 1000) == "1290 ppb"

    def test_trace(self):
        assert format_abundance(3.0e-11) == "0.0300 ppb"

    def test_zero_natural_element(self):
        assert format_abundance(0.0, z=43) == BELOW_DETECTION

    def test_zero_synthetic_element(self):
        assert format_abundance(0.0, z=105) == "0"
