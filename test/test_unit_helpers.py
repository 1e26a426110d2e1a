# Test type: Unit Test
# Validation to be executed: Validates helper utility functions — ceiling
#   rounding, amount coercion, en-IN currency formatting and assessment years.
# Command: pytest test/test_unit_helpers.py -v

"""Unit tests for bdtax.utils.helpers module."""

import math

import pytest

from bdtax.utils.helpers import (
    assessment_year,
    ceil_currency,
    coerce_amount,
    format_currency,
    group_en_in,
    round_currency,
)


# ── Ceiling ───────────────────────────────────────────────────────────────

class TestCeilCurrency:
    """Round up to a whole currency unit."""

    def test_fraction_rounds_up(self):
        assert ceil_currency(416.67) == 417

    def test_exact_value_unchanged(self):
        assert ceil_currency(5_000.0) == 5_000

    def test_float_noise_ignored(self):
        """A residue far below one paisa must not add a whole taka."""
        assert ceil_currency(2_500.0000000001) == 2_500

    def test_small_fraction_still_rounds_up(self):
        assert ceil_currency(10_749.9) == 10_750
        assert ceil_currency(0.01) == 1

    def test_zero(self):
        assert ceil_currency(0) == 0

    def test_returns_int(self):
        assert isinstance(ceil_currency(12.3), int)


class TestRoundCurrency:
    def test_two_decimals(self):
        assert round_currency(86.8812345) == 86.88

    def test_exact_value(self):
        assert round_currency(145.0) == 145.0


class TestCoerceAmount:
    def test_none_is_zero(self):
        assert coerce_amount(None) == 0.0

    def test_nan_is_zero(self):
        assert coerce_amount(math.nan) == 0.0

    def test_number_passes_through(self):
        assert coerce_amount(1_500) == 1_500.0

    def test_negative_passes_through(self):
        assert coerce_amount(-3) == -3.0


# ── Formatting ────────────────────────────────────────────────────────────

class TestGroupEnIn:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (999, "999"),
            (1_000, "1,000"),
            (12_345, "12,345"),
            (375_000, "3,75,000"),
            (1_234_567, "12,34,567"),
            (10_000_000, "1,00,00,000"),
            (-450_000, "-4,50,000"),
        ],
    )
    def test_grouping(self, value, expected):
        assert group_en_in(value) == expected


class TestFormatCurrency:

    def test_with_symbol(self):
        assert format_currency(1_234_567.2) == "BDT 12,34,568"

    def test_without_symbol(self):
        assert format_currency(375_000, include_symbol=False) == "3,75,000"

    def test_zero(self):
        assert format_currency(0) == "BDT 0"


class TestAssessmentYear:

    def test_following_year(self):
        assert assessment_year("2025-2026") == "2026-2027"

    def test_whitespace_stripped(self):
        assert assessment_year(" 2023-2024 ") == "2024-2025"

    @pytest.mark.parametrize("bad", ["2025", "25-26", "2025/2026", ""])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValueError, match="Invalid income year"):
            assessment_year(bad)
