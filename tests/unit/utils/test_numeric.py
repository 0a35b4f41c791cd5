"""
tests/unit/utils/test_numeric.py

Tests for Decimal conversion, rounding and terminal formatting helpers.
"""

from decimal import Decimal

import pytest

from simplestocks.utils.cli import format_optional
from simplestocks.utils.exceptions import ValidationError
from simplestocks.utils.numeric import quantize, to_decimal


class TestToDecimal:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, Decimal("1")),
            (0.1, Decimal("0.1")),
            ("2.50", Decimal("2.50")),
            (Decimal("3.14"), Decimal("3.14")),
        ],
    )
    def test_conversions(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [True, None, "x", "NaN", "Infinity", object()])
    def test_rejected(self, value):
        with pytest.raises(ValidationError) as excinfo:
            to_decimal(value, "price")
        assert "price" in str(excinfo.value)


class TestQuantize:
    def test_half_up(self):
        assert quantize(Decimal("2.345"), 2) == Decimal("2.35")
        assert quantize(Decimal("2.344"), 2) == Decimal("2.34")

    def test_zero_places(self):
        assert quantize(Decimal("2.5"), 0) == Decimal("3")

    def test_small_value_keeps_significant_digits(self):
        assert quantize(Decimal("0.004"), 2) == Decimal("0.0040")
        assert quantize(Decimal("0.00000812345"), 4) == Decimal("0.000008123")
        assert quantize(Decimal("0.3"), 0) == Decimal("0.3")

    def test_small_value_that_rounds_up_uses_fixed_places(self):
        assert quantize(Decimal("0.005"), 2) == Decimal("0.01")

    def test_zero_stays_zero(self):
        assert quantize(Decimal(0), 4) == Decimal("0.0000")

    def test_large_value(self):
        assert quantize(Decimal("1E+27"), 2) == Decimal("1E+27")
        assert quantize(Decimal("123456789012345678901234567890.125"), 2) == Decimal(
            "123456789012345678901234567890.13"
        )


class TestFormatOptional:
    def test_value(self):
        assert format_optional(Decimal("1234.5")) == "1,234.5"

    def test_custom_format(self):
        assert format_optional(Decimal("0.4"), "{:.1%}") == "40.0%"

    def test_missing(self):
        assert "n/a" in format_optional(None)
