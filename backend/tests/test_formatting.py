# backend/tests/test_formatting.py

from datetime import date

import pytest

from core.formatting import (
    format_currency,
    format_day,
    group_indian,
    round_half_up,
    signed_percent,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -2), (-2.6, -3), (0, 0)],
    )
    def test_rounds_halves_towards_positive_infinity(self, value, expected):
        assert round_half_up(value) == expected


class TestSignedPercent:
    def test_positive_and_zero_get_plus_sign(self):
        assert signed_percent(12) == "+12%"
        assert signed_percent(0) == "+0%"

    def test_negative_keeps_minus_sign(self):
        assert signed_percent(-5) == "-5%"


class TestIndianGrouping:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (123456, "1,23,456"),
            (1234567, "12,34,567"),
            (123456789, "12,34,56,789"),
            (-45000, "-45,000"),
        ],
    )
    def test_group_indian(self, value, expected):
        assert group_indian(value) == expected

    def test_format_currency_rounds_to_whole_units(self):
        assert format_currency(123456.5) == "₹1,23,457"
        assert format_currency(None) == "₹0"
        assert format_currency(2500, symbol="$") == "$2,500"


def test_format_day():
    assert format_day(date(2024, 3, 5)) == "5 Mar 2024"
    assert format_day(date(2023, 12, 25)) == "25 Dec 2023"
