# backend/modules/analytics/tests/test_periods.py

from datetime import date, datetime

import pytest

from modules.analytics.utils.periods import (
    month_end,
    month_key,
    month_label,
    month_start,
    pct_change,
    percent_change,
    previous_month_key,
    shift_month,
    trailing_months,
)


class TestMonthArithmetic:
    def test_shift_month_crosses_year_boundaries(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 12, 1) == (2025, 1)
        assert shift_month(2024, 3, -14) == (2023, 1)

    def test_month_bounds(self):
        assert month_start(date(2024, 3, 31), -1) == date(2024, 2, 1)
        assert month_end(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert month_end(date(2023, 3, 31), -1) == date(2023, 2, 28)

    def test_month_key_accepts_dates_datetimes_and_strings(self):
        assert month_key(date(2024, 3, 5)) == "2024-03"
        assert month_key(datetime(2024, 11, 30, 23, 59)) == "2024-11"
        assert month_key("2024-07-01") == "2024-07"

    def test_previous_month_key_on_the_31st(self):
        # Naive day arithmetic would land in March again or skip February
        assert previous_month_key(datetime(2024, 3, 31)) == "2024-02"
        assert previous_month_key(datetime(2024, 1, 31)) == "2023-12"


class TestTrailingMonths:
    def test_twelve_months_oldest_first(self):
        months = trailing_months(datetime(2024, 3, 15), 12)

        assert len(months) == 12
        assert months[0] == ("2023-04", "Apr")
        assert months[-1] == ("2024-03", "Mar")
        assert [label for _, label in months][:3] == ["Apr", "May", "Jun"]

    def test_month_label_is_english_abbreviation(self):
        assert month_label(date(2024, 9, 1)) == "Sep"


class TestPctChange:
    @pytest.mark.parametrize("previous", [0, -10, 0.0])
    def test_no_positive_baseline_is_zero_percent(self, previous):
        assert pct_change(500, previous) == "0%"
        assert percent_change(500, previous) == 0

    def test_signed_output(self):
        assert pct_change(100, 50) == "+100%"
        assert pct_change(45, 50) == "-10%"
        assert pct_change(50, 50) == "+0%"

    def test_half_rounds_up(self):
        # 1/8 = 12.5% -> 13%
        assert pct_change(9, 8) == "+13%"
