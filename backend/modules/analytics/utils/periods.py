# backend/modules/analytics/utils/periods.py

"""
Calendar-month helpers used by every dashboard report.

Orders are bucketed by the year-month of their ``date`` (a calendar day),
never by sliding day windows.
"""

import calendar
from datetime import date, datetime
from typing import List, Tuple, Union

from core.formatting import round_half_up, signed_percent

from ..constants import PREVIOUS_MONTH_REFERENCE_DAY

DateLike = Union[date, datetime, str]

# English labels regardless of process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move ``offset`` months from (year, month); offset may be negative."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_start(reference: DateLike, offset: int = 0) -> date:
    ref = as_date(reference)
    year, month = shift_month(ref.year, ref.month, offset)
    return date(year, month, 1)


def month_end(reference: DateLike, offset: int = 0) -> date:
    start = month_start(reference, offset)
    return date(start.year, start.month, calendar.monthrange(start.year, start.month)[1])


def month_key(value: DateLike) -> str:
    d = as_date(value)
    return f"{d.year}-{d.month:02d}"


def month_label(value: DateLike) -> str:
    return MONTH_ABBREVIATIONS[as_date(value).month - 1]


def month_name(value: DateLike) -> str:
    return MONTH_NAMES[as_date(value).month - 1]


def previous_month_key(now: DateLike) -> str:
    """Year-month of a fixed day in the previous calendar month."""
    start = month_start(now, -1)
    return month_key(start.replace(day=PREVIOUS_MONTH_REFERENCE_DAY))


def trailing_months(now: DateLike, count: int) -> List[Tuple[str, str]]:
    """
    ``count`` consecutive months ending with the month of ``now``.

    Returns (key, label) pairs ordered oldest to newest.
    """
    months = []
    for offset in range(count - 1, -1, -1):
        start = month_start(now, -offset)
        months.append((month_key(start), month_label(start)))
    return months


def percent_change(current: float, previous: float) -> int:
    """Whole-number percent change; 0 when there is no positive baseline."""
    if previous <= 0:
        return 0
    return round_half_up((current - previous) / previous * 100)


def pct_change(current: float, previous: float) -> str:
    """
    Formatted month-over-month change.

    A previous value of zero or less yields exactly ``"0%"``, which also
    reports growth from nothing as 0%.
    """
    if previous <= 0:
        return "0%"
    return signed_percent(percent_change(current, previous))
