# backend/core/formatting.py

"""
Number and text formatting shared by the API responses.

Rounding is half-up (2.5 -> 3, -2.5 -> -2) rather than Python's
banker's rounding, so figures match what dashboard clients have always
been shown.
"""

import math
from datetime import date
from typing import Optional, Union

Number = Union[int, float]


def round_half_up(value: Number) -> int:
    return int(math.floor(value + 0.5))


def signed_percent(value: int) -> str:
    """Render an integer percentage with an explicit sign: ``+12%`` / ``-5%``."""
    return f"{'+' if value >= 0 else ''}{value}%"


def group_indian(value: int) -> str:
    """
    Group digits the Indian way: last three, then pairs.

    >>> group_indian(1234567)
    '12,34,567'
    """
    sign = "-" if value < 0 else ""
    digits = str(abs(int(value)))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs + [tail])


def format_currency(amount: Optional[Number], symbol: str = "₹") -> str:
    """Whole-unit currency string, e.g. ``₹1,23,456``."""
    return f"{symbol}{group_indian(round_half_up(amount or 0))}"


def format_day(value: date) -> str:
    """Short human date, e.g. ``5 Mar 2024``."""
    return f"{value.day} {value.strftime('%b')} {value.year}"
