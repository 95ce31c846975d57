"""
utils/formatting.py
-------------------
Display helpers for the dashboard views.
Amounts are stored in cents; dates are rendered as ISO `YYYY-MM-DD`.
"""

import math
from datetime import date, datetime
from typing import Union

from config import CURRENCY_SYMBOL


def format_currency(minor_units: Union[int, float]) -> str:
    """
    Convert an amount in cents to an en-US currency string.

    Examples:
        150000 -> "$1,500.00"
        -500   -> "-$5.00"

    NaN is passed through as "$NaN" rather than being coerced to zero.
    """
    if isinstance(minor_units, float) and math.isnan(minor_units):
        return f"{CURRENCY_SYMBOL}NaN"
    value = minor_units / 100
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def format_date(value: Union[date, datetime, str]) -> str:
    """Render a date (or ISO timestamp string) as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split("T")[0]
