"""Human-readable labels for calendar dates."""

from __future__ import annotations

import calendar
from typing import Callable

from calendar_logic import CalendarDate

MONTH_NAME = "month-name"
MONTH_YEAR = "month-year"
ISO = "iso"

DateFormatter = Callable[[CalendarDate, str], str]


def format_date(d: CalendarDate, pattern: str = MONTH_NAME) -> str:
    """Format ``d`` according to one of the named patterns.

    Any other pattern containing a ``%`` directive is passed to
    :meth:`datetime.date.strftime`.
    """
    if pattern == MONTH_NAME:
        return calendar.month_name[d.month + 1]
    if pattern == MONTH_YEAR:
        return f"{calendar.month_name[d.month + 1]} {d.year}"
    if pattern == ISO:
        return d.isoformat()
    if "%" in pattern:
        return d.to_date().strftime(pattern)
    raise ValueError(f"Unknown date pattern: {pattern!r}")
