"""Pure calendar calculations — no UI dependencies.

Months are zero-based (0 = January) and weeks start on Sunday.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class CalendarDate:
    """A calendar day without time-of-day or time zone."""

    year: int
    month: int  # 0-11
    day: int

    @classmethod
    def from_date(cls, d: date) -> CalendarDate:
        return cls(d.year, d.month - 1, d.day)

    @classmethod
    def today(cls) -> CalendarDate:
        return cls.from_date(date.today())

    def to_date(self) -> date:
        return date(self.year, self.month + 1, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"


@dataclass(frozen=True)
class DayCell:
    date: CalendarDate
    in_current_month: bool

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Carry an out-of-range month index into the year (12 -> Jan of year+1)."""
    carry, month = divmod(month, 12)
    return year + carry, month


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return normalize_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return normalize_month(year, month + 1)


def days_in_month(year: int, month: int) -> int:
    year, month = normalize_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of the month, Sunday = 0."""
    year, month = normalize_month(year, month)
    # calendar counts Monday = 0
    return (calendar.monthrange(year, month + 1)[0] + 1) % 7


def weekday(d: CalendarDate) -> int:
    """Sunday-first weekday index of ``d``."""
    return (first_weekday(d.year, d.month) + d.day - 1) % 7


def _day_cells(year: int, month: int, first: int, last: int,
               in_current_month: bool) -> list[DayCell]:
    return [DayCell(CalendarDate(year, month, day), in_current_month)
            for day in range(first, last + 1)]


def split_weeks(cells: list[DayCell], size: int = 7) -> list[list[DayCell]]:
    """Split a flat cell list into rows of ``size``."""
    return [cells[i:i + size] for i in range(0, len(cells), size)]


def build_month_view(year: int, month: int) -> list[list[DayCell]]:
    """Return the week rows covering one month.

    The month's own days are padded with the tail of the previous month and
    the head of the next month, just enough to fill whole Sunday-first weeks.
    Yields 4 to 6 rows; a row made only of padding is never added.
    """
    year, month = normalize_month(year, month)
    cells = _day_cells(year, month, 1, days_in_month(year, month), True)

    offset = first_weekday(year, month)
    if offset:
        py, pm = prev_month(year, month)
        last = days_in_month(py, pm)
        cells = _day_cells(py, pm, last - offset + 1, last, False) + cells

    remainder = len(cells) % 7
    if remainder:
        ny, nm = next_month(year, month)
        cells += _day_cells(ny, nm, 1, 7 - remainder, False)

    return split_weeks(cells)


def clamp_day(d: CalendarDate) -> CalendarDate:
    """Pull ``d.day`` back inside its month (Feb 31 -> Feb 28/29).

    Dates before or after the range of :class:`datetime.date` become its
    first or last day.
    """
    year, month = normalize_month(d.year, d.month)
    if year > date.max.year:
        return CalendarDate.from_date(date.max)
    if year < date.min.year:
        return CalendarDate.from_date(date.min)
    day = max(1, min(d.day, days_in_month(year, month)))
    if (year, month, day) == (d.year, d.month, d.day):
        return d
    return CalendarDate(year, month, day)


def _clamp_to_range(days: int, start: date) -> date:
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def add_days(d: CalendarDate, delta: int) -> CalendarDate:
    """Step ``delta`` days with normal month/year rollover.

    Results outside the range of :class:`datetime.date` stop at its first or
    last day.
    """
    return CalendarDate.from_date(_clamp_to_range(delta, clamp_day(d).to_date()))


def add_months(d: CalendarDate, delta: int) -> CalendarDate:
    """Step ``delta`` months landing on the 1st, so no month is ever skipped."""
    year, month = normalize_month(d.year, d.month + delta)
    if year > date.max.year:
        return CalendarDate(date.max.year, 11, 1)
    if year < date.min.year:
        return CalendarDate(date.min.year, 0, 1)
    return CalendarDate(year, month, 1)
