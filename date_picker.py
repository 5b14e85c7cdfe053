"""Cursor / selection state machine behind the date picker window."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Union

from calendar_logic import (
    CalendarDate,
    DayCell,
    add_days,
    add_months,
    build_month_view,
    clamp_day,
)
from formatting import MONTH_NAME, DateFormatter, format_date

logger = logging.getLogger(__name__)

Clock = Callable[[], CalendarDate]
CommitListener = Callable[[CalendarDate], None]


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------
@dataclass(frozen=True)
class StepDay:
    delta: int


@dataclass(frozen=True)
class StepMonth:
    delta: int


@dataclass(frozen=True)
class JumpTo:
    day: int


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class ConfirmToday:
    pass


Command = Union[StepDay, StepMonth, JumpTo, Confirm, ConfirmToday]

JUMP_TO_START = JumpTo(1)
JUMP_TO_END = JumpTo(31)


def step_week(direction: int) -> StepDay:
    return StepDay(7 * direction)


# tk keysym -> command
KEY_BINDINGS: dict[str, Command] = {
    "Return": Confirm(),
    "KP_Enter": Confirm(),
    "Left": StepDay(-1),
    "Right": StepDay(1),
    "Up": step_week(-1),
    "Down": step_week(1),
    "Prior": StepMonth(-1),
    "Next": StepMonth(1),
    "Home": JUMP_TO_START,
    "End": JUMP_TO_END,
}


class NavigationController:
    """Holds the committed ``selected_date`` and the focused ``cursor_date``.

    Navigation only ever moves the cursor; the selection changes through
    :meth:`set_selected_date` or a successful confirm. After every mutation the
    view is normalised: the cursor day is clamped into its month and the week
    rows are rebuilt when the cursor's month changed.
    """

    def __init__(
        self,
        selected: CalendarDate | None = None,
        *,
        show_today: bool = True,
        padding_confirmable: bool = False,
        formatter: DateFormatter = format_date,
        clock: Clock = CalendarDate.today,
        on_commit: CommitListener | None = None,
    ) -> None:
        self.show_today = show_today
        self.padding_confirmable = padding_confirmable
        self._formatter = formatter
        self._clock = clock
        self._listeners: list[CommitListener] = []
        if on_commit is not None:
            self._listeners.append(on_commit)

        self.selected_date: CalendarDate | None = None
        self._cursor: CalendarDate | None = None
        self._view_key: tuple[int, int] | None = None
        self.weeks: list[list[DayCell]] = []
        self.month_label = ""

        self.set_selected_date(selected)

    @property
    def cursor_date(self) -> CalendarDate:
        if self._cursor is None:
            raise RuntimeError("cursor is set on first render")
        return self._cursor

    def add_listener(self, listener: CommitListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def set_selected_date(self, selected: CalendarDate | date | None) -> None:
        if isinstance(selected, date):
            selected = CalendarDate.from_date(selected)
        self.selected_date = selected
        if selected is not None:
            self._cursor = selected
        self._render()

    def reset(self) -> None:
        """Drop the selection and put the cursor back on today."""
        self.selected_date = None
        self._cursor = None
        self._render()

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------
    def move_cursor_by_days(self, delta: int) -> None:
        self._cursor = add_days(self.cursor_date, delta)
        self._render()

    def move_cursor_by_months(self, delta: int) -> None:
        self._cursor = add_months(self.cursor_date, delta)
        self._render()

    def move_cursor_to_day_of_month(self, day: int) -> None:
        # Clamped to the month length by _render
        self._cursor = replace(self.cursor_date, day=day)
        self._render()

    def move_cursor_to(self, target: CalendarDate) -> None:
        """Focus ``target`` directly, e.g. a clicked padding cell."""
        self._cursor = target
        self._render()

    def move_cursor_to_year(self, year: int) -> None:
        year = max(date.min.year, min(year, date.max.year))
        self._cursor = replace(self.cursor_date, year=year)
        self._render()

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    def confirm_cursor(self) -> bool:
        # The view is always built around the cursor, so its cell is never padding
        cell = self.cell_for(self.cursor_date)
        return cell is not None and self.select(cell)

    def select(self, cell: DayCell) -> bool:
        """Commit ``cell``'s date. Returns False when the policy disables it."""
        if self.is_disabled(cell):
            logger.debug("Ignoring confirm of disabled cell %s", cell.date.isoformat())
            return False
        self.selected_date = cell.date
        self._emit(cell.date)
        return True

    def confirm_today(self) -> CalendarDate:
        today = self.today()
        self._emit(today)
        return today

    def _emit(self, committed: CalendarDate) -> None:
        logger.debug("Date committed: %s", committed.isoformat())
        for listener in list(self._listeners):
            listener(committed)

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------
    def handle(self, command: Command) -> None:
        if isinstance(command, StepDay):
            self.move_cursor_by_days(command.delta)
        elif isinstance(command, StepMonth):
            self.move_cursor_by_months(command.delta)
        elif isinstance(command, JumpTo):
            self.move_cursor_to_day_of_month(command.day)
        elif isinstance(command, Confirm):
            self.confirm_cursor()
        elif isinstance(command, ConfirmToday):
            self.confirm_today()
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def handle_key(self, keysym: str) -> bool:
        """Dispatch a tk keysym. Returns True when the key was consumed."""
        command = KEY_BINDINGS.get(keysym)
        if command is None:
            return False
        self.handle(command)
        return True

    # ------------------------------------------------------------------
    # Cell predicates
    # ------------------------------------------------------------------
    def is_selected(self, cell: DayCell) -> bool:
        return self.selected_date is not None and cell.date == self.selected_date

    def is_cursor(self, cell: DayCell) -> bool:
        return cell.date == self._cursor

    def is_disabled(self, cell: DayCell) -> bool:
        return not cell.in_current_month and not self.padding_confirmable

    def today(self) -> CalendarDate:
        """Read the injected clock."""
        return self._clock()

    def is_today(self, cell: DayCell, today: CalendarDate | None = None) -> bool:
        return cell.date == (today or self.today())

    def cell_for(self, d: CalendarDate) -> DayCell | None:
        for week in self.weeks:
            for cell in week:
                if cell.date == d:
                    return cell
        return None

    # ------------------------------------------------------------------
    # Render-time normalisation
    # ------------------------------------------------------------------
    def _render(self) -> None:
        if self._cursor is None:
            self._cursor = self._clock()
        self._cursor = clamp_day(self._cursor)

        key = (self._cursor.year, self._cursor.month)
        if key != self._view_key:
            self.weeks = build_month_view(*key)
            self._view_key = key
            self.month_label = self._formatter(
                CalendarDate(key[0], key[1], 1), MONTH_NAME)
