"""Tests for the cursor / selection state machine."""

from datetime import date

import pytest

from calendar_logic import CalendarDate, DayCell
from date_picker import (
    JUMP_TO_END,
    JUMP_TO_START,
    KEY_BINDINGS,
    Confirm,
    ConfirmToday,
    JumpTo,
    NavigationController,
    StepDay,
    StepMonth,
    step_week,
)

TODAY = CalendarDate(2026, 9, 19)


@pytest.fixture
def committed():
    return []


def make_controller(committed, selected=None, **kwargs):
    return NavigationController(
        selected, clock=lambda: TODAY, on_commit=committed.append, **kwargs
    )


def test_initial_state_without_date(committed):
    ctrl = make_controller(committed)
    assert ctrl.selected_date is None
    assert ctrl.cursor_date == TODAY
    assert ctrl.cell_for(TODAY).in_current_month


def test_initial_state_with_date(committed):
    start = CalendarDate(2023, 11, 25)
    ctrl = make_controller(committed, start)
    assert ctrl.selected_date == start
    assert ctrl.cursor_date == start


def test_set_selected_date_marks_cell(committed):
    ctrl = make_controller(committed)
    ctrl.set_selected_date(CalendarDate(2023, 11, 25))
    assert ctrl.cursor_date == CalendarDate(2023, 11, 25)
    selected = [c for week in ctrl.weeks for c in week if ctrl.is_selected(c)]
    assert [c.date for c in selected] == [CalendarDate(2023, 11, 25)]
    assert committed == []


def test_set_selected_date_accepts_datetime_date(committed):
    ctrl = make_controller(committed)
    ctrl.set_selected_date(date(2024, 2, 29))
    assert ctrl.selected_date == CalendarDate(2024, 1, 29)


def test_set_selected_none_keeps_cursor(committed):
    ctrl = make_controller(committed, CalendarDate(2023, 11, 25))
    ctrl.move_cursor_by_days(3)
    ctrl.set_selected_date(None)
    assert ctrl.selected_date is None
    assert ctrl.cursor_date == CalendarDate(2023, 11, 28)


def test_move_by_days_within_month_keeps_view(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    weeks = ctrl.weeks
    ctrl.move_cursor_by_days(7)
    assert ctrl.cursor_date == CalendarDate(2024, 1, 17)
    assert ctrl.weeks is weeks


def test_move_by_days_across_year_rebuilds(committed):
    ctrl = make_controller(committed, CalendarDate(2023, 11, 31))
    weeks = ctrl.weeks
    ctrl.move_cursor_by_days(1)
    assert ctrl.cursor_date == CalendarDate(2024, 0, 1)
    assert ctrl.weeks is not weeks
    assert ctrl.cell_for(CalendarDate(2024, 0, 1)).in_current_month


def test_navigation_never_changes_selection(committed):
    start = CalendarDate(2024, 1, 10)
    ctrl = make_controller(committed, start)
    ctrl.move_cursor_by_days(-30)
    ctrl.move_cursor_by_months(2)
    ctrl.move_cursor_to_day_of_month(31)
    assert ctrl.selected_date == start
    assert committed == []


def test_move_by_months_clamps_day_first(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 0, 31))
    ctrl.move_cursor_by_months(1)
    assert ctrl.cursor_date == CalendarDate(2024, 1, 1)
    ctrl.move_cursor_by_months(-2)
    assert ctrl.cursor_date == CalendarDate(2023, 11, 1)


def test_jump_to_end_clamps_to_month_length(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 10, 5))  # November
    weeks = ctrl.weeks
    ctrl.move_cursor_to_day_of_month(31)
    assert ctrl.cursor_date == CalendarDate(2024, 10, 30)
    assert ctrl.weeks is weeks
    ctrl.move_cursor_to_day_of_month(1)
    assert ctrl.cursor_date == CalendarDate(2024, 10, 1)


def test_move_to_year_clamps_leap_day(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 29))
    ctrl.move_cursor_to_year(2023)
    assert ctrl.cursor_date == CalendarDate(2023, 1, 28)


def test_move_cursor_to_padding_date_shifts_view(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    padding = ctrl.weeks[0][0]
    ctrl.move_cursor_to(padding.date)
    assert ctrl.cursor_date == CalendarDate(2024, 0, 28)
    assert ctrl.cell_for(ctrl.cursor_date).in_current_month


def test_confirm_cursor_commits_and_emits(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    ctrl.move_cursor_by_days(1)
    assert ctrl.confirm_cursor() is True
    assert ctrl.selected_date == CalendarDate(2024, 1, 11)
    assert committed == [CalendarDate(2024, 1, 11)]


def test_select_disabled_padding_cell_is_noop(committed):
    start = CalendarDate(2024, 1, 10)
    ctrl = make_controller(committed, start)
    padding = ctrl.weeks[0][0]
    assert not padding.in_current_month
    assert ctrl.is_disabled(padding)
    assert ctrl.select(padding) is False
    assert ctrl.selected_date == start
    assert committed == []


def test_padding_cells_confirmable_by_policy(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10), padding_confirmable=True)
    padding = ctrl.weeks[0][0]
    assert not ctrl.is_disabled(padding)
    assert ctrl.select(padding) is True
    assert committed == [CalendarDate(2024, 0, 28)]


def test_confirm_today_emits_without_touching_state(committed):
    start = CalendarDate(2024, 1, 10)
    ctrl = make_controller(committed, start)
    assert ctrl.confirm_today() == TODAY
    assert committed == [TODAY]
    assert ctrl.selected_date == start
    assert ctrl.cursor_date == start


def test_reset_goes_back_to_today(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    ctrl.reset()
    assert ctrl.selected_date is None
    assert ctrl.cursor_date == TODAY


def test_predicates(committed):
    ctrl = make_controller(committed, CalendarDate(2026, 9, 5))
    cell = DayCell(CalendarDate(2026, 9, 5), True)
    assert ctrl.is_selected(cell)
    assert ctrl.is_cursor(cell)
    assert not ctrl.is_today(cell)
    assert ctrl.is_today(DayCell(TODAY, True))
    ctrl.move_cursor_by_days(1)
    assert ctrl.is_selected(cell)
    assert not ctrl.is_cursor(cell)


def test_month_label_uses_injected_formatter(committed):
    calls = []

    def formatter(d, pattern):
        calls.append((d, pattern))
        return f"M{d.month}"

    ctrl = NavigationController(CalendarDate(2024, 1, 10), formatter=formatter,
                                clock=lambda: TODAY)
    assert ctrl.month_label == "M1"
    assert calls == [(CalendarDate(2024, 1, 1), "month-name")]
    ctrl.move_cursor_by_months(1)
    assert ctrl.month_label == "M2"


def test_handle_dispatches_commands(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    ctrl.handle(StepDay(1))
    assert ctrl.cursor_date == CalendarDate(2024, 1, 11)
    ctrl.handle(step_week(-1))
    assert ctrl.cursor_date == CalendarDate(2024, 1, 4)
    ctrl.handle(JUMP_TO_END)
    assert ctrl.cursor_date == CalendarDate(2024, 1, 29)
    ctrl.handle(StepMonth(1))
    assert ctrl.cursor_date == CalendarDate(2024, 2, 1)
    ctrl.handle(JumpTo(15))
    ctrl.handle(JUMP_TO_START)
    assert ctrl.cursor_date == CalendarDate(2024, 2, 1)
    ctrl.handle(Confirm())
    ctrl.handle(ConfirmToday())
    assert committed == [CalendarDate(2024, 2, 1), TODAY]


def test_handle_rejects_unknown_command(committed):
    ctrl = make_controller(committed)
    with pytest.raises(TypeError):
        ctrl.handle("Move")


@pytest.mark.parametrize("keysym,expected", [
    ("Left", CalendarDate(2024, 1, 9)),
    ("Right", CalendarDate(2024, 1, 11)),
    ("Up", CalendarDate(2024, 1, 3)),
    ("Down", CalendarDate(2024, 1, 17)),
    ("Prior", CalendarDate(2024, 0, 1)),
    ("Next", CalendarDate(2024, 2, 1)),
    ("Home", CalendarDate(2024, 1, 1)),
    ("End", CalendarDate(2024, 1, 29)),
])
def test_key_bindings(committed, keysym, expected):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    assert ctrl.handle_key(keysym) is True
    assert ctrl.cursor_date == expected


def test_return_key_confirms(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    assert KEY_BINDINGS["Return"] == Confirm()
    ctrl.handle_key("Return")
    assert committed == [CalendarDate(2024, 1, 10)]


def test_unbound_key_is_ignored(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    assert ctrl.handle_key("space") is False
    assert ctrl.cursor_date == CalendarDate(2024, 1, 10)


def test_cursor_past_last_supported_year_is_clamped(committed):
    ctrl = make_controller(committed, CalendarDate(10000, 0, 15))
    assert ctrl.cursor_date == CalendarDate(9999, 11, 31)
    ctrl.move_cursor_by_days(1)
    assert ctrl.cursor_date == CalendarDate(9999, 11, 31)
    ctrl.handle_key("Up")
    assert ctrl.cursor_date == CalendarDate(9999, 11, 24)


def test_cursor_before_first_supported_year_is_clamped(committed):
    ctrl = make_controller(committed)
    ctrl.move_cursor_to(CalendarDate(0, 5, 15))
    assert ctrl.cursor_date == CalendarDate(1, 0, 1)
    ctrl.move_cursor_by_days(-1)
    assert ctrl.cursor_date == CalendarDate(1, 0, 1)
    ctrl.handle(StepDay(1))
    assert ctrl.cursor_date == CalendarDate(1, 0, 2)


def test_confirm_cursor_never_lands_on_padding(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    padding = ctrl.weeks[0][0]
    ctrl.move_cursor_to(padding.date)
    cell = ctrl.cell_for(ctrl.cursor_date)
    assert cell.in_current_month
    assert not ctrl.is_disabled(cell)
    assert ctrl.confirm_cursor() is True
    assert committed == [CalendarDate(2024, 0, 28)]


def test_today_reads_injected_clock(committed):
    ctrl = make_controller(committed, CalendarDate(2024, 1, 10))
    assert ctrl.today() == TODAY
    assert ctrl.is_today(DayCell(TODAY, True))
