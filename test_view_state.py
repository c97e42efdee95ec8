"""Tests for month navigation and selection state."""

from datetime import date

import pytest

from calendar_logic import ANCHOR_DATE
from view_state import ViewState, move_date_by_months


def fixed_clock(d):
    return lambda: d


@pytest.fixture
def view():
    return ViewState(today=fixed_clock(date(2026, 10, 19)))


class TestMoveDateByMonths:
    def test_keeps_day_of_month(self):
        assert move_date_by_months(date(2026, 3, 15), 1) == date(2026, 4, 15)
        assert move_date_by_months(date(2026, 3, 15), -1) == date(2026, 2, 15)

    def test_year_rollover(self):
        assert move_date_by_months(date(2026, 12, 5), 1) == date(2027, 1, 5)
        assert move_date_by_months(date(2026, 1, 5), -1) == date(2025, 12, 5)

    def test_clamps_to_last_day(self):
        assert move_date_by_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert move_date_by_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert move_date_by_months(date(2026, 3, 31), -1) == date(2026, 2, 28)

    def test_overflow_rolls_into_next_month(self):
        assert move_date_by_months(date(2026, 1, 31), 1, clamp_days=False) == date(2026, 3, 3)
        # Previous month from Mar 31 lands back in March
        assert move_date_by_months(date(2026, 3, 31), -1, clamp_days=False) == date(2026, 3, 3)


class TestViewState:
    def test_starts_on_today(self, view):
        assert view.view_date == date(2026, 10, 19)
        assert view.selected_date is None
        assert view.anchor == ANCHOR_DATE
        assert (view.year, view.month) == (2026, 10)
        assert view.title == "2026年10月"

    def test_next_and_prev_month(self, view):
        view.next_month()
        assert (view.year, view.month) == (2026, 11)
        view.prev_month()
        view.prev_month()
        assert (view.year, view.month) == (2026, 9)

    def test_advance_month_rollover(self, view):
        view.advance_month(1)
        view.advance_month(1)
        view.advance_month(1)
        assert (view.year, view.month) == (2027, 1)
        view.advance_month(-1)
        assert (view.year, view.month) == (2026, 12)

    @pytest.mark.parametrize("start", [
        date(2026, 1, 31), date(2026, 10, 19), date(2024, 2, 29), date(2025, 8, 30),
    ])
    def test_twelve_steps_return_to_same_month(self, start):
        view = ViewState(today=fixed_clock(start))
        for _ in range(12):
            view.advance_month(1)
        assert (view.year, view.month) == (start.year + 1, start.month)

    def test_unclamped_navigation_can_skip_a_month(self):
        view = ViewState(clamp_days=False, today=fixed_clock(date(2026, 1, 31)))
        view.next_month()
        assert view.view_date == date(2026, 3, 3)

    def test_jump_to_today(self, view):
        view.advance_month(-5)
        view.jump_to_today()
        assert view.view_date == date(2026, 10, 19)

    def test_jump_to_anchor_marks_anchor(self, view):
        view.jump_to_anchor()
        assert view.view_date == ANCHOR_DATE
        cell = next(c for c in view.cells if c.date == ANCHOR_DATE)
        assert cell.is_market_day is True
        assert cell.is_current_month is True

    def test_jump_to_custom_anchor(self):
        anchor = date(2025, 7, 31)
        view = ViewState(anchor=anchor, today=fixed_clock(date(2026, 10, 19)))
        view.jump_to_anchor()
        cell = next(c for c in view.cells if c.date == anchor)
        assert cell.is_market_day is True
        assert cell.is_current_month is True

    def test_cells_follow_view_date(self, view):
        assert len(view.cells) == 42
        assert [c.date for c in view.cells if c.is_today] == [date(2026, 10, 19)]
        view.next_month()
        cells = view.cells
        assert all(not c.is_today for c in cells)
        assert cells[0].date == date(2026, 10, 26)

    def test_navigation_leaves_selection_alone(self, view):
        view.set_selected_date(date(2026, 10, 5))
        view.next_month()
        view.jump_to_anchor()
        assert view.selected_date == date(2026, 10, 5)

    def test_selected_is_market_day(self, view):
        assert view.selected_is_market_day is None
        view.set_selected_date(date(2026, 2, 5))
        assert view.selected_is_market_day is True
        view.set_selected_date(date(2026, 2, 6))
        assert view.selected_is_market_day is False
        view.set_selected_date(None)
        assert view.selected_is_market_day is None
