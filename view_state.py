"""Displayed month + selection state behind the calendar window."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Callable

from calendar_logic import ANCHOR_DATE, CalendarCell, build_grid, is_market_day, shift_month


def move_date_by_months(d: date, delta: int, clamp_days: bool = True) -> date:
    """Return *d* moved by *delta* months, keeping its day-of-month.

    When the target month is shorter than ``d.day``, ``clamp_days`` picks the
    last day of that month; otherwise the surplus days spill into the
    following month (Jan 31 + 1 month -> Mar 3 in a common year).
    """
    year, month = shift_month(d.year, d.month, delta)
    if clamp_days:
        last = calendar.monthrange(year, month)[1]
        return date(year, month, min(d.day, last))
    return date(year, month, 1) + timedelta(days=d.day - 1)


class ViewState:
    """Which month is shown and which day is selected.

    The grid is derived from ``view_date`` on every read of :attr:`cells`;
    nothing computed from it is stored.
    """

    def __init__(self, anchor: date = ANCHOR_DATE, clamp_days: bool = True,
                 today: Callable[[], date] = date.today) -> None:
        self.anchor = anchor
        self.clamp_days = clamp_days
        self._today = today
        self.view_date: date = today()
        self.selected_date: date | None = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    @property
    def year(self) -> int:
        return self.view_date.year

    @property
    def month(self) -> int:
        return self.view_date.month

    @property
    def title(self) -> str:
        return f"{self.year}年{self.month}月"

    @property
    def cells(self) -> list[CalendarCell]:
        return build_grid(self.year, self.month, self._today(), self.anchor)

    @property
    def selected_is_market_day(self) -> bool | None:
        if self.selected_date is None:
            return None
        return is_market_day(self.selected_date, self.anchor)

    def today(self) -> date:
        return self._today()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def advance_month(self, delta: int) -> None:
        self.view_date = move_date_by_months(self.view_date, delta, self.clamp_days)

    def next_month(self) -> None:
        self.advance_month(1)

    def prev_month(self) -> None:
        self.advance_month(-1)

    def jump_to_today(self) -> None:
        self.view_date = self._today()

    def jump_to_anchor(self) -> None:
        self.view_date = self.anchor

    def set_selected_date(self, d: date | None) -> None:
        self.selected_date = d
