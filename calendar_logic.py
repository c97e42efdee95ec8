"""Pure calendar calculations — no UI dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

# Monday-first display labels
WEEK_DAYS = ("一", "二", "三", "四", "五", "六", "日")

# Reference date for the every-3rd-day market cycle
ANCHOR_DATE = date(2026, 2, 2)

MARKET_CYCLE_DAYS = 3
GRID_DAYS = 42  # 6 rows x 7 columns


@dataclass(frozen=True)
class CalendarCell:
    """One day of the 6×7 month grid."""

    date: date
    day_number: int
    is_current_month: bool
    is_today: bool
    is_market_day: bool
    is_weekend: bool


def _as_date(d: date) -> date:
    """Drop any time-of-day component so only the calendar day matters."""
    if isinstance(d, datetime):
        return d.date()
    return d


def is_market_day(d: date, anchor: date = ANCHOR_DATE) -> bool:
    """Return True if *d* falls on the every-3rd-day cycle through *anchor*.

    Only the calendar day of each argument counts; clock time is ignored.
    """
    diff = _as_date(d).toordinal() - _as_date(anchor).toordinal()
    return diff % MARKET_CYCLE_DAYS == 0


def days_until_market_day(d: date, anchor: date = ANCHOR_DATE) -> int:
    """Return 0–2: days from *d* to the next market day on or after it."""
    diff = _as_date(d).toordinal() - _as_date(anchor).toordinal()
    return -diff % MARKET_CYCLE_DAYS


def next_market_day(d: date, anchor: date = ANCHOR_DATE) -> date:
    """Return the first market day on or after *d*."""
    d = _as_date(d)
    return d + timedelta(days=days_until_market_day(d, anchor))


def market_status_text(d: date, anchor: date = ANCHOR_DATE) -> str:
    """Describe *d* relative to the market cycle, e.g. "market day today"."""
    wait = days_until_market_day(d, anchor)
    if wait == 0:
        return "market day today"
    if wait == 1:
        return "next market day tomorrow"
    return f"next market day in {wait} days"


def ms_until_next_day(now: datetime) -> int:
    """Return the milliseconds from *now* until the following midnight."""
    midnight = datetime.combine(now.date() + timedelta(days=1), time.min)
    return int((midnight - now).total_seconds() * 1000)


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Carry an out-of-range month into the year, e.g. (2026, 13) -> (2027, 1)."""
    carry, index = divmod(month - 1, 12)
    return year + carry, index + 1


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return (year, month) moved by *delta* months."""
    return normalize_month(year, month + delta)


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return shift_month(year, month, -1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return shift_month(year, month, 1)


def monday_offset(d: date) -> int:
    """Return the Monday-first weekday index of *d* (Monday=0 … Sunday=6)."""
    sunday_first = d.isoweekday() % 7  # Sunday=0 … Saturday=6
    return (sunday_first + 6) % 7


def build_grid(year: int, month: int, today: date,
               anchor: date = ANCHOR_DATE) -> list[CalendarCell]:
    """Return the 42 cells of the month view for (year, month).

    The grid starts on the Monday on or before the 1st and always covers
    six full weeks, so its height stays constant between months.
    Grids whose trailing days fall past ``date.max`` (December 9999)
    raise ``OverflowError``.
    """
    year, month = normalize_month(year, month)
    today = _as_date(today)
    first = date(year, month, 1)
    start = first - timedelta(days=monday_offset(first))

    cells: list[CalendarCell] = []
    for i in range(GRID_DAYS):
        d = start + timedelta(days=i)
        cells.append(CalendarCell(
            date=d,
            day_number=d.day,
            is_current_month=(d.year, d.month) == (year, month),
            is_today=d == today,
            is_market_day=is_market_day(d, anchor),
            is_weekend=d.weekday() >= 5,
        ))
    return cells


def grid_rows(cells: list[CalendarCell]) -> list[list[CalendarCell]]:
    """Split a flat grid into weeks of 7."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def iso_week_numbers(cells: list[CalendarCell]) -> list[int]:
    """Return the ISO week number of each grid row."""
    # Rows start on Monday, so the first cell decides the ISO week
    return [row[0].date.isocalendar()[1] for row in grid_rows(cells)]


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday
