"""Single-month market-day calendar window (tkinter)."""

import logging
from datetime import date, datetime
from typing import Callable
from tkinter import font as tkfont
from tkinter import messagebox
import tkinter as tk

from calendar_logic import (
    WEEK_DAYS,
    CalendarCell,
    day_of_year,
    days_until_market_day,
    iso_week_numbers,
    ms_until_next_day,
)
from settings import load_settings, save_settings
from view_state import ViewState

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
MARKET_BG = "#C8E6C9"
MARKET_FG = "#1B5E20"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OUTSIDE_FG = "#BBBBBB"
WN_FG = "#888888"


class CalendarWindow:
    """Month view with market days highlighted."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        settings = load_settings()
        self.show_week_numbers: bool = settings["show_week_numbers"]
        self.view = ViewState(anchor=settings["anchor_date"],
                              clamp_days=settings["clamp_days"])
        self.root.title(self._title())

        # Canvas id -> date shown in it (filled by _refresh)
        self._widget_dates: dict[int, date] = {}
        # Called when today's market status may have changed (anchor or date)
        self.on_day_state_changed: Callable[[], None] | None = None
        self._midnight_after_id: str | None = None

        self._build_shell()
        self._refresh()
        self._schedule_midnight()

        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Microsoft YaHei UI" if "Microsoft YaHei UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=10)
        self.font_bold = tkfont.Font(family=base, size=10, weight="bold")
        self.font_header = tkfont.Font(family=base, size=12, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)

    def _title(self) -> str:
        return f"Market Calendar  Day: {day_of_year(self.view.today())}"

    # ------------------------------------------------------------------
    # Build shell (once) — nav bar + header + 6×7 cells + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=8, pady=6)

        # Navigation row: ◀  今天  起始日  ▶
        nav = tk.Frame(outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))
        self._nav_button(nav, "◀", self.font_nav, "left", self.go_prev)
        self._nav_button(nav, "今天", self.font_bold, "left", self.go_today, fg=ACCENT)
        self._nav_button(nav, "▶", self.font_nav, "right", self.go_next)
        self._nav_button(nav, "起始日", self.font_bold, "right", self.go_anchor, fg=ACCENT)

        self._header = tk.Label(outer, font=self.font_header, bg=HEADER_BG, fg="#333333")
        self._header.pack(fill="x", pady=(0, 2))

        grid = tk.Frame(outer, bg=GRID_BG)
        grid.pack()

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        cell_w, cell_h = _tmp.winfo_reqwidth(), _tmp.winfo_reqheight()
        _tmp.destroy()

        tk.Label(grid, text="Wk", font=self.font_bold, bg=GRID_BG, fg=WN_FG,
                 width=3).grid(row=0, column=0)
        for col, label in enumerate(WEEK_DAYS):
            fg = "#CC0000" if col >= 5 else "#333333"
            tk.Label(grid, text=label, font=self.font_bold, bg=GRID_BG, fg=fg,
                     width=3).grid(row=0, column=col + 1)

        self._week_nums: list[tk.Label] = []
        self._cells: list[tk.Canvas] = []
        for r in range(6):
            wn = tk.Label(grid, font=self.font_wn, bg=GRID_BG, fg=WN_FG, width=3)
            wn.grid(row=r + 1, column=0)
            self._week_nums.append(wn)
            for c in range(7):
                cell = tk.Canvas(grid, width=cell_w, height=cell_h, bg=GRID_BG,
                                 highlightthickness=0, borderwidth=0, cursor="hand2")
                cell.grid(row=r + 1, column=c + 1, padx=1, pady=1)
                cell.bind("<Button-1>", self._on_cell_click)
                self._cells.append(cell)

        self._footer_label = tk.Label(outer, font=self.font_normal, bg=GRID_BG,
                                      fg="#555555", justify="left")
        self._footer_label.pack(pady=(4, 0))

    @staticmethod
    def _nav_button(parent: tk.Frame, text: str, font, side: str, command,
                    fg: str = "black") -> tk.Label:
        btn = tk.Label(parent, text=text, font=font, bg=GRID_BG, fg=fg, cursor="hand2")
        btn.pack(side=side, padx=6)
        btn.bind("<Button-1>", lambda _e: command())
        return btn

    # ------------------------------------------------------------------
    # Redraw the month from the current view state
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        self._widget_dates.clear()
        self._header.configure(text=self.view.title)

        cells = self.view.cells
        weeks = iso_week_numbers(cells)
        for r, week in enumerate(weeks):
            self._week_nums[r].configure(
                text=str(week) if self.show_week_numbers else "")

        for canvas, cell in zip(self._cells, cells):
            selected = cell.date == self.view.selected_date
            bg, fg = self._day_colors(cell, selected)
            font = self.font_bold if cell.is_today or cell.is_market_day else self.font_normal
            self._draw_cell(canvas, str(cell.day_number), bg, fg, font)
            self._widget_dates[id(canvas)] = cell.date

        self._footer_label.configure(text=self._footer_text())

    # ------------------------------------------------------------------
    # Day colour logic
    # ------------------------------------------------------------------
    @staticmethod
    def _day_colors(cell: CalendarCell, selected: bool) -> tuple[str, str]:
        if cell.is_today:
            return ACCENT, "white"
        if selected:
            return SEL_BG, "black"
        if not cell.is_current_month:
            return (MARKET_BG if cell.is_market_day else GRID_BG), OUTSIDE_FG
        if cell.is_market_day:
            return MARKET_BG, MARKET_FG
        if cell.is_weekend:
            return GRID_BG, "#CC0000"
        return GRID_BG, "black"

    @staticmethod
    def _draw_cell(cell: tk.Canvas, text: str, bg: str, fg: str, font) -> None:
        cell.delete("all")
        w = cell.winfo_width()
        h = cell.winfo_height()
        if w <= 1:
            w = int(cell["width"]) + 2
        if h <= 1:
            h = int(cell["height"]) + 2
        cell.configure(bg=bg)
        cell.create_text(w // 2, h // 2, text=text, fill=fg, font=font)

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today = self.view.today()
        wait = days_until_market_day(today, self.view.anchor)
        if wait == 0:
            today_str = f"今天 {today.isoformat()}  集市日"
        else:
            today_str = f"今天 {today.isoformat()}  {wait} 天后集市"

        sel = self.view.selected_date
        if sel is None:
            return today_str
        status = "集市日" if self.view.selected_is_market_day else "非集市日"
        return f"已选 {sel.isoformat()}  {status}\n{today_str}"

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def _on_cell_click(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d:
            self.view.set_selected_date(d)
            self._refresh()

    # ESC clears selection first, then hides
    def _on_escape(self, _event: tk.Event) -> None:
        if self.view.selected_date is not None:
            self.view.set_selected_date(None)
            self._refresh()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def go_prev(self) -> None:
        self.view.prev_month()
        self._refresh()

    def go_next(self) -> None:
        self.view.next_month()
        self._refresh()

    def go_today(self) -> None:
        self.view.jump_to_today()
        self._refresh()

    def go_anchor(self) -> None:
        self.view.jump_to_anchor()
        self._refresh()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Anchor date (YYYY-MM-DD):", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        anchor_entry = tk.Entry(frame, width=12, font=self.font_normal)
        anchor_entry.insert(0, self.view.anchor.isoformat())
        anchor_entry.grid(row=0, column=1, padx=(8, 0), pady=4)

        clamp_var = tk.BooleanVar(value=self.view.clamp_days)
        tk.Checkbutton(frame, text="Keep month navigation inside the month",
                       variable=clamp_var, font=self.font_normal).grid(
            row=1, column=0, columnspan=2, sticky="w", pady=2,
        )
        wn_var = tk.BooleanVar(value=self.show_week_numbers)
        tk.Checkbutton(frame, text="Show week numbers", variable=wn_var,
                       font=self.font_normal).grid(
            row=2, column=0, columnspan=2, sticky="w", pady=2,
        )

        def on_ok() -> None:
            try:
                anchor = date.fromisoformat(anchor_entry.get().strip())
            except ValueError:
                messagebox.showerror("Settings", "Anchor date must be YYYY-MM-DD.",
                                     parent=dlg)
                return
            dlg.destroy()
            self.apply_settings(anchor, clamp_var.get(), wn_var.get())

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=3, column=0, columnspan=2, pady=(8, 0))
        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(side="left", padx=4)
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    def apply_settings(self, anchor: date, clamp_days: bool,
                       show_week_numbers: bool) -> None:
        self.view.anchor = anchor
        self.view.clamp_days = clamp_days
        self.show_week_numbers = show_week_numbers

        settings = load_settings()
        settings["anchor_date"] = anchor
        settings["clamp_days"] = clamp_days
        settings["show_week_numbers"] = show_week_numbers
        try:
            save_settings(settings)
        except OSError:
            logger.exception("Could not save settings")
        self._refresh()
        self._notify_day_state()

    # ------------------------------------------------------------------
    # Day rollover — redraw at midnight so "today" stays current
    # ------------------------------------------------------------------
    def _schedule_midnight(self) -> None:
        if self._midnight_after_id is not None:
            self.root.after_cancel(self._midnight_after_id)
        # +1s so date.today() has already rolled over
        delay = ms_until_next_day(datetime.now()) + 1000
        self._midnight_after_id = self.root.after(delay, self._on_midnight)

    def _on_midnight(self) -> None:
        self.root.title(self._title())
        self._refresh()
        self._notify_day_state()
        self._schedule_midnight()

    def _notify_day_state(self) -> None:
        if self.on_day_state_changed is not None:
            self.on_day_state_changed()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.view.jump_to_today()
        self.view.set_selected_date(None)
        self.root.title(self._title())
        self._refresh()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
