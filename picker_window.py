"""Single-month date picker window (tkinter) driven by NavigationController."""

from __future__ import annotations

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk
from typing import Callable

from calendar_logic import DAY_ABBR, CalendarDate, DayCell
from date_picker import ConfirmToday, NavigationController, StepMonth
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
CURSOR_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
PADDING_FG = "#AAAAAA"

MAX_WEEKS = 6


class _GridPanel:
    """Pre-allocated label pool for the weekday header + 6 week rows."""

    __slots__ = ("frame", "day_headers", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, on_click) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.day_headers: list[tk.Label] = []
        for col, abbr in enumerate(DAY_ABBR):
            fg = "#CC0000" if col in (0, 6) else "#333333"
            lbl = tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            )
            lbl.grid(row=0, column=col)
            self.day_headers.append(lbl)

        self.day_cells: list[list[tk.Label]] = []
        for r in range(MAX_WEEKS):
            row_cells: list[tk.Label] = []
            for c in range(7):
                cell = tk.Label(
                    self.frame, font=fonts["normal"], bg=GRID_BG, width=3,
                    borderwidth=1, relief="flat",
                )
                cell.grid(row=r + 1, column=c, padx=1, pady=1)
                cell.bind("<Button-1>", on_click)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class DatePickerWindow:
    """Month grid with keyboard navigation; commits go to ``on_commit``."""

    def __init__(self, on_commit: Callable[[CalendarDate], None] | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Pick a Date")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        settings = load_settings()
        self._saved_x: int | None = settings["window_x"]
        self._saved_y: int | None = settings["window_y"]
        self._host_on_commit = on_commit

        self.controller = NavigationController(
            show_today=settings["show_today"],
            padding_confirmable=settings["padding_confirmable"],
            on_commit=self._on_commit,
        )

        # Widget-to-cell mapping (filled during _refresh)
        self._widget_cells: dict[int, DayCell] = {}
        self._year_var = tk.StringVar(master=self.root)

        self._build_shell()
        self._refresh()

        for keysym in ("Return", "KP_Enter", "Left", "Right", "Up", "Down",
                       "Prior", "Next", "Home", "End"):
            self.root.bind(f"<KeyPress-{keysym}>", self._on_key)
        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")

    # ------------------------------------------------------------------
    # Build shell (once): nav bar + grid + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=6, pady=4)

        # Navigation row: ◀  Month [year]  ▶
        nav = tk.Frame(outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._dispatch(StepMonth(-1)))

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._dispatch(StepMonth(1)))

        self._month_label = tk.Label(
            nav, font=self.font_header, bg=HEADER_BG, fg="#333333", width=10,
        )
        self._month_label.pack(side="left", expand=True, fill="x", padx=4)

        year_spin = tk.Spinbox(
            nav, from_=date.min.year, to=date.max.year, width=5,
            font=self.font_normal, textvariable=self._year_var,
            command=self._on_year_change,
        )
        year_spin.pack(side="left", padx=4)
        year_spin.bind("<Return>", lambda _e: self._on_year_change() or "break")

        self._grid = _GridPanel(
            outer, {"bold": self.font_bold, "normal": self.font_normal},
            self._on_cell_click,
        )
        self._grid.frame.pack()

        if self.controller.show_today:
            btn_today = tk.Label(
                outer, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
                cursor="hand2",
            )
            btn_today.pack(pady=(4, 0))
            btn_today.bind("<Button-1>", lambda _e: self._dispatch(ConfirmToday()))

    # ------------------------------------------------------------------
    # Redraw the pooled cells from the controller's view
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        ctrl = self.controller
        self._widget_cells.clear()
        self._month_label.configure(text=ctrl.month_label)
        self._year_var.set(str(ctrl.cursor_date.year))

        today = ctrl.today()
        for r in range(MAX_WEEKS):
            for c in range(7):
                widget = self._grid.day_cells[r][c]
                if r >= len(ctrl.weeks):
                    widget.configure(text="", bg=GRID_BG, relief="flat", cursor="")
                    continue
                cell = ctrl.weeks[r][c]
                is_today = ctrl.is_today(cell, today)
                is_cursor = ctrl.is_cursor(cell)
                bg, fg = self._day_colors(
                    ctrl.is_selected(cell), is_cursor, is_today, cell.in_current_month,
                )
                widget.configure(
                    text=str(cell.day), bg=bg, fg=fg,
                    font=self.font_bold if is_today else self.font_normal,
                    relief="solid" if is_cursor else "flat",
                    cursor="" if ctrl.is_disabled(cell) else "hand2",
                )
                self._widget_cells[id(widget)] = cell

    @staticmethod
    def _day_colors(is_selected: bool, is_cursor: bool, is_today: bool,
                    in_month: bool) -> tuple[str, str]:
        if is_selected:
            return ACCENT, "white"
        if is_cursor:
            return CURSOR_BG, "black"
        if not in_month:
            return GRID_BG, PADDING_FG
        if is_today:
            return GRID_BG, ACCENT
        return GRID_BG, "black"

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _dispatch(self, command) -> None:
        self.controller.handle(command)
        self._refresh()

    def _on_key(self, event: tk.Event) -> str | None:
        if isinstance(event.widget, tk.Spinbox):
            return None
        if self.controller.handle_key(event.keysym):
            self._refresh()
            return "break"
        return None

    def _on_cell_click(self, event: tk.Event) -> None:
        cell = self._widget_cells.get(id(event.widget))
        if cell is None:
            return
        if self.controller.is_disabled(cell):
            # Padding cells still shift the view to their month
            self.controller.move_cursor_to(cell.date)
        else:
            self.controller.select(cell)
        self._refresh()

    def _on_year_change(self) -> None:
        try:
            year = int(self._year_var.get())
        except ValueError:
            self._year_var.set(str(self.controller.cursor_date.year))
            return
        self.controller.move_cursor_to_year(year)
        self._refresh()

    def _on_commit(self, committed: CalendarDate) -> None:
        # Keep selection and cursor in sync with what was committed
        self.controller.set_selected_date(committed)
        self._refresh()
        if self._host_on_commit is not None:
            self._host_on_commit(committed)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        if self.controller.selected_date is None:
            self.controller.reset()
        self._refresh()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._persist_position()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position: last saved spot, else bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        if self._saved_x is not None and self._saved_y is not None:
            x, y = self._saved_x, self._saved_y
        else:
            x = self.root.winfo_screenwidth() - self.root.winfo_reqwidth() - 12
            y = self.root.winfo_screenheight() - self.root.winfo_reqheight() - 60
        self.root.geometry(f"+{x}+{y}")

    def _persist_position(self) -> None:
        if not self.root.winfo_viewable():
            return
        self._saved_x = self.root.winfo_x()
        self._saved_y = self.root.winfo_y()
        settings = load_settings()
        settings["window_x"] = self._saved_x
        settings["window_y"] = self._saved_y
        try:
            save_settings(settings)
        except OSError as exc:
            logger.warning("Could not save window position: %s", exc)
