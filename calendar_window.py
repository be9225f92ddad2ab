"""Planner window (tkinter): month grid with weekly summaries, and yearly plan view."""

from datetime import date
from tkinter import font as tkfont
import tkinter as tk

from calendar_logic import DAY_NAMES, MONTH_NAMES, DayKind
from planner import GridCell, Planner, WeekRow
from planner_store import CalendarEvent
from settings import load_settings, save_settings

# Colours
ACCENT = "#4F46E5"
GRID_BG = "white"
HEADER_BG = "#F8FAFC"
EMPTY_BG = "#F8FAFC"
SUMMARY_BG = "#F3E5F5"
MUTED_FG = "#94A3B8"
TEXT_FG = "#334155"

KIND_BG = {
    DayKind.TODAY: "#EEF2FF",
    DayKind.HOLIDAY_REST: "#F1F8F1",
    DayKind.HOLIDAY_WORKDAY: "#FFF9F9",
    DayKind.WEEKEND: "#F1F8F1",
    DayKind.WORKDAY: GRID_BG,
}

PLAN_SECTIONS = [
    ("goals", "核心目标", "#4F46E5"),
    ("work", "工作学习", "#059669"),
    ("life", "生活健康", "#E11D48"),
    ("other", "其他事项", "#D97706"),
]

CELL_WIDTH = 150
CELL_HEIGHT = 110


class EventDialog:
    """Modal add/edit dialog for one event."""

    def __init__(self, parent: tk.Tk, fonts: dict, date_str: str,
                 event: CalendarEvent | None, on_save) -> None:
        self._on_save = on_save
        self._event = event

        self.top = tk.Toplevel(parent)
        self.top.title(f"{'修改日程' if event else '添加日程'} - {date_str}")
        self.top.resizable(False, False)
        self.top.transient(parent)
        self.top.grab_set()

        frame = tk.Frame(self.top, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="事项内容", font=fonts["bold"]).grid(row=0, column=0, sticky="w")
        self.title_var = tk.StringVar(value=event.title if event else "")
        title_entry = tk.Entry(frame, textvariable=self.title_var, width=32, font=fonts["normal"])
        title_entry.grid(row=1, column=0, sticky="we", pady=(0, 6))
        title_entry.focus_set()

        tk.Label(frame, text="时间 (可选)", font=fonts["bold"]).grid(row=2, column=0, sticky="w")
        self.time_var = tk.StringVar(value=(event.time or "") if event else "")
        tk.Entry(frame, textvariable=self.time_var, width=32, font=fonts["normal"]).grid(
            row=3, column=0, sticky="we", pady=(0, 6),
        )

        self.completed_var = tk.BooleanVar(value=event.completed if event else False)
        if event is not None:
            tk.Checkbutton(
                frame, text="标记为已完成", variable=self.completed_var, font=fonts["normal"],
            ).grid(row=4, column=0, sticky="w")

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=5, column=0, pady=(8, 0), sticky="e")
        tk.Button(btn_frame, text="取消", width=8, command=self.top.destroy).pack(
            side="left", padx=4,
        )
        self.save_btn = tk.Button(btn_frame, text="保存", width=8, command=self._save)
        self.save_btn.pack(side="left", padx=4)

        self.title_var.trace_add("write", lambda *_a: self._update_save_state())
        self._update_save_state()
        self.top.bind("<Return>", lambda _e: self._save())
        self.top.bind("<Escape>", lambda _e: self.top.destroy())

    def _update_save_state(self) -> None:
        state = "normal" if self.title_var.get().strip() else "disabled"
        self.save_btn.configure(state=state)

    def _save(self) -> None:
        if not self.title_var.get().strip():
            return
        self._on_save(self.title_var.get(), self.time_var.get(), self.completed_var.get())
        self.top.destroy()


class CalendarWindow:
    """Main planner window."""

    def __init__(self, planner: Planner) -> None:
        self.planner = planner
        self.root = tk.Tk()
        self.root.configure(bg=GRID_BG)
        self._setup_fonts()

        settings = load_settings()
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]
        self.planner.is_yearly_view = settings["yearly_view"]

        self._title_label: tk.Label | None = None
        self._nav_frame: tk.Frame | None = None
        self._content: tk.Frame | None = None
        self._tabs: list[tk.Label] = []
        self._build_shell()
        self.refresh()

        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Microsoft YaHei" if "Microsoft YaHei" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_small = tkfont.Font(family=base, size=8)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_title = tkfont.Font(family=base, size=14, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.fonts = {"normal": self.font_normal, "bold": self.font_bold}

    # ------------------------------------------------------------------
    # Build shell (once) — header + content placeholder + tab strip
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        header = tk.Frame(self.root, bg=GRID_BG)
        header.pack(fill="x", padx=12, pady=6)

        self._title_label = tk.Label(header, font=self.font_title, bg=GRID_BG, fg=TEXT_FG)
        self._title_label.pack(side="left")

        self._nav_frame = tk.Frame(header, bg=GRID_BG)
        self._nav_frame.pack(side="right")
        for text, font, command in (
            ("◀", self.font_nav, self._go_prev),
            ("今天", self.font_bold, self._go_today),
            ("▶", self.font_nav, self._go_next),
        ):
            btn = tk.Label(self._nav_frame, text=text, font=font, bg=GRID_BG,
                           fg=ACCENT, cursor="hand2")
            btn.pack(side="left", padx=6)
            btn.bind("<Button-1>", lambda _e, cmd=command: cmd())

        self._content = tk.Frame(self.root, bg=GRID_BG)
        self._content.pack(fill="both", expand=True)

        tab_bar = tk.Frame(self.root, bg=HEADER_BG)
        tab_bar.pack(fill="x", side="bottom")
        labels = ["今年规划"] + MONTH_NAMES
        for idx, text in enumerate(labels):
            tab = tk.Label(tab_bar, text=text, font=self.font_normal, bg=HEADER_BG,
                           padx=10, pady=4, cursor="hand2")
            tab.pack(side="left")
            tab.bind("<Button-1>", lambda _e, i=idx: self._on_tab(i - 1))
            self._tabs.append(tab)

    # ------------------------------------------------------------------
    # Rebuild content for the current view
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self.root.title(f"Lunar Planner  {self.planner.title()}")
        self._title_label.configure(text=self.planner.title())
        if self.planner.is_yearly_view:
            self._nav_frame.pack_forget()
        else:
            self._nav_frame.pack(side="right")

        for child in self._content.winfo_children():
            child.destroy()
        if self.planner.is_yearly_view:
            self._build_yearly_view()
        else:
            self._build_month_view()
        self._update_tabs()

    def _update_tabs(self) -> None:
        active = -1 if self.planner.is_yearly_view else self.planner.month_index
        for idx, tab in enumerate(self._tabs):
            selected = idx - 1 == active
            tab.configure(bg=GRID_BG if selected else HEADER_BG,
                          fg=ACCENT if selected else "#64748B")

    def _build_month_view(self) -> None:
        grid = tk.Frame(self._content, bg="#E2E8F0")
        grid.pack(padx=8, pady=4)

        for col, name in enumerate(DAY_NAMES + ["周总结"]):
            bg = SUMMARY_BG if col == 7 else HEADER_BG
            tk.Label(grid, text=name, font=self.font_bold, bg=bg, fg=TEXT_FG,
                     pady=4).grid(row=0, column=col, sticky="nsew", padx=1, pady=1)

        view = self.planner.month_view()
        for week in view.weeks:
            for cell in week.cells:
                self._build_cell(grid, cell)
            self._build_summary(grid, week)

    def _build_cell(self, parent: tk.Frame, cell: GridCell) -> None:
        bg = EMPTY_BG if cell.is_empty else KIND_BG[cell.kind]
        frame = tk.Frame(parent, bg=bg, width=CELL_WIDTH, height=CELL_HEIGHT)
        frame.grid(row=cell.week_index + 1, column=cell.column, sticky="nsew", padx=1, pady=1)
        frame.grid_propagate(False)
        frame.pack_propagate(False)
        if cell.is_empty:
            return

        top = tk.Frame(frame, bg=bg)
        top.pack(fill="x", padx=4, pady=(2, 0))
        day_fg = "white" if cell.is_today else (ACCENT if cell.events else "#64748B")
        day_bg = ACCENT if cell.is_today else bg
        tk.Label(top, text=str(cell.day), font=self.font_bold, bg=day_bg, fg=day_fg).pack(side="left")
        tk.Label(top, text=cell.lunar_label, font=self.font_small, bg=bg,
                 fg=ACCENT if cell.is_today else MUTED_FG).pack(side="left", padx=(4, 0))
        if cell.holiday_status is not None:
            status = cell.holiday_status
            tk.Label(top, text=status.badge, font=self.font_small,
                     bg="#F3E8FF" if not status.is_workday else HEADER_BG,
                     fg="#A855F7").pack(side="right")

        for event in cell.events:
            self._build_event_row(frame, bg, event)

        for widget in (frame, top):
            widget.bind("<Button-1>", lambda _e, d=cell.date: self._open_add(d))

    def _build_event_row(self, parent: tk.Frame, bg: str, event: CalendarEvent) -> None:
        row = tk.Frame(parent, bg=bg)
        row.pack(fill="x", padx=4)
        fg = MUTED_FG if event.completed else TEXT_FG

        box = tk.Label(row, text="☑" if event.completed else "☐",
                       font=self.font_normal, bg=bg, fg=fg, cursor="hand2")
        box.pack(side="left")
        box.bind("<Button-1>", lambda _e, i=event.id: self._toggle(i))

        text = event.title if not event.time else f"{event.title}  {event.time}"
        lbl = tk.Label(row, text=text, font=self.font_small, bg=bg, fg=fg,
                       anchor="w", cursor="hand2")
        lbl.pack(side="left", fill="x", expand=True)
        lbl.bind("<Button-1>", lambda _e, ev=event: self._open_edit(ev))

        close = tk.Label(row, text="×", font=self.font_small, bg=bg,
                         fg=MUTED_FG, cursor="hand2")
        close.pack(side="right")
        close.bind("<Button-1>", lambda _e, i=event.id: self._delete(i))

    def _build_summary(self, parent: tk.Frame, week: WeekRow) -> None:
        text = tk.Text(parent, width=20, height=6, font=self.font_normal,
                       bg=GRID_BG, fg=TEXT_FG, relief="flat", wrap="word")
        text.grid(row=week.week_index + 1, column=7, sticky="nsew", padx=1, pady=1)
        text.insert("1.0", week.summary)

        def _on_change(_e, w=text, idx=week.week_index) -> None:
            content = w.get("1.0", "end-1c")
            if content != self.planner.summary_for_week(idx):
                self.planner.update_summary(idx, content)

        text.bind("<KeyRelease>", _on_change)

    def _build_yearly_view(self) -> None:
        wrap = tk.Frame(self._content, bg=GRID_BG)
        wrap.pack(padx=16, pady=12, fill="both", expand=True)
        plan = self.planner.yearly_plan
        for i, (field, label, color) in enumerate(PLAN_SECTIONS):
            box = tk.LabelFrame(wrap, text=label, font=self.font_bold, fg=color,
                                bg=GRID_BG, padx=8, pady=6)
            box.grid(row=i // 2, column=i % 2, padx=8, pady=8, sticky="nsew")
            text = tk.Text(box, width=48, height=12, font=self.font_normal,
                           bg=HEADER_BG, fg=TEXT_FG, relief="flat", wrap="word")
            text.pack(fill="both", expand=True)
            text.insert("1.0", getattr(plan, field))

            def _on_change(_e, w=text, f=field) -> None:
                content = w.get("1.0", "end-1c")
                if content != getattr(self.planner.yearly_plan, f):
                    self.planner.update_plan_field(f, content)

            text.bind("<KeyRelease>", _on_change)
        wrap.columnconfigure(0, weight=1)
        wrap.columnconfigure(1, weight=1)

    # ------------------------------------------------------------------
    # Event actions
    # ------------------------------------------------------------------
    def _open_add(self, date_str: str) -> None:
        def _save(title: str, time: str, _completed: bool) -> None:
            self.planner.add_event(date_str, title, time)
            self.refresh()

        EventDialog(self.root, self.fonts, date_str, None, _save)

    def _open_edit(self, event: CalendarEvent) -> None:
        def _save(title: str, time: str, completed: bool) -> None:
            self.planner.edit_event(event.id, title, time, completed)
            self.refresh()

        EventDialog(self.root, self.fonts, event.date, event, _save)

    def _toggle(self, event_id: str) -> None:
        self.planner.toggle_event(event_id)
        self.refresh()

    def _delete(self, event_id: str) -> None:
        self.planner.delete_event(event_id)
        self.refresh()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _go_prev(self) -> None:
        self.planner.go_prev_month()
        self.refresh()

    def _go_next(self) -> None:
        self.planner.go_next_month()
        self.refresh()

    def _go_today(self) -> None:
        self.planner.go_today()
        self.refresh()

    def _on_tab(self, month_index: int) -> None:
        if month_index < 0:
            self.planner.show_yearly_view()
        else:
            self.planner.select_month(month_index)
        self.refresh()

    def open_yearly_plan(self) -> None:
        self.planner.show_yearly_view()
        self.refresh()
        self.show()

    # ------------------------------------------------------------------
    # Persist window size and last view
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def persist_state(self) -> None:
        settings = load_settings()
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        settings["yearly_view"] = self.planner.is_yearly_view
        save_settings(settings)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        if not self.planner.is_yearly_view:
            self.planner.go_today(date.today())
        self.refresh()
        self.root.deiconify()
        if self._saved_width and self._saved_height:
            self.root.geometry(f"{self._saved_width}x{self._saved_height}")
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.persist_state()
        self.root.withdraw()
