"""Planner state: view cursor, the three stores, and the per-render month view."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from calendar_logic import (
    MONTH_NAMES,
    DayKind,
    annotate,
    classify_day,
    date_key,
    month_grid,
    next_month,
    prev_month,
)
from lunar_holidays import HolidayStatus
from planner_store import (
    CalendarEvent,
    EventStore,
    WeeklySummaryStore,
    YearlyPlan,
    YearlyPlanStore,
)
from storage import FileStorage, PersistenceGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    week_index: int
    column: int
    day: int | None = None
    date: str | None = None
    is_today: bool = False
    events: tuple[CalendarEvent, ...] = ()
    lunar_label: str = ""
    holiday_status: HolidayStatus | None = None
    kind: DayKind | None = None

    @property
    def is_empty(self) -> bool:
        return self.day is None


@dataclass(frozen=True)
class WeekRow:
    week_index: int
    cells: tuple[GridCell, ...]
    summary: str


@dataclass(frozen=True)
class MonthView:
    year: int
    month_index: int
    weeks: tuple[WeekRow, ...]


class Planner:
    """Owns the view cursor and the stores; all UI actions go through here."""

    def __init__(self, gateway: PersistenceGateway, today: date | None = None,
                 yearly_view: bool = False) -> None:
        today = today or date.today()
        self.gateway = gateway
        self.year = today.year
        self.month_index = today.month - 1
        self.is_yearly_view = yearly_view
        self.events = EventStore.load(gateway)
        self.summaries = WeeklySummaryStore.load(gateway)
        self.plans = YearlyPlanStore(gateway, self.year)
        logger.info("Planner loaded: %d events, %d weekly summaries",
                    len(self.events), len(self.summaries))

    @classmethod
    def open(cls, data_dir: str | Path, **kwargs) -> "Planner":
        return cls(PersistenceGateway(FileStorage(data_dir)), **kwargs)

    @property
    def yearly_plan(self) -> YearlyPlan:
        return self.plans.active

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _move_to(self, year: int, month_index: int) -> None:
        year_changed = year != self.year
        self.year, self.month_index = year, month_index
        if year_changed:
            self.plans.load(year)

    def go_prev_month(self) -> None:
        self._move_to(*prev_month(self.year, self.month_index))

    def go_next_month(self) -> None:
        self._move_to(*next_month(self.year, self.month_index))

    def go_today(self, today: date | None = None) -> None:
        today = today or date.today()
        self._move_to(today.year, today.month - 1)

    def select_month(self, month_index: int) -> None:
        """Switch to a month of the current year (bottom tab strip)."""
        if not 0 <= month_index <= 11:
            raise ValueError(f"month_index out of range: {month_index}")
        self.is_yearly_view = False
        self._move_to(self.year, month_index)

    def set_year(self, year: int) -> None:
        self._move_to(year, self.month_index)

    def show_yearly_view(self) -> None:
        self.is_yearly_view = True

    def title(self) -> str:
        view = "年度规划" if self.is_yearly_view else MONTH_NAMES[self.month_index]
        return f"{self.year}年 {view}"

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_event(self, date_str: str | None, title: str,
                  time: str | None = None) -> CalendarEvent | None:
        return self.events.add(date_str, title, time)

    def edit_event(self, event_id: str, title: str, time: str | None = None,
                   completed: bool | None = None) -> CalendarEvent | None:
        return self.events.edit(event_id, title, time, completed)

    def toggle_event(self, event_id: str) -> CalendarEvent | None:
        return self.events.toggle_complete(event_id)

    def delete_event(self, event_id: str) -> bool:
        return self.events.delete(event_id)

    def update_summary(self, week_index: int, content: str) -> None:
        self.summaries.upsert(self.year, self.month_index, week_index, content)

    def summary_for_week(self, week_index: int) -> str:
        return self.summaries.get(self.year, self.month_index, week_index)

    def update_plan_field(self, field: str, value: str) -> YearlyPlan | None:
        return self.plans.update_field(self.year, field, value)

    # ------------------------------------------------------------------
    # Display data
    # ------------------------------------------------------------------
    def month_view(self, today: date | None = None) -> MonthView:
        """Everything the month grid needs: cells per week row plus summaries."""
        today = today or date.today()
        year, month_index = self.year, self.month_index
        summaries = self.summaries.summaries_for_month(year, month_index)

        weeks: list[WeekRow] = []
        for week_index, row in enumerate(month_grid(year, month_index, pad_last=True)):
            cells: list[GridCell] = []
            for column, day in enumerate(row):
                if day is None:
                    cells.append(GridCell(week_index=week_index, column=column))
                    continue
                key = date_key(year, month_index, day)
                info = annotate(year, month_index, day)
                kind = classify_day(year, month_index, day, info.holiday_status, today)
                cells.append(GridCell(
                    week_index=week_index,
                    column=column,
                    day=day,
                    date=key,
                    is_today=kind is DayKind.TODAY,
                    events=tuple(self.events.query_by_date(key)),
                    lunar_label=info.lunar_label,
                    holiday_status=info.holiday_status,
                    kind=kind,
                ))
            weeks.append(WeekRow(week_index=week_index, cells=tuple(cells),
                                 summary=summaries.get(week_index, "")))
        return MonthView(year=year, month_index=month_index, weeks=tuple(weeks))
