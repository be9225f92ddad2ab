"""Pure calendar calculations — no UI dependencies.

Months are 0-based (``month_index`` 0–11) throughout; weeks start on Sunday.
"""

from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from lunar_holidays import HolidayStatus, holiday_status_for, solar_to_lunar_label

DAY_NAMES = ["星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六"]
MONTH_NAMES = [f"{m}月" for m in range(1, 13)]

Cell = int | None


def date_key(year: int, month_index: int, day: int) -> str:
    """Canonical ``YYYY-MM-DD`` form of a date."""
    return f"{year:04d}-{month_index + 1:02d}-{day:02d}"


def parse_date_key(key: str) -> date | None:
    """Inverse of date_key; None if the string is not a valid date."""
    try:
        d = date.fromisoformat(key)
    except (TypeError, ValueError):
        return None
    return d if d.isoformat() == key else None


def days_in_month(year: int, month_index: int) -> int:
    return calendar.monthrange(year, month_index + 1)[1]


def first_weekday(year: int, month_index: int) -> int:
    """Weekday of day 1, with 0 = Sunday."""
    monday_based = calendar.monthrange(year, month_index + 1)[0]
    return (monday_based + 1) % 7


def month_cells(year: int, month_index: int) -> list[Cell]:
    """Day numbers of the month, left-padded with None up to the weekday of day 1."""
    cells: list[Cell] = [None] * first_weekday(year, month_index)
    cells.extend(range(1, days_in_month(year, month_index) + 1))
    return cells


@lru_cache(maxsize=64)
def _grid(year: int, month_index: int, pad_last: bool) -> tuple[tuple[Cell, ...], ...]:
    cells = month_cells(year, month_index)
    if pad_last and len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))
    return tuple(tuple(cells[i:i + 7]) for i in range(0, len(cells), 7))


def month_grid(year: int, month_index: int, pad_last: bool = False) -> list[list[Cell]]:
    """Return the month as week rows of 7 cells (the last row may be shorter).

    Rows are consecutive slices of the padded cell list, so day 1 always
    sits in the column of its weekday.  With ``pad_last`` the final row is
    filled up to 7 with None.
    """
    return [list(row) for row in _grid(year, month_index, pad_last)]


def prev_month(year: int, month_index: int) -> tuple[int, int]:
    """Return (year, month_index) for one month earlier."""
    if month_index == 0:
        return year - 1, 11
    return year, month_index - 1


def next_month(year: int, month_index: int) -> tuple[int, int]:
    """Return (year, month_index) for one month later."""
    if month_index == 11:
        return year + 1, 0
    return year, month_index + 1


# ------------------------------------------------------------------
# Day annotation
# ------------------------------------------------------------------
class DayKind(enum.Enum):
    """Display category of a day, listed from highest precedence down."""

    TODAY = "today"
    HOLIDAY_REST = "holiday_rest"
    HOLIDAY_WORKDAY = "holiday_workday"
    WEEKEND = "weekend"
    WORKDAY = "workday"


@dataclass(frozen=True)
class DayAnnotation:
    lunar_label: str
    holiday_status: HolidayStatus | None


def annotate(year: int, month_index: int, day: int) -> DayAnnotation:
    """Lunar label and holiday override for a date."""
    month = month_index + 1
    return DayAnnotation(
        lunar_label=solar_to_lunar_label(year, month, day),
        holiday_status=holiday_status_for(year, month, day),
    )


def is_weekend_column(column: int) -> bool:
    return column in (0, 6)


def classify_day(year: int, month_index: int, day: int,
                 holiday_status: HolidayStatus | None = None,
                 today: date | None = None) -> DayKind:
    """Combine today / holiday override / weekend into one category.

    Precedence: today > holiday override > Saturday/Sunday > plain workday.
    """
    d = date(year, month_index + 1, day)
    if d == (today or date.today()):
        return DayKind.TODAY
    if holiday_status is not None:
        if holiday_status.is_workday:
            return DayKind.HOLIDAY_WORKDAY
        return DayKind.HOLIDAY_REST
    column = (d.weekday() + 1) % 7
    if is_weekend_column(column):
        return DayKind.WEEKEND
    return DayKind.WORKDAY
