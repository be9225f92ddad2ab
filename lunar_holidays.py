"""Chinese lunar calendar and public-holiday lookups (via lunar_python)."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from lunar_python import Solar
from lunar_python.util import HolidayUtil

_FIRST_LUNAR_DAY = "初一"


@dataclass(frozen=True)
class HolidayStatus:
    """Official override for a date: a day off or a compensatory workday."""

    is_workday: bool
    name: str

    @property
    def badge(self) -> str:
        return "班" if self.is_workday else "休"


def solar_to_lunar_label(year: int, month: int, day: int) -> str:
    """Return the lunar day name, or the lunar month name on its first day.

    ``month`` is 1–12.
    """
    lunar = Solar.fromYmd(year, month, day).getLunar()
    lunar_day = lunar.getDayInChinese()
    if lunar_day == _FIRST_LUNAR_DAY:
        return f"{lunar.getMonthInChinese()}月"
    return lunar_day


def holiday_status_for(year: int, month: int, day: int) -> HolidayStatus | None:
    """Return the holiday/workday override for a date, or None.

    ``month`` is 1–12.
    """
    h = HolidayUtil.getHoliday(year, month, day)
    if h is None:
        return None
    return HolidayStatus(is_workday=bool(h.isWork()), name=h.getName())


def holidays_for_month(year: int, month: int) -> dict[date, HolidayStatus]:
    """Return {date: status} for every overridden day of the month (1–12)."""
    result: dict[date, HolidayStatus] = {}
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        status = holiday_status_for(year, month, day)
        if status is not None:
            result[date(year, month, day)] = status
    return result
