"""In-memory planner stores: events, weekly summaries and yearly plans.

Every mutating call writes the whole affected store back through the
persistence gateway before returning.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, NamedTuple

from calendar_logic import parse_date_key

if TYPE_CHECKING:
    from storage import PersistenceGateway

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Records
# ------------------------------------------------------------------
@dataclass(frozen=True)
class CalendarEvent:
    id: str
    date: str
    title: str
    time: str | None = None
    completed: bool = False

    @classmethod
    def new(cls, date: str, title: str, time: str | None = None) -> "CalendarEvent":
        return cls(id=str(uuid.uuid4()), date=date, title=title.strip(),
                   time=time or None)

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "date": self.date, "title": self.title}
        if self.time:
            data["time"] = self.time
        data["completed"] = self.completed
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CalendarEvent | None":
        """Build an event from decoded JSON; None if the entry is unusable."""
        if not isinstance(data, dict):
            return None
        event_id = data.get("id")
        day = data.get("date")
        title = data.get("title")
        if not isinstance(event_id, str) or not event_id:
            return None
        if not isinstance(day, str) or parse_date_key(day) is None:
            return None
        if not isinstance(title, str) or not title.strip():
            return None
        time = data.get("time")
        completed = data.get("completed")
        return cls(
            id=event_id,
            date=day,
            title=title,
            time=time if isinstance(time, str) and time else None,
            completed=completed if isinstance(completed, bool) else False,
        )


class SummaryKey(NamedTuple):
    """Identity of a weekly summary: the week row within a displayed month."""

    year: int
    month_index: int
    week_index: int

    @property
    def id(self) -> str:
        return f"{self.year}-{self.month_index}-{self.week_index}"

    @classmethod
    def parse(cls, summary_id: str) -> "SummaryKey | None":
        parts = summary_id.split("-")
        if len(parts) != 3:
            return None
        try:
            year, month_index, week_index = (int(p) for p in parts)
        except ValueError:
            return None
        if not 0 <= month_index <= 11 or week_index < 0:
            return None
        return cls(year, month_index, week_index)


@dataclass(frozen=True)
class WeeklySummary:
    key: SummaryKey
    content: str = ""

    @property
    def id(self) -> str:
        return self.key.id

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.key.id,
            "year": self.key.year,
            "weekIndex": self.key.week_index,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WeeklySummary | None":
        if not isinstance(data, dict) or not isinstance(data.get("id"), str):
            return None
        key = SummaryKey.parse(data["id"])
        if key is None:
            return None
        content = data.get("content", "")
        return cls(key=key, content=content if isinstance(content, str) else "")


PLAN_FIELDS = ("goals", "work", "life", "other")


@dataclass(frozen=True)
class YearlyPlan:
    year: int
    goals: str = ""
    work: str = ""
    life: str = ""
    other: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "goals": self.goals,
            "work": self.work,
            "life": self.life,
            "other": self.other,
        }

    @classmethod
    def from_dict(cls, data: Any, year: int) -> "YearlyPlan":
        """Build the plan for ``year``; missing or ill-typed fields are empty."""
        if not isinstance(data, dict):
            return cls(year=year)
        fields = {f: data[f] for f in PLAN_FIELDS if isinstance(data.get(f), str)}
        return cls(year=year, **fields)


# ------------------------------------------------------------------
# Stores
# ------------------------------------------------------------------
class EventStore:
    """Calendar events in insertion order, keyed by a generated id."""

    def __init__(self, gateway: "PersistenceGateway",
                 events: list[CalendarEvent] | None = None) -> None:
        self._gateway = gateway
        self._events: list[CalendarEvent] = list(events or [])

    @classmethod
    def load(cls, gateway: "PersistenceGateway") -> "EventStore":
        return cls(gateway, gateway.load_events())

    def _flush(self) -> None:
        self._gateway.save_events(self._events)

    def _index(self, event_id: str) -> int | None:
        return next((i for i, e in enumerate(self._events) if e.id == event_id), None)

    def __len__(self) -> int:
        return len(self._events)

    def all(self) -> list[CalendarEvent]:
        return list(self._events)

    def get(self, event_id: str) -> CalendarEvent | None:
        idx = self._index(event_id)
        return None if idx is None else self._events[idx]

    def add(self, date: str | None, title: str, time: str | None = None) -> CalendarEvent | None:
        """Create an event; no-op (None) without a date or with a blank title."""
        if not date or parse_date_key(date) is None or not title.strip():
            logger.debug("Rejected event add: date=%r title=%r", date, title)
            return None
        event = CalendarEvent.new(date, title, time)
        while self._index(event.id) is not None:
            event = replace(event, id=str(uuid.uuid4()))
        self._events.append(event)
        self._flush()
        return event

    def edit(self, event_id: str, title: str, time: str | None = None,
             completed: bool | None = None) -> CalendarEvent | None:
        """Change title, time and completion of an event.  The date never changes.

        ``completed=None`` keeps the current value.  Unknown id or blank title
        is a no-op returning None.
        """
        idx = self._index(event_id)
        if idx is None or not title.strip():
            logger.debug("Rejected event edit: id=%r title=%r", event_id, title)
            return None
        current = self._events[idx]
        updated = replace(
            current,
            title=title.strip(),
            time=time or None,
            completed=current.completed if completed is None else bool(completed),
        )
        self._events[idx] = updated
        self._flush()
        return updated

    def toggle_complete(self, event_id: str) -> CalendarEvent | None:
        idx = self._index(event_id)
        if idx is None:
            return None
        current = self._events[idx]
        self._events[idx] = replace(current, completed=not current.completed)
        self._flush()
        return self._events[idx]

    def delete(self, event_id: str) -> bool:
        idx = self._index(event_id)
        if idx is None:
            return False
        del self._events[idx]
        self._flush()
        return True

    def query_by_date(self, date: str) -> list[CalendarEvent]:
        return [e for e in self._events if e.date == date]

    def dates_with_events(self, year: int, month_index: int) -> set[int]:
        """Days of the month that carry at least one event."""
        days: set[int] = set()
        for e in self._events:
            d = parse_date_key(e.date)
            if d is not None and d.year == year and d.month == month_index + 1:
                days.add(d.day)
        return days


class WeeklySummaryStore:
    """Free-text notes per (year, month, week row), upserted on edit."""

    def __init__(self, gateway: "PersistenceGateway",
                 summaries: list[WeeklySummary] | None = None) -> None:
        self._gateway = gateway
        self._summaries: dict[SummaryKey, WeeklySummary] = {}
        for s in summaries or []:
            self._summaries[s.key] = s

    @classmethod
    def load(cls, gateway: "PersistenceGateway") -> "WeeklySummaryStore":
        return cls(gateway, gateway.load_summaries())

    def __len__(self) -> int:
        return len(self._summaries)

    def all(self) -> list[WeeklySummary]:
        return list(self._summaries.values())

    def upsert(self, year: int, month_index: int, week_index: int, content: str) -> WeeklySummary:
        key = SummaryKey(year, month_index, week_index)
        summary = WeeklySummary(key=key, content=content)
        # Assigning to an existing key keeps its position in the dict.
        self._summaries[key] = summary
        self._gateway.save_summaries(self.all())
        return summary

    def get(self, year: int, month_index: int, week_index: int) -> str:
        summary = self._summaries.get(SummaryKey(year, month_index, week_index))
        return summary.content if summary else ""

    def summaries_for_month(self, year: int, month_index: int) -> dict[int, str]:
        return {
            key.week_index: s.content
            for key, s in self._summaries.items()
            if key.year == year and key.month_index == month_index
        }


class YearlyPlanStore:
    """Holds the yearly plan of the currently viewed year."""

    def __init__(self, gateway: "PersistenceGateway", year: int) -> None:
        self._gateway = gateway
        self.active: YearlyPlan = gateway.load_yearly_plan(year)

    def load(self, year: int) -> YearlyPlan:
        """Make ``year`` the active plan, reading it from storage."""
        self.active = self._gateway.load_yearly_plan(year)
        return self.active

    def update_field(self, year: int, field: str, value: str) -> YearlyPlan | None:
        if field not in PLAN_FIELDS:
            logger.warning("Unknown yearly plan field %r ignored", field)
            return None
        if year != self.active.year:
            self.load(year)
        self.active = replace(self.active, **{field: value})
        self._gateway.save_yearly_plan(year, self.active)
        return self.active
