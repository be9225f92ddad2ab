"""JSON persistence for planner data.

``FileStorage`` is a small string key-value store (one file per key);
``PersistenceGateway`` encodes the planner stores into it.  Reading never
fails: a missing or corrupt entry comes back as the empty/default value.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Iterable

from planner_store import CalendarEvent, WeeklySummary, YearlyPlan

logger = logging.getLogger(__name__)

EVENTS_KEY = "calendar_events"
SUMMARIES_KEY = "calendar_summaries"

_KEY_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


def yearly_plan_key(year: int) -> str:
    return f"yearly_plan_{year}"


class FileStorage:
    """String values stored as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def set_item(self, key: str, value: str) -> None:
        """Write ``value`` atomically (temp file + rename)."""
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}-", suffix=".json",
                                        dir=str(self.directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    pass

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json")
                      if _KEY_RE.match(p.stem))


class PersistenceGateway:
    """Load/save the three planner stores under their storage keys."""

    def __init__(self, storage: FileStorage) -> None:
        self.storage = storage

    def _read_json(self, key: str) -> Any:
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Discarding corrupt entry %r: %s", key, exc)
            return None

    def _write_json(self, key: str, value: Any) -> None:
        self.storage.set_item(key, json.dumps(value, ensure_ascii=False, indent=2))
        logger.debug("Saved %s", key)

    def _read_list(self, key: str) -> list[Any]:
        decoded = self._read_json(key)
        if decoded is None:
            return []
        if not isinstance(decoded, list):
            logger.warning("Discarding entry %r: expected a list, got %s",
                           key, type(decoded).__name__)
            return []
        return decoded

    # --- events -------------------------------------------------------
    def save_events(self, events: Iterable[CalendarEvent]) -> None:
        self._write_json(EVENTS_KEY, [e.as_dict() for e in events])

    def load_events(self) -> list[CalendarEvent]:
        events: list[CalendarEvent] = []
        seen: set[str] = set()
        for item in self._read_list(EVENTS_KEY):
            event = CalendarEvent.from_dict(item)
            if event is None or event.id in seen:
                logger.warning("Skipping invalid event record: %r", item)
                continue
            seen.add(event.id)
            events.append(event)
        return events

    # --- weekly summaries ---------------------------------------------
    def save_summaries(self, summaries: Iterable[WeeklySummary]) -> None:
        self._write_json(SUMMARIES_KEY, [s.as_dict() for s in summaries])

    def load_summaries(self) -> list[WeeklySummary]:
        summaries: list[WeeklySummary] = []
        for item in self._read_list(SUMMARIES_KEY):
            summary = WeeklySummary.from_dict(item)
            if summary is None:
                logger.warning("Skipping invalid summary record: %r", item)
                continue
            summaries.append(summary)
        return summaries

    # --- yearly plans -------------------------------------------------
    def save_yearly_plan(self, year: int, plan: YearlyPlan) -> None:
        self._write_json(yearly_plan_key(year), plan.as_dict())

    def load_yearly_plan(self, year: int) -> YearlyPlan:
        return YearlyPlan.from_dict(self._read_json(yearly_plan_key(year)), year)
