import pytest

import calendar_logic
from lunar_holidays import HolidayStatus
from storage import FileStorage, PersistenceGateway


@pytest.fixture
def storage(tmp_path):
    return FileStorage(tmp_path / "data")


@pytest.fixture
def gateway(storage):
    return PersistenceGateway(storage)


@pytest.fixture
def fake_lunar(monkeypatch):
    """Pin the lunar/holiday lookups; returns a dict to register overrides in.

    Keys are (year, month 1–12, day) tuples, values HolidayStatus.
    """
    overrides: dict[tuple[int, int, int], HolidayStatus] = {}
    monkeypatch.setattr(calendar_logic, "solar_to_lunar_label",
                        lambda y, m, d: f"L{m}/{d}")
    monkeypatch.setattr(calendar_logic, "holiday_status_for",
                        lambda y, m, d: overrides.get((y, m, d)))
    return overrides
