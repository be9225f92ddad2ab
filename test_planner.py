"""Tests for the planner controller and the month view it produces."""

from datetime import date

import pytest

from calendar_logic import DayKind
from lunar_holidays import HolidayStatus
from planner import Planner
from planner_store import YearlyPlan

TODAY = date(2024, 5, 15)


@pytest.fixture
def planner(gateway, fake_lunar):
    return Planner(gateway, today=TODAY)


class TestNavigation:
    def test_starts_on_today(self, planner):
        assert (planner.year, planner.month_index) == (2024, 4)
        assert planner.title() == "2024年 5月"

    def test_prev_next_wrap_across_years(self, planner):
        planner.select_month(0)
        planner.go_prev_month()
        assert (planner.year, planner.month_index) == (2023, 11)
        planner.go_next_month()
        assert (planner.year, planner.month_index) == (2024, 0)

    def test_year_change_loads_that_years_plan(self, planner, gateway):
        gateway.save_yearly_plan(2023, YearlyPlan(year=2023, goals="old goals"))
        planner.update_plan_field("goals", "new goals")

        planner.select_month(0)
        planner.go_prev_month()
        assert planner.yearly_plan.goals == "old goals"

        planner.go_today(TODAY)
        assert planner.yearly_plan == YearlyPlan(year=2024, goals="new goals")

    def test_yearly_view_toggle(self, planner):
        planner.show_yearly_view()
        assert planner.is_yearly_view
        assert planner.title() == "2024年 年度规划"
        planner.select_month(2)
        assert not planner.is_yearly_view
        assert planner.month_index == 2

    def test_select_month_out_of_range(self, planner):
        with pytest.raises(ValueError):
            planner.select_month(12)

    def test_set_year_keeps_month(self, planner):
        planner.set_year(2030)
        assert (planner.year, planner.month_index) == (2030, 4)
        assert planner.yearly_plan.year == 2030


class TestMutations:
    def test_summary_is_scoped_to_the_cursor(self, planner):
        planner.update_summary(0, "May week one")
        assert planner.summary_for_week(0) == "May week one"
        planner.go_next_month()
        assert planner.summary_for_week(0) == ""
        assert planner.summaries.get(2024, 4, 0) == "May week one"

    def test_event_pass_throughs(self, planner):
        event = planner.add_event("2024-05-01", "Team sync", "09:00")
        assert planner.toggle_event(event.id).completed is True
        assert planner.edit_event(event.id, "Retro").title == "Retro"
        assert planner.delete_event(event.id) is True
        assert planner.events.all() == []

    def test_state_survives_reopen(self, tmp_path, fake_lunar):
        first = Planner.open(tmp_path, today=TODAY)
        first.add_event("2024-05-01", "Team sync")
        first.update_summary(1, "notes")
        first.update_plan_field("life", "sleep more")

        second = Planner.open(tmp_path, today=TODAY)
        assert [e.title for e in second.events.query_by_date("2024-05-01")] == ["Team sync"]
        assert second.summary_for_week(1) == "notes"
        assert second.yearly_plan.life == "sleep more"


class TestMonthView:
    def test_shape_and_padding(self, planner):
        view = planner.month_view(today=TODAY)
        # May 2024 starts on a Wednesday and spans five rows
        assert len(view.weeks) == 5
        assert all(len(w.cells) == 7 for w in view.weeks)
        first_row = view.weeks[0].cells
        assert [c.day for c in first_row] == [None, None, None, 1, 2, 3, 4]
        assert [c.week_index for c in first_row] == [0] * 7
        assert view.weeks[-1].cells[-1].is_empty

    def test_cell_contents(self, planner, fake_lunar):
        fake_lunar[(2024, 5, 1)] = HolidayStatus(is_workday=False, name="劳动节")
        event = planner.add_event("2024-05-01", "Team sync", "09:00")
        planner.update_summary(2, "week three")

        view = planner.month_view(today=TODAY)
        may_first = view.weeks[0].cells[3]
        assert may_first.date == "2024-05-01"
        assert may_first.events == (event,)
        assert may_first.lunar_label == "L5/1"
        assert may_first.kind is DayKind.HOLIDAY_REST
        assert view.weeks[2].summary == "week three"
        assert view.weeks[0].summary == ""

    def test_day_kinds(self, planner):
        view = planner.month_view(today=TODAY)
        by_day = {c.day: c for w in view.weeks for c in w.cells if c.day}
        assert by_day[15].is_today and by_day[15].kind is DayKind.TODAY
        assert by_day[18].kind is DayKind.WEEKEND
        assert by_day[20].kind is DayKind.WORKDAY
        assert not by_day[20].is_today
