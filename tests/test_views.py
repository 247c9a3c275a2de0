"""Tests for the week and month view builders."""

import math
from dataclasses import replace
from datetime import datetime

import pytest

from calendar_layout import (
    CalendarEvent,
    DaysOfWeek,
    TimeOfDay,
    ViewConfig,
    build_month_view,
    build_week_header,
    build_week_view,
)


@pytest.fixture
def full_day_config():
    return ViewConfig(day_start=TimeOfDay(0, 0), day_end=TimeOfDay(23, 59), segment_height=30)


class TestWeekView:
    def test_period(self, adapter, week_config):
        events = [
            CalendarEvent(start=datetime(2016, 6, 27), end=datetime(2016, 6, 29), all_day=True),
            CalendarEvent(start=datetime(2017, 6, 27), end=datetime(2017, 6, 29), all_day=True),
        ]
        view = build_week_view(adapter, events=events, view_date=datetime(2016, 6, 27), config=week_config)
        assert view.period.start == adapter.start_of_day(datetime(2016, 6, 26))
        assert view.period.end == adapter.end_of_day(datetime(2016, 7, 2))
        assert view.period.events == [events[0]]

    def test_period_with_excluded_days(self, adapter):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY, DaysOfWeek.SATURDAY))
        view = build_week_view(adapter, events=[], view_date=datetime(2018, 8, 1), config=config)
        assert view.period.start == adapter.start_of_day(datetime(2018, 7, 30))
        assert view.period.end == adapter.end_of_day(datetime(2018, 8, 3))
        assert len(view.hour_columns) == 5

    def test_custom_period(self, adapter, week_config):
        view = build_week_view(
            adapter, events=[], view_date=datetime(2018, 7, 27), config=week_config,
            view_start=datetime(2018, 7, 20), view_end=datetime(2018, 7, 29),
        )
        assert view.period.start == adapter.start_of_day(datetime(2018, 7, 20))
        assert view.period.end == adapter.end_of_day(datetime(2018, 7, 29))

    def test_hour_columns_follow_day_start_and_end(self, adapter, week_config):
        view = build_week_view(adapter, events=None, view_date=datetime(2016, 6, 28), config=week_config)
        assert len(view.hour_columns) == 7
        assert view.hour_columns[0].date == adapter.start_of_day(datetime(2016, 6, 26))
        assert [len(hour.segments) for hour in view.hour_columns[0].hours] == [2, 2, 1]

    def test_sanitises_day_start_and_end(self, adapter):
        today = adapter.now()
        events = [
            CalendarEvent(start=adapter.start_of_day(adapter.add_days(today, -1)),
                          end=adapter.end_of_day(adapter.add_days(today, -1))),
            CalendarEvent(start=today, end=adapter.add_days(today, 1)),
        ]
        config = ViewConfig(day_start=TimeOfDay(-1000, -1000), day_end=TimeOfDay(24, 3000))
        view = build_week_view(
            adapter, events=events, view_date=today, config=config,
            view_start=adapter.start_of_day(today), view_end=adapter.end_of_day(today),
        )
        assert view.period.start == adapter.start_of_day(today)
        assert view.period.end == adapter.end_of_day(today)
        assert view.period.events == [events[1]]

    def test_positions_events_as_percentages(self, adapter, full_day_config):
        today = adapter.start_of_day(adapter.now())
        events = [
            CalendarEvent(start=adapter.add_days(today, -1), end=adapter.add_hours(today, 16), title="Column 1"),
            CalendarEvent(start=today, end=adapter.add_minutes(today, 30), title="Column 2 a"),
            CalendarEvent(start=adapter.add_hours(today, 2), end=adapter.add_hours(today, 14), title="Column 2 b"),
            CalendarEvent(start=adapter.add_hours(today, 17), end=adapter.add_hours(today, 18), title="Both"),
        ]
        columns = build_week_view(adapter, events=events, view_date=today, config=full_day_config).hour_columns
        placed = columns[2].events
        assert [e.event for e in placed] == events
        assert [(e.left, e.width) for e in placed] == [(0, 50), (50, 50), (50, 50), (0, 100)]

    def test_same_start_events_get_separate_columns(self, adapter, full_day_config):
        date = adapter.start_of_week(adapter.now())
        events = [CalendarEvent(start=date, title="Title") for _ in range(4)]
        columns = build_week_view(adapter, events=events, view_date=date, config=full_day_config).hour_columns
        assert [e.left for e in columns[0].events] == [0, 25, 50, 75]

    def test_events_starting_close_to_each_other(self, adapter, full_day_config):
        events = [
            CalendarEvent(start=datetime(2018, 10, 13, 0, 5), end=datetime(2018, 10, 20), title="Event 1"),
            CalendarEvent(start=datetime(2018, 10, 13, 0, 10), end=datetime(2018, 10, 20), title="Event 2"),
        ]
        columns = build_week_view(
            adapter, events=events, view_date=datetime(2018, 10, 12), config=full_day_config
        ).hour_columns
        assert [e.width for e in columns[6].events] == [50, 50]

    def test_events_overlapping_in_multiple_columns(self, adapter, full_day_config):
        a_start, a_end = datetime(2018, 10, 23, 8, 15), datetime(2018, 10, 23, 11)
        b_start, b_end = datetime(2018, 10, 23, 11), datetime(2018, 10, 23, 14)
        events = [
            CalendarEvent(start=b_start, end=b_end, title="Event 1"),
            CalendarEvent(start=a_start, end=a_end, title="Event 2"),
            CalendarEvent(start=b_start, end=b_end, title="Event 3"),
            CalendarEvent(start=a_start, end=b_end, title="Event 4"),
        ]
        columns = build_week_view(
            adapter, events=events, view_date=datetime(2018, 10, 23, 8, 15), config=full_day_config
        ).hour_columns
        assert columns[2].events[0].width == 100 / 3

    def test_event_widths_fill_sibling_spaces(self, adapter, full_day_config):
        events = [
            CalendarEvent(start=datetime(2018, 10, 23, 8, 30), end=datetime(2018, 10, 23, 9), title="A"),
            CalendarEvent(start=datetime(2018, 10, 23, 9), end=datetime(2018, 10, 23, 9, 30), title="B"),
            CalendarEvent(start=datetime(2018, 10, 23, 8), end=datetime(2018, 10, 23, 8, 30), title="D"),
            CalendarEvent(start=datetime(2018, 10, 23, 8), end=datetime(2018, 10, 23, 8, 30), title="F"),
            CalendarEvent(start=datetime(2018, 10, 23, 8), end=datetime(2018, 10, 23, 9, 30), title="G"),
        ]
        columns = build_week_view(
            adapter, events=events, view_date=datetime(2018, 10, 23, 8, 15), config=full_day_config
        ).hour_columns
        event_a = columns[2].events[3]
        assert event_a.event is events[0]
        assert event_a.left == 0
        assert math.floor(event_a.width) == 66

    def test_consistent_blocks_of_forty_minutes(self, adapter):
        config = ViewConfig(
            hour_duration=40, day_start=TimeOfDay(14, 0), day_end=TimeOfDay(17, 59),
            segment_height=20, hour_segments=2,
        )
        week_start = adapter.start_of_week(adapter.now())
        events = [CalendarEvent(
            start=adapter.set_hours(adapter.set_minutes(week_start, 20), 15),
            end=adapter.set_hours(adapter.set_minutes(week_start, 40), 17),
            title="An event",
        )]
        view = build_week_view(adapter, events=events, view_date=adapter.now(), config=config)
        column = view.hour_columns[0]
        assert len(column.hours) == 6
        assert (column.events[0].top, column.events[0].height) == (80, 140)

    def test_repeated_calls_give_equal_views(self, adapter, full_day_config):
        events = [
            CalendarEvent(start=datetime(2016, 6, 27), end=datetime(2016, 6, 29), all_day=True),
            CalendarEvent(start=datetime(2016, 6, 28, 9), end=datetime(2016, 6, 28, 11)),
            CalendarEvent(start=datetime(2016, 6, 28, 10), end=datetime(2016, 6, 28, 12)),
        ]
        first = build_week_view(adapter, events=events, view_date=datetime(2016, 6, 28), config=full_day_config)
        second = build_week_view(adapter, events=events, view_date=datetime(2016, 6, 28), config=full_day_config)
        assert first == second

    @pytest.mark.parametrize("view_date", [datetime(2019, 3, 31), datetime(2019, 10, 27)])
    def test_daylight_saving_change(self, london_adapter, view_date):
        view = build_week_view(london_adapter, events=[], view_date=view_date, config=ViewConfig())
        assert len(view.hour_columns[0].hours) == 24

    def test_week_header(self, adapter):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY,))
        days = build_week_header(adapter, view_date=datetime(2016, 6, 28), config=config)
        assert len(days) == 6
        assert days[0].date == adapter.start_of_day(datetime(2016, 6, 27))


class TestMonthView:
    @pytest.fixture
    def events(self):
        return [
            CalendarEvent(start=datetime(2016, 7, 3)),
            CalendarEvent(start=datetime(2016, 7, 5), end=datetime(2016, 7, 7)),
            CalendarEvent(start=datetime(2016, 6, 29), end=datetime(2016, 6, 30)),
            CalendarEvent(start=datetime(2017, 6, 29), end=datetime(2017, 6, 30)),
        ]

    @pytest.fixture
    def view(self, adapter, events):
        return build_month_view(adapter, events=events, view_date=datetime(2016, 7, 3))

    def test_period(self, adapter, view, events):
        assert view.period.start == adapter.start_of_day(datetime(2016, 6, 26))
        assert view.period.end == adapter.end_of_day(datetime(2016, 8, 6))
        assert view.period.events == [events[0], events[1], events[2]]

    def test_period_with_excluded_days(self, adapter):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY, DaysOfWeek.SATURDAY))
        view = build_month_view(adapter, events=[], view_date=datetime(2018, 7, 29), config=config)
        assert view.period.start == adapter.start_of_day(datetime(2018, 7, 2))
        assert view.period.end == adapter.end_of_day(datetime(2018, 8, 3))

    def test_excludes_days(self, adapter, events):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY, DaysOfWeek.SATURDAY))
        view = build_month_view(adapter, events=events, view_date=datetime(2017, 7, 3), config=config)
        assert len(view.days) == 5 * 5
        assert view.days[0].date == adapter.start_of_day(datetime(2017, 7, 3))
        assert view.days[-1].date == adapter.start_of_day(datetime(2017, 8, 4))

    def test_excluded_days_respect_view_start_and_end(self, adapter, events):
        view_date = datetime(2020, 4, 13)
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY,))
        view = build_month_view(
            adapter, events=events, view_date=view_date, config=config,
            view_start=adapter.add_days(adapter.start_of_month(view_date), -7),
            view_end=adapter.add_days(adapter.end_of_month(view_date), 7),
        )
        assert len(view.days) == 42
        assert view.days[0].date == adapter.start_of_day(datetime(2020, 3, 23))
        assert view.days[-1].date == adapter.start_of_day(datetime(2020, 5, 9))

    def test_row_offsets_skip_excluded_days(self, adapter, events):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY,))
        view = build_month_view(adapter, events=events, view_date=datetime(2016, 7, 1), config=config)
        assert view.row_offsets == [0, 6, 12, 18, 24]

    def test_row_offsets(self, view):
        assert view.row_offsets == [0, 7, 14, 21, 28, 35]

    def test_total_days_visible_in_week(self, adapter, events):
        config = ViewConfig(excluded=(DaysOfWeek.SUNDAY, DaysOfWeek.SATURDAY))
        view = build_month_view(adapter, events=events, view_date=datetime(2016, 7, 1), config=config)
        assert view.total_days_visible_in_week == 5

    def test_days(self, adapter, view):
        assert len(view.days) == 42
        assert view.days[0].date == adapter.start_of_day(datetime(2016, 6, 26))
        assert view.days[10].date == adapter.start_of_day(datetime(2016, 7, 6))

    def test_day_flags(self, view):
        assert [view.days[i].in_month for i in (0, 10, 40)] == [False, True, False]
        assert [view.days[i].is_past for i in (0, 2, 10)] == [True, False, False]
        assert [view.days[i].is_today for i in (0, 2)] == [False, True]
        assert [view.days[i].is_future for i in (0, 2, 10)] == [False, False, True]
        assert [view.days[i].is_weekend for i in (0, 2, 6)] == [True, False, True]

    def test_custom_weekend_days(self, adapter, events):
        config = ViewConfig(weekend_days=(DaysOfWeek.FRIDAY, DaysOfWeek.SATURDAY))
        view = build_month_view(adapter, events=events, view_date=datetime(2017, 7, 3), config=config)
        assert [view.days[i].is_weekend for i in (0, 2, 5, 6)] == [False, False, True, True]

    def test_events_on_days(self, view, events):
        assert len(view.days[3].events) == 1
        assert view.days[6].events == []
        assert view.days[7].events == [events[0]]
        assert view.days[8].events == []
        assert view.days[9].events == [events[1]]
        assert view.days[10].events == [events[1]]
        assert view.days[11].events == [events[1]]
        assert view.days[12].events == []
        assert [view.days[i].badge_total for i in range(6, 13)] == [0, 1, 0, 1, 1, 1, 0]

    def test_events_in_first_week_outside_month(self, adapter):
        events = [CalendarEvent(start=datetime(2016, 6, 29), end=datetime(2016, 7, 1))]
        view = build_month_view(adapter, events=events, view_date=datetime(2016, 7, 3))
        assert [view.days[i].events for i in (3, 4, 5, 6)] == [events, events, events, []]

    @pytest.mark.parametrize("events", [[], None])
    def test_no_events(self, adapter, events):
        view = build_month_view(adapter, events=events, view_date=datetime(2016, 7, 3))
        assert len(view.days) == 42

    def test_daylight_saving_change(self, london_adapter):
        view = build_month_view(london_adapter, events=[], view_date=datetime(2015, 10, 3))
        assert view.days[28].date == london_adapter.start_of_day(datetime(2015, 10, 25))
        assert view.days[29].date == london_adapter.start_of_day(datetime(2015, 10, 26))

    def test_custom_view_start_and_end(self, adapter):
        view = build_month_view(
            adapter, events=[], view_date=datetime(2015, 10, 3),
            view_start=datetime(2015, 10, 3), view_end=datetime(2015, 11, 10),
        )
        assert len(view.days) == 49
        assert view.row_offsets == [0, 7, 14, 21, 28, 35, 42]
        assert view.days[0].date == adapter.start_of_day(datetime(2015, 9, 27))
        assert view.days[13].date == adapter.start_of_day(datetime(2015, 10, 10))

    def test_week_starting_on_monday(self, adapter):
        config = replace(ViewConfig(), week_starts_on=DaysOfWeek.MONDAY)
        view = build_month_view(adapter, events=[], view_date=datetime(2016, 7, 3), config=config)
        assert view.days[0].date == adapter.start_of_day(datetime(2016, 6, 27))
        assert len(view.days) == 35
