"""
Week and month view assembly.

These builders combine the week header, the all-day allocator, the day
layout engine and the period filter into complete view models.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .all_day import WeekViewEventRow, get_all_day_week_events
from .config import ViewConfig
from .date_adapter import DateAdapter
from .day_layout import DayViewEvent, DayViewHour, fit_day_view_columns, get_day_view, get_day_view_hour_grid
from .events import CalendarEvent
from .period import ViewPeriod, get_events_in_period
from .week_day import WeekDay, get_week_day, get_week_view_header


logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7


@dataclass
class WeekViewHourColumn:
    """One day column of a week view."""
    date: datetime
    hours: list[DayViewHour]
    events: list[DayViewEvent]


@dataclass
class WeekView:
    period: ViewPeriod
    all_day_event_rows: list[WeekViewEventRow]
    hour_columns: list[WeekViewHourColumn]


@dataclass
class MonthViewDay(WeekDay):
    in_month: bool = False
    events: list[CalendarEvent] = field(default_factory=list)
    badge_total: int = 0


@dataclass
class MonthView:
    row_offsets: list[int]
    days: list[MonthViewDay]
    total_days_visible_in_week: int
    period: ViewPeriod


def build_week_header(adapter: DateAdapter, *, view_date, config: Optional[ViewConfig] = None,
                      view_start=None, view_end=None) -> list[WeekDay]:
    """Day headers of a week view, without excluded weekdays."""
    if config is None:
        config = ViewConfig()
    return get_week_view_header(
        adapter,
        view_date,
        week_starts_on=config.week_starts_on,
        excluded=config.excluded,
        weekend_days=config.weekend_days,
        view_start=view_start,
        view_end=view_end,
    )


def build_week_view(adapter: DateAdapter, *, events: Optional[Iterable[CalendarEvent]], view_date,
                    config: Optional[ViewConfig] = None, view_start=None, view_end=None) -> WeekView:
    """
    Build a week view.

    Args:
        adapter: Date adapter used for all date math.
        events: Events to show; None means no events.
        view_date: Any instant in the week to show.
        config: View options (defaults to ViewConfig()).
        view_start: Start of a custom window instead of the week of view_date.
        view_end: End of a custom window.

    Returns:
        WeekView with the all-day rows and one hour column per visible day.
        Timed event widths in the columns are percentages.
    """
    if config is None:
        config = ViewConfig()
    events = list(events or [])

    if view_start is None:
        view_start = adapter.start_of_week(view_date, config.week_starts_on)
    if view_end is None:
        view_end = adapter.end_of_week(view_date, config.week_starts_on)
    view_start = adapter.start_of_day(view_start)
    view_end = adapter.end_of_day(view_end)

    header = get_week_view_header(
        adapter,
        view_date,
        week_starts_on=config.week_starts_on,
        excluded=config.excluded,
        weekend_days=config.weekend_days,
        view_start=view_start,
        view_end=view_end,
    )
    events_in_period = get_events_in_period(adapter, events, view_start, view_end)
    if header:
        period = ViewPeriod(
            start=header[0].date,
            end=adapter.end_of_day(header[-1].date),
            events=events_in_period,
        )
    else:
        # Every weekday is excluded
        period = ViewPeriod(start=view_start, end=view_end, events=events_in_period)

    all_day_event_rows = get_all_day_week_events(
        adapter,
        events_in_period,
        view_start,
        view_end,
        excluded=config.excluded,
        precision=config.precision,
        absolute_positioned_events=config.absolute_positioned_events,
    )

    hour_columns = []
    for day in header:
        day_view = get_day_view(
            adapter,
            events_in_period,
            day.date,
            hour_segments=config.hour_segments,
            day_start=config.day_start,
            day_end=config.day_end,
            event_width=1,
            segment_height=config.segment_height,
            hour_duration=config.hour_duration,
            minimum_event_height=config.minimum_event_height,
        )
        hour_columns.append(WeekViewHourColumn(
            date=day.date,
            hours=get_day_view_hour_grid(
                adapter,
                day.date,
                hour_segments=config.hour_segments,
                day_start=config.day_start,
                day_end=config.day_end,
                hour_duration=config.hour_duration,
            ),
            events=fit_day_view_columns(day_view.events, config.column_width),
        ))

    return WeekView(period=period, all_day_event_rows=all_day_event_rows, hour_columns=hour_columns)


def build_month_view(adapter: DateAdapter, *, events: Optional[Iterable[CalendarEvent]], view_date,
                     config: Optional[ViewConfig] = None, view_start=None, view_end=None) -> MonthView:
    """
    Build a month view.

    The grid covers whole weeks from the week containing view_start (default
    start of the month) to the week containing view_end (default end of the
    month). With excluded weekdays, rows that contain no day of
    [view_start, view_end) are dropped.
    """
    if config is None:
        config = ViewConfig()
    events = list(events or [])
    excluded = set(config.excluded)

    view_start = adapter.to_local(view_start if view_start is not None else adapter.start_of_month(view_date))
    view_end = adapter.to_local(view_end if view_end is not None else adapter.end_of_month(view_date))
    start = adapter.start_of_week(view_start, config.week_starts_on)
    end = adapter.end_of_week(view_end, config.week_starts_on)
    events_in_month = get_events_in_period(adapter, events, start, end)

    initial_days = []
    date = start
    while date < end:
        if adapter.get_day(date) not in excluded:
            week_day = get_week_day(adapter, date, config.weekend_days)
            day_events = get_events_in_period(
                adapter, events_in_month, adapter.start_of_day(date), adapter.end_of_day(date)
            )
            initial_days.append(MonthViewDay(
                date=week_day.date,
                day=week_day.day,
                is_past=week_day.is_past,
                is_today=week_day.is_today,
                is_future=week_day.is_future,
                is_weekend=week_day.is_weekend,
                in_month=adapter.is_same_month(date, view_date),
                events=day_events,
                badge_total=len(day_events),
            ))
        date = adapter.add_days(date, 1)

    total_days_visible_in_week = DAYS_IN_WEEK - len(excluded)
    days = initial_days
    if 0 < total_days_visible_in_week < DAYS_IN_WEEK:
        days = []
        for i in range(0, len(initial_days), total_days_visible_in_week):
            row = initial_days[i:i + total_days_visible_in_week]
            if any(view_start <= day.date < view_end for day in row):
                days.extend(row)
            else:
                logger.debug("Dropping month row starting %s outside the view", row[0].date)

    row_offsets = []
    if total_days_visible_in_week > 0:
        rows = len(days) // total_days_visible_in_week
        row_offsets = [i * total_days_visible_in_week for i in range(rows)]

    if days:
        period = ViewPeriod(start=days[0].date, end=adapter.end_of_day(days[-1].date), events=events_in_month)
    else:
        period = ViewPeriod(start=start, end=end, events=events_in_month)

    return MonthView(
        row_offsets=row_offsets,
        days=days,
        total_days_visible_in_week=total_days_visible_in_week,
        period=period,
    )
