"""
Day descriptors and week headers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Iterable, Optional

from .date_adapter import DateAdapter


class DaysOfWeek(IntEnum):
    """Weekday numbers as returned by DateAdapter.get_day."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


DEFAULT_WEEKEND_DAYS = (DaysOfWeek.SUNDAY, DaysOfWeek.SATURDAY)


@dataclass
class WeekDay:
    """A calendar day with flags relative to today."""
    date: datetime  # Start of the day
    day: int  # 0 = Sunday ... 6 = Saturday
    is_past: bool
    is_today: bool
    is_future: bool
    is_weekend: bool


def get_week_day(adapter: DateAdapter, date, weekend_days: Optional[Iterable[int]] = None) -> WeekDay:
    """
    Describe a single day.

    Args:
        adapter: Date adapter; its clock defines "today".
        date: Any instant on the day.
        weekend_days: Weekday numbers counted as weekend (default Sunday and Saturday).
    """
    if weekend_days is None:
        weekend_days = DEFAULT_WEEKEND_DAYS
    weekend_days = set(weekend_days)
    today = adapter.start_of_day(adapter.now())
    day_start = adapter.start_of_day(date)
    day = adapter.get_day(day_start)
    return WeekDay(
        date=day_start,
        day=day,
        is_past=day_start < today,
        is_today=day_start == today,
        is_future=day_start > today,
        is_weekend=day in weekend_days,
    )


def get_week_view_header(adapter: DateAdapter, view_date, week_starts_on: int = 0,
                         excluded: Iterable[int] = (), weekend_days: Optional[Iterable[int]] = None,
                         view_start=None, view_end=None) -> list[WeekDay]:
    """
    Build the day headers of a week view.

    Args:
        adapter: Date adapter.
        view_date: Any instant in the week to show.
        week_starts_on: First day of the week, 0 = Sunday.
        excluded: Weekday numbers to leave out.
        weekend_days: Weekday numbers counted as weekend.
        view_start: Start of a custom window (default: start of the week).
        view_end: Exclusive end of the window (default: view_start + 7 days).

    Returns:
        One WeekDay per non-excluded day in the window, in order.
    """
    excluded = set(excluded)
    if view_start is None:
        view_start = adapter.start_of_week(view_date, week_starts_on)
    view_start = adapter.to_local(view_start)
    if view_end is None:
        view_end = adapter.add_days(view_start, 7)
    view_end = adapter.to_local(view_end)

    days = []
    date = view_start
    while date < view_end:
        if adapter.get_day(date) not in excluded:
            days.append(get_week_day(adapter, date, weekend_days))
        date = adapter.add_days(date, 1)
    return days
