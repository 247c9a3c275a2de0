"""
All-day event allocation for week-like views.

Each all-day event gets a horizontal offset and span measured in days
from the start of the view, with hidden (excluded) weekdays removed, and
the events are then packed greedily into rows so that events in the same
row never overlap.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import cmp_to_key
from typing import Iterable, Optional, Union

from .config import Precision
from .date_adapter import DateAdapter
from .events import CalendarEvent
from .period import get_events_in_period


logger = logging.getLogger(__name__)

SECONDS_IN_DAY = 24 * 60 * 60


@dataclass
class WeekViewEvent:
    """An all-day event placed in a week view, in day units."""
    event: CalendarEvent
    offset: float
    span: float
    starts_before_week: bool = False
    ends_after_week: bool = False


@dataclass
class WeekViewEventRow:
    """A row of non-overlapping all-day events."""
    row: list[WeekViewEvent]
    id: Optional[str] = None


def get_excluded_seconds(adapter: DateAdapter, start_date: datetime, seconds: float,
                         excluded: Iterable[int], precision: Union[Precision, str] = Precision.DAYS) -> float:
    """
    Seconds of [start_date, start_date + seconds) that fall on excluded weekdays.

    Each excluded day counts as a whole day. Under minute precision the
    first and last day of the interval only count the seconds the interval
    actually covers on them.
    """
    excluded = set(excluded)
    if not excluded:
        return 0
    precision = Precision(precision)

    end_date = adapter.add_seconds(start_date, seconds - 1)
    day_start = adapter.get_day(start_date)
    day_end = adapter.get_day(end_date)

    result = 0
    current = adapter.to_local(start_date)
    while current <= end_date:
        day = adapter.get_day(current)
        if day in excluded:
            if precision is Precision.MINUTES and day == day_start:
                result += adapter.difference_in_seconds(adapter.end_of_day(start_date), start_date) + 1
            elif precision is Precision.MINUTES and day == day_end:
                result += adapter.difference_in_seconds(end_date, adapter.start_of_day(end_date)) + 1
            else:
                result += SECONDS_IN_DAY
        current = adapter.add_days(current, 1)
    return result


def get_difference_in_days_with_exclusions(adapter: DateAdapter, date1: datetime, date2: datetime,
                                           excluded: Iterable[int] = ()) -> int:
    """Number of non-excluded days from date1 up to (not including) date2."""
    excluded = set(excluded)
    date = adapter.to_local(date1)
    date2 = adapter.to_local(date2)
    days = 0
    while date < date2:
        if adapter.get_day(date) not in excluded:
            days += 1
        date = adapter.add_days(date, 1)
    return days


def get_week_view_event_offset(adapter: DateAdapter, event: CalendarEvent, view_start: datetime,
                               excluded: Iterable[int] = (),
                               precision: Union[Precision, str] = Precision.DAYS) -> float:
    """
    Distance in days from the start of the view to the start of an event.

    Events starting before the view have offset 0. Excluded weekdays
    between the view start and the event do not count.
    """
    precision = Precision(precision)
    view_start = adapter.to_local(view_start)
    start = adapter.to_local(event.start)
    if start < view_start:
        return 0

    if precision is Precision.MINUTES:
        offset = adapter.difference_in_seconds(start, view_start)
    else:
        offset = adapter.difference_in_days(adapter.start_of_day(start), view_start) * SECONDS_IN_DAY

    offset -= get_excluded_seconds(adapter, view_start, offset, excluded, precision)
    return abs(offset / SECONDS_IN_DAY)


def get_week_view_event_span(adapter: DateAdapter, event: CalendarEvent, offset: float,
                             view_start: datetime, total_days_in_view: int,
                             excluded: Iterable[int] = (),
                             precision: Union[Precision, str] = Precision.DAYS) -> float:
    """
    Width in days an event occupies in the view.

    The span starts at the later of the event start and the view start,
    is clipped at the end of the view and excludes hidden weekdays.
    Point events span one day.
    """
    precision = Precision(precision)
    view_start = adapter.to_local(view_start)
    begin = adapter.max([event.start, view_start])

    span = SECONDS_IN_DAY
    if event.end is not None:
        if precision is Precision.MINUTES:
            span = adapter.difference_in_seconds(event.end, begin)
        else:
            day_after_end = adapter.add_days(adapter.end_of_day(event.end), 1)
            span = adapter.difference_in_days(day_after_end, begin) * SECONDS_IN_DAY

    offset_seconds = offset * SECONDS_IN_DAY
    seconds_in_view = total_days_in_view * SECONDS_IN_DAY
    if offset_seconds + span > seconds_in_view:
        span = seconds_in_view - offset_seconds

    span -= get_excluded_seconds(adapter, begin, span, excluded, precision)
    return span / SECONDS_IN_DAY


def _compare_week_view_events(adapter: DateAdapter):
    def compare(a: WeekViewEvent, b: WeekViewEvent) -> int:
        start_diff = adapter.difference_in_seconds(a.event.start, b.event.start)
        if start_diff == 0:
            # Longer events first
            return adapter.difference_in_seconds(b.event.end_or_start, a.event.end_or_start)
        return start_diff
    return compare


def get_all_day_week_events(adapter: DateAdapter, events: Optional[Iterable[CalendarEvent]],
                            view_start: datetime, view_end: datetime,
                            excluded: Iterable[int] = (),
                            precision: Union[Precision, str] = Precision.DAYS,
                            absolute_positioned_events: bool = False) -> list[WeekViewEventRow]:
    """
    Place all-day events in a week-like view and pack them into rows.

    Args:
        adapter: Date adapter used for all date math.
        events: Events to place; events that are not all-day are ignored.
        view_start: First instant of the view (normalized to start of day).
        view_end: Last instant of the view (normalized to end of day).
        excluded: Hidden weekdays, 0 = Sunday.
        precision: "days" rounds to whole days, "minutes" keeps fractions.
        absolute_positioned_events: Keep offsets relative to the view start
            instead of relative to the previous event in the row.

    Returns:
        Rows in allocation order. Returned WeekViewEvents are fresh objects;
        the input events are never modified.
    """
    excluded = set(excluded)
    precision = Precision(precision)
    view_start = adapter.start_of_day(view_start)
    view_end = adapter.end_of_day(view_end)

    all_day_events = [event for event in events or [] if event.all_day]
    all_day_events = get_events_in_period(adapter, all_day_events, view_start, view_end)

    max_range = get_difference_in_days_with_exclusions(adapter, view_start, view_end, excluded)
    total_days_in_view = adapter.difference_in_days(view_end, view_start) + 1

    placed = []
    for event in all_day_events:
        offset = get_week_view_event_offset(adapter, event, view_start, excluded, precision)
        span = get_week_view_event_span(
            adapter, event, offset, view_start, total_days_in_view, excluded, precision
        )
        if offset >= max_range or span <= 0:
            logger.debug("Event %r is outside the visible days", event.title or event.id)
            continue
        placed.append(WeekViewEvent(
            event=event,
            offset=offset,
            span=span,
            starts_before_week=adapter.to_local(event.start) < view_start,
            ends_after_week=adapter.to_local(event.end_or_start) > view_end,
        ))
    placed.sort(key=cmp_to_key(_compare_week_view_events(adapter)))

    rows = []
    allocated = set()
    for index, first in enumerate(placed):
        if index in allocated:
            continue
        allocated.add(index)
        row = [first]
        row_span = first.offset + first.span
        for candidate_index in range(index + 1, len(placed)):
            if candidate_index in allocated:
                continue
            candidate = placed[candidate_index]
            if candidate.offset >= row_span and row_span + candidate.span <= total_days_in_view:
                relative_offset = candidate.offset - row_span
                if not absolute_positioned_events:
                    candidate = replace(candidate, offset=relative_offset)
                row_span += candidate.span + relative_offset
                allocated.add(candidate_index)
                row.append(candidate)

        ids = [str(item.event.id) for item in row if item.event.id]
        rows.append(WeekViewEventRow(row=row, id='-'.join(ids) if ids else None))
    return rows
