"""
Timed event layout for a single day.

Events are positioned vertically by time (top/height in pixels, one
segment being segment_height pixels) and horizontally in columns so that
overlapping events never share a column. An optional fitting pass turns
column indexes into widths that share an available width, letting each
event grow into free space on its right.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .config import TimeOfDay, ViewConfig
from .date_adapter import DateAdapter
from .events import CalendarEvent
from .period import ViewPeriod, get_events_in_period


logger = logging.getLogger(__name__)


@dataclass
class DayViewEvent:
    """A timed event placed in a day column."""
    event: CalendarEvent
    height: float
    width: float
    top: float
    left: float
    starts_before_day: bool = False
    ends_after_day: bool = False

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class DayView:
    """Result of laying out one day."""
    events: list[DayViewEvent]
    width: float
    all_day_events: list[CalendarEvent]
    period: ViewPeriod


@dataclass
class DayViewHourSegment:
    date: datetime
    is_start: bool = False


@dataclass
class DayViewHour:
    segments: list[DayViewHourSegment] = field(default_factory=list)


def get_day_view_bounds(adapter: DateAdapter, view_date, day_start: TimeOfDay,
                        day_end: TimeOfDay) -> tuple[datetime, datetime]:
    """
    Visible window of a day.

    Returns:
        (start, end) where end is the last microsecond of the day_end minute.
        Out of range hours and minutes are clamped.
    """
    day_start = day_start.clamped()
    day_end = day_end.clamped()
    start = adapter.set_minutes(
        adapter.set_hours(adapter.start_of_day(view_date), day_start.hour), day_start.minute
    )
    end = adapter.set_minutes(
        adapter.set_hours(adapter.start_of_minute(adapter.end_of_day(view_date)), day_end.hour),
        day_end.minute,
    )
    return start, adapter.end_of_minute(end)


def get_overlapping_day_view_events(events: Iterable[DayViewEvent], top: float,
                                    bottom: float) -> list[DayViewEvent]:
    """Events whose vertical extent overlaps [top, bottom]."""
    overlapping = []
    for previous in events:
        previous_top = previous.top
        previous_bottom = previous.bottom
        if top < previous_bottom < bottom:
            overlapping.append(previous)
        elif top < previous_top < bottom:
            overlapping.append(previous)
        elif previous_top <= top and bottom <= previous_bottom:
            overlapping.append(previous)
    return overlapping


def get_day_view(adapter: DateAdapter, events: Optional[Iterable[CalendarEvent]], view_date,
                 hour_segments: int = 2, day_start: TimeOfDay = TimeOfDay(0, 0),
                 day_end: TimeOfDay = TimeOfDay(23, 59), event_width: float = 150,
                 segment_height: float = 30, hour_duration: Optional[int] = None,
                 minimum_event_height: Optional[float] = None) -> DayView:
    """
    Lay out the timed events of one day.

    Args:
        adapter: Date adapter used for all date math.
        events: All events; all-day events are returned separately.
        view_date: Any instant on the day.
        hour_segments: Segments per hour row.
        day_start: First visible time of day.
        day_end: Last visible time of day.
        event_width: Width of one column; left values are multiples of it.
        segment_height: Pixel height of one segment.
        hour_duration: Minutes represented by one hour row (default 60).
        minimum_event_height: Heights below this are raised to it.

    Returns:
        DayView with the placed events in start order.
    """
    events = list(events or [])
    start_of_view, end_of_view = get_day_view_bounds(adapter, view_date, day_start, day_end)
    modifier = hour_segments * segment_height / (hour_duration or 60)
    view_offset = adapter.get_timezone_offset(start_of_view)

    timed_events = get_events_in_period(
        adapter, [event for event in events if not event.all_day], start_of_view, end_of_view
    )
    timed_events.sort(key=lambda event: adapter.to_local(event.start))

    placed = []
    for event in timed_events:
        event_start = adapter.to_local(event.start)
        event_end = adapter.to_local(event.end_or_start)
        starts_before_day = event_start < start_of_view
        ends_after_day = event_end > end_of_view

        top = 0
        if event_start > start_of_view:
            # Wall-clock minutes, so events keep their grid row on DST days
            top += adapter.difference_in_minutes(event_start, start_of_view)
            top += adapter.get_timezone_offset(event_start) - view_offset
        top *= modifier

        clipped_start = start_of_view if starts_before_day else event_start
        clipped_end = end_of_view if ends_after_day else event_end
        height = adapter.difference_in_minutes(clipped_end, clipped_start)
        height += adapter.get_timezone_offset(clipped_end) - adapter.get_timezone_offset(clipped_start)
        if event.end is None:
            height = segment_height
        else:
            height *= modifier
        if minimum_event_height is not None and minimum_event_height > height:
            height = minimum_event_height

        overlapping = get_overlapping_day_view_events(placed, top, top + height)
        left = 0
        while any(previous.left == left for previous in overlapping):
            left += event_width

        placed.append(DayViewEvent(
            event=event,
            height=height,
            width=event_width,
            top=top,
            left=left,
            starts_before_day=starts_before_day,
            ends_after_day=ends_after_day,
        ))

    width = max((day_event.left + day_event.width for day_event in placed), default=0)
    all_day_events = get_events_in_period(
        adapter,
        [event for event in events if event.all_day],
        adapter.start_of_day(start_of_view),
        adapter.end_of_day(end_of_view),
    )
    return DayView(
        events=placed,
        width=width,
        all_day_events=all_day_events,
        period=ViewPeriod(start=start_of_view, end=end_of_view, events=timed_events),
    )


def _get_column_count(all_events: list[DayViewEvent], overlapping: list[DayViewEvent],
                      column_width: float) -> int:
    # Expand through overlapping events in later columns until none is left
    column_count = 1
    current = overlapping
    while current:
        column_count = max(int(event.left / column_width) + 1 for event in current)
        current = [
            event for event in all_events
            if event.left / column_width >= column_count
            and get_overlapping_day_view_events(current, event.top, event.bottom)
        ]
    return column_count


def fit_day_view_columns(day_view_events: list[DayViewEvent], available_width: float = 100,
                         column_width: float = 1) -> list[DayViewEvent]:
    """
    Share an available width between the columns of a laid out day.

    Each event gets available_width divided by the number of columns in its
    overlapping group, then widens up to the nearest overlapping event in a
    later column. Returns new DayViewEvents; the inputs are not modified.

    Args:
        day_view_events: Events as returned in DayView.events.
        available_width: Total width to share, e.g. 100 for percentages.
        column_width: Column unit the events were laid out with.
    """
    sized = []
    for day_event in day_view_events:
        overlapping = get_overlapping_day_view_events(day_view_events, day_event.top, day_event.bottom)
        column_count = _get_column_count(day_view_events, overlapping, column_width)
        width = available_width / column_count
        column = day_event.left / column_width
        sized.append(replace(day_event, left=column * width, width=width))

    fitted = []
    for day_event in sized:
        right_of = [other for other in sized if other.left > day_event.left]
        blocking = get_overlapping_day_view_events(right_of, day_event.top, day_event.bottom)
        if blocking:
            day_event = replace(day_event, width=min(other.left for other in blocking) - day_event.left)
        fitted.append(day_event)
    return fitted


def get_day_view_hour_grid(adapter: DateAdapter, view_date, hour_segments: int = 2,
                           day_start: TimeOfDay = TimeOfDay(0, 0),
                           day_end: TimeOfDay = TimeOfDay(23, 59),
                           hour_duration: Optional[int] = None) -> list[DayViewHour]:
    """
    Hour rows and their segments for a day.

    The grid is built from local wall-clock times, so days with a DST change
    have the same rows as any other day. Segments start at or after
    day_start and strictly before day_end.
    """
    minutes_per_hour = hour_duration or 60
    segment_duration = minutes_per_hour / hour_segments
    day_start = day_start.clamped()
    day_end = day_end.clamped()
    first_minute = day_start.hour * 60 + day_start.minute
    end_minute = day_end.hour * 60 + day_end.minute
    midnight = adapter.start_of_day(view_date).replace(tzinfo=None)

    hours = []
    hour_start = first_minute
    while hour_start < end_minute:
        segments = []
        for j in range(hour_segments):
            minute = hour_start + j * segment_duration
            if minute >= end_minute:
                break
            date = adapter.localize(midnight + timedelta(minutes=minute))
            segments.append(DayViewHourSegment(date=date, is_start=j == 0))
        hours.append(DayViewHour(segments=segments))
        hour_start += minutes_per_hour
    return hours


def build_day_layout(adapter: DateAdapter, *, events: Optional[Iterable[CalendarEvent]], view_date,
                     config: Optional[ViewConfig] = None,
                     available_width: Optional[float] = None) -> DayView:
    """
    Lay out one day using a ViewConfig.

    When available_width is given the columns are fitted into it, otherwise
    each column is config.event_width wide.
    """
    if config is None:
        config = ViewConfig()
    day_view = get_day_view(
        adapter,
        events,
        view_date,
        hour_segments=config.hour_segments,
        day_start=config.day_start,
        day_end=config.day_end,
        event_width=config.event_width,
        segment_height=config.segment_height,
        hour_duration=config.hour_duration,
        minimum_event_height=config.minimum_event_height,
    )
    if available_width is None:
        return day_view

    fitted = fit_day_view_columns(day_view.events, available_width, config.event_width)
    return replace(
        day_view,
        events=fitted,
        width=max((day_event.left + day_event.width for day_event in fitted), default=0),
    )
