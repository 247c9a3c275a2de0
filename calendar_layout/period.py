"""
Selection of the events that fall inside a time window.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .date_adapter import DateAdapter
from .events import CalendarEvent


logger = logging.getLogger(__name__)


@dataclass
class ViewPeriod:
    """A time window together with the events that occur in it."""
    start: datetime
    end: datetime
    events: list[CalendarEvent] = field(default_factory=list)


def is_event_in_period(adapter: DateAdapter, event: CalendarEvent,
                       period_start: datetime, period_end: datetime) -> bool:
    """
    Check whether an event touches [period_start, period_end].

    An event is in the period when its start or end lies strictly inside
    it, when it covers the whole period, or when its start or end is the
    same second as either boundary. Point events are tested at their start.
    """
    start = adapter.to_local(event.start)
    end = adapter.to_local(event.end) if event.end is not None else start

    if period_start < start < period_end:
        return True
    if period_start < end < period_end:
        return True
    if start < period_start and end > period_end:
        return True
    return any(
        adapter.is_same_second(instant, boundary)
        for instant in (start, end)
        for boundary in (period_start, period_end)
    )


def get_events_in_period(adapter: DateAdapter, events: Optional[Iterable[CalendarEvent]],
                         period_start: datetime, period_end: datetime) -> list[CalendarEvent]:
    """
    Select the events overlapping a period, preserving their order.

    Events without a usable start are skipped.

    Args:
        adapter: Date adapter used for all comparisons.
        events: Events to filter; None is treated as an empty list.
        period_start: Start of the window.
        period_end: End of the window.

    Returns:
        The matching events, as a new list.
    """
    if not events:
        return []
    period_start = adapter.to_local(period_start)
    period_end = adapter.to_local(period_end)

    selected = []
    for event in events:
        try:
            if is_event_in_period(adapter, event, period_start, period_end):
                selected.append(event)
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug("Skipping event without a usable start or end: %r (%s)", event, e)
    return selected
