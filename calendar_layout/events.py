"""
Calendar event model and iCalendar input adapter.

CalendarEvent is the only input entity of the layout engine. It is a
plain immutable value; the layout code never mutates or stores events,
it only references them from the structures it returns.

The icalendar helpers convert VEVENT components into CalendarEvents so
that feeds and CalDAV exports can be laid out directly.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from typing import Any, Optional, Union

from icalendar import Calendar as ICalCalendar, Event as ICalEvent


logger = logging.getLogger(__name__)

DateValue = Union[datetime, date]


@dataclass(frozen=True)
class CalendarEvent:
    """
    An event to be laid out.

    A missing end makes the event a point in time at its start. Naive
    datetimes are read as wall-clock time in the adapter's timezone.
    """
    start: DateValue
    end: Optional[DateValue] = None
    title: str = ""
    all_day: bool = False
    id: Optional[str] = None  # Only used to build row identity keys
    meta: Any = field(default=None, compare=False)

    @property
    def end_or_start(self) -> DateValue:
        """The end, or the start for point events."""
        return self.end if self.end is not None else self.start


def _is_date_only(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def from_ical_event(component: ICalEvent, meta: Any = None) -> CalendarEvent:
    """
    Convert an icalendar VEVENT into a CalendarEvent.

    All-day events (date-valued DTSTART) carry an exclusive DTEND in
    iCalendar; it is moved back one day so the event ends on its last
    covered day.

    Args:
        component: The icalendar.Event object.
        meta: Optional payload stored on the resulting event.

    Returns:
        A CalendarEvent. DTSTART is required by RFC 5545; a VEVENT without
        it yields an event whose start is None, which validate_events reports.
    """
    dtstart = component.get('DTSTART')
    start = dtstart.dt if dtstart is not None else None
    all_day = _is_date_only(start)

    end = None
    dtend = component.get('DTEND')
    if dtend is not None:
        end = dtend.dt
    elif start is not None and component.get('DURATION') is not None:
        end = start + component.get('DURATION').dt

    if all_day and _is_date_only(end):
        # Exclusive end date: the event covers days up to end - 1
        end = end - timedelta(days=1) if end > start else start

    if component.get('RRULE') is not None:
        logger.debug("Recurrence rule of %s is not expanded", component.get('UID'))

    uid = component.get('UID')
    summary = component.get('SUMMARY')
    return CalendarEvent(
        start=start,
        end=end,
        title=str(summary) if summary else '',
        all_day=all_day,
        id=str(uid) if uid else None,
        meta=meta,
    )


def events_from_ical(ical_text: Union[str, bytes]) -> list[CalendarEvent]:
    """
    Parse iCalendar text and convert every VEVENT it contains.

    Args:
        ical_text: Raw iCalendar text (VCALENDAR).

    Returns:
        List of CalendarEvents in document order.
    """
    cal = ICalCalendar.from_ical(ical_text)
    events = [from_ical_event(component) for component in cal.walk('VEVENT')]
    logger.debug("Parsed %d events from iCalendar data", len(events))
    return events
