"""
Structural validation of event lists.
"""

import logging
from datetime import datetime, date
from enum import Enum
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)


class EventValidationError(str, Enum):
    NOT_A_LIST = "Events must be a list or tuple"
    START_MISSING = "Event is missing a start"
    START_INVALID = "Event start must be a datetime or date"
    END_INVALID = "Event end must be a datetime or date"
    END_BEFORE_START = "Event end is before its start"


Reporter = Callable[[EventValidationError, Any], None]


def _log_error(error: EventValidationError, subject: Any):
    logger.warning("%s: %r", error.value, subject)


def _is_date_value(value) -> bool:
    return isinstance(value, (datetime, date))


def _end_before_start(start, end) -> bool:
    # datetime is a subclass of date, so mixed pairs are compared by calendar date
    if isinstance(start, datetime) != isinstance(end, datetime):
        start = start.date() if isinstance(start, datetime) else start
        end = end.date() if isinstance(end, datetime) else end
    return end < start


def validate_events(events, report: Optional[Reporter] = None) -> bool:
    """
    Check that events have the shape the layout functions expect.

    Every problem is passed to report(error, subject) where subject is the
    offending event (or the events value itself for NOT_A_LIST). The start
    and the end are checked separately, so one event can be reported twice.
    Nothing is raised.

    Args:
        events: List or tuple of CalendarEvent-like objects. None counts as empty.
        report: Sink for problems; defaults to logging a warning.

    Returns:
        True if no problem was found.
    """
    if report is None:
        report = _log_error
    if events is None:
        return True
    if not isinstance(events, (list, tuple)):
        report(EventValidationError.NOT_A_LIST, events)
        return False

    is_valid = True
    for event in events:
        start = getattr(event, 'start', None)
        end = getattr(event, 'end', None)

        if start is None:
            report(EventValidationError.START_MISSING, event)
            is_valid = False
        elif not _is_date_value(start):
            report(EventValidationError.START_INVALID, event)
            is_valid = False

        if end is None:
            continue
        if not _is_date_value(end):
            report(EventValidationError.END_INVALID, event)
            is_valid = False
        elif _is_date_value(start):
            try:
                if _end_before_start(start, end):
                    report(EventValidationError.END_BEFORE_START, event)
                    is_valid = False
            except TypeError:
                # Naive and aware datetimes cannot be compared
                report(EventValidationError.END_INVALID, event)
                is_valid = False
    return is_valid
