"""
Calendar Layout

Layout geometry for calendar day, week and month views:
- Date adapters over pytz and zoneinfo (date_adapter.py, timezone_utils.py)
- Event model and iCalendar input (events.py)
- Period filter (period.py)
- Day descriptors and week headers (week_day.py)
- All-day event rows (all_day.py)
- Timed event columns and the hour grid (day_layout.py)
- Week and month views (views.py)
- Event validation (validation.py)
- View configuration (config.py)
"""

from .config import Config, Precision, TimeOfDay, ViewConfig
from .date_adapter import DateAdapter, PytzDateAdapter, ZoneInfoDateAdapter, create_date_adapter
from .events import CalendarEvent, events_from_ical, from_ical_event
from .period import ViewPeriod, get_events_in_period, is_event_in_period
from .week_day import DaysOfWeek, WeekDay, get_week_day, get_week_view_header
from .all_day import (
    WeekViewEvent,
    WeekViewEventRow,
    get_all_day_week_events,
    get_difference_in_days_with_exclusions,
    get_week_view_event_offset,
)
from .day_layout import (
    DayView,
    DayViewEvent,
    DayViewHour,
    DayViewHourSegment,
    build_day_layout,
    fit_day_view_columns,
    get_day_view,
    get_day_view_hour_grid,
)
from .views import (
    MonthView,
    MonthViewDay,
    WeekView,
    WeekViewHourColumn,
    build_month_view,
    build_week_header,
    build_week_view,
)
from .validation import EventValidationError, validate_events

__all__ = [
    'Config',
    'ViewConfig',
    'Precision',
    'TimeOfDay',
    'DateAdapter',
    'PytzDateAdapter',
    'ZoneInfoDateAdapter',
    'create_date_adapter',
    'CalendarEvent',
    'events_from_ical',
    'from_ical_event',
    'ViewPeriod',
    'get_events_in_period',
    'is_event_in_period',
    'DaysOfWeek',
    'WeekDay',
    'get_week_day',
    'get_week_view_header',
    'WeekViewEvent',
    'WeekViewEventRow',
    'get_all_day_week_events',
    'get_difference_in_days_with_exclusions',
    'get_week_view_event_offset',
    'DayView',
    'DayViewEvent',
    'DayViewHour',
    'DayViewHourSegment',
    'build_day_layout',
    'fit_day_view_columns',
    'get_day_view',
    'get_day_view_hour_grid',
    'MonthView',
    'MonthViewDay',
    'WeekView',
    'WeekViewHourColumn',
    'build_month_view',
    'build_week_header',
    'build_week_view',
    'EventValidationError',
    'validate_events',
]
