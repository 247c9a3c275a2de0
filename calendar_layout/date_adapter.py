"""
Date capability provider for the layout engine.

All layout code goes through a DateAdapter instead of doing datetime math
directly. The adapter owns one timezone and makes two kinds of arithmetic
available:

- calendar arithmetic (add_days, difference_in_days, start_of_day, ...)
  works on local wall-clock time, so "one day later" keeps the time of day
  across a DST change;
- elapsed arithmetic (add_hours/minutes/seconds, difference_in_minutes/
  seconds) works on absolute time, computed in UTC.

Two backends are provided: PytzDateAdapter (the default) and
ZoneInfoDateAdapter. They produce the same results for the same zone.
"""

import calendar
import logging
from abc import ABC, abstractmethod
from datetime import datetime, date, time, timedelta, timezone, tzinfo
from typing import Callable, Iterable, Optional, Union

import pytz

from .timezone_utils import resolve_pytz_timezone, resolve_zoneinfo_timezone


logger = logging.getLogger(__name__)

_UTC = timezone.utc

DateLike = Union[datetime, date, int, float, str]


def _truncate(delta: timedelta, unit: timedelta) -> int:
    """Whole number of units in delta, rounded toward zero."""
    whole = abs(delta) // unit
    return whole if delta >= timedelta(0) else -whole


class DateAdapter(ABC):
    """
    Timezone-aware date arithmetic bound to a single timezone.

    Args:
        clock: Optional callable returning the current instant. Layout code
            never reads the system clock directly, so tests can freeze time
            by passing a clock here.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock

    @property
    @abstractmethod
    def timezone(self) -> tzinfo:
        """The tzinfo every result is expressed in."""

    @abstractmethod
    def localize(self, naive: datetime) -> datetime:
        """
        Attach this adapter's timezone to a naive wall-clock datetime.

        Wall times skipped by a DST gap move forward across the gap;
        repeated wall times resolve to their first occurrence.
        """

    # ==================== Coercion ====================

    def now(self) -> datetime:
        """Current instant in this adapter's timezone."""
        value = self._clock() if self._clock is not None else datetime.now(_UTC)
        return self.to_local(value)

    def to_local(self, value: DateLike) -> datetime:
        """
        Coerce a date-like value to an aware datetime in this timezone.

        Accepts aware or naive datetimes (naive means local wall time),
        dates (local midnight), POSIX timestamps in seconds and ISO 8601
        strings.

        Raises:
            TypeError: If the value is none of the above.
            ValueError: If a string is not valid ISO 8601.
        """
        if isinstance(value, datetime):
            if value.tzinfo is None or value.utcoffset() is None:
                return self.localize(value.replace(tzinfo=None))
            return value.astimezone(self.timezone)
        if isinstance(value, date):
            return self.localize(datetime.combine(value, time.min))
        if isinstance(value, bool):
            raise TypeError(f"Cannot interpret {value!r} as a date")
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, _UTC).astimezone(self.timezone)
        if isinstance(value, str):
            return self.to_local(datetime.fromisoformat(value))
        raise TypeError(f"Cannot interpret {value!r} as a date")

    def _wall(self, value: DateLike) -> datetime:
        return self.to_local(value).replace(tzinfo=None)

    def _utc(self, value: DateLike) -> datetime:
        return self.to_local(value).astimezone(_UTC)

    # ==================== Arithmetic ====================

    def add_days(self, value: DateLike, amount: int) -> datetime:
        """Add calendar days, keeping the local time of day."""
        return self.localize(self._wall(value) + timedelta(days=amount))

    def add_hours(self, value: DateLike, amount: float) -> datetime:
        return self.add_seconds(value, amount * 3600)

    def add_minutes(self, value: DateLike, amount: float) -> datetime:
        return self.add_seconds(value, amount * 60)

    def add_seconds(self, value: DateLike, amount: float) -> datetime:
        """Add elapsed seconds."""
        return self.to_local(self._utc(value) + timedelta(seconds=amount))

    def difference_in_days(self, left: DateLike, right: DateLike) -> int:
        """Whole local days from right to left, truncated toward zero."""
        return _truncate(self._wall(left) - self._wall(right), timedelta(days=1))

    def difference_in_minutes(self, left: DateLike, right: DateLike) -> int:
        """Whole elapsed minutes from right to left, truncated toward zero."""
        return _truncate(self._utc(left) - self._utc(right), timedelta(minutes=1))

    def difference_in_seconds(self, left: DateLike, right: DateLike) -> int:
        """Whole elapsed seconds from right to left, truncated toward zero."""
        return _truncate(self._utc(left) - self._utc(right), timedelta(seconds=1))

    # ==================== Boundaries ====================

    def start_of_day(self, value: DateLike) -> datetime:
        return self.localize(datetime.combine(self._wall(value).date(), time.min))

    def end_of_day(self, value: DateLike) -> datetime:
        return self.localize(datetime.combine(self._wall(value).date(), time.max))

    def start_of_week(self, value: DateLike, week_starts_on: int = 0) -> datetime:
        """
        Start of the week containing value.

        Args:
            value: Any instant within the week.
            week_starts_on: First day of the week, 0 = Sunday ... 6 = Saturday.
        """
        days_back = (self.get_day(value) - week_starts_on) % 7
        return self.start_of_day(self.add_days(value, -days_back))

    def end_of_week(self, value: DateLike, week_starts_on: int = 0) -> datetime:
        return self.end_of_day(self.add_days(self.start_of_week(value, week_starts_on), 6))

    def start_of_month(self, value: DateLike) -> datetime:
        wall = self._wall(value)
        return self.localize(datetime(wall.year, wall.month, 1))

    def end_of_month(self, value: DateLike) -> datetime:
        wall = self._wall(value)
        last_day = calendar.monthrange(wall.year, wall.month)[1]
        return self.localize(datetime.combine(date(wall.year, wall.month, last_day), time.max))

    def start_of_minute(self, value: DateLike) -> datetime:
        return self.to_local(self._utc(value).replace(second=0, microsecond=0))

    def end_of_minute(self, value: DateLike) -> datetime:
        return self.to_local(self._utc(value).replace(second=59, microsecond=999999))

    # ==================== Components ====================

    def get_day(self, value: DateLike) -> int:
        """Day of week, 0 = Sunday ... 6 = Saturday."""
        return (self._wall(value).weekday() + 1) % 7

    def get_month(self, value: DateLike) -> int:
        """Month of year, 1 = January ... 12 = December."""
        return self._wall(value).month

    def get_hours(self, value: DateLike) -> int:
        return self._wall(value).hour

    def get_minutes(self, value: DateLike) -> int:
        return self._wall(value).minute

    def set_hours(self, value: DateLike, hours: int) -> datetime:
        return self.localize(self._wall(value).replace(hour=hours))

    def set_minutes(self, value: DateLike, minutes: int) -> datetime:
        return self.localize(self._wall(value).replace(minute=minutes))

    def get_timezone_offset(self, value: DateLike) -> int:
        """UTC offset in minutes at the given instant, positive east of UTC."""
        offset = self.to_local(value).utcoffset()
        return int(offset.total_seconds() // 60)

    # ==================== Comparison ====================

    def is_same_day(self, left: DateLike, right: DateLike) -> bool:
        return self._wall(left).date() == self._wall(right).date()

    def is_same_month(self, left: DateLike, right: DateLike) -> bool:
        a, b = self._wall(left), self._wall(right)
        return (a.year, a.month) == (b.year, b.month)

    def is_same_second(self, left: DateLike, right: DateLike) -> bool:
        a = self._utc(left).replace(microsecond=0)
        b = self._utc(right).replace(microsecond=0)
        return a == b

    def max(self, values: Iterable[DateLike]) -> datetime:
        """Latest of the given instants."""
        return max(self.to_local(v) for v in values)


class PytzDateAdapter(DateAdapter):
    """DateAdapter backed by a pytz timezone."""

    def __init__(self, timezone_name: str = "UTC",
                 clock: Optional[Callable[[], datetime]] = None):
        super().__init__(clock)
        self.timezone_name = timezone_name
        self._tz = resolve_pytz_timezone(timezone_name)

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def localize(self, naive: datetime) -> datetime:
        try:
            local = self._tz.localize(naive, is_dst=None)
        except pytz.NonExistentTimeError:
            local = self._tz.localize(naive, is_dst=False)
        except pytz.AmbiguousTimeError:
            local = self._tz.localize(naive, is_dst=True)
        return self._tz.normalize(local)

    def __repr__(self):
        return f"PytzDateAdapter({self.timezone_name!r})"


class ZoneInfoDateAdapter(DateAdapter):
    """DateAdapter backed by the standard library zoneinfo database."""

    def __init__(self, timezone_name: str = "UTC",
                 clock: Optional[Callable[[], datetime]] = None):
        super().__init__(clock)
        self.timezone_name = timezone_name
        self._tz = resolve_zoneinfo_timezone(timezone_name)

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def localize(self, naive: datetime) -> datetime:
        # fold=0 puts gap times on the pre-transition offset; the UTC round
        # trip then normalizes them past the gap
        return naive.replace(tzinfo=self._tz).astimezone(_UTC).astimezone(self._tz)

    def __repr__(self):
        return f"ZoneInfoDateAdapter({self.timezone_name!r})"


DATE_BACKENDS = {
    "pytz": PytzDateAdapter,
    "zoneinfo": ZoneInfoDateAdapter,
}


def create_date_adapter(timezone_name: str = "UTC", backend: str = "pytz",
                        clock: Optional[Callable[[], datetime]] = None) -> DateAdapter:
    """
    Create a DateAdapter for a timezone.

    Args:
        timezone_name: IANA timezone name.
        backend: "pytz" or "zoneinfo".
        clock: Optional callable returning the current instant.

    Raises:
        ValueError: For an unknown backend, or an unknown timezone with the
            zoneinfo backend.
    """
    try:
        adapter_class = DATE_BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown date backend {backend!r}, expected one of {sorted(DATE_BACKENDS)}"
        ) from None
    logger.debug("Creating %s date adapter for %s", backend, timezone_name)
    return adapter_class(timezone_name, clock=clock)
