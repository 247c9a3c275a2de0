"""
Configuration for calendar views.

Handles the view options shared by the week, month and day builders and
their TOML file representation.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .date_adapter import DateAdapter, create_date_adapter


logger = logging.getLogger(__name__)


class Precision(Enum):
    """How all-day offsets and spans are measured."""
    DAYS = "days"  # Whole days
    MINUTES = "minutes"  # Fractional days from exact elapsed time


@dataclass(frozen=True)
class TimeOfDay:
    """An hour and minute within a day."""
    hour: int = 0
    minute: int = 0

    def clamped(self) -> 'TimeOfDay':
        """Copy with hour clamped to 0-23 and minute to 0-59."""
        return TimeOfDay(
            hour=max(0, min(23, self.hour)),
            minute=max(0, min(59, self.minute)),
        )

    @classmethod
    def parse(cls, text: str) -> 'TimeOfDay':
        """Parse "HH:MM"."""
        try:
            hour, minute = text.split(':')
            return cls(int(hour), int(minute))
        except (AttributeError, ValueError):
            raise ValueError(f"Invalid time of day {text!r}, expected HH:MM") from None


@dataclass
class ViewConfig:
    """Options for building week, month and day views."""
    week_starts_on: int = 0  # 0 = Sunday ... 6 = Saturday
    excluded: tuple[int, ...] = ()  # Weekdays hidden from the view
    weekend_days: tuple[int, ...] = (0, 6)
    precision: Precision = Precision.DAYS
    absolute_positioned_events: bool = False

    # Day and week hour grid
    hour_segments: int = 2
    hour_duration: Optional[int] = None  # Minutes per hour row (60 if unset)
    segment_height: int = 30  # Pixel height of one segment
    day_start: TimeOfDay = field(default_factory=lambda: TimeOfDay(0, 0))
    day_end: TimeOfDay = field(default_factory=lambda: TimeOfDay(23, 59))
    minimum_event_height: Optional[int] = None
    event_width: int = 150  # Column width in the day view
    column_width: int = 100  # Available width of a week view day column

    def __post_init__(self):
        self.precision = Precision(self.precision)
        self.excluded = tuple(self.excluded)
        self.weekend_days = tuple(self.weekend_days)
        for day in (self.week_starts_on, *self.excluded, *self.weekend_days):
            if not 0 <= day <= 6:
                raise ValueError(f"Weekday must be between 0 and 6, got {day}")
        if self.hour_segments < 1:
            raise ValueError(f"hour_segments must be at least 1, got {self.hour_segments}")


@dataclass
class Config:
    """Main configuration container."""
    timezone: str = "UTC"
    date_backend: str = "pytz"  # "pytz" or "zoneinfo"
    view: ViewConfig = field(default_factory=ViewConfig)

    def create_date_adapter(self, clock: Optional[Callable[[], datetime]] = None) -> DateAdapter:
        """Build the configured date adapter."""
        return create_date_adapter(self.timezone, self.date_backend, clock=clock)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'calendar-layout' / 'calendar-layout.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        Recognized sections are [General] (timezone, date_backend), [Week]
        (week_starts_on, excluded, weekend_days, precision,
        absolute_positioned_events) and [Day] (hour_segments, hour_duration,
        segment_height, day_start, day_end, minimum_event_height,
        event_width, column_width). Times are written as "HH:MM".

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If an option has an invalid value.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        logger.debug("Loaded configuration sections %s from %s", list(data.keys()), config_path)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a Config from parsed TOML data."""
        general = data.get('General', {})
        week = data.get('Week', {})
        day = data.get('Day', {})

        day_start = day.get('day_start')
        day_end = day.get('day_end')
        try:
            view = ViewConfig(
                week_starts_on=week.get('week_starts_on', ViewConfig.week_starts_on),
                excluded=tuple(week.get('excluded', ())),
                weekend_days=tuple(week.get('weekend_days', (0, 6))),
                precision=week.get('precision', Precision.DAYS.value),
                absolute_positioned_events=week.get(
                    'absolute_positioned_events', ViewConfig.absolute_positioned_events
                ),
                hour_segments=day.get('hour_segments', ViewConfig.hour_segments),
                hour_duration=day.get('hour_duration'),
                segment_height=day.get('segment_height', ViewConfig.segment_height),
                day_start=TimeOfDay.parse(day_start) if day_start else TimeOfDay(0, 0),
                day_end=TimeOfDay.parse(day_end) if day_end else TimeOfDay(23, 59),
                minimum_event_height=day.get('minimum_event_height'),
                event_width=day.get('event_width', ViewConfig.event_width),
                column_width=day.get('column_width', ViewConfig.column_width),
            )
        except TypeError as e:
            raise ValueError(f"Invalid view configuration: {e}") from e

        return cls(
            timezone=general.get('timezone', 'UTC'),
            date_backend=general.get('date_backend', 'pytz'),
            view=view,
        )
