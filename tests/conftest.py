"""Shared fixtures for the calendar layout tests."""

from datetime import datetime, timezone

import pytest

from calendar_layout import TimeOfDay, ViewConfig, create_date_adapter


# "Today" for every test
FROZEN_NOW = datetime(2016, 6, 28, tzinfo=timezone.utc)


def frozen_clock():
    return FROZEN_NOW


@pytest.fixture(params=["pytz", "zoneinfo"])
def adapter(request):
    """UTC date adapter, once per backend."""
    return create_date_adapter("UTC", request.param, clock=frozen_clock)


@pytest.fixture(params=["pytz", "zoneinfo"])
def london_adapter(request):
    """Europe/London date adapter for DST days, once per backend."""
    return create_date_adapter("Europe/London", request.param, clock=frozen_clock)


@pytest.fixture
def week_config():
    """Options used by most week view tests."""
    return ViewConfig(
        week_starts_on=0,
        hour_segments=2,
        day_start=TimeOfDay(1, 30),
        day_end=TimeOfDay(3, 59),
        segment_height=30,
    )
