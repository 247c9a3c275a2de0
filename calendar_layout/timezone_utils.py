"""
Timezone resolution for the layout engine.

Turns a configured timezone name into a tzinfo object for either of the
supported date backends. Unlike a desktop application there is no
process-wide "current timezone": every adapter carries its own zone.
"""

import logging
import time as _time
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytz


logger = logging.getLogger(__name__)


def _system_offset_minutes() -> int:
    """Current offset of the host's local time from UTC, in minutes."""
    if _time.localtime().tm_isdst:
        offset_seconds = -_time.altzone
    else:
        offset_seconds = -_time.timezone
    return offset_seconds // 60


def resolve_pytz_timezone(timezone_name: str, fallback: bool = True) -> tzinfo:
    """
    Resolve a timezone name to a pytz timezone object.

    Args:
        timezone_name: IANA name such as "Europe/London" or "UTC".
        fallback: When the name is unknown, try the host's timezone name and
            finally a fixed offset equal to the host's current UTC offset.

    Returns:
        pytz timezone object.

    Raises:
        ValueError: If the name is unknown and fallback is disabled.
    """
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        if not fallback:
            raise ValueError(f"Unknown timezone: {timezone_name}")
        logger.debug("Unknown timezone %r, falling back to system zone", timezone_name)
        try:
            return pytz.timezone(_time.tzname[0])
        except pytz.UnknownTimeZoneError:
            return pytz.FixedOffset(_system_offset_minutes())


def resolve_zoneinfo_timezone(timezone_name: str) -> tzinfo:
    """
    Resolve a timezone name to a zoneinfo.ZoneInfo object.

    Raises:
        ValueError: If the name is not in the timezone database.
    """
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {timezone_name}") from e
