"""
Calendar Datetime Utilities

- to_utc_iso / utc_now_iso: Millisecond UTC ISO timestamps
- is_valid_day: Check a YYYY-MM-DD query string
- day_window_utc: UTC [00:00:00, 23:59:59] bounds for a calendar date
- parse_google_calendar_datetime: Parse a Google start/end dict
- split_event_times: Date, start time, end time and duration for a breakdown request
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

import pytz

from wth_backend.constants import CALENDAR_SETTINGS
from wth_backend.gcal.dto import CalendarEvent, EventTime


def is_valid_day(date_str: str) -> bool:
    """True when ``date_str`` has the 4-2-2 digit shape."""
    return bool(CALENDAR_SETTINGS.DATE_PATTERN.fullmatch(date_str or ""))


def to_utc_iso(dt: datetime) -> str:
    # Millisecond precision with a trailing Z, e.g. 2025-09-20T00:00:00.000Z
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return to_utc_iso(datetime.now(timezone.utc))


def day_window_utc(date_str: str) -> Tuple[str, str]:
    """
    Build the query window for one calendar date.

    The bounds are UTC midnight to 23:59:59 UTC, not the local day of the
    configured timezone; the timezone only localizes returned instants.

    Args:
        date_str: Date in YYYY-MM-DD format

    Returns:
        (time_min, time_max) as UTC ISO strings
    """
    day = datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    time_min = day.replace(hour=0, minute=0, second=0)
    time_max = day.replace(hour=23, minute=59, second=59)
    return to_utc_iso(time_min), to_utc_iso(time_max)


def parse_google_calendar_datetime(event_time: EventTime, tz_name: str = "UTC") -> Optional[datetime]:
    """
    Parse a Google Calendar start/end value into an aware datetime.

    All-day dates are taken as midnight in ``tz_name``.
    """
    if event_time.dateTime:
        return datetime.fromisoformat(event_time.dateTime.replace("Z", "+00:00"))
    if event_time.date:
        day = datetime.strptime(event_time.date, "%Y-%m-%d")
        return pytz.timezone(tz_name).localize(day)
    return None


def _clock_part(date_time: str) -> str:
    """Take HH:MM:SS out of an ISO datetime string, dropping any UTC offset."""
    clock = date_time.split("T", 1)[1]
    for marker in ("Z", "+", "-"):
        clock = clock.split(marker, 1)[0]
    return clock


def split_event_times(event: CalendarEvent) -> dict:
    """
    Derive the date/time fields a breakdown request needs from an event.

    Timed events use the wall-clock parts of their ISO strings; all-day events
    span 00:00:00 to 23:59:59. Duration is rounded whole minutes between start
    and end (all-day dates are read as UTC midnight).
    """
    start = parse_google_calendar_datetime(event.start)
    end = parse_google_calendar_datetime(event.end)
    duration = 0
    if start and end:
        duration = round((end - start).total_seconds() / 60)

    if event.start.dateTime:
        date = event.start.dateTime.split("T", 1)[0]
        start_time = _clock_part(event.start.dateTime)
    else:
        date = event.start.date
        start_time = "00:00:00"

    end_time = _clock_part(event.end.dateTime) if event.end.dateTime else "23:59:59"

    return {
        "date": date,
        "startTime": start_time,
        "endTime": end_time,
        "duration": duration,
    }
