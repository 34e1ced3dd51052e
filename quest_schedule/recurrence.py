"""Weekly recurrence for meeting records."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from .config import date_field_order
from .errors import InvalidDateValue, InvalidFirstClassDate
from .models import CalendarEvent, MeetingRecord

MAX_SEARCH_DAYS = 366
WEEKDAY_INDEX = {"MO": 0, "TU": 1, "WE": 2, "TH": 3, "FR": 4, "SA": 5, "SU": 6}

_DATE_PART_RE = re.compile(r"[0-9]{1,4}")
_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})\s*([AaPp][Mm])?")


def parse_date(value: str, date_format: str) -> date:
    """Parse ``value`` with the field order named by ``date_format``.

    Two-digit years are taken to be in the 2000s.
    """
    order = date_field_order(date_format)
    parts = value.strip().split("/")
    if len(parts) != 3 or not all(_DATE_PART_RE.fullmatch(p) for p in parts):
        raise InvalidDateValue(value, date_format)
    fields = dict(zip(order, parts))
    year = int(fields["year"])
    if len(fields["year"]) <= 2:
        year += 2000
    try:
        return date(year, int(fields["month"]), int(fields["day"]))
    except ValueError:
        raise InvalidDateValue(value, date_format) from None


def parse_time(value: str) -> Optional[time]:
    """Parse ``H:MM[AM|PM]`` or ``HH:MM``; return None if it makes no sense."""
    match = _TIME_RE.fullmatch(value.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    suffix = match.group(3)
    if suffix:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if suffix.upper() == "PM" else 0)
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def first_class_date(record: MeetingRecord, start: date) -> date:
    wanted = {WEEKDAY_INDEX[code] for code in record.weekdays}
    day = start
    for _ in range(MAX_SEARCH_DAYS):
        if day.weekday() in wanted:
            return day
        day += timedelta(days=1)
    raise InvalidFirstClassDate(record.course_code, record.start_date)


def build_event(record: MeetingRecord, date_format: str, tz: ZoneInfo) -> CalendarEvent:
    if record.is_tba:
        raise ValueError(f"{record.course_code} {record.component} is TBA and has no schedule")
    start_date = parse_date(record.start_date, date_format)
    end_date = parse_date(record.end_date, date_format)
    first = first_class_date(record, start_date)

    start_time = parse_time(record.start_time)
    end_time = parse_time(record.end_time)
    return CalendarEvent(
        first_start=datetime.combine(first, start_time, tz) if start_time is not None else None,
        first_end=datetime.combine(first, end_time, tz) if end_time is not None else None,
        until=end_date if end_date != start_date else None,
        by_day=record.weekdays,
        record=record,
    )
