"""ICS calendar builder."""

from __future__ import annotations

import hashlib
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_DESCRIPTION, DEFAULT_SUMMARY, PLACEHOLDERS, PRODID, TIMEZONE
from .models import CalendarEvent, MeetingRecord

UID_DOMAIN = "questscheduleexporter.stephenli.ca"

_PLACEHOLDER_RE = re.compile("|".join(re.escape(p["placeholder"]) for p in PLACEHOLDERS))


def _format_local(dt: Optional[datetime]) -> str:
    """Format a datetime in local time without timezone suffix."""
    if dt is None:
        return ""
    return dt.strftime("%Y%m%dT%H%M%S")


def _escape_text(value: str) -> str:
    """Escape commas; nothing else in our values needs escaping."""
    return value.replace(",", "\\,")


def placeholder_values(record: MeetingRecord) -> Dict[str, str]:
    return {
        "@code": record.course_code,
        "@section": record.section,
        "@name": record.course_name,
        "@type": record.component,
        "@location": record.location,
        "@prof": record.instructor,
    }


def fill_placeholders(template: str, record: MeetingRecord) -> str:
    """Replace every known placeholder; anything else is left untouched."""
    values = placeholder_values(record)
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(0)], template)


def _uid(event: CalendarEvent) -> str:
    record = event.record
    uid_base = (
        f"{record.course_code}|{record.class_number}|{record.section}|{record.component}"
        f"|{_format_local(event.first_start)}|{record.location}"
    )
    return f"{hashlib.sha1(uid_base.encode()).hexdigest()}@{UID_DOMAIN}"


def rrule(event: CalendarEvent) -> Optional[str]:
    if event.until is None:
        return None
    return (
        f"FREQ=WEEKLY;WKST=SU;BYDAY={','.join(event.by_day)}"
        f";UNTIL={event.until:%Y%m%d}T235959"
    )


def event_lines(
    event: CalendarEvent,
    summary: str = DEFAULT_SUMMARY,
    description: str = DEFAULT_DESCRIPTION,
) -> List[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{_uid(event)}",
        f"DTSTART;TZID={TIMEZONE}:{_format_local(event.first_start)}",
        f"DTEND;TZID={TIMEZONE}:{_format_local(event.first_end)}",
    ]
    rule = rrule(event)
    if rule:
        lines.append(f"RRULE:{rule}")
    lines.append(f"SUMMARY:{_escape_text(fill_placeholders(summary, event.record))}")
    lines.append(f"LOCATION:{_escape_text(event.record.location)}")
    lines.append(f"DESCRIPTION:{_escape_text(fill_placeholders(description, event.record))}")
    lines.append("END:VEVENT")
    return lines


def build_ics(
    events: Iterable[CalendarEvent],
    *,
    summary: str = DEFAULT_SUMMARY,
    description: str = DEFAULT_DESCRIPTION,
) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
    ]
    for e in events:
        lines.extend(event_lines(e, summary, description))
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines) + "\r\n"
