"""Turn raw meeting rows into clean, de-duplicated meeting records."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import CourseHeader, MeetingRecord, RawMeeting
from .tokenizer import COMPONENT_RE, parse_weekdays

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(value: str) -> str:
    """Collapse runs of whitespace (tabs and newlines included) to one space."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def merge_instructor(lines: Sequence[str]) -> str:
    return ", ".join(name for name in (normalize(line) for line in lines) if name)


def build_record(header: CourseHeader, raw: RawMeeting) -> Optional[MeetingRecord]:
    component = normalize(raw.component)
    if not COMPONENT_RE.fullmatch(component):
        logging.debug("Dropping %s %s: bad component %r", header.code, raw.class_number, component)
        return None

    days = normalize(raw.days)
    return MeetingRecord(
        course_code=normalize(header.code),
        course_name=normalize(header.title),
        class_number=normalize(raw.class_number),
        section=normalize(raw.section),
        component=component,
        weekdays=() if raw.tba else parse_weekdays(days),
        start_time=normalize(raw.start_time),
        end_time=normalize(raw.end_time),
        location=normalize(raw.room),
        instructor=merge_instructor(raw.instructor_lines),
        start_date=normalize(raw.start_date),
        end_date=normalize(raw.end_date),
        is_tba=raw.tba,
    )


def build_records(
    courses: Iterable[Tuple[CourseHeader, Iterable[RawMeeting]]]
) -> List[MeetingRecord]:
    """Build records in input order; later exact duplicates are dropped."""
    records: Dict[MeetingRecord, None] = {}
    for header, meetings in courses:
        for raw in meetings:
            record = build_record(header, raw)
            if record is None:
                continue
            if record in records:
                logging.debug("Dropping duplicate meeting %s %s", record.course_code, record.class_number)
                continue
            if record.is_tba:
                logging.debug("%s %s has no scheduled time (TBA)", record.course_code, record.component)
            records[record] = None
    return list(records)


def schedulable(records: Iterable[MeetingRecord]) -> List[MeetingRecord]:
    return [record for record in records if not record.is_tba]
