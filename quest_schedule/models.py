"""Data models for schedule entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class CourseHeader:
    code: str  # e.g. "CS 452"
    title: str


@dataclass(frozen=True)
class RawMeeting:
    """One meeting row as cut out of the pasted text, before cleanup."""

    class_number: str
    section: str
    component: str
    days: str
    start_time: str
    end_time: str
    room: str
    instructor_lines: Tuple[str, ...]
    start_date: str
    end_date: str
    tba: bool = False


@dataclass(frozen=True)
class MeetingRecord:
    course_code: str
    course_name: str
    class_number: str
    section: str
    component: str
    weekdays: Tuple[str, ...]  # two-letter codes, Monday first
    start_time: str
    end_time: str
    location: str
    instructor: str
    start_date: str  # still in the user's date format
    end_date: str
    is_tba: bool = False


@dataclass(frozen=True)
class CalendarEvent:
    first_start: Optional[datetime]
    first_end: Optional[datetime]
    until: Optional[date]
    by_day: Tuple[str, ...]
    record: MeetingRecord
