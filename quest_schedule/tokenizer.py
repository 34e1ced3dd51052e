"""Locate courses and meeting rows in pasted Quest schedule text.

Quest pages copy out in one of two shapes:

- columnar: every table cell on its own line (or separated by tabs), in the
  order class number, section, component, days & times, room, instructor
  (one or two lines) and start/end date;
- inline: a whole meeting on one line with the same fields separated by
  spaces.

Both strategies run over each course body and the one that recognises more
meetings wins.  Rows that do not fit are skipped; only an input without any
meeting at all is an error.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .errors import NoRecordsFound, RecordLimitExceeded
from .models import CourseHeader, RawMeeting

HEADER_RE = re.compile(r"^[ \t]*([A-Z]{2,7} \d{2,4})[ \t]+-[ \t]+(\S.*?)[ \t]*$", re.MULTILINE)
TWELVE_HOUR_RE = re.compile(r"\d:[0-5]\d ?[AP]M")

TIME_12H = r"[01]?\d:[0-5]\d ?[AP]M"
TIME_24H = r"[0-2]?\d:[0-5]\d"
DAYS = r"(?:Th|[MTWHF])*"
DATE = r"\d{1,4}/\d{1,4}/\d{1,4}"

CLASS_NUMBER_RE = re.compile(r"\d{4,5}")
SECTION_RE = re.compile(r"[0-9A-Z]{3}")
COMPONENT_RE = re.compile(r"[A-Za-z]{3}")
DATE_RANGE_RE = re.compile(rf"(?P<start_date>{DATE})[ \t]*-[ \t]*(?P<end_date>{DATE})")
ROOM_RE = re.compile(r"(?P<room>TBA|[A-Z][A-Z0-9]*[ \t]+\d{1,5}[A-Z]?)\b[ \t]*(?P<rest>.*)")

# Monday first; the order BYDAY values are written in.
WEEKDAY_CODES = (("M", "MO"), ("T", "TU"), ("W", "WE"), ("H", "TH"), ("F", "FR"))


def uses_twelve_hour_clock(text: str) -> bool:
    return TWELVE_HOUR_RE.search(text) is not None


def time_pattern_for(text: str) -> str:
    return TIME_12H if uses_twelve_hour_clock(text) else TIME_24H


def parse_weekdays(days: str) -> Tuple[str, ...]:
    """Decode a compact day code such as ``MThWF`` into BYDAY codes.

    ``Th`` and ``H`` both mean Thursday, a lone ``T`` is Tuesday.  The result
    is always in Monday-first order and without repeats; unknown letters are
    ignored.
    """
    letters = set(days.replace("Th", "H"))
    return tuple(code for letter, code in WEEKDAY_CODES if letter in letters)


def split_courses(text: str, max_courses: int = 20) -> List[Tuple[CourseHeader, str]]:
    """Cut the text into (header, body) pairs, one per course header line."""
    matches = []
    for match in HEADER_RE.finditer(text):
        if len(matches) >= max_courses:
            logging.warning("More than %d course headers in input", max_courses)
            raise RecordLimitExceeded("courses", max_courses)
        matches.append(match)

    courses: List[Tuple[CourseHeader, str]] = []
    for idx, match in enumerate(matches):
        body_end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        header = CourseHeader(code=match.group(1), title=match.group(2))
        courses.append((header, text[match.end():body_end]))
    return courses


def _days_time(time_pattern: str) -> str:
    return (
        rf"(?P<days>{DAYS})[ \t]*(?P<start_time>{time_pattern})"
        rf"[ \t]*-[ \t]*(?P<end_time>{time_pattern})"
    )


def _split_room(middle: str) -> Tuple[str, str]:
    match = ROOM_RE.fullmatch(middle)
    if match:
        return match.group("room"), match.group("rest")
    return "", middle


def parse_inline(body: str, time_pattern: str) -> List[RawMeeting]:
    row_re = re.compile(
        rf"(?P<class_number>\d{{4,5}})[ \t]+(?P<section>[0-9A-Z]{{3}})[ \t]+"
        rf"(?P<component>[A-Za-z]{{3}})[ \t]+"
        rf"(?:(?P<tba>TBA)|{_days_time(time_pattern)})[ \t]+"
        rf"(?P<middle>.*?)[ \t]*"
        rf"(?P<start_date>{DATE})[ \t]*-[ \t]*(?P<end_date>{DATE})"
    )
    meetings: List[RawMeeting] = []
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        match = row_re.fullmatch(line)
        if not match:
            if CLASS_NUMBER_RE.match(line):
                logging.debug("Skipping inline row %r", line)
            continue
        room, instructor = _split_room(match.group("middle"))
        tba = match.group("tba") is not None
        meetings.append(
            RawMeeting(
                class_number=match.group("class_number"),
                section=match.group("section"),
                component=match.group("component"),
                days="" if tba else match.group("days"),
                start_time="" if tba else match.group("start_time"),
                end_time="" if tba else match.group("end_time"),
                room=room,
                instructor_lines=(instructor,),
                start_date=match.group("start_date"),
                end_date=match.group("end_date"),
                tba=tba,
            )
        )
    return meetings


def _cells(body: str) -> List[str]:
    return [cell.strip() for cell in re.split(r"[\t\r\n]+", body) if cell.strip()]


def _columnar_group(
    cells: List[str], start: int, days_time_re: re.Pattern
) -> Tuple[Optional[RawMeeting], int]:
    """Read one meeting starting at a class number cell.

    Returns the meeting and the number of cells it used, or ``(None, 0)``.
    """
    if start + 6 >= len(cells):
        return None, 0
    class_number, section, component, days_time, room = cells[start:start + 5]
    if not SECTION_RE.fullmatch(section):
        return None, 0

    instructor_lines: Tuple[str, ...]
    date_range = DATE_RANGE_RE.fullmatch(cells[start + 6])
    if date_range:
        instructor_lines = (cells[start + 5],)
        used = 7
    elif start + 7 < len(cells) and DATE_RANGE_RE.fullmatch(cells[start + 7]):
        date_range = DATE_RANGE_RE.fullmatch(cells[start + 7])
        instructor_lines = (cells[start + 5], cells[start + 6])
        used = 8
    else:
        return None, 0

    tba = days_time == "TBA"
    times = None if tba else days_time_re.fullmatch(days_time)
    if not tba and times is None:
        return None, 0

    meeting = RawMeeting(
        class_number=class_number,
        section=section,
        component=component,
        days=times.group("days") if times else "",
        start_time=times.group("start_time") if times else "",
        end_time=times.group("end_time") if times else "",
        room=room,
        instructor_lines=instructor_lines,
        start_date=date_range.group("start_date"),
        end_date=date_range.group("end_date"),
        tba=tba,
    )
    return meeting, used


def parse_columnar(body: str, time_pattern: str) -> List[RawMeeting]:
    cells = _cells(body)
    days_time_re = re.compile(_days_time(time_pattern))
    meetings: List[RawMeeting] = []
    idx = 0
    while idx < len(cells):
        starts_group = (
            CLASS_NUMBER_RE.fullmatch(cells[idx])
            and idx + 2 < len(cells)
            and COMPONENT_RE.fullmatch(cells[idx + 2])
        )
        if not starts_group:
            idx += 1
            continue
        meeting, used = _columnar_group(cells, idx, days_time_re)
        if meeting is None:
            logging.debug("Skipping columnar meeting starting at %r", cells[idx])
            idx += 1
            continue
        meetings.append(meeting)
        idx += used
    return meetings


def find_meetings(body: str, time_pattern: str) -> Tuple[str, List[RawMeeting]]:
    """Run both layouts over a course body and keep the better result."""
    columnar = parse_columnar(body, time_pattern)
    inline = parse_inline(body, time_pattern)
    if len(inline) > len(columnar):
        return "inline", inline
    return "columnar", columnar


def tokenize(
    text: str, *, max_courses: int = 20, max_sections: int = 5
) -> List[Tuple[CourseHeader, List[RawMeeting]]]:
    time_pattern = time_pattern_for(text)
    courses: List[Tuple[CourseHeader, List[RawMeeting]]] = []
    total = 0
    for header, body in split_courses(text, max_courses):
        layout, meetings = find_meetings(body, time_pattern)
        if len(meetings) > max_sections:
            logging.warning("%s lists more than %d meetings", header.code, max_sections)
            raise RecordLimitExceeded(f"meetings for {header.code}", max_sections)
        logging.info("%s: %d meeting(s) in %s layout", header.code, len(meetings), layout)
        courses.append((header, meetings))
        total += len(meetings)
    if total == 0:
        raise NoRecordsFound()
    return courses
