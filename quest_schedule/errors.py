"""Errors raised while turning schedule text into a calendar."""

from __future__ import annotations


class ScheduleError(ValueError):
    """Base class for fatal problems with the pasted schedule."""


class NoRecordsFound(ScheduleError):
    def __init__(self) -> None:
        super().__init__("No class meetings were found in the schedule text")


class RecordLimitExceeded(ScheduleError):
    def __init__(self, what: str, limit: int) -> None:
        super().__init__(f"Found more than {limit} {what}; is this really a class schedule?")
        self.what = what
        self.limit = limit


class InvalidFirstClassDate(ScheduleError):
    def __init__(self, course_code: str, start_date: str) -> None:
        super().__init__(
            f"Invalid first date of class for {course_code}: "
            f"no meeting day found on or after {start_date}"
        )


class InvalidDateValue(ScheduleError):
    def __init__(self, value: str, date_format: str) -> None:
        super().__init__(f"Invalid date {value!r} for format {date_format}")
        self.value = value
        self.date_format = date_format
