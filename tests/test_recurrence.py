from datetime import date, datetime, time, timedelta

import pytest

from quest_schedule import recurrence
from quest_schedule.errors import InvalidDateValue, InvalidFirstClassDate
from quest_schedule.models import MeetingRecord
from quest_schedule.util import parse_timezone

TZ = parse_timezone("America/Toronto")


def make_record(**overrides):
    base = dict(
        course_code="CS 452",
        course_name="Real-time Programming",
        class_number="1234",
        section="001",
        component="LEC",
        weekdays=("MO", "WE", "FR"),
        start_time="10:30AM",
        end_time="11:20AM",
        location="MC 2066",
        instructor="William B Cowan",
        start_date="01/06/2025",
        end_date="04/04/2025",
    )
    base.update(overrides)
    return MeetingRecord(**base)


@pytest.mark.parametrize(
    "date_format, value",
    [
        ("DD/MM/YYYY", "04/09/2023"),
        ("MM/DD/YYYY", "09/04/2023"),
        ("YYYY/MM/DD", "2023/09/04"),
        ("YYYY/DD/MM", "2023/04/09"),
        ("MM/YYYY/DD", "09/2023/04"),
        ("DD/YYYY/MM", "04/2023/09"),
    ],
)
def test_parse_date_every_format(date_format, value):
    assert recurrence.parse_date(value, date_format) == date(2023, 9, 4)


def test_parse_date_two_digit_year():
    assert recurrence.parse_date("09/04/23", "MM/DD/YYYY") == date(2023, 9, 4)


@pytest.mark.parametrize("value", ["99/99/9999", "02/30/2025", "13/01/2025", "1/2", "a/b/c", "00/00/0000"])
def test_parse_date_rejects_invalid_values(value):
    with pytest.raises(InvalidDateValue):
        recurrence.parse_date(value, "MM/DD/YYYY")


def test_parse_date_unknown_format():
    with pytest.raises(ValueError):
        recurrence.parse_date("01/06/2025", "DD.MM.YYYY")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("8:30AM", time(8, 30)),
        ("08:30AM", time(8, 30)),
        ("2:30PM", time(14, 30)),
        ("12:00PM", time(12, 0)),
        ("12:15AM", time(0, 15)),
        ("10:30 am", time(10, 30)),
        ("14:30", time(14, 30)),
        ("00:05", time(0, 5)),
    ],
)
def test_parse_time_both_notations(value, expected):
    assert recurrence.parse_time(value) == expected


@pytest.mark.parametrize("value", ["invalid", "", "25:99PM", "13:00PM", "24:00", "9:75"])
def test_parse_time_returns_none_for_garbage(value):
    assert recurrence.parse_time(value) is None


def test_first_class_date_advances_to_meeting_day():
    record = make_record(weekdays=("MO",))
    # 2025-01-01 is a Wednesday
    assert recurrence.first_class_date(record, date(2025, 1, 1)) == date(2025, 1, 6)
    assert recurrence.first_class_date(record, date(2025, 1, 6)) == date(2025, 1, 6)


def test_first_class_date_without_weekdays_fails():
    with pytest.raises(InvalidFirstClassDate):
        recurrence.first_class_date(make_record(weekdays=()), date(2025, 1, 1))


def test_build_event_recurring():
    event = recurrence.build_event(make_record(weekdays=("TU", "TH")), "MM/DD/YYYY", TZ)
    assert event.first_start == datetime(2025, 1, 7, 10, 30, tzinfo=TZ)
    assert event.first_end == datetime(2025, 1, 7, 11, 20, tzinfo=TZ)
    assert event.until == date(2025, 4, 4)
    assert event.by_day == ("TU", "TH")


def test_build_event_single_date():
    record = make_record(start_date="01/08/2025", end_date="01/08/2025")
    event = recurrence.build_event(record, "MM/DD/YYYY", TZ)
    assert event.until is None
    assert event.first_start.date() == date(2025, 1, 8)


def test_build_event_bad_time_degrades():
    event = recurrence.build_event(make_record(start_time="invalid", end_time="invalid"), "MM/DD/YYYY", TZ)
    assert event.first_start is None
    assert event.first_end is None
    assert event.until == date(2025, 4, 4)


def test_build_event_bad_date_is_fatal():
    with pytest.raises(InvalidDateValue):
        recurrence.build_event(make_record(end_date="99/99/9999"), "MM/DD/YYYY", TZ)


def test_build_event_refuses_tba():
    with pytest.raises(ValueError):
        recurrence.build_event(make_record(weekdays=(), is_tba=True), "MM/DD/YYYY", TZ)


def test_dst_offsets():
    winter = recurrence.build_event(make_record(), "MM/DD/YYYY", TZ)
    summer = recurrence.build_event(
        make_record(start_date="03/10/2025", end_date="04/04/2025"), "MM/DD/YYYY", TZ
    )
    assert winter.first_start.utcoffset() == timedelta(hours=-5)
    assert summer.first_start.utcoffset() == timedelta(hours=-4)
    assert summer.first_start.hour == 10
