from quest_schedule import records
from quest_schedule.models import CourseHeader, RawMeeting

HEADER = CourseHeader(code="CS   452", title="Real-time    Programming\t")


def make_raw(**overrides):
    base = dict(
        class_number="1234",
        section="001",
        component="LEC",
        days="MThWF",
        start_time="08:30AM",
        end_time="09:20AM",
        room="  DWE   3522A  ",
        instructor_lines=(" William  B  Cowan ",),
        start_date="04/09/2023",
        end_date="08/12/2023",
    )
    base.update(overrides)
    return RawMeeting(**base)


def test_normalize_collapses_whitespace():
    assert records.normalize("  multiple   spaces  ") == "multiple spaces"
    assert records.normalize("tabs\t\tand\tnewlines\n\n") == "tabs and newlines"
    assert records.normalize("normal string") == "normal string"
    assert records.normalize("") == ""


def test_normalize_is_idempotent():
    for value in ["  a \t b\n\nc  ", "CS 452", "\r\n x"]:
        once = records.normalize(value)
        assert records.normalize(once) == once


def test_build_record_cleans_fields():
    record = records.build_record(HEADER, make_raw())
    assert record.course_code == "CS 452"
    assert record.course_name == "Real-time Programming"
    assert record.location == "DWE 3522A"
    assert record.instructor == "William B Cowan"
    assert record.weekdays == ("MO", "WE", "TH", "FR")
    assert not record.is_tba


def test_instructor_lines_are_joined():
    record = records.build_record(HEADER, make_raw(instructor_lines=("Jane Smith", " Bob\tLee ")))
    assert record.instructor == "Jane Smith, Bob Lee"


def test_bad_component_is_dropped():
    assert records.build_record(HEADER, make_raw(component="LECTURE")) is None
    assert records.build_record(HEADER, make_raw(component="L3C")) is None


def test_tba_record_is_kept_but_not_schedulable():
    tba = records.build_record(HEADER, make_raw(days="", start_time="", end_time="", tba=True))
    assert tba.is_tba
    assert tba.weekdays == ()
    lecture = records.build_record(HEADER, make_raw())
    assert records.schedulable([tba, lecture]) == [lecture]


def test_duplicates_removed_first_wins():
    first = make_raw()
    other = make_raw(class_number="1235", component="TUT")
    spaced = make_raw(room="DWE 3522A", instructor_lines=("William B Cowan",))
    built = records.build_records([(HEADER, [first, other, spaced, first])])
    assert [(r.class_number, r.component) for r in built] == [("1234", "LEC"), ("1235", "TUT")]


def test_records_differing_in_any_field_are_kept():
    built = records.build_records(
        [(HEADER, [make_raw(), make_raw(end_date="09/12/2023"), make_raw(room="MC 2066")])]
    )
    assert len(built) == 3
