"""Schedule text in, calendar document out."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from . import ics_builder, records, recurrence, tokenizer, util
from .config import DEFAULT_DATE_FORMAT, TIMEZONE, ExportConfig, date_field_order
from .errors import NoRecordsFound
from .models import CalendarEvent


def build_events(
    raw_text: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    config: Optional[ExportConfig] = None,
) -> List[CalendarEvent]:
    config = config or ExportConfig()
    date_field_order(date_format)
    tz = util.parse_timezone(TIMEZONE)

    courses = tokenizer.tokenize(
        raw_text, max_courses=config.max_courses, max_sections=config.max_sections
    )
    all_records = records.build_records(courses)
    meetings = records.schedulable(all_records)
    logging.info(
        "Found %d course(s), %d meeting(s), %d without a schedule",
        len(courses),
        len(all_records),
        len(all_records) - len(meetings),
    )
    if not meetings and config.fail_on_tba_only:
        raise NoRecordsFound()
    return [recurrence.build_event(record, date_format, tz) for record in meetings]


def export_schedule(
    raw_text: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    config: Optional[ExportConfig] = None,
) -> Tuple[str, List[CalendarEvent]]:
    config = config or ExportConfig()
    events = build_events(raw_text, date_format, config)
    ics = ics_builder.build_ics(events, summary=config.summary, description=config.description)
    return ics, events


def produce_calendar_document(
    raw_text: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    summary_template: Optional[str] = None,
    description_template: Optional[str] = None,
    limits: Optional[Mapping[str, Any]] = None,
) -> str:
    """Convert pasted Quest schedule text into iCalendar text.

    ``limits`` may override any of the :class:`ExportConfig` settings, e.g.
    ``{"max_courses": 10}``.  Raises a :class:`~quest_schedule.errors.ScheduleError`
    subclass when the schedule cannot be exported.
    """
    overrides = dict(limits or {})
    if summary_template is not None:
        overrides["summary"] = summary_template
    if description_template is not None:
        overrides["description"] = description_template
    config = ExportConfig.with_defaults(overrides)
    ics, _ = export_schedule(raw_text, date_format, config)
    return ics
