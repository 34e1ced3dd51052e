"""Export settings and their defaults."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

TIMEZONE = "America/Toronto"
PRODID = "-//questscheduleexporter.stephenli.ca//EN"

# Field order of the three numbers in a date, keyed by the name shown to users.
DATE_FORMATS: Dict[str, Tuple[str, str, str]] = {
    "DD/MM/YYYY": ("day", "month", "year"),
    "MM/DD/YYYY": ("month", "day", "year"),
    "YYYY/MM/DD": ("year", "month", "day"),
    "YYYY/DD/MM": ("year", "day", "month"),
    "MM/YYYY/DD": ("month", "year", "day"),
    "DD/YYYY/MM": ("day", "year", "month"),
}
DEFAULT_DATE_FORMAT = "MM/DD/YYYY"

PLACEHOLDERS = (
    {"placeholder": "@code", "description": "Course code", "example": "CS 452"},
    {"placeholder": "@section", "description": "Course section number", "example": "001"},
    {"placeholder": "@name", "description": "Name of the course", "example": "Real-time Programming"},
    {"placeholder": "@type", "description": "Type of course", "example": "LEC"},
    {"placeholder": "@location", "description": "Room for the course", "example": "DWE 3522A"},
    {"placeholder": "@prof", "description": "Instructor for the course", "example": "William B Cowan"},
)

DEFAULT_SUMMARY = "@code @type in @location"
DEFAULT_DESCRIPTION = "@code-@section: @name (@type) in @location with @prof"


@dataclass(frozen=True)
class ExportConfig:
    max_courses: int = 20
    max_sections: int = 5
    filename: str = "quest_schedule.ics"
    summary: str = DEFAULT_SUMMARY
    description: str = DEFAULT_DESCRIPTION
    # Input with only TBA meetings yields an empty calendar unless this is set.
    fail_on_tba_only: bool = False

    @classmethod
    def with_defaults(cls, overrides: Optional[Mapping[str, Any]] = None) -> "ExportConfig":
        """Merge a partial mapping of settings over the defaults.

        ``None`` values are treated as "not given" so that optional command
        line flags can be passed straight through.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        given = {k: v for k, v in (overrides or {}).items() if v is not None}
        unknown = set(given) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        config = cls(**given)
        for name in ("max_courses", "max_sections"):
            if getattr(config, name) < 1:
                raise ValueError(f"{name} must be at least 1")
        if not config.filename.strip():
            raise ValueError("filename must not be empty")
        return config


def date_field_order(date_format: str) -> Tuple[str, str, str]:
    try:
        return DATE_FORMATS[date_format]
    except KeyError:
        choices = ", ".join(DATE_FORMATS)
        raise ValueError(f"Unknown date format {date_format!r} (expected one of {choices})") from None
