"""Command line interface for the Quest schedule exporter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from . import exporter, util
from .config import DATE_FORMATS, DEFAULT_DATE_FORMAT, PLACEHOLDERS, ExportConfig
from .errors import ScheduleError

EMPTY_INPUT_MESSAGE = "Please paste your Quest schedule data"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quest schedule to iCalendar exporter")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text file with the copied schedule ('-' for stdin)",
    )
    parser.add_argument(
        "--date-format", choices=list(DATE_FORMATS), default=DEFAULT_DATE_FORMAT
    )
    parser.add_argument("--summary", help="Event title template")
    parser.add_argument("--description", help="Event description template")
    parser.add_argument("--max-courses", type=int)
    parser.add_argument("--max-sections", type=int)
    parser.add_argument("--filename")
    parser.add_argument("--out-dir", type=Path, default=Path("out/ics"))
    parser.add_argument(
        "--fail-on-tba-only",
        action="store_true",
        default=None,
        help="Treat a schedule with only TBA meetings as an error",
    )
    parser.add_argument("--preview", action="store_true")
    parser.add_argument(
        "--list-placeholders",
        action="store_true",
        help="Show the template placeholders and exit",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    util.configure_logging(args.verbose)

    if args.list_placeholders:
        for p in PLACEHOLDERS:
            print(f"{p['placeholder']:<10} {p['description']} (e.g. {p['example']})")
        return 0

    config = ExportConfig.with_defaults(
        {
            "max_courses": args.max_courses,
            "max_sections": args.max_sections,
            "filename": args.filename,
            "summary": args.summary,
            "description": args.description,
            "fail_on_tba_only": args.fail_on_tba_only,
        }
    )
    text = _read_input(args.input)
    if not text.strip():
        logging.error(EMPTY_INPUT_MESSAGE)
        return 1

    try:
        ics, events = exporter.export_schedule(text, args.date_format, config)
    except ScheduleError as exc:
        logging.error("Error processing schedule data: %s", exc)
        return 1

    args.out_dir.mkdir(parents=True, exist_ok=True)
    out_path = args.out_dir / config.filename
    out_path.write_text(ics, encoding="utf-8", newline="")
    print(out_path)
    if args.preview:
        for e in sorted(events, key=lambda e: (e.first_start is None, e.first_start)):
            start = f"{e.first_start:%Y-%m-%d %H:%M}" if e.first_start else "?"
            end = f"{e.first_end:%H:%M}" if e.first_end else "?"
            print(f"{start} - {end} {e.record.course_code} {e.record.component}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
