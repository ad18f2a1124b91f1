"""Print the session plan a new course would get.

Example:
    python scripts/preview_schedule.py 2025-03-02 --weekday 2 --holidays data/holidays.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from course_attendance.common.datetime_utils import parse_iso_date
from course_attendance.core.exceptions import ValidationError
from course_attendance.courses.scheduler import generate, random_code_factory
from course_attendance.holidays.loader import load_holiday_csv
from course_attendance.logging_setup import configure_logging
from course_attendance.settings import load_settings

logger = logging.getLogger("course_attendance.scripts.preview_schedule")

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Preview the weekly sessions generated for a course.")
    parser.add_argument("start_date", help="first day of the semester (YYYY-MM-DD)")
    parser.add_argument("--weekday", type=int, default=1, help="meeting day, 0=Sunday .. 6=Saturday (default: 1)")
    parser.add_argument("--weeks", type=int, default=None, help="course length in weeks (default: from settings)")
    parser.add_argument("--holidays", default=None, help="date,label CSV (default: HOLIDAYS_FILE setting)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        start = parse_iso_date(args.start_date)
        holidays = load_holiday_csv(args.holidays or settings.holidays_file)
        drafts = generate(
            start,
            args.weekday,
            args.weeks if args.weeks is not None else settings.schedule.course_length,
            holidays,
            code_factory=random_code_factory(settings.schedule.code_digits),
        )
    except ValidationError as e:
        logger.error("%s", e)
        return 2

    for d in drafts:
        kind = "holiday" if d.is_holiday else ("makeup" if d.is_makeup else "class")
        code = d.auth_code or "-"
        print(f"{d.week:>3}  {d.date.isoformat()} {WEEKDAY_NAMES[args.weekday]}  {kind:<8} {code:>6}  {d.title}")

    closures = sum(1 for d in drafts if d.is_holiday)
    print(f"OK: {len(drafts)} sessions ({closures} holiday closure(s), {closures} makeup(s))")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
