from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easily.
    """
    return datetime.now()


def sunday_weekday(d: date) -> int:
    """Weekday number with Sunday=0 .. Saturday=6."""
    return d.isoweekday() % 7


def minutes_after(start: time, moment: datetime) -> float:
    """Minutes elapsed between ``start`` on the day of ``moment`` and ``moment``."""
    start_dt = datetime.combine(moment.date(), start)
    return (moment - start_dt) / timedelta(minutes=1)
