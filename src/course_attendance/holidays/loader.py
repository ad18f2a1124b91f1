from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..core.exceptions import ValidationError
from .model import Holiday, HolidayCalendar
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


def load_holiday_csv(path: Optional[Union[str, Path]]) -> HolidayCalendar:
    """Read a ``date,label`` CSV into a calendar.

    A missing path or file yields an empty calendar.
    """

    if not path:
        return HolidayCalendar()

    path = Path(path)
    if not path.exists():
        logger.info("Holiday file %s not found, scheduling without holidays", path)
        return HolidayCalendar()

    df = pd.read_csv(path, dtype=str).fillna("")
    missing = {"date", "label"} - set(df.columns)
    if missing:
        raise ValidationError(f"Holiday file is missing columns: {', '.join(sorted(missing))}")

    dates = pd.to_datetime(df["date"].str.strip(), format="%Y-%m-%d", errors="coerce")
    if dates.isna().any():
        bad = df.loc[dates.isna(), "date"].tolist()
        raise ValidationError(f"Invalid holiday dates: {bad}")

    holidays = [
        Holiday(date=ts.date(), label=label.strip())
        for ts, label in zip(dates, df["label"])
    ]
    logger.debug("Loaded %d holidays from %s", len(holidays), path)
    return HolidayCalendar.from_holidays(holidays)


def load_holiday_calendar(repo: HolidayRepository) -> HolidayCalendar:
    return HolidayCalendar.from_holidays(repo.list_all())
