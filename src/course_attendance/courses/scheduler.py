"""Weekly session generation for a new course.

The generator is pure: it derives the full list of session drafts from the
first day of the semester, the weekday the course meets on, the course
length and a holiday calendar. A weekly slot that falls on a holiday keeps
its week number as a closure entry (no class, no code) and the class it
displaced is made up after the regular run, one week at a time.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Deque, List, Mapping, Optional, Union

from ..common.datetime_utils import parse_iso_date, sunday_weekday
from ..core.constants import DAYS_PER_WEEK, DEFAULT_CODE_DIGITS, DEFAULT_COURSE_LENGTH
from ..core.exceptions import ValidationError
from ..holidays.model import HolidayCalendar
from ..sessions.model import SessionDraft

CodeFactory = Callable[[], str]

_ONE_WEEK = timedelta(days=DAYS_PER_WEEK)


@dataclass(frozen=True)
class _DeferredClass:
    week: int
    label: str


def random_code_factory(digits: int = DEFAULT_CODE_DIGITS, rng: Optional[random.Random] = None) -> CodeFactory:
    """Return a callable producing numeric check-in codes without a leading zero."""

    if int(digits) <= 0:
        raise ValidationError("Code length must be positive")
    rng = rng or random.Random()
    low = 10 ** (int(digits) - 1)
    high = 10 ** int(digits) - 1

    def _next_code() -> str:
        return str(rng.randint(low, high))

    return _next_code


def first_meeting(start_date: date, target_weekday: int) -> date:
    """First date on or after ``start_date`` that falls on ``target_weekday`` (Sunday=0)."""

    shift = (target_weekday - sunday_weekday(start_date) + DAYS_PER_WEEK) % DAYS_PER_WEEK
    return start_date + timedelta(days=shift)


def _as_calendar(holidays: Union[HolidayCalendar, Mapping, None]) -> HolidayCalendar:
    if holidays is None:
        return HolidayCalendar()
    if isinstance(holidays, HolidayCalendar):
        return holidays
    labels = {}
    for key, label in holidays.items():
        day = key if isinstance(key, date) else parse_iso_date(key)
        labels[day] = str(label)
    return HolidayCalendar.from_mapping(labels)


def _validate(start_date: date, target_weekday: int, course_length: int) -> None:
    if not isinstance(start_date, date):
        raise ValidationError("Start date is required")
    if isinstance(target_weekday, bool) or not isinstance(target_weekday, int):
        raise ValidationError("Weekday must be an integer between 0 (Sunday) and 6 (Saturday)")
    if not 0 <= target_weekday <= 6:
        raise ValidationError("Weekday must be an integer between 0 (Sunday) and 6 (Saturday)")
    if isinstance(course_length, bool) or not isinstance(course_length, int) or course_length <= 0:
        raise ValidationError("Course length must be a positive number of weeks")


def generate(
    start_date: date,
    target_weekday: int,
    course_length: int = DEFAULT_COURSE_LENGTH,
    holidays: Union[HolidayCalendar, Mapping, None] = None,
    *,
    code_factory: Optional[CodeFactory] = None,
) -> List[SessionDraft]:
    """Build the ordered session drafts for a course.

    Output holds one draft per weekly slot numbered ``1..course_length``
    (a slot landing on a holiday becomes a closure and keeps its number),
    then one makeup per closure numbered ``course_length + 1`` onwards in
    the order the holidays were met. Every draft is created closed.
    """

    _validate(start_date, target_weekday, course_length)
    calendar = _as_calendar(holidays)
    next_code = code_factory or random_code_factory()

    drafts: List[SessionDraft] = []
    deferred: Deque[_DeferredClass] = deque()
    current = first_meeting(start_date, target_weekday)

    for week in range(1, course_length + 1):
        label = calendar.label_for(current)
        if label is not None:
            drafts.append(
                SessionDraft(
                    week=week,
                    date=current,
                    title=f"{label} (no class)",
                    auth_code=None,
                    is_holiday=True,
                )
            )
            deferred.append(_DeferredClass(week=week, label=label))
        else:
            drafts.append(
                SessionDraft(
                    week=week,
                    date=current,
                    title=f"Week {week} class",
                    auth_code=next_code(),
                )
            )
        current += _ONE_WEEK

    makeup_week = course_length
    while deferred:
        item = deferred.popleft()
        makeup_week += 1
        drafts.append(
            SessionDraft(
                week=makeup_week,
                date=current,
                title=f"Week {item.week} makeup ({item.label})",
                auth_code=next_code(),
                is_makeup=True,
                original_week=item.week,
            )
        )
        current += _ONE_WEEK

    return drafts
