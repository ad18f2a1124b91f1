from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Iterator, Mapping, Optional


@dataclass(frozen=True)
class Holiday:
    date: date
    label: str


@dataclass(frozen=True)
class HolidayCalendar:
    """Read-only lookup of holiday dates to their labels."""

    _labels: Mapping[date, str] = field(default_factory=dict)

    @classmethod
    def from_holidays(cls, holidays: Iterable[Holiday]) -> "HolidayCalendar":
        # later rows win, matching how a date->label map is filled
        return cls({h.date: h.label for h in holidays})

    @classmethod
    def from_mapping(cls, labels: Mapping[date, str]) -> "HolidayCalendar":
        return cls(dict(labels))

    def label_for(self, day: date) -> Optional[str]:
        return self._labels.get(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._labels

    def __contains__(self, day: object) -> bool:
        return day in self._labels

    def __iter__(self) -> Iterator[Holiday]:
        for d in sorted(self._labels):
            yield Holiday(date=d, label=self._labels[d])

    def __len__(self) -> int:
        return len(self._labels)
