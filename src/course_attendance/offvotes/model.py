from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OffVote:
    """A poll asking students whether (and when) a class should be cancelled."""

    vote_id: int
    title: str
    description: Optional[str] = None
    course_id: Optional[int] = None
    is_closed: bool = False


@dataclass(frozen=True)
class OffVoteOption:
    option_id: int
    vote_id: int
    text: str


@dataclass(frozen=True)
class OptionResult:
    option_id: int
    text: str
    votes: int
