from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import OffVote, OffVoteOption


class OffVoteRepository(Protocol):
    def create_vote(self, *, title: str, description: Optional[str], course_id: Optional[int]) -> int:
        raise NotImplementedError

    def add_options(self, *, vote_id: int, texts: Sequence[str]) -> Sequence[int]:
        raise NotImplementedError

    def get_vote(self, vote_id: int) -> Optional[OffVote]:
        raise NotImplementedError

    def list_votes(self) -> Sequence[OffVote]:
        """Newest first."""

        raise NotImplementedError

    def list_options(self, vote_id: int) -> Sequence[OffVoteOption]:
        raise NotImplementedError

    def has_ballot(self, *, vote_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def cast_ballot(self, *, vote_id: int, option_id: int, user_id: int) -> int:
        raise NotImplementedError

    def close_vote(self, vote_id: int) -> bool:
        raise NotImplementedError

    def count_ballots(self, vote_id: int) -> Mapping[int, int]:
        """Ballot count keyed by option id; options without ballots may be absent."""

        raise NotImplementedError
