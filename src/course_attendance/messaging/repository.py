from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Message


class MessageRepository(Protocol):
    def create(self, *, sender_id: int, receiver_id: int, course_id: Optional[int], content: str) -> int:
        raise NotImplementedError

    def list_conversation(self, *, user_id: int, other_id: int, course_id: Optional[int]) -> Sequence[Message]:
        """Messages exchanged both ways between two users, oldest first."""

        raise NotImplementedError
