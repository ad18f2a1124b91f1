from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notice


class NoticeRepository(Protocol):
    def create(self, *, author_id: int, title: str, content: str, course_id: Optional[int]) -> int:
        raise NotImplementedError

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        raise NotImplementedError

    def update(self, *, notice_id: int, title: str, content: str) -> bool:
        raise NotImplementedError

    def delete(self, notice_id: int) -> bool:
        raise NotImplementedError

    def list_notices(self, *, course_id: Optional[int] = None) -> Sequence[Notice]:
        """Newest first; all notices when ``course_id`` is None."""

        raise NotImplementedError
