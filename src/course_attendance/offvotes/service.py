from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_role
from ..core.enums import NotificationType, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..enrollment.repository import EnrollmentRepository
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import OffVote, OptionResult
from .repository import OffVoteRepository

logger = logging.getLogger(__name__)


class OffVoteService:
    def __init__(
        self,
        votes: OffVoteRepository,
        courses: CourseRepository,
        enrollments: EnrollmentRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        enabled: bool = True,
    ):
        self._votes = votes
        self._courses = courses
        self._enrollments = enrollments
        self._users = users
        self._notifications = notifications
        self._enabled = bool(enabled)

    def create(
        self,
        *,
        current_role: Role,
        title: str,
        options: Sequence[str],
        course_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        self._require_enabled()

        title = require_non_empty(title, "Title")
        texts = [str(o).strip() for o in (options or []) if o is not None and str(o).strip()]
        if not texts:
            raise ValidationError("At least one option is required")
        if course_id is not None and not self._courses.get_by_id(int(course_id)):
            raise NotFoundError("Course not found")

        vote_id = self._votes.create_vote(
            title=title,
            description=optional_text(description),
            course_id=int(course_id) if course_id is not None else None,
        )
        self._votes.add_options(vote_id=vote_id, texts=texts)

        self._notify_audience(
            course_id,
            type=NotificationType.OFFVOTE_CREATED,
            title="A class cancellation vote has started",
            message=f"Vote: {title}",
        )
        logger.info("Off-class vote %s created with %d option(s)", vote_id, len(texts))
        return vote_id

    def list_votes(self) -> Sequence[OffVote]:
        return self._votes.list_votes()

    def cast(self, *, user_id: int, vote_id: int, option_id: int) -> int:
        self._require_enabled()
        vote = self._get_vote(vote_id)
        if vote.is_closed:
            raise ValidationError("This vote is closed")

        option_ids = {o.option_id for o in self._votes.list_options(vote.vote_id)}
        if int(option_id) not in option_ids:
            raise ValidationError("Option does not belong to this vote")
        if self._votes.has_ballot(vote_id=vote.vote_id, user_id=int(user_id)):
            raise ValidationError("You have already voted")

        return self._votes.cast_ballot(vote_id=vote.vote_id, option_id=int(option_id), user_id=int(user_id))

    def close(self, *, current_role: Role, vote_id: int) -> None:
        require_role(current_role, (Role.INSTRUCTOR, Role.ADMIN))
        vote = self._get_vote(vote_id)
        if vote.is_closed:
            raise ValidationError("This vote is already closed")
        if not self._votes.close_vote(vote.vote_id):
            raise ValidationError("Failed to close the vote")

        self._notify_audience(
            vote.course_id,
            type=NotificationType.OFFVOTE_CLOSED,
            title="A class cancellation vote has ended",
            message=f"Vote: {vote.title}",
        )
        logger.info("Off-class vote %s closed", vote.vote_id)

    def results(self, vote_id: int) -> List[OptionResult]:
        vote = self._get_vote(vote_id)
        counts = self._votes.count_ballots(vote.vote_id)
        return [
            OptionResult(option_id=o.option_id, text=o.text, votes=int(counts.get(o.option_id, 0)))
            for o in self._votes.list_options(vote.vote_id)
        ]

    def _notify_audience(self, course_id: Optional[int], *, type: NotificationType, title: str, message: str) -> None:
        if course_id is not None:
            user_ids = list(self._enrollments.list_student_ids(int(course_id)))
        else:
            user_ids = [u.user_id for u in self._users.list_by_role(Role.STUDENT)]
        self._notifications.notify_many(
            user_ids=user_ids, type=type, title=title, message=message, course_id=course_id
        )

    def _get_vote(self, vote_id: int) -> OffVote:
        vote = self._votes.get_vote(int(vote_id))
        if not vote:
            raise NotFoundError("Vote not found")
        return vote

    def _require_enabled(self) -> None:
        if not self._enabled:
            raise ValidationError("Off-class voting is disabled")
