from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

import pytest

from course_attendance.attendance.model import AttendanceMark
from course_attendance.container import Repositories, build_container
from course_attendance.core.enums import AttendanceMode, ExcuseStatus, Role
from course_attendance.courses.model import Course
from course_attendance.departments.model import Department
from course_attendance.excuses.model import Excuse
from course_attendance.holidays.model import HolidayCalendar
from course_attendance.messaging.model import Message
from course_attendance.notices.model import Notice
from course_attendance.notifications.model import Notification, NotificationDraft
from course_attendance.offvotes.model import OffVote, OffVoteOption
from course_attendance.semesters.model import Semester
from course_attendance.sessions.model import ClassSession, SessionDraft
from course_attendance.settings import AppSettings
from course_attendance.system_settings.model import SystemSetting
from course_attendance.users.model import User


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, User] = field(default_factory=dict)

    def add(self, user: User) -> User:
        self.users_by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def get_by_student_number(self, student_number: str) -> Optional[User]:
        for u in self.users_by_id.values():
            if u.student_number == student_number:
                return u
        return None

    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[User]:
        return [self.users_by_id[i] for i in user_ids if i in self.users_by_id]

    def list_by_role(self, role: Role) -> Sequence[User]:
        return [u for u in self.users_by_id.values() if u.role == role]

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self.users_by_id.values():
            if u.email == email:
                return u
        return None

    def list_all(self) -> Sequence[User]:
        return sorted(self.users_by_id.values(), key=lambda u: u.user_id, reverse=True)

    def create_user(self, *, name, email, password_hash, role, student_number, department_id) -> int:
        user_id = max(self.users_by_id, default=0) + 1
        self.add(User(user_id, name, role, email, student_number, department_id, password_hash))
        return user_id

    def update_user(self, *, user_id, name, email, role, student_number, department_id) -> bool:
        u = self.users_by_id.get(user_id)
        if not u:
            return False
        self.users_by_id[user_id] = replace(
            u, name=name, email=email, role=role, student_number=student_number, department_id=department_id
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self.users_by_id.pop(user_id, None) is not None


class InMemorySessions:
    def __init__(self):
        self.sessions: dict[int, ClassSession] = {}
        self._id = 0

    def add(self, **kwargs) -> ClassSession:
        self._id += 1
        s = ClassSession(session_id=self._id, **kwargs)
        self.sessions[s.session_id] = s
        return s

    def bulk_create(self, *, course_id: int, drafts: Sequence[SessionDraft]) -> Sequence[int]:
        ids = []
        for d in drafts:
            s = self.add(
                course_id=course_id,
                week=d.week,
                date=d.date,
                title=d.title,
                is_open=d.is_open,
                auth_code=d.auth_code,
                attendance_mode=d.attendance_mode,
                is_makeup=d.is_makeup,
                is_holiday=d.is_holiday,
            )
            ids.append(s.session_id)
        return ids

    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        return self.sessions.get(session_id)

    def list_for_course(self, course_id: int) -> Sequence[ClassSession]:
        items = [s for s in self.sessions.values() if s.course_id == course_id]
        items.sort(key=lambda s: (s.week, s.session_id))
        return items

    def set_open(self, *, session_id, is_open, start_time, open_until, attendance_mode) -> bool:
        s = self.sessions.get(session_id)
        if not s:
            return False
        self.sessions[session_id] = replace(
            s, is_open=is_open, start_time=start_time, open_until=open_until, attendance_mode=attendance_mode
        )
        return True

    def set_code(self, *, session_id: int, auth_code: Optional[str]) -> bool:
        s = self.sessions.get(session_id)
        if not s:
            return False
        self.sessions[session_id] = replace(s, auth_code=auth_code)
        return True

    def count_open(self) -> int:
        return sum(1 for s in self.sessions.values() if s.is_open)

    def delete_for_course(self, course_id: int) -> None:
        for sid in [s.session_id for s in self.sessions.values() if s.course_id == course_id]:
            del self.sessions[sid]


class InMemoryCourses:
    def __init__(self, sessions: InMemorySessions):
        self.courses: dict[int, Course] = {}
        self._sessions = sessions
        self._id = 0

    def create_course(self, *, name, instructor_id, department_id=None, semester_id=None) -> int:
        self._id += 1
        self.courses[self._id] = Course(
            course_id=self._id,
            name=name,
            instructor_id=instructor_id,
            department_id=department_id,
            semester_id=semester_id,
        )
        return self._id

    def get_by_id(self, course_id: int) -> Optional[Course]:
        return self.courses.get(course_id)

    def update_course(self, *, course_id, name, instructor_id, department_id, semester_id) -> bool:
        if course_id not in self.courses:
            return False
        self.courses[course_id] = Course(course_id, name, instructor_id, department_id, semester_id)
        return True

    def delete_course(self, course_id: int) -> bool:
        if self.courses.pop(course_id, None) is None:
            return False
        self._sessions.delete_for_course(course_id)
        return True

    def list_courses(self, *, instructor_id=None, course_ids=None) -> Sequence[Course]:
        items = list(self.courses.values())
        if instructor_id is not None:
            items = [c for c in items if c.instructor_id == instructor_id]
        if course_ids is not None:
            wanted = set(course_ids)
            items = [c for c in items if c.course_id in wanted]
        return items


class InMemoryEnrollments:
    def __init__(self):
        self.pairs: dict[tuple[int, int], int] = {}
        self._id = 0

    def exists(self, *, course_id: int, student_id: int) -> bool:
        return (course_id, student_id) in self.pairs

    def create(self, *, course_id: int, student_id: int) -> int:
        self._id += 1
        self.pairs[(course_id, student_id)] = self._id
        return self._id

    def delete(self, *, course_id: int, student_id: int) -> bool:
        return self.pairs.pop((course_id, student_id), None) is not None

    def list_student_ids(self, course_id: int) -> Sequence[int]:
        return [s for (c, s) in self.pairs if c == course_id]

    def list_course_ids(self, student_id: int) -> Sequence[int]:
        return [c for (c, s) in self.pairs if s == student_id]


class InMemoryMarks:
    def __init__(self):
        self.marks: dict[int, AttendanceMark] = {}
        self._id = 0

    def get_for_session_and_student(self, *, session_id: int, student_id: int) -> Optional[AttendanceMark]:
        for m in self.marks.values():
            if m.session_id == session_id and m.student_id == student_id:
                return m
        return None

    def create_mark(self, *, session_id, student_id, status, checked_at) -> int:
        self._id += 1
        self.marks[self._id] = AttendanceMark(self._id, session_id, student_id, status, checked_at)
        return self._id

    def update_mark(self, *, mark_id, status, checked_at) -> bool:
        m = self.marks.get(mark_id)
        if not m:
            return False
        self.marks[mark_id] = replace(m, status=status, checked_at=checked_at)
        return True

    def list_for_student(self, *, student_id: int, session_ids: Iterable[int]) -> Sequence[AttendanceMark]:
        wanted = set(session_ids)
        return [m for m in self.marks.values() if m.student_id == student_id and m.session_id in wanted]

    def list_for_session(self, session_id: int) -> Sequence[AttendanceMark]:
        return [m for m in self.marks.values() if m.session_id == session_id]


class InMemoryNotifications:
    def __init__(self):
        self.items: dict[int, Notification] = {}
        self._id = 0

    def create_many(self, drafts: Sequence[NotificationDraft]) -> int:
        for d in drafts:
            self._id += 1
            self.items[self._id] = Notification(
                notification_id=self._id,
                user_id=d.user_id,
                type=d.type,
                title=d.title,
                message=d.message,
                course_id=d.course_id,
                session_id=d.session_id,
            )
        return len(drafts)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        return self.items.get(notification_id)

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Notification]:
        items = [n for n in self.items.values() if n.user_id == user_id]
        items.sort(key=lambda n: n.notification_id, reverse=True)
        return items[:limit]

    def mark_read(self, notification_id: int) -> bool:
        n = self.items.get(notification_id)
        if not n:
            return False
        self.items[notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, user_id: int) -> int:
        count = 0
        for n in list(self.items.values()):
            if n.user_id == user_id and not n.is_read:
                self.items[n.notification_id] = replace(n, is_read=True)
                count += 1
        return count

    def for_user(self, user_id: int) -> list[Notification]:
        return [n for n in self.items.values() if n.user_id == user_id]


class InMemoryExcuses:
    def __init__(self, now: datetime):
        self.items: dict[int, Excuse] = {}
        self._id = 0
        self._now = now

    def create(self, *, student_id, reason, file_url) -> int:
        self._id += 1
        self.items[self._id] = Excuse(
            excuse_id=self._id,
            student_id=student_id,
            reason=reason,
            status=ExcuseStatus.PENDING,
            created_at=self._now,
            file_url=file_url,
        )
        return self._id

    def get_by_id(self, excuse_id: int) -> Optional[Excuse]:
        return self.items.get(excuse_id)

    def list_for_student(self, student_id: int) -> Sequence[Excuse]:
        items = [e for e in self.items.values() if e.student_id == student_id]
        return sorted(items, key=lambda e: e.excuse_id, reverse=True)

    def list_by_status(self, status: ExcuseStatus) -> Sequence[Excuse]:
        return [e for e in self.items.values() if e.status == status]

    def decide(self, *, excuse_id, status, decided_by, admin_comment) -> bool:
        e = self.items.get(excuse_id)
        if not e or e.status != ExcuseStatus.PENDING:
            return False
        self.items[excuse_id] = replace(e, status=status, decided_by=decided_by, admin_comment=admin_comment)
        return True


class InMemoryOffVotes:
    def __init__(self):
        self.votes: dict[int, OffVote] = {}
        self.options: dict[int, OffVoteOption] = {}
        self.ballots: dict[tuple[int, int], int] = {}
        self._vote_id = 0
        self._option_id = 0

    def create_vote(self, *, title, description, course_id) -> int:
        self._vote_id += 1
        self.votes[self._vote_id] = OffVote(self._vote_id, title, description, course_id)
        return self._vote_id

    def add_options(self, *, vote_id, texts) -> Sequence[int]:
        ids = []
        for text in texts:
            self._option_id += 1
            self.options[self._option_id] = OffVoteOption(self._option_id, vote_id, text)
            ids.append(self._option_id)
        return ids

    def get_vote(self, vote_id: int) -> Optional[OffVote]:
        return self.votes.get(vote_id)

    def list_votes(self) -> Sequence[OffVote]:
        return sorted(self.votes.values(), key=lambda v: v.vote_id, reverse=True)

    def list_options(self, vote_id: int) -> Sequence[OffVoteOption]:
        return [o for o in self.options.values() if o.vote_id == vote_id]

    def has_ballot(self, *, vote_id, user_id) -> bool:
        return (vote_id, user_id) in self.ballots

    def cast_ballot(self, *, vote_id, option_id, user_id) -> int:
        self.ballots[(vote_id, user_id)] = option_id
        return len(self.ballots)

    def close_vote(self, vote_id: int) -> bool:
        v = self.votes.get(vote_id)
        if not v:
            return False
        self.votes[vote_id] = replace(v, is_closed=True)
        return True

    def count_ballots(self, vote_id: int):
        counts: dict[int, int] = {}
        for (vid, _), option_id in self.ballots.items():
            if vid == vote_id:
                counts[option_id] = counts.get(option_id, 0) + 1
        return counts


class InMemoryMessages:
    def __init__(self):
        self.items: list[Message] = []

    def create(self, *, sender_id, receiver_id, course_id, content) -> int:
        message_id = len(self.items) + 1
        self.items.append(Message(message_id, sender_id, receiver_id, content, course_id))
        return message_id

    def list_conversation(self, *, user_id, other_id, course_id) -> Sequence[Message]:
        pair = {user_id, other_id}
        return [
            m
            for m in self.items
            if {m.sender_id, m.receiver_id} == pair and (course_id is None or m.course_id == course_id)
        ]


class InMemoryNotices:
    def __init__(self):
        self.items: dict[int, Notice] = {}
        self._id = 0

    def create(self, *, author_id, title, content, course_id) -> int:
        self._id += 1
        self.items[self._id] = Notice(self._id, author_id, title, content, course_id)
        return self._id

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        return self.items.get(notice_id)

    def update(self, *, notice_id, title, content) -> bool:
        n = self.items.get(notice_id)
        if not n:
            return False
        self.items[notice_id] = replace(n, title=title, content=content)
        return True

    def delete(self, notice_id: int) -> bool:
        return self.items.pop(notice_id, None) is not None

    def list_notices(self, *, course_id=None) -> Sequence[Notice]:
        items = [n for n in self.items.values() if course_id is None or n.course_id == course_id]
        return sorted(items, key=lambda n: n.notice_id, reverse=True)


class InMemorySystemSettings:
    def __init__(self, values: Optional[dict[str, str]] = None):
        self.rows: dict[str, SystemSetting] = {k: SystemSetting(k, v) for k, v in (values or {}).items()}

    def get(self, key: str) -> Optional[SystemSetting]:
        return self.rows.get(key)

    def list_all(self) -> Sequence[SystemSetting]:
        return [self.rows[k] for k in sorted(self.rows)]

    def upsert(self, *, key, value, description, updated_by) -> None:
        self.rows[key] = SystemSetting(key, value, description)

    def delete(self, key: str) -> bool:
        return self.rows.pop(key, None) is not None


class InMemoryDepartments:
    def __init__(self):
        self.items: dict[int, Department] = {}
        self._id = 0

    def list_all(self) -> Sequence[Department]:
        return sorted(self.items.values(), key=lambda d: d.name)

    def get_by_id(self, department_id: int) -> Optional[Department]:
        return self.items.get(department_id)

    def create(self, *, name, code, description, is_active) -> int:
        self._id += 1
        self.items[self._id] = Department(self._id, name, code, description, is_active)
        return self._id

    def update(self, *, department_id, name, code, description, is_active) -> bool:
        if department_id not in self.items:
            return False
        self.items[department_id] = Department(department_id, name, code, description, is_active)
        return True

    def delete(self, department_id: int) -> bool:
        return self.items.pop(department_id, None) is not None


class InMemorySemesters:
    def __init__(self):
        self.items: dict[int, Semester] = {}
        self._id = 0

    def list_all(self) -> Sequence[Semester]:
        return sorted(self.items.values(), key=lambda s: (s.year, s.term), reverse=True)

    def get_by_id(self, semester_id: int) -> Optional[Semester]:
        return self.items.get(semester_id)

    def create(self, *, year, term, name, start_date, end_date, is_active) -> int:
        self._id += 1
        self.items[self._id] = Semester(self._id, year, term, name, start_date, end_date, is_active)
        return self._id

    def update(self, *, semester_id, year, term, name, start_date, end_date, is_active) -> bool:
        if semester_id not in self.items:
            return False
        self.items[semester_id] = Semester(semester_id, year, term, name, start_date, end_date, is_active)
        return True

    def delete(self, semester_id: int) -> bool:
        return self.items.pop(semester_id, None) is not None


INSTRUCTOR = User(user_id=1, name="Prof. Kim", role=Role.INSTRUCTOR, email="kim@example.edu")
OTHER_INSTRUCTOR = User(user_id=2, name="Prof. Lee", role=Role.INSTRUCTOR)
ADMIN = User(user_id=99, name="Admin", role=Role.ADMIN)
STUDENTS = [
    User(user_id=10, name="Alice", role=Role.STUDENT, student_number="20250010"),
    User(user_id=11, name="Bob", role=Role.STUDENT, student_number="20250011"),
    User(user_id=12, name="Chloe", role=Role.STUDENT, student_number="20250012"),
]


def sequential_codes(start: int = 1000):
    counter = itertools.count(start)
    return lambda: str(next(counter))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 4, 9, 0, 0)


@pytest.fixture
def repos(fixed_now) -> Repositories:
    users = InMemoryUsers()
    for u in [INSTRUCTOR, OTHER_INSTRUCTOR, ADMIN, *STUDENTS]:
        users.add(u)
    sessions = InMemorySessions()
    return Repositories(
        users=users,
        courses=InMemoryCourses(sessions),
        sessions=sessions,
        enrollments=InMemoryEnrollments(),
        marks=InMemoryMarks(),
        notifications=InMemoryNotifications(),
        excuses=InMemoryExcuses(fixed_now),
        offvotes=InMemoryOffVotes(),
        messages=InMemoryMessages(),
        notices=InMemoryNotices(),
        system_settings=InMemorySystemSettings(),
        departments=InMemoryDepartments(),
        semesters=InMemorySemesters(),
    )


@pytest.fixture
def container(repos):
    settings = AppSettings(settings_module="course_attendance.config.testing")
    return build_container(
        repositories=repos,
        settings=settings,
        holidays=HolidayCalendar(),
        code_factory=sequential_codes(),
    )


@pytest.fixture
def course(container, repos):
    """A course by INSTRUCTOR with three weekly sessions and all students enrolled."""

    course_id = repos.courses.create_course(name="Databases", instructor_id=INSTRUCTOR.user_id)
    for week in (1, 2, 3):
        repos.sessions.add(
            course_id=course_id,
            week=week,
            date=date(2025, 3, 4 + 7 * (week - 1)),
            title=f"Week {week} class",
            auth_code=f"{1110 * week}",
            attendance_mode=AttendanceMode.CODE,
        )
    for s in STUDENTS:
        repos.enrollments.create(course_id=course_id, student_id=s.user_id)
    return repos.courses.get_by_id(course_id)


def open_session(repos, session_id: int, *, start: time, open_until: Optional[datetime] = None) -> ClassSession:
    repos.sessions.set_open(
        session_id=session_id,
        is_open=True,
        start_time=start,
        open_until=open_until,
        attendance_mode=repos.sessions.get_by_id(session_id).attendance_mode,
    )
    return repos.sessions.get_by_id(session_id)


@pytest.fixture
def open_session_helper():
    return open_session
