from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import CheckinStrategyFactory
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .courses.repository import CourseRepository
from .courses.scheduler import CodeFactory, random_code_factory
from .courses.service import CourseService
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .enrollment.repository import EnrollmentRepository
from .enrollment.service import EnrollmentService
from .excuses.repository import ExcuseRepository
from .excuses.service import ExcuseService
from .holidays.loader import load_holiday_csv
from .holidays.model import HolidayCalendar
from .messaging.repository import MessageRepository
from .messaging.service import MessageService
from .notices.repository import NoticeRepository
from .notices.service import NoticeService
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .offvotes.repository import OffVoteRepository
from .offvotes.service import OffVoteService
from .reports.service import AdminReportService
from .semesters.repository import SemesterRepository
from .semesters.service import SemesterService
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .settings import AppSettings
from .system_settings.repository import SystemSettingRepository
from .system_settings.service import SettingsService
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Repositories:
    """Persistence adapters supplied by the host application."""

    users: UserRepository
    courses: CourseRepository
    sessions: SessionRepository
    enrollments: EnrollmentRepository
    marks: AttendanceRepository
    notifications: NotificationRepository
    excuses: ExcuseRepository
    offvotes: OffVoteRepository
    messages: MessageRepository
    notices: NoticeRepository
    system_settings: SystemSettingRepository
    departments: DepartmentRepository
    semesters: SemesterRepository


@dataclass(frozen=True)
class Container:
    repos: Repositories
    holidays: HolidayCalendar

    settings_service: SettingsService
    notification_service: NotificationService
    course_service: CourseService
    attendance_service: AttendanceService
    session_service: SessionService
    enrollment_service: EnrollmentService
    excuse_service: ExcuseService
    offvote_service: OffVoteService
    message_service: MessageService
    notice_service: NoticeService
    admin_report_service: AdminReportService
    user_service: UserService
    department_service: DepartmentService
    semester_service: SemesterService


def build_container(
    *,
    repositories: Repositories,
    settings: AppSettings,
    holidays: Optional[HolidayCalendar] = None,
    code_factory: Optional[CodeFactory] = None,
) -> Container:
    repos = repositories
    if holidays is None:
        holidays = load_holiday_csv(settings.holidays_file)
    code_factory = code_factory or random_code_factory(settings.schedule.code_digits)

    settings_service = SettingsService(repos.system_settings)
    # admin-editable thresholds are read once here and passed down explicitly
    policy = settings_service.attendance_policy(settings.attendance)

    notification_service = NotificationService(
        repos.notifications,
        enabled=settings_service.get_bool("NOTIFICATION_ENABLED"),
    )
    course_service = CourseService(
        repos.courses,
        repos.sessions,
        repos.enrollments,
        holidays=holidays,
        policy=settings.schedule,
        code_factory=code_factory,
    )
    attendance_service = AttendanceService(
        repos.marks,
        repos.sessions,
        repos.courses,
        repos.enrollments,
        repos.users,
        notification_service,
        policy=policy,
        strategy_factory=CheckinStrategyFactory(grace_minutes=policy.late_grace_minutes),
    )
    session_service = SessionService(
        repos.sessions,
        repos.courses,
        repos.enrollments,
        attendance_service,
        notification_service,
        policy=policy,
        code_factory=code_factory,
    )
    enrollment_service = EnrollmentService(repos.enrollments, repos.courses, repos.sessions, repos.marks, repos.users)
    excuse_service = ExcuseService(
        repos.excuses,
        repos.users,
        notification_service,
        require_file=settings_service.get_bool("EXCUSE_REQUIRE_FILE"),
    )
    offvote_service = OffVoteService(
        repos.offvotes,
        repos.courses,
        repos.enrollments,
        repos.users,
        notification_service,
        enabled=settings_service.get_bool("OFFVOTE_ENABLED"),
    )
    message_service = MessageService(repos.messages, repos.courses, repos.enrollments, repos.users, notification_service)
    notice_service = NoticeService(repos.notices, repos.courses, repos.enrollments, repos.users, notification_service)
    admin_report_service = AdminReportService(repos.courses, repos.sessions, attendance_service)
    user_service = UserService(repos.users)
    department_service = DepartmentService(repos.departments, repos.courses)
    semester_service = SemesterService(repos.semesters)

    return Container(
        repos=repos,
        holidays=holidays,
        settings_service=settings_service,
        notification_service=notification_service,
        course_service=course_service,
        attendance_service=attendance_service,
        session_service=session_service,
        enrollment_service=enrollment_service,
        excuse_service=excuse_service,
        offvote_service=offvote_service,
        message_service=message_service,
        notice_service=notice_service,
        admin_report_service=admin_report_service,
        user_service=user_service,
        department_service=department_service,
        semester_service=semester_service,
    )
