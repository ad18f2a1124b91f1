import pytest

from course_attendance.core.enums import NotificationType
from course_attendance.core.exceptions import NotFoundError
from course_attendance.notifications.service import NotificationService


def test_notify_many_stores_one_per_distinct_user(repos):
    svc = NotificationService(repos.notifications)

    stored = svc.notify_many(user_ids=[10, 11, 10, None], type=NotificationType.INFO, title="T", message="M")

    assert stored == 2
    assert sorted(n.user_id for n in repos.notifications.items.values()) == [10, 11]


def test_disabled_service_stores_nothing(repos):
    svc = NotificationService(repos.notifications, enabled=False)

    assert svc.notify(user_id=10, type=NotificationType.INFO, title="T", message="M") == 0
    assert repos.notifications.items == {}


def test_mark_read_only_own(repos):
    svc = NotificationService(repos.notifications)
    svc.notify(user_id=10, type=NotificationType.INFO, title="T", message="M")
    [note] = svc.list_mine(user_id=10)

    with pytest.raises(NotFoundError):
        svc.mark_read(user_id=11, notification_id=note.notification_id)
    with pytest.raises(NotFoundError):
        svc.mark_read(user_id=10, notification_id=404)

    svc.mark_read(user_id=10, notification_id=note.notification_id)
    assert svc.list_mine(user_id=10)[0].is_read


def test_mark_all_read_and_listing_order(repos):
    svc = NotificationService(repos.notifications)
    for title in ("first", "second", "third"):
        svc.notify(user_id=10, type=NotificationType.INFO, title=title, message="-")
    svc.notify(user_id=11, type=NotificationType.INFO, title="other", message="-")

    assert [n.title for n in svc.list_mine(user_id=10, limit=2)] == ["third", "second"]
    assert svc.mark_all_read(user_id=10) == 3
    assert all(n.is_read for n in svc.list_mine(user_id=10))
    assert not svc.list_mine(user_id=11)[0].is_read
