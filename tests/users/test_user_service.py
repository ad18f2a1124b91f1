import pytest
from werkzeug.security import check_password_hash

from course_attendance.core.enums import Role
from course_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_admin_creates_student_with_hashed_password(container, repos):
    user_id = container.user_service.create_user(
        current_role=Role.ADMIN,
        name=" Dana ",
        email="Dana@Example.edu",
        password="secret123",
        student_number="20250013",
    )

    user = repos.users.get_by_id(user_id)
    assert user.name == "Dana"
    assert user.email == "dana@example.edu"
    assert user.role == Role.STUDENT
    assert user.password_hash != "secret123"
    assert check_password_hash(user.password_hash, "secret123")
    assert "secret123" not in repr(user)


def test_only_admin_manages_accounts(container):
    with pytest.raises(AuthorizationError):
        container.user_service.create_user(
            current_role=Role.INSTRUCTOR, name="X", email="x@example.edu", password="secret123"
        )
    with pytest.raises(AuthorizationError):
        container.user_service.list_users(current_role=Role.STUDENT)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "email": "a@example.edu", "password": "secret123"},
        {"name": "A", "email": " ", "password": "secret123"},
        {"name": "A", "email": "a@example.edu", "password": "12345"},
        {"name": "A", "email": "a@example.edu", "password": "secret123", "role": "janitor"},
        {"name": "A", "email": "kim@example.edu", "password": "secret123"},
        {"name": "A", "email": "a@example.edu", "password": "secret123", "student_number": "20250010"},
    ],
)
def test_create_user_rejects_bad_input(container, repos, kwargs):
    before = len(repos.users.users_by_id)

    with pytest.raises(ValidationError):
        container.user_service.create_user(current_role=Role.ADMIN, **kwargs)

    assert len(repos.users.users_by_id) == before


def test_list_users_newest_first(container):
    new_id = container.user_service.create_user(
        current_role=Role.ADMIN, name="Eve", email="eve@example.edu", password="secret123", role="instructor"
    )

    users = container.user_service.list_users(current_role=Role.ADMIN)
    assert users[0].user_id == new_id
    assert users[0].role == Role.INSTRUCTOR


def test_update_user_changes_only_given_fields(container, repos):
    updated = container.user_service.update_user(current_role=Role.ADMIN, user_id=10, role="instructor")

    assert updated.role == Role.INSTRUCTOR
    assert updated.name == "Alice"
    assert updated.student_number == "20250010"
    assert repos.users.get_by_id(10).role == Role.INSTRUCTOR

    with pytest.raises(ValidationError):
        container.user_service.update_user(current_role=Role.ADMIN, user_id=11, email="kim@example.edu")
    with pytest.raises(NotFoundError):
        container.user_service.update_user(current_role=Role.ADMIN, user_id=404, name="Ghost")


def test_delete_user(container, repos):
    with pytest.raises(ValidationError):
        container.user_service.delete_user(current_role=Role.ADMIN, actor_id=99, user_id=99)

    container.user_service.delete_user(current_role=Role.ADMIN, actor_id=99, user_id=12)
    assert repos.users.get_by_id(12) is None

    with pytest.raises(NotFoundError):
        container.user_service.delete_user(current_role=Role.ADMIN, actor_id=99, user_id=12)
