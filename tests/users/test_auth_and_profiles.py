from __future__ import annotations

import pytest

from conftest import ADMIN_ID, TEACHER_ID
from school_attendance.core.enums import Role
from school_attendance.core.exceptions import AuthenticationError, NotFoundError


def test_authenticate_success(container):
    user = container.auth_service.authenticate("  Teacher@School.test ", "teacher123")

    assert user.user_id == TEACHER_ID
    assert user.role == Role.TEACHER
    assert user.full_name == "Priya Nair"


@pytest.mark.parametrize(
    "email,password",
    [("admin@school.test", "wrong"), ("ghost@school.test", "admin123"), ("", "x"), ("admin@school.test", "")],
)
def test_authenticate_failures(container, email, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(email, password)


def test_get_profile(container):
    assert container.profile_service.get_profile(ADMIN_ID).role == Role.ADMIN


def test_missing_profile_message(container):
    with pytest.raises(NotFoundError) as exc:
        container.profile_service.get_profile(999)
    assert str(exc.value) == "Profile not found. Please contact your administrator."


def test_list_teachers(container):
    assert [p.id for p in container.profile_service.list_teachers()] == [TEACHER_ID]
