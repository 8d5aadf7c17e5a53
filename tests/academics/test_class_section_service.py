from __future__ import annotations

import pytest

from conftest import CLASS_5, SECTION_5A, STUDENT_USER_ID, TEACHER_ID
from school_attendance.core.enums import Role
from school_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_add_and_list_class(container):
    svc = container.class_section_service
    new_id = svc.add_class(current_role=Role.ADMIN, name=" 6 ", description="")

    cls = svc.get_class(new_id)
    assert cls.name == "6"
    assert cls.description is None
    assert [c.name for c in svc.list_classes()] == ["5", "6"]


def test_only_admin_manages_classes(container):
    with pytest.raises(AuthorizationError):
        container.class_section_service.add_class(current_role=Role.TEACHER, name="6")


def test_class_name_required(container):
    with pytest.raises(ValidationError):
        container.class_section_service.add_class(current_role=Role.ADMIN, name="  ")


def test_sections_carry_class_and_teacher_names(container):
    sections = container.class_section_service.list_sections(CLASS_5)

    five_a = next(s for s in sections if s.id == SECTION_5A)
    assert five_a.label == "5-A"
    assert five_a.teacher_name == "Priya Nair"


def test_add_section_validates_teacher_role(container):
    svc = container.class_section_service
    with pytest.raises(ValidationError):
        svc.add_section(current_role=Role.ADMIN, name="C", class_id=CLASS_5, teacher_id=STUDENT_USER_ID)

    new_id = svc.add_section(current_role=Role.ADMIN, name="C", class_id=str(CLASS_5), teacher_id=TEACHER_ID)
    assert svc.get_section(new_id).teacher_id == TEACHER_ID


def test_add_section_unknown_class(container):
    with pytest.raises(NotFoundError):
        container.class_section_service.add_section(current_role=Role.ADMIN, name="C", class_id=77)


def test_update_and_delete_section(container):
    svc = container.class_section_service
    svc.update_section(current_role=Role.ADMIN, section_id=SECTION_5A, name="Alpha", class_id=CLASS_5, teacher_id=None)

    section = svc.get_section(SECTION_5A)
    assert section.name == "Alpha"
    assert section.teacher_id is None

    svc.delete_section(current_role=Role.ADMIN, section_id=SECTION_5A)
    with pytest.raises(NotFoundError):
        svc.get_section(SECTION_5A)


def test_teacher_sections(container):
    assert [s.id for s in container.class_section_service.list_sections_for_teacher(TEACHER_ID)] == [SECTION_5A]
