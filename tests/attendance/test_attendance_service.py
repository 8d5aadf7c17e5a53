from __future__ import annotations

from datetime import date

import pytest

from conftest import CLASS_5, R1, R2, SECTION_5A, SECTION_5B, TEACHER_ID
from school_attendance.attendance.service import AttendanceService
from school_attendance.attendance.sheet import cell_field_name
from school_attendance.core.enums import AttendanceStatus, Role
from school_attendance.core.exceptions import AuthorizationError, ValidationError

DAY = date(2024, 5, 1)


@pytest.fixture
def service(repos):
    return AttendanceService(
        repos["attendance_repo"],
        repos["students_repo"],
        repos["sections_repo"],
        today=lambda: date(2024, 5, 10),
    )


def _save(service, **overrides):
    kwargs = dict(
        current_role=Role.TEACHER,
        marked_by=TEACHER_ID,
        class_id=CLASS_5,
        section_id=SECTION_5A,
        attendance_date=DAY,
        periods=[1, 2],
        form={},
    )
    kwargs.update(overrides)
    return service.save_sheet(**kwargs)


def test_save_section_5a_scenario(service, repos):
    form = {cell_field_name(R1, 1): "present", cell_field_name(R1, 2): "present"}

    written = _save(service, form=form)

    rows = repos["attendance_repo"].rows
    assert written == 4
    assert {(k[0], k[2]): r.status for k, r in rows.items()} == {
        (R1, 1): AttendanceStatus.PRESENT,
        (R1, 2): AttendanceStatus.PRESENT,
        (R2, 1): AttendanceStatus.ABSENT,
        (R2, 2): AttendanceStatus.ABSENT,
    }
    assert all(r.marked_by == TEACHER_ID and r.section_id == SECTION_5A for r in rows.values())


def test_save_replaces_previous_rows_for_same_periods(service, repos):
    _save(service, form={cell_field_name(R2, 1): "late"})
    _save(service, periods=[1], form={cell_field_name(R2, 1): "present"})

    rows = repos["attendance_repo"].rows
    assert rows[(R2, DAY, 1)].status == AttendanceStatus.PRESENT
    # period 2 was not part of the second save
    assert rows[(R2, DAY, 2)].status == AttendanceStatus.ABSENT
    assert len(rows) == 4


def test_mark_all_present_then_override(service, repos):
    _save(service, mark_all=AttendanceStatus.PRESENT, form={cell_field_name(R2, 2): "late"})

    statuses = {(k[0], k[2]): r.status for k, r in repos["attendance_repo"].rows.items()}
    assert statuses[(R2, 2)] == AttendanceStatus.LATE
    assert [s for s in statuses.values()].count(AttendanceStatus.PRESENT) == 3


def test_save_skips_students_removed_after_render(service, repos):
    form = {cell_field_name(R1, 1): "present", cell_field_name(R2, 1): "late"}
    repos["students_repo"].delete(R2)

    written = _save(service, periods=[1], form=form)

    rows = repos["attendance_repo"].rows
    assert written == 1
    assert list(rows) == [(R1, DAY, 1)]
    assert rows[(R1, DAY, 1)].status == AttendanceStatus.PRESENT


def test_students_cannot_save(service):
    with pytest.raises(AuthorizationError):
        _save(service, current_role=Role.STUDENT)


@pytest.mark.parametrize("periods", [[], [0], [13]])
def test_period_set_must_be_valid(service, periods):
    with pytest.raises(ValidationError):
        _save(service, periods=periods)


def test_future_date_rejected(service):
    with pytest.raises(ValidationError):
        _save(service, attendance_date=date(2024, 6, 1))


def test_section_must_belong_to_class(service, repos):
    other = repos["classes_repo"].create(name="6", description=None)
    with pytest.raises(ValidationError):
        _save(service, class_id=other)


def test_empty_section_rejected(service):
    with pytest.raises(ValidationError, match="No students found"):
        _save(service, section_id=SECTION_5B)


def test_load_sheet_orders_by_roll_and_prefills(service):
    _save(service, form={cell_field_name(R1, 1): "late"})

    sheet = service.load_sheet(class_id=CLASS_5, section_id=SECTION_5A, attendance_date=DAY, periods=[2, 1])

    assert [s.roll_no for s in sheet.students] == ["01", "02"]
    assert sheet.periods == (1, 2)
    assert sheet.status_for(R1, 1) == AttendanceStatus.LATE


def test_mark_for_periods_writes_each_pair(service, repos):
    written = service.mark_for_periods(
        current_role=Role.ADMIN,
        marked_by=1,
        student_ids=[R1, R2],
        class_id=CLASS_5,
        section_id=SECTION_5A,
        attendance_date=DAY,
        periods=[3, 4],
        status="late",
    )

    assert written == 4
    assert {r.status for r in repos["attendance_repo"].rows.values()} == {AttendanceStatus.LATE}


def test_mark_for_periods_rejects_students_from_other_sections(service):
    with pytest.raises(ValidationError):
        service.mark_for_periods(
            current_role=Role.TEACHER,
            marked_by=TEACHER_ID,
            student_ids=[R1, 42],
            class_id=CLASS_5,
            section_id=SECTION_5A,
            attendance_date=DAY,
            periods=[1],
            status=AttendanceStatus.PRESENT,
        )
