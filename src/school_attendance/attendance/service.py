from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..academics.repository import SectionRepository
from ..app_logger import get_logger
from ..common.datetime_utils import today_local
from ..common.validators import require_positive_id, validate_attendance_date, validate_period
from ..core.constants import MAX_PERIOD_NUMBER, MIN_PERIOD_NUMBER
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .repository import AttendanceRepository
from .sheet import AttendanceSheet

log = get_logger("attendance")

MARKING_ROLES = {Role.ADMIN, Role.TEACHER}


class AttendanceService:
    """Use case: load, edit and save the marking grid of one section."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        sections: SectionRepository,
        *,
        today=today_local,
    ):
        self._attendance = attendance
        self._students = students
        self._sections = sections
        self._today = today

    @staticmethod
    def _require_marker(current_role: Role) -> None:
        if current_role not in MARKING_ROLES:
            raise AuthorizationError(
                "You don't have permission to mark attendance. "
                "This feature is only available for teachers and administrators."
            )

    @staticmethod
    def _check_periods(periods: Sequence[int]) -> tuple[int, ...]:
        cleaned = tuple(sorted(set(int(p) for p in periods)))
        if not cleaned:
            raise ValidationError("Select at least one period")
        bad = [p for p in cleaned if not validate_period(p)]
        if bad:
            raise ValidationError(
                f"Period must be between {MIN_PERIOD_NUMBER} and {MAX_PERIOD_NUMBER} (got {bad[0]})"
            )
        return cleaned

    def _check_date(self, attendance_date: date) -> None:
        if not validate_attendance_date(attendance_date, self._today()):
            raise ValidationError("Attendance cannot be marked for a future date")

    def _check_section(self, class_id: int, section_id: int) -> None:
        section = self._sections.get_by_id(section_id)
        if not section:
            raise NotFoundError("Section not found")
        if section.class_id != class_id:
            raise ValidationError("Section does not belong to the selected class")

    def load_sheet(self, *, class_id, section_id, attendance_date: date, periods: Sequence[int]) -> AttendanceSheet:
        class_id = require_positive_id(class_id, "Class")
        section_id = require_positive_id(section_id, "Section")
        periods = self._check_periods(periods)
        self._check_section(class_id, section_id)

        students = self._students.list_by_section(section_id)
        records = self._attendance.list_for_section(
            section_id=section_id,
            attendance_date=attendance_date,
            periods=periods,
        )
        return AttendanceSheet.from_records(
            class_id=class_id,
            section_id=section_id,
            attendance_date=attendance_date,
            periods=periods,
            students=students,
            records=records,
        )

    def save_sheet(
        self,
        *,
        current_role: Role,
        marked_by: int,
        class_id,
        section_id,
        attendance_date: date,
        periods: Sequence[int],
        form: Optional[Mapping[str, str]] = None,
        mark_all: Optional[AttendanceStatus] = None,
    ) -> int:
        """Replace the attendance of (section, date, periods) with the submitted grid.

        Students are re-read from the section so the write always covers the
        current roster; every cell left unset is stored as absent.
        """
        self._require_marker(current_role)
        self._check_date(attendance_date)
        sheet = self.load_sheet(
            class_id=class_id,
            section_id=section_id,
            attendance_date=attendance_date,
            periods=periods,
        )
        if not sheet.students:
            raise ValidationError("No students found in this section.")

        # Cells come from the form only; stored values are replaced wholesale.
        sheet.statuses.clear()
        if mark_all is not None:
            sheet.mark_all(mark_all)
        if form:
            sheet.apply_form(form)

        records = sheet.to_records(marked_by=marked_by)
        written = self._attendance.replace_for_section(
            section_id=sheet.section_id,
            attendance_date=sheet.attendance_date,
            periods=sheet.periods,
            records=records,
        )
        log.info(
            "attendance saved section=%s date=%s periods=%s rows=%d by=%s",
            sheet.section_id,
            sheet.attendance_date.isoformat(),
            ",".join(str(p) for p in sheet.periods),
            written,
            marked_by,
        )
        return written

    def mark_for_periods(
        self,
        *,
        current_role: Role,
        marked_by: int,
        student_ids: Sequence[int],
        class_id,
        section_id,
        attendance_date: date,
        periods: Sequence[int],
        status: AttendanceStatus,
    ) -> int:
        """Bulk variant: one status for the given students across the given periods."""
        self._require_marker(current_role)
        self._check_date(attendance_date)
        class_id = require_positive_id(class_id, "Class")
        section_id = require_positive_id(section_id, "Section")
        periods = self._check_periods(periods)
        self._check_section(class_id, section_id)
        status = AttendanceStatus(status)

        roster = {s.id for s in self._students.list_by_section(section_id)}
        chosen = [int(s) for s in student_ids]
        if not chosen:
            raise ValidationError("Select at least one student")
        outside = [s for s in chosen if s not in roster]
        if outside:
            raise ValidationError("Some students are not in this section")

        written = self._attendance.mark_for_periods(
            student_ids=chosen,
            class_id=class_id,
            section_id=section_id,
            attendance_date=attendance_date,
            periods=periods,
            status=status,
            marked_by=int(marked_by),
        )
        log.info("bulk attendance section=%s status=%s rows=%d", section_id, status.value, written)
        return written
