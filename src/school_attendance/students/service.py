from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..academics.repository import SectionRepository
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_optional_date, today_local
from ..common.stats import AttendanceStats, calculate_attendance_stats
from ..common.validators import require_non_empty, require_positive_id
from ..core.constants import RECENT_ATTENDANCE_LIMIT
from ..core.enums import Gender, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import ProfileRepository
from .model import Student, StudentFields
from .repository import StudentRepository

STUDENT_NOT_FOUND = "Student profile not found. Please contact your administrator."


class StudentService:
    """Use case: admin maintenance of the student register."""

    def __init__(
        self,
        students: StudentRepository,
        sections: SectionRepository,
        profiles: ProfileRepository,
        *,
        today=today_local,
    ):
        self._students = students
        self._sections = sections
        self._profiles = profiles
        self._today = today

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage students")

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _resolve_login(self, email: Optional[str]) -> Optional[int]:
        email = (email or "").strip().lower()
        if not email:
            return None
        profile = self._profiles.get_by_email(email)
        if not profile or profile.role != Role.STUDENT:
            raise ValidationError(f"No student login with email {email}")
        return profile.id

    def parse_fields(self, form: Mapping[str, str]) -> StudentFields:
        """Validate a submitted student form into a write-model."""
        full_name = require_non_empty(form.get("full_name"), "Full name")
        roll_no = require_non_empty(form.get("roll_no"), "Roll number")
        class_id = require_positive_id(form.get("class_id"), "Class")
        section_id = require_positive_id(form.get("section_id"), "Section")

        section = self._sections.get_by_id(section_id)
        if not section:
            raise ValidationError("Section not found")
        if section.class_id != class_id:
            raise ValidationError("Section does not belong to the selected class")

        try:
            gender = Gender((form.get("gender") or "").strip())
        except ValueError:
            raise ValidationError("Gender must be male, female or other")

        dob = parse_optional_date(form.get("date_of_birth"), "Date of birth")
        if dob is None:
            raise ValidationError("Date of birth is required")
        if dob > self._today():
            raise ValidationError("Date of birth cannot be in the future")

        return StudentFields(
            full_name=full_name,
            roll_no=roll_no,
            class_id=class_id,
            section_id=section_id,
            gender=gender,
            date_of_birth=dob,
            guardian_name=require_non_empty(form.get("guardian_name"), "Guardian name"),
            guardian_contact=require_non_empty(form.get("guardian_contact"), "Guardian contact"),
            address=(form.get("address") or "").strip() or None,
            user_id=self._resolve_login(form.get("login_email")),
        )

    def add_student(self, *, current_role: Role, form: Mapping[str, str]) -> int:
        self._require_admin(current_role)
        return self._students.create(self.parse_fields(form))

    def update_student(self, *, current_role: Role, student_id: int, form: Mapping[str, str]) -> None:
        self._require_admin(current_role)
        self.get_student(student_id)
        self._students.update(int(student_id), self.parse_fields(form))

    def delete_student(self, *, current_role: Role, student_id: int) -> None:
        self._require_admin(current_role)
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")


@dataclass(frozen=True)
class StudentPortalData:
    student: Student
    records: Sequence[AttendanceRecord]
    stats: AttendanceStats
    recent: Sequence[AttendanceRecord]


class StudentPortalService:
    """Loads what a signed-in student sees: own record, history and stats."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository):
        self._students = students
        self._attendance = attendance

    def load(self, user_id: int) -> StudentPortalData:
        student = self._students.get_by_user_id(int(user_id))
        if not student:
            raise NotFoundError(STUDENT_NOT_FOUND)

        records = sorted(
            self._attendance.list_for_student(student.id),
            key=lambda r: (r.attendance_date, r.period),
            reverse=True,
        )
        return StudentPortalData(
            student=student,
            records=records,
            stats=calculate_attendance_stats(records),
            recent=records[:RECENT_ATTENDANCE_LIMIT],
        )
