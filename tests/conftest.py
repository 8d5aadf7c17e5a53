from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from school_attendance.academics.model import SchoolClass, Section
from school_attendance.attendance.model import AttendanceRecord
from school_attendance.container import build_services
from school_attendance.core.enums import AttendanceStatus, Gender, Role
from school_attendance.main import create_app
from school_attendance.periods.model import Period
from school_attendance.reports.model import AttendanceReportRow, InstitutionStats
from school_attendance.students.model import Student, StudentFields
from school_attendance.users.model import Profile


class InMemoryProfiles:
    def __init__(self, profiles: list[Profile]):
        self._by_id = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self._by_id.get(profile_id)

    def get_by_email(self, email: str) -> Optional[Profile]:
        return next((p for p in self._by_id.values() if p.email == email), None)

    def list_by_role(self, role: Role):
        return [p for p in self._by_id.values() if p.role == role]


class InMemoryClasses:
    def __init__(self, classes: list[SchoolClass]):
        self._by_id = {c.id: c for c in classes}
        self._id = max(self._by_id, default=0)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda c: c.name)

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        return self._by_id.get(class_id)

    def create(self, *, name: str, description: Optional[str]) -> int:
        self._id += 1
        self._by_id[self._id] = SchoolClass(id=self._id, name=name, description=description)
        return self._id

    def update(self, *, class_id: int, name: str, description: Optional[str]) -> bool:
        if class_id not in self._by_id:
            return False
        self._by_id[class_id] = SchoolClass(id=class_id, name=name, description=description)
        return True

    def delete(self, class_id: int) -> bool:
        return self._by_id.pop(class_id, None) is not None


class InMemorySections:
    def __init__(self, sections: list[Section], classes: InMemoryClasses, profiles: InMemoryProfiles):
        self._by_id = {s.id: s for s in sections}
        self._classes = classes
        self._profiles = profiles
        self._id = max(self._by_id, default=0)

    def _joined(self, s: Section) -> Section:
        cls = self._classes.get_by_id(s.class_id)
        teacher = self._profiles.get_by_id(s.teacher_id) if s.teacher_id else None
        return replace(
            s,
            class_name=cls.name if cls else None,
            teacher_name=teacher.full_name if teacher else None,
        )

    def list_all(self):
        return [self._joined(s) for s in self._by_id.values()]

    def list_by_class(self, class_id: int):
        return [self._joined(s) for s in self._by_id.values() if s.class_id == class_id]

    def list_by_teacher(self, teacher_id: int):
        return [self._joined(s) for s in self._by_id.values() if s.teacher_id == teacher_id]

    def get_by_id(self, section_id: int) -> Optional[Section]:
        s = self._by_id.get(section_id)
        return self._joined(s) if s else None

    def create(self, *, name: str, class_id: int, teacher_id: Optional[int]) -> int:
        self._id += 1
        self._by_id[self._id] = Section(id=self._id, name=name, class_id=class_id, teacher_id=teacher_id)
        return self._id

    def update(self, *, section_id: int, name: str, class_id: int, teacher_id: Optional[int]) -> bool:
        if section_id not in self._by_id:
            return False
        self._by_id[section_id] = Section(id=section_id, name=name, class_id=class_id, teacher_id=teacher_id)
        return True

    def delete(self, section_id: int) -> bool:
        return self._by_id.pop(section_id, None) is not None


class InMemoryStudents:
    def __init__(self, students: list[Student]):
        self._by_id = {s.id: s for s in students}
        self._id = max(self._by_id, default=0)

    def list_all(self):
        return list(self._by_id.values())

    def list_by_section(self, section_id: int):
        return sorted((s for s in self._by_id.values() if s.section_id == section_id), key=lambda s: s.roll_no)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(student_id)

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.user_id == user_id), None)

    def create(self, fields: StudentFields) -> int:
        self._id += 1
        self._by_id[self._id] = Student(id=self._id, **vars(fields))
        return self._id

    def update(self, student_id: int, fields: StudentFields) -> bool:
        if student_id not in self._by_id:
            return False
        self._by_id[student_id] = Student(id=student_id, **vars(fields))
        return True

    def delete(self, student_id: int) -> bool:
        return self._by_id.pop(student_id, None) is not None


class InMemoryPeriods:
    def __init__(self, periods: list[Period]):
        self._periods = list(periods)

    def list_all(self):
        return sorted(self._periods, key=lambda p: p.period_number)


class InMemoryAttendance:
    """Rows keyed by (student_id, date, period), like the unique key in MySQL."""

    def __init__(self):
        self.rows: dict[tuple[int, date, int], AttendanceRecord] = {}

    def list_for_section(self, *, section_id: int, attendance_date: date, periods):
        return [
            r
            for r in self.rows.values()
            if r.section_id == section_id and r.attendance_date == attendance_date and r.period in periods
        ]

    def list_for_student(self, student_id: int):
        items = [r for r in self.rows.values() if r.student_id == student_id]
        items.sort(key=lambda r: (r.attendance_date, r.period), reverse=True)
        return items

    def replace_for_section(self, *, section_id: int, attendance_date: date, periods, records) -> int:
        for key, r in list(self.rows.items()):
            if r.section_id == section_id and r.attendance_date == attendance_date and r.period in periods:
                del self.rows[key]
        for r in records:
            self.rows[(r.student_id, r.attendance_date, r.period)] = r
        return len(records)

    def mark_for_periods(self, *, student_ids, class_id, section_id, attendance_date, periods, status, marked_by) -> int:
        n = 0
        for sid in student_ids:
            for p in periods:
                self.rows[(sid, attendance_date, p)] = AttendanceRecord(
                    student_id=sid,
                    class_id=class_id,
                    section_id=section_id,
                    attendance_date=attendance_date,
                    period=p,
                    status=status,
                    marked_by=marked_by,
                )
                n += 1
        return n


class InMemoryReports:
    def __init__(self, rows=None, institution=None):
        self.rows = list(rows or [])
        self.institution = institution
        self.calls: list[dict] = []

    def get_attendance_report(self, *, start_date, end_date, class_filter):
        self.calls.append({"start_date": start_date, "end_date": end_date, "class_filter": class_filter})
        return [r for r in self.rows if class_filter is None or r.class_id == class_filter]

    def get_attendance_statistics(self):
        return list(self.rows)

    def get_institution_statistics(self):
        return self.institution


ADMIN_ID, TEACHER_ID, STUDENT_USER_ID, ORPHAN_STUDENT_USER_ID = 1, 2, 3, 4
CLASS_5, SECTION_5A, SECTION_5B = 1, 1, 2
R1, R2 = 1, 2


def _profiles() -> list[Profile]:
    return [
        Profile(ADMIN_ID, "admin@school.test", "Admin", Role.ADMIN, password_hash=generate_password_hash("admin123")),
        Profile(TEACHER_ID, "teacher@school.test", "Priya Nair", Role.TEACHER, password_hash=generate_password_hash("teacher123")),
        Profile(STUDENT_USER_ID, "student@school.test", "Riya Sharma", Role.STUDENT, password_hash=generate_password_hash("student123")),
        Profile(ORPHAN_STUDENT_USER_ID, "nostudent@school.test", "No Row", Role.STUDENT, password_hash=generate_password_hash("student123")),
    ]


def _student(student_id: int, name: str, roll: str, *, user_id=None) -> Student:
    return Student(
        id=student_id,
        full_name=name,
        roll_no=roll,
        class_id=CLASS_5,
        section_id=SECTION_5A,
        gender=Gender.FEMALE,
        date_of_birth=date(2014, 3, 1),
        guardian_name="Guardian",
        guardian_contact="555-0100",
        user_id=user_id,
        class_name="5",
        section_name="A",
    )


def _periods() -> list[Period]:
    return [
        Period(id=n, period_number=n, name=f"Period {n}", start_time=time(8 + n, 0), end_time=time(8 + n, 45))
        for n in range(1, 5)
    ]


REPORT_ROWS = [
    AttendanceReportRow(CLASS_5, "5", SECTION_5A, "A", 2, 4, 3, 1, 0, 75.0),
    AttendanceReportRow(CLASS_5, "5", SECTION_5B, "B", 0, 0, 0, 0, 0, 0.0),
]
INSTITUTION = InstitutionStats(2, 4, 3, 1, 0, 75.0)


@pytest.fixture
def repos():
    profiles = InMemoryProfiles(_profiles())
    classes = InMemoryClasses([SchoolClass(CLASS_5, "5", "Grade five")])
    sections = InMemorySections(
        [Section(SECTION_5A, "A", CLASS_5, TEACHER_ID), Section(SECTION_5B, "B", CLASS_5)],
        classes,
        profiles,
    )
    students = InMemoryStudents(
        [_student(R1, "Riya Sharma", "01", user_id=STUDENT_USER_ID), _student(R2, "Rohan Verma", "02")]
    )
    return {
        "profiles_repo": profiles,
        "classes_repo": classes,
        "sections_repo": sections,
        "students_repo": students,
        "periods_repo": InMemoryPeriods(_periods()),
        "attendance_repo": InMemoryAttendance(),
        "reports_repo": InMemoryReports(REPORT_ROWS, INSTITUTION),
    }


@pytest.fixture
def container(repos):
    return build_services(**repos)


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="school_attendance.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int, role: Role, name: str = "User"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = name
            sess["role"] = role.value
        return client

    return _login
