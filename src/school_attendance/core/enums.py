from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles stored on profiles (``user_role`` in the database)."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Per student, per date, per period status (``attendance_status``)."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
