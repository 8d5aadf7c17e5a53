from __future__ import annotations

from dataclasses import dataclass

from .academics.mysql_class_repository import MySQLClassRepository
from .academics.mysql_section_repository import MySQLSectionRepository
from .academics.repository import ClassRepository, SectionRepository
from .academics.service import ClassSectionService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .periods.mysql_period_repository import MySQLPeriodRepository
from .periods.repository import PeriodRepository
from .periods.service import PeriodService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentPortalService, StudentService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService, ProfileService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    classes_repo: ClassRepository
    sections_repo: SectionRepository
    students_repo: StudentRepository
    periods_repo: PeriodRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    profile_service: ProfileService
    class_section_service: ClassSectionService
    student_service: StudentService
    student_portal_service: StudentPortalService
    period_service: PeriodService
    attendance_service: AttendanceService
    report_service: ReportService


def build_services(
    *,
    profiles_repo: ProfileRepository,
    classes_repo: ClassRepository,
    sections_repo: SectionRepository,
    students_repo: StudentRepository,
    periods_repo: PeriodRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    return Container(
        profiles_repo=profiles_repo,
        classes_repo=classes_repo,
        sections_repo=sections_repo,
        students_repo=students_repo,
        periods_repo=periods_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(profiles_repo),
        profile_service=ProfileService(profiles_repo),
        class_section_service=ClassSectionService(classes_repo, sections_repo, profiles_repo),
        student_service=StudentService(students_repo, sections_repo, profiles_repo),
        student_portal_service=StudentPortalService(students_repo, attendance_repo),
        period_service=PeriodService(periods_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, sections_repo),
        report_service=ReportService(reports_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        profiles_repo=MySQLProfileRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        sections_repo=MySQLSectionRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        periods_repo=MySQLPeriodRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
    )
