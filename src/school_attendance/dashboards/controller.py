from __future__ import annotations

from flask import Flask, flash, render_template, session, url_for

from ..app_logger import get_logger
from ..common.decorators import role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError

log = get_logger("dashboards")


def register(app: Flask, container: Container) -> None:
    def _overview():
        """Institution totals plus the per-section statistics view."""
        institution = container.report_service.institution_overview()
        sections = container.report_service.section_overview()
        return institution, sections

    @app.route("/admin", endpoint="admin_dashboard")
    @role_required(Role.ADMIN)
    def admin_dashboard():
        institution, sections, error = None, [], None
        try:
            institution, sections = _overview()
        except Exception:
            log.exception("admin overview failed")
            error = "Failed to load attendance overview."
            flash(error, "danger")

        return render_template(
            "admin/dashboard.html",
            institution=institution,
            sections=sections,
            error=error,
            retry_url=url_for("admin_dashboard"),
            active_page="overview",
        )

    @app.route("/teacher", endpoint="teacher_dashboard")
    @role_required(Role.TEACHER)
    def teacher_dashboard():
        institution, sections, my_sections, error = None, [], [], None
        try:
            institution, sections = _overview()
            my_sections = container.class_section_service.list_sections_for_teacher(session["user_id"])
        except Exception:
            log.exception("teacher overview failed user_id=%s", session.get("user_id"))
            error = "Failed to load attendance overview."
            flash(error, "danger")

        return render_template(
            "teacher/dashboard.html",
            institution=institution,
            sections=sections,
            my_sections=my_sections,
            error=error,
            retry_url=url_for("teacher_dashboard"),
            active_page="overview",
        )

    def _student_page(template: str, endpoint: str, active_page: str):
        data, timetable, error = None, [], None
        try:
            data = container.student_portal_service.load(session["user_id"])
            timetable = container.period_service.timetable()
        except DomainError as e:
            error = str(e)
            flash(error, "danger")
        except Exception:
            log.exception("student data load failed user_id=%s", session.get("user_id"))
            error = "Failed to load attendance data."
            flash(error, "danger")

        return render_template(
            template,
            data=data,
            timetable=timetable,
            error=error,
            retry_url=url_for(endpoint),
            active_page=active_page,
        )

    @app.route("/student", endpoint="student_dashboard")
    @role_required(Role.STUDENT)
    def student_dashboard():
        return _student_page("student/dashboard.html", "student_dashboard", "overview")

    @app.route("/student/history", endpoint="student_history")
    @role_required(Role.STUDENT)
    def student_history():
        return _student_page("student/history.html", "student_history", "history")

    @app.route("/student/timetable", endpoint="student_timetable")
    @role_required(Role.STUDENT)
    def student_timetable():
        return _student_page("student/timetable.html", "student_timetable", "timetable")
