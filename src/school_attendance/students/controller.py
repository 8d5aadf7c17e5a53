from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..app_logger import get_logger
from ..common.decorators import role_required, session_role
from ..container import Container
from ..core.enums import Gender, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

log = get_logger("students")


def register(app: Flask, container: Container) -> None:
    svc = container.student_service

    def _form_context():
        return {
            "classes": container.class_section_service.list_classes(),
            "sections": container.class_section_service.list_sections(),
            "genders": list(Gender),
        }

    @app.route("/admin/students", endpoint="admin_students")
    @role_required(Role.ADMIN)
    def admin_students():
        students, error = [], None
        try:
            students = svc.list_students()
        except Exception:
            log.exception("student list failed")
            error = "Failed to load students."
            flash(error, "danger")

        return render_template(
            "admin/students.html",
            students=students,
            error=error,
            retry_url=url_for("admin_students"),
            active_page="students",
        )

    @app.route("/admin/students/add", methods=["GET", "POST"], endpoint="add_student")
    @role_required(Role.ADMIN)
    def add_student():
        if request.method == "POST":
            try:
                svc.add_student(current_role=session_role(), form=request.form)
                flash("Student added successfully.", "success")
                return redirect(url_for("admin_students"))
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("add student failed")
                flash("Failed to save student", "danger")

        return render_template(
            "admin/student_form.html",
            student=None,
            form=request.form,
            login_email="",
            active_page="students",
            **_form_context(),
        )

    @app.route("/admin/students/<int:student_id>/edit", methods=["GET", "POST"], endpoint="edit_student")
    @role_required(Role.ADMIN)
    def edit_student(student_id: int):
        try:
            student = svc.get_student(student_id)
        except NotFoundError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_students"))

        login_email = ""
        if student.user_id:
            try:
                login_email = container.profile_service.get_profile(student.user_id).email
            except NotFoundError:
                login_email = ""

        if request.method == "POST":
            try:
                svc.update_student(current_role=session_role(), student_id=student_id, form=request.form)
                flash("Student updated successfully.", "success")
                return redirect(url_for("admin_students"))
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("update student failed id=%s", student_id)
                flash("Failed to save student", "danger")

        return render_template(
            "admin/student_form.html",
            student=student,
            form=request.form,
            login_email=login_email,
            active_page="students",
            **_form_context(),
        )

    @app.route("/admin/students/<int:student_id>/delete", methods=["POST"], endpoint="delete_student")
    @role_required(Role.ADMIN)
    def delete_student(student_id: int):
        try:
            svc.delete_student(current_role=session_role(), student_id=student_id)
            flash("Student deleted successfully.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("delete student failed id=%s", student_id)
            flash("Failed to delete student", "danger")
        return redirect(url_for("admin_students"))
