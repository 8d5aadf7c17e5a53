from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..app_logger import get_logger
from ..common.decorators import role_required, session_role
from ..common.validators import optional_id
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

log = get_logger("academics")


def register(app: Flask, container: Container) -> None:
    svc = container.class_section_service

    @app.route("/admin/classes", endpoint="admin_classes")
    @role_required(Role.ADMIN)
    def admin_classes():
        classes, sections, teachers, error = [], [], [], None
        try:
            classes = svc.list_classes()
            sections = svc.list_sections()
            teachers = container.profile_service.list_teachers()
        except Exception:
            log.exception("class/section load failed")
            error = "Failed to load classes and sections."
            flash(error, "danger")

        return render_template(
            "admin/classes.html",
            classes=classes,
            sections=sections,
            teachers=teachers,
            error=error,
            retry_url=url_for("admin_classes"),
            active_page="classes",
        )

    @app.route("/admin/classes/add", methods=["POST"], endpoint="add_class")
    @role_required(Role.ADMIN)
    def add_class():
        try:
            svc.add_class(
                current_role=session_role(),
                name=request.form.get("name", ""),
                description=request.form.get("description", ""),
            )
            flash("Class added successfully.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("add class failed")
            flash("Failed to save class", "danger")
        return redirect(url_for("admin_classes"))

    @app.route("/admin/classes/<int:class_id>/edit", methods=["GET", "POST"], endpoint="edit_class")
    @role_required(Role.ADMIN)
    def edit_class(class_id: int):
        try:
            cls = svc.get_class(class_id)
        except NotFoundError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_classes"))

        if request.method == "POST":
            try:
                svc.update_class(
                    current_role=session_role(),
                    class_id=class_id,
                    name=request.form.get("name", ""),
                    description=request.form.get("description", ""),
                )
                flash("Class updated successfully.", "success")
                return redirect(url_for("admin_classes"))
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("update class failed id=%s", class_id)
                flash("Failed to save class", "danger")

        return render_template("admin/class_form.html", cls=cls, active_page="classes")

    @app.route("/admin/classes/<int:class_id>/delete", methods=["POST"], endpoint="delete_class")
    @role_required(Role.ADMIN)
    def delete_class(class_id: int):
        try:
            svc.delete_class(current_role=session_role(), class_id=class_id)
            flash("Class deleted successfully.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("delete class failed id=%s", class_id)
            flash("Failed to delete class", "danger")
        return redirect(url_for("admin_classes"))

    @app.route("/admin/sections/add", methods=["POST"], endpoint="add_section")
    @role_required(Role.ADMIN)
    def add_section():
        try:
            svc.add_section(
                current_role=session_role(),
                name=request.form.get("name", ""),
                class_id=request.form.get("class_id"),
                teacher_id=optional_id(request.form.get("teacher_id")),
            )
            flash("Section added successfully.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("add section failed")
            flash("Failed to save section", "danger")
        return redirect(url_for("admin_classes"))

    @app.route("/admin/sections/<int:section_id>/edit", methods=["GET", "POST"], endpoint="edit_section")
    @role_required(Role.ADMIN)
    def edit_section(section_id: int):
        try:
            section = svc.get_section(section_id)
        except NotFoundError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_classes"))

        if request.method == "POST":
            try:
                svc.update_section(
                    current_role=session_role(),
                    section_id=section_id,
                    name=request.form.get("name", ""),
                    class_id=request.form.get("class_id"),
                    teacher_id=optional_id(request.form.get("teacher_id")),
                )
                flash("Section updated successfully.", "success")
                return redirect(url_for("admin_classes"))
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                log.exception("update section failed id=%s", section_id)
                flash("Failed to save section", "danger")

        return render_template(
            "admin/section_form.html",
            section=section,
            classes=svc.list_classes(),
            teachers=container.profile_service.list_teachers(),
            active_page="classes",
        )

    @app.route("/admin/sections/<int:section_id>/delete", methods=["POST"], endpoint="delete_section")
    @role_required(Role.ADMIN)
    def delete_section(section_id: int):
        try:
            svc.delete_section(current_role=session_role(), section_id=section_id)
            flash("Section deleted successfully.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("delete section failed id=%s", section_id)
            flash("Failed to delete section", "danger")
        return redirect(url_for("admin_classes"))
