from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..app_logger import get_logger
from ..common.datetime_utils import parse_optional_date, today_local
from ..common.decorators import role_required, session_role
from ..common.validators import optional_id
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from .selection import ClassSectionSelection, PeriodSelection

log = get_logger("attendance")


def _int_list(values, what: str = "period") -> list[int]:
    out = []
    for v in values:
        try:
            out.append(int(v))
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid {what}")
    return out


def _read_selection(args, all_periods: list[int]) -> tuple[ClassSectionSelection, PeriodSelection]:
    """Rebuild picker state from a query string (GET) or form (POST).

    ``prev_class_id`` carries the class the page was rendered with so a class
    change can drop the section chosen for the old class.
    """
    class_id = optional_id(args.get("class_id"))
    prev_class_id = optional_id(args.get("prev_class_id"))
    selection = ClassSectionSelection(class_id=class_id, section_id=optional_id(args.get("section_id")))
    if "prev_class_id" in args and class_id != prev_class_id:
        selection = selection.change_class(class_id)

    selected_date = parse_optional_date(args.get("date"), "Date") or today_local()
    periods = PeriodSelection(selected_date=selected_date, periods=tuple(_int_list(args.getlist("periods"))))

    if args.get("toggle_all"):
        periods = periods.toggle_all(all_periods)
    return selection, periods


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    def _render(selection, periods, sheet=None, error=None):
        classes = container.class_section_service.list_classes()
        sections = container.class_section_service.list_sections(selection.class_id) if selection.class_id else []
        all_periods = container.period_service.list_periods()
        return render_template(
            "attendance/mark.html",
            selection=selection,
            period_selection=periods,
            classes=classes,
            sections=sections,
            all_periods=all_periods,
            all_selected=periods.all_selected(p.period_number for p in all_periods),
            sheet=sheet,
            statuses=list(AttendanceStatus),
            error=error,
            today=today_local(),
            active_page="attendance",
        )

    @app.route("/attendance/mark", methods=["GET"], endpoint="mark_attendance")
    @role_required(Role.ADMIN, Role.TEACHER)
    def mark_attendance():
        all_numbers = container.period_service.period_numbers()
        try:
            selection, periods = _read_selection(request.args, all_numbers)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("mark_attendance"))

        sheet, error = None, None
        if selection.is_complete and not periods.is_empty:
            try:
                sheet = svc.load_sheet(
                    class_id=selection.class_id,
                    section_id=selection.section_id,
                    attendance_date=periods.selected_date,
                    periods=periods.periods,
                )
            except DomainError as e:
                error = str(e)
                flash(error, "danger")
            except Exception:
                log.exception("attendance load failed section=%s", selection.section_id)
                error = "Failed to load students"
                flash(error, "danger")

        return _render(selection, periods, sheet=sheet, error=error)

    @app.route("/attendance/mark", methods=["POST"], endpoint="save_attendance")
    @role_required(Role.ADMIN, Role.TEACHER)
    def save_attendance():
        all_numbers = container.period_service.period_numbers()
        try:
            selection, periods = _read_selection(request.form, all_numbers)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("mark_attendance"))

        query = {
            "class_id": selection.class_id,
            "prev_class_id": selection.class_id,
            "section_id": selection.section_id,
            "date": periods.selected_date.isoformat(),
            "periods": list(periods.periods),
        }

        if request.form.get("action") == "mark_all_present":
            # Fill the grid only; nothing is written until the user saves.
            try:
                sheet = svc.load_sheet(
                    class_id=selection.class_id,
                    section_id=selection.section_id,
                    attendance_date=periods.selected_date,
                    periods=periods.periods,
                )
                sheet.mark_all(AttendanceStatus.PRESENT)
            except DomainError as e:
                flash(str(e), "danger")
                return redirect(url_for("mark_attendance", **query))
            except Exception:
                log.exception("attendance load failed section=%s", selection.section_id)
                flash("Failed to load students", "danger")
                return redirect(url_for("mark_attendance", **query))
            return _render(selection, periods, sheet=sheet)

        try:
            written = svc.save_sheet(
                current_role=session_role(),
                marked_by=session["user_id"],
                class_id=selection.class_id,
                section_id=selection.section_id,
                attendance_date=periods.selected_date,
                periods=periods.periods,
                form=request.form,
            )
            flash(
                f"Attendance saved for {len(periods.periods)} period(s) on "
                f"{periods.selected_date.isoformat()} ({written} records).",
                "success",
            )
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("attendance save failed section=%s", selection.section_id)
            flash("Failed to save attendance", "danger")

        return redirect(url_for("mark_attendance", **query))

    @app.route("/attendance/bulk", methods=["POST"], endpoint="bulk_attendance")
    @role_required(Role.ADMIN, Role.TEACHER)
    def bulk_attendance():
        all_numbers = container.period_service.period_numbers()
        try:
            selection, periods = _read_selection(request.form, all_numbers)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("mark_attendance"))

        try:
            try:
                status = AttendanceStatus(request.form.get("status", ""))
            except ValueError:
                raise ValidationError("Choose a status to apply")

            written = svc.mark_for_periods(
                current_role=session_role(),
                marked_by=session["user_id"],
                student_ids=_int_list(request.form.getlist("student_ids"), "student"),
                class_id=selection.class_id,
                section_id=selection.section_id,
                attendance_date=periods.selected_date,
                periods=periods.periods,
                status=status,
            )
            flash(f"Marked {written} records as {status.value}.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            log.exception("bulk attendance failed section=%s", selection.section_id)
            flash("Failed to save attendance", "danger")

        return redirect(
            url_for(
                "mark_attendance",
                class_id=selection.class_id,
                prev_class_id=selection.class_id,
                section_id=selection.section_id,
                date=periods.selected_date.isoformat(),
                periods=list(periods.periods),
            )
        )
