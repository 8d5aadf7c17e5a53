from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..app_logger import get_logger
from ..common.datetime_utils import parse_optional_date
from ..common.decorators import role_required
from ..common.validators import optional_id
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError

log = get_logger("reports")


def _read_filters(args) -> dict:
    return {
        "start": parse_optional_date(args.get("start_date"), "Start date"),
        "end": parse_optional_date(args.get("end_date"), "End date"),
        "class_id": optional_id(args.get("class_id")),
    }


def _filter_query(args) -> dict:
    return {k: args.get(k) for k in ("start_date", "end_date", "class_id") if args.get(k)}


def register(app: Flask, container: Container) -> None:
    svc = container.report_service

    @app.route("/reports", endpoint="attendance_report")
    @role_required(Role.ADMIN, Role.TEACHER)
    def attendance_report():
        report, error = None, None
        classes = []
        try:
            classes = container.class_section_service.list_classes()
            report = svc.build_report(**_read_filters(request.args))
        except DomainError as e:
            error = str(e)
            flash(error, "danger")
        except Exception:
            log.exception("report load failed")
            error = "Failed to load attendance report."
            flash(error, "danger")

        return render_template(
            "reports/report.html",
            report=report,
            classes=classes,
            filters=request.args,
            error=error,
            retry_url=url_for("attendance_report", **_filter_query(request.args)),
            active_page="reports",
        )

    @app.route("/reports/export.csv", endpoint="export_report_csv")
    @role_required(Role.ADMIN, Role.TEACHER)
    def export_report_csv():
        try:
            report = svc.build_report(**_read_filters(request.args))
            export = svc.export_csv(report.rows)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("attendance_report", **_filter_query(request.args)))
        except Exception:
            log.exception("report export failed")
            flash("Failed to export attendance report.", "danger")
            return redirect(url_for("attendance_report", **_filter_query(request.args)))

        return app.response_class(
            export.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
