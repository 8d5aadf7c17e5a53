from __future__ import annotations

from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..app_logger import get_logger
from ..attendance.sheet import cell_field_name
from ..common.decorators import current_user, login_required
from ..common.stats import status_css, status_label
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError

log = get_logger("users")

# Role -> endpoint of that role's dashboard.
DASHBOARD_ENDPOINTS = {
    Role.ADMIN: "admin_dashboard",
    Role.TEACHER: "teacher_dashboard",
    Role.STUDENT: "student_dashboard",
}


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals.update(
        current_user=current_user,
        status_label=status_label,
        status_css=status_css,
        cell_field_name=cell_field_name,
    )

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

                session["user_id"] = s_user.user_id
                session["name"] = s_user.full_name
                session["email"] = s_user.email
                session["role"] = s_user.role.value

                log.info("login user_id=%s role=%s", s_user.user_id, s_user.role.value)
                flash("Signed in successfully.", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                log.exception("login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        # The stored profile decides the dashboard, not the session cookie alone.
        try:
            profile = container.profile_service.get_profile(session["user_id"])
        except NotFoundError as e:
            flash(str(e), "danger")
            return render_template("error.html", message=str(e), retry_url=url_for("dashboard"))
        except Exception:
            log.exception("profile load failed user_id=%s", session.get("user_id"))
            message = "Could not load your profile."
            flash(message, "danger")
            return render_template("error.html", message=message, retry_url=url_for("dashboard"))

        session["role"] = profile.role.value
        session["name"] = profile.full_name

        endpoint = DASHBOARD_ENDPOINTS.get(profile.role)
        if endpoint is None:
            return render_template("error.html", message="Invalid role", retry_url=None)
        return redirect(url_for(endpoint))
