from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import AuthenticationError, StorageError, ValidationError
from .model import SessionUser

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(s_user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user_id"] = s_user.user_id
        session["email"] = s_user.email
        session["teacher_id"] = s_user.teacher_id
        session["access_token"] = s_user.access_token

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "teacher_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                s_user = container.auth_service.sign_in(email, password)
                _start_session(s_user, remember=remember)
                flash("Inloggad", "success")
                return redirect(url_for("dashboard"))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except StorageError:
                flash("Kunde inte ladda lärarprofilen", "danger")
            except Exception as e:
                logger.exception("Sign-in failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"Systemfel vid inloggning: {e}", "danger")
                else:
                    flash("Systemfel vid inloggning", "danger")

        return render_template("login.html")

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_user = container.auth_service.sign_up(email, password)
                if s_user is None:
                    flash("Kontot är skapat. Bekräfta din e-post och logga sedan in.", "info")
                    return redirect(url_for("login"))
                _start_session(s_user, remember=False)
                flash("Kontot är skapat", "success")
                return redirect(url_for("settings"))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Sign-up failed")
                flash("Systemfel vid registrering", "danger")

        return render_template("signup.html")

    @app.route("/logout", endpoint="logout")
    @login_required
    def logout():
        scan_key = session.get("scan_key")
        if scan_key:
            container.scan_service.end_session(scan_key)
        try:
            container.auth_service.sign_out(session.get("access_token"))
        except AuthenticationError:
            logger.warning("Backend sign-out failed for user %s", session.get("user_id"))
        session.clear()
        flash("Utloggad", "info")
        return redirect(url_for("login"))
