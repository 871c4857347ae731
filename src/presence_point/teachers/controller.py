from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/settings", methods=["GET", "POST"], endpoint="settings")
    @login_required
    def settings():
        teacher_id = session["teacher_id"]

        if request.method == "POST":
            try:
                container.teacher_service.update_settings(
                    teacher_id=teacher_id,
                    school_id=request.form.get("school_id"),
                    schedule_url=request.form.get("schedule_url"),
                )
                flash("Inställningar sparade", "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Saving settings failed")
                flash("Kunde inte spara inställningar", "danger")

        try:
            data = container.teacher_service.get_settings(teacher_id)
        except (ValidationError, StorageError) as e:
            logger.error("Settings unavailable: %s", e)
            flash("Kunde inte ladda inställningar", "danger")
            return redirect(url_for("dashboard"))
        return render_template("settings.html", teacher=data.teacher, schools=data.schools, active_page="settings")
