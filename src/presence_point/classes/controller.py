from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/classes", methods=["GET", "POST"], endpoint="classes")
    @login_required
    def classes():
        if request.method == "POST":
            try:
                teacher = container.teacher_service.get(session["teacher_id"])
                container.class_service.add_class(teacher=teacher, name=request.form.get("name", ""))
                flash("Klass tillagd", "success")
                return redirect(url_for("classes"))
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Adding class failed")
                flash("Kunde inte lägga till klass", "danger")

        rows = []
        try:
            teacher = container.teacher_service.get(session["teacher_id"])
            rows = container.class_service.list_for_teacher(teacher)
        except (ValidationError, StorageError) as e:
            logger.error("Class list unavailable: %s", e)
            flash("Kunde inte hämta klasser", "danger")
        return render_template("classes.html", classes=rows, active_page="classes")
