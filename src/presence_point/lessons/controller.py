from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.constants import WEEKDAYS
from ..core.exceptions import AuthorizationError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _teacher():
        return container.teacher_service.get(session["teacher_id"])

    @app.route("/schedule", endpoint="schedule")
    @login_required
    def schedule():
        grid = None
        lessons = []
        classes = []
        try:
            teacher = _teacher()
            grid = container.lesson_service.weekly_grid(teacher)
            lessons = container.lesson_service.list_for_teacher(teacher)
            classes = container.class_service.list_for_teacher(teacher)
        except (ValidationError, StorageError) as e:
            logger.error("Schedule unavailable: %s", e)
            flash("Kunde inte hämta schema", "danger")
        return render_template(
            "schedule.html",
            grid=grid,
            lessons=lessons,
            classes=classes,
            weekdays=WEEKDAYS,
            active_page="schedule",
        )

    @app.route("/schedule/save", methods=["POST"], endpoint="save_lesson")
    @login_required
    def save_lesson():
        lesson_id = request.form.get("lesson_id") or None
        try:
            container.lesson_service.save_lesson(
                teacher=_teacher(),
                lesson_id=lesson_id,
                class_id=request.form.get("class_id", ""),
                day_of_week=request.form.get("day_of_week", ""),
                start_time=request.form.get("start_time", ""),
                end_time=request.form.get("end_time", ""),
                room=request.form.get("room", ""),
            )
            flash("Lektion uppdaterad" if lesson_id else "Lektion tillagd", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Saving lesson failed")
            flash("Kunde inte spara lektion", "danger")
        return redirect(url_for("schedule"))

    @app.route("/schedule/<lesson_id>/delete", methods=["POST"], endpoint="delete_lesson")
    @login_required
    def delete_lesson(lesson_id: str):
        try:
            container.lesson_service.delete_lesson(teacher=_teacher(), lesson_id=lesson_id)
            flash("Lektion borttagen", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Deleting lesson %s failed", lesson_id)
            flash("Kunde inte ta bort lektion", "danger")
        return redirect(url_for("schedule"))
