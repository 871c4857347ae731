from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _teacher():
        return container.teacher_service.get(session["teacher_id"])

    @app.route("/students", methods=["GET", "POST"], endpoint="students")
    @login_required
    def students():
        if request.method == "POST":
            try:
                container.student_service.add_student(
                    teacher=_teacher(),
                    first_name=request.form.get("first_name", ""),
                    last_name=request.form.get("last_name", ""),
                    student_number=request.form.get("student_number", ""),
                    card_reader_id=request.form.get("card_reader_id"),
                )
                flash("Elev tillagd", "success")
                return redirect(url_for("students"))
            except ValidationError as e:
                flash(str(e), "warning")
            except StorageError as e:
                flash(str(e) or "Kunde inte lägga till elev", "danger")
            except Exception:
                logger.exception("Adding student failed")
                flash("Kunde inte lägga till elev", "danger")

        rows = []
        try:
            rows = container.student_service.list_for_teacher(_teacher())
        except (ValidationError, StorageError) as e:
            logger.error("Student list unavailable: %s", e)
            flash("Kunde inte hämta elever", "danger")
        return render_template("students.html", students=rows, active_page="students")

    @app.route("/students/<student_id>/delete", methods=["POST"], endpoint="delete_student")
    @login_required
    def delete_student(student_id: str):
        try:
            container.student_service.delete_student(teacher=_teacher(), student_id=student_id)
            flash("Elev borttagen", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Deleting student %s failed", student_id)
            flash("Kunde inte ta bort elev", "danger")
        return redirect(url_for("students"))

    @app.route("/students/<student_id>", endpoint="student_profile")
    @login_required
    def student_profile(student_id: str):
        try:
            profile = container.student_service.profile(teacher=_teacher(), student_id=student_id)
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
            return redirect(url_for("students"))
        except Exception:
            logger.exception("Loading profile of student %s failed", student_id)
            flash("Kunde inte hämta elevdata", "danger")
            return redirect(url_for("students"))
        return render_template("student_profile.html", profile=profile, active_page="students")
