from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.validators import optional_text
from ..common.web import api_login_required, login_required, scan_key
from ..container import Container
from ..core.enums import AttendanceStatus, NoticeLevel, ScanOutcome
from ..core.exceptions import AuthorizationError, StorageError, ValidationError
from ..scanning.service import parse_events
from .model import ScanResult

logger = logging.getLogger(__name__)


def describe(result: ScanResult) -> tuple[NoticeLevel, str]:
    """User-facing notice for a recorder outcome."""

    name = result.student.full_name if result.student else ""
    if result.outcome == ScanOutcome.RECORDED:
        return NoticeLevel.SUCCESS, f"{name} registrerad"
    if result.outcome == ScanOutcome.ALREADY_MARKED:
        return NoticeLevel.INFO, f"{name} är redan registrerad idag"
    if result.outcome == ScanOutcome.UNKNOWN_CARD:
        return NoticeLevel.WARNING, "Okänt kort"
    return NoticeLevel.DANGER, "Kunde inte registrera närvaro"


def register(app: Flask, container: Container) -> None:
    def _teacher():
        return container.teacher_service.get(session["teacher_id"])

    def _stats_payload(teacher=None):
        stats = container.stats_service.dashboard(teacher or _teacher())
        return asdict(stats)

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        stats = None
        teacher = None
        try:
            teacher = _teacher()
            stats = container.stats_service.dashboard(teacher)
        except (ValidationError, StorageError) as e:
            logger.error("Dashboard stats unavailable: %s", e)
            flash("Kunde inte hämta statistik", "danger")
        return render_template(
            "dashboard.html",
            stats=stats,
            teacher=teacher,
            scanning=container.scan_service.is_enabled(scan_key()),
            active_page="dashboard",
        )

    @app.route("/attendance", endpoint="attendance")
    @login_required
    def attendance():
        students = []
        try:
            students = container.student_service.list_for_teacher(_teacher())
        except (ValidationError, StorageError) as e:
            logger.error("Student list unavailable: %s", e)
            flash("Kunde inte hämta elever", "danger")
        return render_template(
            "attendance.html",
            students=students,
            statuses=list(AttendanceStatus),
            scanning=container.scan_service.is_enabled(scan_key()),
            active_page="attendance",
        )

    @app.route("/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        try:
            student_id = request.form.get("student_id", "")
            try:
                status = AttendanceStatus(request.form.get("status", ""))
            except ValueError:
                raise ValidationError("Ogiltig status")

            container.student_service.get_for_teacher(_teacher(), student_id)
            result = container.recorder.record_manual(
                student_id,
                status,
                notes=optional_text(request.form.get("notes")),
            )
            level, message = describe(result)
            flash(message, level.value)
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Manual attendance mark failed")
            flash("Kunde inte registrera närvaro", "danger")
        return redirect(url_for("attendance"))

    @app.route("/api/scan/mode", methods=["POST"], endpoint="api_scan_mode")
    @api_login_required
    def api_scan_mode():
        data = request.get_json(silent=True) or {}
        enabled = container.scan_service.set_mode(scan_key(), enabled=bool(data.get("enabled")))
        return jsonify({"success": True, "enabled": enabled}), 200

    @app.route("/api/scan/keys", methods=["POST"], endpoint="api_scan_keys")
    @api_login_required
    def api_scan_keys():
        data = request.get_json(silent=True) or {}
        try:
            events = parse_events(data.get("events") or [])
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        try:
            teacher = _teacher()
        except (ValidationError, StorageError):
            logger.exception("Teacher profile unavailable during scan")
            return jsonify({"success": False, "message": "Kunde inte registrera närvaro"}), 502

        results = container.scan_service.process(scan_key(), events, school_id=teacher.school_id)

        out = []
        for result in results:
            level, message = describe(result)
            out.append(
                {
                    "outcome": result.outcome.value,
                    "level": level.value,
                    "message": message,
                    "student_id": result.student.student_id if result.student else None,
                }
            )

        payload = {"success": True, "results": out}
        if any(r.ok for r in results):
            try:
                payload["stats"] = _stats_payload(teacher)
            except (ValidationError, StorageError) as e:
                logger.error("Stats refresh after scan failed: %s", e)
        return jsonify(payload), 200

    @app.route("/api/stats", endpoint="api_stats")
    @api_login_required
    def api_stats():
        try:
            return jsonify({"success": True, "stats": _stats_payload()}), 200
        except (ValidationError, StorageError):
            logger.exception("Stats request failed")
            return jsonify({"success": False, "message": "Kunde inte hämta statistik"}), 502
