from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, render_template, request

from ..common.web import api_login_required, login_required
from ..container import Container
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    feed = container.absence_feed

    @app.route("/notifications", endpoint="notifications")
    @login_required
    def notifications():
        absences = []
        try:
            absences = feed.recent()
        except StorageError as e:
            logger.error("Absence list unavailable: %s", e)
            flash("Kunde inte hämta frånvaronotiser", "danger")
        return render_template(
            "notifications.html",
            absences=absences,
            cursor=feed.board.cursor,
            active_page="notifications",
        )

    @app.route("/api/notifications/poll", endpoint="api_notifications_poll")
    @api_login_required
    def api_notifications_poll():
        cursor = request.args.get("cursor", type=int, default=0)
        notices = feed.board.since(cursor)
        return jsonify(
            {
                "success": True,
                "cursor": notices[-1].seq if notices else cursor,
                "notices": [
                    {"seq": n.seq, "level": n.level.value, "title": n.title, "description": n.description}
                    for n in notices
                ],
            }
        ), 200
