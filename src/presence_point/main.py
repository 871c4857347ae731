from __future__ import annotations

import atexit
import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .classes.controller import register as register_classes
from .config import get_settings_module
from .container import Container, build_container
from .common.datetime_utils import use_timezone
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_TIMEZONE, SCAN_GAP_MS
from .lessons.controller import register as register_lessons
from .logging_setup import configure_logging
from .notifications.controller import register as register_notifications
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    use_timezone(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    if container is None:
        supabase_config = getattr(settings, "SUPABASE_CONFIG")
        logger.info("settings=%s supabase=%s", settings_module, supabase_config.get("url"))
        container = build_container(
            supabase_config=supabase_config,
            scan_gap_ms=int(getattr(settings, "SCAN_GAP_MS", SCAN_GAP_MS)),
            placeholder_lesson_id=getattr(settings, "SCAN_PLACEHOLDER_LESSON_ID", None) or None,
            realtime=bool(getattr(settings, "REALTIME_ENABLED", False)),
        )

    register_auth(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_classes(app, container)
    register_lessons(app, container)
    register_notifications(app, container)
    register_teachers(app, container)

    container.absence_feed.start()
    atexit.register(container.absence_feed.stop)

    app.extensions["presence_point"] = container
    return app


def main() -> None:
    app = create_app()
    app.run(debug=app.config["DEBUG"], use_reloader=False)


if __name__ == "__main__":
    main()
