from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .app_logger import get_logger, setup_logging
from .config import get_settings_module
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .lessons.controller import register as register_lessons
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster
from .school.controller import register as register_school
from .sync.controller import register as register_sync


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", None))
    logger = get_logger(__name__)
    logger.info("Starting with settings=%s", settings_module)

    container = container or build_container(settings)
    app.extensions["school_attendance"] = container

    register_sync(app, container)
    register_roster(app, container)
    register_attendance(app, container)
    register_lessons(app, container)
    register_school(app, container)
    register_reports(app, container)

    if getattr(settings, "AUTO_LOAD", False):
        outcome = container.sync.load()
        if not outcome.is_ok:
            logger.warning("Initial load did not complete: %s", outcome.message)

    return app
