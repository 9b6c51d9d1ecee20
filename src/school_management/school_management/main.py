from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import Container, build_container

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    mongo_config = getattr(settings, "MONGO_CONFIG")

    if not app.config["TESTING"]:
        configure_logging()

    if container is None:
        container = build_container(mongo_config=mongo_config)
        if getattr(settings, "AUTO_INIT_DB", False):
            container.attendance_repo.ensure_indexes()
            logger.info("attendance indexes ready")

    if app.config["DEBUG"]:
        logger.info("settings=%s db=%s", settings_module, mongo_config.get("database") or "<from uri>")

    register_attendance(app, container)

    return app
