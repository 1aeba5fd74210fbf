from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import AuthorizationError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .events.controller import register as register_events
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    def _error(status: int):
        def handler(e: DomainError):
            return jsonify({"success": False, "message": str(e)}), status

        return handler

    app.register_error_handler(ValidationError, _error(400))
    app.register_error_handler(AuthorizationError, _error(403))
    app.register_error_handler(NotFoundError, _error(404))

    @app.errorhandler(Exception)
    def unexpected(e: Exception):
        # Let Flask render its own HTTP errors (404 route, 405 method...).
        code = getattr(e, "code", None)
        if isinstance(code, int):
            return jsonify({"success": False, "message": getattr(e, "description", str(e))}), code
        logger.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory. Pass ``container`` to run on other repositories (tests)."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("Starting with settings=%s", settings_module)

    if container is None:
        logger.debug(
            "db=%s@%s:%s/%s",
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    _register_error_handlers(app)
    register_users(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_announcements(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
