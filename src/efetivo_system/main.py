from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .absences.controller import register as register_absences
from .availability.controller import register as register_availability
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_UPCOMING_DAYS
from .database.bootstrap import apply_schema, list_tables
from .personnel.controller import register as register_personnel
from .settings import get_settings_module
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Tests pass a container wired with in-memory repositories; otherwise one
    is built from the MySQL settings.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            limits=getattr(settings, "CATEGORY_ABSENCE_LIMITS", None),
            upcoming_days=int(getattr(settings, "UPCOMING_DAYS", DEFAULT_UPCOMING_DAYS)),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

        admin_email = getattr(settings, "ADMIN_EMAIL", "")
        admin_password = getattr(settings, "ADMIN_PASSWORD", "")
        if admin_email and admin_password:
            container.user_service.ensure_admin(email=admin_email, password=admin_password)

    register_users(app, container)
    register_personnel(app, container)
    register_absences(app, container)
    register_availability(app, container)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config["DEBUG"])
