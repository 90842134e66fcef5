from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from efetivo_system.container import build_container
from efetivo_system.database.bootstrap import apply_schema, list_tables
from efetivo_system.main import configure_logging
from efetivo_system.settings import get_settings_module

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(settings.DB_CONFIG)
    container = build_container(db_config=db_config)

    apply_schema(container.conn)
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        container.user_service.ensure_admin(email=settings.ADMIN_EMAIL, password=settings.ADMIN_PASSWORD)

    tables = list_tables(container.conn)
    logger.info(
        "OK: Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
