from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from choir_attendance.database.bootstrap import apply_schema, ensure_admin_user, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )

    admin_email = getattr(settings, "ADMIN_EMAIL", "")
    admin_password = getattr(settings, "ADMIN_PASSWORD", "")
    if admin_email and admin_password:
        ensure_admin_user(
            db_config,
            name=getattr(settings, "ADMIN_NAME", "Choir Admin"),
            email=admin_email,
            password=admin_password,
        )
        logger.info("Administrator %s is ready", admin_email)
    else:
        logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD not set, no administrator created")


if __name__ == "__main__":
    main()
