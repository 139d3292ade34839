from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .kiosk.controller import register as register_kiosk
from .pins.controller import register as register_pins
from .timeclock.controller import register as register_timeclock
from .users.controller import register as register_users

logger = logging.getLogger("timeclock_system")

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["RECORDS_PAGE_LIMIT"] = int(getattr(settings, "RECORDS_PAGE_LIMIT", 50))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            ensure_demo_admin(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            pin_min_length=int(getattr(settings, "PIN_MIN_LENGTH", 4)),
            pin_max_length=int(getattr(settings, "PIN_MAX_LENGTH", 6)),
        )
        logger.info("settings=%s db=%s", settings_module, container.conn.description)

    register_users(app, container)
    register_timeclock(app, container)
    register_pins(app, container)
    register_kiosk(app, container)

    return app
