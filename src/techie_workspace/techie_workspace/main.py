from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_RECENT_LIMIT
from .database.bootstrap import apply_schema, ensure_superadmin, list_tables
from .plans.controller import register as register_plans
from .qr.controller import register as register_qr
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .usage.controller import register as register_usage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    Pass ``container`` to run on pre-wired services (tests); otherwise MySQL
    repositories are built from the settings module's ``DB_CONFIG``.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["RECENT_ACTIVITY_LIMIT"] = int(getattr(settings, "RECENT_ACTIVITY_LIMIT", DEFAULT_RECENT_LIMIT))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

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

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_superadmin(db_config, password=getattr(settings, "SUPERADMIN_PASSWORD"))

        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_users(app, container)
    register_sessions(app, container)
    register_usage(app, container)
    register_plans(app, container)
    register_reports(app, container)
    register_qr(app, container)

    return app
