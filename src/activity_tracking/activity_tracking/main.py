from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .activities.controller import register as register_activities
from .container import Container, build_container
from .core.logging_config import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

SETTING_KEYS = (
    "AUTO_ADJUST_OVERLAPS",
    "OPEN_SHIFT_MINUTES",
    "SUGGEST_DAY_START",
    "SUGGEST_DAY_END",
    "SUGGEST_LIMIT",
    "LOCK_TIMEOUT_SECONDS",
)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    for key in SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)

    logger = configure_logging(
        getattr(settings, "LOG_LEVEL", logging.INFO),
        log_file=getattr(settings, "LOG_FILE", None),
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_path = Path(__file__).resolve().parents[3] / "database" / "seed.sql"
            apply_seed_sql(db_config, seed_path=seed_path)
            logger.info("demo catalog ready")
        options = {key: app.config[key] for key in SETTING_KEYS if key in app.config}
        container = build_container(db_config=db_config, options=options)

    app.extensions["activity_tracking"] = container
    register_activities(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
