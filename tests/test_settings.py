from __future__ import annotations

import importlib
import logging

from config import get_settings_module

from src.activity_tracking.activity_tracking.core.logging_config import LOGGER_NAME, configure_logging, reset_logging


def test_settings_module_by_app_env():
    assert get_settings_module({"APP_ENV": "production"}) == "config.production"
    assert get_settings_module({"APP_ENV": "TEST"}) == "config.testing"
    assert get_settings_module({"APP_ENV": "staging"}) == "config.development"
    assert get_settings_module({}) == "config.development"
    assert get_settings_module({"APP_ENV": "testing", "SETTINGS_MODULE": "site.settings"}) == "site.settings"


def test_testing_settings_expose_scheduling_options():
    settings = importlib.import_module("config.testing")

    assert settings.TESTING is True
    assert settings.AUTO_INIT_DB is False
    assert settings.SUGGEST_DAY_START == "06:00"
    assert settings.DB_CONFIG["database"] == "activity_tracking_db"


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_configure_logging_is_idempotent_and_routes_child_loggers():
    collected = _Collect()
    try:
        reset_logging(reconfigure=False)
        logger = configure_logging("INFO", extra_handlers=[collected])
        again = configure_logging("DEBUG")

        assert logger is again
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert logger.handlers.count(collected) == 1

        logging.getLogger("activity_tracking.activities").info("Activity %s created", 7)
        assert collected.records[-1].getMessage() == "Activity 7 created"
    finally:
        reset_logging(reconfigure=False)
