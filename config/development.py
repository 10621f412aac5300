import os

from .config import Config, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="root")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

AUTO_ADJUST_OVERLAPS = Config.AUTO_ADJUST_OVERLAPS
OPEN_SHIFT_MINUTES = Config.OPEN_SHIFT_MINUTES
SUGGEST_DAY_START = Config.SUGGEST_DAY_START
SUGGEST_DAY_END = Config.SUGGEST_DAY_END
SUGGEST_LIMIT = Config.SUGGEST_LIMIT
LOCK_TIMEOUT_SECONDS = Config.LOCK_TIMEOUT_SECONDS

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOG_FILE = Config.LOG_FILE
