import os

from .config import Config, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")

AUTO_ADJUST_OVERLAPS = Config.AUTO_ADJUST_OVERLAPS
OPEN_SHIFT_MINUTES = Config.OPEN_SHIFT_MINUTES
SUGGEST_DAY_START = Config.SUGGEST_DAY_START
SUGGEST_DAY_END = Config.SUGGEST_DAY_END
SUGGEST_LIMIT = Config.SUGGEST_LIMIT
LOCK_TIMEOUT_SECONDS = Config.LOCK_TIMEOUT_SECONDS

LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = os.getenv("LOG_FILE", "logs/activity_tracking.log")
