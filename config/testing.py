from .config import Config, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

AUTO_ADJUST_OVERLAPS = True
SUGGEST_DAY_START = "06:00"
SUGGEST_DAY_END = "22:00"
SUGGEST_LIMIT = 5
LOCK_TIMEOUT_SECONDS = 1.0

LOG_LEVEL = "WARNING"
LOG_FILE = None
