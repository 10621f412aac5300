import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "activity_tracking_db"),
    }


class Config:
    """Scheduling defaults shared by every environment."""

    # Adjust colliding activities instead of rejecting them with 409.
    AUTO_ADJUST_OVERLAPS = env_flag("AUTO_ADJUST_OVERLAPS", "1")
    OPEN_SHIFT_MINUTES = int(os.getenv("OPEN_SHIFT_MINUTES", "60"))

    SUGGEST_DAY_START = os.getenv("SUGGEST_DAY_START", "06:00")
    SUGGEST_DAY_END = os.getenv("SUGGEST_DAY_END", "22:00")
    SUGGEST_LIMIT = int(os.getenv("SUGGEST_LIMIT", "5"))

    LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "5"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE") or None
