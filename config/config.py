"""Settings shared by every environment; environment modules override them."""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "timeclock_db"),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
RECORDS_PAGE_LIMIT = int(os.getenv("RECORDS_PAGE_LIMIT", "50"))
PIN_MIN_LENGTH = int(os.getenv("PIN_MIN_LENGTH", "4"))
PIN_MAX_LENGTH = int(os.getenv("PIN_MAX_LENGTH", "6"))
