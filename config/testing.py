import os

from .config import PIN_MAX_LENGTH, PIN_MIN_LENGTH, RECORDS_PAGE_LIMIT, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="test")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
