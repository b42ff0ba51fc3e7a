import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "hr_dashboard"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_dashboard"),
}

DB_ADMIN_USER = os.getenv("DB_ADMIN_USER", DB_CONFIG["user"])
DB_ADMIN_PASSWORD = os.getenv("DB_ADMIN_PASSWORD") or None

CRON_SECRET = os.getenv("CRON_SECRET") or None

DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "UTC")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
