import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_dashboard_test"),
}

DB_ADMIN_USER = DB_CONFIG["user"]
DB_ADMIN_PASSWORD = "test-admin-password"

CRON_SECRET = "test-cron-secret"

DB_TIMEOUT_SECONDS = 5
LOCAL_TIMEZONE = "UTC"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
