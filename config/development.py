import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_dashboard"),
}

# Administrative credential used only by the auto clock-out job.
DB_ADMIN_USER = os.getenv("DB_ADMIN_USER", DB_CONFIG["user"])
DB_ADMIN_PASSWORD = os.getenv("DB_ADMIN_PASSWORD") or None

# Bearer secret the scheduler sends to /api/cron/auto-clockout. Unset = open endpoint.
CRON_SECRET = os.getenv("CRON_SECRET") or None

DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "UTC")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
