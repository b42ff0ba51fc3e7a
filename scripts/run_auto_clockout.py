"""Run the daily auto clock-out from a system cron, without going through HTTP.

Closes open attendance logs from previous UTC days at 23:59:59 UTC of their
clock-in day. Safe to run after midnight UTC: today's sessions are left alone.

    5 0 * * *  cd /srv/hr-dashboard && APP_ENV=production python scripts/run_auto_clockout.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_dashboard.hr_dashboard.common.logging_setup import configure_logging
from src.hr_dashboard.hr_dashboard.container import build_container
from src.hr_dashboard.hr_dashboard.core.exceptions import MisconfiguredError, StoreQueryError
from src.hr_dashboard.hr_dashboard.main import load_settings


def main() -> int:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        admin_user=getattr(settings, "DB_ADMIN_USER", None),
        admin_password=getattr(settings, "DB_ADMIN_PASSWORD", None),
        cron_secret=getattr(settings, "CRON_SECRET", None),
        local_timezone=getattr(settings, "LOCAL_TIMEZONE", None),
        timeout_seconds=getattr(settings, "DB_TIMEOUT_SECONDS", None),
    )

    try:
        result = container.auto_clockout_job.reconcile()
    except MisconfiguredError:
        print(json.dumps({"error": "Server misconfigured"}))
        return 1
    except StoreQueryError as e:
        print(json.dumps({"error": str(e)}))
        return 1

    print(json.dumps(result.to_payload()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
