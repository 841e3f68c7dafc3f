"""Complete every active session whose window has passed.

Optional: check-ins and reads already expire sessions lazily. Run from cron
to keep the session list tidy and fill absent rows promptly.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.rotc_system.rotc_system.common.logging_utils import setup_logging
from src.rotc_system.rotc_system.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        on_time_ratio=float(getattr(settings, "ON_TIME_RATIO", 0.5)),
        count_late_as_present=bool(getattr(settings, "COUNT_LATE_AS_PRESENT", True)),
    )
    expired = container.session_service.expire_overdue()
    print(f"OK: completed {expired} overdue session(s)")


if __name__ == "__main__":
    main()
