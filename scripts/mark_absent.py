"""Run one absence sweep, e.g. from cron a few minutes after the last shift ends.

    python scripts/mark_absent.py               # sweep now
    python scripts/mark_absent.py --dry-run     # report only
    python scripts/mark_absent.py --date 2026-02-01
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_tracker.attendance_tracker.common.datetime_utils import parse_iso_date
from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.core.exceptions import DomainError, StoreFailure
from src.attendance_tracker.attendance_tracker.main import configure_logging, load_settings

logger = logging.getLogger("mark_absent")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mark absent employees whose shift has ended.")
    parser.add_argument("--date", help="attendance day to file absences under (YYYY-MM-DD)")
    parser.add_argument("--dry-run", action="store_true", help="report without writing")
    args = parser.parse_args(argv)

    _, settings = load_settings()
    configure_logging(settings)

    try:
        override_date = parse_iso_date(args.date) if args.date else None
        container = build_container(
            db_config=settings.DB_CONFIG,
            utc_offset_hours=settings.UTC_OFFSET_HOURS,
            timezone_name=settings.TIMEZONE_NAME,
            checkin_open_minutes=settings.CHECKIN_OPEN_MINUTES,
        )
        service = container.absence_service
        if args.dry_run:
            out = service.preview(override_date=override_date).to_dict()
        else:
            out = service.sweep(override_date=override_date).to_dict()
    except DomainError as e:
        parser.error(str(e))
    except StoreFailure:
        logger.exception("absence sweep failed")
        return 1

    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
