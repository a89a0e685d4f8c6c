"""Create the database (if needed) and apply database/schema.sql.

    APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_tracker.attendance_tracker.core.exceptions import StoreFailure  # noqa: E402
from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_schema, list_tables  # noqa: E402
from src.attendance_tracker.attendance_tracker.main import SCHEMA_PATH, configure_logging, load_settings  # noqa: E402

import mysql.connector  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--check", action="store_true", help="only list existing tables")
    args = parser.parse_args(argv)

    settings_module, settings = load_settings()
    configure_logging(settings)
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    try:
        if not args.check:
            apply_schema(db_config, schema_path=SCHEMA_PATH)
        tables = list_tables(db_config)
    except (mysql.connector.Error, StoreFailure) as e:
        print(f"FAILED ({settings_module}): {target}: {e}", file=sys.stderr)
        return 1

    print(f"OK: {target} tables={', '.join(sorted(tables)) or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
