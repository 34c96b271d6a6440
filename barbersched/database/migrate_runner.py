"""Apply Alembic migrations before the API starts.

Run as `python -m barbersched.database.migrate_runner`. When the upgrade fails
because the tables already exist (a database created with `create_all`), the
revision is stamped as head, but only once every schedule table is confirmed
present.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from barbersched.database.database import DATABASE_URL, _is_sqlite_url, build_engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = (
    "barbershops",
    "barbers",
    "appointments",
    "holidays",
    "time_off_requests",
    "capacity_configs",
)

ALREADY_EXISTS_MARKERS = ("duplicate", "already exists", "duplicate_table")


def alembic_config() -> Config:
    """Alembic config pointed at the runtime DATABASE_URL."""
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    return cfg


def missing_tables(conn) -> List[str]:
    """Schedule tables absent from the connected database, in creation order."""
    existing = set(inspect(conn).get_table_names())
    return [name for name in REQUIRED_TABLES if name not in existing]


def _stamp_existing_schema(error: Exception) -> None:
    with build_engine(DATABASE_URL).connect() as conn:
        missing = missing_tables(conn)
    if missing:
        raise RuntimeError(
            f"Migration failed and tables are missing ({', '.join(missing)}); not stamping head"
        ) from error
    logger.warning(f"Schema already present, stamping head after: {type(error).__name__}: {str(error)}")
    command.stamp(alembic_config(), "head")


def main() -> int:
    try:
        command.upgrade(alembic_config(), "head")
    except Exception as e:
        if _is_sqlite_url(DATABASE_URL):
            raise
        if not any(marker in str(e).lower() for marker in ALREADY_EXISTS_MARKERS):
            raise
        _stamp_existing_schema(e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
