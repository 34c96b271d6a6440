"""Engine, session factory and schema setup for barbersched.

`DATABASE_URL` selects the backend: a local SQLite file unless set, usually
PostgreSQL when deployed.
"""

import logging
import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barbersched.db")


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "False").lower() == "true"


def get_engine_kwargs(database_url: str) -> dict:
    """create_engine kwargs for a URL, computed without connecting."""
    kwargs: dict = {"echo": _env_flag("DEBUG"), "pool_pre_ping": True}

    if _is_sqlite_url(database_url):
        # Request handlers run on a thread pool and share the SQLite connection.
        kwargs["connect_args"] = {"check_same_thread": False}
        return kwargs

    kwargs.update(
        pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "5")),
        pool_timeout=int(os.getenv("DB_POOL_TIMEOUT_SEC", "30")),
    )
    return kwargs


def build_engine(database_url: str) -> Engine:
    return create_engine(database_url, **get_engine_kwargs(database_url))


engine = build_engine(DATABASE_URL)


@event.listens_for(Engine, "connect")
def set_sqlite_pragmas(dbapi_conn, connection_record):
    """Turn on foreign keys and WAL for SQLite connections."""
    if not _is_sqlite_url(DATABASE_URL):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Session:
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create or migrate the schedule tables.

    With `RUN_MIGRATIONS=true` on a non-SQLite database, Alembic upgrades to
    head. Otherwise the tables are created from the ORM metadata.
    """
    if _env_flag("RUN_MIGRATIONS") and not _is_sqlite_url(DATABASE_URL):
        from alembic import command
        from barbersched.database.migrate_runner import alembic_config

        logger.info("Applying Alembic migrations")
        command.upgrade(alembic_config(), "head")
        return

    # Importing the models registers every table on Base.metadata.
    from barbersched.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
