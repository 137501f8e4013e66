"""Database engine setup for SQLite with WAL mode.

The DB is stored at {root}/.haccpctl/haccpctl.db. SQLAlchemy Core (not
ORM) is used because haccpctl is a short-lived CLI process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from haccpctl.infrastructure.database.schema import metadata

DB_DIRNAME = ".haccpctl"
DB_FILENAME = "haccpctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and a busy timeout."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def init_database(root: Path) -> Engine:
    """Initialize the database at ``{root}/.haccpctl/haccpctl.db``.

    Idempotent — safe to call on an existing workspace.
    """
    db_dir = root / DB_DIRNAME
    db_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
