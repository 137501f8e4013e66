"""SQLite database engine and schema via SQLAlchemy Core."""

from haccpctl.infrastructure.database.engine import create_db_engine, init_database
from haccpctl.infrastructure.database.schema import metadata, step_snoozes

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "step_snoozes",
]
